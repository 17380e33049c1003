"""Exception hierarchy for Invoice Engine.

All engine exceptions inherit from InvoiceEngineError so callers can catch
every engine failure with a single base class while keeping specific types
for individual conditions.

Payment amounts that a user may legitimately mistype (zero, negative, or
larger than the balance due) are not exceptions: the payment ledger returns
them as a ``PaymentRejection``.
"""

from typing import Any
from uuid import UUID


class InvoiceEngineError(Exception):
    """Base exception for all Invoice Engine errors.

    Includes an error_code for callers that surface errors to users and
    extra context for logging.
    """

    error_code: str = "INVOICE_ENGINE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Document Errors
# =============================================================================


class DocumentError(InvoiceEngineError):
    """Base exception for document-related errors."""

    error_code = "DOCUMENT_ERROR"


class LineItemNotFoundError(DocumentError):
    """Raised when a line id is not part of the document."""

    error_code = "LINE_ITEM_NOT_FOUND"

    def __init__(self, line_id: UUID | str) -> None:
        super().__init__(
            f"Line item not found: {line_id}",
            context={"line_id": str(line_id)},
        )
        self.line_id = line_id


class DocumentIncompleteError(DocumentError):
    """Raised when finalizing a document whose payments don't cover its total."""

    error_code = "DOCUMENT_INCOMPLETE"

    def __init__(self, document_id: UUID | str, remaining: str) -> None:
        super().__init__(
            f"Document {document_id} cannot be finalized: {remaining} still due",
            context={"document_id": str(document_id), "remaining": remaining},
        )


class TotalsMismatchError(DocumentError):
    """Raised when a payment ledger was opened against a different total."""

    error_code = "TOTALS_MISMATCH"

    def __init__(
        self, document_id: UUID | str, document_total: str, ledger_total: str
    ) -> None:
        super().__init__(
            f"Payment ledger total {ledger_total} does not match "
            f"document {document_id} total {document_total}",
            context={
                "document_id": str(document_id),
                "document_total": document_total,
                "ledger_total": ledger_total,
            },
        )


class InvalidDocumentError(DocumentError):
    """Raised when a document description cannot be read."""

    error_code = "INVALID_DOCUMENT"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Invalid document: {reason}", context={"reason": reason})


# =============================================================================
# Payment Errors
# =============================================================================


class PaymentError(InvoiceEngineError):
    """Base exception for payment-related errors."""

    error_code = "PAYMENT_ERROR"


class PaymentMethodNotFoundError(PaymentError):
    """Raised when a payment method id is not in the catalog."""

    error_code = "PAYMENT_METHOD_NOT_FOUND"

    def __init__(self, method_id: int) -> None:
        super().__init__(
            f"Payment method not found: {method_id}",
            context={"method_id": method_id},
        )
        self.method_id = method_id


__all__ = [
    "DocumentError",
    "DocumentIncompleteError",
    "InvalidDocumentError",
    "InvoiceEngineError",
    "LineItemNotFoundError",
    "PaymentError",
    "PaymentMethodNotFoundError",
    "TotalsMismatchError",
]
