from uuid import uuid4

import pytest

from invoice_engine.exceptions import (
    DocumentError,
    DocumentIncompleteError,
    InvalidDocumentError,
    InvoiceEngineError,
    LineItemNotFoundError,
    PaymentError,
    PaymentMethodNotFoundError,
    TotalsMismatchError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        ("error", "base"),
        [
            (LineItemNotFoundError(uuid4()), DocumentError),
            (DocumentIncompleteError(uuid4(), "6.20"), DocumentError),
            (TotalsMismatchError(uuid4(), "212.40", "106.20"), DocumentError),
            (InvalidDocumentError("bad"), DocumentError),
            (PaymentMethodNotFoundError(42), PaymentError),
        ],
    )
    def test_all_errors_share_base(self, error, base):
        assert isinstance(error, base)
        assert isinstance(error, InvoiceEngineError)

    def test_base_error_defaults(self):
        error = InvoiceEngineError("boom")

        assert error.error_code == "INVOICE_ENGINE_ERROR"
        assert error.to_dict() == {
            "error": "INVOICE_ENGINE_ERROR",
            "message": "boom",
            "context": {},
        }

    def test_custom_error_code(self):
        error = InvoiceEngineError("boom", error_code="CUSTOM", context={"a": 1})

        assert error.error_code == "CUSTOM"
        assert error.context == {"a": 1}

    def test_incomplete_message(self):
        document_id = uuid4()

        error = DocumentIncompleteError(document_id, "6.20")

        assert str(error) == f"Document {document_id} cannot be finalized: 6.20 still due"
        assert error.context == {"document_id": str(document_id), "remaining": "6.20"}

    def test_invalid_document_message(self):
        assert str(InvalidDocumentError("'lines' must be a list")) == (
            "Invalid document: 'lines' must be a list"
        )
