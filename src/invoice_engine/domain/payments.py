from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID, uuid4

from invoice_engine.domain.value_objects import Money


@dataclass(frozen=True)
class PaymentMethod:
    id: int
    name: str
    is_credit: bool = False


@dataclass(frozen=True)
class Payment:
    """A payment recorded against a document.

    Credit payments carry a ``due_date`` (which is also their
    ``payment_date``) and no note; other payments carry an optional note and
    are dated on the document's emission date.
    """

    method_id: int
    amount: Money
    payment_date: date
    id: UUID = field(default_factory=uuid4)
    note: str = ""
    due_date: date | None = None

    @property
    def is_credit(self) -> bool:
        return self.due_date is not None

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "method_id": self.method_id,
            "amount": str(self.amount.amount),
            "payment_date": self.payment_date.isoformat(),
            "note": self.note,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }


@dataclass(frozen=True)
class PaymentSummary:
    total_amount: Money
    total_paid: Money

    @property
    def remaining(self) -> Money:
        return self.total_amount - self.total_paid

    @property
    def is_complete(self) -> bool:
        return not self.remaining.is_positive

    def to_dict(self) -> dict[str, object]:
        return {
            "total_amount": str(self.total_amount.amount),
            "total_paid": str(self.total_paid.amount),
            "remaining": str(self.remaining.amount),
            "is_complete": self.is_complete,
        }


class RejectionReason(str, Enum):
    INVALID_AMOUNT = "invalid_amount"
    EXCEEDS_REMAINING = "exceeds_remaining"
    INVALID_DUE_DATE = "invalid_due_date"


@dataclass(frozen=True)
class PaymentRejection:
    reason: RejectionReason
    message: str
    amount: Money
    remaining: Money


@dataclass(frozen=True)
class PaymentResult:
    """Outcome of adding a payment: exactly one of the two fields is set."""

    payment: Payment | None = None
    rejection: PaymentRejection | None = None

    @property
    def accepted(self) -> bool:
        return self.payment is not None

    @classmethod
    def ok(cls, payment: Payment) -> "PaymentResult":
        return cls(payment=payment)

    @classmethod
    def rejected(cls, rejection: PaymentRejection) -> "PaymentResult":
        return cls(rejection=rejection)


__all__ = [
    "Payment",
    "PaymentMethod",
    "PaymentRejection",
    "PaymentResult",
    "PaymentSummary",
    "RejectionReason",
]
