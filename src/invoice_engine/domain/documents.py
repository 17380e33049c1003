"""Fiscal document aggregate.

A :class:`Document` is an immutable snapshot of a document being edited.
Every edit returns a new snapshot; totals are recomputed from scratch on
access.
"""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from invoice_engine.domain.aggregation import aggregate
from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.line_items import LineItem
from invoice_engine.domain.payments import Payment, PaymentSummary
from invoice_engine.domain.pricing import reprice
from invoice_engine.domain.totals import DocumentTotals
from invoice_engine.domain.value_objects import Currency, DocumentType
from invoice_engine.exceptions import LineItemNotFoundError


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Document:
    document_type: DocumentType = DocumentType.QUOTATION
    emit_date: date = field(default_factory=date.today)
    currency: Currency | str = Currency.PEN
    tax_rate: Decimal = Decimal("0.18")
    lines: tuple[LineItem, ...] = ()
    discount_policy: GlobalDiscountPolicy = field(
        default_factory=GlobalDiscountPolicy.disabled
    )
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        if not isinstance(self.currency, Currency):
            object.__setattr__(self, "currency", Currency(self.currency))
        if not isinstance(self.tax_rate, Decimal):
            object.__setattr__(self, "tax_rate", Decimal(str(self.tax_rate)))
        if not isinstance(self.lines, tuple):
            object.__setattr__(self, "lines", tuple(self.lines))
        for line in self.lines:
            self._check_currency(line)

    @property
    def totals(self) -> DocumentTotals:
        return aggregate(self.lines, self.discount_policy, self.tax_rate, self.currency)

    def get_line(self, line_id: UUID) -> LineItem | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def _check_currency(self, line: LineItem) -> None:
        if line.currency != self.currency:
            raise ValueError(
                f"Cannot add a {line.currency.value} line to a "
                f"{self.currency.value} document"
            )

    def with_line(self, line: LineItem) -> "Document":
        """Append ``line``, replacing any existing line with the same id.

        Raises:
            ValueError: If ``line`` is priced in another currency
        """
        self._check_currency(line)
        if self.get_line(line.id) is not None:
            lines = tuple(
                line if existing.id == line.id else existing for existing in self.lines
            )
        else:
            lines = self.lines + (line,)
        return replace(self, lines=lines)

    def without_line(self, line_id: UUID) -> "Document":
        return replace(
            self, lines=tuple(line for line in self.lines if line.id != line_id)
        )

    def with_line_quantity(self, line_id: UUID, quantity: Decimal) -> "Document":
        line = self.get_line(line_id)
        if line is None:
            raise LineItemNotFoundError(line_id)
        return self.with_line(reprice(line, quantity=quantity))

    def with_discount_policy(self, policy: GlobalDiscountPolicy) -> "Document":
        return replace(self, discount_policy=policy)

    def with_tax_rate(self, tax_rate: Decimal) -> "Document":
        """Change the IGV rate and reprice every line at the new rate."""
        tax_rate = Decimal(str(tax_rate))
        return replace(
            self,
            tax_rate=tax_rate,
            lines=tuple(reprice(line, tax_rate=tax_rate) for line in self.lines),
        )


@dataclass(frozen=True)
class FinalizedDocument:
    """A complete document with its settled payments, ready to persist."""

    document_id: UUID
    document_type: DocumentType
    emit_date: date
    currency: Currency
    lines: tuple[LineItem, ...]
    discount_policy: GlobalDiscountPolicy
    totals: DocumentTotals
    payments: tuple[Payment, ...]
    payment_summary: PaymentSummary
    finalized_at: datetime = field(default_factory=_utc_now)

    def to_dict(self, method_labels: dict[int, str] | None = None) -> dict[str, Any]:
        """Serialize with every monetary value as a decimal string."""
        payments = []
        for payment in self.payments:
            data = payment.to_dict()
            if method_labels is not None:
                data["method_name"] = method_labels.get(payment.method_id, "")
            payments.append(data)

        return {
            "id": str(self.document_id),
            "document_type": self.document_type.value,
            "emit_date": self.emit_date.isoformat(),
            "currency": self.currency.value,
            "discount_policy": {
                "enabled": self.discount_policy.enabled,
                "mode": self.discount_policy.mode.value,
                "input_value": str(self.discount_policy.input_value),
            },
            "lines": [line.to_dict() for line in self.lines],
            "totals": self.totals.to_dict(),
            "payments": payments,
            "payment_summary": self.payment_summary.to_dict(),
            "finalized_at": self.finalized_at.isoformat(),
        }


__all__ = ["Document", "FinalizedDocument", "LineItemNotFoundError"]
