"""Payment ledger for a single fiscal document.

Tracks partial and multi-method payments against the document's amount to
pay. Overpayment is refused when a payment is added, so the amount paid can
never exceed the total.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from invoice_engine.config import get_settings
from invoice_engine.domain.payments import (
    Payment,
    PaymentRejection,
    PaymentResult,
    PaymentSummary,
    RejectionReason,
)
from invoice_engine.domain.value_objects import Currency, Money, round_money
from invoice_engine.logging_config import get_logger
from invoice_engine.parsers.user_input import parse_decimal
from invoice_engine.services.interfaces import PaymentMethodCatalog
from invoice_engine.services.payment_methods import default_catalog

if TYPE_CHECKING:
    from invoice_engine.domain.documents import Document

logger = get_logger(__name__)


class PaymentLedger:
    """Payments recorded against a fixed total.

    Credit payments must fall due within ``credit_window_days`` of the day
    they are added; other payments are dated on ``emit_date``.
    """

    def __init__(
        self,
        total_to_pay: Money,
        emit_date: date,
        catalog: PaymentMethodCatalog | None = None,
        credit_window_days: int | None = None,
        document_id: UUID | None = None,
    ) -> None:
        if credit_window_days is None:
            credit_window_days = get_settings().credit_window_days
        self._total_to_pay = total_to_pay
        self._emit_date = emit_date
        self._catalog = catalog or default_catalog()
        self._credit_window_days = credit_window_days
        self._payments: list[Payment] = []
        self._document_id = document_id

    @classmethod
    def for_document(
        cls,
        document: Document,
        catalog: PaymentMethodCatalog | None = None,
        credit_window_days: int | None = None,
    ) -> PaymentLedger:
        """Open a ledger against the document's current amount to pay."""
        return cls(
            total_to_pay=document.totals.total_to_pay,
            emit_date=document.emit_date,
            catalog=catalog,
            credit_window_days=credit_window_days,
            document_id=document.id,
        )

    @property
    def document_id(self) -> UUID | None:
        return self._document_id

    @property
    def total_to_pay(self) -> Money:
        return self._total_to_pay

    @property
    def currency(self) -> Currency:
        return self._total_to_pay.currency  # type: ignore[return-value]

    @property
    def payments(self) -> tuple[Payment, ...]:
        return tuple(self._payments)

    @property
    def catalog(self) -> PaymentMethodCatalog:
        return self._catalog

    def summary(self) -> PaymentSummary:
        total_paid = sum(
            (payment.amount.amount for payment in self._payments), Decimal("0")
        )
        return PaymentSummary(
            total_amount=self._total_to_pay,
            total_paid=Money(total_paid, self.currency),
        )

    def remaining(self) -> Money:
        return self.summary().remaining

    @property
    def is_complete(self) -> bool:
        return self.summary().is_complete

    def suggested_amount(self) -> Money:
        """Amount to pre-fill for the next payment: what is still due."""
        remaining = self.remaining()
        if remaining.is_negative:
            return Money.zero(self.currency)
        return remaining

    def credit_window(self, today: date | None = None) -> tuple[date, date]:
        today = today or date.today()
        return today, today + timedelta(days=self._credit_window_days)

    def add_payment(
        self,
        method_id: int,
        amount: Money | Decimal | float | int | str,
        *,
        note: str = "",
        due_date: date | None = None,
        today: date | None = None,
    ) -> PaymentResult:
        """Record a payment, or return why it was refused.

        Raises:
            PaymentMethodNotFoundError: If ``method_id`` is not in the catalog
            ValueError: If ``amount`` is Money in another currency than the
                ledger's
        """
        method = self._catalog.require(method_id)
        if isinstance(amount, Money):
            if amount.currency != self.currency:
                raise ValueError(
                    f"Cannot pay {amount.currency.value} into a "
                    f"{self.currency.value} ledger"
                )
            value = amount.amount
        elif isinstance(amount, str):
            value = parse_decimal(amount)
        else:
            value = Decimal(str(amount))
        remaining = self.remaining()

        if not value.is_finite():
            return self._reject(
                RejectionReason.INVALID_AMOUNT,
                "Payment amount must be a finite number",
                Money.zero(self.currency),
                remaining,
            )
        money = Money(round_money(value), self.currency)

        if not money.is_positive:
            return self._reject(
                RejectionReason.INVALID_AMOUNT,
                "Payment amount must be greater than zero",
                money,
                remaining,
            )
        if money > remaining:
            return self._reject(
                RejectionReason.EXCEEDS_REMAINING,
                f"Payment amount {money.amount} exceeds remaining {remaining.amount}",
                money,
                remaining,
            )

        if method.is_credit:
            earliest, latest = self.credit_window(today)
            if due_date is None or not earliest <= due_date <= latest:
                return self._reject(
                    RejectionReason.INVALID_DUE_DATE,
                    f"Credit payments must fall due between {earliest} and {latest}",
                    money,
                    remaining,
                )
            payment = Payment(
                method_id=method.id,
                amount=money,
                payment_date=due_date,
                due_date=due_date,
            )
        else:
            payment = Payment(
                method_id=method.id,
                amount=money,
                payment_date=self._emit_date,
                note=note.strip(),
            )

        self._payments.append(payment)
        self._log(
            "info",
            "payment_added",
            payment_id=str(payment.id),
            method_id=method.id,
            amount=str(money.amount),
            remaining=str(self.remaining().amount),
        )
        return PaymentResult.ok(payment)

    def remove_payment(self, payment_id: UUID) -> bool:
        """Remove a payment. Returns False if it was not recorded."""
        for index, payment in enumerate(self._payments):
            if payment.id == payment_id:
                del self._payments[index]
                self._log(
                    "info",
                    "payment_removed",
                    payment_id=str(payment_id),
                    remaining=str(self.remaining().amount),
                )
                return True
        return False

    def clear(self) -> None:
        self._payments.clear()
        self._log("debug", "payments_cleared")

    def _reject(
        self,
        reason: RejectionReason,
        message: str,
        amount: Money,
        remaining: Money,
    ) -> PaymentResult:
        self._log(
            "info",
            "payment_rejected",
            reason=reason.value,
            amount=str(amount.amount),
            remaining=str(remaining.amount),
        )
        return PaymentResult.rejected(
            PaymentRejection(
                reason=reason, message=message, amount=amount, remaining=remaining
            )
        )

    def _log(self, level: str, event: str, **fields: object) -> None:
        if self._document_id is not None:
            fields["document_id"] = str(self._document_id)
        getattr(logger, level)(event, **fields)
