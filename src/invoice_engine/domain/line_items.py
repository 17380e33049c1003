from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID, uuid4

from invoice_engine.domain.value_objects import AffectationCategory, Currency, Money


def _to_decimal(value: Decimal | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


@dataclass(frozen=True)
class LineInput:
    """Raw values of a sale line before pricing.

    ``unit_price_with_tax`` is derived from ``unit_value_without_tax`` when
    left unset.
    """

    quantity: Decimal
    unit_value_without_tax: Decimal
    affectation: AffectationCategory = AffectationCategory.TAXED
    item_discount: Decimal = Decimal("0")
    tax_rate: Decimal = Decimal("0.18")
    unit_price_with_tax: Decimal | None = None
    currency: Currency | str = Currency.PEN
    description: str = ""
    product_code: str = ""
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        for name in ("quantity", "unit_value_without_tax", "item_discount", "tax_rate"):
            object.__setattr__(self, name, _to_decimal(getattr(self, name)))
        if self.unit_price_with_tax is not None:
            object.__setattr__(
                self, "unit_price_with_tax", _to_decimal(self.unit_price_with_tax)
            )
        if not isinstance(self.affectation, AffectationCategory):
            object.__setattr__(
                self, "affectation", AffectationCategory(self.affectation)
            )


@dataclass(frozen=True)
class LineItem:
    """A priced sale line. Built by :func:`invoice_engine.domain.pricing.price`."""

    id: UUID
    quantity: Decimal
    unit_value_without_tax: Decimal
    unit_price_with_tax: Decimal
    affectation: AffectationCategory
    tax_rate: Decimal
    item_discount: Money
    gross_value: Money
    effective_discount: Money
    net_value: Money
    tax: Money
    line_total: Money
    discount_percentage_actual: Decimal
    description: str = ""
    product_code: str = ""

    @property
    def currency(self) -> Currency:
        return self.net_value.currency  # type: ignore[return-value]

    @property
    def is_billable(self) -> bool:
        return self.affectation.is_billable

    def to_input(self) -> LineInput:
        return LineInput(
            id=self.id,
            quantity=self.quantity,
            unit_value_without_tax=self.unit_value_without_tax,
            unit_price_with_tax=self.unit_price_with_tax,
            affectation=self.affectation,
            item_discount=self.item_discount.amount,
            tax_rate=self.tax_rate,
            currency=self.currency,
            description=self.description,
            product_code=self.product_code,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": str(self.id),
            "description": self.description,
            "product_code": self.product_code,
            "affectation": self.affectation.value,
            "affectation_code": self.affectation.code,
            "quantity": str(self.quantity),
            "unit_value_without_tax": str(self.unit_value_without_tax),
            "unit_price_with_tax": str(self.unit_price_with_tax),
            "tax_rate": str(self.tax_rate),
            "gross_value": str(self.gross_value.amount),
            "effective_discount": str(self.effective_discount.amount),
            "discount_percentage": str(self.discount_percentage_actual),
            "net_value": str(self.net_value.amount),
            "tax": str(self.tax.amount),
            "line_total": str(self.line_total.amount),
        }


__all__ = ["LineInput", "LineItem"]
