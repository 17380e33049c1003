from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

CENTS = Decimal("0.01")
UNIT_PLACES = Decimal("0.0001")


class Currency(str, Enum):
    PEN = "PEN"
    USD = "USD"
    EUR = "EUR"


class AffectationCategory(str, Enum):
    """SUNAT IGV affectation of a sale line."""

    TAXED = "taxed"
    EXONERATED = "exonerated"
    UNAFFECTED = "unaffected"
    FREE = "free"

    @property
    def code(self) -> int:
        return _AFFECTATION_CODES[self]

    @property
    def short_label(self) -> str:
        return _AFFECTATION_LABELS[self]

    @property
    def is_taxed(self) -> bool:
        return self is AffectationCategory.TAXED

    @property
    def is_billable(self) -> bool:
        return self is not AffectationCategory.FREE

    @classmethod
    def from_code(cls, code: int) -> "AffectationCategory":
        for category, category_code in _AFFECTATION_CODES.items():
            if category_code == code:
                return category
        raise ValueError(f"Invalid affectation code: {code}")


_AFFECTATION_CODES = {
    AffectationCategory.TAXED: 1,
    AffectationCategory.EXONERATED: 2,
    AffectationCategory.UNAFFECTED: 3,
    AffectationCategory.FREE: 4,
}

_AFFECTATION_LABELS = {
    AffectationCategory.TAXED: "GRAV",
    AffectationCategory.EXONERATED: "EXON",
    AffectationCategory.UNAFFECTED: "INAF",
    AffectationCategory.FREE: "GRAT",
}


class DiscountMode(str, Enum):
    BY_AMOUNT = "by_amount"
    BY_PERCENTAGE = "by_percentage"


class DocumentType(str, Enum):
    QUOTATION = "quotation"
    SALE_NOTE = "sale_note"
    RECEIPT = "receipt"
    INVOICE = "invoice"


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def round_unit(value: Decimal) -> Decimal:
    return value.quantize(UNIT_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class Money:
    amount: Decimal
    currency: Currency | str = "PEN"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if isinstance(self.currency, Currency):
            pass
        elif isinstance(self.currency, str):
            try:
                currency_enum = Currency[self.currency]
                object.__setattr__(self, "currency", currency_enum)
            except KeyError:
                raise ValueError(f"Invalid currency: {self.currency}")
        else:
            raise ValueError(f"Invalid currency: {self.currency}")

    def __add__(self, other: "Money") -> "Money":
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        if self.currency != other.currency:
            raise ValueError(f"Cannot subtract {self.currency} and {other.currency}")
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor: Decimal | int) -> "Money":
        return Money(self.amount * Decimal(str(factor)), self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.amount == other.amount and self.currency == other.currency

    def __lt__(self, other: "Money") -> bool:
        if self.currency != other.currency:
            raise ValueError(f"Cannot compare {self.currency} and {other.currency}")
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        return self == other or self < other

    def __gt__(self, other: "Money") -> bool:
        return not self <= other

    def __ge__(self, other: "Money") -> bool:
        return not self < other

    def rounded(self) -> "Money":
        """Return the amount rounded half-up to cents."""
        return Money(round_money(self.amount), self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    @property
    def is_positive(self) -> bool:
        return self.amount > Decimal("0")

    @property
    def is_negative(self) -> bool:
        return self.amount < Decimal("0")

    @classmethod
    def zero(cls, currency: Currency | str = "PEN") -> "Money":
        return cls(Decimal("0"), currency)


__all__ = [
    "CENTS",
    "AffectationCategory",
    "Currency",
    "DiscountMode",
    "DocumentType",
    "Money",
    "round_money",
    "round_unit",
]
