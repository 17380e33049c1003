from dataclasses import dataclass
from decimal import Decimal

from invoice_engine.domain.value_objects import DiscountMode


@dataclass(frozen=True)
class GlobalDiscountPolicy:
    """Document-level discount applied to the taxed subtotal.

    ``input_value`` is the raw entry: a percentage for ``BY_PERCENTAGE`` or a
    tax-inclusive amount for ``BY_AMOUNT``.
    """

    enabled: bool = False
    mode: DiscountMode = DiscountMode.BY_AMOUNT
    input_value: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        if not isinstance(self.input_value, Decimal):
            object.__setattr__(self, "input_value", Decimal(str(self.input_value)))
        if not isinstance(self.mode, DiscountMode):
            object.__setattr__(self, "mode", DiscountMode(self.mode))

    @classmethod
    def disabled(cls) -> "GlobalDiscountPolicy":
        return cls()

    @classmethod
    def by_percentage(cls, percentage: Decimal | int | str) -> "GlobalDiscountPolicy":
        return cls(
            enabled=True,
            mode=DiscountMode.BY_PERCENTAGE,
            input_value=Decimal(str(percentage)),
        )

    @classmethod
    def by_amount(cls, amount: Decimal | int | str) -> "GlobalDiscountPolicy":
        return cls(
            enabled=True, mode=DiscountMode.BY_AMOUNT, input_value=Decimal(str(amount))
        )


__all__ = ["GlobalDiscountPolicy"]
