"""Line item pricing.

Turns a :class:`LineInput` into a priced :class:`LineItem`. Every monetary
figure is rounded half-up to cents; unit prices keep four decimal places.
"""

from dataclasses import replace
from decimal import Decimal

from invoice_engine.domain.line_items import LineInput, LineItem
from invoice_engine.domain.value_objects import (
    AffectationCategory,
    Money,
    round_money,
    round_unit,
)

ZERO = Decimal("0")
ONE = Decimal("1")
ONE_HUNDRED = Decimal("100")


def _non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def unit_price_with_tax(
    unit_value: Decimal, affectation: AffectationCategory, tax_rate: Decimal
) -> Decimal:
    """Tax-inclusive unit price for a tax-exclusive unit value."""
    unit_value = _non_negative(unit_value)
    if affectation.is_taxed:
        return round_unit(unit_value * (ONE + _non_negative(tax_rate)))
    return unit_value


def unit_value_without_tax(
    unit_price: Decimal, affectation: AffectationCategory, tax_rate: Decimal
) -> Decimal:
    """Tax-exclusive unit value for a tax-inclusive unit price."""
    unit_price = _non_negative(unit_price)
    if affectation.is_taxed:
        return round_unit(unit_price / (ONE + _non_negative(tax_rate)))
    return unit_price


def price(line_input: LineInput) -> LineItem:
    quantity = _non_negative(line_input.quantity)
    unit_value = _non_negative(line_input.unit_value_without_tax)
    tax_rate = _non_negative(line_input.tax_rate)
    requested_discount = round_money(_non_negative(line_input.item_discount))
    affectation = line_input.affectation

    gross_value = round_money(quantity * unit_value)
    effective_discount = min(requested_discount, gross_value)
    net_value = gross_value - effective_discount

    if affectation.is_taxed:
        tax = round_money(net_value * tax_rate)
    else:
        tax = ZERO
    line_total = net_value + tax

    if gross_value > ZERO:
        discount_percentage = round_money(effective_discount / gross_value * ONE_HUNDRED)
    else:
        discount_percentage = ZERO

    if line_input.unit_price_with_tax is None:
        unit_price = unit_price_with_tax(unit_value, affectation, tax_rate)
    else:
        unit_price = _non_negative(line_input.unit_price_with_tax)

    currency = line_input.currency
    return LineItem(
        id=line_input.id,
        quantity=quantity,
        unit_value_without_tax=unit_value,
        unit_price_with_tax=unit_price,
        affectation=affectation,
        tax_rate=tax_rate,
        item_discount=Money(requested_discount, currency),
        gross_value=Money(gross_value, currency),
        effective_discount=Money(effective_discount, currency),
        net_value=Money(net_value, currency),
        tax=Money(tax, currency),
        line_total=Money(line_total, currency),
        discount_percentage_actual=discount_percentage,
        description=line_input.description,
        product_code=line_input.product_code,
    )


def reprice(
    line: LineItem,
    *,
    quantity: Decimal | None = None,
    tax_rate: Decimal | None = None,
) -> LineItem:
    """Price ``line`` again with a new quantity or tax rate, keeping its id.

    A tax rate change keeps the tax-exclusive unit value and derives a new
    tax-inclusive unit price from it.
    """
    line_input = line.to_input()
    if quantity is not None:
        line_input = replace(line_input, quantity=quantity)
    if tax_rate is not None:
        line_input = replace(line_input, tax_rate=tax_rate, unit_price_with_tax=None)
    return price(line_input)


__all__ = ["price", "reprice", "unit_price_with_tax", "unit_value_without_tax"]
