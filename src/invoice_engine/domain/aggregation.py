"""Document totals aggregation.

Sums priced lines per affectation category, applies the global discount to
the taxed subtotal and derives IGV and the amount to pay. ``aggregate`` is
pure: it reads only its arguments. Out-of-range amounts are clamped; only a
line priced in another currency is refused.
"""

from collections.abc import Iterable
from decimal import Decimal

from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.line_items import LineItem
from invoice_engine.domain.totals import DocumentTotals
from invoice_engine.domain.value_objects import (
    AffectationCategory,
    Currency,
    DiscountMode,
    Money,
    round_money,
)

ZERO = Decimal("0")
ONE = Decimal("1")
ONE_HUNDRED = Decimal("100")


def resolve_global_discount(
    policy: GlobalDiscountPolicy, taxed_before_discount: Decimal, tax_rate: Decimal
) -> Decimal:
    """Tax-exclusive monetary amount requested by ``policy``, before capping.

    Amount-mode input is entered tax-inclusive, so it is brought to the
    tax-exclusive basis of the taxed subtotal.
    """
    if not policy.enabled:
        return ZERO

    value = max(policy.input_value, ZERO)
    if policy.mode == DiscountMode.BY_PERCENTAGE:
        percentage = min(value, ONE_HUNDRED)
        return round_money(taxed_before_discount * percentage / ONE_HUNDRED)

    return round_money(value / (ONE + max(tax_rate, ZERO)))


def aggregate(
    lines: Iterable[LineItem],
    discount_policy: GlobalDiscountPolicy | None = None,
    tax_rate: Decimal = Decimal("0.18"),
    currency: Currency | str = Currency.PEN,
) -> DocumentTotals:
    if discount_policy is None:
        discount_policy = GlobalDiscountPolicy.disabled()
    tax_rate = max(Decimal(str(tax_rate)), ZERO)
    currency = Currency(currency)

    subtotals = {category: ZERO for category in AffectationCategory}
    line_discounts = ZERO
    for line in lines:
        if line.currency != currency:
            raise ValueError(
                f"Cannot add a {line.currency.value} line to {currency.value} totals"
            )
        subtotals[line.affectation] += line.net_value.amount
        line_discounts += line.effective_discount.amount

    taxed_before_discount = subtotals[AffectationCategory.TAXED]
    exonerated = subtotals[AffectationCategory.EXONERATED]
    unaffected = subtotals[AffectationCategory.UNAFFECTED]
    free = subtotals[AffectationCategory.FREE]

    requested = resolve_global_discount(discount_policy, taxed_before_discount, tax_rate)
    effective_global_discount = min(requested, taxed_before_discount)
    taxed_after_discount = max(ZERO, taxed_before_discount - effective_global_discount)

    if taxed_before_discount > ZERO:
        global_discount_percentage = round_money(
            effective_global_discount / taxed_before_discount * ONE_HUNDRED
        )
    else:
        global_discount_percentage = ZERO

    igv = round_money(taxed_after_discount * tax_rate)
    tax_base = taxed_after_discount + exonerated + unaffected
    total_amount = tax_base + igv
    total_discount = effective_global_discount + line_discounts

    return DocumentTotals(
        taxed_before_discount=Money(taxed_before_discount, currency),
        exonerated=Money(exonerated, currency),
        unaffected=Money(unaffected, currency),
        free=Money(free, currency),
        effective_global_discount=Money(effective_global_discount, currency),
        global_discount_percentage=global_discount_percentage,
        taxed_after_discount=Money(taxed_after_discount, currency),
        igv=Money(igv, currency),
        tax_base=Money(tax_base, currency),
        total_amount=Money(total_amount, currency),
        total_discount=Money(total_discount, currency),
        total_to_pay=Money(total_amount, currency),
        tax_rate=tax_rate,
    )


__all__ = ["aggregate", "resolve_global_discount"]
