"""Tests for document totals aggregation."""

from decimal import Decimal

import pytest

from invoice_engine.domain.aggregation import aggregate, resolve_global_discount
from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.line_items import LineInput
from invoice_engine.domain.pricing import price
from invoice_engine.domain.value_objects import AffectationCategory, Money


def _taxed(amount: str, discount: str = "0"):
    return price(
        LineInput(
            quantity=Decimal("1"),
            unit_value_without_tax=Decimal(amount),
            item_discount=Decimal(discount),
        )
    )


class TestAggregate:
    def test_no_lines_gives_zero_totals(self):
        totals = aggregate([])

        assert totals.total_to_pay.is_zero
        assert totals.igv.is_zero
        assert totals.global_discount_percentage == Decimal("0")

    def test_single_taxed_line_without_discount(self, taxed_line):
        totals = aggregate([taxed_line])

        assert totals.taxed_before_discount == Money(Decimal("100.00"))
        assert totals.taxed_after_discount == Money(Decimal("100.00"))
        assert totals.igv == Money(Decimal("18.00"))
        assert totals.total_to_pay == Money(Decimal("118.00"))

    def test_percentage_global_discount(self, taxed_line):
        totals = aggregate([taxed_line], GlobalDiscountPolicy.by_percentage(10))

        assert totals.effective_global_discount == Money(Decimal("10.00"))
        assert totals.taxed_after_discount == Money(Decimal("90.00"))
        assert totals.igv == Money(Decimal("16.20"))
        assert totals.total_to_pay == Money(Decimal("106.20"))
        assert totals.global_discount_percentage == Decimal("10.00")

    def test_amount_global_discount_is_tax_inclusive(self, taxed_line):
        totals = aggregate([taxed_line], GlobalDiscountPolicy.by_amount("11.80"))

        assert totals.effective_global_discount == Money(Decimal("10.00"))
        assert totals.igv == Money(Decimal("16.20"))
        assert totals.total_to_pay == Money(Decimal("106.20"))

    def test_disabled_policy_ignores_value(self, taxed_line):
        policy = GlobalDiscountPolicy(enabled=False, input_value=Decimal("50"))

        totals = aggregate([taxed_line], policy)

        assert totals.effective_global_discount.is_zero
        assert totals.total_to_pay == Money(Decimal("118.00"))

    def test_percentage_above_hundred_is_capped(self, taxed_line):
        totals = aggregate([taxed_line], GlobalDiscountPolicy.by_percentage(150))

        assert totals.effective_global_discount == Money(Decimal("100.00"))
        assert totals.taxed_after_discount.is_zero
        assert totals.igv.is_zero

    def test_amount_discount_capped_at_taxed_subtotal(self, taxed_line, exonerated_line):
        totals = aggregate(
            [taxed_line, exonerated_line], GlobalDiscountPolicy.by_amount("500")
        )

        assert totals.effective_global_discount == Money(Decimal("100.00"))
        assert totals.taxed_after_discount.is_zero
        assert totals.total_to_pay == Money(Decimal("50.00"))

    def test_global_discount_never_touches_exonerated(self, exonerated_line):
        totals = aggregate([exonerated_line], GlobalDiscountPolicy.by_percentage(50))

        assert totals.effective_global_discount.is_zero
        assert totals.exonerated == Money(Decimal("50.00"))
        assert totals.total_to_pay == Money(Decimal("50.00"))

    def test_exonerated_and_unaffected_are_not_taxed(self, taxed_line, exonerated_line):
        unaffected = price(
            LineInput(
                quantity=Decimal("2"),
                unit_value_without_tax=Decimal("7.50"),
                affectation=AffectationCategory.UNAFFECTED,
            )
        )

        totals = aggregate([taxed_line, exonerated_line, unaffected])

        assert totals.igv == Money(Decimal("18.00"))
        assert totals.unaffected == Money(Decimal("15.00"))
        assert totals.tax_base == Money(Decimal("165.00"))
        assert totals.total_amount == Money(Decimal("183.00"))

    def test_free_lines_reported_but_not_payable(self, taxed_line, free_line):
        totals = aggregate([taxed_line, free_line])

        assert totals.free == Money(Decimal("10.00"))
        assert totals.total_to_pay == Money(Decimal("118.00"))

    def test_total_discount_includes_line_discounts(self):
        lines = [_taxed("50.00", discount="5.00"), _taxed("50.00")]

        totals = aggregate(lines, GlobalDiscountPolicy.by_percentage(10))

        assert totals.taxed_before_discount == Money(Decimal("95.00"))
        assert totals.effective_global_discount == Money(Decimal("9.50"))
        assert totals.total_discount == Money(Decimal("14.50"))

    def test_igv_follows_tax_rate(self, taxed_line):
        totals = aggregate([taxed_line], tax_rate=Decimal("0.10"))

        assert totals.igv == Money(Decimal("10.00"))
        assert totals.tax_rate == Decimal("0.10")

    def test_currency_is_carried(self):
        line = price(
            LineInput(
                quantity=Decimal("1"),
                unit_value_without_tax=Decimal("10.00"),
                currency="USD",
            )
        )

        totals = aggregate([line], currency="USD")

        assert totals.currency == "USD"
        assert totals.total_to_pay == Money(Decimal("11.80"), "USD")

    def test_line_in_other_currency_is_refused(self, taxed_line):
        with pytest.raises(ValueError, match="Cannot add a PEN line to USD totals"):
            aggregate([taxed_line], currency="USD")

    def test_global_discount_percentage_rounds_half_up(self):
        lines = [_taxed("8.00")]

        totals = aggregate(lines, GlobalDiscountPolicy.by_amount("0.01"))

        assert totals.effective_global_discount == Money(Decimal("0.01"))
        assert totals.global_discount_percentage == Decimal("0.13")

    def test_aggregate_is_pure(self, taxed_line, exonerated_line):
        lines = [taxed_line, exonerated_line]
        policy = GlobalDiscountPolicy.by_percentage(10)

        assert aggregate(lines, policy) == aggregate(lines, policy)
        assert lines == [taxed_line, exonerated_line]

    def test_order_of_lines_does_not_matter(self, taxed_line, exonerated_line, free_line):
        forward = aggregate([taxed_line, exonerated_line, free_line])
        backward = aggregate([free_line, exonerated_line, taxed_line])

        assert forward == backward

    @pytest.mark.parametrize(
        "policy",
        [
            GlobalDiscountPolicy.disabled(),
            GlobalDiscountPolicy.by_percentage(-5),
            GlobalDiscountPolicy.by_percentage(100),
            GlobalDiscountPolicy.by_amount("-20"),
            GlobalDiscountPolicy.by_amount("1000000"),
        ],
    )
    def test_totals_never_negative(self, taxed_line, exonerated_line, policy):
        totals = aggregate([taxed_line, exonerated_line], policy)

        for name in (
            "effective_global_discount",
            "taxed_after_discount",
            "igv",
            "tax_base",
            "total_to_pay",
        ):
            assert not getattr(totals, name).is_negative
        assert totals.effective_global_discount <= totals.taxed_before_discount

    def test_to_dict_uses_decimal_strings(self, taxed_line):
        data = aggregate([taxed_line], GlobalDiscountPolicy.by_percentage(10)).to_dict()

        assert data["total_to_pay"] == "106.20"
        assert data["igv"] == "16.20"
        assert data["currency"] == "PEN"


class TestResolveGlobalDiscount:
    def test_disabled(self):
        assert resolve_global_discount(
            GlobalDiscountPolicy.disabled(), Decimal("100"), Decimal("0.18")
        ) == Decimal("0")

    def test_percentage_rounds_half_up(self):
        assert resolve_global_discount(
            GlobalDiscountPolicy.by_percentage("12.5"), Decimal("0.20"), Decimal("0.18")
        ) == Decimal("0.03")

    def test_amount_divided_by_tax_factor(self):
        assert resolve_global_discount(
            GlobalDiscountPolicy.by_amount("5.90"), Decimal("100"), Decimal("0.18")
        ) == Decimal("5.00")
