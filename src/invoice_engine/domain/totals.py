from dataclasses import dataclass
from decimal import Decimal

from invoice_engine.domain.value_objects import Money


@dataclass(frozen=True)
class DocumentTotals:
    """Totals of a fiscal document, computed by ``aggregate``."""

    taxed_before_discount: Money
    exonerated: Money
    unaffected: Money
    free: Money
    effective_global_discount: Money
    global_discount_percentage: Decimal
    taxed_after_discount: Money
    igv: Money
    tax_base: Money
    total_amount: Money
    total_discount: Money
    total_to_pay: Money
    tax_rate: Decimal

    @property
    def currency(self) -> str:
        return self.total_amount.currency.value  # type: ignore[union-attr]

    def to_dict(self) -> dict[str, str]:
        return {
            "currency": self.currency,
            "tax_rate": str(self.tax_rate),
            "taxed_before_discount": str(self.taxed_before_discount.amount),
            "exonerated": str(self.exonerated.amount),
            "unaffected": str(self.unaffected.amount),
            "free": str(self.free.amount),
            "effective_global_discount": str(self.effective_global_discount.amount),
            "global_discount_percentage": str(self.global_discount_percentage),
            "taxed_after_discount": str(self.taxed_after_discount.amount),
            "igv": str(self.igv.amount),
            "tax_base": str(self.tax_base.amount),
            "total_amount": str(self.total_amount.amount),
            "total_discount": str(self.total_discount.amount),
            "total_to_pay": str(self.total_to_pay.amount),
        }


__all__ = ["DocumentTotals"]
