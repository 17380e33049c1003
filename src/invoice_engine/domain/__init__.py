from invoice_engine.domain.aggregation import aggregate, resolve_global_discount
from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.documents import Document, FinalizedDocument
from invoice_engine.domain.line_items import LineInput, LineItem
from invoice_engine.domain.payments import (
    Payment,
    PaymentMethod,
    PaymentRejection,
    PaymentResult,
    PaymentSummary,
    RejectionReason,
)
from invoice_engine.domain.pricing import (
    price,
    reprice,
    unit_price_with_tax,
    unit_value_without_tax,
)
from invoice_engine.domain.totals import DocumentTotals
from invoice_engine.domain.value_objects import (
    AffectationCategory,
    Currency,
    DiscountMode,
    DocumentType,
    Money,
)

__all__ = [
    "AffectationCategory",
    "Currency",
    "DiscountMode",
    "Document",
    "DocumentTotals",
    "DocumentType",
    "FinalizedDocument",
    "GlobalDiscountPolicy",
    "LineInput",
    "LineItem",
    "Money",
    "Payment",
    "PaymentMethod",
    "PaymentRejection",
    "PaymentResult",
    "PaymentSummary",
    "RejectionReason",
    "aggregate",
    "price",
    "reprice",
    "resolve_global_discount",
    "unit_price_with_tax",
    "unit_value_without_tax",
]
