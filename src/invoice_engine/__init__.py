from invoice_engine.domain.aggregation import aggregate
from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.documents import Document, FinalizedDocument
from invoice_engine.domain.line_items import LineInput, LineItem
from invoice_engine.domain.pricing import price
from invoice_engine.domain.totals import DocumentTotals
from invoice_engine.domain.value_objects import (
    AffectationCategory,
    Currency,
    DiscountMode,
    DocumentType,
    Money,
)
from invoice_engine.services.finalization import finalize
from invoice_engine.services.payment_ledger import PaymentLedger

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
    "PaymentLedger",
    "aggregate",
    "finalize",
    "price",
]

__version__ = "0.1.0"
