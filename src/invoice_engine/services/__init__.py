from invoice_engine.services.finalization import finalize
from invoice_engine.services.interfaces import PaymentMethodCatalog
from invoice_engine.services.payment_ledger import PaymentLedger
from invoice_engine.services.payment_methods import (
    DEFAULT_PAYMENT_METHODS,
    StaticPaymentMethodCatalog,
    default_catalog,
)

__all__ = [
    "DEFAULT_PAYMENT_METHODS",
    "PaymentLedger",
    "PaymentMethodCatalog",
    "StaticPaymentMethodCatalog",
    "default_catalog",
    "finalize",
]
