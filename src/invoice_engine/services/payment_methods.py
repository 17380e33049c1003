"""Static payment method catalog."""

from collections.abc import Iterable
from types import MappingProxyType

from invoice_engine.domain.payments import PaymentMethod
from invoice_engine.exceptions import PaymentMethodNotFoundError
from invoice_engine.services.interfaces import PaymentMethodCatalog

DEFAULT_PAYMENT_METHODS: tuple[PaymentMethod, ...] = (
    PaymentMethod(1, "EFECTIVO [CONTADO]"),
    PaymentMethod(2, "TARJETA DÉBITO [CONTADO]"),
    PaymentMethod(3, "TARJETA CRÉDITO [CONTADO]"),
    PaymentMethod(4, "TRANSFERENCIA [CONTADO]"),
    PaymentMethod(5, "GIRO [CONTADO]"),
    PaymentMethod(6, "CHEQUE [CONTADO]"),
    PaymentMethod(7, "CUPÓN [CONTADO]"),
    PaymentMethod(8, "YAPE [CONTADO]"),
    PaymentMethod(9, "POR PAGAR [CRÉDITO]", is_credit=True),
    PaymentMethod(10, "OTROS [CONTADO]"),
)


class StaticPaymentMethodCatalog(PaymentMethodCatalog):
    """Read-only catalog built once from a fixed list of methods."""

    def __init__(self, methods: Iterable[PaymentMethod] = DEFAULT_PAYMENT_METHODS) -> None:
        by_id: dict[int, PaymentMethod] = {}
        for method in methods:
            if method.id in by_id:
                raise ValueError(f"Duplicate payment method id: {method.id}")
            by_id[method.id] = method
        self._methods = MappingProxyType(by_id)

    def get(self, method_id: int) -> PaymentMethod | None:
        return self._methods.get(method_id)

    def require(self, method_id: int) -> PaymentMethod:
        method = self._methods.get(method_id)
        if method is None:
            raise PaymentMethodNotFoundError(method_id)
        return method

    def list_all(self) -> tuple[PaymentMethod, ...]:
        return tuple(self._methods.values())

    def label(self, method_id: int) -> str:
        return self.require(method_id).name

    def labels(self) -> dict[int, str]:
        return {method_id: method.name for method_id, method in self._methods.items()}

    def __len__(self) -> int:
        return len(self._methods)

    def __contains__(self, method_id: object) -> bool:
        return method_id in self._methods


_default_catalog = StaticPaymentMethodCatalog()


def default_catalog() -> StaticPaymentMethodCatalog:
    return _default_catalog
