from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from invoice_engine.domain.payments import PaymentMethod


class PaymentMethodCatalog(ABC):
    @abstractmethod
    def get(self, method_id: int) -> PaymentMethod | None:
        pass

    @abstractmethod
    def require(self, method_id: int) -> PaymentMethod:
        pass

    @abstractmethod
    def list_all(self) -> Iterable[PaymentMethod]:
        pass

    @abstractmethod
    def label(self, method_id: int) -> str:
        pass
