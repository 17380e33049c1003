from datetime import date
from decimal import Decimal

import pytest

from invoice_engine.config import get_settings
from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.documents import Document
from invoice_engine.domain.line_items import LineInput, LineItem
from invoice_engine.domain.pricing import price
from invoice_engine.domain.value_objects import AffectationCategory, DocumentType
from invoice_engine.services.payment_ledger import PaymentLedger
from invoice_engine.services.payment_methods import StaticPaymentMethodCatalog


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def emit_date() -> date:
    return date(2025, 3, 1)


@pytest.fixture
def taxed_line() -> LineItem:
    return price(
        LineInput(
            quantity=Decimal("1"),
            unit_value_without_tax=Decimal("100.00"),
            affectation=AffectationCategory.TAXED,
            description="Parlante bluetooth",
        )
    )


@pytest.fixture
def exonerated_line() -> LineItem:
    return price(
        LineInput(
            quantity=Decimal("1"),
            unit_value_without_tax=Decimal("50.00"),
            affectation=AffectationCategory.EXONERATED,
            description="Libro",
        )
    )


@pytest.fixture
def free_line() -> LineItem:
    return price(
        LineInput(
            quantity=Decimal("2"),
            unit_value_without_tax=Decimal("5.00"),
            affectation=AffectationCategory.FREE,
            description="Llavero promocional",
        )
    )


@pytest.fixture
def document(emit_date: date, taxed_line: LineItem) -> Document:
    """One taxed line of 100.00 with a 10% global discount: 106.20 to pay."""
    return (
        Document(document_type=DocumentType.RECEIPT, emit_date=emit_date)
        .with_line(taxed_line)
        .with_discount_policy(GlobalDiscountPolicy.by_percentage(10))
    )


@pytest.fixture
def catalog() -> StaticPaymentMethodCatalog:
    return StaticPaymentMethodCatalog()


@pytest.fixture
def ledger(document: Document, catalog: StaticPaymentMethodCatalog) -> PaymentLedger:
    return PaymentLedger.for_document(document, catalog=catalog, credit_window_days=365)
