"""Parsing of raw user-entered values.

Point-of-sale input is clamped rather than rejected: text that is not a
finite non-negative number parses to zero, so a stray keystroke never
blocks the sale.
"""

from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

from invoice_engine.config import Settings, get_settings
from invoice_engine.domain.discounts import GlobalDiscountPolicy
from invoice_engine.domain.documents import Document
from invoice_engine.domain.line_items import LineInput
from invoice_engine.domain.pricing import price, unit_value_without_tax
from invoice_engine.domain.value_objects import (
    AffectationCategory,
    Currency,
    DiscountMode,
    DocumentType,
)
from invoice_engine.exceptions import InvalidDocumentError

ZERO = Decimal("0")
ONE = Decimal("1")

_PERCENTAGE_MODES = {"%", "percent", "percentage", "by_percentage"}
_TRUE_VALUES = {"1", "true", "yes", "on", "si", "sí"}


def parse_decimal(value: Any) -> Decimal:
    """Parse a user-entered number, clamping anything invalid or negative to 0."""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip().replace(",", ".")
        if not text:
            return ZERO
        try:
            number = Decimal(text)
        except InvalidOperation:
            return ZERO
    if not number.is_finite() or number < ZERO:
        return ZERO
    return number


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def parse_discount_mode(value: Any) -> DiscountMode:
    if isinstance(value, DiscountMode):
        return value
    if value is not None and str(value).strip().lower() in _PERCENTAGE_MODES:
        return DiscountMode.BY_PERCENTAGE
    return DiscountMode.BY_AMOUNT


def parse_affectation(value: Any) -> AffectationCategory:
    """Accept a category name, a SUNAT code (1-4) or its short label.

    Unknown values fall back to ``TAXED``.
    """
    if isinstance(value, AffectationCategory):
        return value
    if value is None:
        return AffectationCategory.TAXED

    text = str(value).strip()
    if text.isdigit():
        try:
            return AffectationCategory.from_code(int(text))
        except ValueError:
            return AffectationCategory.TAXED

    lowered = text.lower()
    for category in AffectationCategory:
        if lowered in (category.value, category.short_label.lower()):
            return category
    return AffectationCategory.TAXED


def parse_discount_policy(data: Mapping[str, Any] | None) -> GlobalDiscountPolicy:
    if not data:
        return GlobalDiscountPolicy.disabled()
    return GlobalDiscountPolicy(
        enabled=parse_bool(data.get("enabled", True)),
        mode=parse_discount_mode(data.get("mode")),
        input_value=parse_decimal(data.get("value", data.get("input_value"))),
    )


def parse_line_input(
    data: Mapping[str, Any],
    tax_rate: Decimal,
    currency: Currency | str = Currency.PEN,
) -> LineInput:
    """Build a line from raw fields.

    Recognised keys: ``quantity``, ``unit_value`` (tax-exclusive),
    ``unit_price`` (tax-inclusive), ``affectation``, ``discount``,
    ``description`` and ``product_code``. When only ``unit_price`` is given
    the tax-exclusive value is derived from it.
    """
    affectation = parse_affectation(data.get("affectation"))
    unit_price: Decimal | None = None

    if data.get("unit_value") is not None:
        unit_value = parse_decimal(data["unit_value"])
        if data.get("unit_price") is not None:
            unit_price = parse_decimal(data["unit_price"])
    else:
        unit_price = parse_decimal(data.get("unit_price"))
        unit_value = unit_value_without_tax(unit_price, affectation, tax_rate)

    return LineInput(
        quantity=parse_decimal(data.get("quantity")),
        unit_value_without_tax=unit_value,
        unit_price_with_tax=unit_price,
        affectation=affectation,
        item_discount=parse_decimal(data.get("discount")),
        tax_rate=tax_rate,
        currency=currency,
        description=str(data.get("description", "")),
        product_code=str(data.get("product_code", "")),
    )


def parse_document(data: Any, settings: Settings | None = None) -> Document:
    """Build a priced :class:`Document` from a JSON-like mapping.

    Raises:
        InvalidDocumentError: If ``data`` is not a mapping, ``lines`` is not a
            list, ``tax_rate`` is above 1, or a date, currency or document
            type is not recognised
    """
    if settings is None:
        settings = get_settings()
    if not isinstance(data, Mapping):
        raise InvalidDocumentError("expected a JSON object")

    lines = data.get("lines", [])
    if not isinstance(lines, list):
        raise InvalidDocumentError("'lines' must be a list")

    if "tax_rate" in data:
        tax_rate = parse_decimal(data["tax_rate"])
        if tax_rate > ONE:
            raise InvalidDocumentError(
                f"'tax_rate' is a fraction between 0 and 1, got {data['tax_rate']}"
            )
    else:
        tax_rate = settings.default_tax_rate

    try:
        currency = Currency(data.get("currency", settings.default_currency.value))
        document_type = DocumentType(data.get("document_type", "quotation"))
        emit_date = (
            date.fromisoformat(data["emit_date"]) if "emit_date" in data else date.today()
        )
    except (TypeError, ValueError) as e:
        raise InvalidDocumentError(str(e)) from e

    document = Document(
        document_type=document_type,
        emit_date=emit_date,
        currency=currency,
        tax_rate=tax_rate,
        discount_policy=parse_discount_policy(data.get("global_discount")),
    )
    for raw_line in lines:
        if not isinstance(raw_line, Mapping):
            raise InvalidDocumentError("each line must be a JSON object")
        document = document.with_line(
            price(parse_line_input(raw_line, tax_rate, currency))
        )
    return document
