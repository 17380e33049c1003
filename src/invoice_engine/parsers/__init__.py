from invoice_engine.parsers.user_input import (
    parse_affectation,
    parse_bool,
    parse_decimal,
    parse_discount_mode,
    parse_discount_policy,
    parse_document,
    parse_line_input,
)

__all__ = [
    "parse_affectation",
    "parse_bool",
    "parse_decimal",
    "parse_discount_mode",
    "parse_discount_policy",
    "parse_document",
    "parse_line_input",
]
