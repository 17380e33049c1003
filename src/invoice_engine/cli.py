"""Command-line interface for Invoice Engine."""

import argparse
import json
import sys
from pathlib import Path

from invoice_engine import __version__
from invoice_engine.config import LogLevel, get_settings
from invoice_engine.domain.documents import Document
from invoice_engine.exceptions import InvalidDocumentError
from invoice_engine.logging_config import configure_logging
from invoice_engine.parsers.user_input import parse_document
from invoice_engine.services.payment_methods import default_catalog


def load_document(path: Path) -> Document:
    """Read a JSON document description from ``path``."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return parse_document(data)


def cmd_totals(args: argparse.Namespace) -> int:
    """Print the totals of a document description."""
    path = Path(args.file)
    try:
        document = load_document(path)
    except FileNotFoundError:
        print(f"File not found: {path}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Invalid JSON in {path}: {e}", file=sys.stderr)
        return 1
    except InvalidDocumentError as e:
        print(e.message, file=sys.stderr)
        return 1

    totals = document.totals

    if args.json:
        print(
            json.dumps(
                {
                    "lines": [line.to_dict() for line in document.lines],
                    "totals": totals.to_dict(),
                },
                indent=2,
            )
        )
        return 0

    currency = totals.currency
    print(f"Document: {document.document_type.value} ({document.emit_date})")
    print(f"Lines: {len(document.lines)}")
    for line in document.lines:
        label = line.description or line.product_code or str(line.id)[:8]
        print(
            f"  [{line.affectation.short_label}] {label}: "
            f"{line.quantity} x {line.unit_value_without_tax} = "
            f"{line.line_total.amount} {currency}"
        )

    rows = [
        ("Taxed", totals.taxed_before_discount),
        ("Global discount", totals.effective_global_discount),
        ("Taxed after discount", totals.taxed_after_discount),
        ("Exonerated", totals.exonerated),
        ("Unaffected", totals.unaffected),
        ("Free", totals.free),
        (f"IGV ({(totals.tax_rate * 100).normalize():f}%)", totals.igv),
        ("Total discount", totals.total_discount),
        ("Total", totals.total_amount),
        ("Total to pay", totals.total_to_pay),
    ]
    print()
    for label, amount in rows:
        print(f"  {label:<24} {amount.amount:>12} {currency}")
    return 0


def cmd_methods(args: argparse.Namespace) -> int:
    """List the payment method catalog."""
    catalog = default_catalog()
    print(f"{'ID':>3}  {'Type':<7}  Name")
    for method in catalog.list_all():
        kind = "credit" if method.is_credit else "cash"
        print(f"{method.id:>3}  {kind:<7}  {method.name}")
    return 0


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"Invoice Engine v{__version__}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="invoice-engine",
        description="Invoice Engine - fiscal document totals and payment reconciliation",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log engine events to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # totals command
    totals_parser = subparsers.add_parser(
        "totals", help="Compute the totals of a JSON document description"
    )
    totals_parser.add_argument("file", help="JSON file describing the document")
    totals_parser.add_argument(
        "--json",
        action="store_true",
        help="Print lines and totals as JSON",
    )
    totals_parser.set_defaults(func=cmd_totals)

    # methods command
    methods_parser = subparsers.add_parser("methods", help="List payment methods")
    methods_parser.set_defaults(func=cmd_methods)

    # version command
    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        settings = get_settings().model_copy(update={"log_level": LogLevel.DEBUG})
        configure_logging(settings)

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
