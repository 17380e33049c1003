"""Finalization of a fully paid document."""

from datetime import UTC, datetime

from invoice_engine.domain.documents import Document, FinalizedDocument
from invoice_engine.exceptions import DocumentIncompleteError, TotalsMismatchError
from invoice_engine.logging_config import LogContext, get_logger
from invoice_engine.services.payment_ledger import PaymentLedger

logger = get_logger(__name__)


def finalize(
    document: Document,
    ledger: PaymentLedger,
    finalized_at: datetime | None = None,
) -> FinalizedDocument:
    """Freeze a document together with the payments that settle it.

    Args:
        document: The document snapshot being closed
        ledger: Payments recorded against the document

    Returns:
        The finalized document record

    Raises:
        TotalsMismatchError: If the ledger was opened against another total,
            e.g. the document was edited after payments started
        DocumentIncompleteError: If the payments don't cover the total
    """
    with LogContext(document_id=str(document.id)):
        return _finalize(document, ledger, finalized_at)


def _finalize(
    document: Document,
    ledger: PaymentLedger,
    finalized_at: datetime | None,
) -> FinalizedDocument:
    totals = document.totals
    if ledger.total_to_pay != totals.total_to_pay:
        raise TotalsMismatchError(
            document.id,
            document_total=str(totals.total_to_pay.amount),
            ledger_total=str(ledger.total_to_pay.amount),
        )

    summary = ledger.summary()
    if not summary.is_complete:
        logger.warning(
            "document_finalize_refused",
            remaining=str(summary.remaining.amount),
        )
        raise DocumentIncompleteError(document.id, str(summary.remaining.amount))

    finalized = FinalizedDocument(
        document_id=document.id,
        document_type=document.document_type,
        emit_date=document.emit_date,
        currency=document.currency,  # type: ignore[arg-type]
        lines=document.lines,
        discount_policy=document.discount_policy,
        totals=totals,
        payments=ledger.payments,
        payment_summary=summary,
        finalized_at=finalized_at or datetime.now(UTC),
    )

    logger.info(
        "document_finalized",
        document_type=document.document_type.value,
        lines=len(document.lines),
        payments=len(finalized.payments),
        total_to_pay=str(totals.total_to_pay.amount),
        igv=str(totals.igv.amount),
    )
    return finalized
