"""Structured logging for the engine, built on structlog.

Engine events (``payment_added``, ``document_finalized`` and friends) are
key/value records. ``configure_logging`` routes them through the standard
library to stderr, rendered for a terminal or as one JSON object per line.
Until it is called structlog's defaults apply, which is what library users
embedding the engine get.
"""

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from invoice_engine.config import Settings, get_settings

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _add_engine_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Stamp JSON records with the engine name, version and environment."""
    settings = get_settings()
    event_dict.setdefault("app", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    event_dict.setdefault("environment", settings.environment.value)
    return event_dict


def build_processors(log_format: str) -> list[Processor]:
    """Processor chain for ``"json"`` or ``"console"`` output."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]
    if log_format == "json":
        processors += [
            _add_engine_context,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )
    return processors


def configure_logging(settings: Settings | None = None) -> None:
    """Send engine events to stderr at ``settings.log_level``.

    Stdout is left to command output so ``invoice-engine totals --json``
    stays machine readable. A ``log_file`` gets a plain-text copy.
    """
    if settings is None:
        settings = get_settings()
    level = getattr(logging, settings.log_level.value)

    structlog.configure(
        processors=build_processors(settings.log_format or "console"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("invoice_engine").setLevel(level)

    if settings.log_file:
        _add_file_handler(settings.log_file, level)


def _add_file_handler(log_file: Path, level: int) -> None:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    logging.getLogger("invoice_engine").addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Logger for an engine module: ``logger = get_logger(__name__)``."""
    return structlog.stdlib.get_logger(name)


class LogContext:
    """Bind key/value pairs to every event logged inside the block.

    Example:
        with LogContext(document_id=str(document.id)):
            finalize(document, ledger)
    """

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.kwargs)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.kwargs)
