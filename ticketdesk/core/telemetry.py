# ticketdesk/core/telemetry.py
"""Breadcrumb and exception capture.

Records are ordinary loguru messages tagged with a ``telemetry`` extra, so
``setup_logging`` can route them to the collector sink. Sinks are added with
``catch=True``: a collector that is down never fails the request that
produced the record.
"""
from typing import Any

from loguru import logger

_LEVELS = {
    "debug": "DEBUG",
    "info": "INFO",
    "warning": "WARNING",
    "error": "ERROR",
    "fatal": "CRITICAL",
}


def add_breadcrumb(
    category: str,
    message: str,
    level: str = "info",
    data: dict[str, Any] | None = None,
) -> None:
    logger.bind(telemetry="breadcrumb", category=category, data=data or {}).log(
        _LEVELS.get(level, "INFO"), "[{}] {}", category, message
    )


def capture_exception(exc: BaseException, category: str = "error", data: dict[str, Any] | None = None) -> None:
    logger.bind(telemetry="exception", category=category, data=data or {}).opt(exception=exc).error(
        "[{}] {}: {}", category, type(exc).__name__, exc
    )
