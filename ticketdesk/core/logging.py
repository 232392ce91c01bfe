# ticketdesk/core/logging.py
import logging
import sys

from loguru import logger

_LOGGING_CONFIGURED = False


def _is_telemetry(record) -> bool:
    return "telemetry" in record["extra"]


def setup_logging(level: str = "INFO", telemetry_path: str | None = None) -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(level=level.upper())

    logger.remove()
    logger.add(
        sys.stdout,
        level=level.upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{function}:{line} - {message}",
        diagnose=False,
        backtrace=False,
    )

    # Breadcrumbs and captured exceptions go to a separate JSON sink for the collector
    if telemetry_path:
        logger.add(
            telemetry_path,
            level="DEBUG",
            filter=_is_telemetry,
            serialize=True,
            enqueue=True,
            catch=True,
        )

    _LOGGING_CONFIGURED = True
