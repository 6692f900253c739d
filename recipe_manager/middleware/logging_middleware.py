"""Routing of standard-library log records into Loguru.

Uvicorn, SQLAlchemy and slowapi log through :mod:`logging`; the handler below forwards
their records so every line ends up in the configured Loguru sinks.
"""

import logging

from recipe_manager.core.logging import get_logger

_stdlib_logger = get_logger("stdlib")


class InterceptHandler(logging.Handler):
    """Forward standard logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Re-emit ``record`` through Loguru, keeping its level and origin.

        Args:
            record: The log record to forward.
        """
        try:
            level: str | int = _stdlib_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        _stdlib_logger.bind(name=record.name).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())
