"""Logging setup and configuration using Loguru.

Sinks are described in ``config/logging.json``; the console sink gets a coloured,
human readable format and file sinks get one JSON-like line per record.
"""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger as loguru_logger

if TYPE_CHECKING:
    from loguru import Logger

from recipe_manager.core.config.config import settings
from recipe_manager.core.config.logging_sink import LoggingSink

NO_REQUEST_ID = "-"

_FILE_FORMAT = (
    '{{"timestamp":"{time:YYYY-MM-DDTHH:mm:ss.SSSZ}",'
    '"level":"{level}","logger":"{extra[name]}","request_id":"{extra[request_id]}",'
    '"msg":{message!r}}}'
)
_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{line}</cyan>"
    "{extra[request_sep]}<blue>{extra[request_tag]}</blue> | <level>{message}</level>"
)

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "multipart", "PIL")


def _tag_request(record: dict[str, Any]) -> bool:
    request_id = record["extra"]["request_id"]
    shown = request_id != NO_REQUEST_ID
    record["extra"]["request_sep"] = " | " if shown else ""
    record["extra"]["request_tag"] = request_id if shown else ""
    return True


def _sink_kwargs(sink: LoggingSink) -> dict[str, Any]:
    """Translate a configured sink into ``loguru_logger.add`` keyword arguments."""
    kwargs: dict[str, Any] = {
        "level": sink.level,
        "serialize": sink.serialize,
        "backtrace": sink.backtrace,
        "diagnose": sink.diagnose,
        "enqueue": sink.enqueue,
        "catch": sink.catch,
    }
    if sink.is_stdout:
        kwargs["format"] = _CONSOLE_FORMAT
        kwargs["filter"] = _tag_request
        kwargs["colorize"] = True if sink.colorize is None else sink.colorize
        return kwargs

    kwargs["format"] = _FILE_FORMAT
    kwargs["colorize"] = bool(sink.colorize)
    for option in ("rotation", "retention", "compression"):
        value = getattr(sink, option)
        if value:
            kwargs[option] = value
    return kwargs


def configure_logging() -> None:
    """Replace loguru's default handler with the configured sinks."""
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    loguru_logger.remove()

    def patch_record(record: dict[str, Any]) -> None:
        record["extra"].setdefault("request_id", NO_REQUEST_ID)
        record["extra"].setdefault("name", record["name"])

    loguru_logger.configure(patcher=patch_record)

    for sink in settings.logging_sinks:
        if sink.is_stdout:
            loguru_logger.add(sys.stdout, **_sink_kwargs(sink))
            continue
        log_path = Path(sink.sink).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        loguru_logger.add(str(log_path), **_sink_kwargs(sink))


def get_logger(name: str | None = None) -> "Logger":
    """Retrieve a configured Loguru logger instance.

    Args:
        name: Optional logical name to bind to the logger.

    Returns:
        A Loguru logger, optionally bound with a custom name.
    """
    return loguru_logger.bind(name=name) if name else loguru_logger
