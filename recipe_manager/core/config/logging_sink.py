"""Loguru sink description loaded from the logging configuration file."""

from dataclasses import dataclass, fields
from typing import Any

STDOUT_SINK = "sys.stdout"


@dataclass(frozen=True)
class LoggingSink:
    """One entry of the ``sinks`` list in ``config/logging.json``.

    Attributes:
        sink: ``"sys.stdout"`` or a path to a log file.
        level: Minimum level accepted by the sink.
        serialize: Emit loguru's own JSON records instead of formatted lines.
        rotation: File rotation policy, e.g. ``"10 MB"``.
        retention: How long rotated files are kept.
        compression: Archive format for rotated files.
        backtrace: Extend tracebacks beyond the catching frame.
        diagnose: Show variable values in tracebacks.
        enqueue: Write through a multiprocess-safe queue.
        colorize: Force ANSI colours on or off.
        catch: Swallow errors raised by the sink itself.
    """

    sink: str
    level: str = "INFO"
    serialize: bool = False
    rotation: str | None = None
    retention: str | None = None
    compression: str | None = None
    backtrace: bool = False
    diagnose: bool = False
    enqueue: bool = False
    colorize: bool | None = None
    catch: bool = True

    @property
    def is_stdout(self) -> bool:
        return self.sink == STDOUT_SINK

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "LoggingSink":
        """Build a sink from its JSON form, ignoring unknown keys.

        Raises:
            ValueError: If the entry has no ``sink`` target.
        """
        if not data.get("sink"):
            raise ValueError("Logging sink entry is missing the 'sink' target")
        known = {f.name for f in fields(LoggingSink)}
        return LoggingSink(**{k: v for k, v in data.items() if k in known})
