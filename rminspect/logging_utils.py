"""Logging helpers that render record arguments and exceptions with fmt_any()."""

from __future__ import annotations

import collections.abc as abc
import logging
from typing import Any

from .formatters import InspectOptions, Kind, fmt_any, resolve_options, value_kind

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class InspectLogFormatter(logging.Formatter):
    """Format log records, rendering composite arguments and exceptions with fmt_any().

    Primitive arguments are passed through unchanged so `%d` and `%.2f`
    placeholders keep working; the original record is never modified.
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, *, options: Any = None) -> None:
        super().__init__(fmt, datefmt)
        self.options: InspectOptions = resolve_options(options)

    def format(self, record: logging.LogRecord) -> str:
        """Render one log record with inspected arguments."""
        record = logging.makeLogRecord(record.__dict__)
        # Drop exception text cached by another handler's formatter
        record.exc_text = None
        if isinstance(record.args, abc.Mapping):
            record.args = {key: self.inspect_arg(value) for key, value in record.args.items()}
        elif isinstance(record.args, tuple):
            record.args = tuple(self.inspect_arg(arg) for arg in record.args)
        return super().format(record)

    def formatException(self, ei) -> str:
        """Render the exception with its trace, cause and attached fields."""
        _, exc, _ = ei
        if exc is None:
            return super().formatException(ei)
        return fmt_any(exc, self.options)

    def inspect_arg(self, arg: Any) -> Any:
        try:
            kind = value_kind(arg)
        except Exception:
            kind = Kind.OBJECT
        return arg if kind is Kind.PRIMITIVE else fmt_any(arg, self.options)


def setup_logging(level: str = "INFO", options: Any = None, fmt: str = DEFAULT_LOG_FORMAT) -> None:
    """Configure the root logger with one stream handler using InspectLogFormatter."""
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.setFormatter(InspectLogFormatter(fmt, options=options))

    root.handlers.clear()
    root.addHandler(handler)
