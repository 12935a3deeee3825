"""Terminal logging for the reporter.

All reporter output goes through the ``jesthtmlreporter`` logger. Records
are tagged with a kind (``default``, ``success`` or ``error``) which
``ColorFormatter`` turns into a terminal color.
"""
from __future__ import annotations

import logging
import sys
from typing import IO, Literal, Optional

LOGGER_NAME = "jesthtmlreporter"
LOG_PREFIX = "jest-html-reporter >> "

LogKind = Literal["default", "success", "error"]

LOG_COLORS: dict[str, str] = {
    "default": "\x1b[37m",
    "success": "\x1b[32m",
    "error": "\x1b[31m",
}
RESET = "\x1b[0m"

logger = logging.getLogger(LOGGER_NAME)


class ColorFormatter(logging.Formatter):
    """Formatter that wraps each line in the color of its kind."""

    def __init__(self, use_color: bool = True) -> None:
        super().__init__("%(message)s")
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        kind = getattr(record, "kind", None)
        if kind is None:
            kind = "error" if record.levelno >= logging.ERROR else "default"
        color = LOG_COLORS.get(kind, LOG_COLORS["default"])
        return f"{color}{message}{RESET}"


def log_message(kind: LogKind, message: object) -> str:
    """Log a prefixed reporter message.

    Returns the logged text (without color) so callers can reuse it.
    """
    text = f"{LOG_PREFIX}{message}"
    level = logging.ERROR if kind == "error" else logging.INFO
    logger.log(level, text, extra={"kind": kind})
    return text


def configure_logging(verbose: bool = False, stream: Optional[IO[str]] = None) -> logging.Handler:
    """Attach a colored stream handler to the reporter logger.

    Colors are only used when the stream is a terminal.
    """
    stream = stream or sys.stderr
    use_color = bool(getattr(stream, "isatty", lambda: False)())

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ColorFormatter(use_color=use_color))

    for existing in list(logger.handlers):
        if getattr(existing, "_jesthtmlreporter", False):
            logger.removeHandler(existing)
    handler._jesthtmlreporter = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def ensure_logging() -> None:
    """Attach the default handler when no handler would print reporter messages."""
    if not logger.hasHandlers():
        configure_logging()
