from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Final, Literal, Protocol, runtime_checkable

_LOGGER_NAME: Final[str] = "codecleanup"


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class _ConsoleFormatter(logging.Formatter):
    """Colorized ``[LEVEL] message`` lines for interactive terminals."""

    _RESET = "\x1b[0m"
    _BOLD = "\x1b[1m"
    _FG_GRAY = "\x1b[90m"
    _FG_RED = "\x1b[91m"
    _FG_YELLOW = "\x1b[93m"
    _FG_CYAN = "\x1b[36m"

    def format(self, record: logging.LogRecord) -> str:
        line = f"{self._level_tag(record.levelno)} {record.getMessage()}"
        if record.exc_info:
            line += f"\n{self._FG_RED}{self.formatException(record.exc_info)}{self._RESET}"
        return line

    def _level_tag(self, level: int) -> str:
        if level >= logging.ERROR:
            c = self._FG_RED
            name = "ERROR"
        elif level >= logging.WARNING:
            c = self._FG_YELLOW
            name = "WARNING"
        elif level >= logging.INFO:
            c = self._FG_CYAN
            name = "INFO"
        else:
            c = self._FG_GRAY
            name = "DEBUG"
        return f"{self._BOLD}{c}[{name}]{self._RESET}"


LogStyle = Literal["json", "pretty", "auto"]


def _env_level() -> int:
    v = os.environ.get("CODECLEANUP_LOG_LEVEL")
    if not v:
        return logging.INFO
    return {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
    }.get(v.strip().upper(), logging.INFO)


def init_logging(style: LogStyle = "auto") -> logging.Logger:
    """Initialize or refresh the project logger.

    Re-binds the stream handler to the current ``sys.stderr`` on every call,
    so repeated CLI invocations in one process (tests) never stack handlers.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    lvl = _env_level()
    logger.setLevel(lvl)

    for h in list(logger.handlers):
        if isinstance(h, logging.StreamHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(_choose_formatter(style))
    handler.setLevel(lvl)
    logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


def _choose_formatter(style: LogStyle = "auto") -> logging.Formatter:
    if style == "json":
        return _JsonFormatter()
    if style == "pretty":
        return _ConsoleFormatter()

    @runtime_checkable
    class _HasIsatty(Protocol):
        def isatty(self) -> bool: ...

    out_stream = sys.stderr
    is_tty = isinstance(out_stream, _HasIsatty) and bool(out_stream.isatty())
    if is_tty:
        return _ConsoleFormatter()
    return logging.Formatter("[%(levelname)s] %(message)s")
