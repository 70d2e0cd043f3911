"""Console logging, assertion reporting and small numeric helpers."""

from __future__ import annotations

import enum
import os
import sys
from typing import Any, TextIO

INFO_PREFIX = "[\x1b[34mINFO\x1b[0m]: "
ERROR_PREFIX = "[\x1b[31mERROR\x1b[0m]: "
WARN_PREFIX = "[\x1b[33mWARN\x1b[0m]: "
DEBUG_PREFIX = "[\x1b[35mDEBUG\x1b[0m]: "

DEBUG_ENV_VAR = "UCIMA_DEBUG"


class LogLevel(enum.IntEnum):
    """Severity of a log message, most severe first."""

    FATAL = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @property
    def prefix(self) -> str:
        return _LEVEL_PREFIXES[self]

    @property
    def is_error(self) -> bool:
        return self < LogLevel.WARN


_LEVEL_PREFIXES = {
    LogLevel.FATAL: "[\x1b[41mFATAL\x1b[0m]: ",
    LogLevel.ERROR: "[\x1b[31mERROR\x1b[0m]: ",
    LogLevel.WARN: "[WARN]: ",
    LogLevel.INFO: "[INFO]: ",
    LogLevel.DEBUG: "[DEBUG]: ",
    LogLevel.TRACE: "[TRACE]: ",
}


class AssertionFailure(AssertionError):
    """Raised when an engine assertion does not hold."""

    def __init__(self, expression: str, message: str, file: str, line: int) -> None:
        super().__init__(
            f"Assertion failed: {expression}, message: {message}. (File: {file}, Line: {line})"
        )
        self.expression = expression
        self.message = message
        self.file = file
        self.line = line


def _format(message: str, args: tuple[Any, ...]) -> str:
    return message % args if args else message


def _emit(prefix: str, message: str, args: tuple[Any, ...], stream: TextIO | None) -> None:
    target = stream if stream is not None else sys.stdout
    target.write(prefix + _format(message, args) + "\n")


def debug_enabled() -> bool:
    """Whether debug tracing is switched on through the environment."""
    return os.environ.get(DEBUG_ENV_VAR, "") not in ("", "0")


def log_message(level: LogLevel, message: str, *args: Any, stream: TextIO | None = None) -> None:
    """Write a levelled message; errors go to stderr unless a stream is given."""
    level = LogLevel(level)
    if stream is None:
        stream = sys.stderr if level.is_error else sys.stdout
    stream.write(level.prefix + _format(message, args) + "\n")


def trace_info(message: str, *args: Any, stream: TextIO | None = None) -> None:
    _emit(INFO_PREFIX, message, args, stream)


def trace_warn(message: str, *args: Any, stream: TextIO | None = None) -> None:
    _emit(WARN_PREFIX, message, args, stream)


def trace_error(message: str, *args: Any, stream: TextIO | None = None) -> None:
    _emit(ERROR_PREFIX, message, args, stream)


def trace_debug(message: str, *args: Any, stream: TextIO | None = None) -> None:
    """Write a debug message, only when debug tracing is enabled."""
    if debug_enabled():
        _emit(DEBUG_PREFIX, message, args, stream)


def assertion_failure_report(
    expression: str, message: str, file: str, line: int, stream: TextIO | None = None
) -> None:
    trace_error(
        "Assertion failed: %s, message: %s. (File: %s, Line: %d)",
        expression,
        message,
        file,
        line,
        stream=stream,
    )


def uassert(condition: Any, expression: str = "", message: str = "") -> None:
    """Report and raise AssertionFailure when the condition is false."""
    if condition:
        return
    caller = sys._getframe(1)
    file, line = caller.f_code.co_filename, caller.f_lineno
    assertion_failure_report(expression, message, file, line)
    raise AssertionFailure(expression, message, file, line)


def clamp(value, low, high):
    """Limit value to the range [low, high]."""
    if value <= low:
        return low
    if value >= high:
        return high
    return value