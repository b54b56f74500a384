"""A levelled logger that writes formatted lines to a stream, with optional prefixes."""

from __future__ import annotations

import inspect
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from typing import Any, Protocol, TextIO


class LogLevel(IntEnum):
    """Severity of a message; lower values are more severe."""

    CRITICAL = 0
    ERROR = 1
    WARNING = 2
    NOTICE = 3
    INFO = 4
    DEBUG = 5


@dataclass
class LogRecord:
    """Everything known about a single log message."""

    format: str
    args: tuple = ()
    logger_name: str = ""
    level: LogLevel = LogLevel.INFO
    time: datetime = field(default_factory=datetime.now)
    filename: str = "???"
    line: int = 0
    process_id: int = field(default_factory=os.getpid)
    process_name: str = ""


class Handler(Protocol):
    def handle(self, rec: LogRecord) -> None: ...

    def close(self) -> None: ...


def _format_message(fmt: str, args: tuple) -> str:
    if not args:
        return fmt
    try:
        return fmt % tuple(args)
    except (TypeError, ValueError):
        return fmt + " ".join(str(arg) for arg in args)


class WriterHandler:
    """Writes records at or above its level to a text stream."""

    def __init__(self, stream: TextIO, level: LogLevel = LogLevel.INFO) -> None:
        self.stream = stream
        self.level = LogLevel(level)

    def filter_and_format(self, rec: LogRecord) -> str:
        """Return the formatted line, or an empty string if the record is filtered out."""
        if self.level < rec.level:
            return ""
        stamp = rec.time.strftime("%Y-%m-%d %H:%M:%S")
        level_name = LogLevel(rec.level).name
        message = _format_message(rec.format, rec.args)
        return f"{stamp} [{rec.logger_name}] {level_name:<8} {message}"

    def handle(self, rec: LogRecord) -> None:
        """Write the record to the stream unless it is filtered out."""
        message = self.filter_and_format(rec)
        if message:
            self.stream.write(message)

    def close(self) -> None:
        """Close the stream; the process's standard streams are only flushed."""
        if self.stream in (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__):
            self.stream.flush()
        else:
            self.stream.close()


class Logger:
    """Sends messages at or above its level to a handler."""

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.INFO,
        handler: Handler | None = None,
        call_depth: int = 0,
    ) -> None:
        self.name = name
        self.level = LogLevel(level)
        self.handler = handler if handler is not None else WriterHandler(sys.stdout, level)
        self.call_depth = call_depth

    def new(self, *prefixes: Any) -> PrefixedLogger:
        """Return a logger sharing this one's handler that prefixes every message."""
        return _with_prefix(self, "", prefixes)

    def set_level(self, level: LogLevel) -> None:
        """Change the level below which messages are dropped."""
        self.level = LogLevel(level)

    def set_call_depth(self, depth: int) -> None:
        """Set how many extra stack frames to skip when recording the caller."""
        self.call_depth = depth

    def _decorate(self, fmt: str) -> str:
        return fmt

    def _log(self, level: LogLevel, fmt: str, args: tuple) -> None:
        if not fmt.endswith("\n"):
            fmt += "\n"
        frame = inspect.currentframe()
        try:
            for _ in range(self.call_depth + 2):
                if frame is None:
                    break
                frame = frame.f_back
            if frame is None:
                filename, line = "???", 0
            else:
                filename = os.path.abspath(frame.f_code.co_filename)
                line = frame.f_lineno
        finally:
            del frame
        rec = LogRecord(
            format=fmt,
            args=tuple(args),
            logger_name=self.name,
            level=level,
            time=datetime.now(),
            filename=filename,
            line=line,
            process_id=os.getpid(),
            process_name=os.path.basename(sys.argv[0]) if sys.argv else "",
        )
        self.handler.handle(rec)

    def _emit(self, level: LogLevel, fmt: str, args: tuple) -> None:
        if self.level >= level:
            self._log(level, fmt, args)

    def fatal(self, fmt: str, *args: Any) -> None:
        """Log at CRITICAL, close the handler and exit with status 1."""
        decorated = self._decorate(fmt)
        if self.level >= LogLevel.CRITICAL:
            self._log(LogLevel.CRITICAL, decorated, args)
        self.handler.close()
        raise SystemExit(1)

    def panic(self, fmt: str, *args: Any) -> None:
        """Log at CRITICAL, then raise RuntimeError carrying the message."""
        decorated = self._decorate(fmt)
        if self.level >= LogLevel.CRITICAL:
            self._log(LogLevel.CRITICAL, decorated, args)
        raise RuntimeError(_format_message(decorated, args))

    def critical(self, fmt: str, *args: Any) -> None:
        """Log a message at CRITICAL level."""
        if self.level >= LogLevel.CRITICAL:
            self._log(LogLevel.CRITICAL, self._decorate(fmt), args)

    def error(self, fmt: str, *args: Any) -> None:
        """Log a message at ERROR level."""
        if self.level >= LogLevel.ERROR:
            self._log(LogLevel.ERROR, self._decorate(fmt), args)

    def warning(self, fmt: str, *args: Any) -> None:
        """Log a message at WARNING level."""
        if self.level >= LogLevel.WARNING:
            self._log(LogLevel.WARNING, self._decorate(fmt), args)

    def notice(self, fmt: str, *args: Any) -> None:
        """Log a message at NOTICE level."""
        if self.level >= LogLevel.NOTICE:
            self._log(LogLevel.NOTICE, self._decorate(fmt), args)

    def info(self, fmt: str, *args: Any) -> None:
        """Log a message at INFO level."""
        if self.level >= LogLevel.INFO:
            self._log(LogLevel.INFO, self._decorate(fmt), args)

    def debug(self, fmt: str, *args: Any) -> None:
        """Log a message at DEBUG level."""
        if self.level >= LogLevel.DEBUG:
            self._log(LogLevel.DEBUG, self._decorate(fmt), args)


class PrefixedLogger(Logger):
    """A logger that puts a bracketed prefix such as [key=value] before every message."""

    def __init__(
        self,
        name: str,
        level: LogLevel = LogLevel.INFO,
        handler: Handler | None = None,
        call_depth: int = 0,
        prefix: str = "",
    ) -> None:
        super().__init__(name, level, handler, call_depth)
        self.prefix = prefix

    def new(self, *prefixes: Any) -> PrefixedLogger:
        """Return a logger whose prefix extends this one's."""
        return _with_prefix(self, self.prefix, prefixes)

    def _decorate(self, fmt: str) -> str:
        return self.prefix + " " + fmt


def _with_prefix(base: Logger, initial: str, prefixes: tuple) -> PrefixedLogger:
    parts: list[str] = []
    connector = ""
    for prefix in prefixes:
        parts.append(f"{connector}{prefix}")
        connector = "][" if connector == "=" else "="
    return PrefixedLogger(
        base.name,
        base.level,
        base.handler,
        base.call_depth,
        prefix=initial + "[" + "".join(parts) + "]",
    )


def new_logger(name: str, level: LogLevel = LogLevel.INFO) -> Logger:
    """Return a logger writing to standard output."""
    return Logger(name, level, WriterHandler(sys.stdout, level))