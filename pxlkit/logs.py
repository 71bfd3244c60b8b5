"""Level-filtered log dispatching to pluggable handlers."""

from __future__ import annotations

import sys
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import IntEnum
from typing import Any, ClassVar, TextIO


class LogLevel(IntEnum):
    """Severity of a log message, from most to least verbose."""

    ALL = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERROR = 4
    NONE = 5


def log_level_from_int(value: int) -> LogLevel:
    """Map an integer to a LogLevel, clamping values outside the known range."""
    if value <= LogLevel.ALL:
        return LogLevel.ALL
    if value >= LogLevel.NONE:
        return LogLevel.NONE
    return LogLevel(value)


def log_level_name(level: LogLevel | int) -> str:
    """The upper-case name of a log level."""
    return LogLevel(level).name


class LogHandler(ABC):
    """Receives log messages from a :class:`LogDispatcher`."""

    @abstractmethod
    def handle(self, level: LogLevel, timestamp: float, module: str, message: str) -> None:
        """Process one message."""


class ConsoleLogHandler(LogHandler):
    """Writes messages to a text stream, optionally restricted to some modules."""

    WARNING_COLOR = "\033[1;33m"
    ERROR_COLOR = "\033[1;31m"
    END_COLOR = "\033[0m"

    def __init__(
        self,
        stream: TextIO | None = None,
        enabled_modules: Iterable[str] = (),
        disabled_modules: Iterable[str] = (),
        color: bool | None = None,
    ) -> None:
        self._stream = stream
        self.enabled_modules = list(enabled_modules)
        self.disabled_modules = list(disabled_modules)
        self._color = color

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _use_color(self) -> bool:
        if self._color is not None:
            return self._color
        isatty = getattr(self.stream, "isatty", None)
        return bool(isatty and isatty())

    def accepts(self, module: str) -> bool:
        """True if messages from ``module`` are written."""
        if self.enabled_modules and module not in self.enabled_modules:
            return False
        return module not in self.disabled_modules

    def handle(self, level: LogLevel, timestamp: float, module: str, message: str) -> None:
        if not self.accepts(module):
            return
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp))
        line = f"{stamp} [{log_level_name(level)}] {module}: {message}"
        if self._use_color():
            if level == LogLevel.WARNING:
                line = f"{self.WARNING_COLOR}{line}{self.END_COLOR}"
            elif level >= LogLevel.ERROR:
                line = f"{self.ERROR_COLOR}{line}{self.END_COLOR}"
        self.stream.write(line + "\n")
        self.stream.flush()


class LogDispatcher:
    """Routes messages to every handler registered at or below their level."""

    _instance: ClassVar[LogDispatcher | None] = None

    def __init__(
        self,
        console_level: LogLevel | None = LogLevel.INFO,
        console_stream: TextIO | None = None,
    ) -> None:
        self._handlers: list[tuple[LogHandler, LogLevel]] = []
        self._lowest = LogLevel.NONE
        self._indent = ""
        self.console_handler = ConsoleLogHandler(console_stream)
        if console_level is not None:
            self.enable_console_log_handler(console_level)

    @property
    def indent(self) -> str:
        return self._indent

    @property
    def lowest_log_level(self) -> LogLevel:
        """The most verbose level any handler wants."""
        return self._lowest

    @property
    def handlers(self) -> list[tuple[LogHandler, LogLevel]]:
        return list(self._handlers)

    def push_indent(self, char: str) -> None:
        """Append one character to the indentation prefixed to messages."""
        self._indent += char

    def pop_indent(self) -> None:
        """Remove the last indentation character."""
        if not self._indent:
            raise IndexError("pop_indent: indentation is empty")
        self._indent = self._indent[:-1]

    def _update_lowest(self) -> None:
        self._lowest = min((level for _, level in self._handlers), default=LogLevel.NONE)

    def set_handler(self, handler: LogHandler, level: LogLevel | int) -> None:
        """Register ``handler`` at ``level``, replacing its level if already registered."""
        level = LogLevel(level)
        for index, (existing, _) in enumerate(self._handlers):
            if existing is handler:
                self._handlers[index] = (handler, level)
                break
        else:
            self._handlers.append((handler, level))
        self._update_lowest()

    def remove_handler(self, handler: LogHandler) -> None:
        """Unregister ``handler``; unknown handlers are ignored."""
        self._handlers = [(h, lvl) for h, lvl in self._handlers if h is not handler]
        self._update_lowest()

    def dispatch(self, level: LogLevel | int, module: str, message: str) -> None:
        """Send a message to every handler whose level admits it."""
        level = LogLevel(level)
        timestamp = time.time()
        for handler, threshold in list(self._handlers):
            if threshold <= level:
                handler.handle(level, timestamp, module, message)

    def disable_console_log_handler(self) -> None:
        self.remove_handler(self.console_handler)

    def enable_console_log_handler(self, level: LogLevel | int) -> None:
        self.set_handler(self.console_handler, level)

    @classmethod
    def instance(cls) -> LogDispatcher:
        """The process-wide dispatcher."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance


class Logger:
    """Sends messages tagged with a module name through a dispatcher."""

    def __init__(self, module: str, dispatcher: LogDispatcher | None = None) -> None:
        self.module = module
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> LogDispatcher:
        return self._dispatcher if self._dispatcher is not None else LogDispatcher.instance()

    def log(self, level: LogLevel | int, message: str) -> None:
        """Dispatch ``message`` if any handler wants ``level``."""
        dispatcher = self.dispatcher
        if dispatcher.lowest_log_level <= level:
            dispatcher.dispatch(level, self.module, dispatcher.indent + message)

    def __call__(self, level: LogLevel | int, *args: Any) -> None:
        """Dispatch the arguments joined by single spaces."""
        dispatcher = self.dispatcher
        if dispatcher.lowest_log_level <= level:
            text = " ".join(str(arg) for arg in args)
            dispatcher.dispatch(level, self.module, dispatcher.indent + text)

    def debug(self, *args: Any) -> None:
        self(LogLevel.DEBUG, *args)

    def info(self, *args: Any) -> None:
        self(LogLevel.INFO, *args)

    def warning(self, *args: Any) -> None:
        self(LogLevel.WARNING, *args)

    def error(self, *args: Any) -> None:
        self(LogLevel.ERROR, *args)