"""Namespaced logging setup for the translation client.

Every module asks ``LoggerUtils.get_logger(__name__)`` for its logger so that all
records end up below a single namespace root logger. Handlers are attached to that
root only once, by constructing ``LoggerUtils`` from the entry point.
"""

from __future__ import annotations

import logging
import sys
import warnings
from logging import Formatter, NullHandler, StreamHandler
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, ClassVar, Final, Self, TextIO

if TYPE_CHECKING:
    from pathlib import Path

__all__: list[str] = ["LoggerUtils"]

_LOG_FILE_SIZE: Final[int] = 2 * 1024 * 1024  # 2MB
_LOG_BACKUP_COUNT: Final[int] = 2

DEFAULT_LOG_LEVEL: Final[int] = logging.INFO
DEFAULT_NAMESPACE: Final[str] = "CloudTranslation"


class LoggerUtils:
    """Singleton that configures the namespace root logger.

    Console output goes to stderr at WARNING or above. When a file name is given,
    a rotating UTF-8 log file receives everything from DEBUG upwards.

    Attributes:
        _LOGGER_NAMESPACE (str): Name of the namespace root logger.
        _configured (bool): Whether handlers have already been attached.
        _instance (LoggerUtils | None): The singleton instance.
    """

    _LOGGER_NAMESPACE: ClassVar[str] = DEFAULT_NAMESPACE
    _configured: ClassVar[bool] = False
    _instance: ClassVar[Self | None] = None

    def __new__(cls, *args, **kwargs) -> Self:
        """Create or reuse the singleton instance.

        Extra args/kwargs are accepted to mirror ``__init__``.

        Returns:
            Self: The singleton instance of LoggerUtils.
        """
        _ = args, kwargs
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, filename: str | Path = "", *, debug: bool = False, use_null_console: bool = False) -> None:
        """Attach console and file handlers to the namespace root logger.

        Does nothing when the logger has already been configured.

        Args:
            filename (str | Path): Absolute path of the log file. Empty disables file logging.
            debug (bool): Start at DEBUG level instead of INFO.
            use_null_console (bool): Use a NullHandler instead of writing to stderr.
        """
        if LoggerUtils._configured:
            return

        self.root_logger: logging.Logger = logging.getLogger(self._LOGGER_NAMESPACE)
        self._use_null_console: bool = bool(use_null_console) or sys.stderr is None
        filename = str(filename)
        # handler levels filter on top of this, so it must be the lowest of them
        self.root_logger.setLevel(logging.DEBUG if debug else DEFAULT_LOG_LEVEL)

        self._console_logging()
        if filename.strip():
            self._file_logging(filename)

        warnings.showwarning = self.warning_to_log
        LoggerUtils._configured = True

    def warning_to_log(
        self,
        message: Warning | str,
        category: type[Warning],
        filename: str,
        lineno: int,
        file: TextIO | None = None,
        line: str | None = None,
    ) -> None:
        """Convert warnings to log messages.

        Installed as ``warnings.showwarning`` so warnings reach the log instead of stderr.

        Args:
            message (Warning | str): The warning message or Warning instance.
            category (type[Warning]): The category (class) of the warning.
            filename (str): The name of the file where the warning occurred.
            lineno (int): The line number where the warning occurred.
            file (TextIO | None): File object to write warning (unused).
            line (str | None): Source code line (unused).
        """
        _ = file, line
        self.root_logger.warning("%s:%d: %s: %s", filename, lineno, category.__name__, message)

    def _console_logging(self) -> None:
        """Configure log output to the console.

        Only WARNING and above reach stderr, prefixed with the level name.
        """
        if self._use_null_console:
            if not self._has_handler(NullHandler):
                self.root_logger.addHandler(NullHandler())
            return

        if self._has_handler(StreamHandler):
            self.root_logger.warning("Console logging is already configured.")
            return

        console_handler: StreamHandler[TextIO] = StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(Formatter("%(levelname)s: %(message)s"))
        self.root_logger.addHandler(console_handler)

    def _file_logging(self, filename: str) -> None:
        """Configure log output to a file.

        Uses a UTF-8 RotatingFileHandler so the log does not grow without bound.

        Args:
            filename (str): Absolute path to the log file.
        """
        if self._has_handler(RotatingFileHandler):
            self.root_logger.warning("File logging is already configured.")
            return

        try:
            file_handler = RotatingFileHandler(
                filename=filename,
                maxBytes=_LOG_FILE_SIZE,
                backupCount=_LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        except (FileNotFoundError, PermissionError):
            self.root_logger.error("Incorrect log file name: %s\nLogging to the file is not performed.", filename)
            return

        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            Formatter("%(asctime)s %(levelname)-8s %(lineno)4d %(name)-48s\t%(funcName)s\t%(message)s")
        )
        self.root_logger.addHandler(file_handler)

    def _has_handler(self, handler_type: type) -> bool:
        """Check if a handler of exactly the specified type is already configured.

        RotatingFileHandler is a StreamHandler subclass, so subclasses do not count.

        Args:
            handler_type (type): The type of handler to check for.

        Returns:
            bool: True if such a handler exists, False otherwise.
        """
        return any(type(h) is handler_type for h in self.root_logger.handlers)

    @classmethod
    def reset(cls) -> None:
        """Detach all handlers and forget the singleton. Intended for tests."""
        root_logger: logging.Logger = logging.getLogger(cls._LOGGER_NAMESPACE)
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()
        root_logger.setLevel(logging.NOTSET)
        cls._instance = None
        cls._configured = False

    @staticmethod
    def get_logger(name: str | None = None) -> logging.Logger:
        """Get a logger below the namespace root.

        Args:
            name (str | None): The name of the logger, usually ``__name__``.
                               If None, the namespace root logger is returned.

        Returns:
            logging.Logger: The logger instance.
        """
        if name:
            return logging.getLogger(f"{LoggerUtils._LOGGER_NAMESPACE}.{name}")
        return logging.getLogger(LoggerUtils._LOGGER_NAMESPACE)
