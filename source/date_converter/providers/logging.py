"""This module sets up a centralized, context-aware logging system.

It provides a `LoggingProvider` singleton that configures and dispenses the
`date_converter` logger. The `ContextualFilter` uses thread-local storage to
inject an `invocation_id` into every log message, so all lines emitted by a
single CLI invocation can be grouped together.
"""

from __future__ import annotations

import sys
import threading
from collections.abc import Generator
from contextlib import contextmanager
from logging import Filter, Formatter, Logger, LogRecord, StreamHandler, _nameToLevel, getLogger

from date_converter.providers.config import ConfigProvider

LOGGER_NAME = "date_converter"

_log_context = threading.local()


class ContextualFilter(Filter):
    """A logging filter that makes the invocation ID available to the log formatter."""

    def filter(self, record: LogRecord) -> bool:
        """Adds the invocation ID to the log record from thread-local context.

        Args:
            record: The log record to be filtered.

        Returns:
            Always True to ensure the log record is processed.
        """
        record.invocation_id = getattr(_log_context, "invocation_id", None) or "-"
        return True


class LoggingProvider:
    """Provides a configured logger instance for the application.

    This class uses a Singleton pattern so the logger is configured exactly
    once, based on settings from the config provider.
    """

    _instance: LoggingProvider | None = None
    _logger: Logger | None = None
    _is_configured: bool = False

    def __new__(cls) -> LoggingProvider:
        """Implements the Singleton pattern.

        Returns:
            The singleton instance of the LoggingProvider.
        """
        if not cls._instance:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _configure_logger(self) -> Logger:
        """Configures the logger. This is called only once.

        Returns:
            The configured logger instance.
        """
        logger = getLogger(LOGGER_NAME)

        if self._is_configured:  # pragma: no cover
            return logger

        config = ConfigProvider.get_config()
        log_level_str = config.LOG_LEVEL
        logger.setLevel(_nameToLevel.get(log_level_str.upper(), _nameToLevel["INFO"]))

        if not logger.handlers:
            handler = StreamHandler(sys.stderr)
            formatter = Formatter(
                "%(asctime)s - %(name)s - [%(levelname)s] [%(invocation_id)s] - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            logger.addFilter(ContextualFilter())

        self._is_configured = True
        logger.debug(f"Logger configured with level: {log_level_str}")
        return logger

    def get_logger(self, level_override: str | None = None) -> Logger:
        """Returns the configured logger instance.

        The logger is configured lazily on first use, which keeps module
        imports free of side effects.

        Args:
            level_override: A level name that replaces the configured level.

        Returns:
            The configured logger instance.
        """
        if not self._logger:
            self._logger = self._configure_logger()
        if level_override:
            self._logger.setLevel(_nameToLevel[level_override.upper()])
        return self._logger

    @contextmanager
    def set_invocation_id(self, invocation_id: str) -> Generator[None, None, None]:
        """A context manager to set and automatically clear the invocation ID.

        Args:
            invocation_id: The invocation ID to set for the context.

        Yields:
            None.
        """
        try:
            _log_context.invocation_id = invocation_id
            yield
        finally:
            _log_context.invocation_id = None
