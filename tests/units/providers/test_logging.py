"""Unit tests for the LoggingProvider."""

import logging

from date_converter.providers.logging import LOGGER_NAME, ContextualFilter, LoggingProvider, _log_context


def test_contextual_filter_with_invocation_id() -> None:
    """Tests that the filter adds the invocation_id to the record when it's set."""
    contextual_filter = ContextualFilter()
    record = logging.LogRecord("test", logging.INFO, "", 0, "", (), None)

    with LoggingProvider().set_invocation_id("test-id"):
        contextual_filter.filter(record)

    assert record.invocation_id == "test-id"


def test_contextual_filter_without_invocation_id() -> None:
    """Tests that the filter adds a default value when invocation_id is not set."""
    if hasattr(_log_context, "invocation_id"):
        del _log_context.invocation_id

    contextual_filter = ContextualFilter()
    record = logging.LogRecord("test", logging.INFO, "", 0, "", (), None)

    contextual_filter.filter(record)

    assert record.invocation_id == "-"


def test_invocation_id_is_cleared_on_exit() -> None:
    """Tests that leaving the context removes the invocation ID."""
    with LoggingProvider().set_invocation_id("test-id"):
        pass

    record = logging.LogRecord("test", logging.INFO, "", 0, "", (), None)
    ContextualFilter().filter(record)

    assert record.invocation_id == "-"


def test_logging_provider_is_singleton() -> None:
    """Tests that every instantiation returns the same provider."""
    assert LoggingProvider() is LoggingProvider()


def test_get_logger_returns_package_logger() -> None:
    """Tests that the configured logger is the package logger."""
    logger = LoggingProvider().get_logger()

    assert logger.name == LOGGER_NAME
    assert any(isinstance(f, ContextualFilter) for f in logger.filters)


def test_get_logger_level_override() -> None:
    """Tests that a level override replaces the configured level."""
    logger = LoggingProvider().get_logger()
    original_level = logger.level
    try:
        LoggingProvider().get_logger(level_override="debug")
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(original_level)
