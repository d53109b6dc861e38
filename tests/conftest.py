import os

import pytest
from _pytest.nodes import Item


def pytest_collection_modifyitems(items: list[Item]) -> None:
    """Dynamically adds markers to tests based on their file path.

    Args:
        items: A list of test items collected by pytest.
    """
    for item in items:
        if "units" in item.path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integrations" in item.path.parts:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(scope="session", autouse=True)
def quiet_logging() -> None:
    """Configures the package logger once, before any command is invoked.

    Informational lines are kept out of captured command output, and the
    handler is bound to the session's stderr rather than a runner's
    temporary stream.
    """
    os.environ["LOG_LEVEL"] = "WARNING"

    from date_converter.providers.logging import LoggingProvider

    LoggingProvider().get_logger()
