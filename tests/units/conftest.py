"""This module contains shared fixtures for all unit tests."""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def unset_date_settings() -> None:
    """Unsets the converter settings for the entire test session.

    This keeps a developer's shell environment from changing the defaults
    the command-line tests rely on.
    """
    os.environ.pop("DATE_RESOLVER_STYLE", None)
    os.environ.pop("DATE_OUTPUT_PATTERN", None)
