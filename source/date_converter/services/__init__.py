"""This module initializes the services package.

It re-exports the converter so callers can import it from the package root.
"""

from date_converter.services.converter import LocalDateConverter

__all__ = [
    "LocalDateConverter",
]
