"""Conversions between date strings, `datetime.date` values and database dates."""

from date_converter.exceptions.conversion import DateConversionError, FormatError, ParseError, PatternError
from date_converter.models.enums import ResolverStyle, TextStyle
from date_converter.providers.formatter import DateFormatter
from date_converter.services.converter import LocalDateConverter

__all__ = [
    "DateConversionError",
    "DateFormatter",
    "FormatError",
    "LocalDateConverter",
    "ParseError",
    "PatternError",
    "ResolverStyle",
    "TextStyle",
]
