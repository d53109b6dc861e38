"""This module defines the exceptions raised while converting dates.

Every failure surfaces immediately at the call that caused it. Parsing and
pattern errors also derive from `ValueError` so callers that already guard
`datetime.date.fromisoformat` keep working unchanged.
"""


class DateConversionError(Exception):
    """Base exception for every error raised by the date converter."""

    pass


class PatternError(DateConversionError, ValueError):
    """Raised when a pattern string is not a valid formatting pattern."""

    def __init__(self, message: str, pattern: str):
        """Initializes the error.

        Args:
            message: A description of what is wrong with the pattern.
            pattern: The offending pattern string.
        """
        super().__init__(message)
        self.pattern = pattern


class ParseError(DateConversionError, ValueError):
    """Raised when a text cannot be interpreted as a calendar date."""

    def __init__(self, message: str, text: str, pattern: str | None = None):
        """Initializes the error.

        Args:
            message: A description of why the text could not be parsed.
            text: The text that was being parsed.
            pattern: The pattern the text was parsed against, if any.
        """
        super().__init__(f"Text '{text}' could not be parsed: {message}")
        self.text = text
        self.pattern = pattern


class FormatError(DateConversionError):
    """Raised when a valid pattern cannot be applied to a date-only value."""

    def __init__(self, message: str, pattern: str, field: str | None = None):
        """Initializes the error.

        Args:
            message: A description of why formatting failed.
            pattern: The pattern that was being applied.
            field: The name of the field that could not be supplied, if any.
        """
        super().__init__(message)
        self.pattern = pattern
        self.field = field
