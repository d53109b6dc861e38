"""This module provides the LocalDateConverter value type.

A converter holds a single, validated calendar date and converts it between
strings, `datetime.date` values and database date values:

    LocalDateConverter.from_string("2018-04-05").to_date()
    LocalDateConverter.from_pattern("2018/04/05", "yyyy/MM/dd").to_string()
    LocalDateConverter.from_string("2018-04-05").to_formatted_string("yyyy年MM月dd日")
    LocalDateConverter.from_sql_date(row.due_date).to_string()

Converters are immutable and are only created through the `from_*` factories
(or `of`, which picks the factory from the argument types). Every failure is
raised to the caller at the point of construction or extraction.
"""

from __future__ import annotations

from datetime import date, datetime
from functools import total_ordering

from date_converter.providers.formatter import DateFormatter
from date_converter.providers.sql_date import SQLDateProvider
from sqlalchemy.sql.expression import BindParameter

_FACTORY_TOKEN = object()


@total_ordering
class LocalDateConverter:
    """An immutable holder of one calendar date with conversions to and from it."""

    __slots__ = ("_date",)

    def __init__(self, value: date, *, _token: object = None):
        """Initializes the converter. Use one of the `from_*` factories instead.

        Args:
            value: The calendar date.
            _token: The private construction token held by the factories.

        Raises:
            TypeError: If called directly rather than through a factory.
        """
        if _token is not _FACTORY_TOKEN:
            raise TypeError("LocalDateConverter cannot be instantiated directly; use one of the from_* factories")
        object.__setattr__(self, "_date", value)

    @classmethod
    def _create(cls, value: date) -> LocalDateConverter:
        """Builds a converter around an already validated date."""
        return cls(value, _token=_FACTORY_TOKEN)

    @classmethod
    def from_string(cls, text: str) -> LocalDateConverter:
        """Creates a converter from an ISO-8601 `uuuu-MM-dd` string.

        Args:
            text: The date, for example `2018-04-05`.

        Returns:
            A new converter.

        Raises:
            ParseError: If the text is not a valid ISO date.
        """
        return cls._create(DateFormatter.ISO_LOCAL_DATE.parse(text))

    @classmethod
    def from_pattern(cls, text: str, pattern: str) -> LocalDateConverter:
        """Creates a converter from a string in a custom pattern.

        Args:
            text: The date text, for example `2018/04/05`.
            pattern: The pattern of the text, for example `yyyy/MM/dd`.

        Returns:
            A new converter.

        Raises:
            PatternError: If the pattern is malformed.
            ParseError: If the text does not match the pattern or is not a valid date.
        """
        return cls.from_formatted_string(text, DateFormatter.of_pattern(pattern))

    @classmethod
    def from_formatted_string(cls, text: str, formatter: DateFormatter) -> LocalDateConverter:
        """Creates a converter from a string using a compiled formatter.

        Args:
            text: The date text.
            formatter: The formatter describing the text.

        Returns:
            A new converter.

        Raises:
            ParseError: If the text does not match the formatter or is not a valid date.
        """
        if not isinstance(formatter, DateFormatter):
            raise TypeError(f"Expected a DateFormatter, got {type(formatter).__name__}")
        return cls._create(formatter.parse(text))

    @classmethod
    def from_date(cls, value: date) -> LocalDateConverter:
        """Creates a converter from a date.

        A `datetime.datetime` is narrowed to its date part.

        Args:
            value: The date.

        Returns:
            A new converter.
        """
        if isinstance(value, datetime):
            return cls._create(value.date())
        if not isinstance(value, date):
            raise TypeError(f"Expected a date, got {type(value).__name__}")
        return cls._create(date(value.year, value.month, value.day))

    @classmethod
    def from_sql_date(cls, value: BindParameter[date] | datetime | date) -> LocalDateConverter:
        """Creates a converter from a database date value.

        Args:
            value: A DATE-typed bind parameter, or a date fetched by a driver.

        Returns:
            A new converter.
        """
        return cls.from_date(SQLDateProvider.from_sql_date(value))

    @classmethod
    def of(cls, value: object, fmt: str | DateFormatter | None = None) -> LocalDateConverter:
        """Creates a converter, picking the factory from the argument types.

        Args:
            value: A string, date, datetime, database date or converter.
            fmt: A pattern or formatter, only allowed when `value` is a string.

        Returns:
            A new converter, or `value` itself when it already is a converter.

        Raises:
            TypeError: If the argument types are not supported.
        """
        if isinstance(value, str):
            if fmt is None:
                return cls.from_string(value)
            if isinstance(fmt, DateFormatter):
                return cls.from_formatted_string(value, fmt)
            if isinstance(fmt, str):
                return cls.from_pattern(value, fmt)
            raise TypeError(f"Expected a pattern or DateFormatter, got {type(fmt).__name__}")

        if fmt is not None:
            raise TypeError("A pattern can only be given together with a string value")
        if isinstance(value, LocalDateConverter):
            return value
        if SQLDateProvider.is_sql_date(value):
            return cls.from_sql_date(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to a date")

    @property
    def date(self) -> date:
        """The held calendar date."""
        return self._date

    def to_string(self) -> str:
        """Returns the date as an ISO-8601 `uuuu-MM-dd` string."""
        return DateFormatter.ISO_LOCAL_DATE.format(self._date)

    def to_formatted_string(self, fmt: str | DateFormatter) -> str:
        """Returns the date formatted with a pattern or a compiled formatter.

        Args:
            fmt: A pattern, for example `yyyy年MM月dd日`, or a formatter.

        Returns:
            The formatted date.

        Raises:
            PatternError: If a pattern is given and it is malformed.
            FormatError: If the pattern requests a field a date cannot supply.
        """
        if isinstance(fmt, str):
            fmt = DateFormatter.of_pattern(fmt)
        if not isinstance(fmt, DateFormatter):
            raise TypeError(f"Expected a pattern or DateFormatter, got {type(fmt).__name__}")
        return fmt.format(self._date)

    def to_date(self) -> date:
        """Returns the held date."""
        return self._date

    def to_sql_date(self) -> BindParameter[date]:
        """Returns the date as a DATE-typed SQLAlchemy bind parameter."""
        return SQLDateProvider.to_sql_date(self._date)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        """Supports patterns as format specs, as in `f"{converter:yyyy/MM/dd}"`."""
        if not format_spec:
            return self.to_string()
        return self.to_formatted_string(format_spec)

    def __repr__(self) -> str:
        return f"LocalDateConverter({self.to_string()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LocalDateConverter):
            return NotImplemented
        return self._date == other._date

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LocalDateConverter):
            return NotImplemented
        return self._date < other._date

    def __hash__(self) -> int:
        return hash(self._date)

    def __reduce__(self) -> tuple[object, tuple[date]]:
        """Pickles the converter through `from_date`."""
        return (LocalDateConverter.from_date, (self._date,))
