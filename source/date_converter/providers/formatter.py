"""This module provides the compiled date formatter.

A `DateFormatter` is built once from a pattern string and can then format
`datetime.date` values and parse text back into them. Parsing works in two
stages: the tokens are turned into an anchored regular expression whose
groups capture each field, then the captured values are resolved into a
single calendar date according to the formatter's resolver style. Week
related fields follow ISO-8601 rules (weeks start on Monday, the first week
of a period holds at least four days) and text fields use English names.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, timedelta
from functools import lru_cache
from logging import getLogger
from typing import ClassVar

from date_converter.exceptions.conversion import FormatError, ParseError
from date_converter.models.enums import Field, ResolverStyle, TextStyle
from date_converter.providers.pattern import (
    FieldToken,
    LiteralToken,
    OptionalToken,
    PadToken,
    Token,
    compile_pattern,
)

logger = getLogger(__name__)

MONTH_NAMES: dict[TextStyle, tuple[str, ...]] = {
    TextStyle.FULL: (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
    TextStyle.SHORT: ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    TextStyle.NARROW: ("J", "F", "M", "A", "M", "J", "J", "A", "S", "O", "N", "D"),
}

DAY_NAMES: dict[TextStyle, tuple[str, ...]] = {
    TextStyle.FULL: ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    TextStyle.SHORT: ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    TextStyle.NARROW: ("M", "T", "W", "T", "F", "S", "S"),
}

ERA_NAMES: dict[TextStyle, tuple[str, ...]] = {
    TextStyle.FULL: ("Before Christ", "Anno Domini"),
    TextStyle.SHORT: ("BC", "AD"),
    TextStyle.NARROW: ("B", "A"),
}

QUARTER_NAMES: dict[TextStyle, tuple[str, ...]] = {
    TextStyle.FULL: ("1st quarter", "2nd quarter", "3rd quarter", "4th quarter"),
    TextStyle.SHORT: ("Q1", "Q2", "Q3", "Q4"),
    TextStyle.NARROW: ("1", "2", "3", "4"),
}

AMPM_NAMES = ("AM", "PM")
DAY_PERIOD_NAMES = ("midnight", "noon", "in the morning", "in the afternoon", "in the evening", "at night")

REDUCED_YEAR_BASE = 2000
MIN_YEAR = date.min.year
MAX_YEAR = date.max.year

_NUMERIC_REGEX: dict[str, dict[int, str]] = {
    "M": {1: r"\d{1,2}", 2: r"\d{2}"},
    "L": {1: r"\d{1,2}", 2: r"\d{2}"},
    "d": {1: r"\d{1,2}", 2: r"\d{2}"},
    "D": {1: r"\d{1,3}", 2: r"\d{2,3}", 3: r"\d{3}"},
    "Q": {1: r"\d", 2: r"\d{2}"},
    "q": {1: r"\d", 2: r"\d{2}"},
    "w": {1: r"\d{1,2}", 2: r"\d{2}"},
    "W": {1: r"\d"},
    "F": {1: r"\d"},
    "e": {1: r"\d", 2: r"\d{2}"},
    "c": {1: r"\d"},
    "h": {1: r"\d{1,2}", 2: r"\d{2}"},
    "K": {1: r"\d{1,2}", 2: r"\d{2}"},
    "k": {1: r"\d{1,2}", 2: r"\d{2}"},
    "H": {1: r"\d{1,2}", 2: r"\d{2}"},
    "m": {1: r"\d{1,2}", 2: r"\d{2}"},
    "s": {1: r"\d{1,2}", 2: r"\d{2}"},
}

_TIME_RANGES: dict[str, tuple[int, int]] = {
    "h": (1, 12),
    "K": (0, 11),
    "k": (1, 24),
    "H": (0, 23),
    "m": (0, 59),
    "s": (0, 59),
    "A": (0, 86_399_999),
    "n": (0, 999_999_999),
    "N": (0, 86_399_999_999_999),
}

_OFFSET_REGEX = r"[+-]\d{2}(?::?\d{2}(?::?\d{2})?)?"

_ZONE_REGEX: dict[str, str] = {
    "V": r"[A-Za-z][A-Za-z0-9~/._+\-]*",
    "v": r"[A-Za-z][A-Za-z0-9/_+\-: ]*?",
    "z": r"[A-Za-z][A-Za-z0-9/_+\-: ]*?",
    "O": r"GMT(?:[+-]\d{1,2}(?::\d{2}(?::\d{2})?)?)?",
    "X": rf"Z|{_OFFSET_REGEX}",
    "x": _OFFSET_REGEX,
}


class _FieldUnavailable(Exception):
    """Signals that a date-only value cannot supply a field."""

    def __init__(self, field: Field):
        """Initializes the signal.

        Args:
            field: The field that could not be supplied.
        """
        super().__init__(str(field))
        self.field = field


def _text_style(count: int) -> TextStyle:
    """Maps a letter count to the text width it requests.

    Args:
        count: The number of repeated pattern letters.

    Returns:
        SHORT for up to three letters, FULL for four and NARROW for five.
    """
    if count == 4:
        return TextStyle.FULL
    if count == 5:
        return TextStyle.NARROW
    return TextStyle.SHORT


def _week_of_month(value: date) -> int:
    """Computes the ISO week of month, where a leading partial week counts as week 0.

    Args:
        value: The date.

    Returns:
        The week of month.
    """
    offset = value.replace(day=1).weekday()
    week = (value.day - 1 + offset) // 7
    return week + 1 if offset <= 3 else week


def _aligned_week_of_month(value: date) -> int:
    """Computes the week of month counted in blocks of seven days from the first.

    Args:
        value: The date.

    Returns:
        The aligned week of month, from 1 to 5.
    """
    return (value.day - 1) // 7 + 1


def _quarter(value: date) -> int:
    """Returns the quarter of year, from 1 to 4."""
    return (value.month - 1) // 3 + 1


def _format_year(year: int, count: int) -> str:
    """Formats a year value for the given letter count.

    Args:
        year: The year.
        count: The number of repeated pattern letters.

    Returns:
        The two low-order digits for a count of two, else the year zero-padded to the count.
    """
    if count == 2:
        return f"{year % 100:02d}"
    return str(year).zfill(count)


def _format_field(token: FieldToken, value: date) -> str:
    """Formats a single field of a date.

    Args:
        token: The field token.
        value: The date to read the field from.

    Returns:
        The formatted field.

    Raises:
        _FieldUnavailable: If the field is a time or zone field.
    """
    letter, count = token.letter, token.count

    if not token.field.is_date_based:
        raise _FieldUnavailable(token.field)

    if letter == "G":
        return ERA_NAMES[_text_style(count)][1]
    if letter in "uy":
        return _format_year(value.year, count)
    if letter == "Y":
        return _format_year(value.isocalendar()[0], count)
    if letter in "ML":
        if count <= 2:
            return str(value.month).zfill(count)
        return MONTH_NAMES[_text_style(count)][value.month - 1]
    if letter in "Qq":
        if count <= 2:
            return str(_quarter(value)).zfill(count)
        return QUARTER_NAMES[_text_style(count)][_quarter(value) - 1]
    if letter == "E":
        return DAY_NAMES[_text_style(count)][value.weekday()]
    if letter in "ec":
        if count <= 2:
            return str(value.isoweekday()).zfill(count)
        return DAY_NAMES[_text_style(count)][value.weekday()]

    numbers = {
        "d": value.day,
        "D": value.timetuple().tm_yday,
        "w": value.isocalendar()[1],
        "W": _week_of_month(value),
        "F": _aligned_week_of_month(value),
    }
    return str(numbers[letter]).zfill(count)


def _text_choices(names: tuple[str, ...]) -> dict[str, int]:
    """Builds a name to value lookup, keeping the first value of ambiguous names.

    Args:
        names: The names, in value order starting at 1.

    Returns:
        A mapping from each name to its 1-based position.
    """
    choices: dict[str, int] = {}
    for position, name in enumerate(names, start=1):
        choices.setdefault(name, position)
    return choices


def _text_lookup(token: FieldToken) -> dict[str, int] | None:
    """Returns the text values a token parses, or None for numeric presentations.

    Args:
        token: The field token.

    Returns:
        A mapping from accepted text to field value, or None.
    """
    letter, count = token.letter, token.count
    style = _text_style(count)

    if letter == "G":
        return {name: era for era, name in enumerate(ERA_NAMES[style])}
    if letter in "ML" and count >= 3:
        return _text_choices(MONTH_NAMES[style])
    if letter in "Qq" and count >= 3:
        return _text_choices(QUARTER_NAMES[style])
    if letter == "E" or (letter in "ec" and count >= 3):
        return _text_choices(DAY_NAMES[style])
    if letter == "a":
        return {name: ampm for ampm, name in enumerate(AMPM_NAMES)}
    if letter == "B":
        return {name: period for period, name in enumerate(DAY_PERIOD_NAMES)}
    return None


def _field_regex(token: FieldToken) -> str:
    """Builds the regular expression matching one field.

    Args:
        token: The field token.

    Returns:
        A regular expression without capturing groups.
    """
    letter, count = token.letter, token.count

    lookup = _text_lookup(token)
    if lookup is not None:
        return "|".join(re.escape(name) for name in sorted(lookup, key=len, reverse=True))

    if letter in "uyY":
        if count == 1:
            return r"\d+"
        if count == 2:
            return r"\d{2}"
        if count == 3:
            return r"\d{3,}"
        return rf"\d{{{count}}}|\+\d{{{count + 1},}}"
    if letter == "S":
        return rf"\d{{{count}}}"
    if letter == "n":
        return r"\d{1,9}"
    if letter in "AN":
        return r"\d{1,19}"
    if letter == "Z":
        if count <= 3:
            return r"[+-]\d{4}"
        if count == 4:
            return r"GMT(?:[+-]\d{2}:\d{2}(?::\d{2})?)?"
        return r"Z|[+-]\d{2}:\d{2}(?::\d{2})?"
    if letter in _ZONE_REGEX:
        return _ZONE_REGEX[letter]
    return _NUMERIC_REGEX[letter][count]


class DateFormatter:
    """An immutable, compiled date pattern.

    Instances are obtained through `of_pattern`, which caches compiled
    formatters, or `ISO_LOCAL_DATE` for the `uuuu-MM-dd` default.
    """

    __slots__ = ("_pattern", "_tokens", "_resolver_style", "_regex", "_groups")

    ISO_LOCAL_DATE: ClassVar[DateFormatter]

    def __init__(
        self,
        pattern: str,
        tokens: tuple[Token, ...],
        resolver_style: ResolverStyle = ResolverStyle.STRICT,
    ):
        """Initializes the formatter from already compiled tokens.

        Args:
            pattern: The source pattern.
            tokens: The tokens `compile_pattern` produced for the pattern.
            resolver_style: How parsed fields are resolved into a date.
        """
        self._pattern = pattern
        self._tokens = tokens
        self._resolver_style = ResolverStyle(resolver_style)
        self._groups: dict[str, FieldToken | PadToken] = {}
        self._regex = re.compile(self._build_regex(tokens), re.ASCII)

    @classmethod
    def of_pattern(cls, pattern: str, resolver_style: ResolverStyle | str = ResolverStyle.STRICT) -> DateFormatter:
        """Compiles a pattern into a formatter.

        Args:
            pattern: The pattern, for example `yyyy/MM/dd`.
            resolver_style: How parsed fields are resolved into a date.

        Returns:
            The compiled formatter.

        Raises:
            PatternError: If the pattern is malformed.
        """
        return _cached_formatter(pattern, ResolverStyle(str(resolver_style).upper()))

    @property
    def pattern(self) -> str:
        """The pattern this formatter was compiled from."""
        return self._pattern

    @property
    def tokens(self) -> tuple[Token, ...]:
        """The compiled tokens."""
        return self._tokens

    @property
    def resolver_style(self) -> ResolverStyle:
        """The resolver style used when parsing."""
        return self._resolver_style

    def with_resolver_style(self, resolver_style: ResolverStyle | str) -> DateFormatter:
        """Returns a copy of this formatter that resolves with another style.

        Args:
            resolver_style: The new resolver style.

        Returns:
            A formatter for the same pattern.
        """
        return DateFormatter.of_pattern(self._pattern, resolver_style)

    def describe(self) -> str:
        """Renders the compiled tokens in a human readable form.

        Returns:
            The tokens, concatenated.
        """
        return "".join(str(token) for token in self._tokens)

    def format(self, value: date) -> str:
        """Formats a date.

        Args:
            value: The date to format.

        Returns:
            The formatted text.

        Raises:
            FormatError: If the pattern requests a field a date cannot supply.
        """
        try:
            return self._render(self._tokens, value)
        except _FieldUnavailable as e:
            raise FormatError(f"Unsupported field: {e.field}", self._pattern, field=str(e.field)) from None

    def parse(self, text: str) -> date:
        """Parses text into a date.

        Args:
            text: The text to parse. The whole text must match the pattern.

        Returns:
            The parsed date.

        Raises:
            ParseError: If the text does not match or does not describe a valid date.
        """
        if not isinstance(text, str):
            raise TypeError(f"Text must be a string, got {type(text).__name__}")

        match = self._regex.fullmatch(text)
        if match is None:
            raise ParseError(f"does not match pattern '{self._pattern}'", text, self._pattern)

        try:
            return self._resolve(match)
        except ParseError:
            raise
        except (ValueError, OverflowError) as e:
            raise ParseError(str(e), text, self._pattern) from e

    def _render(self, tokens: tuple[Token, ...], value: date) -> str:
        """Renders tokens for a date.

        Args:
            tokens: The tokens to render.
            value: The date.

        Returns:
            The rendered text.

        Raises:
            _FieldUnavailable: If a field outside an optional section is unavailable.
            FormatError: If a padded element is wider than its pad.
        """
        parts: list[str] = []
        for token in tokens:
            if isinstance(token, LiteralToken):
                parts.append(token.text)
            elif isinstance(token, FieldToken):
                parts.append(_format_field(token, value))
            elif isinstance(token, PadToken):
                rendered = self._render((token.token,), value)
                if len(rendered) > token.width:
                    raise FormatError(
                        f"Cannot print as output of {len(rendered)} characters exceeds pad width of {token.width}",
                        self._pattern,
                    )
                parts.append(rendered.rjust(token.width))
            else:
                try:
                    parts.append(self._render(token.tokens, value))
                except _FieldUnavailable:
                    continue
        return "".join(parts)

    def _build_regex(self, tokens: tuple[Token, ...]) -> str:
        """Builds the regular expression source for a token sequence.

        Each field and pad gets a named group; the group names are recorded
        in `_groups` so `_resolve` can find the token for each capture.

        Args:
            tokens: The tokens.

        Returns:
            The regular expression source.
        """
        parts: list[str] = []
        for token in tokens:
            if isinstance(token, LiteralToken):
                parts.append(re.escape(token.text))
            elif isinstance(token, FieldToken):
                name = f"f{len(self._groups)}"
                self._groups[name] = token
                parts.append(f"(?P<{name}>{_field_regex(token)})")
            elif isinstance(token, PadToken):
                name = f"p{len(self._groups)}"
                self._groups[name] = token
                inner = self._build_regex((token.token,))
                parts.append(f"(?P<{name}> *{inner})")
            else:
                parts.append(f"(?:{self._build_regex(token.tokens)})?")
        return "".join(parts)

    def _resolve(self, match: re.Match[str]) -> date:
        """Resolves the captured fields of a match into a date.

        Args:
            match: A successful full match of the pattern regex.

        Returns:
            The resolved date.

        Raises:
            ParseError: If the fields are inconsistent or insufficient.
            ValueError: If a value is out of range.
        """
        text = match.string
        values: dict[str, int] = {}

        for name, token in self._groups.items():
            captured = match.group(name)
            if captured is None:
                continue
            if isinstance(token, PadToken):
                if len(captured) != token.width:
                    raise ParseError(f"padded value '{captured}' is not {token.width} characters wide", text, self._pattern)
                continue
            self._store(values, token, captured, text)

        resolved = self._resolve_date(values, text)
        self._cross_check(values, resolved, text)
        return resolved

    def _store(self, values: dict[str, int], token: FieldToken, captured: str, text: str) -> None:
        """Converts a captured field and records it under its canonical key.

        Args:
            values: The parsed values collected so far.
            token: The field token that captured the text.
            captured: The captured text.
            text: The whole text, for error reporting.

        Raises:
            ParseError: If the field was already parsed with a different value.
            ValueError: If a time value is out of range.
        """
        letter, count = token.letter, token.count

        lookup = _text_lookup(token)
        if lookup is not None:
            value = lookup[captured]
        elif letter in _ZONE_REGEX or letter == "Z":
            return
        else:
            value = int(captured)

        if letter in "uyY" and count == 2:
            value += REDUCED_YEAR_BASE

        if letter in _TIME_RANGES:
            low, high = _TIME_RANGES[letter]
            if not low <= value <= high:
                raise ValueError(f"Invalid value for {token.field} (valid values {low} - {high}): {value}")
            return
        if not token.field.is_date_based:
            return

        key = {"L": "M", "q": "Q", "c": "e", "E": "e"}.get(letter, letter)
        previous = values.get(key)
        if previous is not None and previous != value:
            raise ParseError(f"Conflict found: {token.field} {previous} differs from {value}", text, self._pattern)
        values[key] = value

    def _year(self, values: dict[str, int], text: str) -> int | None:
        """Works out the proleptic year from the year, year-of-era and era fields.

        Args:
            values: The parsed values.
            text: The whole text, for error reporting.

        Returns:
            The year, or None if no year field was parsed.

        Raises:
            ParseError: If the year fields disagree.
        """
        year = values.get("u")
        year_of_era = values.get("y")
        if year_of_era is not None:
            from_era = year_of_era if values.get("G", 1) == 1 else 1 - year_of_era
            if year is not None and year != from_era:
                raise ParseError(f"Conflict found: Year {year} differs from YearOfEra {year_of_era}", text, self._pattern)
            year = from_era
        if year is not None and not MIN_YEAR <= year <= MAX_YEAR:
            raise ValueError(f"Invalid value for Year (valid values {MIN_YEAR} - {MAX_YEAR}): {year}")
        return year

    def _resolve_date(self, values: dict[str, int], text: str) -> date:
        """Combines parsed fields into a date according to the resolver style.

        Args:
            values: The parsed values.
            text: The whole text, for error reporting.

        Returns:
            The resolved date.

        Raises:
            ParseError: If no supported combination of fields was parsed.
            ValueError: If the fields do not form a valid date.
        """
        style = self._resolver_style
        year = self._year(values, text)
        month, day, day_of_year = values.get("M"), values.get("d"), values.get("D")

        if year is not None and month is not None and day is not None:
            if style is ResolverStyle.LENIENT:
                years, month_index = divmod(year * 12 + month - 1, 12)
                return date(years, month_index + 1, 1) + timedelta(days=day - 1)
            if not 1 <= month <= 12:
                raise ValueError(f"Invalid value for MonthOfYear (valid values 1 - 12): {month}")
            if not 1 <= day <= 31:
                raise ValueError(f"Invalid value for DayOfMonth (valid values 1 - 28/31): {day}")
            month_length = calendar.monthrange(year, month)[1]
            if day > month_length:
                if style is ResolverStyle.SMART:
                    return date(year, month, month_length)
                raise ValueError(f"Invalid date '{MONTH_NAMES[TextStyle.FULL][month - 1].upper()} {day}'")
            return date(year, month, day)

        if year is not None and day_of_year is not None:
            if style is ResolverStyle.LENIENT:
                return date(year, 1, 1) + timedelta(days=day_of_year - 1)
            year_length = 366 if calendar.isleap(year) else 365
            if not 1 <= day_of_year <= year_length:
                raise ValueError(f"Invalid date 'DayOfYear {day_of_year}' for year {year}")
            return date(year, 1, 1) + timedelta(days=day_of_year - 1)

        week_based_year, week, day_of_week = values.get("Y"), values.get("w"), values.get("e")
        if week_based_year is not None and week is not None and day_of_week is not None:
            if style is ResolverStyle.LENIENT:
                return date.fromisocalendar(week_based_year, 1, 1) + timedelta(weeks=week - 1, days=day_of_week - 1)
            return date.fromisocalendar(week_based_year, week, day_of_week)

        raise ParseError("Unable to obtain a date from the parsed fields", text, self._pattern)

    def _cross_check(self, values: dict[str, int], resolved: date, text: str) -> None:
        """Verifies that every parsed field agrees with the resolved date.

        Args:
            values: The parsed values.
            resolved: The resolved date.
            text: The whole text, for error reporting.

        Raises:
            ParseError: If a parsed field contradicts the date.
        """
        iso_year, iso_week, iso_weekday = resolved.isocalendar()
        expected = {
            "G": 1,
            "Y": iso_year,
            "Q": _quarter(resolved),
            "w": iso_week,
            "W": _week_of_month(resolved),
            "F": _aligned_week_of_month(resolved),
            "e": iso_weekday,
        }
        if self._resolver_style is not ResolverStyle.LENIENT:
            expected["M"] = resolved.month
            expected["D"] = resolved.timetuple().tm_yday
            if self._resolver_style is ResolverStyle.STRICT:
                expected["d"] = resolved.day

        for key, actual in expected.items():
            parsed = values.get(key)
            if parsed is not None and parsed != actual:
                raise ParseError(
                    f"Conflict found: parsed value {parsed} for '{key}' differs from {actual} in {resolved.isoformat()}",
                    text,
                    self._pattern,
                )

    def __eq__(self, other: object) -> bool:
        """Formatters are equal when they share pattern and resolver style."""
        if not isinstance(other, DateFormatter):
            return NotImplemented
        return (self._pattern, self._resolver_style) == (other._pattern, other._resolver_style)

    def __hash__(self) -> int:
        """Hashes the pattern and resolver style."""
        return hash((self._pattern, self._resolver_style))

    def __repr__(self) -> str:
        """Returns a developer friendly representation."""
        return f"DateFormatter(pattern={self._pattern!r}, resolver_style={self._resolver_style.value})"


@lru_cache(maxsize=256)
def _cached_formatter(pattern: str, resolver_style: ResolverStyle) -> DateFormatter:
    """Compiles and caches a formatter.

    Args:
        pattern: The pattern.
        resolver_style: The resolver style.

    Returns:
        The compiled formatter.
    """
    tokens = compile_pattern(pattern)
    logger.debug(f"Compiled date pattern {pattern!r} into {len(tokens)} tokens.")
    return DateFormatter(pattern, tokens, resolver_style)


DateFormatter.ISO_LOCAL_DATE = DateFormatter("uuuu-MM-dd", compile_pattern("uuuu-MM-dd"), ResolverStyle.STRICT)
