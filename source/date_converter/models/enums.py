"""This module defines the enumerations shared by the pattern machinery."""

from enum import StrEnum


class ResolverStyle(StrEnum):
    """Controls how parsed fields are combined into a calendar date."""

    STRICT = "STRICT"
    SMART = "SMART"
    LENIENT = "LENIENT"

    def __str__(self) -> str:
        """Returns the string representation of the enum member.

        Returns:
            The string representation of the enum member.
        """
        return self.value


class TextStyle(StrEnum):
    """The width used to render or parse a textual field."""

    FULL = "FULL"
    SHORT = "SHORT"
    NARROW = "NARROW"

    def __str__(self) -> str:
        """Returns the string representation of the enum member."""
        return self.value


class Field(StrEnum):
    """The temporal fields a pattern letter can refer to.

    The value is the human readable name used in error messages.
    """

    ERA = "Era"
    YEAR = "Year"
    YEAR_OF_ERA = "YearOfEra"
    WEEK_BASED_YEAR = "WeekBasedYear"
    MONTH_OF_YEAR = "MonthOfYear"
    DAY_OF_MONTH = "DayOfMonth"
    DAY_OF_YEAR = "DayOfYear"
    QUARTER_OF_YEAR = "QuarterOfYear"
    WEEK_OF_WEEK_BASED_YEAR = "WeekOfWeekBasedYear"
    WEEK_OF_MONTH = "WeekOfMonth"
    ALIGNED_WEEK_OF_MONTH = "AlignedWeekOfMonth"
    DAY_OF_WEEK = "DayOfWeek"
    LOCALIZED_DAY_OF_WEEK = "LocalizedDayOfWeek"
    AMPM_OF_DAY = "AmPmOfDay"
    DAY_PERIOD = "DayPeriod"
    CLOCK_HOUR_OF_AMPM = "ClockHourOfAmPm"
    HOUR_OF_AMPM = "HourOfAmPm"
    CLOCK_HOUR_OF_DAY = "ClockHourOfDay"
    HOUR_OF_DAY = "HourOfDay"
    MINUTE_OF_HOUR = "MinuteOfHour"
    SECOND_OF_MINUTE = "SecondOfMinute"
    FRACTION_OF_SECOND = "FractionOfSecond"
    MILLI_OF_DAY = "MilliOfDay"
    NANO_OF_SECOND = "NanoOfSecond"
    NANO_OF_DAY = "NanoOfDay"
    ZONE_ID = "ZoneId"
    ZONE_NAME = "ZoneName"
    OFFSET = "OffsetSeconds"

    def __str__(self) -> str:
        """Returns the string representation of the enum member."""
        return self.value

    @property
    def is_date_based(self) -> bool:
        """Whether a date-only value can supply this field.

        Returns:
            True if the field is derived from a calendar date, False otherwise.
        """
        return self in _DATE_BASED_FIELDS


_DATE_BASED_FIELDS = frozenset(
    {
        Field.ERA,
        Field.YEAR,
        Field.YEAR_OF_ERA,
        Field.WEEK_BASED_YEAR,
        Field.MONTH_OF_YEAR,
        Field.DAY_OF_MONTH,
        Field.DAY_OF_YEAR,
        Field.QUARTER_OF_YEAR,
        Field.WEEK_OF_WEEK_BASED_YEAR,
        Field.WEEK_OF_MONTH,
        Field.ALIGNED_WEEK_OF_MONTH,
        Field.DAY_OF_WEEK,
        Field.LOCALIZED_DAY_OF_WEEK,
    }
)
