"""Unit tests for the DateFormatter."""

from datetime import date

import pytest
from date_converter.exceptions.conversion import FormatError, ParseError, PatternError
from date_converter.models.enums import ResolverStyle
from date_converter.providers.formatter import DateFormatter

APRIL_5 = date(2018, 4, 5)


def fmt(pattern: str, value: date = APRIL_5) -> str:
    """Formats a date with a freshly compiled pattern."""
    return DateFormatter.of_pattern(pattern).format(value)


def parse(text: str, pattern: str, style: ResolverStyle = ResolverStyle.STRICT) -> date:
    """Parses text with a freshly compiled pattern."""
    return DateFormatter.of_pattern(pattern, style).parse(text)


def test_iso_local_date_formats_and_parses() -> None:
    """Tests the default ISO formatter."""
    assert DateFormatter.ISO_LOCAL_DATE.pattern == "uuuu-MM-dd"
    assert DateFormatter.ISO_LOCAL_DATE.format(APRIL_5) == "2018-04-05"
    assert DateFormatter.ISO_LOCAL_DATE.parse("2018-04-05") == APRIL_5


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("yyyy/MM/dd", "2018/04/05"),
        ("yyyy年MM月dd日", "2018年04月05日"),
        ("uuuu年MM月dd日 (E)", "2018年04月05日 (Thu)"),
        ("EEEE, MMMM d, uuuu", "Thursday, April 5, 2018"),
        ("MMM", "Apr"),
        ("MMMMM", "A"),
        ("M/d/yy", "4/5/18"),
        ("y", "2018"),
        ("yyyyy", "02018"),
        ("D", "95"),
        ("DDD", "095"),
        ("Q QQ QQQ QQQQ", "2 02 Q2 2nd quarter"),
        ("G GGGG GGGGG", "AD Anno Domini A"),
        ("e ee eee cccc", "4 04 Thu Thursday"),
        ("YYYY-'W'ww-e", "2018-W14-4"),
        ("W F", "1 1"),
        ("uuuu''", "2018'"),
    ],
)
def test_format_patterns(pattern: str, expected: str) -> None:
    """Tests formatting of every date field presentation."""
    assert fmt(pattern) == expected


def test_format_small_year_is_zero_padded() -> None:
    """Tests that years below 1000 are padded to the letter count."""
    assert fmt("uuuu-MM-dd", date(5, 1, 1)) == "0005-01-01"


def test_format_week_based_year_at_year_end() -> None:
    """Tests that the week-based year differs from the calendar year around new year."""
    assert fmt("yyyy YYYY-'W'ww-e", date(2018, 12, 31)) == "2018 2019-W01-1"


def test_format_week_of_month() -> None:
    """Tests ISO week of month, where a short leading week is week 0."""
    assert fmt("W", date(2018, 4, 1)) == "0"
    assert fmt("W", date(2018, 4, 2)) == "1"
    assert fmt("F", date(2018, 4, 15)) == "3"


def test_format_time_field_raises_format_error() -> None:
    """Tests that time fields cannot be formatted from a date."""
    with pytest.raises(FormatError) as exc_info:
        fmt("uuuu-MM-dd HH:mm")
    assert exc_info.value.field == "HourOfDay"
    assert exc_info.value.pattern == "uuuu-MM-dd HH:mm"


def test_format_zone_field_raises_format_error() -> None:
    """Tests that offset fields cannot be formatted from a date."""
    with pytest.raises(FormatError, match="OffsetSeconds"):
        fmt("uuuu-MM-ddXXX")


def test_format_optional_section_is_omitted_when_unavailable() -> None:
    """Tests that an optional section with time fields is skipped."""
    assert fmt("uuuu-MM-dd[ HH:mm]") == "2018-04-05"
    assert fmt("uuuu[-MM]") == "2018-04"


def test_format_pad() -> None:
    """Tests that pads right-align and reject overlong values."""
    assert fmt("ppd") == " 5"
    with pytest.raises(FormatError, match="exceeds pad width of 1"):
        fmt("pd", date(2018, 4, 15))


@pytest.mark.parametrize(
    ("text", "pattern", "expected"),
    [
        ("2018/04/05", "yyyy/MM/dd", APRIL_5),
        ("20180405", "yyyyMMdd", APRIL_5),
        ("2018年04月05日", "yyyy年MM月dd日", APRIL_5),
        ("18/04/05", "yy/MM/dd", APRIL_5),
        ("99-12-31", "yy-MM-dd", date(2099, 12, 31)),
        ("4/5/2018", "M/d/uuuu", APRIL_5),
        ("April 5, 2018", "MMMM d, uuuu", APRIL_5),
        ("Apr 05 2018", "MMM dd uuuu", APRIL_5),
        ("2018/04/05 (Thu)", "yyyy/MM/dd (E)", APRIL_5),
        ("AD 2018-04-05", "G yyyy-MM-dd", APRIL_5),
        ("2018-095", "uuuu-DDD", APRIL_5),
        ("2018-W14-4", "YYYY-'W'ww-e", APRIL_5),
        ("2018-04-05 10:30", "uuuu-MM-dd HH:mm", APRIL_5),
        ("2018-04-05T10:30:00+09:00", "uuuu-MM-dd'T'HH:mm:ssXXX", APRIL_5),
        ("2018-04-05", "uuuu-MM-dd[ HH:mm]", APRIL_5),
        ("2018-04-05 23:59", "uuuu-MM-dd[ HH:mm]", APRIL_5),
        ("2018-04- 5", "uuuu-MM-ppd", APRIL_5),
    ],
)
def test_parse_patterns(text: str, pattern: str, expected: date) -> None:
    """Tests parsing of the supported field presentations."""
    assert parse(text, pattern) == expected


@pytest.mark.parametrize(
    ("text", "pattern"),
    [
        ("2018-4-5", "uuuu-MM-dd"),
        ("2018-04-05x", "uuuu-MM-dd"),
        ("2018-13-01", "uuuu-MM-dd"),
        ("2018-00-10", "uuuu-MM-dd"),
        ("2018-04-31", "uuuu-MM-dd"),
        ("0000-01-01", "uuuu-MM-dd"),
        ("２０１８-04-05", "uuuu-MM-dd"),
        ("april 5, 2018", "MMMM d, uuuu"),
        ("2018/04/05 (Fri)", "yyyy/MM/dd (E)"),
        ("2018-04-05 Q1", "uuuu-MM-dd QQQ"),
        ("2018-366", "uuuu-DDD"),
        ("2018-04", "uuuu-MM"),
        ("2018-04-05 25:00", "uuuu-MM-dd HH:mm"),
        ("2018-04-5", "uuuu-MM-ppd"),
        ("2018-W54-1", "YYYY-'W'ww-e"),
    ],
)
def test_parse_failures_raise_parse_error(text: str, pattern: str) -> None:
    """Tests that mismatching or impossible input is rejected."""
    with pytest.raises(ParseError) as exc_info:
        parse(text, pattern)
    assert exc_info.value.text == text
    assert exc_info.value.pattern == pattern


def test_parse_impossible_date_message() -> None:
    """Tests that a non-existent date is reported by month and day."""
    with pytest.raises(ParseError, match="Invalid date 'FEBRUARY 30'"):
        DateFormatter.ISO_LOCAL_DATE.parse("2018-02-30")


def test_parse_smart_resolver_clamps_day() -> None:
    """Tests that SMART resolution moves an overflowing day to the month end."""
    assert parse("2018/02/30", "uuuu/MM/dd", ResolverStyle.SMART) == date(2018, 2, 28)
    assert parse("2016/02/31", "uuuu/MM/dd", ResolverStyle.SMART) == date(2016, 2, 29)
    with pytest.raises(ParseError):
        parse("2018/02/32", "uuuu/MM/dd", ResolverStyle.SMART)
    with pytest.raises(ParseError):
        parse("2018/13/01", "uuuu/MM/dd", ResolverStyle.SMART)


def test_parse_lenient_resolver_rolls_over() -> None:
    """Tests that LENIENT resolution carries overflowing fields forward."""
    assert parse("2018/13/01", "uuuu/MM/dd", ResolverStyle.LENIENT) == date(2019, 1, 1)
    assert parse("2018/02/30", "uuuu/MM/dd", ResolverStyle.LENIENT) == date(2018, 3, 2)
    assert parse("2018/00/00", "uuuu/MM/dd", ResolverStyle.LENIENT) == date(2017, 11, 30)
    assert parse("2018-400", "uuuu-DDD", ResolverStyle.LENIENT) == date(2019, 2, 4)


def test_parse_rejects_non_string() -> None:
    """Tests that only text can be parsed."""
    with pytest.raises(TypeError):
        DateFormatter.ISO_LOCAL_DATE.parse(APRIL_5)  # type: ignore[arg-type]


def test_parse_error_is_a_value_error() -> None:
    """Tests that callers guarding ValueError also catch parse failures."""
    with pytest.raises(ValueError):
        DateFormatter.ISO_LOCAL_DATE.parse("not a date")


def test_of_pattern_caches_formatters() -> None:
    """Tests that compiling the same pattern twice returns the same formatter."""
    assert DateFormatter.of_pattern("dd.MM.uuuu") is DateFormatter.of_pattern("dd.MM.uuuu")
    assert DateFormatter.of_pattern("dd.MM.uuuu") is not DateFormatter.of_pattern("dd.MM.uuuu", "smart")


def test_of_pattern_propagates_pattern_error() -> None:
    """Tests that malformed patterns fail at compile time."""
    with pytest.raises(PatternError):
        DateFormatter.of_pattern("notapattern!!")


def test_of_pattern_rejects_unknown_resolver_style() -> None:
    """Tests that only the three resolver styles are accepted."""
    with pytest.raises(ValueError):
        DateFormatter.of_pattern("uuuu", "bogus")


def test_with_resolver_style() -> None:
    """Tests that the copy keeps the pattern and switches the style."""
    smart = DateFormatter.ISO_LOCAL_DATE.with_resolver_style(ResolverStyle.SMART)
    assert smart.pattern == "uuuu-MM-dd"
    assert smart.resolver_style is ResolverStyle.SMART
    assert smart != DateFormatter.ISO_LOCAL_DATE
    assert smart.with_resolver_style("STRICT") == DateFormatter.ISO_LOCAL_DATE


def test_describe_and_repr() -> None:
    """Tests the human readable forms of a formatter."""
    formatter = DateFormatter.of_pattern("yyyy/MM/dd")
    assert formatter.describe() == "YearOfEra(yyyy)'/'MonthOfYear(MM)'/'DayOfMonth(dd)"
    assert repr(formatter) == "DateFormatter(pattern='yyyy/MM/dd', resolver_style=STRICT)"
    assert hash(formatter) == hash(DateFormatter.of_pattern("yyyy/MM/dd"))
