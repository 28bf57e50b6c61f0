import pytest
from hypothesis import given
from hypothesis import strategies as st

from wellknown.calendar import DateTime
from wellknown.rfc3339 import (
    parse_char,
    parse_char_ignore_case,
    parse_date,
    parse_digits,
    parse_nanos,
    parse_offset,
    parse_time,
    parse_two_digit_numeric,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("123abc", ("123", "abc")),
        ("abc", ("", "abc")),
        ("2020", ("2020", "")),
        ("", ("", "")),
    ],
)
def test_parse_digits(text, expected):
    assert parse_digits(text) == expected


@given(st.text(alphabet="0123456789-+.:Zz ", max_size=20))
def test_parse_digits_splits_whole_input(text):
    digits, rest = parse_digits(text)
    assert digits + rest == text
    assert all(c in "0123456789" for c in digits)
    assert rest == "" or rest[0] not in "0123456789"


def test_parse_char():
    assert parse_char("-01", "-") == "01"
    assert parse_char("01", "-") is None
    assert parse_char("", "-") is None


def test_parse_char_ignore_case():
    assert parse_char_ignore_case("z", "Z") == ""
    assert parse_char_ignore_case("Tfoo", "t") == "foo"
    assert parse_char_ignore_case("x", "Z") is None
    assert parse_char_ignore_case("", "Z") is None


def test_parse_two_digit_numeric():
    assert parse_two_digit_numeric("07:30") == (7, ":30")
    assert parse_two_digit_numeric("99") == (99, "")


@pytest.mark.parametrize("text", ["1", "", "+1", "-1", "a1", "1a"])
def test_parse_two_digit_numeric_rejects(text):
    with pytest.raises(ValueError):
        parse_two_digit_numeric(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", (0, "")),
        ("Z", (0, "Z")),
        (".52Z", (520_000_000, "Z")),
        (".123456789", (123_456_789, "")),
        (".000000009s", (9, "s")),
        (".050s", (50_000_000, "s")),
        (
            ".1666666666666666666666666666666666660404z",
            (166_666_666, "z"),
        ),
    ],
)
def test_parse_nanos(text, expected):
    assert parse_nanos(text) == expected


def test_parse_nanos_requires_digits_after_point():
    with pytest.raises(ValueError):
        parse_nanos(".s")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1985-04-12T23:20:50.52Z", (1985, 4, 12, "T23:20:50.52Z")),
        ("1937-01-01", (1937, 1, 1, "")),
        ("-0008-01-01", (-8, 1, 1, "")),
        ("+19370-01-01", (19370, 1, 1, "")),
        ("1900-01-10", (1900, 1, 10, "")),
        ("+292277026596-12-04", (292_277_026_596, 12, 4, "")),
    ],
)
def test_parse_date(text, expected):
    assert parse_date(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        "-11111111-z",
        "19+1-+2-+3T+4:+5:+6Z",
        "1937-01",
        "+1937-01-01",
        "-008-01-01xx",
        "1937/01/01",
        "+99999999999999999999-01-01",
    ],
)
def test_parse_date_rejects(text):
    with pytest.raises(ValueError):
        parse_date(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("23:20:50.52Z", (23, 20, 50, 520_000_000, "Z")),
        ("16:39:57-08:00", (16, 39, 57, 0, "-08:00")),
        ("23:59:60Z", (23, 59, 60, 0, "Z")),
        ("00:47:19.591 Z", (0, 47, 19, 591_000_000, " Z")),
    ],
)
def test_parse_time(text, expected):
    assert parse_time(text) == expected


@pytest.mark.parametrize("text", ["+4:+5:+6Z", "12-00-00", "12:00", "12:00:0"])
def test_parse_time_rejects(text):
    with pytest.raises(ValueError):
        parse_time(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", (0, 0, "")),
        ("Z", (0, 0, "")),
        ("z", (0, 0, "")),
        (" Z", (0, 0, "")),
        ("-08:00", (-8, 0, "")),
        ("-08", (-8, 0, "")),
        ("+00:20", (0, 20, "")),
        (" +0800", (8, 0, "")),
        ("-05:30", (-5, -30, "")),
        ("Zrest", (0, 0, "rest")),
    ],
)
def test_parse_offset(text, expected):
    assert parse_offset(text) == expected


@pytest.mark.parametrize("text", ["+24:00", "+08:60", "08:00", "+8", "+08:0", "x"])
def test_parse_offset_rejects(text):
    with pytest.raises(ValueError):
        parse_offset(text)


@given(
    st.integers(min_value=-(2**40), max_value=2**40),
    st.integers(min_value=0, max_value=999_999_999),
)
def test_formatted_date_time_parses_back(seconds, nanos):
    date_time = DateTime.from_timestamp(seconds, nanos)
    text = str(date_time)

    year, month, day, rest = parse_date(text)
    assert (year, month, day) == (date_time.year, date_time.month, date_time.day)

    rest = parse_char_ignore_case(rest, "T")
    hour, minute, second, parsed_nanos, rest = parse_time(rest)
    assert (hour, minute, second, parsed_nanos) == (
        date_time.hour,
        date_time.minute,
        date_time.second,
        date_time.nanos,
    )
    assert parse_offset(rest) == (0, 0, "")