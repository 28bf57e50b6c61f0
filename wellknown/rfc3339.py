"""Parsers for the pieces of an RFC 3339 date-time string.

Each parser consumes a prefix of its input and returns what it read together
with the unconsumed remainder. The character matchers return ``None`` when the
expected character is absent. Every other parser raises ``ValueError`` on
malformed input. Values are not checked against a calendar here.
"""

from __future__ import annotations

_ASCII_DIGITS = frozenset("0123456789")
_I64_MAX = 2**63 - 1
_MAX_FRACTION_DIGITS = 9


def _is_digits(text: str) -> bool:
    return bool(text) and all(c in _ASCII_DIGITS for c in text)


def _parse_i64(digits: str) -> int:
    if not _is_digits(digits):
        raise ValueError(f"expected digits, got {digits!r}")
    value = int(digits)
    if value > _I64_MAX:
        raise ValueError(f"number out of range: {digits}")
    return value


def parse_digits(text: str) -> tuple[str, str]:
    """Split ``text`` at its first character that is not an ASCII digit."""
    for index, c in enumerate(text):
        if c not in _ASCII_DIGITS:
            return text[:index], text[index:]
    return text, ""


def parse_char(text: str, char: str) -> str | None:
    """Consume ``char`` from the start of ``text``, or return None if it is not there."""
    if text[:1] == char:
        return text[1:]
    return None


def parse_char_ignore_case(text: str, char: str) -> str | None:
    """Consume ``char`` from the start of ``text`` ignoring ASCII case, or return None."""
    if text and text[0].lower() == char.lower():
        return text[1:]
    return None


def parse_two_digit_numeric(text: str) -> tuple[int, str]:
    """Read a two-digit decimal number from the start of ``text``."""
    if len(text) < 2:
        raise ValueError(f"expected two digits, got {text!r}")
    digits, rest = text[:2], text[2:]
    if not _is_digits(digits):
        raise ValueError(f"expected two digits, got {digits!r}")
    return int(digits), rest


def parse_nanos(text: str) -> tuple[int, str]:
    """Read an optional fraction of a second, returning nanoseconds.

    Digits past the ninth are read but discarded.
    """
    rest = parse_char(text, ".")
    if rest is None:
        return 0, text
    digits, rest = parse_digits(rest)
    if not digits:
        raise ValueError("expected digits after the decimal point")
    digits = digits[:_MAX_FRACTION_DIGITS]
    return 10 ** (_MAX_FRACTION_DIGITS - len(digits)) * int(digits), rest


def parse_date(text: str) -> tuple[int, int, int, str]:
    """Read ``YYYY-MM-DD`` (or a signed, extended year) into year, month and day."""
    if len(text) < 10:
        raise ValueError(f"date too short: {text!r}")

    if text[0] == "+":
        digits, rest = parse_digits(text[1:])
        if len(digits) < 5:
            raise ValueError("a year with a '+' sign needs at least five digits")
        year = _parse_i64(digits)
    elif text[0] == "-":
        digits, rest = parse_digits(text[1:])
        if len(digits) < 4:
            raise ValueError("a year with a '-' sign needs at least four digits")
        year = -_parse_i64(digits)
    else:
        high, rest = parse_two_digit_numeric(text)
        low, rest = parse_two_digit_numeric(rest)
        year = high * 100 + low

    month, rest = parse_two_digit_numeric(_expect(rest, "-"))
    day, rest = parse_two_digit_numeric(_expect(rest, "-"))
    return year, month, day, rest


def parse_time(text: str) -> tuple[int, int, int, int, str]:
    """Read ``HH:MM:SS[.fraction]`` into hour, minute, second and nanoseconds."""
    hour, rest = parse_two_digit_numeric(text)
    minute, rest = parse_two_digit_numeric(_expect(rest, ":"))
    second, rest = parse_two_digit_numeric(_expect(rest, ":"))
    nanos, rest = parse_nanos(rest)
    return hour, minute, second, nanos, rest


def parse_offset(text: str) -> tuple[int, int, str]:
    """Read a time-zone offset into signed hours and minutes.

    An empty string means UTC. A single leading space is allowed, as are an
    offset without minutes and an offset without a colon.
    """
    if not text:
        return 0, 0, text

    spaced = parse_char(text, " ")
    if spaced is not None:
        text = spaced

    rest = parse_char_ignore_case(text, "Z")
    if rest is not None:
        return 0, 0, rest

    rest = parse_char(text, "+")
    if rest is not None:
        sign = 1
    else:
        rest = parse_char(text, "-")
        if rest is None:
            raise ValueError(f"expected a time-zone offset, got {text!r}")
        sign = -1

    hour, rest = parse_two_digit_numeric(rest)
    if rest:
        colon = parse_char(rest, ":")
        if colon is not None:
            rest = colon
        minute, rest = parse_two_digit_numeric(rest)
    else:
        minute = 0

    if hour >= 24 or minute >= 60:
        raise ValueError(f"offset out of range: {hour:02d}:{minute:02d}")

    return sign * hour, sign * minute, rest


def _expect(text: str, char: str) -> str:
    rest = parse_char(text, char)
    if rest is None:
        raise ValueError(f"expected {char!r}, got {text[:1]!r}")
    return rest