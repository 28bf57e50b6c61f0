"""Proleptic Gregorian calendar arithmetic for UTC date-times.

Converts between seconds since the Unix epoch and broken-down calendar
values over the whole signed 64-bit range of seconds.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

_NANOS_PER_SECOND = 1_000_000_000
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_SECONDS_PER_DAY = 86_400
# 2000-03-01, the start of a 400-year cycle immediately after a leap day.
_LEAPOCH = 946_684_800 + _SECONDS_PER_DAY * (31 + 29)
_DAYS_PER_400Y = 365 * 400 + 97
_DAYS_PER_100Y = 365 * 100 + 24
_DAYS_PER_4Y = 365 * 4 + 1
# Month lengths starting from March.
_DAYS_IN_MONTH_FROM_MARCH = (31, 30, 31, 30, 31, 31, 30, 31, 30, 31, 31, 29)
_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_SECONDS_THROUGH_MONTH = tuple(
    days * _SECONDS_PER_DAY
    for days in (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)
)


def _trunc_div(value: int, divisor: int) -> int:
    """Integer division rounding towards zero."""
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


def _normalize(seconds: int, nanos: int) -> tuple[int, int]:
    """Bring nanos into [0, 1e9), clamping at the 64-bit seconds limits."""
    if not -_NANOS_PER_SECOND < nanos < _NANOS_PER_SECOND:
        carry = _trunc_div(nanos, _NANOS_PER_SECOND)
        shifted = seconds + carry
        if _I64_MIN <= shifted <= _I64_MAX:
            seconds = shifted
            nanos -= carry * _NANOS_PER_SECOND
        elif nanos < 0:
            return _I64_MIN, 0
        else:
            return _I64_MAX, _NANOS_PER_SECOND - 1
    if nanos < 0:
        if seconds > _I64_MIN:
            seconds -= 1
            nanos += _NANOS_PER_SECOND
        else:
            nanos = 0
    return seconds, nanos


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range: {month}")


def year_to_seconds(year: int) -> tuple[int, bool]:
    """Return the epoch offset in seconds of the start of ``year`` and whether it is a leap year."""
    year -= 1900

    if 1 <= year <= 138:
        leaps = (year - 68) >> 2
        is_leap = (year - 68) % 4 == 0
        if is_leap:
            leaps -= 1
        return 31_536_000 * (year - 70) + _SECONDS_PER_DAY * leaps, is_leap

    cycles, rem = divmod(year - 100, 400)
    if rem == 0:
        is_leap = True
        centuries = 0
        leaps = 0
    else:
        centuries, rem = divmod(rem, 100)
        if rem == 0:
            is_leap = False
            leaps = 0
        else:
            leaps, rem = divmod(rem, 4)
            is_leap = rem == 0
    leaps += 97 * cycles + 24 * centuries - int(is_leap)

    seconds = (
        (year - 100) * 31_536_000
        + leaps * _SECONDS_PER_DAY
        + 946_684_800
        + _SECONDS_PER_DAY
    )
    return seconds, is_leap


def month_to_seconds(month: int, is_leap: bool) -> int:
    """Return the number of seconds in the year before the start of ``month``."""
    _check_month(month)
    seconds = _SECONDS_THROUGH_MONTH[month - 1]
    if is_leap and month > 2:
        seconds += _SECONDS_PER_DAY
    return seconds


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``."""
    _check_month(month)
    _, is_leap = year_to_seconds(year)
    return _DAYS_IN_MONTH[month - 1] + int(is_leap and month == 2)


@dataclass(frozen=True, order=True)
class DateTime:
    """A point in time as a UTC calendar date and time of day."""

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    nanos: int = 0

    MIN: ClassVar[DateTime]
    MAX: ClassVar[DateTime]

    def is_valid(self) -> bool:
        """Return True if this is a real calendar date within the representable range."""
        return (
            DateTime.MIN <= self <= DateTime.MAX
            and 1 <= self.month <= 12
            and 1 <= self.day <= days_in_month(self.year, self.month)
            and 0 <= self.hour < 24
            and 0 <= self.minute < 60
            and 0 <= self.second < 60
            and 0 <= self.nanos < _NANOS_PER_SECOND
        )

    @classmethod
    def from_timestamp(cls, seconds: int, nanos: int) -> DateTime:
        """Build the date-time for a (possibly unnormalized) epoch timestamp."""
        if not _I64_MIN <= seconds <= _I64_MAX:
            raise ValueError(f"seconds out of range: {seconds}")
        seconds, nanos = _normalize(seconds, nanos)

        days, remsecs = divmod(seconds, _SECONDS_PER_DAY)
        days -= _LEAPOCH // _SECONDS_PER_DAY

        qc_cycles, remdays = divmod(days, _DAYS_PER_400Y)

        c_cycles = min(remdays // _DAYS_PER_100Y, 3)
        remdays -= c_cycles * _DAYS_PER_100Y

        q_cycles = min(remdays // _DAYS_PER_4Y, 24)
        remdays -= q_cycles * _DAYS_PER_4Y

        remyears = min(remdays // 365, 3)
        remdays -= remyears * 365

        years = remyears + 4 * q_cycles + 100 * c_cycles + 400 * qc_cycles

        months = 0
        for length in _DAYS_IN_MONTH_FROM_MARCH:
            if length > remdays:
                break
            remdays -= length
            months += 1

        if months >= 10:
            months -= 12
            years += 1

        return cls(
            year=years + 2000,
            month=months + 3,
            day=remdays + 1,
            hour=remsecs // 3600,
            minute=remsecs // 60 % 60,
            second=remsecs % 60,
            nanos=nanos,
        )

    def to_seconds(self) -> int:
        """Return the offset in whole seconds from the Unix epoch."""
        start_of_year, is_leap = year_to_seconds(self.year)
        return (
            start_of_year
            + month_to_seconds(self.month, is_leap)
            + _SECONDS_PER_DAY * (self.day - 1)
            + 3600 * self.hour
            + 60 * self.minute
            + self.second
        )

    def __str__(self) -> str:
        if self.year > 9999:
            year = f"+{self.year}"
        elif self.year < 0:
            year = f"{self.year:05d}"
        else:
            year = f"{self.year:04d}"

        text = (
            f"{year}-{self.month:02d}-{self.day:02d}"
            f"T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        )

        nanos = self.nanos
        if nanos == 0:
            return f"{text}Z"
        if nanos % 1_000_000 == 0:
            return f"{text}.{nanos // 1_000_000:03d}Z"
        if nanos % 1_000 == 0:
            return f"{text}.{nanos // 1_000:06d}Z"
        return f"{text}.{nanos:09d}Z"


DateTime.MIN = DateTime(
    year=-292_277_022_657, month=1, day=27, hour=8, minute=29, second=52, nanos=0
)
DateTime.MAX = DateTime(
    year=292_277_026_596,
    month=12,
    day=4,
    hour=15,
    minute=30,
    second=7,
    nanos=999_999_999,
)