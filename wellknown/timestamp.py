"""The ``google.protobuf.Timestamp`` well-known type."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import ClassVar

from wellknown.calendar import DateTime
from wellknown.rfc3339 import (
    parse_char,
    parse_char_ignore_case,
    parse_date,
    parse_offset,
    parse_time,
)

_NANOS_PER_SECOND = 1_000_000_000
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class TimestampError(ValueError):
    """Base class for errors raised while handling timestamps."""


class TimestampParseError(TimestampError):
    """The text is not a valid RFC 3339 timestamp."""

    def __init__(self, message: str = "failed to parse RFC-3339 formatted timestamp"):
        super().__init__(message)


class InvalidDateTimeError(TimestampError):
    """The date or time values do not form a representable point in time."""

    def __init__(self, message: str = "invalid date or time"):
        super().__init__(message)


class OutOfSystemRangeError(TimestampError):
    """The timestamp cannot be represented as a ``datetime``."""

    def __init__(self, timestamp: Timestamp):
        self.timestamp = timestamp
        super().__init__(
            f"{timestamp} is not representable as a datetime because it is out of range"
        )


class TimestampOverflowError(TimestampError):
    """Normalizing the timestamp would overflow its seconds."""

    def __init__(self, timestamp: Timestamp):
        self.timestamp = timestamp
        super().__init__(f"{timestamp!r} cannot be normalized without overflow")


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


@dataclass
class Timestamp:
    """A point in time as seconds and nanoseconds since the Unix epoch, in UTC."""

    seconds: int = 0
    nanos: int = 0

    PACKAGE: ClassVar[str] = "google.protobuf"
    NAME: ClassVar[str] = "Timestamp"

    def __post_init__(self) -> None:
        if not _I64_MIN <= self.seconds <= _I64_MAX:
            raise ValueError(f"seconds out of range: {self.seconds}")
        if not _I32_MIN <= self.nanos <= _I32_MAX:
            raise ValueError(f"nanos out of range: {self.nanos}")

    def normalize(self) -> None:
        """Bring nanos into ``[0, 999_999_999]`` in place, saturating on overflow."""
        if not -_NANOS_PER_SECOND < self.nanos < _NANOS_PER_SECOND:
            carry = _trunc_div(self.nanos, _NANOS_PER_SECOND)
            shifted = self.seconds + carry
            if _I64_MIN <= shifted <= _I64_MAX:
                self.seconds = shifted
                self.nanos -= carry * _NANOS_PER_SECOND
            elif self.nanos < 0:
                self.seconds = _I64_MIN
                self.nanos = 0
            else:
                self.seconds = _I64_MAX
                self.nanos = _NANOS_PER_SECOND - 1

        if self.nanos < 0:
            if self.seconds > _I64_MIN:
                self.seconds -= 1
                self.nanos += _NANOS_PER_SECOND
            else:
                self.nanos = 0

    def normalized(self) -> Timestamp:
        """Return a normalized copy."""
        result = copy.copy(self)
        result.normalize()
        return result

    def try_normalize(self) -> Timestamp:
        """Return a normalized copy, raising if normalization would saturate."""
        result = self.normalized()
        if result.seconds in (_I64_MIN, _I64_MAX) and result.seconds != self.seconds:
            raise TimestampOverflowError(copy.copy(self))
        return result

    @classmethod
    def date(cls, year: int, month: int, day: int) -> Timestamp:
        """Create a timestamp at the start of the given UTC date."""
        return cls.date_time_nanos(year, month, day, 0, 0, 0, 0)

    @classmethod
    def date_time(
        cls, year: int, month: int, day: int, hour: int, minute: int, second: int
    ) -> Timestamp:
        """Create a timestamp from a UTC date and time of day."""
        return cls.date_time_nanos(year, month, day, hour, minute, second, 0)

    @classmethod
    def date_time_nanos(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        nanos: int,
    ) -> Timestamp:
        """Create a timestamp from a UTC date, time of day and nanoseconds."""
        return cls.from_date_time(
            DateTime(
                year=year,
                month=month,
                day=day,
                hour=hour,
                minute=minute,
                second=second,
                nanos=nanos,
            )
        )

    @classmethod
    def from_date_time(cls, date_time: DateTime) -> Timestamp:
        """Convert a calendar date-time, raising InvalidDateTimeError if it is not valid."""
        if not date_time.is_valid():
            raise InvalidDateTimeError()
        return cls(seconds=date_time.to_seconds(), nanos=date_time.nanos)

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        """Convert a ``datetime``; a naive value is taken to be in UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        return cls(
            seconds=delta.days * 86_400 + delta.seconds,
            nanos=delta.microseconds * 1_000,
        )

    def to_datetime(self) -> datetime:
        """Convert to an aware UTC ``datetime``, truncating to microseconds."""
        normal = self.normalized()
        try:
            return _EPOCH + timedelta(
                seconds=normal.seconds, microseconds=normal.nanos // 1_000
            )
        except OverflowError as exc:
            raise OutOfSystemRangeError(copy.copy(self)) from exc

    @classmethod
    def parse(cls, text: str) -> Timestamp:
        """Parse an RFC 3339 timestamp."""
        return parse_timestamp(text)

    @classmethod
    def type_url(cls) -> str:
        """Return the type URL used when packing this message into an ``Any``."""
        return f"type.googleapis.com/{cls.PACKAGE}.{cls.NAME}"

    def __str__(self) -> str:
        return str(DateTime.from_timestamp(self.seconds, self.nanos))


def parse_timestamp(text: str) -> Timestamp:
    """Parse an RFC 3339 timestamp, with a few common extensions.

    A bare date, a space in place of ``T``, a missing offset (UTC), a space
    before the offset and offsets without minutes or colon are all accepted.
    A leap second is rolled back to the previous second.
    """
    if not text.isascii():
        raise TimestampParseError()

    try:
        year, month, day, rest = parse_date(text)
    except ValueError as exc:
        raise TimestampParseError() from exc

    if not rest:
        try:
            return Timestamp.from_date_time(DateTime(year=year, month=month, day=day))
        except InvalidDateTimeError as exc:
            raise TimestampParseError() from exc

    after_separator = parse_char_ignore_case(rest, "T")
    if after_separator is None:
        after_separator = parse_char(rest, " ")
    if after_separator is None:
        raise TimestampParseError()

    try:
        hour, minute, second, nanos, rest = parse_time(after_separator)
        offset_hour, offset_minute, rest = parse_offset(rest)
    except ValueError as exc:
        raise TimestampParseError() from exc

    if rest:
        raise TimestampParseError()

    if second == 60:
        second = 59

    date_time = DateTime(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        second=second,
        nanos=nanos,
    )
    try:
        local = Timestamp.from_date_time(date_time)
    except InvalidDateTimeError as exc:
        raise TimestampParseError() from exc

    seconds = local.seconds - (offset_hour * 3600 + offset_minute * 60)
    if not _I64_MIN <= seconds <= _I64_MAX:
        raise TimestampParseError()
    return Timestamp(seconds=seconds, nanos=local.nanos)