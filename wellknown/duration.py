"""The ``google.protobuf.Duration`` well-known type."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from datetime import timedelta
from typing import ClassVar

from wellknown.rfc3339 import parse_char, parse_digits, parse_nanos

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_MAX = _NANOS_PER_SECOND - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class DurationError(ValueError):
    """Base class for errors raised while handling durations."""


class DurationParseError(DurationError):
    """The text is not a valid Protobuf JSON duration."""

    def __init__(self, message: str = "failed to parse duration"):
        super().__init__(message)


class NegativeDurationError(DurationError):
    """A negative duration cannot be converted to the requested type.

    ``magnitude`` holds the absolute value of the offending duration.
    """

    def __init__(self, magnitude: Duration):
        self.magnitude = magnitude
        super().__init__(f"failed to convert negative duration: {magnitude}")


class DurationOutOfRangeError(DurationError):
    """The duration is too large to be represented by the target type."""

    def __init__(self, message: str = "failed to convert duration out of range"):
        super().__init__(message)


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


@dataclass
class Duration:
    """A signed span of time as seconds and nanoseconds."""

    seconds: int = 0
    nanos: int = 0

    PACKAGE: ClassVar[str] = "google.protobuf"
    NAME: ClassVar[str] = "Duration"

    def __post_init__(self) -> None:
        if not _I64_MIN <= self.seconds <= _I64_MAX:
            raise ValueError(f"seconds out of range: {self.seconds}")
        if not _I32_MIN <= self.nanos <= _I32_MAX:
            raise ValueError(f"nanos out of range: {self.nanos}")

    def normalize(self) -> None:
        """Bring nanos into range and give it the sign of seconds, saturating on overflow."""
        if not -_NANOS_PER_SECOND < self.nanos < _NANOS_PER_SECOND:
            carry = _trunc_div(self.nanos, _NANOS_PER_SECOND)
            shifted = self.seconds + carry
            if _I64_MIN <= shifted <= _I64_MAX:
                self.seconds = shifted
                self.nanos -= carry * _NANOS_PER_SECOND
            elif self.nanos < 0:
                self.seconds = _I64_MIN
                self.nanos = -_NANOS_MAX
            else:
                self.seconds = _I64_MAX
                self.nanos = _NANOS_MAX

        if self.seconds < 0 and self.nanos > 0:
            self.seconds += 1
            self.nanos -= _NANOS_PER_SECOND
        elif self.seconds > 0 and self.nanos < 0:
            self.seconds -= 1
            self.nanos += _NANOS_PER_SECOND

    def normalized(self) -> Duration:
        """Return a normalized copy."""
        result = copy.copy(self)
        result.normalize()
        return result

    @classmethod
    def from_timedelta(cls, value: timedelta) -> Duration:
        """Convert a ``timedelta`` into a normalized duration."""
        seconds = value.days * 86_400 + value.seconds
        if not _I64_MIN <= seconds <= _I64_MAX:
            raise DurationOutOfRangeError()
        return cls(seconds=seconds, nanos=value.microseconds * 1_000).normalized()

    def to_timedelta(self) -> timedelta:
        """Convert to a non-negative ``timedelta``, truncating to microseconds.

        Raises NegativeDurationError for a negative duration and
        DurationOutOfRangeError when the value does not fit a ``timedelta``.
        """
        normal = self.normalized()
        if normal.seconds < 0 or normal.nanos < 0:
            raise NegativeDurationError(
                Duration(seconds=-normal.seconds, nanos=-normal.nanos)
                if normal.seconds > _I64_MIN
                else copy.copy(normal)
            )
        try:
            return timedelta(seconds=normal.seconds, microseconds=normal.nanos // 1_000)
        except OverflowError as exc:
            raise DurationOutOfRangeError() from exc

    @classmethod
    def parse(cls, text: str) -> Duration:
        """Parse a duration such as ``"1.5s"`` or ``"-0.001s"``."""
        return parse_duration(text)

    @classmethod
    def type_url(cls) -> str:
        """Return the type URL used when packing this message into an ``Any``."""
        return f"type.googleapis.com/{cls.PACKAGE}.{cls.NAME}"

    def __str__(self) -> str:
        normal = self.normalized()
        sign = "-" if self.seconds < 0 or self.nanos < 0 else ""
        text = f"{sign}{abs(normal.seconds)}"

        nanos = abs(normal.nanos)
        if nanos == 0:
            return f"{text}s"
        if nanos % 1_000_000 == 0:
            return f"{text}.{nanos // 1_000_000:03d}s"
        if nanos % 1_000 == 0:
            return f"{text}.{nanos // 1_000:06d}s"
        return f"{text}.{nanos:09d}s"


def parse_duration(text: str) -> Duration:
    """Parse a duration in the Protobuf JSON format: ``[-]seconds[.fraction]s``."""
    if not text.isascii():
        raise DurationParseError()

    rest = parse_char(text, "-")
    negative = rest is not None
    if rest is None:
        rest = text

    digits, rest = parse_digits(rest)
    if not digits:
        raise DurationParseError()
    seconds = int(digits)
    if seconds > _I64_MAX:
        raise DurationParseError()

    try:
        nanos, rest = parse_nanos(rest)
    except ValueError as exc:
        raise DurationParseError() from exc

    rest = parse_char(rest, "s")
    if rest is None or rest:
        raise DurationParseError()
    if nanos >= _NANOS_PER_SECOND:
        raise DurationParseError()

    if negative:
        return Duration(seconds=-seconds, nanos=-nanos)
    return Duration(seconds=seconds, nanos=nanos)