# wellknown

The Protocol Buffers well-known `Timestamp` and `Duration` types for Python.
They follow the Protobuf normalization rules exactly and use the string
formats of the Protobuf JSON mapping.

- `Timestamp` counts seconds and nanoseconds since the Unix epoch, in UTC.
  It formats to RFC 3339 and parses from it across the whole signed 64-bit
  range of seconds. A year with more than four digits is written with a
  leading `+`. A negative year is written with a `-` and at least four digits.
- `Duration` is a signed span of seconds and nanoseconds. It formats to the
  JSON form and parses from it, for example `"1.5s"` or `"-0.000000009s"`.

The package has no runtime dependencies.

## Installation

```
pip install wellknown
```

## Timestamps

```python
from wellknown.timestamp import Timestamp

ts = Timestamp.parse("1996-12-19T16:39:57-08:00")
print(ts)                     # 1996-12-20T00:39:57Z
print(ts.seconds, ts.nanos)   # 851042397 0

Timestamp.date(2000, 1, 1)
Timestamp.date_time(1996, 12, 20, 0, 39, 57)
Timestamp.date_time_nanos(1985, 4, 12, 23, 20, 50, 520_000_000)

ts.to_datetime()              # aware UTC datetime.datetime
Timestamp.type_url()          # "type.googleapis.com/google.protobuf.Timestamp"
```

`str()` writes the fraction of a second with 0, 3, 6 or 9 digits. It uses
the fewest of these that show the value exactly, and always ends in `Z`.

The parser (`Timestamp.parse`, or `parse_timestamp` in the same module)
accepts RFC 3339 with these extensions:

- a space instead of `T` between the date and the time;
- a date with no time;
- no offset, which is taken as UTC;
- an offset given in hours only, or without a colon (`+0800`);
- a single space before the offset.

A leap second (`:60`) is rolled back to `:59`. Digits of a fraction beyond
the ninth are dropped. Text that is not ASCII, is malformed, or names a date
that does not exist raises `TimestampParseError`.

`Timestamp.date`, `date_time`, `date_time_nanos` and `from_date_time` raise
`InvalidDateTimeError` for a date or time that does not exist, or that lies
outside the representable range.

`normalize()` brings `nanos` into `[0, 999_999_999]` in place and saturates
at the 64-bit limits of `seconds`. `normalized()` returns a normalized copy.
`try_normalize()` also returns a copy, but raises `TimestampOverflowError`
where normalizing would saturate.

`Timestamp.from_datetime` takes a `datetime` and treats a naive value as
UTC. `to_datetime` truncates to microseconds. It raises
`OutOfSystemRangeError` when the value does not fit a `datetime`.

The error classes above are subclasses of `TimestampError`, which is a
`ValueError`. The constructor raises a plain `ValueError` when `seconds` does
not fit in 64 bits or `nanos` does not fit in 32 bits.

## Durations

```python
from datetime import timedelta
from wellknown.duration import Duration

d = Duration.parse("-15.1s")
print(d.seconds, d.nanos)          # -15 -100000000
print(Duration(0, -123_000_000))   # -0.123s

Duration.from_timedelta(timedelta(seconds=3, microseconds=1))
Duration(5, 0).to_timedelta()
Duration.type_url()                # "type.googleapis.com/google.protobuf.Duration"
```

After `normalize()` or `normalized()`, `nanos` lies within
`[-999_999_999, 999_999_999]` and has the same sign as `seconds`. Both
saturate at the 64-bit limits.

Errors are subclasses of `DurationError`, which is a `ValueError`:

- `DurationParseError` for malformed or non-ASCII text (`parse`, `parse_duration`);
- `NegativeDurationError` when `to_timedelta` is called on a negative
  duration; its `magnitude` attribute holds the absolute value;
- `DurationOutOfRangeError` when a value does not fit the target type.

`to_timedelta` truncates to microseconds.

## Lower-level helpers

- `wellknown.calendar.DateTime` converts between epoch seconds and proleptic
  Gregorian UTC dates (`from_timestamp`, `to_seconds`, `is_valid`) over the
  full range of `Timestamp`. `DateTime.MIN` and `DateTime.MAX` are the ends
  of that range. The module also provides `days_in_month`,
  `year_to_seconds` and `month_to_seconds`.
- `wellknown.rfc3339` contains the parsers that read the parts of a
  timestamp: `parse_date`, `parse_time`, `parse_offset`, `parse_nanos` and
  others. Each returns the value it read together with the rest of the text.

## What it does not do

These are plain value types. They do not encode to or decode from the
Protobuf binary wire format. There is also no `Any` type to pack them into:
`type_url()` only returns the URL string.

## Running the tests

```
pip install -e ".[test]"
pytest
```