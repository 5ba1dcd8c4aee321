"""Epoch timestamp utilities.

Dorametrix carries timestamps as decimal-digit strings. Ten-digit values are
seconds resolution and thirteen-digit values are milliseconds; every helper
that combines two timestamps normalizes both to milliseconds first.

Examples
--------
>>> to_milliseconds("1700000000")
1700000000000
>>> prettify_time(90061)
'01:01:01:01'

"""

from __future__ import annotations

import datetime as dt
import math

SECONDS_PER_DAY = 86400
ZERO_ELAPSED = "00:00:00:00"

_SECONDS_RESOLUTION_DIGITS = 10
_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)
_ONE_MS = dt.timedelta(milliseconds=1)
_SECONDS_PER_HOUR = 3600
_SECONDS_PER_MINUTE = 60


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def now_ms() -> str:
    """Return the current time as an epoch-millisecond string."""
    return str((utcnow() - _EPOCH) // _ONE_MS)


def is_epoch_timestamp(value: object) -> bool:
    """Return True for a non-empty ASCII digit string.

    >>> is_epoch_timestamp("1700000000"), is_epoch_timestamp("")
    (True, False)
    """
    return isinstance(value, str) and value.isascii() and value.strip().isdigit()


def is_seconds_resolution(timestamp: str) -> bool:
    """Return True for ten-digit (seconds) timestamps."""
    return len(timestamp) == _SECONDS_RESOLUTION_DIGITS


def pad_to_milliseconds(timestamp: str) -> str:
    """Append ``000`` to a ten-digit timestamp; return others unchanged."""
    if is_seconds_resolution(timestamp):
        return timestamp + "000"
    return timestamp


def to_milliseconds(timestamp: str) -> int:
    """Parse a digit-string timestamp into epoch milliseconds."""
    return int(pad_to_milliseconds(timestamp.strip()))


def seconds_between(earlier: str, later: str) -> float:
    """Return ``later - earlier`` in seconds after unit normalization."""
    return (to_milliseconds(later) - to_milliseconds(earlier)) / 1000


def days_in_scope(from_timestamp: str, to_timestamp: str) -> int:
    """Return the whole number of days a window spans, never less than one."""
    days = math.ceil(seconds_between(from_timestamp, to_timestamp) / SECONDS_PER_DAY)
    return max(days, 1)


def prettify_time(seconds: float) -> str:
    """Format elapsed seconds as ``DD:HH:MM:SS``.

    Fractional seconds are truncated and negative durations render as zero.
    """
    remaining = max(int(seconds), 0)
    days, remaining = divmod(remaining, SECONDS_PER_DAY)
    hours, remaining = divmod(remaining, _SECONDS_PER_HOUR)
    minutes, secs = divmod(remaining, _SECONDS_PER_MINUTE)
    return f"{days:02d}:{hours:02d}:{minutes:02d}:{secs:02d}"


def convert_date_to_epoch_ms(value: object) -> str:
    """Convert a webhook date value into an epoch-millisecond string.

    Accepts ISO-8601 strings (a trailing ``Z`` is allowed, naive values are
    read as UTC), integer epochs, or digit strings. Digit values of seconds
    resolution are padded to milliseconds.

    Raises
    ------
    ValueError
        If the value cannot be interpreted as a point in time.

    """
    if isinstance(value, bool):
        msg = f"not a timestamp: {value!r}"
        raise ValueError(msg)
    if isinstance(value, int):
        return pad_to_milliseconds(str(value))
    if not isinstance(value, str):
        msg = f"unsupported timestamp type: {type(value).__name__}"
        raise ValueError(msg)  # noqa: TRY004

    text = value.strip()
    if text.isdigit():
        return pad_to_milliseconds(text)

    parsed = dt.datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.UTC)
    return str((parsed - _EPOCH) // _ONE_MS)
