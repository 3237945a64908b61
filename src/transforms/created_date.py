"""Mela timestamp conversion.

Mela stores creation dates as fractional seconds since
2001-01-01T00:00:00Z. Paprika expects a local wall-clock string.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from decimal import Decimal
import math

from core.constants import (
    CREATED_DATE_FORMAT,
    MELA_EPOCH_OFFSET_SECONDS,
    MILLISECONDS_PER_SECOND,
)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def source_epoch_milliseconds(timestamp: Decimal | int | float) -> int:
    """Convert a Mela timestamp into Unix epoch milliseconds.

    Whole seconds are floored toward negative infinity, so dates before
    2001 do not drift by a second. Sub-millisecond digits are truncated.

    Args:
        timestamp: Seconds since the Mela epoch.

    Returns:
        Milliseconds since the Unix epoch.
    """
    exact = _as_decimal(timestamp)
    seconds = math.floor(exact)
    fractional_millis = int((exact - seconds) * MILLISECONDS_PER_SECOND)
    return (
        seconds * MILLISECONDS_PER_SECOND
        + MELA_EPOCH_OFFSET_SECONDS * MILLISECONDS_PER_SECOND
        + fractional_millis
    )


def source_timestamp_to_datetime(timestamp: Decimal | int | float) -> datetime:
    """Convert a Mela timestamp into an aware UTC datetime.

    Raises:
        OverflowError: If the instant is outside the datetime range.
    """
    milliseconds = source_epoch_milliseconds(timestamp)
    return _UNIX_EPOCH + timedelta(milliseconds=milliseconds)


def format_created(instant: datetime, tz: tzinfo | None = None) -> str:
    """Format an instant as Paprika's ``YYYY-MM-DD HH:MM:SS`` string.

    Args:
        instant: Aware datetime.
        tz: Target zone; the process local zone when None.

    Returns:
        Zero-padded 24-hour wall-clock string.
    """
    return instant.astimezone(tz).strftime(CREATED_DATE_FORMAT)


def _as_decimal(timestamp: Decimal | int | float) -> Decimal:
    # floats go through repr so 711149256.442811 stays 711149256.442811
    if isinstance(timestamp, float):
        return Decimal(repr(timestamp))
    return Decimal(timestamp)
