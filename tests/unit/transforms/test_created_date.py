"""Unit tests for Mela timestamp conversion."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

from transforms.created_date import (
    format_created,
    source_epoch_milliseconds,
    source_timestamp_to_datetime,
)


def test_source_epoch_milliseconds_matches_known_instant() -> None:
    """711149256.442811 is 2023-07-15T21:27:36.442Z."""
    milliseconds = source_epoch_milliseconds(Decimal("711149256.442811"))

    assert milliseconds == 1689456456442


def test_source_timestamp_to_datetime_returns_utc_instant() -> None:
    """Converted instants should be aware UTC datetimes."""
    instant = source_timestamp_to_datetime(Decimal("711149256.442811"))

    assert instant == datetime(2023, 7, 15, 21, 27, 36, 442000, tzinfo=timezone.utc)


def test_source_epoch_milliseconds_accepts_float() -> None:
    """Float input should convert without binary rounding drift."""
    assert source_epoch_milliseconds(711149256.442811) == 1689456456442


def test_source_epoch_milliseconds_zero_is_mela_epoch() -> None:
    """Zero seconds should map to 2001-01-01T00:00:00Z."""
    assert source_epoch_milliseconds(0) == 978307200000


def test_source_epoch_milliseconds_floors_negative_values() -> None:
    """Negative timestamps should floor toward negative infinity."""
    milliseconds = source_epoch_milliseconds(Decimal("-1.25"))

    assert milliseconds == 978307200000 - 1250


def test_source_epoch_milliseconds_truncates_sub_millisecond_digits() -> None:
    """Sub-millisecond remainders should be dropped, not rounded."""
    assert source_epoch_milliseconds(Decimal("0.0019999")) == 978307200001


def test_source_timestamp_conversion_is_monotonic() -> None:
    """Earlier Mela timestamps should convert to earlier instants."""
    timestamps = [Decimal(value) for value in ("-86400.5", "-0.001", "0", "0.999", "711149256.442811")]

    instants = [source_timestamp_to_datetime(value) for value in timestamps]

    assert instants == sorted(instants) and len(set(instants)) == len(instants)


def test_format_created_uses_requested_zone() -> None:
    """Formatting should render wall-clock time in the given zone."""
    instant = datetime(2023, 7, 15, 21, 27, 36, 442000, tzinfo=timezone.utc)

    formatted = format_created(instant, ZoneInfo("America/New_York"))

    assert formatted == "2023-07-15 17:27:36"


def test_format_created_zero_pads_fields() -> None:
    """Single-digit components should be zero padded in 24-hour form."""
    instant = datetime(2001, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    assert format_created(instant, timezone.utc) == "2001-01-02 03:04:05"


def test_format_created_defaults_to_local_zone() -> None:
    """Without a zone the process local time should be used."""
    instant = datetime(2023, 7, 15, 21, 27, 36, tzinfo=timezone.utc)

    formatted = format_created(instant)

    assert formatted == instant.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def test_source_timestamp_to_datetime_handles_pre_epoch_dates() -> None:
    """Dates before 1970 should convert without platform limits."""
    instant = source_timestamp_to_datetime(-1_000_000_000)

    assert instant == datetime(2001, 1, 1, tzinfo=timezone.utc) - timedelta(seconds=1_000_000_000)
