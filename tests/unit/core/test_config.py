"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import PorterConfig
from core.errors import PorterConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to defaults when nothing is set."""
    for variable in (
        "PORTER_OVERWRITE",
        "PORTER_DUPLICATE_NAMES",
        "PORTER_GZIP_LEVEL",
        "PORTER_TIMEZONE",
    ):
        monkeypatch.delenv(variable, raising=False)

    config = PorterConfig.from_env()

    assert config == PorterConfig()


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should parse every supported environment variable."""
    monkeypatch.setenv("PORTER_OVERWRITE", "yes")
    monkeypatch.setenv("PORTER_DUPLICATE_NAMES", "REJECT")
    monkeypatch.setenv("PORTER_GZIP_LEVEL", "6")
    monkeypatch.setenv("PORTER_TIMEZONE", "UTC")

    config = PorterConfig.from_env()

    assert config == PorterConfig(
        overwrite_output=True,
        duplicate_names="reject",
        compress_level=6,
        timezone="UTC",
    )


def test_from_env_raises_for_invalid_gzip_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for non-numeric compression level."""
    monkeypatch.setenv("PORTER_GZIP_LEVEL", "max")

    with pytest.raises(PorterConfigError):
        PorterConfig.from_env()

    assert os.getenv("PORTER_GZIP_LEVEL") == "max"


def test_from_env_raises_for_out_of_range_gzip_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for compression levels outside 0-9."""
    monkeypatch.setenv("PORTER_GZIP_LEVEL", "12")

    with pytest.raises(PorterConfigError):
        PorterConfig.from_env()


def test_from_env_raises_for_unknown_duplicate_policy(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject duplicate name policies it does not implement."""
    monkeypatch.setenv("PORTER_DUPLICATE_NAMES", "overwrite")

    with pytest.raises(PorterConfigError):
        PorterConfig.from_env()


def test_from_env_raises_for_invalid_overwrite_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for flags that are not boolean-like."""
    monkeypatch.setenv("PORTER_OVERWRITE", "sometimes")

    with pytest.raises(PorterConfigError):
        PorterConfig.from_env()


def test_from_env_raises_for_unknown_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should validate time zone names eagerly."""
    monkeypatch.setenv("PORTER_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(PorterConfigError):
        PorterConfig.from_env()


def test_tzinfo_is_none_for_local_zone() -> None:
    """Unset time zone should defer to the process local zone."""
    assert PorterConfig().tzinfo() is None
