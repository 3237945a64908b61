"""Runtime configuration model for Porter.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.constants import (
    DEFAULT_DUPLICATE_NAME_POLICY,
    DEFAULT_GZIP_LEVEL,
    SUPPORTED_DUPLICATE_NAME_POLICIES,
)
from core.errors import PorterConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class PorterConfig:
    """Validated runtime configuration.

    Attributes:
        overwrite_output: Replace an existing output archive instead of failing.
        duplicate_names: Policy for recipes sharing a name (``suffix`` or ``reject``).
        compress_level: Gzip compression level for each target entry.
        timezone: Optional IANA zone for ``created`` strings; process local zone if unset.
    """

    overwrite_output: bool = False
    duplicate_names: str = DEFAULT_DUPLICATE_NAME_POLICY
    compress_level: int = DEFAULT_GZIP_LEVEL
    timezone: str | None = None

    @classmethod
    def from_env(cls) -> "PorterConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PorterConfigError: If environment values are invalid.
        """
        overwrite_output = _parse_bool("PORTER_OVERWRITE", os.getenv("PORTER_OVERWRITE", ""))
        duplicate_names = validate_duplicate_names(
            os.getenv("PORTER_DUPLICATE_NAMES", DEFAULT_DUPLICATE_NAME_POLICY)
        )
        compress_level = _parse_compress_level(
            os.getenv("PORTER_GZIP_LEVEL", str(DEFAULT_GZIP_LEVEL))
        )
        timezone_value = os.getenv("PORTER_TIMEZONE") or None
        if timezone_value is not None:
            load_timezone(timezone_value)
        return cls(
            overwrite_output=overwrite_output,
            duplicate_names=duplicate_names,
            compress_level=compress_level,
            timezone=timezone_value,
        )

    def tzinfo(self) -> ZoneInfo | None:
        """Return the configured zone, or None for the process local zone."""
        if self.timezone is None:
            return None
        return load_timezone(self.timezone)


def validate_duplicate_names(raw_value: str) -> str:
    """Validate a duplicate entry name policy.

    Args:
        raw_value: Policy name from environment or CLI.

    Returns:
        Normalized policy name.

    Raises:
        PorterConfigError: If the policy is unknown.
    """
    policy = raw_value.strip().lower()
    if policy not in SUPPORTED_DUPLICATE_NAME_POLICIES:
        raise PorterConfigError(
            f"Invalid duplicate name policy '{raw_value}': expected one of "
            f"{SUPPORTED_DUPLICATE_NAME_POLICIES}. Set PORTER_DUPLICATE_NAMES accordingly."
        )
    return policy


def validate_compress_level(level: int) -> int:
    """Validate a gzip compression level.

    Raises:
        PorterConfigError: If the level is not an integer in [0, 9].
    """
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 9:
        raise PorterConfigError(
            f"Invalid gzip compression level {level!r}: expected 0-9. "
            "Set PORTER_GZIP_LEVEL to a value between 0 and 9."
        )
    return level


def load_timezone(name: str) -> ZoneInfo:
    """Resolve an IANA time zone name.

    Raises:
        PorterConfigError: If the zone is unknown.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as error:
        raise PorterConfigError(
            f"Invalid time zone '{name}': not a known IANA zone. "
            "Use a name such as 'UTC' or 'America/New_York'."
        ) from error


def _parse_bool(variable: str, raw_value: str) -> bool:
    """Parse a boolean flag environment value."""
    lowered = raw_value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise PorterConfigError(
        f"Invalid {variable} value: expected true/false, got '{raw_value}'. "
        f"Set {variable} to 1 or 0."
    )


def _parse_compress_level(raw_value: str) -> int:
    """Parse the gzip compression level environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Compression level in [0, 9].

    Raises:
        PorterConfigError: If value is not an integer in range.
    """
    try:
        level = int(raw_value)
    except ValueError as error:
        raise PorterConfigError(
            "Invalid PORTER_GZIP_LEVEL value: "
            f"expected integer, got '{raw_value}'. "
            "Set PORTER_GZIP_LEVEL to a value between 0 and 9."
        ) from error
    return validate_compress_level(level)
