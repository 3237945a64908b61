"""Mela entry name parsing.

This module decodes the ordinal and title Mela encodes in each
archive entry name, independently of the entry's JSON document.
"""

from __future__ import annotations

import re

from core.constants import MELA_RECIPE_EXTENSION
from core.errors import NameParseError
from core.types import MelaRecipeHeader

_ENTRY_NAME_PATTERN = re.compile(
    r"(?P<ordinal>[0-9]+)-(?P<title>.+)" + re.escape(MELA_RECIPE_EXTENSION),
    re.DOTALL,
)


def parse_recipe_header(entry_name: str) -> MelaRecipeHeader:
    """Parse ``<ordinal>-<title>.melarecipe`` into a typed header.

    The ordinal is everything before the first dash and the title is
    everything between that dash and the trailing extension, so titles
    may themselves contain dashes and dots.

    Args:
        entry_name: Archive entry file name.

    Returns:
        Parsed header.

    Raises:
        NameParseError: If the name does not have the expected shape.
    """
    match = _ENTRY_NAME_PATTERN.fullmatch(entry_name)
    if match is None:
        raise NameParseError(
            f"Could not parse Mela recipe entry name '{entry_name}': "
            f"expected '<ordinal>-<title>{MELA_RECIPE_EXTENSION}'. "
            "Re-export the collection from Mela without renaming entries.",
            entry_name=entry_name,
        )
    return MelaRecipeHeader(ordinal=int(match.group("ordinal")), title=match.group("title"))


def build_entry_name(header: MelaRecipeHeader) -> str:
    """Render a header back into its canonical entry name."""
    return f"{header.ordinal}-{header.title}{MELA_RECIPE_EXTENSION}"
