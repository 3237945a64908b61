"""Public SDK surface for Porter.

This module provides a stable import path for library users.
It re-exports the conversion entry point and typed recipe models.
"""

from __future__ import annotations

from core.config import PorterConfig
from core.errors import ConversionError, PorterError
from core.types import MelaRecipe, MelaRecipeHeader, PaprikaPhoto, PaprikaRecipe
from ingest.mela_reader import iter_mela_recipes
from ingest.pipeline import convert_archive
from store.paprika_reader import iter_paprika_recipes
from store.paprika_writer import write_paprika_archive
from transforms.paprika_mapping import map_mela_to_paprika

__all__ = [
    "ConversionError",
    "MelaRecipe",
    "MelaRecipeHeader",
    "PaprikaPhoto",
    "PaprikaRecipe",
    "PorterConfig",
    "PorterError",
    "convert_archive",
    "iter_mela_recipes",
    "iter_paprika_recipes",
    "map_mela_to_paprika",
    "write_paprika_archive",
]
