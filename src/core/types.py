"""Shared typed models.

This module defines immutable recipe models used by the reader,
mapper, and writer layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MelaRecipeHeader:
    """Metadata encoded in a Mela archive entry name.

    Attributes:
        ordinal: Non-negative position prefix of the entry name.
        title: Recipe title between the first dash and the extension.
    """

    ordinal: int
    title: str


@dataclass(frozen=True)
class MelaRecipe:
    """One recipe document from a Mela export.

    Attributes:
        id: Opaque unique id assigned by Mela.
        categories: Category names the recipe belongs to.
        nutrition: Newline-delimited nutrition facts.
        favorite: Whether the user marked the recipe as favorite.
        yield_text: Final output of the recipe, e.g. "4 servings" (JSON ``yield``).
        cook_time: Human-readable cooking duration.
        link: URL pointing to the source of the recipe.
        total_time: Human-readable total duration.
        title: Name of the recipe.
        notes: Freeform notes.
        date: Seconds since 2001-01-01T00:00:00Z, kept exact.
        ingredients: Newline-delimited ingredients.
        text: Freeform description text.
        prep_time: Human-readable preparation duration.
        images: Base64-encoded image payloads.
        want_to_cook: Whether the recipe is flagged for future cooking.
        instructions: Newline-delimited cooking instructions.
    """

    id: str
    title: str
    date: Decimal
    categories: tuple[str, ...] = ()
    nutrition: str = ""
    favorite: bool = False
    yield_text: str = ""
    cook_time: str = ""
    link: str = ""
    total_time: str = ""
    notes: str = ""
    ingredients: str = ""
    text: str = ""
    prep_time: str = ""
    images: tuple[str, ...] = ()
    want_to_cook: bool = False
    instructions: str = ""


@dataclass(frozen=True)
class PaprikaPhoto:
    """Additional photo attached to a Paprika recipe."""

    name: str
    data: str
    filename: str
    hash: str


@dataclass(frozen=True)
class PaprikaRecipe:
    """One recipe document in Paprika's import format.

    Nullable fields hold None and are still serialized, since Paprika
    expects every key to be present.
    """

    uid: str
    difficulty: str
    servings: str
    description: str
    hash: str
    photo_data: str | None
    photo_large: str | None
    notes: str
    photo: str | None
    cook_time: str
    image_url: str
    photos: tuple[PaprikaPhoto, ...]
    name: str
    total_time: str
    categories: tuple[str, ...]
    nutritional_info: str
    directions: str
    created: str
    source_url: str
    rating: int
    source: str | None
    ingredients: str
    prep_time: str
    photo_hash: str | None
