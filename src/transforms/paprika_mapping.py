"""Mela to Paprika field mapping.

This module converts one Mela recipe into one Paprika recipe.
Apart from the generated ``uid`` the mapping is deterministic.
"""

from __future__ import annotations

import base64
import binascii
from datetime import tzinfo
from typing import Callable
import uuid

from core.constants import DEFAULT_RATING, FAVORITE_RATING
from core.errors import RecordMappingError
from core.hashing import sha256_hex
from core.types import MelaRecipe, MelaRecipeHeader, PaprikaRecipe
from transforms.created_date import format_created, source_timestamp_to_datetime
from transforms.source_host import extract_source_host

UidFactory = Callable[[], str]


def new_uid() -> str:
    """Generate a fresh Paprika recipe uid."""
    return str(uuid.uuid4()).upper()


def map_mela_to_paprika(
    header: MelaRecipeHeader,
    recipe: MelaRecipe,
    *,
    uid_factory: UidFactory = new_uid,
    tz: tzinfo | None = None,
) -> PaprikaRecipe:
    """Map a Mela recipe onto Paprika's schema.

    Fields without a Mela counterpart get fixed defaults. Mela fields
    without a Paprika counterpart (``wantToCook``, extra images) are dropped.
    The header is accepted for parity with the reader output.

    Args:
        header: Header parsed from the entry name.
        recipe: Parsed Mela recipe.
        uid_factory: Generator for the target ``uid``.
        tz: Zone for the ``created`` string; process local zone when None.

    Returns:
        Mapped Paprika recipe.

    Raises:
        RecordMappingError: If the first image is not base64 or the date is out of range.
    """
    first_image = recipe.images[0] if recipe.images else None
    return PaprikaRecipe(
        uid=uid_factory(),
        difficulty="",
        servings=recipe.yield_text,
        description=recipe.text,
        hash=sha256_hex(recipe.id.encode("utf-8")),
        photo_data=first_image,
        photo_large=None,
        notes=recipe.notes,
        photo=None,
        cook_time=recipe.cook_time,
        image_url="",
        photos=(),
        name=recipe.title,
        total_time=recipe.total_time,
        categories=recipe.categories,
        nutritional_info=recipe.nutrition,
        directions=recipe.instructions,
        created=_build_created(recipe, tz),
        source_url=recipe.link,
        rating=FAVORITE_RATING if recipe.favorite else DEFAULT_RATING,
        source=extract_source_host(recipe.link),
        ingredients=recipe.ingredients,
        prep_time=recipe.prep_time,
        photo_hash=_hash_photo(recipe, first_image),
    )


def _build_created(recipe: MelaRecipe, tz: tzinfo | None) -> str:
    try:
        return format_created(source_timestamp_to_datetime(recipe.date), tz)
    except OverflowError as error:
        raise RecordMappingError(
            f"Cannot convert date {recipe.date} of recipe '{recipe.title}' ({recipe.id}): "
            "timestamp is outside the supported calendar range."
        ) from error


def _hash_photo(recipe: MelaRecipe, image: str | None) -> str | None:
    """Hash the decoded bytes of the primary image."""
    if image is None:
        return None
    try:
        image_bytes = base64.b64decode("".join(image.split()), validate=True)
    except (binascii.Error, ValueError) as error:
        raise RecordMappingError(
            f"Invalid image data in recipe '{recipe.title}' ({recipe.id}): "
            f"first image is not base64 ({error})."
        ) from error
    return sha256_hex(image_bytes)
