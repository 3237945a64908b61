"""JSON serialization for Paprika recipe documents.

This module centralizes PaprikaRecipe payload conversion logic.
It is reused by the archive writer and the archive reader.
"""

from __future__ import annotations

from typing import Any

from core.types import PaprikaPhoto, PaprikaRecipe

_NULLABLE_FIELDS = ("photo_data", "photo_large", "photo", "source", "photo_hash")
_TEXT_FIELDS = (
    "uid",
    "difficulty",
    "servings",
    "description",
    "hash",
    "notes",
    "cook_time",
    "image_url",
    "name",
    "total_time",
    "nutritional_info",
    "directions",
    "created",
    "source_url",
    "ingredients",
    "prep_time",
)


def paprika_recipe_to_payload(recipe: PaprikaRecipe) -> dict[str, object]:
    """Serialize a PaprikaRecipe into a JSON-safe payload.

    Every key is emitted; nullable fields are written as None.

    Args:
        recipe: Paprika recipe instance.

    Returns:
        Dictionary payload for JSON encoding.
    """
    return {
        "uid": recipe.uid,
        "difficulty": recipe.difficulty,
        "servings": recipe.servings,
        "description": recipe.description,
        "hash": recipe.hash,
        "photo_data": recipe.photo_data,
        "photo_large": recipe.photo_large,
        "notes": recipe.notes,
        "photo": recipe.photo,
        "cook_time": recipe.cook_time,
        "image_url": recipe.image_url,
        "photos": [_photo_to_payload(photo) for photo in recipe.photos],
        "name": recipe.name,
        "total_time": recipe.total_time,
        "categories": list(recipe.categories),
        "nutritional_info": recipe.nutritional_info,
        "directions": recipe.directions,
        "created": recipe.created,
        "source_url": recipe.source_url,
        "rating": recipe.rating,
        "source": recipe.source,
        "ingredients": recipe.ingredients,
        "prep_time": recipe.prep_time,
        "photo_hash": recipe.photo_hash,
    }


def paprika_recipe_from_payload(payload: dict[str, Any]) -> PaprikaRecipe:
    """Deserialize a JSON payload into a PaprikaRecipe.

    Missing text fields default to empty strings and missing nullable
    fields to None, matching how Paprika tolerates sparse documents.

    Args:
        payload: Parsed JSON object.

    Returns:
        Parsed PaprikaRecipe.

    Raises:
        ValueError: If ``rating`` is not an integer.
    """
    fields: dict[str, Any] = {key: str(payload.get(key) or "") for key in _TEXT_FIELDS}
    for key in _NULLABLE_FIELDS:
        value = payload.get(key)
        fields[key] = None if value is None else str(value)
    fields["rating"] = _parse_rating(payload.get("rating", 0))
    fields["categories"] = tuple(str(item) for item in payload.get("categories") or ())
    fields["photos"] = tuple(_photo_from_payload(item) for item in payload.get("photos") or ())
    return PaprikaRecipe(**fields)


def _photo_to_payload(photo: PaprikaPhoto) -> dict[str, str]:
    return {
        "name": photo.name,
        "data": photo.data,
        "filename": photo.filename,
        "hash": photo.hash,
    }


def _photo_from_payload(payload: Any) -> PaprikaPhoto:
    if not isinstance(payload, dict):
        raise ValueError("expected JSON object in 'photos'")
    return PaprikaPhoto(
        name=str(payload.get("name") or ""),
        data=str(payload.get("data") or ""),
        filename=str(payload.get("filename") or ""),
        hash=str(payload.get("hash") or ""),
    )


def _parse_rating(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected integer 'rating', found {type(value).__name__}")
    return value
