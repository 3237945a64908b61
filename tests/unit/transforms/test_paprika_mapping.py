"""Unit tests for Mela to Paprika field mapping."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta, timezone
from decimal import Decimal
import hashlib

import pytest

from core.errors import RecordMappingError
from core.types import MelaRecipe, MelaRecipeHeader
from transforms.paprika_mapping import map_mela_to_paprika, new_uid

_HEADER = MelaRecipeHeader(ordinal=1, title="Shakshuka")


def _sample_recipe() -> MelaRecipe:
    return MelaRecipe(
        id="01FF07B7-2F71-4FEE-A01C-9FAFD36237DE-11638-00003DAC76F5F77E",
        title="Shakshuka",
        date=Decimal("711149256.442811"),
        categories=("Breakfast", "Vegetarian"),
        nutrition="Calories: 508",
        favorite=True,
        yield_text="4 servings",
        cook_time="25 minutes",
        link="https://smittenkitchen.com/2010/04/shakshuka/",
        total_time="40 minutes",
        notes="Use a wide skillet.",
        ingredients="6 eggs",
        text="Eggs poached in tomato sauce.",
        prep_time="15 minutes",
        images=("aGVsbG8gd29ybGQ=", "c2Vjb25k"),
        want_to_cook=True,
        instructions="Crack in the eggs.",
    )


def _map(recipe: MelaRecipe, uid: str = "uid-1"):
    return map_mela_to_paprika(_HEADER, recipe, uid_factory=lambda: uid, tz=timezone.utc)


def test_map_copies_verbatim_fields() -> None:
    """Directly corresponding fields should be copied unchanged."""
    target = _map(_sample_recipe())

    assert (
        target.servings,
        target.description,
        target.notes,
        target.cook_time,
        target.name,
        target.total_time,
        target.categories,
        target.nutritional_info,
        target.directions,
        target.source_url,
        target.ingredients,
        target.prep_time,
    ) == (
        "4 servings",
        "Eggs poached in tomato sauce.",
        "Use a wide skillet.",
        "25 minutes",
        "Shakshuka",
        "40 minutes",
        ("Breakfast", "Vegetarian"),
        "Calories: 508",
        "Crack in the eggs.",
        "https://smittenkitchen.com/2010/04/shakshuka/",
        "6 eggs",
        "15 minutes",
    )


def test_map_sets_fixed_defaults() -> None:
    """Fields without a Mela counterpart should get fixed values."""
    target = _map(_sample_recipe())

    assert (target.difficulty, target.image_url, target.photos, target.photo_large, target.photo) == (
        "",
        "",
        (),
        None,
        None,
    )


def test_map_hashes_source_id() -> None:
    """Hash should be the digest of the UTF-8 encoded source id."""
    recipe = _sample_recipe()

    target = _map(recipe)

    assert target.hash == hashlib.sha256(recipe.id.encode("utf-8")).hexdigest().upper()


def test_map_uses_first_image_as_photo() -> None:
    """Only the first image should be kept, with its decoded digest."""
    target = _map(_sample_recipe())

    assert (target.photo_data, target.photo_hash) == (
        "aGVsbG8gd29ybGQ=",
        hashlib.sha256(b"hello world").hexdigest().upper(),
    )


def test_map_without_images_leaves_photo_fields_null() -> None:
    """An empty image list should produce null photo data and hash."""
    target = _map(replace(_sample_recipe(), images=()))

    assert (target.photo_data, target.photo_hash) == (None, None)


def test_map_rejects_invalid_base64_image() -> None:
    """A first image that is not base64 should fail the mapping stage."""
    with pytest.raises(RecordMappingError):
        _map(replace(_sample_recipe(), images=("not*base64",)))


@pytest.mark.parametrize(("favorite", "rating"), [(True, 5), (False, 0)])
def test_map_rating_follows_favorite_flag(favorite: bool, rating: int) -> None:
    """Favorites should rate 5 and everything else 0."""
    target = _map(replace(_sample_recipe(), favorite=favorite, text="other"))

    assert target.rating == rating


def test_map_formats_created_in_requested_zone() -> None:
    """Created should be the converted date as a wall-clock string."""
    target = _map(_sample_recipe())

    assert target.created == "2023-07-15 21:27:36"


def test_map_extracts_source_domain() -> None:
    """Source should be the host of the recipe link."""
    target = _map(replace(_sample_recipe(), link="https://example.com/recipe/42"))

    assert target.source == "example.com"


def test_map_unparseable_link_yields_null_source() -> None:
    """Links that are not URLs should produce a null source."""
    target = _map(replace(_sample_recipe(), link="not a url"))

    assert (target.source, target.source_url) == (None, "not a url")


def test_map_is_deterministic_except_uid() -> None:
    """Two mappings of the same input should differ only in uid."""
    recipe = _sample_recipe()

    first = map_mela_to_paprika(_HEADER, recipe, tz=timezone.utc)
    second = map_mela_to_paprika(_HEADER, recipe, tz=timezone.utc)

    assert first.uid != second.uid and replace(first, uid="") == replace(second, uid="")


def test_map_uses_injected_uid_factory(fixed_uid: str) -> None:
    """The uid should come from the injected generator."""
    target = _map(_sample_recipe(), uid=fixed_uid)

    assert target.uid == fixed_uid


def test_map_rejects_dates_outside_calendar_range() -> None:
    """Timestamps beyond datetime range should fail the mapping stage."""
    with pytest.raises(RecordMappingError):
        _map(replace(_sample_recipe(), date=Decimal("1e15")))


def test_map_rejects_dates_shifted_past_calendar_range() -> None:
    """Converting the last representable hour east of UTC should fail the mapping stage."""
    last_hour = replace(_sample_recipe(), date=Decimal(253402297200 - 978307200 - 1))

    with pytest.raises(RecordMappingError):
        map_mela_to_paprika(_HEADER, last_hour, tz=timezone(timedelta(hours=14)))


def test_new_uid_is_uppercase_uuid() -> None:
    """Generated uids should look like Paprika's uppercase UUIDs."""
    uid = new_uid()

    assert uid == uid.upper() and len(uid) == 36
