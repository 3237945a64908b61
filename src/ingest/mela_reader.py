"""Mela export archive reader.

This module streams recipes out of a ``.melarecipes`` zip archive.
Each entry is an uncompressed JSON document whose file name carries
the recipe ordinal and title.
"""

from __future__ import annotations

from decimal import Decimal
import json
from pathlib import Path, PurePosixPath
from typing import Any, Iterator
import zipfile
import zlib

from core.errors import DocumentParseError, SourceArchiveError
from core.logging_config import get_logger
from core.types import MelaRecipe, MelaRecipeHeader
from ingest.recipe_header import parse_recipe_header

_LOGGER = get_logger(__name__)

_OPTIONAL_TEXT_FIELDS = {
    "nutrition": "nutrition",
    "yield": "yield_text",
    "cookTime": "cook_time",
    "link": "link",
    "totalTime": "total_time",
    "notes": "notes",
    "ingredients": "ingredients",
    "text": "text",
    "prepTime": "prep_time",
    "instructions": "instructions",
}
_OPTIONAL_FLAG_FIELDS = {"favorite": "favorite", "wantToCook": "want_to_cook"}
_OPTIONAL_LIST_FIELDS = {"categories": "categories", "images": "images"}


def iter_mela_recipes(
    archive_path: str | Path,
) -> Iterator[tuple[MelaRecipeHeader, MelaRecipe]]:
    """Lazily read header and recipe pairs from a Mela archive.

    Entries are yielded in the archive's native order. Each entry stream
    is closed before its pair is yielded, and the archive is closed when
    the iterator is exhausted or closed.

    Args:
        archive_path: Path to a ``.melarecipes`` export.

    Yields:
        Parsed ``(header, recipe)`` pairs.

    Raises:
        SourceArchiveError: If the archive or an entry cannot be read.
        NameParseError: If an entry name has an unexpected shape.
        DocumentParseError: If an entry is not a valid recipe document.
    """
    source_path = Path(archive_path).expanduser()
    with _open_archive(source_path) as archive:
        _LOGGER.debug("mela_archive_opened", archive_path=str(source_path))
        for info in archive.infolist():
            if info.is_dir():
                continue
            entry_name = PurePosixPath(info.filename).name
            header = parse_recipe_header(entry_name)
            raw = _read_entry_bytes(archive, info, source_path)
            yield header, parse_mela_document(raw, entry_name)


def parse_mela_document(raw: bytes, entry_name: str) -> MelaRecipe:
    """Deserialize one Mela entry into a typed recipe.

    Args:
        raw: Raw entry bytes.
        entry_name: Entry name used in error messages.

    Returns:
        Parsed recipe.

    Raises:
        DocumentParseError: If the JSON is malformed or fields are missing or mistyped.
    """
    try:
        payload = json.loads(raw, parse_float=Decimal)
    except ValueError as error:
        raise DocumentParseError(
            f"Failed to parse Mela recipe entry '{entry_name}': {error}. "
            "The entry must be a UTF-8 JSON document.",
            entry_name=entry_name,
        ) from error
    if not isinstance(payload, dict):
        raise DocumentParseError(
            f"Failed to parse Mela recipe entry '{entry_name}': "
            "expected JSON object at top level.",
            entry_name=entry_name,
        )
    fields: dict[str, Any] = {
        "id": _require_text(payload, "id", entry_name),
        "title": _require_text(payload, "title", entry_name),
        "date": _require_timestamp(payload, entry_name),
    }
    for json_key, field_name in _OPTIONAL_TEXT_FIELDS.items():
        fields[field_name] = _optional_text(payload, json_key, entry_name)
    for json_key, field_name in _OPTIONAL_FLAG_FIELDS.items():
        fields[field_name] = _optional_flag(payload, json_key, entry_name)
    for json_key, field_name in _OPTIONAL_LIST_FIELDS.items():
        fields[field_name] = _optional_text_list(payload, json_key, entry_name)
    return MelaRecipe(**fields)


def _open_archive(source_path: Path) -> zipfile.ZipFile:
    """Open a zip archive for reading.

    Raises:
        SourceArchiveError: If the path is missing or not a zip archive.
    """
    try:
        return zipfile.ZipFile(source_path)
    except FileNotFoundError as error:
        raise SourceArchiveError(
            f"Failed to read source archive at {source_path}: path does not exist. "
            "Provide an existing .melarecipes export."
        ) from error
    except (OSError, zipfile.BadZipFile) as error:
        raise SourceArchiveError(
            f"Failed to read source archive at {source_path}: {error}. "
            "Provide a .melarecipes zip export."
        ) from error


def _read_entry_bytes(archive: zipfile.ZipFile, info: zipfile.ZipInfo, source_path: Path) -> bytes:
    """Read one entry fully and release its stream."""
    try:
        with archive.open(info) as stream:
            return stream.read()
    except (
        OSError,
        EOFError,
        RuntimeError,
        NotImplementedError,
        zipfile.BadZipFile,
        zlib.error,
    ) as error:
        raise SourceArchiveError(
            f"Failed to read entry '{info.filename}' from {source_path}: {error}. "
            "The archive may be truncated or corrupt."
        ) from error


def _require_text(payload: dict[str, Any], key: str, entry_name: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise _field_error(entry_name, key, "string", value)
    return value


def _require_timestamp(payload: dict[str, Any], entry_name: str) -> Decimal:
    """Read the ``date`` field as an exact decimal number of seconds."""
    value = payload.get("date")
    if isinstance(value, bool) or not isinstance(value, (int, Decimal)):
        raise _field_error(entry_name, "date", "number", value)
    timestamp = Decimal(value)
    if not timestamp.is_finite():
        raise _field_error(entry_name, "date", "finite number", value)
    return timestamp


def _optional_text(payload: dict[str, Any], key: str, entry_name: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _field_error(entry_name, key, "string", value)
    return value


def _optional_flag(payload: dict[str, Any], key: str, entry_name: str) -> bool:
    value = payload.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _field_error(entry_name, key, "boolean", value)
    return value


def _optional_text_list(payload: dict[str, Any], key: str, entry_name: str) -> tuple[str, ...]:
    value = payload.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise _field_error(entry_name, key, "list of strings", value)
    return tuple(value)


def _field_error(entry_name: str, key: str, expected: str, value: object) -> DocumentParseError:
    """Build a descriptive error for an absent or mistyped field."""
    found = "missing" if value is None else type(value).__name__
    return DocumentParseError(
        f"Invalid Mela recipe entry '{entry_name}': "
        f"expected {expected} field '{key}', found {found}.",
        entry_name=entry_name,
    )
