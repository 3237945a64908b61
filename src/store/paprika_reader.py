"""Paprika archive reader.

This module reads ``.paprikarecipes`` archives back into typed
recipes, for inspecting conversion output.
"""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Iterator
import zipfile
import zlib

from core.errors import DocumentParseError, SourceArchiveError
from core.types import PaprikaRecipe
from store.paprika_payload import paprika_recipe_from_payload


def iter_paprika_recipes(archive_path: str | Path) -> Iterator[PaprikaRecipe]:
    """Lazily read recipes from a Paprika archive.

    Args:
        archive_path: Path to a ``.paprikarecipes`` archive.

    Yields:
        Parsed recipes in archive order.

    Raises:
        SourceArchiveError: If the archive or an entry cannot be read.
        DocumentParseError: If an entry is not a gzip-compressed recipe document.
    """
    source_path = Path(archive_path).expanduser()
    try:
        archive = zipfile.ZipFile(source_path)
    except (OSError, zipfile.BadZipFile) as error:
        raise SourceArchiveError(
            f"Failed to read Paprika archive at {source_path}: {error}. "
            "Provide an existing .paprikarecipes zip archive."
        ) from error
    with archive:
        for info in archive.infolist():
            if info.is_dir():
                continue
            yield _read_entry(archive, info)


def _read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> PaprikaRecipe:
    """Decompress and parse one archive entry."""
    try:
        with archive.open(info) as entry_stream:
            with gzip.GzipFile(fileobj=entry_stream, mode="rb") as decompressed_stream:
                raw = decompressed_stream.read()
    except (gzip.BadGzipFile, EOFError) as error:
        raise DocumentParseError(
            f"Failed to decompress Paprika entry '{info.filename}': {error}. "
            "Entries must be gzip-compressed JSON documents.",
            entry_name=info.filename,
        ) from error
    except (
        OSError,
        RuntimeError,
        NotImplementedError,
        zipfile.BadZipFile,
        zlib.error,
    ) as error:
        raise SourceArchiveError(
            f"Failed to read Paprika entry '{info.filename}': {error}."
        ) from error
    try:
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError("expected JSON object at top level")
        return paprika_recipe_from_payload(payload)
    except ValueError as error:
        raise DocumentParseError(
            f"Failed to parse Paprika entry '{info.filename}': {error}.",
            entry_name=info.filename,
        ) from error
