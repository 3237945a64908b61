"""Paprika import archive writer.

This module writes ``.paprikarecipes`` archives: a zip with one
gzip-compressed JSON document per recipe. Archives are assembled in a
sibling ``.partial`` file and moved into place only once finalized.
"""

from __future__ import annotations

import contextlib
import gzip
import json
import os
from pathlib import Path
from types import TracebackType
from typing import Iterable
import zipfile

from core.config import validate_compress_level, validate_duplicate_names
from core.constants import (
    DEFAULT_DUPLICATE_NAME_POLICY,
    DEFAULT_GZIP_LEVEL,
    DUPLICATE_NAMES_REJECT,
    PAPRIKA_RECIPE_EXTENSION,
    TEMP_ARCHIVE_SUFFIX,
)
from core.errors import DuplicateEntryError, OutputExistsError, OutputIOError
from core.logging_config import get_logger
from core.types import PaprikaRecipe
from store.paprika_payload import paprika_recipe_to_payload

_LOGGER = get_logger(__name__)


class PaprikaArchiveWriter:
    """Context-managed writer for one Paprika archive.

    Leaving the ``with`` block normally finalizes the archive at the
    output path. Leaving it with an exception discards the partial file
    and leaves any pre-existing output untouched.
    """

    def __init__(
        self,
        output_path: str | Path,
        *,
        overwrite: bool = False,
        duplicate_names: str = DEFAULT_DUPLICATE_NAME_POLICY,
        compress_level: int = DEFAULT_GZIP_LEVEL,
    ) -> None:
        self._output_path = Path(output_path).expanduser()
        self._partial_path = self._output_path.with_name(
            self._output_path.name + TEMP_ARCHIVE_SUFFIX
        )
        self._overwrite = overwrite
        self._duplicate_names = validate_duplicate_names(duplicate_names)
        self._compress_level = validate_compress_level(compress_level)
        self._archive: zipfile.ZipFile | None = None
        self._entry_names: set[str] = set()

    @property
    def entries_written(self) -> int:
        """Number of entries written so far."""
        return len(self._entry_names)

    def __enter__(self) -> "PaprikaArchiveWriter":
        if self._archive is None:
            self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.discard()

    def open(self) -> None:
        """Create the partial archive next to the output path.

        Raises:
            OutputExistsError: If output exists and overwrite is disabled.
            OutputIOError: If the partial archive cannot be created.
        """
        if self._output_path.exists() and not self._overwrite:
            raise OutputExistsError(
                f"Output archive already exists at {self._output_path}. "
                "Choose another path or enable overwrite."
            )
        try:
            self._archive = zipfile.ZipFile(
                self._partial_path, mode="w", compression=zipfile.ZIP_DEFLATED
            )
        except OSError as error:
            raise OutputIOError(
                f"Failed to create output archive at {self._output_path}: {error}. "
                "Check that the destination directory exists and is writable."
            ) from error

    def write(self, recipe: PaprikaRecipe) -> str:
        """Write one recipe as a gzip-compressed JSON entry.

        Args:
            recipe: Mapped Paprika recipe.

        Returns:
            Entry name used inside the archive.

        Raises:
            DuplicateEntryError: If the name is taken under the ``reject`` policy.
            OutputIOError: If the entry cannot be written.
        """
        archive = self._require_archive()
        entry_name = self._claim_entry_name(recipe.name)
        document = json.dumps(paprika_recipe_to_payload(recipe)).encode("utf-8")
        try:
            with archive.open(entry_name, mode="w") as entry_stream:
                with gzip.GzipFile(
                    fileobj=entry_stream,
                    mode="wb",
                    compresslevel=self._compress_level,
                    mtime=0,
                ) as compressed_stream:
                    compressed_stream.write(document)
        except OSError as error:
            raise OutputIOError(
                f"Failed to write entry '{entry_name}' to {self._output_path}: {error}."
            ) from error
        _LOGGER.debug("paprika_entry_written", entry_name=entry_name, size=len(document))
        return entry_name

    def commit(self) -> None:
        """Finalize the archive and move it onto the output path.

        Raises:
            OutputIOError: If finalizing or moving the archive fails.
        """
        archive = self._require_archive()
        try:
            archive.close()
            os.replace(self._partial_path, self._output_path)
        except OSError as error:
            self.discard()
            raise OutputIOError(
                f"Failed to finalize output archive at {self._output_path}: {error}."
            ) from error
        finally:
            self._archive = None

    def discard(self) -> None:
        """Drop the partial archive without touching the output path."""
        if self._archive is not None:
            # the central directory write can fail again on a broken disk
            with contextlib.suppress(OSError):
                self._archive.close()
            self._archive = None
        self._partial_path.unlink(missing_ok=True)

    def _require_archive(self) -> zipfile.ZipFile:
        if self._archive is None:
            raise OutputIOError(
                f"Output archive {self._output_path} is not open. "
                "Use the writer as a context manager."
            )
        return self._archive

    def _claim_entry_name(self, recipe_name: str) -> str:
        """Reserve a unique entry name according to the duplicate policy."""
        entry_name = f"{recipe_name}{PAPRIKA_RECIPE_EXTENSION}"
        if entry_name in self._entry_names:
            if self._duplicate_names == DUPLICATE_NAMES_REJECT:
                raise DuplicateEntryError(
                    f"Duplicate entry '{entry_name}' in {self._output_path}: "
                    "two recipes share the same name. "
                    "Rename one of them or use the 'suffix' duplicate policy."
                )
            entry_name = self._next_free_name(recipe_name)
            _LOGGER.info("paprika_entry_renamed", recipe_name=recipe_name, entry_name=entry_name)
        self._entry_names.add(entry_name)
        return entry_name

    def _next_free_name(self, recipe_name: str) -> str:
        counter = 2
        while True:
            candidate = f"{recipe_name} ({counter}){PAPRIKA_RECIPE_EXTENSION}"
            if candidate not in self._entry_names:
                return candidate
            counter += 1


def write_paprika_archive(
    output_path: str | Path,
    recipes: Iterable[PaprikaRecipe],
    *,
    overwrite: bool = False,
    duplicate_names: str = DEFAULT_DUPLICATE_NAME_POLICY,
    compress_level: int = DEFAULT_GZIP_LEVEL,
) -> int:
    """Write recipes into a new Paprika archive.

    Args:
        output_path: Destination ``.paprikarecipes`` path.
        recipes: Possibly lazy recipe sequence, consumed once.
        overwrite: Replace an existing output archive.
        duplicate_names: ``suffix`` or ``reject`` for repeated recipe names.
        compress_level: Gzip level for each entry.

    Returns:
        Number of entries written.

    Raises:
        OutputExistsError: If output exists and overwrite is disabled.
        OutputIOError: If the archive cannot be written.
    """
    with PaprikaArchiveWriter(
        output_path,
        overwrite=overwrite,
        duplicate_names=duplicate_names,
        compress_level=compress_level,
    ) as writer:
        for recipe in recipes:
            writer.write(recipe)
    return writer.entries_written
