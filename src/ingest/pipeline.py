"""Conversion orchestration for Mela to Paprika migrations.

This module streams recipes from the source archive through the field
mapper into the target archive, one record at a time, failing fast.
"""

from __future__ import annotations

from contextlib import closing
from pathlib import Path
from typing import Iterator

from core.config import PorterConfig
from core.errors import ConversionError, OutputIOError, PorterError
from core.logging_config import get_logger
from core.types import MelaRecipe, MelaRecipeHeader, PaprikaRecipe
from ingest.mela_reader import iter_mela_recipes
from ingest.recipe_header import build_entry_name
from store.paprika_writer import PaprikaArchiveWriter
from transforms.paprika_mapping import UidFactory, map_mela_to_paprika, new_uid

_LOGGER = get_logger(__name__)

SourcePair = tuple[MelaRecipeHeader, MelaRecipe]


class ConversionRunner:
    """Single-use runner for one archive conversion."""

    def __init__(
        self,
        source_path: Path,
        output_path: Path,
        config: PorterConfig,
        uid_factory: UidFactory = new_uid,
    ) -> None:
        self._source_path = source_path
        self._output_path = output_path
        self._config = config
        self._uid_factory = uid_factory
        self._tz = config.tzinfo()

    def run(self) -> int:
        """Convert every source entry and return the number written."""
        writer = PaprikaArchiveWriter(
            self._output_path,
            overwrite=self._config.overwrite_output,
            duplicate_names=self._config.duplicate_names,
            compress_level=self._config.compress_level,
        )
        try:
            writer.open()
        except PorterError as error:
            raise self._failure("write", None, error) from error
        try:
            with writer, closing(iter_mela_recipes(self._source_path)) as source_pairs:
                for header, recipe in self._read_pairs(source_pairs):
                    target = self._map(header, recipe)
                    self._write(writer, header, target)
        except OutputIOError as error:
            raise self._failure("write", None, error) from error
        _log_conversion_completion(self._source_path, self._output_path, writer.entries_written)
        return writer.entries_written

    def _read_pairs(self, source_pairs: Iterator[SourcePair]) -> Iterator[SourcePair]:
        while True:
            try:
                pair = next(source_pairs)
            except StopIteration:
                return
            except PorterError as error:
                raise self._failure("read", getattr(error, "entry_name", None), error) from error
            yield pair

    def _map(self, header: MelaRecipeHeader, recipe: MelaRecipe) -> PaprikaRecipe:
        try:
            return map_mela_to_paprika(header, recipe, uid_factory=self._uid_factory, tz=self._tz)
        except PorterError as error:
            raise self._failure("map", build_entry_name(header), error) from error

    def _write(
        self,
        writer: PaprikaArchiveWriter,
        header: MelaRecipeHeader,
        target: PaprikaRecipe,
    ) -> None:
        try:
            writer.write(target)
        except PorterError as error:
            raise self._failure("write", build_entry_name(header), error) from error

    def _failure(self, stage: str, entry: str | None, error: PorterError) -> ConversionError:
        """Log a failed conversion and build the error to raise."""
        _LOGGER.error(
            "conversion_failed",
            stage=stage,
            entry=entry,
            source_path=str(self._source_path),
            output_path=str(self._output_path),
            error=str(error),
        )
        location = f" for entry '{entry}'" if entry else ""
        return ConversionError(
            f"Conversion failed at {stage} stage{location}: {error}",
            stage=stage,
            entry=entry,
        )


def convert_archive(
    source_path: str | Path,
    output_path: str | Path,
    config: PorterConfig | None = None,
    *,
    uid_factory: UidFactory = new_uid,
) -> int:
    """Convert a Mela export into a Paprika import archive.

    Args:
        source_path: Path to the ``.melarecipes`` export.
        output_path: Destination ``.paprikarecipes`` path.
        config: Runtime configuration; defaults apply when None.
        uid_factory: Generator for target recipe uids.

    Returns:
        Number of recipes converted.

    Raises:
        ConversionError: On the first read, map, or write failure.
        PorterConfigError: If the configured time zone or compression level is invalid.
    """
    runner = ConversionRunner(
        Path(source_path).expanduser(),
        Path(output_path).expanduser(),
        config or PorterConfig(),
        uid_factory,
    )
    return runner.run()


def _log_conversion_completion(source_path: Path, output_path: Path, count: int) -> None:
    _LOGGER.info(
        "conversion_completed",
        source_path=str(source_path),
        output_path=str(output_path),
        recipe_count=count,
    )
