"""Porter exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each conversion stage raises a specific error type for debuggability.
"""

from __future__ import annotations


class PorterError(Exception):
    """Base exception for all Porter failures."""


class PorterConfigError(PorterError):
    """Raised for invalid runtime configuration."""


class PorterIngestError(PorterError):
    """Raised for source archive reading failures."""


class SourceArchiveError(PorterIngestError):
    """Raised when an archive cannot be opened or enumerated."""


class NameParseError(PorterIngestError):
    """Raised when an entry name is not ``<ordinal>-<title>.melarecipe``."""

    def __init__(self, message: str, entry_name: str) -> None:
        super().__init__(message)
        self.entry_name = entry_name


class DocumentParseError(PorterIngestError):
    """Raised when entry bytes are not a complete recipe document."""

    def __init__(self, message: str, entry_name: str) -> None:
        super().__init__(message)
        self.entry_name = entry_name


class PorterTransformError(PorterError):
    """Raised for field mapping failures."""


class RecordMappingError(PorterTransformError):
    """Raised when a source record cannot be mapped to the target schema."""


class URLParseError(PorterTransformError):
    """Raised for malformed recipe links.

    Host extraction reports malformed links as ``None`` instead, so the
    mapper never lets this error escape.
    """


class HashInputError(PorterError):
    """Raised when digest input is not a bytes-like object."""


class OutputIOError(PorterError):
    """Raised for target archive creation and write failures."""


class OutputExistsError(OutputIOError):
    """Raised when the output archive exists and overwrite is disabled."""


class DuplicateEntryError(OutputIOError):
    """Raised when two recipes map to the same entry name under ``reject``."""


class ConversionError(PorterError):
    """Raised by the pipeline driver when a conversion stage fails.

    Attributes:
        stage: Failing stage, one of ``read``, ``map`` or ``write``.
        entry: Description of the offending entry, if one was reached.
    """

    def __init__(self, message: str, stage: str, entry: str | None) -> None:
        super().__init__(message)
        self.stage = stage
        self.entry = entry
