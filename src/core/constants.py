"""Core constants used across Porter modules.

This module centralizes archive formats and conversion defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

MELA_RECIPE_EXTENSION = ".melarecipe"
PAPRIKA_RECIPE_EXTENSION = ".paprikarecipe"
MELA_EPOCH_OFFSET_SECONDS = 978307200
MILLISECONDS_PER_SECOND = 1000
CREATED_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HASH_ALGORITHM = "sha256"
FAVORITE_RATING = 5
DEFAULT_RATING = 0
DEFAULT_GZIP_LEVEL = 9
DUPLICATE_NAMES_SUFFIX = "suffix"
DUPLICATE_NAMES_REJECT = "reject"
SUPPORTED_DUPLICATE_NAME_POLICIES = (DUPLICATE_NAMES_SUFFIX, DUPLICATE_NAMES_REJECT)
DEFAULT_DUPLICATE_NAME_POLICY = DUPLICATE_NAMES_SUFFIX
TEMP_ARCHIVE_SUFFIX = ".partial"
