"""Digest helpers for derived identifier fields.

This module hashes raw bytes with the configured digest algorithm.
Paprika stores digests as uppercase hexadecimal strings.
"""

from __future__ import annotations

import hashlib

from core.constants import HASH_ALGORITHM
from core.errors import HashInputError


def sha256_hex(data: bytes) -> str:
    """Hash raw bytes using the configured digest algorithm.

    Args:
        data: Input bytes; empty input is valid.

    Returns:
        Uppercase hex digest string.

    Raises:
        HashInputError: If data is not bytes-like.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise HashInputError(
            f"Cannot hash value of type {type(data).__name__}: expected bytes. "
            "Encode text with .encode('utf-8') before hashing."
        )
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(data)
    return hasher.hexdigest().upper()
