"""Object id utilities for gitpeek."""

import string
from typing import Tuple

from .errors import InvalidHashError

# Raw length of a SHA-1 object id inside tree entries
OBJECT_ID_LENGTH = 20
HEX_LENGTH = OBJECT_ID_LENGTH * 2
MIN_PREFIX_LENGTH = 4

_HEX_DIGITS = set(string.hexdigits.lower())


def to_hex(raw: bytes) -> str:
    """
    Render raw object id bytes as lowercase hex.

    Args:
        raw: Binary object id

    Returns:
        str: Lowercase hex string, two characters per byte
    """
    return raw.hex()


def normalize_hash(object_hash: str) -> str:
    """
    Validate and lowercase an object id or abbreviated prefix.

    Args:
        object_hash: Full 40-character id or a prefix of at least 4 characters

    Returns:
        str: Lowercased id

    Raises:
        InvalidHashError: If the id is too short, too long or not hex
    """
    value = object_hash.strip().lower()

    if len(value) < MIN_PREFIX_LENGTH or len(value) > HEX_LENGTH:
        raise InvalidHashError(
            f"Invalid object id '{object_hash}': expected {MIN_PREFIX_LENGTH} to "
            f"{HEX_LENGTH} hex characters"
        )

    if not all(c in _HEX_DIGITS for c in value):
        raise InvalidHashError(f"Invalid object id '{object_hash}': not hexadecimal")

    return value


def is_full_hash(object_hash: str) -> bool:
    """Check whether an already-normalized id is a full 40-character id."""
    return len(object_hash) == HEX_LENGTH


def split_hash(object_hash: str) -> Tuple[str, str]:
    """
    Split an object id into its fan-out directory and file name.

    Objects are stored in subdirectories named by the first 2 characters
    of the id, with the remaining characters as the filename.

    Args:
        object_hash: Normalized object id

    Returns:
        Tuple of (directory, filename)
    """
    return object_hash[:2], object_hash[2:]
