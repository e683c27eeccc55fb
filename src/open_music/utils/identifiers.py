"""Prefixed string identifiers for albums, likes, and users.

Identifiers look like ``album-V1StGXR8_Z5jdHi6``: a resource prefix, a dash,
and a 16 character suffix drawn from the URL-safe alphabet.
"""

import re
import secrets
import string
from typing import NewType

ALPHABET = string.ascii_letters + string.digits + "_-"
SUFFIX_LENGTH = 16

AlbumId = NewType("AlbumId", str)
LikeId = NewType("LikeId", str)
UserId = NewType("UserId", str)

_ALBUM_ID_PATTERN = re.compile(rf"album-[A-Za-z0-9_-]{{{SUFFIX_LENGTH}}}")


def _new_id(prefix: str) -> str:
    suffix = "".join(secrets.choice(ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{prefix}-{suffix}"


def new_album_id() -> AlbumId:
    """Generate a new album identifier."""
    return AlbumId(_new_id("album"))


def new_like_id() -> LikeId:
    """Generate a new album like identifier."""
    return LikeId(_new_id("like"))


def new_user_id() -> UserId:
    """Generate a new user identifier."""
    return UserId(_new_id("user"))


def validate_album_id(value: str) -> AlbumId:
    """Check that a raw string is a well-formed album identifier.

    Raises:
        ValueError: If the value does not carry the ``album-`` prefix
            followed by a valid suffix.
    """
    if not _ALBUM_ID_PATTERN.fullmatch(value):
        raise ValueError(f"Malformed album id: {value!r}")
    return AlbumId(value)
