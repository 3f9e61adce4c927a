"""Whole-file SHA-256 hashing."""

from __future__ import annotations

import hashlib
import os

import aiofiles

from afs.config import get_settings
from afs.errors import raise_fs_error

__all__ = ["hash", "hash_sync"]


def hash_sync(path: str | os.PathLike[str], chunk_size: int | None = None) -> str:
    """Compute the SHA-256 digest of a file's content.

    The file is streamed in fixed-size chunks rather than loaded at once.

    Args:
        path: File to hash.
        chunk_size: Read buffer in bytes. Defaults to the configured size.

    Returns:
        Lowercase hex digest (64 characters).
    """
    size = chunk_size or get_settings().hash_chunk_size
    hasher = hashlib.sha256()
    with raise_fs_error("hash", path):
        with open(path, "rb") as f:
            while chunk := f.read(size):
                hasher.update(chunk)
    return hasher.hexdigest()


async def hash(path: str | os.PathLike[str], chunk_size: int | None = None) -> str:
    """Compute the SHA-256 digest of a file's content.

    Produces the same digest as hash_sync for the same bytes.
    """
    size = chunk_size or get_settings().hash_chunk_size
    hasher = hashlib.sha256()
    with raise_fs_error("hash", path):
        async with aiofiles.open(path, "rb") as f:
            while chunk := await f.read(size):
                hasher.update(chunk)
    return hasher.hexdigest()
