"""File content operations.

Text is read and written with the configured encoding and newlines are
passed through untranslated, so a write followed by a read returns exactly
the original string.
"""

from __future__ import annotations

import logging
import os
import stat as stat_mod

import aiofiles
import aiofiles.os

from afs.config import get_settings
from afs.errors import ErrorKind, FsError, raise_fs_error
from afs.paths import normalize_path

__all__ = [
    "append_file",
    "append_file_sync",
    "create_file",
    "create_file_sync",
    "read_bytes",
    "read_bytes_sync",
    "read_file",
    "read_file_sync",
    "unlink",
    "unlink_sync",
    "write_bytes",
    "write_bytes_sync",
    "write_file",
    "write_file_sync",
]

logger = logging.getLogger(__name__)


def _encoding(encoding: str | None) -> str:
    return encoding or get_settings().encoding


def read_file_sync(path: str | os.PathLike[str], encoding: str | None = None) -> str:
    """Read the whole file as text.

    Args:
        path: File to read.
        encoding: Text encoding. Defaults to the configured encoding.
    """
    with raise_fs_error("read_file", path):
        with open(path, encoding=_encoding(encoding), newline="") as f:
            return f.read()


async def read_file(path: str | os.PathLike[str], encoding: str | None = None) -> str:
    """Read the whole file as text."""
    with raise_fs_error("read_file", path):
        async with aiofiles.open(path, encoding=_encoding(encoding), newline="") as f:
            content: str = await f.read()
            return content


def write_file_sync(
    path: str | os.PathLike[str], content: str, encoding: str | None = None
) -> None:
    """Write text to a file, creating or truncating it."""
    with raise_fs_error("write_file", path):
        with open(path, "w", encoding=_encoding(encoding), newline="") as f:
            f.write(content)
    logger.debug("Wrote %d characters to %s", len(content), path)


async def write_file(
    path: str | os.PathLike[str], content: str, encoding: str | None = None
) -> None:
    """Write text to a file, creating or truncating it."""
    with raise_fs_error("write_file", path):
        async with aiofiles.open(path, "w", encoding=_encoding(encoding), newline="") as f:
            await f.write(content)
    logger.debug("Wrote %d characters to %s", len(content), path)


def append_file_sync(
    path: str | os.PathLike[str], content: str, encoding: str | None = None
) -> None:
    """Append text to a file, creating it if missing."""
    with raise_fs_error("append_file", path):
        with open(path, "a", encoding=_encoding(encoding), newline="") as f:
            f.write(content)


async def append_file(
    path: str | os.PathLike[str], content: str, encoding: str | None = None
) -> None:
    """Append text to a file, creating it if missing."""
    with raise_fs_error("append_file", path):
        async with aiofiles.open(path, "a", encoding=_encoding(encoding), newline="") as f:
            await f.write(content)


def read_bytes_sync(path: str | os.PathLike[str]) -> bytes:
    """Read the whole file as bytes."""
    with raise_fs_error("read_bytes", path):
        with open(path, "rb") as f:
            return f.read()


async def read_bytes(path: str | os.PathLike[str]) -> bytes:
    """Read the whole file as bytes."""
    with raise_fs_error("read_bytes", path):
        async with aiofiles.open(path, "rb") as f:
            data: bytes = await f.read()
            return data


def write_bytes_sync(path: str | os.PathLike[str], data: bytes) -> None:
    """Write bytes to a file, creating or truncating it."""
    with raise_fs_error("write_bytes", path):
        with open(path, "wb") as f:
            f.write(data)


async def write_bytes(path: str | os.PathLike[str], data: bytes) -> None:
    """Write bytes to a file, creating or truncating it."""
    with raise_fs_error("write_bytes", path):
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)


def _existing_mode_sync(path: str) -> int | None:
    try:
        return os.stat(path).st_mode
    except FileNotFoundError:
        return None


def create_file_sync(path: str | os.PathLike[str]) -> None:
    """Create an empty file, creating any missing parent directories.

    Succeeds without touching the file if it already exists.

    Args:
        path: File to create.

    Raises:
        FsError: If the path exists but is not a file, or a parent component
            exists but is not a directory.
    """
    target = normalize_path(path)
    with raise_fs_error("create_file", target):
        mode = _existing_mode_sync(target)
        if mode is not None:
            if stat_mod.S_ISREG(mode):
                return
            raise FsError(
                ErrorKind.ALREADY_EXISTS, "create_file", target, "path exists and is not a file"
            )

        parent = os.path.dirname(target)
        if parent:
            parent_mode = _existing_mode_sync(parent)
            if parent_mode is None:
                logger.debug("Creating parent directories for %s", target)
                os.makedirs(parent, exist_ok=True)
            elif not stat_mod.S_ISDIR(parent_mode):
                raise FsError(
                    ErrorKind.ALREADY_EXISTS,
                    "create_file",
                    target,
                    f"parent {parent} is not a directory",
                )

        with open(target, "w", encoding=get_settings().encoding):
            pass
    logger.debug("Created file %s", target)


async def create_file(path: str | os.PathLike[str]) -> None:
    """Create an empty file, creating any missing parent directories.

    Async counterpart of create_file_sync.
    """
    target = normalize_path(path)
    with raise_fs_error("create_file", target):
        try:
            mode: int | None = (await aiofiles.os.stat(target)).st_mode
        except FileNotFoundError:
            mode = None
        if mode is not None:
            if stat_mod.S_ISREG(mode):
                return
            raise FsError(
                ErrorKind.ALREADY_EXISTS, "create_file", target, "path exists and is not a file"
            )

        parent = os.path.dirname(target)
        if parent:
            await aiofiles.os.makedirs(parent, exist_ok=True)

        async with aiofiles.open(target, "w", encoding=get_settings().encoding):
            pass
    logger.debug("Created file %s", target)


def unlink_sync(path: str | os.PathLike[str]) -> None:
    """Remove a file. A symbolic link is removed, not its target."""
    with raise_fs_error("unlink", path):
        os.unlink(path)
    logger.debug("Removed file %s", path)


async def unlink(path: str | os.PathLike[str]) -> None:
    """Remove a file. A symbolic link is removed, not its target."""
    with raise_fs_error("unlink", path):
        await aiofiles.os.unlink(path)
    logger.debug("Removed file %s", path)
