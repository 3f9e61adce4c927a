"""Existence and type predicates.

Each predicate issues one metadata query and classifies the mode. Any
failure, a missing path included, is reported as False.
"""

from __future__ import annotations

import os
import stat as stat_mod

import aiofiles.os

from afs.paths import normalize_path

__all__ = [
    "dir_exists",
    "dir_exists_sync",
    "exists",
    "exists_sync",
    "file_exists",
    "file_exists_sync",
    "is_dir",
    "is_dir_sync",
    "is_file",
    "is_file_sync",
    "is_symlink",
    "is_symlink_sync",
]


def _mode_sync(path: str | os.PathLike[str], follow_symlinks: bool = True) -> int | None:
    try:
        return os.stat(normalize_path(path), follow_symlinks=follow_symlinks).st_mode
    except (OSError, ValueError):
        return None


async def _mode(path: str | os.PathLike[str], follow_symlinks: bool = True) -> int | None:
    try:
        result = await aiofiles.os.stat(normalize_path(path), follow_symlinks=follow_symlinks)
    except (OSError, ValueError):
        return None
    return result.st_mode


def exists_sync(path: str | os.PathLike[str]) -> bool:
    """Check if a path exists."""
    return _mode_sync(path) is not None


async def exists(path: str | os.PathLike[str]) -> bool:
    """Check if a path exists."""
    return await _mode(path) is not None


def is_file_sync(path: str | os.PathLike[str]) -> bool:
    """Check if a path is a regular file, following symlinks."""
    mode = _mode_sync(path)
    return mode is not None and stat_mod.S_ISREG(mode)


async def is_file(path: str | os.PathLike[str]) -> bool:
    """Check if a path is a regular file, following symlinks."""
    mode = await _mode(path)
    return mode is not None and stat_mod.S_ISREG(mode)


def is_dir_sync(path: str | os.PathLike[str]) -> bool:
    """Check if a path is a directory, following symlinks."""
    mode = _mode_sync(path)
    return mode is not None and stat_mod.S_ISDIR(mode)


async def is_dir(path: str | os.PathLike[str]) -> bool:
    """Check if a path is a directory, following symlinks."""
    mode = await _mode(path)
    return mode is not None and stat_mod.S_ISDIR(mode)


def is_symlink_sync(path: str | os.PathLike[str]) -> bool:
    """Check if a path is itself a symbolic link."""
    mode = _mode_sync(path, follow_symlinks=False)
    return mode is not None and stat_mod.S_ISLNK(mode)


async def is_symlink(path: str | os.PathLike[str]) -> bool:
    """Check if a path is itself a symbolic link."""
    mode = await _mode(path, follow_symlinks=False)
    return mode is not None and stat_mod.S_ISLNK(mode)


# Node-style aliases
file_exists_sync = is_file_sync
file_exists = is_file
dir_exists_sync = is_dir_sync
dir_exists = is_dir
