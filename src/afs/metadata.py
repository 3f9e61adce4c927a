"""Metadata, size and disk usage queries."""

from __future__ import annotations

import logging
import os
import shutil
import stat as stat_mod
from datetime import datetime, timezone
from typing import Literal

import aiofiles.os
from aiofiles.ospath import wrap
from pydantic import BaseModel, ConfigDict

from afs.errors import raise_fs_error

__all__ = [
    "DiskUsage",
    "Metadata",
    "disk_usage_info",
    "disk_usage_info_sync",
    "diskusage",
    "diskusage_sync",
    "get_dir_size",
    "get_dir_size_sync",
    "get_file_real_size",
    "get_file_real_size_sync",
    "get_file_size",
    "get_file_size_sync",
    "stat",
    "stat_sync",
]

logger = logging.getLogger(__name__)

_disk_usage = wrap(shutil.disk_usage)

FileKind = Literal["file", "directory", "symlink", "other"]


class Metadata(BaseModel):
    """Snapshot of OS-reported attributes at the instant of the call."""

    model_config = ConfigDict(frozen=True)

    size: int
    kind: FileKind
    permissions: int
    mode: str
    accessed: datetime
    modified: datetime
    created: datetime | None = None

    @classmethod
    def from_stat(cls, result: os.stat_result) -> Metadata:
        """Build a snapshot from an os.stat_result."""
        mode = result.st_mode
        if stat_mod.S_ISLNK(mode):
            kind: FileKind = "symlink"
        elif stat_mod.S_ISDIR(mode):
            kind = "directory"
        elif stat_mod.S_ISREG(mode):
            kind = "file"
        else:
            kind = "other"

        # st_birthtime only exists on macOS/BSD and Windows (3.12+)
        birth = getattr(result, "st_birthtime", None)
        return cls(
            size=result.st_size,
            kind=kind,
            permissions=stat_mod.S_IMODE(mode),
            mode=stat_mod.filemode(mode),
            accessed=_timestamp(result.st_atime),
            modified=_timestamp(result.st_mtime),
            created=_timestamp(birth) if birth is not None else None,
        )


def _timestamp(value: float) -> datetime:
    return datetime.fromtimestamp(value, tz=timezone.utc)


class DiskUsage(BaseModel):
    """Disk statistics for a volume, in bytes."""

    model_config = ConfigDict(frozen=True)

    total: int
    used: int
    free: int

    @property
    def ratio(self) -> float:
        """Fraction of the volume in use."""
        if self.total == 0:
            return 0.0
        return self.used / self.total


def stat_sync(path: str | os.PathLike[str]) -> os.stat_result:
    """Return the OS metadata of a path, following symlinks."""
    with raise_fs_error("stat", path):
        return os.stat(path)


async def stat(path: str | os.PathLike[str]) -> os.stat_result:
    """Return the OS metadata of a path, following symlinks."""
    with raise_fs_error("stat", path):
        return await aiofiles.os.stat(path)


def get_file_size_sync(path: str | os.PathLike[str]) -> int:
    """Return the size field of the path's own metadata.

    A symbolic link reports its own size, not its target's.
    """
    with raise_fs_error("get_file_size", path):
        return os.lstat(path).st_size


async def get_file_size(path: str | os.PathLike[str]) -> int:
    """Return the size field of the path's own metadata.

    A symbolic link reports its own size, not its target's.
    """
    with raise_fs_error("get_file_size", path):
        result = await aiofiles.os.stat(path, follow_symlinks=False)
    return result.st_size


def get_file_real_size_sync(path: str | os.PathLike[str]) -> int:
    """Return the size of the file, following symbolic links to their target."""
    with raise_fs_error("get_file_real_size", path):
        return os.stat(path).st_size


async def get_file_real_size(path: str | os.PathLike[str]) -> int:
    """Return the size of the file, following symbolic links to their target."""
    with raise_fs_error("get_file_real_size", path):
        result = await aiofiles.os.stat(path)
    return result.st_size


def get_dir_size_sync(path: str | os.PathLike[str]) -> int:
    """Sum the sizes of all regular files below a directory.

    The walk is depth-first and does not follow symbolic links. The first
    unreadable entry aborts the walk.

    Args:
        path: Directory to measure.

    Returns:
        Total size in bytes.

    Raises:
        FsError: If any directory or entry cannot be read.
    """
    total = 0
    stack = [os.fspath(path)]
    while stack:
        current = stack.pop()
        with raise_fs_error("get_dir_size", current):
            with os.scandir(current) as entries:
                for entry in entries:
                    entry_stat = entry.stat(follow_symlinks=False)
                    if stat_mod.S_ISREG(entry_stat.st_mode):
                        total += entry_stat.st_size
                    elif stat_mod.S_ISDIR(entry_stat.st_mode):
                        stack.append(entry.path)
    logger.debug("Directory size of %s: %d bytes", path, total)
    return total


async def get_dir_size(path: str | os.PathLike[str]) -> int:
    """Sum the sizes of all regular files below a directory.

    Async counterpart of get_dir_size_sync with the same walk semantics.
    """
    total = 0
    stack = [os.fspath(path)]
    while stack:
        current = stack.pop()
        with raise_fs_error("get_dir_size", current):
            names = await aiofiles.os.listdir(current)
        for name in names:
            child = os.path.join(current, name)
            with raise_fs_error("get_dir_size", child):
                child_stat = await aiofiles.os.stat(child, follow_symlinks=False)
            if stat_mod.S_ISREG(child_stat.st_mode):
                total += child_stat.st_size
            elif stat_mod.S_ISDIR(child_stat.st_mode):
                stack.append(child)
    logger.debug("Directory size of %s: %d bytes", path, total)
    return total


def disk_usage_info_sync(path: str | os.PathLike[str] | None = None) -> DiskUsage:
    """Return disk statistics for the volume holding ``path`` (default: cwd)."""
    target = os.getcwd() if path is None else path
    with raise_fs_error("diskusage", target):
        usage = shutil.disk_usage(target)
    return DiskUsage(total=usage.total, used=usage.used, free=usage.free)


async def disk_usage_info(path: str | os.PathLike[str] | None = None) -> DiskUsage:
    """Return disk statistics for the volume holding ``path`` (default: cwd)."""
    target = os.getcwd() if path is None else path
    with raise_fs_error("diskusage", target):
        usage = await _disk_usage(target)
    return DiskUsage(total=usage.total, used=usage.used, free=usage.free)


def diskusage_sync() -> float:
    """Return the used/total ratio of the current working volume."""
    return disk_usage_info_sync().ratio


async def diskusage() -> float:
    """Return the used/total ratio of the current working volume."""
    return (await disk_usage_info()).ratio
