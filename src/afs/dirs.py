"""Directory operations.

The blocking and cooperative variants default to different recursion
policies, matching the node:fs-inspired API this library mirrors:
``mkdir_sync``/``rmdir_sync`` act on a single level while ``mkdir``/``rmdir``
are recursive. Pass ``recursive`` explicitly to get the other behavior.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat as stat_mod

import aiofiles.os
from aiofiles.ospath import wrap

from afs.errors import ErrorKind, FsError, raise_fs_error

__all__ = [
    "copy_dir",
    "copy_dir_sync",
    "mkdir",
    "mkdir_sync",
    "readdir",
    "readdir_sync",
    "rmdir",
    "rmdir_sync",
]

logger = logging.getLogger(__name__)

_copy_file = wrap(shutil.copy2)


def mkdir_sync(path: str | os.PathLike[str], recursive: bool = False) -> None:
    """Create a directory.

    Args:
        path: Directory to create.
        recursive: Create missing parents and accept an existing target.
            Off by default: exactly one level is created and a missing parent
            or an existing target is an error.
    """
    with raise_fs_error("mkdir", path):
        if recursive:
            os.makedirs(path, exist_ok=True)
        else:
            os.mkdir(path)
    logger.debug("Created directory %s", path)


async def mkdir(path: str | os.PathLike[str], recursive: bool = True) -> None:
    """Create a directory and, by default, all missing parents.

    Args:
        path: Directory to create.
        recursive: On by default, which makes the call idempotent.
    """
    with raise_fs_error("mkdir", path):
        if recursive:
            await aiofiles.os.makedirs(path, exist_ok=True)
        else:
            await aiofiles.os.mkdir(path)
    logger.debug("Created directory %s", path)


def rmdir_sync(path: str | os.PathLike[str], recursive: bool = False) -> None:
    """Remove a directory.

    Args:
        path: Directory to remove.
        recursive: Remove all contents too. Off by default, in which case a
            non-empty directory is an error.
    """
    with raise_fs_error("rmdir", path):
        if recursive:
            shutil.rmtree(path)
        else:
            os.rmdir(path)
    logger.debug("Removed directory %s", path)


async def rmdir(path: str | os.PathLike[str], recursive: bool = True) -> None:
    """Remove a directory and, by default, everything below it.

    The walk is depth-first. A failure midway leaves the remaining tree in
    place and raises the first error.
    """
    if not recursive:
        with raise_fs_error("rmdir", path):
            await aiofiles.os.rmdir(path)
        logger.debug("Removed directory %s", path)
        return

    root = os.fspath(path)
    with raise_fs_error("rmdir", root):
        root_stat = await aiofiles.os.stat(root, follow_symlinks=False)
    if stat_mod.S_ISLNK(root_stat.st_mode):
        raise FsError(
            ErrorKind.INVALID_ARGUMENT, "rmdir", root, "cannot recursively remove a symbolic link"
        )

    # Directories are removed in reverse discovery order, children first.
    pending = [root]
    discovered: list[str] = []
    while pending:
        current = pending.pop()
        discovered.append(current)
        with raise_fs_error("rmdir", current):
            names = await aiofiles.os.listdir(current)
        for name in names:
            child = os.path.join(current, name)
            with raise_fs_error("rmdir", child):
                child_stat = await aiofiles.os.stat(child, follow_symlinks=False)
                if stat_mod.S_ISDIR(child_stat.st_mode):
                    pending.append(child)
                else:
                    await aiofiles.os.unlink(child)

    for directory in reversed(discovered):
        with raise_fs_error("rmdir", directory):
            await aiofiles.os.rmdir(directory)
    logger.debug("Removed directory tree %s", root)


def readdir_sync(path: str | os.PathLike[str]) -> list[str]:
    """List the entry names of a directory, sorted."""
    with raise_fs_error("readdir", path):
        return sorted(os.listdir(path))


async def readdir(path: str | os.PathLike[str]) -> list[str]:
    """List the entry names of a directory, sorted."""
    with raise_fs_error("readdir", path):
        names: list[str] = await aiofiles.os.listdir(path)
    return sorted(names)


def copy_dir_sync(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Copy a directory tree. Symbolic links are copied as links.

    Raises:
        FsError: If ``dst`` already exists or any entry fails to copy.
    """
    with raise_fs_error("copy_dir", src):
        shutil.copytree(src, dst, symlinks=True)
    logger.debug("Copied directory %s to %s", src, dst)


async def copy_dir(src: str | os.PathLike[str], dst: str | os.PathLike[str]) -> None:
    """Copy a directory tree. Symbolic links are copied as links.

    Async counterpart of copy_dir_sync.
    """
    pending = [(os.fspath(src), os.fspath(dst))]
    while pending:
        source, target = pending.pop()
        with raise_fs_error("copy_dir", source):
            await aiofiles.os.mkdir(target)
            names = await aiofiles.os.listdir(source)
        for name in names:
            child_src = os.path.join(source, name)
            child_dst = os.path.join(target, name)
            with raise_fs_error("copy_dir", child_src):
                child_stat = await aiofiles.os.stat(child_src, follow_symlinks=False)
                if stat_mod.S_ISLNK(child_stat.st_mode):
                    link_target = await aiofiles.os.readlink(child_src)
                    await aiofiles.os.symlink(link_target, child_dst)
                elif stat_mod.S_ISDIR(child_stat.st_mode):
                    pending.append((child_src, child_dst))
                else:
                    await _copy_file(child_src, child_dst)
    logger.debug("Copied directory %s to %s", src, dst)
