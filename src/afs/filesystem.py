"""Filesystem facades over the afs functions.

RealFileSystem and AsyncRealFileSystem satisfy the FileSystem and
AsyncFileSystem protocols structurally, giving callers an injectable object
in place of the module-level functions.
"""

from __future__ import annotations

import os

from afs import checks, dirs, files, hashing, metadata
from afs.config import Settings, get_settings

PathArg = str | os.PathLike[str]


class RealFileSystem:
    """Production filesystem implementation backed by blocking I/O."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize filesystem.

        Args:
            settings: Encoding and hash buffer to use. Defaults to the
                environment-derived settings.
        """
        self.settings = settings or get_settings()

    def read_text(self, path: PathArg) -> str:
        """Read text content from a file."""
        return files.read_file_sync(path, encoding=self.settings.encoding)

    def write_text(self, path: PathArg, content: str) -> None:
        """Write text content to a file."""
        files.write_file_sync(path, content, encoding=self.settings.encoding)

    def append_text(self, path: PathArg, content: str) -> None:
        """Append text content to a file."""
        files.append_file_sync(path, content, encoding=self.settings.encoding)

    def touch(self, path: PathArg) -> None:
        """Create an empty file and any missing parents."""
        files.create_file_sync(path)

    def exists(self, path: PathArg) -> bool:
        """Check if a path exists."""
        return checks.exists_sync(path)

    def is_dir(self, path: PathArg) -> bool:
        """Check if a path is a directory."""
        return checks.is_dir_sync(path)

    def mkdir(self, path: PathArg, parents: bool = False) -> None:
        """Create a directory."""
        dirs.mkdir_sync(path, recursive=parents)

    def rmdir(self, path: PathArg, recursive: bool = False) -> None:
        """Remove a directory."""
        dirs.rmdir_sync(path, recursive=recursive)

    def unlink(self, path: PathArg) -> None:
        """Remove a file."""
        files.unlink_sync(path)

    def listdir(self, path: PathArg) -> list[str]:
        """List directory entry names."""
        return dirs.readdir_sync(path)

    def stat(self, path: PathArg) -> os.stat_result:
        """Return OS metadata for a path."""
        return metadata.stat_sync(path)

    def file_size(self, path: PathArg, follow_symlinks: bool = True) -> int:
        """Return the size of a file in bytes."""
        if follow_symlinks:
            return metadata.get_file_real_size_sync(path)
        return metadata.get_file_size_sync(path)

    def dir_size(self, path: PathArg) -> int:
        """Return the total size of regular files below a directory."""
        return metadata.get_dir_size_sync(path)

    def hash(self, path: PathArg) -> str:
        """Return the SHA-256 hex digest of a file."""
        return hashing.hash_sync(path, chunk_size=self.settings.hash_chunk_size)


class AsyncRealFileSystem:
    """Production filesystem implementation backed by aiofiles."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize filesystem.

        Args:
            settings: Encoding and hash buffer to use. Defaults to the
                environment-derived settings.
        """
        self.settings = settings or get_settings()

    async def read_text(self, path: PathArg) -> str:
        """Read text content from a file."""
        return await files.read_file(path, encoding=self.settings.encoding)

    async def write_text(self, path: PathArg, content: str) -> None:
        """Write text content to a file."""
        await files.write_file(path, content, encoding=self.settings.encoding)

    async def exists(self, path: PathArg) -> bool:
        """Check if a path exists."""
        return await checks.exists(path)

    async def is_dir(self, path: PathArg) -> bool:
        """Check if a path is a directory."""
        return await checks.is_dir(path)

    async def mkdir(self, path: PathArg, parents: bool = True) -> None:
        """Create a directory."""
        await dirs.mkdir(path, recursive=parents)

    async def rmdir(self, path: PathArg, recursive: bool = True) -> None:
        """Remove a directory."""
        await dirs.rmdir(path, recursive=recursive)

    async def unlink(self, path: PathArg) -> None:
        """Remove a file."""
        await files.unlink(path)

    async def hash(self, path: PathArg) -> str:
        """Return the SHA-256 hex digest of a file."""
        return await hashing.hash(path, chunk_size=self.settings.hash_chunk_size)
