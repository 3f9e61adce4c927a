"""Protocol definitions for the filesystem facades.

Code that wants to swap the real filesystem for a test double depends on
these protocols instead of the module-level functions. Implementations
satisfy them structurally (duck typing).
"""

from __future__ import annotations

import os
from typing import Protocol, runtime_checkable

PathArg = str | os.PathLike[str]


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for blocking filesystem operations."""

    def read_text(self, path: PathArg) -> str:
        """Read text content from a file.

        Raises:
            FsError: If the file cannot be read.
        """
        ...

    def write_text(self, path: PathArg, content: str) -> None:
        """Write text content to a file, replacing it."""
        ...

    def append_text(self, path: PathArg, content: str) -> None:
        """Append text content to a file."""
        ...

    def touch(self, path: PathArg) -> None:
        """Create an empty file and any missing parents."""
        ...

    def exists(self, path: PathArg) -> bool:
        """Check if a path exists."""
        ...

    def is_dir(self, path: PathArg) -> bool:
        """Check if a path is a directory."""
        ...

    def mkdir(self, path: PathArg, parents: bool = False) -> None:
        """Create a directory.

        Args:
            path: Directory to create.
            parents: Create missing parents, accepting an existing target.
        """
        ...

    def rmdir(self, path: PathArg, recursive: bool = False) -> None:
        """Remove a directory, optionally with its contents."""
        ...

    def unlink(self, path: PathArg) -> None:
        """Remove a file."""
        ...

    def listdir(self, path: PathArg) -> list[str]:
        """List directory entry names, sorted."""
        ...

    def stat(self, path: PathArg) -> os.stat_result:
        """Return OS metadata for a path."""
        ...

    def file_size(self, path: PathArg, follow_symlinks: bool = True) -> int:
        """Return the size of a file in bytes."""
        ...

    def dir_size(self, path: PathArg) -> int:
        """Return the total size of regular files below a directory."""
        ...

    def hash(self, path: PathArg) -> str:
        """Return the SHA-256 hex digest of a file."""
        ...


@runtime_checkable
class AsyncFileSystem(Protocol):
    """Protocol for cooperative filesystem operations."""

    async def read_text(self, path: PathArg) -> str:
        """Read text content from a file."""
        ...

    async def write_text(self, path: PathArg, content: str) -> None:
        """Write text content to a file, replacing it."""
        ...

    async def exists(self, path: PathArg) -> bool:
        """Check if a path exists."""
        ...

    async def is_dir(self, path: PathArg) -> bool:
        """Check if a path is a directory."""
        ...

    async def mkdir(self, path: PathArg, parents: bool = True) -> None:
        """Create a directory and, by default, its parents."""
        ...

    async def rmdir(self, path: PathArg, recursive: bool = True) -> None:
        """Remove a directory and, by default, its contents."""
        ...

    async def unlink(self, path: PathArg) -> None:
        """Remove a file."""
        ...

    async def hash(self, path: PathArg) -> str:
        """Return the SHA-256 hex digest of a file."""
        ...
