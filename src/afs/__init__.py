"""Filesystem utilities with a node:fs style sync/async API."""

__version__ = "0.1.2"

from afs.checks import (
    dir_exists,
    dir_exists_sync,
    exists,
    exists_sync,
    file_exists,
    file_exists_sync,
    is_dir,
    is_dir_sync,
    is_file,
    is_file_sync,
    is_symlink,
    is_symlink_sync,
)
from afs.config import Settings, get_settings, reset_settings
from afs.dirs import (
    copy_dir,
    copy_dir_sync,
    mkdir,
    mkdir_sync,
    readdir,
    readdir_sync,
    rmdir,
    rmdir_sync,
)
from afs.errors import CommandNotFoundError, ErrorKind, FsError
from afs.files import (
    append_file,
    append_file_sync,
    create_file,
    create_file_sync,
    read_bytes,
    read_bytes_sync,
    read_file,
    read_file_sync,
    unlink,
    unlink_sync,
    write_bytes,
    write_bytes_sync,
    write_file,
    write_file_sync,
)
from afs.filesystem import AsyncRealFileSystem, RealFileSystem
from afs.hashing import hash, hash_sync
from afs.jsonio import (
    read_from_json,
    read_from_json_sync,
    read_json,
    read_json_sync,
    write_to_json,
    write_to_json_sync,
)
from afs.metadata import (
    DiskUsage,
    Metadata,
    disk_usage_info,
    disk_usage_info_sync,
    diskusage,
    diskusage_sync,
    get_dir_size,
    get_dir_size_sync,
    get_file_real_size,
    get_file_real_size_sync,
    get_file_size,
    get_file_size_sync,
    stat,
    stat_sync,
)
from afs.paths import basename, dirname, filename, get_filepath, normalize_path, resolve
from afs.protocols import AsyncFileSystem, FileSystem
from afs.system import (
    chmod,
    chmod_sync,
    create_tempdir,
    create_tempfile,
    mktempdir,
    mktempdir_sync,
    mktempfile,
    mktempfile_sync,
    parse_mode,
    soft_link,
    temporary_directory,
    temporary_file,
    which,
)

__all__ = [
    "__version__",
    # Errors and configuration
    "CommandNotFoundError",
    "ErrorKind",
    "FsError",
    "Settings",
    "get_settings",
    "reset_settings",
    # Path utilities
    "basename",
    "dirname",
    "filename",
    "get_filepath",
    "normalize_path",
    "resolve",
    # Existence and type checks
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
    # Metadata and sizes
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
    # File content
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
    # Directories
    "copy_dir",
    "copy_dir_sync",
    "mkdir",
    "mkdir_sync",
    "readdir",
    "readdir_sync",
    "rmdir",
    "rmdir_sync",
    # JSON
    "read_from_json",
    "read_from_json_sync",
    "read_json",
    "read_json_sync",
    "write_to_json",
    "write_to_json_sync",
    # Hashing
    "hash",
    "hash_sync",
    # System
    "chmod",
    "chmod_sync",
    "create_tempdir",
    "create_tempfile",
    "mktempdir",
    "mktempdir_sync",
    "mktempfile",
    "mktempfile_sync",
    "parse_mode",
    "soft_link",
    "temporary_directory",
    "temporary_file",
    "which",
    # Facades for dependency injection
    "AsyncFileSystem",
    "AsyncRealFileSystem",
    "FileSystem",
    "RealFileSystem",
]
