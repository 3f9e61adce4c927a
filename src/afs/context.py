"""Application context for dependency injection.

CLI commands take their collaborators from an AppContext instead of
constructing them, so tests can pass test doubles without patching imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from afs.config import Settings, get_settings
from afs.protocols import FileSystem


def _default_filesystem(settings: Settings | None = None) -> FileSystem:
    """Create the default filesystem implementation."""
    from afs.filesystem import RealFileSystem

    return RealFileSystem(settings)


@dataclass
class AppContext:
    """Container for CLI dependencies.

    The filesystem is typed by its Protocol, not the concrete class, so any
    structurally compatible double can be injected. When none is given, a
    RealFileSystem is built from ``settings``.
    """

    filesystem: FileSystem = field(default=None)  # type: ignore[assignment]
    settings: Settings = field(default_factory=get_settings)

    def __post_init__(self) -> None:
        if self.filesystem is None:
            self.filesystem = _default_filesystem(self.settings)


def create_context(settings: Settings | None = None) -> AppContext:
    """Factory for application dependencies.

    Args:
        settings: Override settings (for testing). Defaults to the
            environment-derived settings.

    Returns:
        Configured AppContext whose filesystem uses ``settings``.
    """
    resolved = settings or get_settings()
    return AppContext(filesystem=_default_filesystem(resolved), settings=resolved)
