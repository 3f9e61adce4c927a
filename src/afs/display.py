"""Console output for the afs command line."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from afs.metadata import DiskUsage, Metadata

_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_size(size: int) -> str:
    """Render a byte count with a binary unit, e.g. ``1.5 KiB``."""
    value = float(size)
    for unit in _UNITS:
        if value < 1024 or unit == _UNITS[-1]:
            if unit == "B":
                return f"{int(value)} {unit}"
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{size} B"


class Display:
    """Renders command results to the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to. Defaults to a stdout console.
        """
        self.console = console or Console()

    def show_value(self, value: object) -> None:
        """Print a raw value without markup interpretation."""
        self.console.print(value, markup=False, highlight=False, soft_wrap=True)

    def show_text(self, text: str) -> None:
        """Print file content verbatim."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True, end="")

    def show_listing(self, path: str, names: list[str]) -> None:
        """Display directory entries.

        Args:
            path: Directory that was listed.
            names: Entry names.
        """
        if not names:
            self.console.print(f"[yellow]{escape(path)} is empty[/yellow]")
            return
        for name in names:
            self.show_value(name)

    def show_metadata(self, path: str, meta: Metadata) -> None:
        """Display a metadata table.

        Args:
            path: Path the metadata belongs to.
            meta: Metadata snapshot.
        """
        table = Table(title=escape(path), show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")

        table.add_row("Kind", meta.kind)
        table.add_row("Size", f"{meta.size} ({format_size(meta.size)})")
        table.add_row("Mode", f"{meta.mode} ({meta.permissions:04o})")
        table.add_row("Accessed", meta.accessed.isoformat())
        table.add_row("Modified", meta.modified.isoformat())
        if meta.created is not None:
            table.add_row("Created", meta.created.isoformat())

        self.console.print(table)

    def show_disk_usage(self, usage: DiskUsage) -> None:
        """Display disk usage for a volume."""
        table = Table(title="Disk Usage")
        table.add_column("Total")
        table.add_column("Used")
        table.add_column("Free")
        table.add_column("Use%", style="cyan")
        table.add_row(
            format_size(usage.total),
            format_size(usage.used),
            format_size(usage.free),
            f"{usage.ratio:.1%}",
        )
        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}")
