"""Size reporting for files touched by a pass."""

from typing import Protocol

from rich.console import Console
from rich.table import Table

from copy_with_hash.constants import UNCHANGED_MARKER

BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB"]


def pretty_bytes(size: int | float) -> str:
    """
    Human-readable size in decimal units.

    Args:
        size: Number of bytes

    Returns:
        String such as ``0 B``, ``1.5 kB`` or ``123 MB``
    """
    sign = "-" if size < 0 else ""
    size = abs(size)
    if size < 1:
        return f"{sign}{size:g} B"

    exponent = 0
    while size >= 1000 and exponent < len(BYTE_UNITS) - 1:
        size /= 1000
        exponent += 1

    value = float(f"{size:.3g}")
    if value >= 1000 and exponent < len(BYTE_UNITS) - 1:
        # Rounding carried into the next unit (999_999 -> 1 MB)
        value = float(f"{value / 1000:.3g}")
        exponent += 1
    return f"{sign}{value:g} {BYTE_UNITS[exponent]}"


class ReportSink(Protocol):
    """Receives the sizes of files written (or kept) by a pass."""

    def report(self, format_label: str, files: dict[str, int]) -> None:
        ...


class RichReportSink:
    """Prints the size report as a rich table."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, format_label: str, files: dict[str, int]) -> None:
        if not files:
            return

        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("Format", style="bold blue")
        table.add_column("Path")
        table.add_column("Size", justify="right", style="green")

        for path, size in files.items():
            style = "dim" if path.startswith(UNCHANGED_MARKER) else None
            table.add_row(format_label, path, pretty_bytes(size), style=style)

        self.console.print(table)


class CollectingReportSink:
    """Keeps every report in memory."""

    def __init__(self):
        self.reports: list[tuple[str, dict[str, int]]] = []

    def report(self, format_label: str, files: dict[str, int]) -> None:
        self.reports.append((format_label, dict(files)))

    @property
    def last(self) -> dict[str, int]:
        return self.reports[-1][1] if self.reports else {}


__all__ = ["pretty_bytes", "ReportSink", "RichReportSink", "CollectingReportSink"]
