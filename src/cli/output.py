"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
status messages, a spinner around remote calls, page records rendered as a
table and prune summaries. Supports verbosity levels and --no-color.
"""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from src.content_lifecycle.models import PruneResult
from src.models.content_record import ContentRecord


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1 or more=info)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Page updated")
        >>> with handler.spinner("Updating page..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1 or more=info)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a remote call runs.

        Example:
            >>> with handler.spinner("Fetching page..."):
            ...     client.fetch_by_id(123)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.console, refresh_per_second=10, transient=True):
            yield

    def print_record(self, record: ContentRecord, show_body: bool = True) -> None:
        """Display a page record as a two-column table.

        Args:
            record: Canonical record to display
            show_body: Include the storage-format body
        """
        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column("field", style="bold")
        table.add_column("value", overflow="fold")

        rows = [
            ("id", str(record.id)),
            ("title", record.title),
            ("space_id", str(record.space_id)),
            ("parent_id", str(record.parent_id)),
            ("version", str(record.version_number)),
            ("created_at", record.created_at.isoformat() if record.created_at else ""),
            (
                "version_created_at",
                record.version_created_at.isoformat() if record.version_created_at else "",
            ),
        ]
        if show_body:
            rows.append(("body", record.body_markup))

        # Text cells: titles and bodies may contain '[' which Rich reads as markup
        for name, value in rows:
            table.add_row(name, Text(value))

        self.console.print(table)

    def print_prune_summary(self, result: PruneResult) -> None:
        """Display the outcome of a version pruning pass."""
        if result.requested == 0:
            self.console.print(f"\n[green]Page {result.page_id} has no old versions to delete[/green]")
            return

        self.console.print("\n[bold]Prune Summary:[/bold]")
        self.console.print(f"  [green]✓[/green] Deleted: {result.deleted} version(s)")
        if result.failed_statuses:
            statuses = ", ".join(str(status) for status in result.failed_statuses)
            self.warning(
                f"Not deleted: {len(result.failed_statuses)} version(s) (status {statuses})"
            )
            self.warning("Prune completed with warnings")
        else:
            self.console.print("\n[green]Prune completed successfully[/green]")
