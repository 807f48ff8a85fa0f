"""
Console output utilities built on Rich.
"""

from typing import Optional, List

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


class Console:
    """
    Operator-facing console output.

    Wraps a Rich console so steps print consistently styled status lines,
    step headers and summary tables.
    """

    def __init__(self, no_color: bool = False, quiet: bool = False, rich_console: Optional[RichConsole] = None):
        """
        Initialize the console.

        Args:
            no_color: Disable all colors in output
            quiet: Suppress info and success lines
            rich_console: Pre-built Rich console (used by tests to capture output)
        """
        self.no_color = no_color
        self.quiet = quiet
        self._console = rich_console or RichConsole(
            color_system=None if no_color else "auto",
            highlight=False,
        )

    def print(self, message: str = "", style: Optional[str] = None) -> None:
        """Print a message with optional styling."""
        self._console.print(message, style=style)

    def print_banner(self) -> None:
        """Print the provisioning banner."""
        banner = (
            "\n"
            "   Machine setup\n"
            "   Homebrew - Go - Oh My Zsh - dotfiles - editors - SSH\n"
        )
        self._console.print(Panel(banner, style="bold blue", title="devsetup", border_style="blue"))

    def print_step(self, step_num: int, total_steps: int, step_name: str) -> None:
        """Print a formatted step header."""
        self._console.print()
        self._console.print(f"[bold blue]Step {step_num}/{total_steps}: {escape(step_name)}[/bold blue]")
        self._console.print("[cyan]" + "=" * 50 + "[/cyan]")

    def info(self, message: str) -> None:
        """Print an informational message."""
        if not self.quiet:
            self._console.print(f"[cyan]ℹ️  {escape(message)}[/cyan]")

    def success(self, message: str) -> None:
        """Print a success message."""
        if not self.quiet:
            self._console.print(f"[green]✅  {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(f"[yellow]⚠️  WARNING: {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        """Print an error message."""
        self._console.print(f"[red]❌  ERROR: {escape(message)}[/red]")

    def print_table(self, title: str, rows: List[tuple], headers: List[str]) -> None:
        """Print a formatted table."""
        table = Table(title=title)
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*[escape(str(cell)) for cell in row])
        self._console.print(table)

    def print_menu(self, entries: List[str], header: str = "") -> None:
        """
        Print a numbered menu, numbering from 1.

        Args:
            entries: Menu labels in display order
            header: Optional header text
        """
        if header:
            self._console.print()
            self._console.print(f"[cyan]{escape(header)}[/cyan]")
        for idx, label in enumerate(entries, start=1):
            self._console.print(f"  {idx}) {escape(label)}")
        self._console.print()

    def print_file_changes(self, changes: List[tuple]) -> None:
        """
        Print a summary of file changes.

        Args:
            changes: List of (path, description) tuples
        """
        self._console.print()
        self._console.print("[bold]Files changed:[/bold]")
        for path, description in changes:
            self._console.print(f"  [green]✓[/green] {escape(path)} - {escape(description)}")
        self._console.print()
