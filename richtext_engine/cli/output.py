"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Status messages go to stderr through a Rich console so that converted
content written to stdout can be piped. Supports verbosity levels and the
--no-color flag.
"""

from typing import List

import typer
from rich.console import Console
from rich.markup import escape

from richtext_engine.content_converter.syntax_checks import SyntaxReport


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console writing status messages to stderr

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=True)
        >>> handler.success("Wrote out.html")
        >>> handler.emit("<p>Hello</p>")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            stderr=True,
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
            soft_wrap=True,
        )

    def success(self, message: str) -> None:
        """Display success message in green.

        Args:
            message: Success message to display
        """
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red.

        Args:
            message: Error message to display
        """
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow.

        Args:
            message: Warning message to display
        """
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1).

        Args:
            message: Info message to display
        """
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2).

        Args:
            message: Debug message to display
        """
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def emit(self, content: str) -> None:
        """Write converted content to stdout without any styling.

        Args:
            content: Document text to write
        """
        typer.echo(content)

    def print_warnings(self, warnings: List[str]) -> None:
        """Display conversion warnings, one per line.

        Args:
            warnings: Warning messages from a ConversionResult
        """
        for message in warnings:
            self.warning(message)

    def print_stats(self, stats: str) -> None:
        """Display a conversion statistics line.

        Args:
            stats: Summary produced by get_conversion_stats
        """
        self.console.print(f"[bold]Stats:[/bold] {escape(stats)}")

    def print_report(self, report: SyntaxReport) -> None:
        """Display the issues found by a syntax check.

        Args:
            report: Result of validate_markdown or validate_html
        """
        if report.valid:
            self.success("No syntax issues found")
            return
        for issue in report.issues:
            location = f"line {issue.line}: " if issue.line is not None else ""
            self.error(f"[{issue.kind}] {location}{issue.message}")
