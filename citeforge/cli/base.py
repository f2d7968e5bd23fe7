"""Base class for all CLI commands."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from citeforge.cli.console import ErrorRenderer, get_console
from citeforge.core.config import Config
from citeforge.core.config_loaders import load_config
from citeforge.core.exceptions import ConfigFileNotFoundError


class CiteForgeCommand(ABC):
    """Abstract base class for CiteForge CLI commands.

    Subclasses implement execute() and return an exit code.

    Example:
        class MyCommand(CiteForgeCommand):
            def execute(self, path: Path) -> int:
                ...
                return 0
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize command.

        Args:
            console: Rich console (for testing, inject one)
        """
        self.console = console or get_console()

    @abstractmethod
    def execute(self, *args: Any, **kwargs: Any) -> int:
        """Execute the command.

        Returns:
            Exit code (0 = success, non-zero = error)
        """

    # === Configuration ===

    def load_config(self, config_path: Optional[Path] = None) -> Config:
        """Load configuration from a file or the current directory."""
        if config_path is not None and not config_path.exists():
            raise ConfigFileNotFoundError(f"Config file not found: {config_path}")
        return load_config(config_path)

    # === Output Methods ===

    def print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self.console.print(f"[yellow]![/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self.console.print(f"[cyan]i[/cyan] {message}")

    # === Error Handling ===

    def handle_error(self, error: Exception, context: str = "") -> int:
        """Render an error panel and return the exit code.

        Args:
            error: Exception that occurred
            context: Optional context message

        Returns:
            Exit code (1 for error)
        """
        ErrorRenderer.render(error, context=context)
        return 1

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 input file."""
        return path.read_text(encoding="utf-8")

    def write_output(self, text: str, output: Path) -> None:
        """Write text to output, creating parent directories."""
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
