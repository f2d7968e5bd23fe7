"""Console output helpers.

Status messages and error panels go to stderr so that rendered HTML can
be piped from stdout.
"""

from __future__ import annotations

import traceback
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from citeforge.core.exceptions import CiteForgeError

# Shared console instance
_console: Optional[Console] = None

# Verbose mode flag (set by CLI --verbose flag)
_verbose_mode: bool = False

# Fallback error info for exceptions outside the CiteForgeError hierarchy
_OS_ERROR_INFO = (
    "CF-IO-001",
    "A file could not be read or written",
    ["Check that the path exists and is readable", "Check file permissions"],
)
_UNKNOWN_ERROR_INFO = (
    CiteForgeError.error_code,
    CiteForgeError.why_it_happened,
    CiteForgeError.how_to_fix,
)


def get_console() -> Console:
    """Get shared console instance (lazy-loaded)."""
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console


def set_verbose_mode(enabled: bool) -> None:
    """Enable or disable tracebacks in error panels."""
    global _verbose_mode
    _verbose_mode = enabled


def is_verbose_mode() -> bool:
    """Check if verbose mode is enabled."""
    return _verbose_mode


class ErrorRenderer:
    """Renders errors as panels with "Why" and "How to fix" sections.

    Example
    -------
        try:
            config = load_config(path)
        except CiteForgeError as e:
            ErrorRenderer.render(e, context="Loading configuration")
    """

    @staticmethod
    def error_info(exc: BaseException) -> tuple[str, str, List[str]]:
        """Return (error_code, why_it_happened, how_to_fix) for an exception."""
        if isinstance(exc, CiteForgeError):
            return exc.error_code, exc.why_it_happened, list(exc.how_to_fix)
        if isinstance(exc, OSError):
            return _OS_ERROR_INFO
        return _UNKNOWN_ERROR_INFO

    @staticmethod
    def render(
        exc: BaseException,
        context: str = "",
        show_traceback: Optional[bool] = None,
    ) -> None:
        """Render an exception as an error panel.

        Args:
            exc: Exception to render
            context: Optional context message
            show_traceback: Override for verbose mode (None = use global setting)
        """
        error_code, why, how_to_fix = ErrorRenderer.error_info(exc)
        content = ErrorRenderer._build_error_content(str(exc), context, why, how_to_fix)

        get_console().print(
            Panel(
                content,
                title=f"[bold red]Error: {error_code}[/bold red]",
                border_style="red",
                padding=(1, 2),
            )
        )

        should_show_traceback = (
            show_traceback if show_traceback is not None else is_verbose_mode()
        )
        if should_show_traceback:
            tb_text = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )
            get_console().print(Text(tb_text, style="dim"))

    @staticmethod
    def _build_error_content(
        message: str, context: str, why: str, how_to_fix: List[str]
    ) -> Text:
        text = Text()

        if context:
            text.append(f"{context}\n\n", style="dim")

        text.append(message, style="bold red")
        text.append("\n\n")

        text.append("Why it happened:\n", style="bold cyan")
        text.append(f"  {why}\n\n", style="cyan")

        text.append("How to fix:\n", style="bold green")
        for fix in how_to_fix:
            text.append(f"  - {fix}\n", style="green")

        return text


__all__ = ["get_console", "set_verbose_mode", "is_verbose_mode", "ErrorRenderer"]
