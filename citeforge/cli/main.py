"""CiteForge CLI - Main application entry point.

Registers the commands and applies global options.
"""

from __future__ import annotations

import typer

from citeforge.cli import bibliography, references, render
from citeforge.cli.console import set_verbose_mode
from citeforge.core.config_loaders import get_log_level
from citeforge.core.logging import configure_logging

app = typer.Typer(
    name="citeforge",
    help="Citation and bibliography resolution for Markdown sites",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", help="Enable debug logging and error tracebacks"
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """CiteForge - [@key] citations and [[bibliography]] blocks for Markdown."""
    configure_logging(level="DEBUG" if verbose else get_log_level())
    set_verbose_mode(verbose)

    if version:
        from citeforge import __version__

        typer.echo(f"CiteForge {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("render")(render.command)
app.command("bibliography")(bibliography.command)
app.command("references")(references.command)


def cli_main() -> None:
    """Entry point for console_scripts."""
    app()


if __name__ == "__main__":
    cli_main()
