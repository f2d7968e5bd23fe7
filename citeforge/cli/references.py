"""References command - List the references of a source."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping, Optional

import typer
from rich.table import Table
from rich.text import Text

from citeforge.cli.base import CiteForgeCommand
from citeforge.citation.context import create_context
from citeforge.citation.models import Reference
from citeforge.core.exceptions import CiteForgeError

MAX_TITLE_WIDTH = 60


def reference_to_dict(reference: Reference) -> dict[str, Any]:
    """Convert a reference to a JSON-ready dict, dropping empty fields."""
    data: dict[str, Any] = {"type": reference.reference_type.value}
    data.update({k: v for k, v in asdict(reference).items() if v is not None})
    return data


class ReferencesCommand(CiteForgeCommand):
    """List the references of one source."""

    def execute(
        self,
        source: Optional[str] = None,
        as_json: bool = False,
        config_path: Optional[Path] = None,
    ) -> int:
        """Load a source and print its references."""
        try:
            config = self.load_config(config_path)
            context = create_context(config)
            source_name = context.source_for(source)
            references = context.store.load(source_name)

            if as_json:
                payload = [reference_to_dict(ref) for ref in references.values()]
                typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
                return 0

            if not references:
                self.print_warning(
                    f"No references in source '{source_name}' "
                    f"({context.store.references_dir})"
                )
                return 0

            self._display_table(source_name, references)
            return 0

        except (CiteForgeError, OSError) as e:
            return self.handle_error(e, "Listing references failed")

    def _display_table(
        self, source_name: str, references: Mapping[str, Reference]
    ) -> None:
        table = Table(title=f"References: {source_name}")
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Type", style="magenta")
        table.add_column("Authors")
        table.add_column("Year", justify="right")
        table.add_column("Title", max_width=MAX_TITLE_WIDTH)

        for key in sorted(references):
            ref = references[key]
            table.add_row(
                Text(key),
                ref.reference_type.value,
                Text(ref.authors or ""),
                Text(ref.year or ""),
                Text(ref.title or ""),
            )

        self.console.print(table)
        self.console.print(f"\n[dim]Total references: {len(references)}[/dim]")


def command(
    source: Optional[str] = typer.Argument(
        None, help="Source name (defaults to references.default_source)"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print references as JSON"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to citeforge.yaml"
    ),
) -> None:
    """List the references of a source.

    Examples:
        citeforge references
        citeforge references thesis --json
    """
    cmd = ReferencesCommand()
    exit_code = cmd.execute(source, as_json, config_path)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
