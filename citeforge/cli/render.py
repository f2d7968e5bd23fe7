"""Render command - Render a Markdown page with citations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from citeforge.cli.base import CiteForgeCommand
from citeforge.core.constants import DEFAULT_PAGE_ID
from citeforge.core.exceptions import CiteForgeError
from citeforge.render.page import PageRenderer


class RenderCommand(CiteForgeCommand):
    """Render one Markdown page to an HTML fragment."""

    def execute(
        self,
        input_path: Path,
        output: Optional[Path] = None,
        page_url: Optional[str] = None,
        source: Optional[str] = None,
        config_path: Optional[Path] = None,
    ) -> int:
        """Render a page and report the citations it used."""
        try:
            config = self.load_config(config_path)
            renderer = PageRenderer(config)

            html = renderer.render(
                self.read_text(input_path),
                page_url=page_url,
                reference_source=source,
            )

            if output:
                self.write_output(html, output)
                self.print_success(f"Rendered {input_path.name} to {output}")
            else:
                typer.echo(html)

            self._report_usage(renderer, page_url or DEFAULT_PAGE_ID)
            return 0

        except (CiteForgeError, OSError) as e:
            return self.handle_error(e, f"Rendering {input_path}")

    def _report_usage(self, renderer: PageRenderer, page_id: str) -> None:
        record = renderer.context.registry.get(page_id)
        if record is None or not record.keys:
            self.print_info("No citations resolved")
            return
        self.print_info(
            f"{len(record.keys)} reference(s) cited from source '{record.source}': "
            + escape(", ".join(record.sorted_keys))
        )


def command(
    input_path: Path = typer.Argument(..., help="Markdown file to render"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output HTML file"),
    page_url: Optional[str] = typer.Option(
        None, "--page-url", help="Page URL used to key the citation record"
    ),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Reference source the page cites from"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to citeforge.yaml"
    ),
) -> None:
    """Render a Markdown page, resolving [@key] citations and bibliographies.

    Examples:
        citeforge render post.md
        citeforge render post.md -o post.html --page-url /blog/post/
        citeforge render thesis.md --source thesis
    """
    cmd = RenderCommand()
    exit_code = cmd.execute(input_path, output, page_url, source, config_path)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
