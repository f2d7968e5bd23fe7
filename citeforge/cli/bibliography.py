"""Bibliography command - Build a bibliography from rendered HTML."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from citeforge.cli.base import CiteForgeCommand
from citeforge.citation.bibliography import generate_bibliography_from_content
from citeforge.citation.context import create_context
from citeforge.core.exceptions import CiteForgeError


class BibliographyCommand(CiteForgeCommand):
    """Generate a bibliography for the citation links in an HTML file."""

    def execute(
        self,
        input_path: Path,
        source: Optional[str] = None,
        output: Optional[Path] = None,
        config_path: Optional[Path] = None,
    ) -> int:
        """Scan rendered HTML for citations and render their bibliography."""
        try:
            config = self.load_config(config_path)
            context = create_context(config)

            html = generate_bibliography_from_content(
                context,
                self.read_text(input_path),
                source,
                citation_class=config.citation.citation_class,
                container_class=config.bibliography.container_class,
            )

            if not html:
                self.print_warning(f"No resolvable citations found in {input_path.name}")
                return 0

            if output:
                self.write_output(html, output)
                self.print_success(f"Bibliography saved to: {output}")
            else:
                typer.echo(html)
            return 0

        except (CiteForgeError, OSError) as e:
            return self.handle_error(e, "Bibliography generation failed")


def command(
    input_path: Path = typer.Argument(..., help="Rendered HTML file to scan"),
    source: Optional[str] = typer.Option(
        None, "--source", "-s", help="Reference source to look keys up in"
    ),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Output file"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to citeforge.yaml"
    ),
) -> None:
    """Generate a bibliography from the citation links in rendered HTML.

    Examples:
        citeforge bibliography _site/blog/post/index.html
        citeforge bibliography page.html --source thesis -o refs.html
    """
    cmd = BibliographyCommand()
    exit_code = cmd.execute(input_path, source, output, config_path)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)
