"""Tests for the citeforge command line.

Commands run from inside the temp project so the default configuration
finds _data/references.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from citeforge.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def project(temp_dir: Path, references_dir: Path, monkeypatch) -> Path:
    """Temp project with sample sources, used as the working directory."""
    monkeypatch.chdir(temp_dir)
    (temp_dir / "post.md").write_text(
        "Claim [@smith2020; @ghost].\n\n[[bibliography]]\n", encoding="utf-8"
    )
    return temp_dir


class TestMainApp:
    """Tests for global options."""

    def test_version(self, runner: CliRunner) -> None:
        from citeforge import __version__

        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"CiteForge {__version__}" in result.output

    def test_no_command_shows_help(self, runner: CliRunner) -> None:
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "render" in result.output
        assert "bibliography" in result.output
        assert "references" in result.output


class TestRenderCommand:
    """Tests for citeforge render."""

    def test_render_to_stdout(self, runner: CliRunner, project: Path) -> None:
        """HTML is printed when no output file is given."""
        result = runner.invoke(app, ["render", "post.md"])

        assert result.exit_code == 0
        assert '<a href="#smith2020" class="citation"' in result.output
        assert '<span class="citation-missing">[ghost]</span>' in result.output
        assert '<div id="smith2020" class="reference">' in result.output

    def test_render_to_file(self, runner: CliRunner, project: Path) -> None:
        """-o writes the HTML and reports the cited keys."""
        result = runner.invoke(
            app, ["render", "post.md", "-o", "out/post.html", "--page-url", "/post/"]
        )

        assert result.exit_code == 0
        html = (project / "out" / "post.html").read_text(encoding="utf-8")
        assert "Smith, 2020" in html
        assert "[[bibliography]]" not in html
        assert "smith2020" in result.output

    def test_render_other_source(self, runner: CliRunner, project: Path) -> None:
        (project / "thesis.md").write_text("[@jones2015]", encoding="utf-8")

        result = runner.invoke(app, ["render", "thesis.md", "--source", "thesis"])

        assert result.exit_code == 0
        assert "Jones, 2015" in result.output

    def test_missing_input(self, runner: CliRunner, project: Path) -> None:
        """A missing input file is an error panel with exit code 1."""
        result = runner.invoke(app, ["render", "nope.md"])

        assert result.exit_code == 1
        assert "CF-IO-001" in result.output

    def test_missing_config(self, runner: CliRunner, project: Path) -> None:
        """An explicit --config that does not exist fails."""
        result = runner.invoke(app, ["render", "post.md", "--config", "absent.yaml"])

        assert result.exit_code == 1
        assert "CF-CFG-002" in result.output

    def test_config_file(self, runner: CliRunner, project: Path) -> None:
        """--config classes are applied."""
        (project / "site.yaml").write_text(
            "citation:\n  citation_class: cite\n", encoding="utf-8"
        )

        result = runner.invoke(app, ["render", "post.md", "-c", "site.yaml"])

        assert result.exit_code == 0
        assert 'class="cite"' in result.output


class TestBibliographyCommand:
    """Tests for citeforge bibliography."""

    def test_from_rendered_html(self, runner: CliRunner, project: Path) -> None:
        """Citation links in an HTML file produce a bibliography."""
        (project / "page.html").write_text(
            '<p><a href="#doe2019" class="citation">Doe, 2019</a> '
            '<a class="citation" href="#smith2020">Smith, 2020</a></p>',
            encoding="utf-8",
        )

        result = runner.invoke(app, ["bibliography", "page.html"])

        assert result.exit_code == 0
        assert '<div class="references">' in result.output
        assert result.output.index('id="doe2019"') < result.output.index('id="smith2020"')

    def test_to_file(self, runner: CliRunner, project: Path) -> None:
        (project / "page.html").write_text(
            '<a class="citation" href="#jones2015">J</a>', encoding="utf-8"
        )

        result = runner.invoke(
            app, ["bibliography", "page.html", "-s", "thesis", "-o", "refs.html"]
        )

        assert result.exit_code == 0
        assert 'id="jones2015"' in (project / "refs.html").read_text(encoding="utf-8")

    def test_nothing_resolvable(self, runner: CliRunner, project: Path) -> None:
        """No citation links is a warning, not a failure."""
        (project / "page.html").write_text("<p>No citations.</p>", encoding="utf-8")

        result = runner.invoke(app, ["bibliography", "page.html"])

        assert result.exit_code == 0
        assert "references" not in result.output
        assert "resolvable" in result.output


class TestReferencesCommand:
    """Tests for citeforge references."""

    def test_table(self, runner: CliRunner, project: Path) -> None:
        result = runner.invoke(app, ["references"])

        assert result.exit_code == 0
        for key in ("brown2018", "doe2019", "misc2021", "smith2020"):
            assert key in result.output
        assert "Total references: 4" in result.output

    def test_json(self, runner: CliRunner, project: Path) -> None:
        """--json prints every reference with its type."""
        result = runner.invoke(app, ["references", "thesis", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == [
            {
                "type": "article",
                "key": "jones2015",
                "authors": "Jones, P.",
                "year": "2015",
                "title": "Thesis Work",
                "journal": "Thesis Journal",
            }
        ]

    def test_unknown_source(self, runner: CliRunner, project: Path) -> None:
        """An unknown source warns and lists nothing."""
        result = runner.invoke(app, ["references", "nothing"])

        assert result.exit_code == 0
        assert "No references" in result.output
