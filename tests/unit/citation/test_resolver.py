"""Tests for the citation resolver."""

from __future__ import annotations

import logging

from citeforge.citation.context import CitationContext
from citeforge.citation.resolver import CitationResolver
from citeforge.citation.scanner import CITATION_PATTERN, CitationMarker, scan


class TestResolveMarker:
    """Tests for resolve_marker()."""

    def test_single_key(self, resolver: CitationResolver) -> None:
        """One key renders in parentheses."""
        html = resolver.resolve_marker(CitationMarker(("smith2020",)), "/p/")

        assert html.startswith('(<a href="#smith2020" class="citation"')
        assert html.endswith(">Smith, 2020</a>)")

    def test_multiple_keys_in_marker_order(self, resolver: CitationResolver) -> None:
        """Several keys are joined with '; ' in marker order."""
        html = resolver.resolve_marker(CitationMarker(("doe2019", "smith2020")), "/p/")

        assert html.index("Doe, 2019") < html.index("Smith, 2020")
        assert "</a>; <a" in html
        assert html.startswith("(") and html.endswith(")")

    def test_unknown_key_placeholder(self, resolver: CitationResolver, caplog) -> None:
        """Unknown keys render a placeholder and log a warning."""
        caplog.set_level(logging.WARNING)

        html = resolver.resolve_marker(CitationMarker(("nope",)), "/p/")

        assert html == '(<span class="citation-missing">[nope]</span>)'
        assert any("Citation key not found" in r.message for r in caplog.records)

    def test_unknown_key_not_recorded(
        self, resolver: CitationResolver, context: CitationContext
    ) -> None:
        """Only resolved keys are recorded for the page."""
        resolver.resolve_marker(CitationMarker(("smith2020", "nope")), "/p/")

        assert context.registry.get("/p/").keys == {"smith2020"}

    def test_mixed_known_and_unknown(self, resolver: CitationResolver) -> None:
        """A missing key does not stop the others."""
        html = resolver.resolve_marker(CitationMarker(("nope", "doe2019")), "/p/")

        assert html.startswith('(<span class="citation-missing">[nope]</span>; <a ')

    def test_source_override(
        self, resolver: CitationResolver, context: CitationContext
    ) -> None:
        """An explicit source is used and bound to the page."""
        html = resolver.resolve_marker(CitationMarker(("jones2015",)), "/t/", "thesis")

        assert "Jones, 2015" in html
        assert context.registry.get("/t/").source == "thesis"

    def test_later_override_is_used(
        self, resolver: CitationResolver, context: CitationContext, caplog
    ) -> None:
        """A page resolved once still honours a different explicit source."""
        caplog.set_level(logging.WARNING)
        resolver.resolve_marker(CitationMarker(("jones2015",)), "default", "thesis")

        html = resolver.resolve_marker(
            CitationMarker(("smith2020",)), "default", "references"
        )

        assert "Smith, 2020" in html
        assert "citation-missing" not in html
        assert context.registry.get("default").keys == {"jones2015", "smith2020"}
        assert not caplog.records

    def test_custom_classes(self, context: CitationContext) -> None:
        """CSS classes come from the resolver settings."""
        resolver = CitationResolver(context, citation_class="cite", missing_class="gone")

        html = resolver.resolve_marker(CitationMarker(("smith2020", "x")), "/p/")

        assert 'class="cite"' in html
        assert '<span class="gone">[x]</span>' in html


class TestResolveText:
    """Tests for resolve_text()."""

    def test_replaces_all_markers(self, resolver: CitationResolver) -> None:
        """Every marker is replaced; surrounding text is kept."""
        html = resolver.resolve_text("A [@smith2020] and B [@doe2019; @brown2018].")

        assert html.startswith("A (<a ")
        assert " and B (<a " in html
        assert html.endswith("</a>).")
        assert not CITATION_PATTERN.search(html)

    def test_idempotent(self, resolver: CitationResolver) -> None:
        """Resolving the output again changes nothing."""
        once = resolver.resolve_text("See [@smith2020; @nope] and [@misc2021].")

        assert resolver.resolve_text(once) == once

    def test_order_preserved(self, resolver: CitationResolver) -> None:
        """Rendered citations appear in document order."""
        html = resolver.resolve_text("[@misc2021] then [@brown2018] then [@doe2019]")

        positions = [html.index(s) for s in ("Lee, 2021", "Brown, 2018", "Doe, 2019")]
        assert positions == sorted(positions)

    def test_default_page(self, resolver: CitationResolver, context: CitationContext) -> None:
        """Without a page id keys go to the default record."""
        resolver.resolve_text("[@smith2020]")

        assert context.registry.get("default").keys == {"smith2020"}

    def test_text_without_markers_untouched(
        self, resolver: CitationResolver, context: CitationContext
    ) -> None:
        """Plain text passes through and creates no record."""
        assert resolver.resolve_text("no [markers] here") == "no [markers] here"
        assert len(context.registry) == 0

    def test_bibliography_marker_passes_through(self, resolver: CitationResolver) -> None:
        """Bibliography markers are left for the bibliography pass."""
        assert resolver.resolve_text("[[bibliography]]") == "[[bibliography]]"

    def test_records_accumulate(
        self, resolver: CitationResolver, context: CitationContext
    ) -> None:
        """Records grow across calls for the same page."""
        resolver.resolve_text("[@smith2020]", page_id="/p/")
        resolver.resolve_text("[@doe2019]", page_id="/p/")

        assert context.registry.get("/p/").keys == {"smith2020", "doe2019"}


class TestRenderSegments:
    """Tests for render_segments() with a sink."""

    def test_sink_receives_rendered_html(self, resolver: CitationResolver) -> None:
        """Each rendered citation goes through the sink."""
        stashed: list[str] = []

        def sink(html: str) -> str:
            stashed.append(html)
            return f"<<{len(stashed)}>>"

        text = resolver.render_segments(scan("x [@smith2020] y [@nope]"), "/p/", sink=sink)

        assert text == "x <<1>> y <<2>>"
        assert "Smith, 2020" in stashed[0]
        assert "citation-missing" in stashed[1]
