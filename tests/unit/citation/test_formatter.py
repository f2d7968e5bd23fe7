"""Tests for citation and bibliography entry formatting."""

from __future__ import annotations

import html
import json
import re

from citeforge.citation.formatter import (
    citation_tooltip,
    first_author,
    format_bibliography_entry,
    format_inline_citation,
    render_citation_group,
    render_citation_link,
    render_missing_citation,
)
from citeforge.citation.models import reference_from_dict


def make_article(**overrides):
    data = {
        "type": "article",
        "authors": "Smith, J. & Doe, A.",
        "year": 2020,
        "title": "A Study of Things",
        "journal": "Journal of Things",
        "volume": 12,
        "issue": 3,
        "pages": "1-10",
        "doi": "https://doi.org/10.1000/things",
    }
    data.update(overrides)
    return reference_from_dict("smith2020", data)


class TestFirstAuthor:
    """Tests for first_author()."""

    def test_comma_separated(self) -> None:
        assert first_author("Smith, J., Doe, A.") == "Smith"

    def test_ampersand(self) -> None:
        assert first_author("Smith & Doe") == "Smith"

    def test_and(self) -> None:
        assert first_author("Brown and Green") == "Brown"

    def test_single_name(self) -> None:
        assert first_author("Plato") == "Plato"


class TestInlineCitation:
    """Tests for format_inline_citation()."""

    def test_surname_and_year(self) -> None:
        """Inline text is "Surname, Year"."""
        assert format_inline_citation(make_article()) == "Smith, 2020"

    def test_missing_reference(self) -> None:
        """No reference renders as [Unknown]."""
        assert format_inline_citation(None) == "[Unknown]"

    def test_missing_authors_and_year(self) -> None:
        """Missing parts default to Unknown."""
        ref = reference_from_dict("k", {"title": "T"})

        assert format_inline_citation(ref) == "Unknown, Unknown"

    def test_escaped(self) -> None:
        """Author text is HTML-escaped."""
        ref = reference_from_dict("k", {"authors": "<b>Evil</b>", "year": 1})

        assert format_inline_citation(ref) == "&lt;b&gt;Evil&lt;/b&gt;, 1"


class TestCitationLink:
    """Tests for rendered inline citations."""

    def test_link_markup(self) -> None:
        """A resolved citation links to its entry with a tooltip."""
        link = render_citation_link(make_article())

        assert link.startswith('<a href="#smith2020" class="citation" data-tooltip=\'')
        assert link.endswith(">Smith, 2020</a>")

    def test_tooltip_payload(self) -> None:
        """The tooltip carries title, authors, year, journal and doi."""
        payload = json.loads(citation_tooltip(make_article()))

        assert payload == {
            "title": "A Study of Things",
            "authors": "Smith, J. & Doe, A.",
            "year": "2020",
            "journal": "Journal of Things",
            "doi": "https://doi.org/10.1000/things",
        }

    def test_tooltip_fallbacks(self) -> None:
        """journal falls back to publisher, doi to url."""
        book = reference_from_dict(
            "b", {"type": "book", "publisher": "P", "url": "https://u"}
        )
        payload = json.loads(citation_tooltip(book))

        assert payload["journal"] == "P"
        assert payload["doi"] == "https://u"

    def test_tooltip_empty_fallbacks(self) -> None:
        """Without any venue or link the fields are empty strings."""
        payload = json.loads(citation_tooltip(reference_from_dict("g", {})))

        assert payload == {"journal": "", "doi": ""}

    def test_tooltip_attribute_round_trips(self) -> None:
        """The escaped attribute decodes back to the JSON payload."""
        ref = make_article(title="It's \"quoted\"")
        link = render_citation_link(ref)
        attr = re.search(r"data-tooltip='([^']*)'", link).group(1)

        assert json.loads(html.unescape(attr))["title"] == "It's \"quoted\""

    def test_custom_class(self) -> None:
        """The CSS class is configurable."""
        assert 'class="cite"' in render_citation_link(make_article(), "cite")

    def test_missing_placeholder(self) -> None:
        """Unknown keys render as a placeholder span."""
        assert (
            render_missing_citation("nope")
            == '<span class="citation-missing">[nope]</span>'
        )

    def test_group_single(self) -> None:
        assert render_citation_group(["a"]) == "(a)"

    def test_group_multiple(self) -> None:
        assert render_citation_group(["a", "b", "c"]) == "(a; b; c)"


class TestBibliographyEntry:
    """Tests for format_bibliography_entry()."""

    def test_article(self) -> None:
        """Articles show journal, volume, issue and pages."""
        assert format_bibliography_entry(make_article(), "smith2020") == (
            '<div id="smith2020" class="reference">\n'
            '    <span class="ref-author-list">Smith, J. &amp; Doe, A. (2020).</span>\n'
            "    <i>A Study of Things</i>. <i>Journal of Things</i> <b>12</b>(3), 1-10."
            ' <a href="https://doi.org/10.1000/things" target="_blank">doi</a>\n'
            "</div>"
        )

    def test_article_without_journal(self) -> None:
        """An article without a journal has no venue."""
        entry = format_bibliography_entry(
            make_article(journal=None, doi=None), "smith2020"
        )

        assert entry.endswith("<i>A Study of Things</i>.\n</div>")
        assert "<b>" not in entry

    def test_book(self) -> None:
        """Books show publisher and pages."""
        ref = reference_from_dict(
            "doe2019",
            {
                "type": "book",
                "authors": "Doe, A.",
                "year": 2019,
                "title": "Stuff",
                "publisher": "Stuff Press",
                "pages": "320 pp",
                "journal": "Never Shown",
            },
        )
        entry = format_bibliography_entry(ref, "doe2019")

        assert "<i>Stuff</i>. Stuff Press. 320 pp.\n</div>" in entry
        assert "Never Shown" not in entry

    def test_chapter(self) -> None:
        """Chapters show book title, editors, pages and publisher."""
        ref = reference_from_dict(
            "brown2018",
            {
                "type": "chapter",
                "authors": "Brown, B.",
                "year": 2018,
                "title": "On Chapters",
                "book_title": "Collected Essays",
                "editors": "White, W.",
                "pages": "45-67",
                "publisher": "Essay House",
            },
        )
        entry = format_bibliography_entry(ref, "brown2018")

        assert (
            "<i>On Chapters</i>. In <i>Collected Essays</i>, ed. White, W., 45-67."
            " Essay House.\n</div>"
        ) in entry

    def test_generic_has_no_venue(self) -> None:
        """Generic references show only authors, year and title."""
        ref = reference_from_dict(
            "misc", {"type": "blog", "authors": "Lee", "year": 2021, "title": "Post"}
        )

        assert format_bibliography_entry(ref, "misc").endswith(
            "    <i>Post</i>.\n</div>"
        )

    def test_defaults(self) -> None:
        """Missing authors, year and title have defaults."""
        entry = format_bibliography_entry(reference_from_dict("k", {}), "k")

        assert "Unknown Author (Unknown Year)." in entry
        assert "<i>Untitled</i>" in entry

    def test_all_links(self) -> None:
        """Links appear as doi, url, pdf, source separated by spaces."""
        ref = reference_from_dict(
            "k", {"doi": "d", "url": "u", "pdf": "p", "source": "s"}
        )
        entry = format_bibliography_entry(ref, "k")

        assert (
            '. <a href="d" target="_blank">doi</a> <a href="u" target="_blank">url</a>'
            ' <a href="p" target="_blank">pdf</a> <a href="s" target="_blank">source</a>'
        ) in entry

    def test_missing_reference(self) -> None:
        """No reference renders as a plain notice."""
        assert format_bibliography_entry(None, "ghost") == "[Unknown reference: ghost]"

    def test_values_escaped(self) -> None:
        """Interpolated values are HTML-escaped."""
        ref = reference_from_dict("k", {"title": "<script>x</script>"})

        assert "<script>" not in format_bibliography_entry(ref, "k")

    def test_no_marker_survives(self) -> None:
        """Reference text that looks like a marker cannot be rescanned."""
        ref = reference_from_dict("k", {"title": "[@other] [[bibliography]]"})

        entry = format_bibliography_entry(ref, "k")

        assert "[@" not in entry
        assert "[[" not in entry
