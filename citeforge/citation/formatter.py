"""Citation and bibliography entry formatting.

Pure functions turning a Reference into HTML. Nothing here loads data
or logs; callers decide what a missing reference means.

Inline citation text is "Surname, Year":

    format_inline_citation(ref)          -> "Smith, 2020"

A bibliography entry is a block with the full author list, year, title,
the venue for the reference type, and its links:

    <div id="smith2020" class="reference">
        <span class="ref-author-list">Smith, J. & Doe, A. (2020).</span>
        <i>A Study</i>. <i>Journal of Things</i> <b>12</b>(3), 1-10. <a ...>doi</a>
    </div>

Every interpolated value is HTML-escaped.
"""

from __future__ import annotations

import json
import re
from html import escape
from typing import Callable, Optional

from citeforge.citation.models import (
    Article,
    Book,
    Chapter,
    GenericReference,
    Reference,
)
from citeforge.core.constants import DEFAULT_CITATION_CLASS, DEFAULT_MISSING_CLASS

UNKNOWN = "Unknown"
UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_YEAR = "Unknown Year"
UNTITLED = "Untitled"

_AUTHOR_JOINER = re.compile(r"\s+(?:&|and)\s+")


def _escape(value: str, quote: bool = True) -> str:
    """HTML-escape a value and encode '[' and '@' so no marker survives."""
    return escape(value, quote=quote).replace("[", "&#91;").replace("@", "&#64;")


def first_author(authors: str) -> str:
    """Return the first author of an author list.

    Splits on ',' and then on '&' or 'and':

        "Smith, J. & Doe, A."  -> "Smith"
        "Smith and Doe"        -> "Smith"
    """
    head = authors.split(",")[0]
    return _AUTHOR_JOINER.split(head, maxsplit=1)[0].strip()


def format_inline_citation(reference: Optional[Reference]) -> str:
    """Format the visible text of an inline citation.

    Args:
        reference: Reference to cite, or None if it was not found

    Returns:
        "Surname, Year", with "Unknown" for missing parts, or "[Unknown]"
    """
    if reference is None:
        return f"[{UNKNOWN}]"

    author = first_author(reference.authors) if reference.authors else ""
    year = reference.year or UNKNOWN
    return f"{_escape(author or UNKNOWN)}, {_escape(year)}"


def citation_tooltip(reference: Reference) -> str:
    """Build the JSON tooltip payload for an inline citation.

    journal falls back to publisher, doi falls back to url. Missing title,
    authors or year are left out.
    """
    data: dict[str, str] = {}
    for name in ("title", "authors", "year"):
        value = getattr(reference, name)
        if value is not None:
            data[name] = value
    data["journal"] = (
        getattr(reference, "journal", None)
        or getattr(reference, "publisher", None)
        or ""
    )
    data["doi"] = reference.doi or reference.url or ""
    return json.dumps(data, ensure_ascii=False)


def render_citation_link(
    reference: Reference, css_class: str = DEFAULT_CITATION_CLASS
) -> str:
    """Render one resolved citation as a link to its bibliography entry."""
    tooltip = _escape(citation_tooltip(reference), quote=True)
    return (
        f'<a href="#{_escape(reference.key, quote=True)}" '
        f'class="{_escape(css_class, quote=True)}" '
        f"data-tooltip='{tooltip}'>{format_inline_citation(reference)}</a>"
    )


def render_missing_citation(
    key: str, css_class: str = DEFAULT_MISSING_CLASS
) -> str:
    """Render the placeholder for a key that did not resolve."""
    return f'<span class="{_escape(css_class, quote=True)}">[{_escape(key)}]</span>'


def render_citation_group(parts: list[str]) -> str:
    """Wrap rendered citations of one marker: "(a)" or "(a; b)"."""
    return "(" + "; ".join(parts) + ")"


def _article_venue(ref: Article) -> str:
    if not ref.journal:
        return ""
    venue = f". <i>{_escape(ref.journal)}</i>"
    if ref.volume:
        venue += f" <b>{_escape(ref.volume)}</b>"
    if ref.issue:
        venue += f"({_escape(ref.issue)})"
    if ref.pages:
        venue += f", {_escape(ref.pages)}"
    return venue


def _book_venue(ref: Book) -> str:
    venue = ""
    if ref.publisher:
        venue += f". {_escape(ref.publisher)}"
    if ref.pages:
        venue += f". {_escape(ref.pages)}"
    return venue


def _chapter_venue(ref: Chapter) -> str:
    venue = ""
    if ref.book_title:
        venue += f". In <i>{_escape(ref.book_title)}</i>"
    if ref.editors:
        venue += f", ed. {_escape(ref.editors)}"
    if ref.pages:
        venue += f", {_escape(ref.pages)}"
    if ref.publisher:
        venue += f". {_escape(ref.publisher)}"
    return venue


def _no_venue(ref: GenericReference) -> str:
    return ""


_VENUE_FORMATTERS: dict[type, Callable[..., str]] = {
    Article: _article_venue,
    Book: _book_venue,
    Chapter: _chapter_venue,
    GenericReference: _no_venue,
}


def format_links(reference: Reference) -> str:
    """Render the reference's links, space separated."""
    return " ".join(
        f'<a href="{_escape(href, quote=True)}" target="_blank">{label}</a>'
        for label, href in reference.links
    )


def format_bibliography_entry(reference: Optional[Reference], key: str) -> str:
    """Format one bibliography entry.

    Args:
        reference: Reference to format, or None if it was not found
        key: Citation key, used as the entry's anchor id

    Returns:
        Entry HTML, or "[Unknown reference: key]"
    """
    if reference is None:
        return f"[Unknown reference: {_escape(key)}]"

    authors = _escape(reference.authors or UNKNOWN_AUTHOR)
    year = _escape(reference.year or UNKNOWN_YEAR)
    title = _escape(reference.title or UNTITLED)

    entry = (
        f'<div id="{_escape(key, quote=True)}" class="reference">\n'
        f'    <span class="ref-author-list">{authors} ({year}).</span>\n'
        f"    <i>{title}</i>"
    )
    entry += _VENUE_FORMATTERS[type(reference)](reference)
    entry += "."

    links = format_links(reference)
    if links:
        entry += f" {links}"

    entry += "\n</div>"
    return entry


__all__ = [
    "first_author",
    "format_inline_citation",
    "citation_tooltip",
    "render_citation_link",
    "render_missing_citation",
    "render_citation_group",
    "format_links",
    "format_bibliography_entry",
]
