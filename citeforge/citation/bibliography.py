"""Bibliography generation.

A bibliography lists every reference a page cites, sorted by citation
key. The keys come from a CitationKeySource:

    CitationKeySource.from_page_record(registry, page_id)
        keys the resolver recorded while rendering the page
    CitationKeySource.from_rendered_content(html)
        keys recovered from <a class="citation" href="#key"> links in
        already-rendered HTML

Keys that do not resolve are skipped with a warning. With nothing to
list, the bibliography renders as an empty string rather than an empty
container.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from bs4 import BeautifulSoup

from citeforge.citation.context import CitationContext
from citeforge.citation.formatter import format_bibliography_entry
from citeforge.citation.registry import CitationRegistry, PageCitationRecord
from citeforge.core.constants import (
    DEFAULT_CITATION_CLASS,
    DEFAULT_CONTAINER_CLASS,
    DEFAULT_PAGE_ID,
)
from citeforge.core.logging import get_logger

logger = get_logger(__name__)


class CitationKeySource(ABC):
    """Where a bibliography gets its citation keys from."""

    @abstractmethod
    def keys(self) -> set[str]:
        """Return the cited keys."""

    def resolve_source(self, requested: Optional[str]) -> Optional[str]:
        """Return the reference source the keys should be looked up in.

        None means no preference; the caller falls back to its default.
        """
        return requested

    @property
    def description(self) -> str:
        """Short label used in log messages."""
        return type(self).__name__

    @staticmethod
    def from_page_record(
        registry: CitationRegistry, page_id: str = DEFAULT_PAGE_ID
    ) -> "PageRecordKeySource":
        """Keys recorded for a page during the citation pass."""
        return PageRecordKeySource(registry.get(page_id), page_id)

    @staticmethod
    def from_rendered_content(
        html: str, citation_class: str = DEFAULT_CITATION_CLASS
    ) -> "RenderedContentKeySource":
        """Keys found in the citation links of rendered HTML."""
        return RenderedContentKeySource(html, citation_class)


class PageRecordKeySource(CitationKeySource):
    """Keys from a page's citation record."""

    def __init__(self, record: Optional[PageCitationRecord], page_id: str) -> None:
        self.record = record
        self.page_id = page_id

    def keys(self) -> set[str]:
        if self.record is None:
            return set()
        return set(self.record.keys)

    def resolve_source(self, requested: Optional[str]) -> Optional[str]:
        """Use the source the page was bound to while resolving citations."""
        if self.record is None or self.record.source is None:
            return requested
        if requested is None:
            return self.record.source
        return self.record.bind_source(requested)

    @property
    def description(self) -> str:
        return f"page {self.page_id}"


class RenderedContentKeySource(CitationKeySource):
    """Keys scanned from rendered HTML."""

    def __init__(self, html: str, citation_class: str = DEFAULT_CITATION_CLASS) -> None:
        self.html = html
        self.citation_class = citation_class

    def keys(self) -> set[str]:
        if not self.html:
            return set()

        soup = BeautifulSoup(self.html, "html.parser")
        found: set[str] = set()
        for link in soup.find_all("a", class_=self.citation_class, href=True):
            href = link["href"]
            if href.startswith("#") and len(href) > 1:
                found.add(href[1:])
        return found

    @property
    def description(self) -> str:
        return "rendered content"


@dataclass
class Bibliography:
    """Generated bibliography."""

    source: str
    keys: list[str] = field(default_factory=list)
    entries: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    container_class: str = DEFAULT_CONTAINER_CLASS

    @property
    def is_empty(self) -> bool:
        """True when no entry was rendered."""
        return not self.entries

    def to_html(self) -> str:
        """Render the bibliography container, or "" when empty."""
        if self.is_empty:
            return ""
        body = "".join(f"{entry}\n" for entry in self.entries)
        return f'<div class="{self.container_class}">\n{body}</div>'

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source": self.source,
            "keys": self.keys,
            "skipped": self.skipped,
            "count": len(self.entries),
        }


class BibliographyGenerator:
    """Renders bibliographies against a citation context."""

    def __init__(
        self,
        context: CitationContext,
        container_class: str = DEFAULT_CONTAINER_CLASS,
    ) -> None:
        self.context = context
        self.container_class = container_class

    def generate(
        self,
        key_source: CitationKeySource,
        source_name: Optional[str] = None,
    ) -> Bibliography:
        """Build a bibliography from the keys of key_source.

        Args:
            key_source: Where the cited keys come from
            source_name: Reference source to look keys up in; defaults to
                the page's bound source, then the context default

        Returns:
            Bibliography with entries sorted by key
        """
        source = self.context.source_for(key_source.resolve_source(source_name))
        bibliography = Bibliography(source=source, container_class=self.container_class)

        keys = sorted(key_source.keys())
        if not keys:
            return bibliography

        references = self.context.store.load(source)
        for key in keys:
            reference = references.get(key)
            if reference is None:
                logger.warning(
                    "Reference not found for bibliography",
                    key=key,
                    source=source,
                    origin=key_source.description,
                )
                bibliography.skipped.append(key)
                continue
            bibliography.keys.append(key)
            bibliography.entries.append(format_bibliography_entry(reference, key))

        logger.debug(
            "Generated bibliography",
            source=source,
            origin=key_source.description,
            entries=len(bibliography.entries),
            skipped=len(bibliography.skipped),
        )
        return bibliography


def generate_bibliography(
    context: CitationContext,
    page_id: str = DEFAULT_PAGE_ID,
    source: Optional[str] = None,
    container_class: str = DEFAULT_CONTAINER_CLASS,
) -> str:
    """Render the bibliography of a page from its citation record.

    Entries are looked up in the source the page's citations were resolved
    against. A ``source`` that differs from it is not used: a warning is
    logged and the page's source wins, the same as for a
    ``[[bibliography:name]]`` marker. ``source`` only applies to pages that
    have not resolved any citation yet.

    Args:
        context: Context the page was rendered with
        page_id: Page URL, or the default page identifier
        source: Reference source name

    Returns:
        Bibliography HTML, or "" if the page cites nothing resolvable
    """
    generator = BibliographyGenerator(context, container_class)
    key_source = CitationKeySource.from_page_record(context.registry, page_id)
    return generator.generate(key_source, source).to_html()


def generate_bibliography_from_content(
    context: CitationContext,
    html: str,
    source: Optional[str] = None,
    citation_class: str = DEFAULT_CITATION_CLASS,
    container_class: str = DEFAULT_CONTAINER_CLASS,
) -> str:
    """Render a bibliography for the citation links found in rendered HTML.

    Args:
        context: Context providing the reference store
        html: Rendered page content
        source: Reference source name

    Returns:
        Bibliography HTML, or "" if no citation link resolves
    """
    generator = BibliographyGenerator(context, container_class)
    key_source = CitationKeySource.from_rendered_content(html, citation_class)
    return generator.generate(key_source, source).to_html()


__all__ = [
    "CitationKeySource",
    "PageRecordKeySource",
    "RenderedContentKeySource",
    "Bibliography",
    "BibliographyGenerator",
    "generate_bibliography",
    "generate_bibliography_from_content",
]
