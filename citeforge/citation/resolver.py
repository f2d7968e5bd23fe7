"""Citation resolver.

Replaces citation markers with rendered inline citations and records the
resolved keys on the page's citation record.

    resolver = CitationResolver(context)
    html = resolver.resolve_text("As shown [@smith2020].", page_id="/post/")
    # 'As shown (<a href="#smith2020" class="citation" ...>Smith, 2020</a>).'

Unknown keys render as a placeholder span and are not recorded. Output
never contains a citation marker, so resolving twice changes nothing.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from citeforge.citation.context import CitationContext
from citeforge.citation.formatter import (
    render_citation_group,
    render_citation_link,
    render_missing_citation,
)
from citeforge.citation.scanner import CitationMarker, Segment, TextSegment, scan
from citeforge.core.constants import (
    DEFAULT_CITATION_CLASS,
    DEFAULT_MISSING_CLASS,
    DEFAULT_PAGE_ID,
)
from citeforge.core.logging import get_logger

logger = get_logger(__name__)

#: Turns rendered HTML into the text placed in the output
HtmlSink = Callable[[str], str]


def _identity(html: str) -> str:
    return html


class CitationResolver:
    """Resolves citation markers against the page's reference source."""

    def __init__(
        self,
        context: CitationContext,
        citation_class: str = DEFAULT_CITATION_CLASS,
        missing_class: str = DEFAULT_MISSING_CLASS,
    ) -> None:
        """Initialize the resolver.

        Args:
            context: Citation context holding the store and page records
            citation_class: CSS class of resolved citation links
            missing_class: CSS class of unknown-key placeholders
        """
        self.context = context
        self.citation_class = citation_class
        self.missing_class = missing_class

    def resolve_marker(
        self,
        marker: CitationMarker,
        page_id: str = DEFAULT_PAGE_ID,
        source: Optional[str] = None,
    ) -> str:
        """Render one citation marker and record its resolved keys.

        Args:
            marker: Marker to render
            page_id: Page whose record receives the keys
            source: Reference source override for the page

        Returns:
            "(citation)" or "(citation; citation; ...)" in marker order
        """
        record, source_name = self.context.page_record(page_id, source)
        references = self.context.store.load(source_name)

        parts: list[str] = []
        for key in marker.keys:
            reference = references.get(key)
            if reference is None:
                logger.warning(
                    "Citation key not found",
                    key=key,
                    source=source_name,
                    page=page_id,
                )
                parts.append(render_missing_citation(key, self.missing_class))
                continue
            record.add(key)
            parts.append(render_citation_link(reference, self.citation_class))

        return render_citation_group(parts)

    def render_segments(
        self,
        segments: Sequence[Segment],
        page_id: str = DEFAULT_PAGE_ID,
        source: Optional[str] = None,
        sink: Optional[HtmlSink] = None,
    ) -> str:
        """Render scanned segments back to text.

        Citation markers are resolved; text and bibliography markers pass
        through unchanged.

        Args:
            segments: Output of scan()
            page_id: Page whose record receives the keys
            source: Reference source override for the page
            sink: Called with each rendered citation; its return value is
                used in place of the HTML (e.g. a raw-HTML placeholder)

        Returns:
            The rewritten text
        """
        sink = sink or _identity
        out: list[str] = []
        for segment in segments:
            if isinstance(segment, CitationMarker):
                out.append(sink(self.resolve_marker(segment, page_id, source)))
            elif isinstance(segment, TextSegment):
                out.append(segment.text)
            else:
                out.append(segment.raw)
        return "".join(out)

    def resolve_text(
        self,
        text: str,
        page_id: str = DEFAULT_PAGE_ID,
        source: Optional[str] = None,
    ) -> str:
        """Replace every citation marker in text with rendered citations."""
        return self.render_segments(scan(text), page_id, source)


__all__ = ["CitationResolver", "HtmlSink"]
