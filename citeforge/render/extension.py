"""Python-Markdown citation extension.

Adds two treeprocessors that run after inline parsing:

    citations     (priority 15)  [@key] markers -> inline citations
    bibliography  (priority 14)  [[bibliography]] paragraphs -> bibliography

Rendered markup goes through md.htmlStash, so the element tree only ever
holds placeholders and Python-Markdown substitutes the HTML when it
serializes. Text inside <code> and <pre> is left alone.

Usage
-----
    context = create_context(config)
    ext = CitationExtension(context=context)
    md = markdown.Markdown(extensions=[ext, "footnotes"])

    ext.set_page(PageEnv(page_url="/blog/post/"))
    html = md.convert(text)
"""

from __future__ import annotations

import xml.etree.ElementTree as etree
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from markdown import Markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from citeforge.citation.bibliography import BibliographyGenerator, CitationKeySource
from citeforge.citation.context import CitationContext
from citeforge.citation.resolver import CitationResolver
from citeforge.citation.scanner import (
    BIBLIOGRAPHY_PATTERN,
    BibliographyMarker,
    CitationMarker,
    scan,
)
from citeforge.core.constants import (
    DEFAULT_CITATION_CLASS,
    DEFAULT_CONTAINER_CLASS,
    DEFAULT_MISSING_CLASS,
    DEFAULT_PAGE_ID,
)
from citeforge.core.logging import PageLogger

SKIP_TAGS = frozenset({"code", "pre"})

CITATIONS_PRIORITY = 15
BIBLIOGRAPHY_PRIORITY = 14


@dataclass
class PageEnv:
    """Per-render page information.

    Attributes:
        page_url: URL of the page being rendered, if known
        reference_source: Reference source the page cites from
    """

    page_url: Optional[str] = None
    reference_source: Optional[str] = None

    @property
    def page_id(self) -> str:
        """Key of the page's citation record."""
        return self.page_url or DEFAULT_PAGE_ID


def _iter_text_slots(element: etree.Element) -> Iterator[tuple[etree.Element, str]]:
    """Yield (element, attribute) for every text slot in document order.

    An element's ``text`` precedes its children; a child's ``tail`` follows
    the child's own content. Text inside SKIP_TAGS is not yielded, but the
    tail after a skipped element is.
    """
    if element.tag in SKIP_TAGS:
        return
    yield element, "text"
    for child in element:
        yield from _iter_text_slots(child)
        yield child, "tail"


class CitationTreeprocessor(Treeprocessor):
    """Replaces citation markers with stashed inline citations."""

    def __init__(self, md: Markdown, extension: "CitationExtension") -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: etree.Element) -> None:
        env = self.extension.page
        page_log = self.extension.start_page_log()
        page_log.start_pass("citations")

        resolver = self.extension.resolver
        markers = 0
        for element, slot in list(_iter_text_slots(root)):
            text = getattr(element, slot)
            if not text or "[@" not in text:
                continue

            segments = scan(text)
            count = sum(1 for s in segments if isinstance(s, CitationMarker))
            if not count:
                continue

            markers += count
            setattr(
                element,
                slot,
                resolver.render_segments(
                    segments,
                    env.page_id,
                    env.reference_source,
                    sink=self.md.htmlStash.store,
                ),
            )

        page_log.log_progress("Citation markers resolved", markers=markers)


class BibliographyTreeprocessor(Treeprocessor):
    """Replaces bibliography marker paragraphs with the page's bibliography."""

    def __init__(self, md: Markdown, extension: "CitationExtension") -> None:
        super().__init__(md)
        self.extension = extension

    def run(self, root: etree.Element) -> None:
        env = self.extension.page
        page_log = self.extension.start_page_log()
        page_log.start_pass("bibliography")

        parents = {child: parent for parent in root.iter() for child in parent}
        paragraphs: list[tuple[etree.Element, BibliographyMarker]] = []
        for p in root.iter("p"):
            marker = self._find_marker(p)
            if marker is not None:
                paragraphs.append((p, marker))

        rendered = 0
        for paragraph, marker in paragraphs:
            html = self._render(env, marker)
            if not html:
                parent = parents.get(paragraph)
                if parent is not None:
                    self._remove_keeping_tail(parent, paragraph)
                continue

            for child in list(paragraph):
                paragraph.remove(child)
            paragraph.attrib.clear()
            paragraph.text = self.md.htmlStash.store(html)
            rendered += 1

        page_log.finish(
            bibliography_markers=len(paragraphs), bibliographies=rendered
        )
        self.extension.end_page_log()

    def _find_marker(self, paragraph: etree.Element) -> Optional[BibliographyMarker]:
        """Return the first bibliography marker in a paragraph's own text."""
        slots = [paragraph.text] + [child.tail for child in paragraph]
        for text in slots:
            if not text or not BIBLIOGRAPHY_PATTERN.search(text):
                continue
            for segment in scan(text):
                if isinstance(segment, BibliographyMarker):
                    return segment
        return None

    def _render(self, env: PageEnv, marker: BibliographyMarker) -> str:
        key_source = CitationKeySource.from_page_record(
            self.extension.context.registry, env.page_id
        )
        source = marker.source or env.reference_source
        return self.extension.generator.generate(key_source, source).to_html()

    @staticmethod
    def _remove_keeping_tail(parent: etree.Element, element: etree.Element) -> None:
        """Remove element from parent without losing the text after it."""
        tail = element.tail
        if tail and tail.strip():
            index = list(parent).index(element)
            if index > 0:
                previous = parent[index - 1]
                previous.tail = (previous.tail or "") + tail
            else:
                parent.text = (parent.text or "") + tail
        parent.remove(element)


class CitationExtension(Extension):
    """Python-Markdown extension for [@key] citations and bibliographies."""

    def __init__(self, context: CitationContext, **kwargs: Any) -> None:
        self.config = {
            "citation_class": [
                DEFAULT_CITATION_CLASS,
                "CSS class of resolved citation links",
            ],
            "missing_class": [
                DEFAULT_MISSING_CLASS,
                "CSS class of unknown-key placeholders",
            ],
            "container_class": [
                DEFAULT_CONTAINER_CLASS,
                "CSS class of the bibliography container",
            ],
        }
        super().__init__(**kwargs)
        self.context = context
        self.page = PageEnv()
        self._page_log: Optional[PageLogger] = None
        self.resolver = CitationResolver(
            context,
            citation_class=self.getConfig("citation_class"),
            missing_class=self.getConfig("missing_class"),
        )
        self.generator = BibliographyGenerator(
            context, container_class=self.getConfig("container_class")
        )

    def extendMarkdown(self, md: Markdown) -> None:
        md.registerExtension(self)
        md.treeprocessors.register(
            CitationTreeprocessor(md, self), "citations", CITATIONS_PRIORITY
        )
        md.treeprocessors.register(
            BibliographyTreeprocessor(md, self), "bibliography", BIBLIOGRAPHY_PRIORITY
        )

    def set_page(self, page: Optional[PageEnv]) -> None:
        """Set the page the next conversion belongs to."""
        self.page = page or PageEnv()

    def reset(self) -> None:
        """Called by Markdown.reset(); forgets the current page."""
        self.page = PageEnv()
        self._page_log = None

    def start_page_log(self) -> PageLogger:
        """Return the pass logger for the current page, creating it once."""
        if self._page_log is None:
            self._page_log = PageLogger(self.page.page_id)
        return self._page_log

    def end_page_log(self) -> None:
        self._page_log = None


def makeExtension(**kwargs: Any) -> CitationExtension:
    """Entry point used by Python-Markdown when loading by name."""
    return CitationExtension(**kwargs)


__all__ = [
    "PageEnv",
    "CitationTreeprocessor",
    "BibliographyTreeprocessor",
    "CitationExtension",
    "makeExtension",
]
