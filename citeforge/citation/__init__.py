"""
Citation Engine for CiteForge.

Resolves inline citation markers against YAML reference data and builds
per-page bibliographies.

Architecture Position
---------------------
    CLI
      └── Render (Python-Markdown extension)
            └── **Citation** (you are here)
                  └── Core

Components
----------
    models.py        Article, Book, Chapter, GenericReference
    store.py         ReferenceStore: cached YAML sources
    registry.py      Per-page citation records
    context.py       CitationContext: store + registry + default source
    scanner.py       Splits text into text / citation / bibliography segments
    formatter.py     Inline citation and bibliography entry HTML
    resolver.py      CitationResolver: markers -> inline citations
    bibliography.py  BibliographyGenerator and key sources

Usage Example
-------------
    from citeforge.citation import (
        CitationResolver,
        create_context,
        generate_bibliography,
    )

    context = create_context(config)
    resolver = CitationResolver(context)
    html = resolver.resolve_text("See [@smith2020].", page_id="/post/")
    bib = generate_bibliography(context, "/post/")
"""

from citeforge.citation.bibliography import (
    Bibliography,
    BibliographyGenerator,
    CitationKeySource,
    PageRecordKeySource,
    RenderedContentKeySource,
    generate_bibliography,
    generate_bibliography_from_content,
)
from citeforge.citation.context import CitationContext, create_context
from citeforge.citation.formatter import (
    format_bibliography_entry,
    format_inline_citation,
)
from citeforge.citation.models import (
    Article,
    Book,
    Chapter,
    GenericReference,
    Reference,
    ReferenceType,
    reference_from_dict,
)
from citeforge.citation.registry import CitationRegistry, PageCitationRecord
from citeforge.citation.resolver import CitationResolver
from citeforge.citation.scanner import (
    BibliographyMarker,
    CitationMarker,
    TextSegment,
    scan,
)
from citeforge.citation.store import ReferenceStore

__all__ = [
    # Models
    "Article",
    "Book",
    "Chapter",
    "GenericReference",
    "Reference",
    "ReferenceType",
    "reference_from_dict",
    # Store and state
    "ReferenceStore",
    "CitationRegistry",
    "PageCitationRecord",
    "CitationContext",
    "create_context",
    # Scanning and resolution
    "TextSegment",
    "CitationMarker",
    "BibliographyMarker",
    "scan",
    "CitationResolver",
    # Formatting
    "format_inline_citation",
    "format_bibliography_entry",
    # Bibliography
    "Bibliography",
    "BibliographyGenerator",
    "CitationKeySource",
    "PageRecordKeySource",
    "RenderedContentKeySource",
    "generate_bibliography",
    "generate_bibliography_from_content",
]
