"""Reference data models.

A reference is one of four variants, each carrying only the fields that
make sense for it:

    Article           journal, volume, issue, pages
    Book              publisher, pages
    Chapter           book_title, editors, pages, publisher
    GenericReference  (no venue fields)

All variants share the citation key, authors, year, title and the four
link fields (doi, url, pdf, source). Records are frozen once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

LINK_FIELDS: tuple[str, ...] = ("doi", "url", "pdf", "source")


class ReferenceType(Enum):
    """Reference types recognised in reference data."""

    ARTICLE = "article"
    BOOK = "book"
    CHAPTER = "chapter"
    GENERIC = "generic"

    @classmethod
    def parse(cls, value: Any) -> "ReferenceType":
        """Map a raw ``type`` value to a ReferenceType, defaulting to GENERIC."""
        text = _text(value)
        if text is None:
            return cls.GENERIC
        try:
            return cls(text.lower())
        except ValueError:
            return cls.GENERIC


def _text(value: Any) -> Optional[str]:
    """Normalise a scalar YAML value to a stripped string, or None if empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class _ReferenceBase:
    """Fields shared by every reference variant."""

    key: str
    authors: Optional[str] = None
    year: Optional[str] = None
    title: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None
    pdf: Optional[str] = None
    source: Optional[str] = None

    @property
    def links(self) -> list[tuple[str, str]]:
        """Present links as (label, href), in doi, url, pdf, source order."""
        result: list[tuple[str, str]] = []
        for name in LINK_FIELDS:
            href = getattr(self, name)
            if href:
                result.append((name, href))
        return result


@dataclass(frozen=True)
class Article(_ReferenceBase):
    """A journal article."""

    journal: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    pages: Optional[str] = None

    @property
    def reference_type(self) -> ReferenceType:
        return ReferenceType.ARTICLE


@dataclass(frozen=True)
class Book(_ReferenceBase):
    """A book."""

    publisher: Optional[str] = None
    pages: Optional[str] = None

    @property
    def reference_type(self) -> ReferenceType:
        return ReferenceType.BOOK


@dataclass(frozen=True)
class Chapter(_ReferenceBase):
    """A chapter in an edited book."""

    book_title: Optional[str] = None
    editors: Optional[str] = None
    pages: Optional[str] = None
    publisher: Optional[str] = None

    @property
    def reference_type(self) -> ReferenceType:
        return ReferenceType.CHAPTER


@dataclass(frozen=True)
class GenericReference(_ReferenceBase):
    """Any reference without a recognised type.

    declared_type keeps the raw ``type`` value, if one was given.
    """

    declared_type: Optional[str] = None

    @property
    def reference_type(self) -> ReferenceType:
        return ReferenceType.GENERIC


Reference = Union[Article, Book, Chapter, GenericReference]

_VARIANT_FIELDS: dict[ReferenceType, tuple[type, tuple[str, ...]]] = {
    ReferenceType.ARTICLE: (Article, ("journal", "volume", "issue", "pages")),
    ReferenceType.BOOK: (Book, ("publisher", "pages")),
    ReferenceType.CHAPTER: (
        Chapter,
        ("book_title", "editors", "pages", "publisher"),
    ),
    ReferenceType.GENERIC: (GenericReference, ()),
}

_COMMON_FIELDS: tuple[str, ...] = ("authors", "year", "title") + LINK_FIELDS


def reference_from_dict(key: str, data: dict[str, Any]) -> Reference:
    """Build the reference variant described by a raw YAML record.

    Fields that do not belong to the selected variant are ignored, so an
    article-only field on a book record never reaches the book.

    Args:
        key: Citation key the record is stored under
        data: Raw mapping from the reference file

    Returns:
        Article, Book, Chapter or GenericReference
    """
    ref_type = ReferenceType.parse(data.get("type"))
    variant, variant_fields = _VARIANT_FIELDS[ref_type]

    values: dict[str, Optional[str]] = {
        name: _text(data.get(name)) for name in _COMMON_FIELDS + variant_fields
    }
    if ref_type is ReferenceType.GENERIC:
        values["declared_type"] = _text(data.get("type"))

    return variant(key=str(key), **values)


__all__ = [
    "LINK_FIELDS",
    "ReferenceType",
    "Article",
    "Book",
    "Chapter",
    "GenericReference",
    "Reference",
    "reference_from_dict",
]
