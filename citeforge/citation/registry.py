"""Per-page citation records.

The resolver adds every key it resolves to the record of the page being
rendered; the bibliography pass reads the record back. Records only grow
during a build. The registry is cleared explicitly between builds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from citeforge.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class PageCitationRecord:
    """Keys cited on one page and the source they were resolved against.

    Attributes:
        page_id: Page URL, or the default page identifier
        keys: Citation keys resolved so far
        source: Reference source bound to the page, once known
    """

    page_id: str
    keys: set[str] = field(default_factory=set)
    source: Optional[str] = None

    def bind_source(self, source_name: str) -> str:
        """Bind the page to a reference source and return the bound name.

        Used when a bibliography asks for a source. The page's own source
        wins; a different name is reported and ignored so that every entry
        is looked up where its key was resolved.
        """
        if self.source is None:
            self.source = source_name
        elif source_name != self.source:
            logger.warning(
                "Page already bound to a different reference source",
                page=self.page_id,
                bound=self.source,
                requested=source_name,
            )
        return self.source

    def use_source(self, source_name: str) -> None:
        """Record the source the page's citations are now resolved against.

        Unlike bind_source(), the latest name wins: a page rendered again
        with another source, or a second page sharing the default record,
        cites from the source it asked for.
        """
        if self.source is not None and source_name != self.source:
            logger.debug(
                "Page reference source changed",
                page=self.page_id,
                previous=self.source,
                source=source_name,
            )
        self.source = source_name

    def add(self, key: str) -> None:
        """Record a resolved key."""
        self.keys.add(key)

    @property
    def sorted_keys(self) -> list[str]:
        """Recorded keys in lexicographic order."""
        return sorted(self.keys)


class CitationRegistry:
    """All page citation records for one build."""

    def __init__(self) -> None:
        self._records: dict[str, PageCitationRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, page_id: object) -> bool:
        return page_id in self._records

    @property
    def page_ids(self) -> list[str]:
        """Identifiers of pages with a record."""
        return list(self._records.keys())

    def record_for(self, page_id: str) -> PageCitationRecord:
        """Return the page's record, creating it on first use."""
        record = self._records.get(page_id)
        if record is None:
            record = PageCitationRecord(page_id=page_id)
            self._records[page_id] = record
        return record

    def get(self, page_id: str) -> Optional[PageCitationRecord]:
        """Return the page's record without creating one."""
        return self._records.get(page_id)

    def clear(self, page_id: Optional[str] = None) -> None:
        """Forget one page's record, or every record."""
        if page_id is None:
            self._records.clear()
        else:
            self._records.pop(page_id, None)


__all__ = ["PageCitationRecord", "CitationRegistry"]
