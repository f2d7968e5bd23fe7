"""Citation context.

Everything the citation engine remembers during a build lives on one
CitationContext: the reference store, the per-page registry and the name
of the default source. Separate builds use separate contexts; a watch
process calls clear() or reset() between rebuilds.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, TYPE_CHECKING

from citeforge.citation.registry import CitationRegistry, PageCitationRecord
from citeforge.citation.store import ReferenceStore
from citeforge.core.constants import DEFAULT_SOURCE_NAME

if TYPE_CHECKING:
    from citeforge.core.config import Config


class CitationContext:
    """Store, registry and default source for one build."""

    def __init__(
        self,
        store: ReferenceStore,
        registry: Optional[CitationRegistry] = None,
        default_source: str = DEFAULT_SOURCE_NAME,
    ) -> None:
        self.store = store
        self.registry = registry if registry is not None else CitationRegistry()
        self.default_source = default_source

    def source_for(self, override: Optional[str] = None) -> str:
        """Source name to use: the override if given, else the default."""
        if override:
            return override
        return self.default_source

    def page_record(
        self, page_id: str, source: Optional[str] = None
    ) -> tuple[PageCitationRecord, str]:
        """Return a page's record and the source to resolve its keys in.

        The source is ``source`` if given, else the default source, and is
        stored on the record for the bibliography pass.
        """
        record = self.registry.record_for(page_id)
        source_name = self.source_for(source)
        record.use_source(source_name)
        return record, source_name

    def clear(self) -> None:
        """Forget all page records; keep cached reference sources."""
        self.registry.clear()

    def reset(self) -> None:
        """Forget page records and cached reference sources."""
        self.registry.clear()
        self.store.clear()


def create_context(config: "Config") -> CitationContext:
    """Factory function to create a context from configuration.

    Args:
        config: Loaded configuration

    Returns:
        Context with a fresh store and registry
    """
    store = ReferenceStore(Path(config.references_path))
    return CitationContext(
        store=store,
        default_source=config.references.default_source,
    )


__all__ = ["CitationContext", "create_context"]
