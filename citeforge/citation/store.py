"""Reference store.

Loads named reference sources from YAML files and caches them for the
life of the store. A source named ``thesis`` is read from
``<references_dir>/thesis.yaml`` (or ``thesis.yml``) and maps citation
keys to reference records:

    smith2020:
      type: article
      authors: Smith, J. & Doe, A.
      year: 2020
      title: A Study
      journal: Journal of Things

Loading never fails a build. A missing, ambiguous or malformed source is
logged and treated as empty, and that outcome is cached like any other.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from citeforge.citation.models import Reference, reference_from_dict
from citeforge.core.constants import REFERENCE_FILE_EXTENSIONS, is_valid_source_name
from citeforge.core.exceptions import (
    AmbiguousReferenceSourceError,
    InvalidSourceNameError,
    ReferenceDataError,
    ReferenceSourceError,
    ReferenceSourceNotFoundError,
)
from citeforge.core.logging import get_logger

logger = get_logger(__name__)

_EMPTY: Mapping[str, Reference] = MappingProxyType({})


class ReferenceStore:
    """Lazily loaded, cached reference sources.

    The first load of a source name, successful or not, is memoised. Later
    loads return the identical mapping without touching the filesystem,
    so editing or deleting a file mid-build has no effect until clear().
    """

    def __init__(self, references_dir: Path) -> None:
        """Initialize the store.

        Args:
            references_dir: Directory holding <source>.yaml files
        """
        self.references_dir = Path(references_dir)
        self._cache: dict[str, Mapping[str, Reference]] = {}

    @property
    def cached_sources(self) -> list[str]:
        """Names of sources loaded so far, in load order."""
        return list(self._cache.keys())

    def is_cached(self, source_name: str) -> bool:
        """Check whether a source has already been loaded."""
        return source_name in self._cache

    def load(self, source_name: str) -> Mapping[str, Reference]:
        """Load a reference source.

        Args:
            source_name: File stem of the source

        Returns:
            Read-only mapping of citation key to Reference; empty if the
            source could not be loaded
        """
        cached = self._cache.get(source_name)
        if cached is not None:
            return cached

        try:
            references = self._read_source(source_name)
        except ReferenceSourceError as e:
            logger.warning(
                "Reference source unavailable, using empty source",
                source=source_name,
                error_code=e.error_code,
                error=str(e),
            )
            references = _EMPTY

        self._cache[source_name] = references
        return references

    def get(self, source_name: str, key: str) -> Optional[Reference]:
        """Look up one reference, loading its source if needed."""
        return self.load(source_name).get(key)

    def clear(self) -> None:
        """Drop every cached source."""
        count = len(self._cache)
        self._cache.clear()
        logger.debug("Reference cache cleared", sources=count)

    def _resolve_path(self, source_name: str) -> Path:
        """Find the single data file backing a source name."""
        if not is_valid_source_name(source_name):
            raise InvalidSourceNameError(
                f"Invalid reference source name: {source_name!r}",
                source_name=source_name,
            )

        candidates = [
            self.references_dir / f"{source_name}{ext}"
            for ext in REFERENCE_FILE_EXTENSIONS
        ]
        existing = [path for path in candidates if path.is_file()]

        if not existing:
            raise ReferenceSourceNotFoundError(
                f"No reference file for source '{source_name}' in "
                f"{self.references_dir}",
                source_name=source_name,
            )
        if len(existing) > 1:
            names = ", ".join(path.name for path in existing)
            raise AmbiguousReferenceSourceError(
                f"Source '{source_name}' matches several files: {names}",
                source_name=source_name,
            )
        return existing[0]

    def _read_source(self, source_name: str) -> Mapping[str, Reference]:
        """Read and parse one source file.

        Raises:
            ReferenceSourceError: If the file is missing, ambiguous, unreadable
                or not a mapping of citation keys
        """
        path = self._resolve_path(source_name)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise ReferenceDataError(
                f"Cannot read {path.name}: {e}", source_name=source_name
            ) from e
        except yaml.YAMLError as e:
            raise ReferenceDataError(
                f"Invalid YAML in {path.name}: {e}", source_name=source_name
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ReferenceDataError(
                f"Top level of {path.name} must be a mapping, "
                f"got {type(data).__name__}",
                source_name=source_name,
            )

        references = self._build_references(source_name, data)
        logger.debug(
            "Loaded reference source",
            source=source_name,
            path=path.name,
            references=len(references),
        )
        return MappingProxyType(references)

    def _build_references(
        self, source_name: str, data: dict[Any, Any]
    ) -> dict[str, Reference]:
        """Convert raw entries, skipping any that are not mappings."""
        references: dict[str, Reference] = {}
        for raw_key, entry in data.items():
            key = str(raw_key)
            if not isinstance(entry, dict):
                logger.warning(
                    "Skipping reference entry that is not a mapping",
                    source=source_name,
                    key=key,
                    got=type(entry).__name__,
                )
                continue
            references[key] = reference_from_dict(key, entry)
        return references


__all__ = ["ReferenceStore"]
