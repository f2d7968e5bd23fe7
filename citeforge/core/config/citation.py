"""
Citation, reference data, and bibliography configuration.

These settings control where reference sources live, which source pages
cite by default, and the CSS classes put on generated markup.
"""

from dataclasses import dataclass

from citeforge.core.constants import (
    DEFAULT_CITATION_CLASS,
    DEFAULT_CONTAINER_CLASS,
    DEFAULT_MISSING_CLASS,
    DEFAULT_REFERENCES_DIR,
    DEFAULT_SOURCE_NAME,
)


@dataclass
class ReferencesConfig:
    """Reference data configuration."""

    directory: str = DEFAULT_REFERENCES_DIR
    default_source: str = DEFAULT_SOURCE_NAME


@dataclass
class CitationConfig:
    """Inline citation markup configuration."""

    citation_class: str = DEFAULT_CITATION_CLASS
    missing_class: str = DEFAULT_MISSING_CLASS


@dataclass
class BibliographyConfig:
    """Bibliography block configuration."""

    container_class: str = DEFAULT_CONTAINER_CLASS
