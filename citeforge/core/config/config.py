"""
Main configuration class for CiteForge.

This module provides the Config dataclass that aggregates all sub-configs
and handles validation, path management, and YAML parsing.

Architecture Context
--------------------
Configuration sits at the Core layer. The Config object is created once
per build and passed to the renderer and CLI commands:

    citeforge.yaml
           ↓
    load_config() → Config object
           ↓
    Passed to: create_context(), PageRenderer, CLI commands

Configuration Hierarchy
-----------------------
    Config
    ├── ReferencesConfig    # Reference data directory, default source
    ├── CitationConfig      # Inline citation CSS classes
    ├── BibliographyConfig  # Bibliography container class
    └── MarkdownConfig      # Extra Python-Markdown extensions

Environment Variables
---------------------
String values may use ${VAR_NAME} or ${VAR_NAME:default}:

    references:
      directory: ${CITEFORGE_DATA:_data}/references

Usage Example
-------------
    config = load_config()
    refs_dir = config.references_path   # absolute Path
    source = config.references.default_source
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from citeforge.core.config.citation import (
    BibliographyConfig,
    CitationConfig,
    ReferencesConfig,
)
from citeforge.core.config.markdown import MarkdownConfig
from citeforge.core.constants import is_valid_source_name
from citeforge.core.exceptions import ConfigValidationError

VALID_OUTPUT_FORMATS = frozenset({"html", "xhtml"})


@dataclass
class Config:
    """Main CiteForge configuration."""

    references: ReferencesConfig = field(default_factory=ReferencesConfig)
    citation: CitationConfig = field(default_factory=CitationConfig)
    bibliography: BibliographyConfig = field(default_factory=BibliographyConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)

    # Runtime paths (set after loading)
    _base_path: Path = field(default_factory=Path.cwd, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Validates:
        - Default source is a plain file stem
        - References directory is not empty or root
        - CSS class names are non-empty
        - Markdown output format is supported
        """
        if not is_valid_source_name(self.references.default_source):
            raise ConfigValidationError(
                f"references.default_source is not a valid source name: "
                f"{self.references.default_source!r}"
            )

        if self.references.directory in ("", "/", "\\"):
            raise ConfigValidationError(
                f"references.directory must not be root or empty: "
                f"{self.references.directory!r}"
            )

        for name, value in (
            ("citation.citation_class", self.citation.citation_class),
            ("citation.missing_class", self.citation.missing_class),
            ("bibliography.container_class", self.bibliography.container_class),
        ):
            if not value or not value.strip():
                raise ConfigValidationError(f"{name} must not be empty")

        if self.markdown.output_format not in VALID_OUTPUT_FORMATS:
            raise ConfigValidationError(
                f"markdown.output_format must be one of "
                f"{sorted(VALID_OUTPUT_FORMATS)}, got: {self.markdown.output_format}"
            )

    @property
    def base_path(self) -> Path:
        """Project root that relative paths are resolved against."""
        return self._base_path

    @property
    def references_path(self) -> Path:
        """Get absolute path to the reference data directory."""
        directory = Path(self.references.directory)
        if directory.is_absolute():
            return directory
        return self._base_path / directory

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        result: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if key.startswith("_"):
                continue
            result[key] = value
        return result

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        if not isinstance(data, dict):
            raise ConfigValidationError(
                f"{cls_type.__name__} section must be a mapping, got {type(data).__name__}"
            )
        valid_keys = {f.name for f in fields(cls_type)}
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], base_path: Optional[Path] = None
    ) -> "Config":
        """Create Config from dictionary."""
        # Import here to avoid circular dependency
        from citeforge.core.config_loaders import expand_env_vars

        data = expand_env_vars(data)

        config = cls(
            references=ReferencesConfig(
                **cls._filter_fields(ReferencesConfig, data.get("references"))
            ),
            citation=CitationConfig(
                **cls._filter_fields(CitationConfig, data.get("citation"))
            ),
            bibliography=BibliographyConfig(
                **cls._filter_fields(BibliographyConfig, data.get("bibliography"))
            ),
            markdown=MarkdownConfig(
                **cls._filter_fields(MarkdownConfig, data.get("markdown"))
            ),
        )

        if base_path:
            config._base_path = base_path

        return config
