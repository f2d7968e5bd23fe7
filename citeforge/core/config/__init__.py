"""
Configuration Management for CiteForge.

Configuration is a small hierarchy of dataclasses mapped from a YAML file
(citeforge.yaml), with environment variable expansion and overrides.

    config/
    ├── citation.py      # ReferencesConfig, CitationConfig, BibliographyConfig
    ├── markdown.py      # MarkdownConfig
    └── config.py        # Main Config class

Usage Example
-------------
    from citeforge.core.config import Config
    from citeforge.core.config_loaders import load_config

    config = load_config()
    source = config.references.default_source
"""

from citeforge.core.config.config import Config
from citeforge.core.config.citation import (
    BibliographyConfig,
    CitationConfig,
    ReferencesConfig,
)
from citeforge.core.config.markdown import MarkdownConfig

__all__ = [
    "Config",
    "ReferencesConfig",
    "CitationConfig",
    "BibliographyConfig",
    "MarkdownConfig",
]

# NOTE: load_config, save_config and expand_env_vars live in
# citeforge.core.config_loaders to avoid circular imports.
