"""
Centralized Constants for CiteForge.

Import from here to ensure consistency across the codebase.

Usage
-----
    from citeforge.core.constants import (
        DEFAULT_PAGE_ID,
        DEFAULT_SOURCE_NAME,
        REFERENCE_FILE_EXTENSIONS,
    )
"""

import re
from typing import Pattern, Tuple

# ============================================================================
# Reference Data
# ============================================================================

#: Directory (relative to the project root) holding reference YAML files
DEFAULT_REFERENCES_DIR: str = "_data/references"

#: Source used when neither the page nor the marker names one
DEFAULT_SOURCE_NAME: str = "references"

#: Extensions tried, in order, when resolving a source name to a file
REFERENCE_FILE_EXTENSIONS: Tuple[str, ...] = (".yaml", ".yml")

#: Plain file-name stems only; no separators, no leading dot
SOURCE_NAME_PATTERN: Pattern[str] = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_.\-]*$")

# ============================================================================
# Pages
# ============================================================================

#: Page identifier used when the renderer does not know the page URL
DEFAULT_PAGE_ID: str = "default"

# ============================================================================
# Markup
# ============================================================================

DEFAULT_CITATION_CLASS: str = "citation"
DEFAULT_MISSING_CLASS: str = "citation-missing"
DEFAULT_CONTAINER_CLASS: str = "references"


def is_valid_source_name(name: str) -> bool:
    """Return True if name is a plain source file stem."""
    if not name or ".." in name:
        return False
    return SOURCE_NAME_PATTERN.match(name) is not None
