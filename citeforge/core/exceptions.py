"""
Centralized Exception Hierarchy for CiteForge.

All exceptions inherit from CiteForgeError for easy catching.

Each exception includes:
- user_message: Human-readable description of what went wrong
- why_it_happened: Explanation of the root cause
- how_to_fix: Actionable steps to resolve the issue
- error_code: Unique identifier for documentation lookup (e.g., "CF-REF-001")

Most of these never escape the engine: the reference store catches
ReferenceSourceError at its boundary and degrades to an empty source, so
a broken data file shows up as warnings and missing-citation placeholders
rather than a failed build. The CLI is the only layer that renders them.

Exception Hierarchy
-------------------
    CiteForgeError (base)
    ├── ReferenceSourceError
    │   ├── ReferenceSourceNotFoundError
    │   ├── AmbiguousReferenceSourceError
    │   ├── ReferenceDataError
    │   └── InvalidSourceNameError
    ├── ConfigValidationError
    └── ConfigFileNotFoundError
"""

import re
from typing import List, Optional


def sanitize_path(path: str) -> str:
    """Sanitize a file path to avoid leaking the user's home directory.

    Args:
        path: Original file path

    Returns:
        Sanitized path with the home directory replaced
    """
    if not path:
        return path

    patterns = [
        # Windows user paths: C:\Users\username -> <user-home>
        (r"[A-Za-z]:\\Users\\[^\\]+", r"<user-home>"),
        # Unix/Mac home paths: /home/username or /Users/username -> <user-home>
        (r"/(?:home|Users)/[^/]+", r"<user-home>"),
    ]

    result = path
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)

    return result


class CiteForgeError(Exception):
    """
    Base exception for all CiteForge errors.

    Example
    -------
        try:
            config = load_config(path)
        except CiteForgeError as e:
            logger.error(f"Build failed: {e}")
            print(f"Fix: {e.how_to_fix}")
    """

    # Default error info - subclasses should override
    error_code: str = "CF-ERR-000"
    why_it_happened: str = "An unexpected error occurred"
    how_to_fix: List[str] = ["Check the error message for details"]

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        why_it_happened: Optional[str] = None,
        how_to_fix: Optional[List[str]] = None,
    ) -> None:
        """Initialize CiteForgeError with helpful information.

        Args:
            message: Human-readable error message
            error_code: Unique identifier (e.g., "CF-REF-001")
            why_it_happened: Explanation of root cause
            how_to_fix: List of actionable fix suggestions
        """
        super().__init__(sanitize_path(message))

        if error_code is not None:
            self.error_code = error_code
        if why_it_happened is not None:
            self.why_it_happened = why_it_happened
        if how_to_fix is not None:
            self.how_to_fix = how_to_fix

    @property
    def user_message(self) -> str:
        """Get the user-friendly error message."""
        return str(self)


# ============================================================================
# Reference Source Exceptions
# ============================================================================


class ReferenceSourceError(CiteForgeError):
    """
    Base exception for reference source loading errors.

    Carries the name of the source that failed so callers can report it.
    """

    error_code = "CF-REF-000"
    why_it_happened = "A reference source could not be loaded"
    how_to_fix = ["Check the reference data directory and file contents"]

    def __init__(self, message: str, *, source_name: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.source_name = source_name


class ReferenceSourceNotFoundError(ReferenceSourceError):
    """Raised when no data file exists for a source name."""

    error_code = "CF-REF-001"
    why_it_happened = (
        "No YAML file with this name exists in the reference data directory"
    )
    how_to_fix = [
        "Check the spelling of the source name in the page or bibliography marker",
        "Create <references_dir>/<source>.yaml",
        "Point references.directory in citeforge.yaml at the right folder",
    ]


class AmbiguousReferenceSourceError(ReferenceSourceError):
    """Raised when a source name maps to more than one data file."""

    error_code = "CF-REF-002"
    why_it_happened = "Both a .yaml and a .yml file exist for the same source name"
    how_to_fix = ["Delete or rename one of the two files"]


class ReferenceDataError(ReferenceSourceError):
    """
    Raised when a reference file exists but cannot be used.

    This can occur when:
    - The YAML is syntactically invalid
    - The top-level value is not a mapping of citation keys
    - The file cannot be read
    """

    error_code = "CF-REF-003"
    why_it_happened = (
        "The reference file is not valid YAML or is not a mapping of "
        "citation keys to reference records"
    )
    how_to_fix = [
        "Validate the YAML syntax: yamllint <file>",
        "Make the top level a mapping: 'smith2020: {authors: ..., year: ...}'",
    ]


class InvalidSourceNameError(ReferenceSourceError):
    """
    Raised when a source name would escape the reference data directory.

    Example
    -------
        store.load("../../etc/passwd")
        # Warns and returns an empty source
    """

    error_code = "CF-REF-004"
    why_it_happened = (
        "Source names are file names without extension; path separators "
        "and '..' are not allowed"
    )
    how_to_fix = ["Use a plain name such as 'references' or 'thesis-2024'"]


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigValidationError(CiteForgeError):
    """Raised when configuration values are invalid."""

    error_code = "CF-CFG-001"
    why_it_happened = "A configuration value is missing or out of range"
    how_to_fix = [
        "Check citeforge.yaml against the documented options",
        "Remove the offending key to fall back to the default",
    ]


class ConfigFileNotFoundError(CiteForgeError):
    """Raised when an explicitly requested config file does not exist."""

    error_code = "CF-CFG-002"
    why_it_happened = "The configuration file passed on the command line does not exist"
    how_to_fix = [
        "Check the path passed to --config",
        "Omit --config to use citeforge.yaml in the current directory",
    ]


__all__ = [
    "sanitize_path",
    "CiteForgeError",
    "ReferenceSourceError",
    "ReferenceSourceNotFoundError",
    "AmbiguousReferenceSourceError",
    "ReferenceDataError",
    "InvalidSourceNameError",
    "ConfigValidationError",
    "ConfigFileNotFoundError",
]
