"""CiteForge - citation and bibliography resolution for Markdown sites.

This package resolves inline citation markers against YAML reference data
and renders per-page bibliographies during static site generation.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
