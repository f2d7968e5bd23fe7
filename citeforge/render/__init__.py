"""
Markdown Rendering for CiteForge.

    extension.py   CitationExtension and its treeprocessors
    page.py        PageRenderer: one configured Markdown instance per build
"""

from citeforge.render.extension import CitationExtension, PageEnv
from citeforge.render.page import PageRenderer

__all__ = ["CitationExtension", "PageEnv", "PageRenderer"]
