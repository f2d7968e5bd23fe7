"""
Command Line Interface for CiteForge.

    citeforge render INPUT.md          Render a page with citations
    citeforge bibliography INPUT.html  Bibliography from rendered HTML
    citeforge references [SOURCE]      List a reference source
"""
