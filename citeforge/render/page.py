"""Page renderer.

Renders Markdown pages with the citation extension and the configured
Python-Markdown extensions. One renderer serves a whole build; its
context accumulates the citation records of every page it renders.
"""

from __future__ import annotations

from typing import Optional

import markdown

from citeforge.citation.context import CitationContext, create_context
from citeforge.core.config import Config
from citeforge.core.logging import get_logger
from citeforge.render.extension import CitationExtension, PageEnv

logger = get_logger(__name__)


class PageRenderer:
    """Markdown-to-HTML renderer for site pages.

    Example
    -------
        renderer = PageRenderer(load_config())
        html = renderer.render(text, page_url="/blog/post/")
        keys = renderer.context.registry.get("/blog/post/").keys
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        context: Optional[CitationContext] = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            config: Configuration; defaults to Config()
            context: Citation context; defaults to one built from config
        """
        self.config = config or Config()
        self.context = context or create_context(self.config)
        self.extension = CitationExtension(
            context=self.context,
            citation_class=self.config.citation.citation_class,
            missing_class=self.config.citation.missing_class,
            container_class=self.config.bibliography.container_class,
        )
        self.md = markdown.Markdown(
            extensions=[self.extension, *self.config.markdown.extensions],
            output_format=self.config.markdown.output_format,
        )
        logger.debug(
            "Page renderer ready",
            references=str(self.context.store.references_dir),
            extensions=",".join(self.config.markdown.extensions),
        )

    def render(
        self,
        text: str,
        page_url: Optional[str] = None,
        reference_source: Optional[str] = None,
    ) -> str:
        """Render one page.

        Args:
            text: Markdown source
            page_url: Page URL; pages without one share the default record
            reference_source: Source the page cites from; defaults to the
                configured default source

        Returns:
            HTML fragment
        """
        self.md.reset()
        self.extension.set_page(
            PageEnv(page_url=page_url, reference_source=reference_source)
        )
        return self.md.convert(text)


__all__ = ["PageRenderer"]
