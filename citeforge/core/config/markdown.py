"""
Markdown rendering configuration.

Lists the Python-Markdown extensions enabled alongside the citation
extension. Footnotes are on by default.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class MarkdownConfig:
    """Python-Markdown configuration."""

    extensions: List[str] = field(default_factory=lambda: ["footnotes"])
    output_format: str = "html"
