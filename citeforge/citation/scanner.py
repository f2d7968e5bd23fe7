"""Citation marker scanner.

Splits text into typed segments without rendering anything:

    "See [@smith2020; @doe2019] for details."
    -> [TextSegment("See "),
        CitationMarker(("smith2020", "doe2019")),
        TextSegment(" for details.")]

Recognised markers:

    [@key]                      one citation
    [@key1; @key2; key3]        several citations; '@' optional after the first
    [[bibliography]]            bibliography, at the start of a line
    [[bibliography:source]]     bibliography from a named source
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Union

CITATION_PATTERN = re.compile(r"\[@([^\]]+)\]")
BIBLIOGRAPHY_PATTERN = re.compile(
    r"^\[\[bibliography(?::([^\]]+))?\]\]", re.MULTILINE
)

_MARKER_PATTERN = re.compile(
    rf"(?P<bibliography>{BIBLIOGRAPHY_PATTERN.pattern})"
    rf"|(?P<citation>{CITATION_PATTERN.pattern})",
    re.MULTILINE,
)


@dataclass(frozen=True)
class TextSegment:
    """Plain text between markers."""

    text: str


@dataclass(frozen=True)
class CitationMarker:
    """An inline citation marker and its keys, in marker order."""

    keys: tuple[str, ...]
    raw: str = field(default="", compare=False)


@dataclass(frozen=True)
class BibliographyMarker:
    """A bibliography marker, optionally naming its source."""

    source: Optional[str] = None
    raw: str = field(default="", compare=False)


Segment = Union[TextSegment, CitationMarker, BibliographyMarker]


def parse_keys(body: str) -> tuple[str, ...]:
    """Split the inside of a citation marker into keys.

    Keys are separated by ';', trimmed, and lose one leading '@'. Blank
    keys are dropped.
    """
    keys: list[str] = []
    for part in body.split(";"):
        key = part.strip()
        if key.startswith("@"):
            key = key[1:].strip()
        if key:
            keys.append(key)
    return tuple(keys)


def scan(text: str) -> list[Segment]:
    """Split text into text, citation and bibliography segments.

    A citation marker with no usable key stays part of the surrounding
    text. Adjacent text is merged into one segment.

    Args:
        text: Text to scan

    Returns:
        Segments in document order; concatenating their source text gives
        back the input
    """
    segments: list[Segment] = []
    pending: list[str] = []
    pos = 0

    for match in _MARKER_PATTERN.finditer(text):
        pending.append(text[pos : match.start()])
        pos = match.end()
        marker = _marker_from_match(match)
        if marker is None:
            pending.append(match.group(0))
            continue
        _flush(pending, segments)
        segments.append(marker)

    pending.append(text[pos:])
    _flush(pending, segments)
    return segments


def has_markers(text: str) -> bool:
    """Quick check for any citation or bibliography marker."""
    return any(not isinstance(s, TextSegment) for s in scan(text))


def _marker_from_match(match: re.Match) -> Optional[Segment]:
    raw = match.group(0)
    if match.group("bibliography") is not None:
        source = match.group(2)
        source = source.strip() if source else None
        return BibliographyMarker(source=source or None, raw=raw)

    keys = parse_keys(match.group(4))
    if not keys:
        return None
    return CitationMarker(keys=keys, raw=raw)


def _flush(pending: list[str], segments: list[Segment]) -> None:
    text = "".join(pending)
    pending.clear()
    if text:
        segments.append(TextSegment(text))


__all__ = [
    "CITATION_PATTERN",
    "BIBLIOGRAPHY_PATTERN",
    "TextSegment",
    "CitationMarker",
    "BibliographyMarker",
    "Segment",
    "parse_keys",
    "scan",
    "has_markers",
]
