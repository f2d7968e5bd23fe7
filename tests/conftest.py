"""
Shared pytest fixtures and configuration for CiteForge tests.

This file is automatically discovered by pytest and provides fixtures
that can be used across all test files.

Fixture Organization
--------------------
- **temp_dir**: Temporary directory for file operations
- **references_dir**: Reference data directory with a sample source
- **store / context**: Citation engine state over references_dir
- **resolver / generator**: Ready-made engine components
- **config / renderer**: Configuration and page renderer for a temp project
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest
import yaml

from citeforge.citation.bibliography import BibliographyGenerator
from citeforge.citation.context import CitationContext
from citeforge.citation.resolver import CitationResolver
from citeforge.citation.store import ReferenceStore
from citeforge.core.config import Config
from citeforge.render.page import PageRenderer

SAMPLE_REFERENCES = {
    "smith2020": {
        "type": "article",
        "authors": "Smith, J. & Doe, A.",
        "year": 2020,
        "title": "A Study of Things",
        "journal": "Journal of Things",
        "volume": 12,
        "issue": 3,
        "pages": "1-10",
        "doi": "https://doi.org/10.1000/things",
    },
    "doe2019": {
        "type": "book",
        "authors": "Doe, A.",
        "year": 2019,
        "title": "The Book of Stuff",
        "publisher": "Stuff Press",
        "pages": "320 pp",
        "url": "https://example.org/stuff",
    },
    "brown2018": {
        "type": "chapter",
        "authors": "Brown, B. and Green, G.",
        "year": 2018,
        "title": "On Chapters",
        "book_title": "Collected Essays",
        "editors": "White, W.",
        "pages": "45-67",
        "publisher": "Essay House",
        "pdf": "https://example.org/chapter.pdf",
    },
    "misc2021": {
        "authors": "Lee, K.",
        "year": 2021,
        "title": "A Blog Post",
        "source": "https://example.org/post",
    },
}

THESIS_REFERENCES = {
    "jones2015": {
        "type": "article",
        "authors": "Jones, P.",
        "year": 2015,
        "title": "Thesis Work",
        "journal": "Thesis Journal",
    },
}


# ============================================================================
# Path and Directory Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_source(directory: Path, name: str, data: object, ext: str = ".yaml") -> Path:
    """Write a reference source file and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}{ext}"
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def make_source():
    """Return the write_source helper for tests that build their own sources."""
    return write_source


@pytest.fixture
def references_dir(temp_dir: Path) -> Path:
    """Create _data/references with 'references' and 'thesis' sources."""
    directory = temp_dir / "_data" / "references"
    write_source(directory, "references", SAMPLE_REFERENCES)
    write_source(directory, "thesis", THESIS_REFERENCES)
    return directory


# ============================================================================
# Citation Engine Fixtures
# ============================================================================


@pytest.fixture
def store(references_dir: Path) -> ReferenceStore:
    """Reference store over the sample directory."""
    return ReferenceStore(references_dir)


@pytest.fixture
def context(store: ReferenceStore) -> CitationContext:
    """Fresh citation context with the default source 'references'."""
    return CitationContext(store)


@pytest.fixture
def resolver(context: CitationContext) -> CitationResolver:
    """Citation resolver with default CSS classes."""
    return CitationResolver(context)


@pytest.fixture
def generator(context: CitationContext) -> BibliographyGenerator:
    """Bibliography generator with the default container class."""
    return BibliographyGenerator(context)


# ============================================================================
# Configuration and Rendering Fixtures
# ============================================================================


@pytest.fixture
def config(temp_dir: Path, references_dir: Path) -> Config:
    """Default configuration rooted at the temp project."""
    config = Config()
    config._base_path = temp_dir
    return config


@pytest.fixture
def renderer(config: Config) -> PageRenderer:
    """Page renderer for the temp project."""
    return PageRenderer(config)
