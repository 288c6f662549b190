"""Content processing for datalead.

This module turns article files into immutable ContentItem objects.

Key classes:
- ContentItem: Frozen dataclass for one authored article.
- Heading: Dataclass for a heading, used for TOC generation.
- FileContentLoader: Discovers article files in the content directory.
- ContentItemBuilder: Builds a ContentItem from one file.
- ContentProcessor: Facade that loads every article.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .errors import ContentError, InvalidFieldError, MissingFieldError
from .extractors import DEFAULT_LAYOUT, CompositeMetadataExtractor, default_metadata_extractor
from .utils import is_content_file, slugify

__all__ = [
    "ContentError",
    "ContentItem",
    "ContentItemBuilder",
    "ContentProcessor",
    "FileContentLoader",
    "Heading",
    "InvalidFieldError",
    "MissingFieldError",
]

POSTS_URL = "/posts/"


@dataclass
class Heading:
    """A heading extracted from an article body.

    Attributes:
        id: Anchor id for the heading.
        text: The heading's inner HTML.
        level: Heading level (1-6).
    """

    id: str
    text: str
    level: int


@dataclass(frozen=True)
class ContentItem:
    """One authored article: header metadata plus markdown body.

    Attributes:
        title: Article title (``title`` header key).
        pub_date: Publication date (``pubDate`` header key).
        description: Short summary (``description`` header key).
        img_src: Hero image path (``imgSrc`` header key).
        img_alt: Hero image alt text (``imgAlt`` header key).
        body: Markdown/MDX body following the header.
        layout: Theme layout name derived from the ``layout`` header key.
        slug: URL slug derived from the filename.
        path: Source file, or None for items built in code.
        draft: Whether the article is unpublished.
        frontmatter: The header exactly as authored.
    """

    title: str
    pub_date: date
    description: str = ""
    img_src: str = ""
    img_alt: str = ""
    body: str = ""
    layout: str = DEFAULT_LAYOUT
    slug: str = ""
    path: Path | None = None
    draft: bool = False
    frontmatter: Mapping[str, Any] = field(
        default_factory=dict, compare=False, hash=False, repr=False
    )

    def __post_init__(self):
        if not self.title or not str(self.title).strip():
            raise MissingFieldError(self.path, "title")
        if self.pub_date is None:
            raise MissingFieldError(self.path, "pubDate")
        if not isinstance(self.pub_date, date):
            raise InvalidFieldError(self.path, "pubDate", self.pub_date)
        if not self.slug:
            object.__setattr__(self, "slug", slugify(self.title))
        object.__setattr__(self, "frontmatter", MappingProxyType(dict(self.frontmatter)))

    @property
    def url(self) -> str:
        return f"{POSTS_URL}{self.slug}/"


class FileContentLoader:
    """Discovers article files under a content directory.

    Files and folders starting with ``_`` are drafts and are only returned
    when requested. Results are sorted so builds are reproducible.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        files: list[Path] = []
        if not self.content_dir.exists():
            return files
        for path in sorted(self.content_dir.rglob("*")):
            if path.is_dir() or not is_content_file(path):
                continue
            rel = path.relative_to(self.content_dir)
            if any(part.startswith("_") for part in rel.parts[:-1]):
                continue
            if rel.name.startswith("_") and not include_drafts:
                continue
            files.append(path)
        return files


class ContentItemBuilder:
    """Builds ContentItem objects from article files."""

    def __init__(self, metadata_extractor: CompositeMetadataExtractor | None = None):
        self.metadata_extractor = metadata_extractor or default_metadata_extractor

    def build(self, path: Path) -> ContentItem:
        """Read and validate one article.

        Raises:
            MissingFieldError: If the header lacks title or pubDate.
            InvalidFieldError: If a header value cannot be used.
        """
        raw = path.read_text(encoding="utf-8")
        metadata = self.metadata_extractor.extract(raw, path)
        return ContentItem(
            title=metadata["title"],
            pub_date=metadata["pub_date"],
            description=metadata.get("description", ""),
            img_src=metadata.get("img_src", ""),
            img_alt=metadata.get("img_alt", ""),
            body=metadata.get("body", raw),
            layout=metadata.get("layout", DEFAULT_LAYOUT),
            slug=slugify(path.stem.lstrip("_")),
            path=path,
            draft=metadata.get("draft", False),
            frontmatter=metadata.get("frontmatter", {}),
        )


class ContentProcessor:
    """Loads every article in a content directory."""

    def __init__(
        self,
        content_dir: Path,
        content_loader: FileContentLoader | None = None,
        item_builder: ContentItemBuilder | None = None,
    ):
        self.content_dir = content_dir
        self._content_loader = content_loader or FileContentLoader(content_dir)
        self._item_builder = item_builder or ContentItemBuilder()

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        return self._content_loader.iter_files(include_drafts)

    def build_item(self, path: Path) -> ContentItem:
        return self._item_builder.build(path)

    def load(self, include_drafts: bool = False) -> list[ContentItem]:
        """Load all articles, failing on the first invalid one.

        Args:
            include_drafts: Whether to include draft articles.

        Returns:
            List of ContentItem objects in file order.
        """
        items = [self.build_item(path) for path in self.iter_files(include_drafts)]
        if include_drafts:
            return items
        return [item for item in items if not item.draft]
