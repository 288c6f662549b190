"""Metadata extractors for datalead.

Each extractor reads one part of an article's header and returns a
dictionary that is merged into the article's metadata. They run in order,
so later extractors can use what earlier ones found.

Key classes:
- FrontmatterExtractor: Splits the YAML header from the body.
- HeaderExtractor: Validates and coerces the known header keys.
- DescriptionExtractor: Uses the header description or the first paragraph.
- CompositeMetadataExtractor: Runs a list of extractors in order.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from .errors import InvalidFieldError, MissingFieldError
from .protocols import MetadataExtractor
from .utils import first_paragraph

FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)

DEFAULT_LAYOUT = "post"
REQUIRED_FIELDS = ("title", "pubDate")

_DATE_FORMATS = ("%b %d %Y", "%B %d %Y", "%b %d, %Y", "%B %d, %Y", "%Y/%m/%d")


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract the YAML header block from an article.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (header dict, remaining body). A missing or malformed
        header yields an empty dict and the text unchanged.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        return {}, text
    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end() :]


def parse_pub_date(value: Any, source_path: Path | None = None) -> date:
    """Coerce a ``pubDate`` header value to a date.

    Accepts YAML dates and datetimes, ISO-8601 strings (a trailing ``Z`` is
    allowed) and a few long-hand forms such as ``Feb 18 2024``.

    Raises:
        InvalidFieldError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    raise InvalidFieldError(source_path, "pubDate", value)


def layout_name(value: Any) -> str:
    """Reduce a ``layout`` header path to a theme template name.

    Examples:
        >>> layout_name("../../layouts/Post.astro")
        'post'
    """
    if not isinstance(value, str) or not value.strip():
        return DEFAULT_LAYOUT
    return Path(value.strip()).stem.lower() or DEFAULT_LAYOUT


class FrontmatterExtractor:
    """Splits the YAML header from the article body."""

    def extract(self, content: str, path: Path, metadata: dict[str, Any]) -> dict[str, Any]:
        frontmatter, body = extract_frontmatter(content)
        return {"frontmatter": frontmatter, "body": body}


class HeaderExtractor:
    """Validates required header fields and coerces the known keys.

    Reads ``layout``, ``title``, ``pubDate``, ``imgSrc``, ``imgAlt`` and
    ``draft`` from the header found by ``FrontmatterExtractor``.
    """

    def extract(self, content: str, path: Path, metadata: dict[str, Any]) -> dict[str, Any]:
        """Extract the article header.

        Raises:
            MissingFieldError: If title or pubDate is absent or empty.
            InvalidFieldError: If title is not text or pubDate is not a date.
        """
        header = metadata.get("frontmatter", {})
        for name in REQUIRED_FIELDS:
            if header.get(name) in (None, ""):
                raise MissingFieldError(path, name)

        title = header["title"]
        if not isinstance(title, (str, int, float)) or isinstance(title, bool):
            raise InvalidFieldError(path, "title", title)

        img_src = str(header.get("imgSrc") or "")
        img_alt = str(header.get("imgAlt") or "")
        return {
            "title": str(title).strip(),
            "pub_date": parse_pub_date(header["pubDate"], path),
            "img_src": img_src,
            "img_alt": img_alt or (str(title).strip() if img_src else ""),
            "layout": layout_name(header.get("layout")),
            "draft": bool(header.get("draft", False)) or path.name.startswith("_"),
        }


class DescriptionExtractor:
    """Uses the header description, falling back to the first paragraph."""

    def extract(self, content: str, path: Path, metadata: dict[str, Any]) -> dict[str, Any]:
        header = metadata.get("frontmatter", {})
        description = header.get("description")
        if description:
            return {"description": str(description).strip()}
        return {"description": first_paragraph(metadata.get("body", content))}


class CompositeMetadataExtractor:
    """Runs a sequence of extractors and merges their results.

    Each extractor sees the metadata gathered so far. Later extractors
    override earlier keys.
    """

    def __init__(self, extractors: list[MetadataExtractor] | None = None):
        if extractors is None:
            self._extractors: list[MetadataExtractor] = [
                FrontmatterExtractor(),
                HeaderExtractor(),
                DescriptionExtractor(),
            ]
        else:
            self._extractors = list(extractors)

    def add_extractor(self, extractor: MetadataExtractor) -> None:
        self._extractors.append(extractor)

    def extract(self, content: str, path: Path) -> dict[str, Any]:
        """Extract all metadata from an article.

        Args:
            content: Raw source content.
            path: Path to the source file.

        Returns:
            Dictionary with all extracted metadata.
        """
        result: dict[str, Any] = {}
        for extractor in self._extractors:
            result.update(extractor.extract(content, path, result))
        return result


default_metadata_extractor = CompositeMetadataExtractor()
