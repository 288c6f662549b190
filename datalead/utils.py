"""Utility functions for datalead.

String, path and URL helpers shared by the content, assembly and build layers.

Key functions:
    slugify: Convert filenames to URL slugs.
    first_paragraph: Extract a short plain-text summary from markdown.
    is_content_file: Check if a path is a markdown or MDX article.
    is_external_url: Check if a URL points off-site.
    join_root_url: Join a base URL with a path.
    absolutize_html_urls: Rewrite root-relative URLs in HTML.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

CONTENT_SUFFIXES = (".md", ".mdx")

_URL_ATTR_RE = re.compile(
    r'(?P<prefix>\b(?:href|src|action)=["\'])(?P<url>[^"\']+)(?P<suffix>["\'])'
)

_URL_SKIP_PREFIXES = (
    "http://",
    "https://",
    "//",
    "mailto:",
    "tel:",
    "#",
    "javascript:",
)


def _drop_date_prefix(name: str) -> str:
    parts = name.split("-")
    if len(parts) >= 4 and all(p.isdigit() for p in parts[:3]):
        return "-".join(parts[3:])
    return name


def slugify(name: str) -> str:
    """Convert a filename stem to a slug, dropping any YYYY-MM-DD prefix.

    Args:
        name: Filename stem.

    Returns:
        URL-friendly slug.

    Examples:
        >>> slugify("2024-02-18-Scala_101")
        'scala-101'
    """
    cleaned = _drop_date_prefix(name)
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", cleaned)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "index"


def first_paragraph(text: str, limit: int = 160) -> str:
    """Extract and clean the first prose paragraph from markdown text.

    Headings, images, fenced code, MDX import/export lines and HTML tags
    are skipped. Whitespace is collapsed and the result truncated.

    Args:
        text: Markdown text.
        limit: Maximum character length of result.

    Returns:
        Plain-text paragraph, or an empty string.
    """
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    for para in paragraphs:
        if para.startswith(("#", "![", "```", "---", "import ", "export ")):
            continue
        para = re.sub(r"<[^>]+>", "", para)
        para = re.sub(r"!?\[([^\]]*)\]\([^)]*\)", r"\1", para)
        collapsed = " ".join(para.split())
        if collapsed:
            return collapsed[:limit]
    return ""


def is_content_file(path: Path) -> bool:
    """Check if a path is a markdown or MDX article."""
    return path.suffix.lower() in CONTENT_SUFFIXES


def is_external_url(url: str) -> bool:
    return url.startswith(("http://", "https://", "//"))


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Examples:
        >>> join_root_url('https://thedatalead.dev/', 'posts/')
        'https://thedatalead.dev/posts/'
    """
    if not root_url:
        return path
    base = root_url.rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"


def absolutize_html_urls(html: str, root_url: str) -> str:
    """Rewrite root-relative href/src/action attributes to absolute URLs.

    External URLs, anchors, mailto/tel links and javascript: URLs are left
    unchanged. Other attributes (meta ``content`` included) are never touched.

    Args:
        html: HTML content to process.
        root_url: Base URL to prepend to relative paths.

    Returns:
        HTML with relative URLs converted to absolute.
    """
    if not root_url:
        return html

    def repl(match: re.Match) -> str:
        url = match.group("url")
        if url.startswith(_URL_SKIP_PREFIXES):
            return match.group(0)
        absolute = join_root_url(root_url, url)
        return f"{match.group('prefix')}{absolute}{match.group('suffix')}"

    return _URL_ATTR_RE.sub(repl, html)


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty."""
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)
