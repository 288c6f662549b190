"""Feed generation for datalead.

Classes:
    FeedGenerator: Base class for feed generators.
    SitemapGenerator: Generates sitemap.xml.
    RSSGenerator: Generates rss.xml.
    FeedRegistry: Runs every registered generator.

Functions:
    create_default_feed_registry: Create a registry with the default generators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

from markupsafe import escape

if TYPE_CHECKING:
    from .assembler import Page

RFC822_FORMAT = "%a, %d %b %Y %H:%M:%S +0000"


def _rfc822(value: date) -> str:
    return datetime.combine(value, time.min, tzinfo=timezone.utc).strftime(RFC822_FORMAT)


class FeedGenerator(ABC):
    """Base class for feed generators.

    Generators return None when the site has no ``url`` configured, since
    feeds need absolute links.
    """

    @property
    @abstractmethod
    def filename(self) -> str: ...

    @abstractmethod
    def generate(self, pages: Iterable[Page], data: Mapping[str, Any]) -> str | None: ...

    def write(self, output_dir: Path, pages: Iterable[Page], data: Mapping[str, Any]) -> bool:
        """Generate and write the feed.

        Returns:
            True if the feed was written, False if skipped.
        """
        content = self.generate(pages, data)
        if content is None:
            return False
        (output_dir / self.filename).write_text(content, encoding="utf-8")
        return True


class SitemapGenerator(FeedGenerator):
    """Lists every page. Article pages carry their publication date."""

    @property
    def filename(self) -> str:
        return "sitemap.xml"

    def generate(self, pages: Iterable[Page], data: Mapping[str, Any]) -> str | None:
        base_url = str(data.get("url", "")).rstrip("/")
        if not base_url:
            return None

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        ]
        for page in sorted(pages, key=lambda p: p.url):
            loc = escape(f"{base_url}{page.url}")
            if page.item is not None:
                lastmod = page.item.pub_date.isoformat()
                lines.append(f"  <url><loc>{loc}</loc><lastmod>{lastmod}</lastmod></url>")
            else:
                lines.append(f"  <url><loc>{loc}</loc></url>")
        lines.append("</urlset>")
        return "\n".join(lines)


class RSSGenerator(FeedGenerator):
    """RSS 2.0 feed of article pages, newest first.

    ``lastBuildDate`` is the newest publication date so that rebuilding
    unchanged content gives an identical feed.
    """

    @property
    def filename(self) -> str:
        return "rss.xml"

    def generate(self, pages: Iterable[Page], data: Mapping[str, Any]) -> str | None:
        base_url = str(data.get("url", "")).rstrip("/")
        if not base_url:
            return None
        title = data.get("title", "The Data Lead")

        articles = sorted(
            (p for p in pages if p.item is not None),
            key=lambda p: (p.item.pub_date, p.url),
            reverse=True,
        )
        items = []
        for page in articles:
            item = page.item
            link = escape(f"{base_url}{page.url}")
            items.append(
                f"<item><title>{escape(item.title)}</title><link>{link}</link>"
                f"<guid>{link}</guid>"
                f"<description>{escape(item.description or item.title)}</description>"
                f"<pubDate>{_rfc822(item.pub_date)}</pubDate></item>"
            )

        rss = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<rss version="2.0"><channel>',
            f"<title>{escape(title)}</title>",
            f"<link>{escape(base_url)}/</link>",
            f"<description>{escape(data.get('description') or title)}</description>",
        ]
        if articles:
            rss.append(f"<lastBuildDate>{_rfc822(articles[0].item.pub_date)}</lastBuildDate>")
        rss.extend(items)
        rss.append("</channel></rss>")
        return "\n".join(rss)


class FeedRegistry:
    """Registry of feed generators run at the end of a build."""

    def __init__(self) -> None:
        self._generators: list[FeedGenerator] = []

    def register(self, generator: FeedGenerator) -> None:
        self._generators.append(generator)

    def generate_all(
        self, output_dir: Path, pages: Iterable[Page], data: Mapping[str, Any]
    ) -> list[str]:
        """Generate all registered feeds.

        Returns:
            Filenames that were written.
        """
        pages_list = list(pages)
        generated = []
        for generator in self._generators:
            if generator.write(output_dir, pages_list, data):
                generated.append(generator.filename)
        return generated


def create_default_feed_registry() -> FeedRegistry:
    registry = FeedRegistry()
    registry.register(SitemapGenerator())
    registry.register(RSSGenerator())
    return registry
