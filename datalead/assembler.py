"""Page assembly for datalead.

The assembler pairs content with the shared layout and site-wide chrome
(head metadata, navbar, footer). The navbar and footer are rendered once per
assembler, so every page embeds byte-identical copies of them.

Key classes:
- Page: The assembled output of one call.
- PageAssembler: Builds article pages, the landing page and the post listing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from markupsafe import Markup

from .collections import PostCollection
from .components import ComponentRenderer, HeroProps
from .content import ContentItem, MissingFieldError
from .navigation import BLOG_URL, build_logo, build_navigation
from .renderers import RendererRegistry, default_renderer_registry
from .templates import TemplateEngine, render_toc

DEFAULT_LATEST_COUNT = 6


@dataclass(frozen=True)
class Page:
    """A renderable page.

    Attributes:
        url: Site path of the page, always ending in ``/``.
        title: Page title used in the document head.
        html: Full HTML document.
        item: The article the page was built from, if any.
    """

    url: str
    title: str
    html: str
    item: ContentItem | None = None


class PageAssembler:
    """Composes content items and site chrome into pages.

    Attributes:
        engine: Template engine used for layouts and partials.
        data: Global site data.
        components: Component renderer bound to the engine.
        navigation: The fixed navbar entries.
    """

    def __init__(
        self,
        engine: TemplateEngine,
        data: Mapping[str, Any] | None = None,
        renderer_registry: RendererRegistry | None = None,
        latest_count: int = DEFAULT_LATEST_COUNT,
    ):
        self.engine = engine
        self.data = dict(data or {})
        self.renderer_registry = renderer_registry or default_renderer_registry
        self.latest_count = latest_count
        self.components = ComponentRenderer(engine)
        self.navigation = build_navigation(self.data)
        self.logo = build_logo(self.data)
        self._navbar = self.components.navbar(self.navigation, self.logo)
        self._footer = self.components.footer(self.data)

    @property
    def site_title(self) -> str:
        return str(self.data.get("title") or self.logo.name)

    def _chrome(self) -> dict[str, Any]:
        return {"navbar": self._navbar, "footer": self._footer}

    def render_body(self, item: ContentItem) -> tuple[Markup, Markup]:
        """Render an item's body and table of contents.

        Items built in code have no path and are rendered as markdown.
        """
        path = item.path or Path(f"{item.slug}.md")
        renderer = self.renderer_registry.get_renderer(path)
        if renderer is None:
            return Markup("<pre>{}</pre>").format(item.body), Markup("")
        html, headings = renderer.render(item.body)
        return Markup(html), render_toc(headings)

    def assemble(self, item: ContentItem) -> Page:
        """Wrap one article in its layout with the shared chrome.

        Raises:
            MissingFieldError: If the item has lost its title or date.
        """
        if not item.title:
            raise MissingFieldError(item.path, "title")
        if item.pub_date is None:
            raise MissingFieldError(item.path, "pubDate")

        content, toc = self.render_body(item)
        layout = self.engine.resolve_layout(item.layout)
        html = layout.render(
            item=item,
            content=content,
            toc=toc,
            page_title=item.title,
            page_description=item.description,
            **self._chrome(),
        )
        return Page(url=item.url, title=item.title, html=html, item=item)

    def assemble_index(self, items: Iterable[ContentItem]) -> Page:
        """Build the landing page: hero banner and the newest posts."""
        hero = self.components.hero(HeroProps.from_data(self.data))
        latest = PostCollection(items).latest(self.latest_count)
        html = self.engine.render(
            "index.html.jinja",
            hero=hero,
            cards=self.components.post_cards(latest),
            page_title=self.site_title,
            page_description=str(self.data.get("description") or ""),
            **self._chrome(),
        )
        return Page(url="/", title=self.site_title, html=html)

    def assemble_listing(self, items: Iterable[ContentItem]) -> Page:
        """Build the post listing page, grouped by year, newest first."""
        years = [
            (year, self.components.post_cards(posts))
            for year, posts in PostCollection(items).by_year().items()
        ]
        title = f"Blog | {self.site_title}"
        html = self.engine.render(
            "posts.html.jinja",
            years=years,
            heading="All Posts",
            page_title=title,
            page_description=str(self.data.get("description") or ""),
            **self._chrome(),
        )
        return Page(url=BLOG_URL, title=title, html=html)
