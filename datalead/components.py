"""Presentational components for datalead.

Components are stateless: each call renders one theme partial from its
props and returns safe markup. Pre-rendered child content (hero title and
description) is passed in as ``Markup`` and inserted as is.

Key classes:
- SocialLink: An icon link shown in the hero banner.
- HeroProps: Inputs of the landing-page hero banner.
- ComponentRenderer: Renders logo, navbar, hero, social links, post cards
  and the footer.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup

from .content import ContentItem
from .navigation import DEFAULT_LOGO_ICON, LogoProps, NavigationEntry
from .templates import TemplateEngine


@dataclass(frozen=True)
class SocialLink:
    name: str
    icon: str
    href: str = "/"
    icon_alt: str = ""

    def __post_init__(self):
        if not self.icon_alt:
            object.__setattr__(self, "icon_alt", f"{self.name} icon")

    @classmethod
    def from_data(cls, entry: Mapping[str, Any]) -> SocialLink:
        if not isinstance(entry, Mapping) or not entry.get("name") or not entry.get("icon"):
            raise ValueError(f"Social link needs a 'name' and an 'icon': {entry!r}")
        return cls(
            name=str(entry["name"]),
            icon=str(entry["icon"]),
            href=str(entry.get("href") or "/"),
            icon_alt=str(entry.get("alt") or ""),
        )


@dataclass(frozen=True)
class HeroProps:
    """Inputs of the hero banner.

    Attributes:
        title: Pre-rendered title markup.
        description: Pre-rendered description markup.
        avatar: Path of the avatar image.
        avatar_alt: Alt text for the avatar.
        social_links: Links shown under the description, in display order.
    """

    title: Markup
    description: Markup
    avatar: str
    avatar_alt: str = "Avatar image"
    social_links: tuple[SocialLink, ...] = field(default_factory=tuple)

    @classmethod
    def from_data(cls, data: Mapping[str, Any]) -> HeroProps:
        """Build hero props from the ``hero`` section of site data.

        ``title`` and ``description`` are trusted HTML written by the site
        author.
        """
        hero = data.get("hero") or {}
        return cls(
            title=Markup(hero.get("title") or data.get("title") or ""),
            description=Markup(hero.get("description") or data.get("description") or ""),
            avatar=str(hero.get("avatar") or DEFAULT_LOGO_ICON),
            avatar_alt=str(hero.get("avatar_alt") or "Avatar image"),
            social_links=tuple(SocialLink.from_data(s) for s in hero.get("social") or ()),
        )


class ComponentRenderer:
    """Renders the theme's presentational partials."""

    def __init__(self, engine: TemplateEngine):
        self.engine = engine

    def logo(self, props: LogoProps) -> Markup:
        return self.engine.render_partial("logo", logo=props)

    def navbar(self, entries: Sequence[NavigationEntry], logo: LogoProps) -> Markup:
        """Render the logo and the navigation entries in declared order."""
        return self.engine.render_partial(
            "navbar", logo=self.logo(logo), entries=tuple(entries)
        )

    def social_link(self, link: SocialLink) -> Markup:
        return self.engine.render_partial("social_link", link=link)

    def hero(self, props: HeroProps) -> Markup:
        """Render the hero banner.

        Raises:
            ValueError: If the hero has no avatar path.
        """
        if not props.avatar:
            raise ValueError("Hero banner needs an avatar image path")
        buttons = Markup("").join(self.social_link(link) for link in props.social_links)
        return self.engine.render_partial("hero", hero=props, social_buttons=buttons)

    def post_card(self, item: ContentItem) -> Markup:
        return self.engine.render_partial("post_card", item=item)

    def post_cards(self, items: Iterable[ContentItem]) -> Markup:
        return Markup("").join(self.post_card(item) for item in items)

    def footer(self, data: Mapping[str, Any]) -> Markup:
        return self.engine.render_partial("footer", site=data)
