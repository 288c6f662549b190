"""Site-wide navigation for datalead.

The navbar always shows the same three entries in the same order. Only the
targets of the external entries come from site data.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .utils import is_external_url

BLOG_URL = "/posts/"
DEFAULT_LOGO_NAME = "The Data Lead"
DEFAULT_LOGO_ICON = "/assets/images/avatar.png"


@dataclass(frozen=True)
class NavigationEntry:
    """A navbar link.

    Raises:
        ValueError: If ``href`` is neither root-relative nor http(s).
    """

    label: str
    href: str

    def __post_init__(self):
        if not self.label:
            raise ValueError("Navigation entry needs a label")
        if not (self.href.startswith("/") or is_external_url(self.href)):
            raise ValueError(
                f"Navigation target for '{self.label}' must be root-relative "
                f"or an http(s) URL, got {self.href!r}"
            )


@dataclass(frozen=True)
class LogoProps:
    icon: str
    name: str


def build_navigation(data: Mapping[str, Any] | None = None) -> tuple[NavigationEntry, ...]:
    """Build the fixed navbar entries: Blog, GitHub, Twitter.

    Args:
        data: Site data. ``navigation.github`` and ``navigation.twitter``
            set the external targets and default to ``/``.

    Returns:
        Tuple of entries in display order.
    """
    links = (data or {}).get("navigation") or {}
    return (
        NavigationEntry("Blog", BLOG_URL),
        NavigationEntry("GitHub", str(links.get("github") or "/")),
        NavigationEntry("Twitter", str(links.get("twitter") or "/")),
    )


def build_logo(data: Mapping[str, Any] | None = None) -> LogoProps:
    logo = (data or {}).get("logo") or {}
    return LogoProps(
        icon=str(logo.get("icon") or DEFAULT_LOGO_ICON),
        name=str(logo.get("name") or (data or {}).get("title") or DEFAULT_LOGO_NAME),
    )
