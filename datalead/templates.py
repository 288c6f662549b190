"""Template rendering engine for datalead.

This module wraps Jinja2. Templates are looked up first in the project's
``layouts/`` directory and then in the packaged theme.

Key class:
- TemplateEngine: Loads templates and provides globals and filters to them.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplateNotFound, select_autoescape
from markupsafe import Markup, escape
from pygments.formatters import HtmlFormatter

from .content import Heading
from .extractors import DEFAULT_LAYOUT
from .utils import is_external_url, join_root_url

__all__ = ["THEME_DIR", "TemplateEngine", "render_toc"]

THEME_DIR = Path(__file__).parent / "theme"
DISPLAY_DATE_FORMAT = "%b %d, %Y"


def render_toc(headings: list[Heading]) -> Markup:
    """Render headings as a nested ``<ul>`` table of contents.

    Returns:
        Markup of the nested list, or empty Markup if there are no headings.
    """
    if not headings:
        return Markup("")

    html_parts: list[str] = []
    level_stack: list[int] = []

    for heading in headings:
        level = heading.level
        while level_stack and level_stack[-1] > level:
            level_stack.pop()
            html_parts.append("</li></ul>")

        if level_stack and level_stack[-1] == level:
            html_parts.append("</li>")
        elif not level_stack or level > level_stack[-1]:  # pragma: no branch
            html_parts.append("<ul>")
            level_stack.append(level)

        # Heading text is already rendered inline HTML
        html_parts.append(f'<li><a href="#{escape(heading.id)}">{heading.text}</a>')

    while level_stack:
        level_stack.pop()
        html_parts.append("</li></ul>")

    return Markup("".join(html_parts))


def format_date(value: date, fmt: str = DISPLAY_DATE_FORMAT) -> str:
    return value.strftime(fmt)


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        data: Global site data.
        root_url: Optional base URL applied by ``url_for``.
        layouts_dir: Optional project directory with template overrides.
        env: Jinja2 environment.
    """

    def __init__(
        self,
        data: dict[str, Any] | None = None,
        root_url: str | None = None,
        layouts_dir: Path | None = None,
    ):
        self.data = data or {}
        self.root_url = root_url or ""
        self.layouts_dir = layouts_dir
        search_path = [THEME_DIR]
        if layouts_dir is not None and layouts_dir.is_dir():
            search_path.insert(0, layouts_dir)
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            keep_trailing_newline=True,
        )
        self._install_globals()

    def _install_globals(self) -> None:
        self.env.globals["data"] = self.data
        self.env.globals["url_for"] = self.url_for
        self.env.globals["render_toc"] = render_toc
        self.env.globals["pygments_css"] = self._pygments_css
        self.env.filters["date"] = format_date

    @staticmethod
    def _pygments_css() -> Markup:
        return Markup(HtmlFormatter().get_style_defs(".highlight"))

    def url_for(self, path: str) -> str:
        """Generate a URL for a site path, applying root_url if configured."""
        if is_external_url(path):
            return path
        normalized = path if path.startswith("/") else f"/{path}"
        if self.root_url:
            return join_root_url(self.root_url, normalized)
        return normalized

    def has_template(self, name: str) -> bool:
        try:
            self.env.get_template(name)
        except TemplateNotFound:
            return False
        return True

    def resolve_layout(self, layout: str) -> Template:
        """Return the template for a layout name, falling back to the post layout."""
        for name in (f"{layout}.html.jinja", f"{DEFAULT_LAYOUT}.html.jinja"):
            if self.has_template(name):
                return self.env.get_template(name)
        raise TemplateNotFound(f"{layout}.html.jinja")

    def render(self, name: str, **context: Any) -> str:
        """Render a named template with the given context."""
        return self.env.get_template(name).render(**context)

    def render_partial(self, name: str, **context: Any) -> Markup:
        """Render ``partials/<name>.html.jinja`` as safe markup."""
        return Markup(self.render(f"partials/{name}.html.jinja", **context))
