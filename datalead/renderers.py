"""Body renderers for datalead.

Key classes:
- MarkdownRenderer: Renders markdown articles to HTML with syntax highlighting.
- MdxRenderer: Renders MDX articles, dropping their import/export lines first.
- RendererRegistry: Picks the renderer for a file.
"""

from __future__ import annotations

import re
from pathlib import Path

import mistune
from markupsafe import escape
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .protocols import ContentRenderer

_MDX_STATEMENT_RE = re.compile(r"^(?:import|export)\s")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")


def _generate_heading_id(text: str) -> str:
    """Generate a URL-friendly anchor id from heading text."""
    slug = re.sub(r"<[^>]+>", "", text).lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug.strip("-")


def strip_mdx_statements(text: str) -> str:
    """Drop top-level MDX ``import``/``export`` lines outside code fences."""
    lines: list[str] = []
    fence: str | None = None
    for line in text.splitlines(keepends=True):
        match = _FENCE_RE.match(line)
        if match:
            if fence is None:
                fence = match.group(1)
            elif match.group(1) == fence:
                fence = None
        elif fence is None and _MDX_STATEMENT_RE.match(line):
            continue
        lines.append(line)
    return "".join(lines)


class _HighlightRenderer(mistune.HTMLRenderer):
    """Mistune renderer that adds heading ids, lazy images and Pygments code."""

    def __init__(self):
        super().__init__(escape=False)
        self.headings: list = []
        self._heading_id_counts: dict[str, int] = {}

    def heading(self, text: str, level: int, **attrs) -> str:
        # Import here to avoid circular imports
        from .content import Heading

        base_id = _generate_heading_id(text)
        if base_id in self._heading_id_counts:
            self._heading_id_counts[base_id] += 1
            heading_id = f"{base_id}-{self._heading_id_counts[base_id]}"
        else:
            self._heading_id_counts[base_id] = 0
            heading_id = base_id

        self.headings.append(Heading(id=heading_id, text=text, level=level))
        return f'<h{level} id="{heading_id}">{text}</h{level}>\n'

    def image(self, text: str, url: str, title: str | None = None) -> str:
        return super().image(text, url, title).replace("<img ", '<img loading="lazy" ', 1)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a fenced block, highlighted when the language is known."""
        lang = info.split()[0] if info else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                lexer = None
            if lexer is not None:
                return highlight(code, lexer, HtmlFormatter(cssclass="highlight"))
        lang_class = f' class="language-{escape(lang)}"' if lang else ""
        return f"<pre><code{lang_class}>{escape(code)}</code></pre>\n"


class MarkdownRenderer:
    """Renders markdown article bodies to HTML."""

    suffixes: tuple[str, ...] = (".md",)
    plugins = ["strikethrough", "footnotes", "table", "url"]

    @property
    def source_type(self) -> str:
        return "markdown"

    def can_render(self, path: Path) -> bool:
        return path.suffix.lower() in self.suffixes

    def prepare(self, content: str) -> str:
        return content

    def render(self, content: str) -> tuple[str, list]:
        """Render a body to HTML.

        Args:
            content: Markdown body with the header removed.

        Returns:
            Tuple of (rendered HTML, list of Heading objects).
        """
        renderer = _HighlightRenderer()
        markdown = mistune.create_markdown(renderer=renderer, plugins=self.plugins)
        html = markdown(self.prepare(content))
        return html, renderer.headings


class MdxRenderer(MarkdownRenderer):
    """Renders MDX article bodies as markdown once ESM statements are removed."""

    suffixes = (".mdx",)

    @property
    def source_type(self) -> str:
        return "mdx"

    def prepare(self, content: str) -> str:
        return strip_mdx_statements(content)


class RendererRegistry:
    """Registry for body renderers, checked in registration order."""

    def __init__(self):
        self._renderers: list[ContentRenderer] = []
        self.register(MarkdownRenderer())
        self.register(MdxRenderer())

    def register(self, renderer: ContentRenderer) -> None:
        self._renderers.append(renderer)

    def get_renderer(self, path: Path) -> ContentRenderer | None:
        for renderer in self._renderers:
            if renderer.can_render(path):
                return renderer
        return None


default_renderer_registry = RendererRegistry()
