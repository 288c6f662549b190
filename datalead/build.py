"""Site building for datalead.

This module loads configuration and site data, turns articles into content
items, assembles pages and writes the static output.

Key functions:
- build_site: Build the whole site into the output directory.
- check_site: Load and assemble every page without writing anything.
- load_config: Load build configuration from datalead.yaml.
- load_data: Load site data from YAML files in the data directory.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from jinja2 import TemplateError, TemplateSyntaxError

from .assembler import Page, PageAssembler
from .assets import AssetNotFoundError, PublicAssetResolver, copy_public
from .components import HeroProps
from .content import ContentError, ContentItem, ContentProcessor
from .feeds import create_default_feed_registry
from .navigation import build_logo
from .templates import TemplateEngine
from .utils import absolutize_html_urls, ensure_clean_dir

CONFIG_FILENAME = "datalead.yaml"
SITE_DATA_FILENAME = "site.yaml"

DEFAULT_CONFIG = {
    "output_dir": "output",
    "content_dir": "content/posts",
    "public_dir": "public",
    "root_url": "",
    "latest_count": 6,
    "check_assets": True,
}


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build.

    Attributes:
        pages: Every page written, articles first.
        output_dir: Directory the site was written to.
        data: Global site data.
        feeds: Feed filenames that were written.
    """

    pages: list[Page]
    output_dir: Path
    data: dict[str, Any]
    feeds: list[str] = field(default_factory=list)


@dataclass
class CheckResult:
    checked: int
    errors: list[BuildError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def load_config(project_root: Path) -> dict[str, Any]:
    """Load build configuration from datalead.yaml, with defaults applied."""
    config_path = project_root / CONFIG_FILENAME
    config = DEFAULT_CONFIG.copy()
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if isinstance(loaded, dict):
            config.update(loaded)
    return config


def load_data(project_root: Path) -> dict[str, Any]:
    """Load site data from YAML files in the data directory.

    ``site.yaml`` is merged at the top level. Every other file is stored
    under its stem.
    """
    data_dir = project_root / "data"
    data: dict[str, Any] = {}
    if not data_dir.exists():
        return data
    for path in sorted(data_dir.glob("*.yaml")):
        with open(path, encoding="utf-8") as f:
            payload = yaml.safe_load(f) or {}
        if path.name == SITE_DATA_FILENAME:
            if isinstance(payload, dict):
                data.update(payload)
        else:
            data[path.stem] = payload
    return data


class _Site:
    """Everything a build needs, resolved once from the project root."""

    def __init__(self, project_root: Path, root_url: str | None = None):
        self.project_root = project_root
        self.config = load_config(project_root)
        if root_url is not None:
            self.config["root_url"] = root_url
        self.root_url = str(self.config.get("root_url") or "")
        self.data = load_data(project_root)
        if self.root_url:
            self.data.setdefault("root_url", self.root_url)
        self.content_dir = project_root / self.config["content_dir"]
        if not self.content_dir.exists():
            raise FileNotFoundError(f"Expected content directory at {self.content_dir}")
        self.public_dir = project_root / self.config["public_dir"]
        self.site_data_path = project_root / "data" / SITE_DATA_FILENAME
        self.processor = ContentProcessor(self.content_dir)
        self.resolver = PublicAssetResolver(self.public_dir)
        self.engine = TemplateEngine(
            self.data, root_url=self.root_url, layouts_dir=project_root / "layouts"
        )
        self.assembler = _render_guard(
            self.site_data_path,
            PageAssembler,
            self.engine,
            self.data,
            latest_count=self._latest_count(),
        )

    def _latest_count(self) -> int:
        value = self.config.get("latest_count", DEFAULT_CONFIG["latest_count"])
        try:
            count = int(value)
        except (TypeError, ValueError) as exc:
            raise BuildError(
                self.project_root / CONFIG_FILENAME,
                f"latest_count must be a whole number, got {value!r}",
                exc,
            ) from exc
        if count < 0:
            raise BuildError(
                self.project_root / CONFIG_FILENAME,
                f"latest_count must not be negative, got {count}",
            )
        return count

    @property
    def check_assets(self) -> bool:
        return bool(self.config.get("check_assets", True))

    def load_item(self, path: Path) -> ContentItem:
        try:
            item = self.processor.build_item(path)
        except ContentError as exc:
            raise BuildError(path, exc.message, exc) from exc
        if self.check_assets:
            try:
                self.resolver.require(item.img_src, "hero image")
            except AssetNotFoundError as exc:
                raise BuildError(path, str(exc), exc) from exc
        return item

    def check_site_assets(self) -> None:
        """Check the avatar, social icons and logo referenced in site data."""
        if not self.check_assets:
            return
        hero = _render_guard(self.site_data_path, HeroProps.from_data, self.data)
        references = [(hero.avatar, "avatar"), (build_logo(self.data).icon, "logo icon")]
        references.extend((link.icon, f"{link.name} icon") for link in hero.social_links)
        for url, kind in references:
            try:
                self.resolver.require(url, kind)
            except AssetNotFoundError as exc:
                raise BuildError(self.site_data_path, str(exc), exc) from exc

    def duplicate_errors(self, items: Iterable[ContentItem]) -> list[BuildError]:
        """Report every item whose URL is already taken by an earlier item."""
        seen: dict[str, ContentItem] = {}
        errors: list[BuildError] = []
        for item in items:
            other = seen.setdefault(item.url, item)
            if other is item:
                continue
            errors.append(
                BuildError(
                    item.path or self.content_dir,
                    f"Duplicate slug '{item.slug}' ({item.url}) also used by "
                    f"{self._display_path(other.path)}",
                )
            )
        return errors

    def _display_path(self, path: Path | None) -> str:
        if path is None:
            return "an item without a source file"
        try:
            return str(path.relative_to(self.content_dir))
        except ValueError:
            return str(path)

    def assemble(self, item: ContentItem) -> Page:
        return _render_guard(item.path or self.content_dir, self.assembler.assemble, item)

    def assemble_indexes(self, items: list[ContentItem]) -> list[Page]:
        return [
            _render_guard(self.site_data_path, self.assembler.assemble_index, items),
            _render_guard(self.site_data_path, self.assembler.assemble_listing, items),
        ]


def _render_guard(source_path: Path, func, *args, **kwargs):
    try:
        return func(*args, **kwargs)
    except TemplateSyntaxError as exc:
        raise BuildError(
            source_path,
            f"Template syntax error in {exc.name or 'template'} on line {exc.lineno}: {exc.message}",
            exc,
        ) from exc
    except (ContentError, TemplateError, KeyError, ValueError, TypeError, AttributeError) as exc:
        raise BuildError(source_path, _format_error_message(exc), exc) from exc


def build_site(
    project_root: Path,
    include_drafts: bool = False,
    root_url: str | None = None,
    clean_output: bool = True,
    output_dir_override: Path | None = None,
) -> BuildResult:
    """Build the entire static site.

    Every article is loaded and assembled before the output directory is
    touched, so a failing article leaves the previous output in place.

    Args:
        project_root: Root directory of the project.
        include_drafts: Whether to include draft articles.
        root_url: Optional base URL overriding the configured one.
        clean_output: Whether to wipe the output directory before writing.
        output_dir_override: Optional output directory instead of config output_dir.

    Returns:
        BuildResult with every page written.

    Raises:
        BuildError: If an article, the site data or a template is invalid.
        FileNotFoundError: If the content directory does not exist.
    """
    site = _Site(project_root, root_url=root_url)
    output_dir = output_dir_override or (project_root / site.config["output_dir"])

    items = [site.load_item(path) for path in site.processor.iter_files(include_drafts)]
    items = [item for item in items if include_drafts or not item.draft]
    duplicates = site.duplicate_errors(items)
    if duplicates:
        raise duplicates[0]
    site.check_site_assets()
    pages = [site.assemble(item) for item in items]
    pages.extend(site.assemble_indexes(items))

    if clean_output:
        ensure_clean_dir(output_dir)
    else:
        output_dir.mkdir(parents=True, exist_ok=True)
    copy_public(site.public_dir, output_dir)
    for page in pages:
        _write_page(output_dir, page, site.root_url)
    feeds = create_default_feed_registry().generate_all(output_dir, pages, site.data)
    return BuildResult(pages=pages, output_dir=output_dir, data=site.data, feeds=feeds)


def check_site(project_root: Path, include_drafts: bool = False) -> CheckResult:
    """Validate every article and page without writing output.

    Unlike build_site, this keeps going after a failure so that every
    broken file is reported. Header drafts are validated but only assembled
    when include_drafts is set, as in build_site.
    """
    try:
        site = _Site(project_root)
    except BuildError as exc:
        return CheckResult(checked=0, errors=[exc])
    errors: list[BuildError] = []
    items: list[ContentItem] = []
    paths = site.processor.iter_files(include_drafts)
    for path in paths:
        try:
            item = site.load_item(path)
            if item.draft and not include_drafts:
                continue
            site.assemble(item)
        except BuildError as exc:
            errors.append(exc)
            continue
        items.append(item)
    errors.extend(site.duplicate_errors(items))
    try:
        site.check_site_assets()
        site.assemble_indexes(items)
    except BuildError as exc:
        errors.append(exc)
    return CheckResult(checked=len(paths), errors=errors)


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message."""
    if isinstance(exc, ContentError):
        return exc.message
    error_type = type(exc).__name__
    error_msg = str(exc)
    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TemplateNotFound":
        return f"Template not found: {error_msg}"
    if error_type == "TypeError":
        return f"Type error: {error_msg}"
    if error_type == "AttributeError":
        return f"Attribute error: {error_msg}"
    return f"{error_type}: {error_msg}"


def _write_page(output_dir: Path, page: Page, root_url: str = "") -> Path:
    """Write a page to ``<output>/<url>/index.html``."""
    html = absolutize_html_urls(page.html, root_url) if root_url else page.html
    target_dir = output_dir / page.url.strip("/")
    target_dir.mkdir(parents=True, exist_ok=True)
    html_path = target_dir / "index.html"
    html_path.write_text(html, encoding="utf-8")
    return html_path


def iter_written_paths(result: BuildResult) -> Iterable[Path]:
    for page in result.pages:
        yield result.output_dir / page.url.strip("/") / "index.html"
