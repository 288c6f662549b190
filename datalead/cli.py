"""Command-line interface for datalead.

Commands:
- build: Build the site into the output directory.
- check: Validate every article without writing output.
- post: Create a new article interactively.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .build import BuildError, load_config
from .extractors import DEFAULT_LAYOUT
from .utils import slugify


@click.group()
@click.version_option(version=__version__, prog_name="datalead")
def cli():
    """Static site generator for The Data Lead blog."""


def _report_error(exc: BuildError, project_root: Path) -> None:
    try:
        rel_path = exc.source_path.relative_to(project_root)
    except ValueError:
        rel_path = exc.source_path
    click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


@cli.command()
@click.option("--drafts", is_flag=True, help="Include draft content")
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    required=False,
    help="Output directory (overrides datalead.yaml output_dir)",
)
@click.option("--root-url", required=False, help="Absolute base URL for links")
@click.option("--verbose", "-v", is_flag=True, help="List every written page")
def build(drafts: bool, output: Path | None, root_url: str | None, verbose: bool):
    """Build the site into the output directory."""
    project_root = Path.cwd()
    from .build import build_site, iter_written_paths

    try:
        result = build_site(
            project_root,
            include_drafts=drafts,
            root_url=root_url,
            output_dir_override=output.resolve() if output else None,
        )
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        _report_error(exc, project_root)
        raise SystemExit(1) from None
    except FileNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc

    if verbose:
        for path in iter_written_paths(result):
            click.echo(f"  wrote {path}")
        for name in result.feeds:
            click.echo(f"  wrote {result.output_dir / name}")
    click.echo(f"Built {len(result.pages)} pages into {result.output_dir}")


@cli.command()
@click.option("--drafts", is_flag=True, help="Include draft content")
def check(drafts: bool):
    """Validate every article without writing output."""
    project_root = Path.cwd()
    from .build import check_site

    try:
        result = check_site(project_root, include_drafts=drafts)
    except FileNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc

    if not result.ok:
        click.echo(
            click.style(f"{len(result.errors)} problem(s) found:", fg="red", bold=True),
            err=True,
        )
        for exc in result.errors:
            _report_error(exc, project_root)
        raise SystemExit(1)
    click.echo(f"Checked {result.checked} articles, no problems found")


@cli.command()
def post():
    """Create a new article interactively."""
    project_root = Path.cwd()
    config = load_config(project_root)
    content_dir = project_root / config["content_dir"]

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    title = title.strip()

    description = questionary.text("Description:", style=_questionary_style()).ask()
    if description is None:
        raise click.Abort()

    slug = slugify(title)
    img_src = questionary.text(
        "Hero image path:",
        default=f"/assets/images/articles/{slug}.png",
        style=_questionary_style(),
    ).ask()
    if img_src is None:
        raise click.Abort()

    img_alt = questionary.text(
        "Hero image alt text:", default=title, style=_questionary_style()
    ).ask()
    if img_alt is None:
        raise click.Abort()

    existing = {slugify(p.stem.lstrip("_")) for p in content_dir.glob("*.md*")}
    target_path = content_dir / f"{slug}.md"
    if slug in existing:
        raise click.ClickException(f"An article with slug '{slug}' already exists")

    header = {
        "layout": f"../../layouts/{DEFAULT_LAYOUT}.astro",
        "title": title,
        "description": description.strip(),
        "pubDate": date.today(),
        "imgSrc": img_src.strip(),
        "imgAlt": img_alt.strip(),
    }
    content_dir.mkdir(parents=True, exist_ok=True)
    frontmatter = yaml.safe_dump(header, sort_keys=False, allow_unicode=True)
    target_path.write_text(f"---\n{frontmatter}---\n\n## {title}\n\n", encoding="utf-8")
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
