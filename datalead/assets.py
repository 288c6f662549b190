"""Public asset handling for datalead.

Files under ``public/`` are served from the site root as is, so an article's
``imgSrc`` of ``/assets/images/cover.png`` must exist at
``public/assets/images/cover.png``.

Key classes:
- AssetNotFoundError: A referenced public file is missing.
- PublicAssetResolver: Maps root-relative URLs to files under ``public/``.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from urllib.parse import unquote, urlsplit

from .utils import is_external_url


class AssetNotFoundError(Exception):
    """Error raised when a referenced asset file does not exist.

    Attributes:
        asset_name: The URL path that was referenced.
        asset_type: What referenced it (e.g., "hero image", "avatar").
        searched_paths: Paths that were checked.
    """

    def __init__(self, asset_name: str, asset_type: str, searched_paths: list[Path]):
        self.asset_name = asset_name
        self.asset_type = asset_type
        self.searched_paths = searched_paths
        paths_str = ", ".join(str(p) for p in searched_paths)
        super().__init__(f"{asset_type} '{asset_name}' not found. Searched: {paths_str}")


class PublicAssetResolver:
    """Resolves root-relative asset URLs against the public directory.

    Attributes:
        public_dir: Directory whose contents are served at the site root.
    """

    def __init__(self, public_dir: Path):
        self.public_dir = public_dir

    def path_for(self, url: str) -> Path | None:
        """Return the file a root-relative URL points at, or None for external URLs."""
        if not url or is_external_url(url) or url.startswith(("data:", "#")):
            return None
        clean = unquote(urlsplit(url).path).lstrip("/")
        return self.public_dir / clean

    def exists(self, url: str) -> bool:
        target = self.path_for(url)
        return target is None or target.is_file()

    def require(self, url: str, asset_type: str = "asset") -> None:
        """Check that a referenced URL resolves to a public file.

        External URLs and empty references are accepted.

        Raises:
            AssetNotFoundError: If the file does not exist.
        """
        target = self.path_for(url)
        if target is not None and not target.is_file():
            raise AssetNotFoundError(url, asset_type, [target])


def copy_public(public_dir: Path, output_dir: Path) -> list[Path]:
    """Copy the public tree into the output directory.

    Returns:
        Output paths of the copied files.
    """
    copied: list[Path] = []
    if not public_dir.is_dir():
        return copied
    for src in sorted(public_dir.rglob("*")):
        if src.is_dir():
            continue
        dest = output_dir / src.relative_to(public_dir)
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
        copied.append(dest)
    return copied
