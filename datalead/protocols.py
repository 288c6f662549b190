"""Protocol definitions for datalead.

These protocols describe the seams of the content pipeline so that
renderers and extractors can be swapped or added without touching the
code that drives them.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Heading


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for turning an article body into HTML."""

    @abstractmethod
    def can_render(self, path: Path) -> bool:
        """Check if this renderer can handle the given file.

        Args:
            path: Path to the source file.

        Returns:
            True if this renderer can process the file.
        """
        ...

    @abstractmethod
    def render(self, content: str) -> tuple[str, list[Heading]]:
        """Render an article body to HTML.

        Args:
            content: Body text with the header already removed.

        Returns:
            Tuple of (rendered HTML, list of headings for TOC).
        """
        ...

    @property
    @abstractmethod
    def source_type(self) -> str:
        """Return the source type identifier (e.g., 'markdown', 'mdx')."""
        ...


@runtime_checkable
class MetadataExtractor(Protocol):
    """Protocol for extracting header metadata from an article."""

    @abstractmethod
    def extract(self, content: str, path: Path, metadata: dict[str, Any]) -> dict[str, Any]:
        """Extract metadata from content.

        Args:
            content: Raw source content.
            path: Path to the source file.
            metadata: Metadata gathered by earlier extractors.

        Returns:
            Dictionary of extracted metadata.
        """
        ...
