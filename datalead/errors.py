"""Content errors raised while turning article files into content items."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ContentError(Exception):
    """Error in an article's header with file context.

    Attributes:
        source_path: Path to the article, or None for items built in code.
        message: Human-readable error message.
    """

    def __init__(self, source_path: Path | None, message: str):
        self.source_path = source_path
        self.message = message
        location = source_path if source_path is not None else "<content>"
        super().__init__(f"{location}: {message}")


class MissingFieldError(ContentError):
    """A required header field (title or pubDate) is absent or empty."""

    def __init__(self, source_path: Path | None, field: str):
        self.field = field
        super().__init__(source_path, f"Missing required header field '{field}'")


class InvalidFieldError(ContentError):
    """A header field is present but has an unusable value."""

    def __init__(self, source_path: Path | None, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(
            source_path, f"Invalid value for header field '{field}': {value!r}"
        )
