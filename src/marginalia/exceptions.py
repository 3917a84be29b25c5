"""Centralized exceptions for marginalia."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class MarginaliaError(Exception):
    """Base exception for all marginalia errors."""


class ParseError(MarginaliaError):
    """Raised when a document's front matter is missing or malformed."""

    def __init__(self, reason: str, path: Path | str | None = None) -> None:
        self.reason = reason
        self.path = Path(path) if path is not None else None
        if self.path is None:
            message = f"Invalid front matter: {reason}"
        else:
            message = f"Invalid front matter in '{self.path}': {reason}"
        super().__init__(message)

    def with_path(self, path: Path | str) -> ParseError:
        """Return a copy of this error bound to ``path``."""
        return ParseError(self.reason, path)


class LayoutNotFoundError(MarginaliaError):
    """Raised when a post references a layout that is not available."""

    def __init__(self, layout: str, available: Iterable[str] = ()) -> None:
        self.layout = layout
        self.available = tuple(sorted(available))
        known = ", ".join(self.available) or "none"
        super().__init__(f"Layout '{layout}' not found (available: {known})")


class ConfigLoadError(MarginaliaError):
    """Raised when a site configuration file cannot be loaded or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load or parse config at '{path}': {reason}")
