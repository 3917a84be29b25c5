"""Helpers for parsing YAML front matter from Markdown content."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import yaml
from frontmatter import YAMLHandler

from marginalia.exceptions import ParseError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

FRONTMATTER_MARKER = "---"

_handler = YAMLHandler()


def _is_marker(line: str) -> bool:
    return line.rstrip() == FRONTMATTER_MARKER


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a document into its front-matter mapping and body.

    The document must open with a ``---`` line; the block ends at the next
    ``---`` line. Everything after the closing marker is returned untouched,
    including any further ``---`` lines.

    Args:
        content: Full text of the document.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        ParseError: If either marker is missing, the YAML is invalid, or the
            block does not hold a mapping.

    """
    lines = content.removeprefix("\ufeff").splitlines(keepends=True)
    if not lines or not _is_marker(lines[0]):
        raise ParseError(f"document does not start with a '{FRONTMATTER_MARKER}' line")

    for index, line in enumerate(lines[1:], start=1):
        if _is_marker(line):
            closing = index
            break
    else:
        raise ParseError(f"closing '{FRONTMATTER_MARKER}' line not found")

    block = "".join(lines[1:closing])
    body = "".join(lines[closing + 1 :])

    try:
        data = _handler.load(block)
    except yaml.YAMLError as exc:
        raise ParseError(f"invalid YAML: {exc}") from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise ParseError(f"front matter must be a mapping, got {type(data).__name__}")
    return dict(data), body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a Markdown file and parse its front matter.

    Raises:
        OSError: If the file cannot be read.
        ParseError: If the file is not valid ``encoding`` text or its front
            matter is invalid; the error carries ``path``.

    """
    try:
        content = path.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise ParseError(f"not valid {encoding}: {exc.reason} at byte {exc.start}", path) from exc
    try:
        return parse_frontmatter(content)
    except ParseError as exc:
        logger.debug("Failed to parse front matter from %s: %s", path, exc.reason)
        raise exc.with_path(path) from exc


def serialize_frontmatter(metadata: Mapping[str, Any], body: str) -> str:
    """Render ``metadata`` and ``body`` back into a front-matter document."""
    yaml_block = _handler.export(dict(metadata), sort_keys=False)
    return f"{FRONTMATTER_MARKER}\n{yaml_block}\n{FRONTMATTER_MARKER}\n{body}"
