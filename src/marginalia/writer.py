"""Create new post files with front matter and a collision-free name."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from marginalia.markdown.frontmatter import serialize_frontmatter
from marginalia.utils.slugify import slugify

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)


def _resolve_filepath(output_dir: Path, date_prefix: str, base_slug: str, max_attempts: int = 100) -> Path:
    """Return a free ``YYYY-MM-DD-slug.md`` path, suffixing ``-2``, ``-3``... on collision.

    Raises:
        FileExistsError: If no free name is found within ``max_attempts``.

    """
    filepath = output_dir / f"{date_prefix}-{base_slug}.md"
    if not filepath.exists():
        return filepath

    for i in range(2, max_attempts + 2):
        filepath = output_dir / f"{date_prefix}-{base_slug}-{i}.md"
        if not filepath.exists():
            return filepath

    msg = f"Could not find a free filename for '{base_slug}' after {max_attempts} attempts"
    raise FileExistsError(msg)


def write_new_post(
    output_dir: Path,
    title: str,
    *,
    layout: str = "post",
    categories: Sequence[str] = (),
    date: datetime | None = None,
    body: str = "",
) -> Path:
    """Write a new post skeleton into ``output_dir`` and return its path."""
    date = date or datetime.now(UTC).replace(microsecond=0)
    metadata = {
        "layout": layout,
        "title": title,
        "date": date.strftime("%Y-%m-%d %H:%M:%S %z").strip(),
        "categories": list(categories),
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    filepath = _resolve_filepath(output_dir, date.strftime("%Y-%m-%d"), slugify(title))
    filepath.write_text(serialize_frontmatter(metadata, body), encoding="utf-8")
    logger.info("Created %s", filepath)
    return filepath
