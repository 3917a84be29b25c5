"""The immutable post record built from a front-matter document."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, tzinfo
from pathlib import Path
from types import MappingProxyType
from typing import Any

from marginalia.exceptions import ParseError
from marginalia.markdown.frontmatter import parse_frontmatter, parse_frontmatter_file, serialize_frontmatter
from marginalia.utils.datetime_utils import parse_datetime_flexible
from marginalia.utils.slugify import post_slug, slugify

DEFAULT_PERMALINK = "/{categories}/{year}/{month}/{day}/{slug}.html"
PERMALINK_FIELDS = ("categories", "year", "month", "day", "slug")

# Jekyll post filenames: YYYY-MM-DD-some-title.md
_FILENAME_PATTERN = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")
_RESERVED_KEYS = frozenset({"layout", "title", "date", "categories", "category", "slug"})


def _coerce_categories(metadata: Mapping[str, Any]) -> tuple[str, ...]:
    categories: list[str] = []
    for key in ("category", "categories"):
        value = metadata.get(key)
        if value is None:
            continue
        if isinstance(value, str):
            categories.extend(value.split())
        elif isinstance(value, (list, tuple)):
            categories.extend(str(item).strip() for item in value if str(item).strip())
        else:
            msg = f"'{key}' must be a string or a list, got {type(value).__name__}"
            raise ParseError(msg)
    return tuple(categories)


def _required_text(metadata: Mapping[str, Any], key: str, default: str | None = None) -> str:
    value = metadata.get(key, default)
    if value is None or not str(value).strip():
        msg = f"'{key}' is required and must not be empty"
        raise ParseError(msg)
    return str(value).strip()


@dataclass(frozen=True, slots=True)
class Post:
    """One parsed content document plus its metadata."""

    layout: str
    title: str
    date: datetime
    categories: tuple[str, ...]
    body: str
    slug: str
    source_path: Path | None = None
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.layout:
            raise ParseError("'layout' is required and must not be empty", self.source_path)
        if not self.title:
            raise ParseError("'title' is required and must not be empty", self.source_path)
        if self.date.tzinfo is None:
            raise ParseError("'date' must carry a timezone", self.source_path)
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    @classmethod
    def from_metadata(
        cls,
        metadata: Mapping[str, Any],
        body: str,
        *,
        source_path: Path | None = None,
        default_timezone: tzinfo = UTC,
        default_layout: str | None = None,
    ) -> Post:
        """Build a post from an already-parsed front-matter mapping.

        Missing ``layout`` falls back to ``default_layout`` and a missing
        ``date`` or ``slug`` falls back to a ``YYYY-MM-DD-slug`` filename.

        Raises:
            ParseError: If a required field is missing or malformed.

        """
        match = _FILENAME_PATTERN.match(source_path.stem) if source_path else None
        try:
            layout = _required_text(metadata, "layout", default_layout)
            title = _required_text(metadata, "title")

            raw_date = metadata.get("date") or (match.group("date") if match else None)
            if raw_date is None:
                raise ParseError("'date' is required and the filename carries none")
            try:
                date = parse_datetime_flexible(raw_date, default_timezone=default_timezone)
            except ValueError as exc:
                raise ParseError(f"invalid 'date': {exc}") from exc

            categories = _coerce_categories(metadata)
        except ParseError as exc:
            if source_path is not None:
                raise exc.with_path(source_path) from exc
            raise

        slug = post_slug(
            title,
            explicit=metadata.get("slug"),
            filename_slug=match.group("slug") if match else None,
        )
        extra = {key: value for key, value in metadata.items() if key not in _RESERVED_KEYS}
        return cls(
            layout=layout,
            title=title,
            date=date,
            categories=categories,
            body=body,
            slug=slug,
            source_path=source_path,
            extra=extra,
        )

    @classmethod
    def from_document(cls, text: str, **kwargs: Any) -> Post:
        """Parse ``text`` and build a post from it."""
        metadata, body = parse_frontmatter(text)
        return cls.from_metadata(metadata, body, **kwargs)

    @classmethod
    def from_file(cls, path: Path, **kwargs: Any) -> Post:
        """Read ``path`` and build a post from it."""
        metadata, body = parse_frontmatter_file(path)
        return cls.from_metadata(metadata, body, source_path=path, **kwargs)

    @property
    def metadata(self) -> dict[str, Any]:
        """Front-matter view of the post, reserved keys first."""
        data: dict[str, Any] = {
            "layout": self.layout,
            "title": self.title,
            "date": self.date,
            "categories": list(self.categories),
            "slug": self.slug,
        }
        data.update(self.extra)
        return data

    def permalink(self, pattern: str = DEFAULT_PERMALINK) -> str:
        """Expand a permalink pattern for this post.

        Supported placeholders are listed in :data:`PERMALINK_FIELDS`. Empty
        segments collapse, and a trailing slash is kept so the URL names a
        directory.
        """
        url = pattern.format(
            categories="/".join(slugify(category) for category in self.categories),
            year=f"{self.date.year:04d}",
            month=f"{self.date.month:02d}",
            day=f"{self.date.day:02d}",
            slug=self.slug,
        )
        segments = [part for part in url.split("/") if part]
        if not segments:
            return "/"
        return "/" + "/".join(segments) + ("/" if url.endswith("/") else "")

    def to_document(self) -> str:
        """Serialize the post back into a front-matter document."""
        return serialize_frontmatter(self.metadata, self.body)
