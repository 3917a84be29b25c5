"""The post collection: every parsed post of a site, ordered by date."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import UTC, tzinfo
from typing import TYPE_CHECKING

from marginalia.data_primitives.post import Post
from marginalia.exceptions import MarginaliaError, ParseError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".markdown", ".html")


@dataclass(frozen=True, slots=True)
class SkippedDocument:
    """A source document left out of a build and the reason why."""

    path: Path | None
    error: MarginaliaError


class PostCollection:
    """Holds parsed posts in input order and yields them newest first."""

    def __init__(self, posts: Iterable[Post], *, errors: Iterable[SkippedDocument] = ()) -> None:
        self._posts: tuple[Post, ...] = tuple(posts)
        self.errors: tuple[SkippedDocument, ...] = tuple(errors)

    def __len__(self) -> int:
        return len(self._posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self._posts)

    def __repr__(self) -> str:
        return f"PostCollection({len(self._posts)} posts)"

    def chronological(self) -> Iterator[Post]:
        """Yield posts by descending date; equal dates keep input order."""
        yield from sorted(self._posts, key=lambda post: post.date, reverse=True)

    def categories(self) -> dict[str, list[Post]]:
        """Group posts by category, each group newest first."""
        grouped: dict[str, list[Post]] = {}
        for post in self.chronological():
            for category in post.categories:
                grouped.setdefault(category, []).append(post)
        return grouped

    @classmethod
    def from_directory(
        cls,
        directory: Path,
        *,
        strict: bool = True,
        default_timezone: tzinfo = UTC,
        default_layout: str | None = None,
    ) -> PostCollection:
        """Parse every post file in ``directory``.

        Files are read in name order. With ``strict`` the first
        :class:`ParseError` propagates; otherwise the file is logged, skipped
        and recorded in :attr:`errors`.
        """
        if not directory.is_dir():
            logger.warning("Posts directory %s does not exist", directory)
            return cls(())

        posts: list[Post] = []
        errors: list[SkippedDocument] = []
        for path in sorted(directory.iterdir()):
            if not path.is_file() or path.suffix.lower() not in POST_SUFFIXES:
                continue
            try:
                post = Post.from_file(path, default_timezone=default_timezone, default_layout=default_layout)
            except ParseError as exc:
                if strict:
                    raise
                logger.warning("Skipping %s: %s", path.name, exc.reason)
                errors.append(SkippedDocument(path=path, error=exc))
                continue
            posts.append(post)

        logger.info("Loaded %d posts from %s", len(posts), directory)
        return cls(posts, errors=errors)
