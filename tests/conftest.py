from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import pytest

from marginalia.data_primitives.post import Post

POST_LAYOUT = """{% extends "default" %}
{% block main %}<article><h1>{{ page.title }}</h1>{{ content }}</article>{% endblock %}
"""


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Factory for posts with sensible defaults."""

    def _make_post(
        title: str = "A post",
        date: datetime | None = None,
        *,
        layout: str = "post",
        categories: tuple[str, ...] = (),
        body: str = "Body",
        slug: str | None = None,
        source_path: Path | None = None,
    ) -> Post:
        return Post(
            layout=layout,
            title=title,
            date=date or datetime(2025, 1, 1, tzinfo=UTC),
            categories=categories,
            body=body,
            slug=slug or title.lower().replace(" ", "-"),
            source_path=source_path,
        )

    return _make_post


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A small Jekyll-style site with two posts and a custom post layout."""
    root = tmp_path / "site"
    posts = root / "_posts"
    layouts = root / "_layouts"
    posts.mkdir(parents=True)
    layouts.mkdir()

    (root / "_config.yml").write_text(
        "title: Bug Diaries\nbaseurl: /blog/\ntimezone: UTC\nmarkdown: kramdown\n",
        encoding="utf-8",
    )
    (layouts / "post.html").write_text(POST_LAYOUT, encoding="utf-8")
    (posts / "2024-03-02-fixing-a-scope-bug.md").write_text(
        "---\n"
        "layout: post\n"
        'title: "Fixing a scope bug"\n'
        "date: 2024-03-02 10:15:00 +0800\n"
        "categories: interpreter bugs\n"
        "---\n"
        "Variables *leaked* out of blocks.\n",
        encoding="utf-8",
    )
    (posts / "2024-05-20-csrf-tokens.md").write_text(
        "---\n"
        "layout: post\n"
        "title: CSRF tokens & encodings\n"
        "date: 2024-05-20 09:00:00 +0000\n"
        "categories: [security]\n"
        "---\n"
        "Tokens were double-encoded.\n",
        encoding="utf-8",
    )
    return root
