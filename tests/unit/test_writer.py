"""Tests for creating new post files."""

from datetime import UTC, datetime, timedelta, timezone
from pathlib import Path

import pytest
from freezegun import freeze_time

from marginalia.data_primitives.post import Post
from marginalia.writer import _resolve_filepath, write_new_post


def test_resolve_filepath_no_collision(tmp_path: Path):
    assert _resolve_filepath(tmp_path, "2023-01-01", "test-slug") == tmp_path / "2023-01-01-test-slug.md"


def test_resolve_filepath_with_collision(tmp_path: Path):
    (tmp_path / "2023-01-01-test-slug.md").touch()
    assert _resolve_filepath(tmp_path, "2023-01-01", "test-slug") == tmp_path / "2023-01-01-test-slug-2.md"


def test_resolve_filepath_raises_after_max_attempts(tmp_path: Path):
    (tmp_path / "2023-01-01-test-slug.md").touch()
    for i in range(2, 5):
        (tmp_path / f"2023-01-01-test-slug-{i}.md").touch()

    with pytest.raises(FileExistsError):
        _resolve_filepath(tmp_path, "2023-01-01", "test-slug", max_attempts=3)


def test_write_new_post_round_trips(tmp_path: Path):
    when = datetime(2024, 3, 2, 10, 15, tzinfo=timezone(timedelta(hours=8)))

    path = write_new_post(
        tmp_path / "_posts", "Fixing a scope bug", categories=["interpreter", "bugs"], date=when, body="Draft\n"
    )

    assert path == tmp_path / "_posts" / "2024-03-02-fixing-a-scope-bug.md"
    post = Post.from_file(path)
    assert post.title == "Fixing a scope bug"
    assert post.layout == "post"
    assert post.date == when
    assert post.categories == ("interpreter", "bugs")
    assert post.body == "Draft\n"


@freeze_time("2025-01-01 09:30:00")
def test_write_new_post_defaults_to_now(tmp_path: Path):
    path = write_new_post(tmp_path, "Hello")

    assert path.name == "2025-01-01-hello.md"
    assert Post.from_file(path).date == datetime(2025, 1, 1, 9, 30, tzinfo=UTC)
