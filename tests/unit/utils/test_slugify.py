"""Tests for slug helpers."""

import pytest

from marginalia.utils.slugify import DEFAULT_SLUG, post_slug, slugify


def test_slugify_basic():
    assert slugify("Hello World!") == "hello-world"


def test_slugify_transliterates():
    assert slugify("Café à Paris") == "cafe-a-paris"


def test_slugify_is_stable_for_slugs():
    assert slugify("fixing-a-scope-bug") == "fixing-a-scope-bug"


def test_slugify_truncates_without_trailing_separator():
    assert slugify("A" * 100, max_len=20) == "a" * 20
    assert slugify("abc def", max_len=4) == "abc"


def test_slugify_never_empty():
    assert slugify("!!!") == DEFAULT_SLUG
    assert slugify("") == DEFAULT_SLUG


@pytest.mark.parametrize(
    ("explicit", "filename_slug", "expected"),
    [
        ("Custom Slug", "from-file", "custom-slug"),
        (None, "fixing-a-scope-bug", "fixing-a-scope-bug"),
        ("  ", "from-file", "from-file"),
        (None, None, "csrf-tokens-encodings"),
        (2024, None, "2024"),
    ],
)
def test_post_slug_precedence(explicit, filename_slug, expected):
    assert post_slug("CSRF tokens & encodings", explicit=explicit, filename_slug=filename_slug) == expected
