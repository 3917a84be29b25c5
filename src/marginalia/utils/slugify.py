"""URL slugs for posts, categories and new-post filenames."""

import re
from unicodedata import normalize

from pymdownx.slugs import slugify as _md_slugify

DEFAULT_SLUG = "post"
MAX_SLUG_LENGTH = 60

_to_slug = _md_slugify(case="lower", separator="-")
_REPEATED_SEPARATORS = re.compile(r"-{2,}")


def slugify(text: str, max_len: int = MAX_SLUG_LENGTH) -> str:
    """Turn ``text`` into a lowercase ASCII slug, never an empty one.

    >>> slugify("Fixing a Scope Bug!")
    'fixing-a-scope-bug'
    >>> slugify("Café à Paris")
    'cafe-a-paris'
    """
    ascii_text = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _REPEATED_SEPARATORS.sub("-", _to_slug(ascii_text, sep="-")).strip("-")
    slug = slug[:max_len].rstrip("-")
    return slug or DEFAULT_SLUG


def post_slug(title: str, *, explicit: object = None, filename_slug: str | None = None) -> str:
    """Choose the slug of a post.

    A ``slug`` front-matter value wins, then the ``<slug>`` part of a
    ``YYYY-MM-DD-<slug>`` filename, then the title.
    """
    for candidate in (explicit, filename_slug, title):
        if candidate is not None and str(candidate).strip():
            return slugify(str(candidate))
    return DEFAULT_SLUG
