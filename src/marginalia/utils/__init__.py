"""Shared helpers for dates and slugs."""

from marginalia.utils.datetime_utils import localize, parse_datetime_flexible
from marginalia.utils.slugify import post_slug, slugify

__all__ = ["localize", "parse_datetime_flexible", "post_slug", "slugify"]
