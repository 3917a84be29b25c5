"""Core content records."""

from marginalia.data_primitives.post import DEFAULT_PERMALINK, PERMALINK_FIELDS, Post

__all__ = ["DEFAULT_PERMALINK", "PERMALINK_FIELDS", "Post"]
