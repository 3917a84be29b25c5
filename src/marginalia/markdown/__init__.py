"""Front-matter parsing and serialization."""

from marginalia.markdown.frontmatter import (
    FRONTMATTER_MARKER,
    parse_frontmatter,
    parse_frontmatter_file,
    serialize_frontmatter,
)

__all__ = ["FRONTMATTER_MARKER", "parse_frontmatter", "parse_frontmatter_file", "serialize_frontmatter"]
