"""marginalia: build a static blog from Markdown posts with YAML front matter."""

from marginalia.collection import PostCollection
from marginalia.data_primitives.post import Post
from marginalia.exceptions import ConfigLoadError, LayoutNotFoundError, MarginaliaError, ParseError
from marginalia.markdown.frontmatter import parse_frontmatter, serialize_frontmatter
from marginalia.rendering.renderer import Renderer, load_layouts, render_post
from marginalia.site_builder import BuildResult, SiteBuilder, build_site

__version__ = "0.1.0"

__all__ = [
    "BuildResult",
    "ConfigLoadError",
    "LayoutNotFoundError",
    "MarginaliaError",
    "ParseError",
    "Post",
    "PostCollection",
    "Renderer",
    "SiteBuilder",
    "__version__",
    "build_site",
    "load_layouts",
    "parse_frontmatter",
    "render_post",
    "serialize_frontmatter",
]
