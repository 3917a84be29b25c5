"""Build a whole site: collect posts, render them and write the pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from marginalia.collection import PostCollection, SkippedDocument
from marginalia.config import SiteConfig, load_site_config
from marginalia.exceptions import LayoutNotFoundError
from marginalia.rendering.renderer import Renderer, load_layouts

if TYPE_CHECKING:
    from pathlib import Path

    from marginalia.data_primitives.post import Post

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"


@dataclass
class BuildResult:
    """Outcome of a single build."""

    pages: list[Path] = field(default_factory=list)
    skipped: list[SkippedDocument] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped


class SiteBuilder:
    """Builds the pages of one site from its posts and layouts."""

    def __init__(self, site_root: Path, config: SiteConfig | None = None) -> None:
        self.config = config if config is not None else load_site_config(site_root)
        self.paths = self.config.resolve(site_root)

    def load_posts(self) -> PostCollection:
        return PostCollection.from_directory(
            self.paths.source_dir,
            strict=self.config.strict,
            default_timezone=self.config.tzinfo,
            default_layout=self.config.default_layout,
        )

    def load_renderer(self) -> Renderer:
        return Renderer(load_layouts(self.paths.layouts_dir), permalink=self.config.permalink)

    def site_context(self, renderer: Renderer, collection: PostCollection) -> dict[str, Any]:
        site = self.config.site_context()
        site["posts"] = [renderer.page_context(post) for post in collection.chronological()]
        site["categories"] = {
            name: [renderer.page_context(post) for post in posts] for name, posts in collection.categories().items()
        }
        return site

    def output_path(self, url: str) -> Path:
        """Map a site URL to a file; directory URLs get an ``index.html``."""
        if url.endswith("/"):
            url += INDEX_FILENAME
        return self.paths.output_dir / url.lstrip("/")

    def build(self) -> BuildResult:
        """Render every post and the index page into the output directory.

        Raises:
            ParseError: In strict mode, for the first malformed post.
            LayoutNotFoundError: In strict mode, for the first unknown layout.

        """
        collection = self.load_posts()
        renderer = self.load_renderer()
        site = self.site_context(renderer, collection)
        result = BuildResult(skipped=list(collection.errors))

        rendered: list[Post] = []
        written: dict[Path, Post] = {}
        for post in collection.chronological():
            try:
                html = renderer.render(post, site=site)
            except LayoutNotFoundError as exc:
                if self.config.strict:
                    raise
                logger.warning("Skipping %s: %s", post.source_path or post.title, exc)
                result.skipped.append(SkippedDocument(path=post.source_path, error=exc))
                continue

            target = self.output_path(post.permalink(self.config.permalink))
            if target in written:
                logger.warning("'%s' and '%s' share the output path %s", written[target].title, post.title, target)
            self._write(target, html)
            written[target] = post
            rendered.append(post)
            result.pages.append(target)

        index_layout = self.config.index_layout
        if index_layout and index_layout in renderer.layouts:
            target = self.output_path(INDEX_FILENAME)
            self._write(target, renderer.render_index(rendered, layout=index_layout, site=site))
            result.pages.append(target)

        logger.info(
            "Built %d pages into %s (%d skipped)", len(result.pages), self.paths.output_dir, len(result.skipped)
        )
        return result

    @staticmethod
    def _write(target: Path, content: str) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", target)


def build_site(site_root: Path, **overrides: Any) -> BuildResult:
    """Load the configuration of ``site_root`` and build it."""
    config = load_site_config(site_root, **overrides)
    return SiteBuilder(site_root, config).build()
