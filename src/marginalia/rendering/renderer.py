"""Render posts into pages through named Jinja2 layouts."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from importlib import resources
from typing import TYPE_CHECKING, Any

from jinja2 import DictLoader, Environment, Template, TemplateNotFound, select_autoescape
from markdown_it import MarkdownIt
from markupsafe import Markup

from marginalia.data_primitives.post import DEFAULT_PERMALINK, Post
from marginalia.exceptions import LayoutNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

LAYOUT_SUFFIX = ".html"
_RAW_SUFFIXES = frozenset({".html", ".htm"})

_md = MarkdownIt("commonmark", {"html": True}).enable(["table", "strikethrough"])


def render_markdown(content: str) -> str:
    """Render Markdown content to HTML."""
    return _md.render(content)


def load_layouts(directory: Path | None = None) -> dict[str, str]:
    """Return layout sources keyed by name.

    The packaged ``default``, ``post`` and ``index`` layouts come first;
    ``<name>.html`` files in ``directory`` override or extend them.
    """
    layouts: dict[str, str] = {}
    packaged = resources.files("marginalia.rendering").joinpath("templates")
    for entry in packaged.iterdir():
        if entry.name.endswith(LAYOUT_SUFFIX):
            layouts[entry.name.removesuffix(LAYOUT_SUFFIX)] = entry.read_text(encoding="utf-8")

    if directory is None:
        return layouts
    if not directory.is_dir():
        logger.debug("Layouts directory %s not found, using packaged layouts only", directory)
        return layouts

    for path in sorted(directory.glob(f"*{LAYOUT_SUFFIX}")):
        layouts[path.stem] = path.read_text(encoding="utf-8")
        logger.debug("Loaded layout %r from %s", path.stem, path)
    return layouts


class Renderer:
    """Turns posts into output documents using a mapping of named layouts.

    Layout values are either Jinja2 source strings, which may ``{% extends %}``
    each other by name, or already compiled :class:`jinja2.Template` objects.
    """

    def __init__(
        self,
        layouts: Mapping[str, str | Template],
        *,
        permalink: str = DEFAULT_PERMALINK,
    ) -> None:
        self._compiled = {name: tpl for name, tpl in layouts.items() if isinstance(tpl, Template)}
        sources = {name: tpl for name, tpl in layouts.items() if not isinstance(tpl, Template)}
        self._names = frozenset(layouts)
        self.permalink = permalink
        self._env = Environment(
            loader=DictLoader(sources),
            autoescape=select_autoescape(
                enabled_extensions=("html", "htm", "xml", "jinja"),
                default_for_string=True,
                default=True,
            ),
            keep_trailing_newline=True,
        )

    @property
    def layouts(self) -> frozenset[str]:
        return self._names

    def get_layout(self, name: str) -> Template:
        """Return the compiled layout called ``name``.

        Raises:
            LayoutNotFoundError: If no layout has that name.

        """
        if name in self._compiled:
            return self._compiled[name]
        if name not in self._names:
            raise LayoutNotFoundError(name, self._names)
        return self._env.get_template(name)

    def page_context(self, post: Post) -> dict[str, Any]:
        page = post.metadata
        page["url"] = post.permalink(self.permalink)
        return page

    def render(self, post: Post, *, site: Mapping[str, Any] | None = None) -> str:
        """Render ``post`` through the layout it names.

        Raises:
            LayoutNotFoundError: If the post's layout, or a layout it extends,
                is missing.

        """
        template = self.get_layout(post.layout)
        if post.source_path is not None and post.source_path.suffix.lower() in _RAW_SUFFIXES:
            content = Markup(post.body)
        else:
            content = Markup(render_markdown(post.body))
        return self._render(
            template,
            post=post,
            page=self.page_context(post),
            content=content,
            site=site or {},
        )

    def render_index(
        self,
        posts: Iterable[Post],
        *,
        layout: str = "index",
        site: Mapping[str, Any] | None = None,
    ) -> str:
        """Render a listing page for ``posts`` in the order given."""
        template = self.get_layout(layout)
        listed = [self.page_context(post) for post in posts]
        return self._render(template, posts=listed, page={}, content=Markup(""), site=site or {})

    def _render(self, template: Template, **context: Any) -> str:
        try:
            return template.render(**context)
        except TemplateNotFound as exc:
            # {% extends %} and {% include %} resolve at render time
            raise LayoutNotFoundError(exc.name, self._names) from exc


def render_post(post: Post, layouts: Mapping[str, str | Template], *, site: Mapping[str, Any] | None = None) -> str:
    """Render a single post against ``layouts``."""
    return Renderer(layouts).render(post, site=site)
