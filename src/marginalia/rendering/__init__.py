"""Layout loading and page rendering."""

from marginalia.rendering.renderer import Renderer, load_layouts, render_markdown, render_post

__all__ = ["Renderer", "load_layouts", "render_markdown", "render_post"]
