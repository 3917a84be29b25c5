"""Main Typer application for marginalia."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from marginalia.cli.errorhandler import handle_cli_errors
from marginalia.collection import PostCollection
from marginalia.config import load_site_config
from marginalia.exceptions import LayoutNotFoundError
from marginalia.logging_setup import configure_logging, console
from marginalia.site_builder import INDEX_FILENAME, SiteBuilder
from marginalia.utils.datetime_utils import parse_datetime_flexible
from marginalia.writer import write_new_post

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="marginalia",
    help="Build a static blog from Markdown posts with YAML front matter",
    add_completion=False,
    no_args_is_help=True,
)

SiteRoot = Annotated[
    Path,
    typer.Argument(help="Site root containing _config.yml, _posts/ and _layouts/"),
]


@app.callback()
def main() -> None:
    """Configure logging for every command."""
    configure_logging()


@app.command()
def build(
    site_root: SiteRoot = Path(),
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory (default: _site under the site root)"),
    ] = None,
    lenient: Annotated[
        bool,
        typer.Option("--lenient", help="Skip malformed posts and unknown layouts instead of aborting"),
    ] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Show full tracebacks")] = False,
) -> None:
    """Render every post and the index page."""
    site_root = site_root.expanduser().resolve()
    if debug:
        configure_logging(debug=True)
    with handle_cli_errors(debug=debug):
        config = load_site_config(site_root, output_dir=output, strict=False if lenient else None)
        result = SiteBuilder(site_root, config).build()

    console.print(f"[green]Built {len(result.pages)} pages[/green] into {escape(str(config.resolve(site_root).output_dir))}")
    for skipped in result.skipped:
        console.print(f"[yellow]Skipped[/yellow] {escape(str(skipped.path))}: {escape(str(skipped.error))}")


@app.command(name="list")
def list_posts(
    site_root: SiteRoot = Path(),
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Only show posts in this category"),
    ] = None,
) -> None:
    """Show posts newest first."""
    site_root = site_root.expanduser().resolve()
    with handle_cli_errors():
        config = load_site_config(site_root, strict=False)
        collection = SiteBuilder(site_root, config).load_posts()

    posts = collection.categories().get(category, []) if category else list(collection.chronological())

    table = Table(title=config.title or "Posts")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Layout", style="magenta")
    table.add_column("Categories", style="green")
    for post in posts:
        table.add_row(
            post.date.strftime("%Y-%m-%d %H:%M %z"),
            escape(post.title),
            post.layout,
            escape(", ".join(post.categories)),
        )
    console.print(table)


@app.command()
def check(site_root: SiteRoot = Path()) -> None:
    """Parse every post and resolve every layout, reporting all problems."""
    site_root = site_root.expanduser().resolve()
    with handle_cli_errors():
        config = load_site_config(site_root, strict=False)
        builder = SiteBuilder(site_root, config)
        collection = builder.load_posts()
        renderer = builder.load_renderer()

    problems: list[str] = [str(skipped.error) for skipped in collection.errors]
    with handle_cli_errors():
        for post in collection:
            try:
                renderer.render(post)
            except LayoutNotFoundError as exc:
                problems.append(f"{post.source_path.name if post.source_path else post.title}: {exc}")
        if config.index_layout and config.index_layout in renderer.layouts:
            try:
                renderer.render_index(list(collection.chronological()), layout=config.index_layout)
            except LayoutNotFoundError as exc:
                problems.append(f"{INDEX_FILENAME}: {exc}")

    if problems:
        for problem in problems:
            console.print(f"[red]✗[/red] {escape(problem)}")
        console.print(f"[bold red]{len(problems)} problem(s) found[/bold red] in {len(collection.errors) + len(collection)} documents")
        raise typer.Exit(1)
    console.print(f"[green]✓ {len(collection)} posts OK[/green]")


@app.command()
def new(
    title: Annotated[str, typer.Argument(help="Title of the new post")],
    site_root: SiteRoot = Path(),
    layout: Annotated[str | None, typer.Option("--layout", "-l", help="Layout name (default: site default)")] = None,
    categories: Annotated[
        list[str] | None,
        typer.Option("--category", "-c", help="Category; repeat for several"),
    ] = None,
    date: Annotated[
        str | None,
        typer.Option("--date", "-d", help="Publication date, e.g. '2025-01-01 10:00 +0200' (default: now)"),
    ] = None,
) -> None:
    """Create a new post skeleton in the posts directory."""
    site_root = site_root.expanduser().resolve()
    with handle_cli_errors():
        config = load_site_config(site_root)

    when: datetime | None = None
    if date is not None:
        try:
            when = parse_datetime_flexible(date, default_timezone=config.tzinfo)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--date") from exc

    with handle_cli_errors():
        path = write_new_post(
            config.resolve(site_root).source_dir,
            title,
            layout=layout or config.default_layout or "post",
            categories=categories or [],
            date=when,
        )
    console.print(f"Created {escape(str(path))}")
