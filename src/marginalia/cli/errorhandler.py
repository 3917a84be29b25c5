"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.markup import escape

from marginalia.exceptions import ConfigLoadError, LayoutNotFoundError, ParseError
from marginalia.logging_setup import console


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Turn marginalia errors into readable messages and exit code 1.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except (KeyboardInterrupt, SystemExit, typer.Exit):
        raise
    except ConfigLoadError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration error:[/bold red] {escape(e.reason)}", highlight=False)
        console.print(f"  in {escape(e.path)}", highlight=False)
        raise typer.Exit(1) from e
    except ParseError as e:
        if debug:
            raise
        console.print(f"[bold red]Invalid post:[/bold red] {escape(str(e))}", highlight=False)
        console.print("Run with [bold]--lenient[/bold] to skip malformed posts instead of aborting.")
        raise typer.Exit(1) from e
    except LayoutNotFoundError as e:
        if debug:
            raise
        console.print(f"[bold red]Missing layout:[/bold red] {escape(str(e))}", highlight=False)
        console.print("Add it to the layouts directory or change the post's 'layout' key.")
        raise typer.Exit(1) from e
    except OSError as e:
        if debug:
            raise
        console.print(f"[bold red]File system error:[/bold red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except Exception as e:
        if debug:
            raise
        console.print(f"[bold red]Unexpected error:[/bold red] {escape(f'{type(e).__name__}: {e}')}", highlight=False)
        console.print("[dim]Run with [bold]--debug[/bold] for the full traceback.[/dim]")
        raise typer.Exit(1) from e
