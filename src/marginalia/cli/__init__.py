"""Entry point for the Typer-based CLI."""

from marginalia.cli.main import app


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
