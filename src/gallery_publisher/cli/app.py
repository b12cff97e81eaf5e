"""Typer CLI root application."""

import typer
from pydantic import ValidationError

from gallery_publisher.core.config import get_settings
from gallery_publisher.core.logging import setup_logging

app = typer.Typer(name="gallery-publisher", help="Publish packages to a package gallery")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    try:
        settings = get_settings()
    except ValidationError as exc:
        typer.echo(f"Error: Invalid configuration: {exc}")
        raise typer.Exit(code=1) from exc
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_outcomes=settings.log_json)


def _register_subcommands() -> None:
    """Register all CLI commands."""
    from gallery_publisher.cli.gallery_cmd import delete, push

    app.command("push")(push)
    app.command("delete")(delete)


_register_subcommands()
