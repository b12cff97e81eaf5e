"""CLI commands for publishing packages to, and deleting them from, a gallery.

``gallery-publisher push`` uploads a package archive (optionally unlisting
it right after) and ``gallery-publisher delete`` retracts a version.  Options
fall back to the ``GALLERY_*`` environment settings.
"""

from __future__ import annotations

from importlib.metadata import version
from pathlib import Path  # noqa: TC003 - Typer needs Path at runtime

import typer
from loguru import logger
from tqdm import tqdm

from gallery_publisher.core.config import Settings, get_settings
from gallery_publisher.lib.gallery.endpoint import GalleryEndpoint
from gallery_publisher.lib.gallery.errors import ConfigurationError, NetworkError, PackageMetadataError
from gallery_publisher.lib.gallery.observer import Completed, EventRecorder, Failed, ProgressEvent, Started
from gallery_publisher.lib.gallery.package import read_package_identity
from gallery_publisher.lib.gallery.publisher import GalleryPublisher
from gallery_publisher.lib.gallery.types import PackageIdentity


def _get_publisher_version() -> str:
    """Get the installed project version."""
    try:
        return version("gallery-publisher")
    except Exception:
        return "unknown"


def _default_user_agent() -> str:
    return f"gallery-publisher/{_get_publisher_version()}"


class _EchoObserver(EventRecorder):
    """Records events and echoes them to the terminal."""

    def __init__(self, label: str) -> None:
        super().__init__()
        self.label = label

    def on_event(self, event: ProgressEvent) -> None:
        super().on_event(event)
        if isinstance(event, Started):
            typer.echo(f"{self.label}...")
        elif isinstance(event, Completed):
            typer.echo(f"{self.label}: done.")
        elif isinstance(event, Failed):
            typer.echo(f"Error: {event.error}")


def _resolve_api_key(api_key: str | None, settings: Settings) -> str:
    api_key = api_key or settings.gallery_api_key
    if not api_key:
        typer.echo("Error: No API key given. Pass --api-key or set GALLERY_API_KEY.")
        raise typer.Exit(code=1)
    return api_key


def _build_endpoint(
    settings: Settings,
    source: str | None,
    user_agent: str | None,
    timeout: float | None,
) -> GalleryEndpoint:
    try:
        return GalleryEndpoint(
            source or settings.gallery_source,
            user_agent=user_agent or settings.gallery_user_agent or _default_user_agent(),
            timeout=timeout or settings.gallery_timeout,
        )
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc


def _resolve_identity(package_path: Path, package_id: str | None, package_version: str | None) -> PackageIdentity:
    if package_id and package_version:
        return PackageIdentity(id=package_id, version=package_version)
    if package_id or package_version:
        raise typer.BadParameter("--id and --version must be given together")
    try:
        return read_package_identity(package_path)
    except PackageMetadataError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1) from exc


def push(
    package_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Package archive"),
    source: str | None = typer.Option(None, "--source", "-s", help="Gallery source URL (default: GALLERY_SOURCE)"),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="Gallery API key (default: GALLERY_API_KEY)"),
    unlisted: bool = typer.Option(False, "--unlisted", help="Unlist the version right after publishing"),
    package_id: str | None = typer.Option(None, "--id", help="Package id (default: read from the archive)"),
    package_version: str | None = typer.Option(
        None, "--version", help="Package version (default: read from the archive)"
    ),
    user_agent: str | None = typer.Option(None, "--user-agent", help="User-Agent header value"),
    timeout: float | None = typer.Option(None, "--timeout", help="Read/write timeout in seconds", min=1),
) -> None:
    """Publish a package archive to the gallery."""
    settings = get_settings()
    key = _resolve_api_key(api_key, settings)
    identity = _resolve_identity(package_path, package_id, package_version)
    observer = _EchoObserver(f"Publishing {identity}")

    with _build_endpoint(settings, source, user_agent, timeout) as endpoint:
        publisher = GalleryPublisher(endpoint)
        size = package_path.stat().st_size
        try:
            with (
                package_path.open("rb") as f,
                tqdm.wrapattr(f, "read", total=size, desc=package_path.name, leave=True) as stream,
            ):
                successful = publisher.publish(key, stream, identity, unlisted, observer)
        except NetworkError as exc:
            logger.error("Publish failed: {}", exc)
            typer.echo(f"Error: Could not reach {endpoint.source}: {exc}")
            raise typer.Exit(code=1) from exc

    if not successful:
        raise typer.Exit(code=1)
    typer.echo(f"Published {identity} to {endpoint.source}" + (" (unlisted)" if unlisted else ""))


def delete(
    package_id: str = typer.Argument(..., help="Package id"),
    package_version: str = typer.Argument(..., help="Package version"),
    source: str | None = typer.Option(None, "--source", "-s", help="Gallery source URL (default: GALLERY_SOURCE)"),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="Gallery API key (default: GALLERY_API_KEY)"),
    user_agent: str | None = typer.Option(None, "--user-agent", help="User-Agent header value"),
) -> None:
    """Delete (unlist) a package version from the gallery."""
    settings = get_settings()
    key = _resolve_api_key(api_key, settings)
    try:
        identity = PackageIdentity(id=package_id, version=package_version)
    except ValueError as exc:
        typer.echo(f"Error: Package {exc}")
        raise typer.Exit(code=1) from exc
    observer = _EchoObserver(f"Deleting {identity}")

    with _build_endpoint(settings, source, user_agent, None) as endpoint:
        publisher = GalleryPublisher(endpoint)
        try:
            successful = publisher.retract(key, identity.id, identity.version, observer)
        except NetworkError as exc:
            logger.error("Delete failed: {}", exc)
            typer.echo(f"Error: Could not reach {endpoint.source}: {exc}")
            raise typer.Exit(code=1) from exc

    if not successful:
        raise typer.Exit(code=1)
