"""Read package identity from a package archive.

A package archive is a zip file with a ``<id>.nuspec`` XML manifest at its
root.  Only ``metadata/id`` and ``metadata/version`` are read; the manifest
namespace varies between schema versions and is ignored.
"""

import zipfile
from pathlib import Path
from xml.etree import ElementTree

from loguru import logger

from gallery_publisher.lib.gallery.errors import PackageMetadataError
from gallery_publisher.lib.gallery.types import PackageIdentity


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _find_child_text(element: ElementTree.Element, name: str) -> str | None:
    for child in element:
        if _local_name(child.tag) == name:
            return (child.text or "").strip() or None
    return None


def parse_nuspec(content: bytes) -> PackageIdentity:
    """Parse a package manifest document.

    Args:
        content: Raw XML bytes of the manifest.

    Returns:
        The package id and version.

    Raises:
        PackageMetadataError: If the XML is invalid or id/version is missing.
    """
    try:
        root = ElementTree.fromstring(content)
    except ElementTree.ParseError as exc:
        msg = f"Invalid package manifest: {exc}"
        raise PackageMetadataError(msg) from exc

    metadata = next((child for child in root if _local_name(child.tag) == "metadata"), None)
    if metadata is None:
        msg = "Package manifest has no <metadata> element"
        raise PackageMetadataError(msg)

    package_id = _find_child_text(metadata, "id")
    version = _find_child_text(metadata, "version")
    if package_id is None or version is None:
        msg = f"Package manifest is missing id or version (id={package_id!r}, version={version!r})"
        raise PackageMetadataError(msg)
    return PackageIdentity(id=package_id, version=version)


def read_package_identity(package_path: Path) -> PackageIdentity:
    """Read the id and version of a package archive.

    Args:
        package_path: Path to the package archive.

    Returns:
        The package id and version.

    Raises:
        PackageMetadataError: If the archive is not a zip file or has no
            valid root-level manifest.
    """
    try:
        with zipfile.ZipFile(package_path, "r") as zf:
            manifests = [name for name in zf.namelist() if "/" not in name and name.lower().endswith(".nuspec")]
            if not manifests:
                msg = f"No .nuspec manifest found in {package_path.name}"
                raise PackageMetadataError(msg)
            if len(manifests) > 1:
                logger.warning("Multiple manifests in {}, using first: {}", package_path.name, manifests[0])
            content = zf.read(manifests[0])
    except zipfile.BadZipFile as exc:
        msg = f"{package_path.name} is not a valid package archive"
        raise PackageMetadataError(msg) from exc

    return parse_nuspec(content)
