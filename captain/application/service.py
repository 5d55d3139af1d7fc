"""
The archive service, containing the fetch workflows an image build relies on.

It only talks to the ResourceResolver port, so it is independent of how
resources are cached, verified or transferred.
"""

import gzip
import logging
import shutil
from pathlib import Path
from typing import Iterable, Iterator, List

from .domain import ArchiveCoordinate, Package, ResourceResolver
from .manifest import parse_manifest, split_stanzas

logger = logging.getLogger(__name__)

PACKAGES_INDEX = "Packages.gz"
INSTALLER_FILES = ("vmlinuz", "initrd.gz")


class ArchiveService:
    """Fetches package metadata, packages and installer files from a mirror."""

    def __init__(self, resolver: ResourceResolver):
        """Initializes the service with the resolver port."""
        self.logger = logging.getLogger(self.__class__.__name__)
        self.resolver = resolver

    def packages(self, coordinate: ArchiveCoordinate) -> Iterator[Package]:
        """
        Yields every package listed in the coordinate's Packages index.

        Args:
            coordinate: The mirror, codename, architecture and component.

        Raises:
            ChecksumNotFoundError: If the Release file does not list the index.
            DecompressionError: If the index is not valid gzip.
        """

        self.logger.info(
            f"Reading {coordinate.component} packages of {coordinate.codename} "
            f"({coordinate.architecture}) from {coordinate.mirror}..."
        )

        index = self.resolver.component_file(coordinate, PACKAGES_INDEX)
        for stanza in split_stanzas(index.gunzipped()):
            yield parse_manifest(
                coordinate.mirror, coordinate.codename, coordinate.component, stanza
            )

    def copy_package_to(self, package: Package, directory: Path) -> Path:
        """Downloads a package's file to directory/<filename>."""
        resource = self.resolver.package_file(
            package.mirror, package.filename, package.md5sum
        )
        return resource.copy_to(directory, package.filename)

    def copy_installer_to(
        self, coordinate: ArchiveCoordinate, directory: Path
    ) -> List[Path]:
        """Copies the CD installer kernel and initrd into directory/install/."""
        copied = []
        for name in INSTALLER_FILES:
            resource = self.resolver.installer_file(
                coordinate.mirror,
                coordinate.codename,
                coordinate.architecture,
                "cdrom",
                name,
            )
            copied.append(resource.copy_to(directory, "install", name))

        self.logger.info(f"Copied installer files to {Path(directory) / 'install'}")
        return copied

    def write_index(self, packages: Iterable[Package], destination: Path) -> Path:
        """
        Writes the manifests of packages as a Packages index.

        A gzip-compressed copy is written beside it as Packages.gz.

        Returns:
            The path of the uncompressed index.
        """

        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)

        count = 0
        with open(destination, "w", encoding="utf-8") as f:
            for package in packages:
                package.copy_manifest_to(f)
                count += 1

        with open(destination, "rb") as plain, gzip.open(
            destination.with_name(destination.name + ".gz"), "wb"
        ) as compressed:
            shutil.copyfileobj(plain, compressed)

        logger.info(f"Wrote {count} package manifests to {destination}")
        return destination
