"""
Resolution of archive paths into checksum-verified resources.

Checksums are chained from the Release file: it is fetched with a content
check only, and the digests it lists are then enforced on everything
resolved through it. The Release signature is NOT verified, so the whole
chain is only as trustworthy as the mirror and the transport.
"""

import contextlib
import re
from typing import Optional

import httpx

from ..application.domain import ArchiveCoordinate, ProgressReporter, ResourceResolver, Verifier
from ..application.exceptions import ChecksumNotFoundError, ConfigurationError

from .base_client import BaseClient
from .cache import PersistentCache
from .remote import RemoteResource
from .verifiers import ChecksumVerifier


class ArchiveIndexResolver(BaseClient, ResourceResolver):
    """Builds RemoteResources for files of a Debian-style mirror."""

    def __init__(
        self,
        client: httpx.Client,
        cache: PersistentCache,
        reporter: ProgressReporter,
        timeout: Optional[float],
    ):
        """Initializes the resolver with the collaborators its resources share."""
        super().__init__(client, timeout)
        self.cache = cache
        self.reporter = reporter

    @staticmethod
    def component_uri(
        mirror: str, codename: str, component: str, architecture: str, *rest: str
    ) -> str:
        base = f"{mirror.rstrip('/')}/dists/{codename}/{component}/binary-{architecture}"
        return "/".join([base, *rest])

    @staticmethod
    def installer_uri(mirror: str, codename: str, architecture: str, *rest: str) -> str:
        base = (
            f"{mirror.rstrip('/')}/dists/{codename}/main/"
            f"installer-{architecture}/current/images"
        )
        return "/".join([base, *rest])

    def resource(self, uri: str, verifier: Optional[Verifier] = None) -> RemoteResource:
        """Creates a resource bound to this resolver's client, cache and reporter."""
        return RemoteResource(
            uri,
            verifier,
            client=self.client,
            cache=self.cache,
            reporter=self.reporter,
            timeout=self.timeout,
        )

    def release_file(self, mirror: str, codename: str) -> RemoteResource:
        """The codename's Release index, checked for presence only."""
        # TODO verify Release against Release.gpg once a keyring is configured.
        return self.resource(f"{mirror.rstrip('/')}/dists/{codename}/Release")

    def _first_digest(self, index: RemoteResource, pattern: re.Pattern, path: str) -> str:
        """Returns the first digest captured by pattern from the index's lines."""
        with contextlib.closing(index.each_line()) as lines:
            for line in lines:
                match = pattern.search(line)
                if match:
                    return match.group(1)
        raise ChecksumNotFoundError(f"No checksum for {path} in {index.uri}")

    def component_file(self, coordinate: ArchiveCoordinate, *rest: str) -> RemoteResource:
        """
        Resolves a file of a component's binary tree via the Release index.

        Args:
            coordinate: The mirror, codename, architecture and component.
            *rest: Path segments below binary-<architecture>/.

        Returns:
            A resource verified against the Release file's MD5 digest.

        Raises:
            ChecksumNotFoundError: If the Release file does not list the path.
        """

        path = "/".join(
            [coordinate.component, f"binary-{coordinate.architecture}", *rest]
        )
        pattern = re.compile(rf"^ ([0-9a-fA-F]{{32}})\s+\d+\s+{re.escape(path)}\s*$")

        release = self.release_file(coordinate.mirror, coordinate.codename)
        md5sum = self._first_digest(release, pattern, path)
        self.logger.debug(f"Release lists {path} with MD5 {md5sum}")

        uri = self.component_uri(
            coordinate.mirror,
            coordinate.codename,
            coordinate.component,
            coordinate.architecture,
            *rest,
        )
        return self.resource(uri, ChecksumVerifier(md5sum))

    def installer_file(
        self, mirror: str, codename: str, architecture: str, *rest: str
    ) -> RemoteResource:
        """
        Resolves an installer image file via the images directory's MD5SUMS.

        The first MD5SUMS line containing the joined path segments wins.

        Raises:
            ChecksumNotFoundError: If no MD5SUMS line mentions the path.
        """

        path = "/".join(rest)
        pattern = re.compile(rf"^([0-9a-fA-F]{{32}})\s.*{re.escape(path)}")

        md5sums = self.resource(
            self.installer_uri(mirror, codename, architecture, "MD5SUMS")
        )
        md5sum = self._first_digest(md5sums, pattern, path)

        uri = self.installer_uri(mirror, codename, architecture, *rest)
        return self.resource(uri, ChecksumVerifier(md5sum))

    def package_file(
        self, mirror: str, filename: Optional[str], md5sum: Optional[str]
    ) -> RemoteResource:
        """
        A package file relative to the mirror root, verified by its MD5sum.

        Raises:
            ConfigurationError: If the manifest gave no Filename or no MD5sum.
        """

        if not filename:
            raise ConfigurationError(f"No Filename given for a package on {mirror}")
        return self.resource(
            f"{mirror.rstrip('/')}/{filename}", ChecksumVerifier(md5sum)
        )
