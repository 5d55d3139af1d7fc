"""
This module defines the core domain models for the application.

These classes represent the pure, technology-agnostic entities and the
ports (interfaces) that the archive fetch logic operates on.
"""

import dataclasses
from pathlib import Path

from abc import ABC, abstractmethod
from typing import BinaryIO, ContextManager, FrozenSet, Iterable, Iterator, Optional, TextIO


# --- Domain Models ---

@dataclasses.dataclass(frozen=True)
class ArchiveCoordinate:
    """A location within a Debian-style repository tree."""

    mirror: str
    codename: str
    architecture: str
    component: str


@dataclasses.dataclass(frozen=True)
class Package:
    """
    A domain model for one package entry of a Packages index.

    `dependencies` and `recommends` hold names only. Alternatives ("a | b")
    and conjunctions ("a, b") are flattened into the same set, so whether a
    group meant "any of" or "all of" is not recoverable from this model.
    """

    name: Optional[str]
    mirror: str
    codename: str
    component: str
    filename: Optional[str]
    md5sum: Optional[str]
    dependencies: FrozenSet[str]
    recommends: FrozenSet[str]
    tasks: FrozenSet[str]
    manifest: str

    def copy_manifest_to(self, sink: TextIO):
        """Writes the original stanza followed by one blank separator line."""
        sink.write(self.manifest.strip() + "\n\n")


# --- Ports (Interfaces) ---

class Verifier(ABC):
    """A port for any content validator."""

    @abstractmethod
    def verify(self, stream: BinaryIO):
        """
        Validates the full content of a seekable stream.
        Raises VerificationError on failure and leaves the stream rewound.
        """
        pass


class ProgressReporter(ABC):
    """A port notified of transfer progress while a resource downloads."""

    @abstractmethod
    def total_size_is(self, uri: str, size: Optional[int]):
        """Called once per transfer; size is None when the server omits it."""
        pass

    @abstractmethod
    def downloaded_size_is(self, uri: str, size: int):
        """Called repeatedly with the cumulative number of bytes received."""
        pass

    @abstractmethod
    def finished(self, uri: str):
        """Called when a transfer ends, successfully or not."""
        pass


class Resource(ABC):
    """A port for remote content that is verified before it is exposed."""

    @abstractmethod
    def open_stream(self) -> ContextManager[BinaryIO]:
        """Yields a verified, rewound byte stream of the content."""
        pass

    @abstractmethod
    def copy_to(self, *paths) -> Path:
        """Copies the verified content to a local file."""
        pass

    @abstractmethod
    def each_line(self) -> Iterator[str]:
        """Lazily yields the content as text lines."""
        pass

    @abstractmethod
    def gunzipped(self) -> Iterable[str]:
        """Returns a view yielding the decompressed lines of gzip content."""
        pass


class ResourceResolver(ABC):
    """A port that turns archive locations into checksum-verified resources."""

    @abstractmethod
    def component_file(self, coordinate: ArchiveCoordinate, *rest: str) -> Resource:
        """Resolves a file under dists/<codename>/<component>/binary-<arch>/."""
        pass

    @abstractmethod
    def installer_file(
        self, mirror: str, codename: str, architecture: str, *rest: str
    ) -> Resource:
        """Resolves a file under the installer images directory."""
        pass

    @abstractmethod
    def package_file(
        self, mirror: str, filename: Optional[str], md5sum: Optional[str]
    ) -> Resource:
        """Resolves a package file relative to the mirror root."""
        pass
