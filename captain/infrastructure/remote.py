"""HTTP implementation of the Resource port, backed by the persistent cache."""

import contextlib
from pathlib import Path
from typing import BinaryIO, Generator, Iterator, Optional

import httpx

from ..application.domain import ProgressReporter, Resource, Verifier
from ..application.exceptions import NetworkError, VerificationError

from .base_client import BaseClient
from .cache import CacheStream, PersistentCache
from .decorators import retry_on_transient_error
from .gzip_adapter import GunzipAdapter
from .streams import CHUNK_SIZE, copy_stream
from .verifiers import ContentVerifier


class RemoteResource(BaseClient, Resource):
    """
    A file on a mirror, exposed only after its content has been verified.

    The cache entry is trusted whenever it passes verification, so content
    whose checksum is already known never touches the network twice.
    Stale or corrupt entries fail verification and are refetched.
    """

    def __init__(
        self,
        uri: str,
        verifier: Optional[Verifier] = None,
        *,
        client: httpx.Client,
        cache: PersistentCache,
        reporter: ProgressReporter,
        timeout: Optional[float],
    ):
        """Initializes the resource adapter."""
        super().__init__(client, timeout)
        self.uri = uri
        self.verifier = verifier or ContentVerifier()
        self.cache = cache
        self.reporter = reporter

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.uri!r})"

    @contextlib.contextmanager
    def _scratch_target(self, cached: CacheStream) -> Generator[Path, None, None]:
        """Provides a temporary '.part' path beside the entry and ensures cleanup."""
        part_path = cached.path.with_name(cached.path.name + ".part")
        try:
            yield part_path
        finally:
            part_path.unlink(missing_ok=True)

    def _stream_chunks(
        self, response: httpx.Response, target: BinaryIO
    ) -> Generator[int, None, None]:
        """Write the undecoded body to target, producing the running byte count."""
        for chunk in response.iter_raw(CHUNK_SIZE):
            target.write(chunk)
            yield response.num_bytes_downloaded

    def _consume_stream_with_progress(
        self, stream: Generator[int, None, None], total_size: Optional[int]
    ):
        """Consume the byte stream, reporting each step to the progress reporter."""
        self.reporter.total_size_is(self.uri, total_size)
        try:
            for downloaded in stream:
                self.reporter.downloaded_size_is(self.uri, downloaded)
        finally:
            self.reporter.finished(self.uri)

    def _stream_from_network(self, target: BinaryIO):
        """
        Manage the GET request and the streaming process.

        Raises:
            NetworkError: If the request fails at the transport or HTTP level.
        """
        try:
            with self.client.stream(
                "GET", self.uri, timeout=self.request_timeout
            ) as response:
                response.raise_for_status()
                length = response.headers.get("Content-Length", "")
                total_size = int(length) if length.isdigit() else None
                stream = self._stream_chunks(response, target)
                self._consume_stream_with_progress(stream, total_size)
        except httpx.HTTPError as e:
            raise NetworkError(f"Failed to fetch {self.uri}: {e}") from e

        target.flush()
        target.seek(0)

    def _refresh(self, cached: CacheStream):
        """Download into a scratch file and copy it into the cache once verified."""
        self.logger.info(f"Downloading {self.uri}...")
        with self._scratch_target(cached) as part_path:
            with open(part_path, "w+b") as scratch:
                self._stream_from_network(scratch)
                self.verifier.verify(scratch)
                cached.populate(scratch)
        self.logger.info(f"Finished downloading {self.uri}")

    @retry_on_transient_error
    def _acquire(self, cached: CacheStream):
        """Guarantee the cache entry holds verified content, fetching if necessary."""
        try:
            self.verifier.verify(cached)
        except VerificationError as e:
            self.logger.debug(f"Cached copy of {self.uri} rejected: {e}")
        else:
            self.logger.debug(f"Using cached copy of {self.uri}")
            return

        self._refresh(cached)

    @contextlib.contextmanager
    def open_stream(self) -> Generator[CacheStream, None, None]:
        """
        Yields the verified cache entry, rewound to its start.

        This method fulfills the Resource port contract. Acquisition is
        retried on network and verification failures; errors raised by the
        caller while consuming the stream are not.

        Raises:
            NetworkError: If every attempt failed and the last one was a
                          network failure.
            VerificationError: If every attempt failed and the last one
                               delivered bad content.
        """
        with self.cache.open(self.uri) as cached:
            self._acquire(cached)
            try:
                yield cached
            finally:
                cached.rewind()

    def copy_to(self, *paths) -> Path:
        """Copies the verified content to the joined path, creating parents."""
        path = Path(*paths)
        path.parent.mkdir(parents=True, exist_ok=True)

        with self.open_stream() as stream, open(path, "wb") as target:
            copy_stream(stream, target)

        return path

    def each_line(self) -> Iterator[str]:
        with self.open_stream() as stream:
            for line in stream:
                yield line.decode("utf-8", errors="replace").rstrip("\n")

    def __iter__(self) -> Iterator[str]:
        return self.each_line()

    def gunzipped(self) -> GunzipAdapter:
        return GunzipAdapter(self)
