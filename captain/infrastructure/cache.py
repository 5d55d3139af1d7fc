"""
Persistent, URI-keyed byte cache on local disk.

Entries live at <root>/<host><path> so separate runs addressing the same URI
share one file. Nothing here locks an entry: two processes fetching the
same URI at once can interleave their writes to it.
"""

import contextlib
import logging
from pathlib import Path
from typing import BinaryIO, Generator, Iterator, Union

import httpx

from .streams import copy_stream

logger = logging.getLogger(__name__)


class CacheStream:
    """A cache entry's open file, extended with the ability to be repopulated."""

    def __init__(self, file: BinaryIO, path: Path):
        self._file = file
        self.path = path

    def read(self, size: int = -1) -> bytes:
        return self._file.read(size)

    def readline(self, size: int = -1) -> bytes:
        return self._file.readline(size)

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._file)

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._file.seek(offset, whence)

    def tell(self) -> int:
        return self._file.tell()

    def rewind(self):
        self._file.seek(0)

    def populate(self, source: BinaryIO):
        """Replaces the entry's content with all bytes from source."""
        copy_stream(source, self._file)
        self._file.flush()


class PersistentCache:
    """A disk-backed byte store keyed by resource URI."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    def path_for(self, uri: str) -> Path:
        """Derives the entry path from the URI's host and path, unescaped."""
        url = httpx.URL(uri)
        return self.root / f"{url.host}{url.path}"

    @contextlib.contextmanager
    def open(self, uri: str) -> Generator[CacheStream, None, None]:
        """
        Opens the cache entry for a URI read-write, creating it empty if needed.

        The file handle is released when the block exits, on success or error.
        """
        path = self.path_for(uri)
        if path.exists():
            mode = "r+b"
        else:
            logger.debug(f"Creating cache entry {path}")
            path.parent.mkdir(parents=True, exist_ok=True)
            mode = "w+b"

        with open(path, mode) as f:
            yield CacheStream(f, path)
