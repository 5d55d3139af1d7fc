"""Line-oriented gzip decompression over a verified Resource."""

import gzip
import io
import zlib
from typing import Iterator

from ..application.domain import Resource
from ..application.exceptions import DecompressionError


class GunzipAdapter:
    """
    Yields the decompressed text lines of a gzip-encoded resource.

    Reading goes through the resource's own open_stream(), so the usual
    cache, verification and retry rules apply to the compressed bytes.
    """

    def __init__(self, resource: Resource):
        self.resource = resource

    def each_line(self) -> Iterator[str]:
        """
        Lazily yields decompressed lines without their trailing newline.

        Raises:
            DecompressionError: When iteration reaches corrupt or non-gzip data.
        """
        with self.resource.open_stream() as stream:
            try:
                with gzip.GzipFile(fileobj=stream, mode="rb") as gz:
                    text = io.TextIOWrapper(gz, encoding="utf-8", errors="replace")
                    for line in text:
                        yield line.rstrip("\n")
            except (gzip.BadGzipFile, EOFError, zlib.error) as e:
                raise DecompressionError(
                    f"Failed to decompress {self.resource!r}: {e}"
                ) from e

    def __iter__(self) -> Iterator[str]:
        return self.each_line()
