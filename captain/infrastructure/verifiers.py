"""
Infrastructure adapters implementing the Verifier port.
"""

import hashlib
import logging
from typing import BinaryIO, Optional

from ..application.domain import Verifier
from ..application.exceptions import ConfigurationError, VerificationError

from .streams import copy_stream


class _DigestSink:
    """Adapts a hashlib object to the write() interface copy_stream expects."""

    def __init__(self, digest):
        self.digest = digest

    def write(self, chunk: bytes):
        self.digest.update(chunk)


class ContentVerifier(Verifier):
    """Accepts any stream holding at least one byte."""

    def verify(self, stream: BinaryIO):
        try:
            if not stream.read(1):
                raise VerificationError("No content")
        finally:
            stream.seek(0)


class ChecksumVerifier(Verifier):
    """An adapter that implements the Verifier port using MD5."""

    def __init__(self, expected: Optional[str]):
        """
        Initializes the verifier.

        Raises:
            ConfigurationError: If no expected digest is given.
        """

        if not expected:
            raise ConfigurationError("No expected MD5 checksum given")

        self.logger = logging.getLogger(self.__class__.__name__)
        self.expected = expected

    def _calculate_md5(self, stream: BinaryIO) -> str:
        """Hashes the whole stream and leaves it rewound."""
        sink = _DigestSink(hashlib.md5())
        copy_stream(stream, sink)
        return sink.digest.hexdigest()

    def verify(self, stream: BinaryIO):
        """
        Checks the stream's MD5 digest against the expected value.

        Raises:
            VerificationError: If the digests differ.
        """

        actual = self._calculate_md5(stream)

        if actual != self.expected:
            raise VerificationError(
                f"MD5 checksum mismatch: expected {self.expected} "
                f"but was {actual}"
            )

        self.logger.debug(f"Checksum {actual} verified.")
