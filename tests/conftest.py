"""Shared fixtures: an in-memory mirror served through httpx.MockTransport."""

from __future__ import annotations

from typing import Dict, List, Optional, Union

import httpx
import pytest

from captain.application.domain import ProgressReporter
from captain.infrastructure.cache import PersistentCache
from captain.infrastructure.index_resolver import ArchiveIndexResolver

MIRROR_URL = "http://mirror.example.org/ubuntu"

Reply = Union[bytes, int, Exception]


class RecordingReporter(ProgressReporter):
    """Collects progress notifications as tuples."""

    def __init__(self):
        self.events: List[tuple] = []

    def total_size_is(self, uri, size):
        self.events.append(("total", uri, size))

    def downloaded_size_is(self, uri, size):
        self.events.append(("downloaded", uri, size))

    def finished(self, uri):
        self.events.append(("finished", uri))


class FakeMirror:
    """Serves bodies by URL and records every request it receives."""

    def __init__(self):
        self.replies: Dict[str, List[Reply]] = {}
        self.headers: Dict[str, Dict[str, str]] = {}
        self.requests: List[str] = []

    def serve(self, url: str, *replies: Reply, headers: Optional[Dict[str, str]] = None):
        """Queue replies for a URL; the last one repeats once the others are used."""
        self.replies[url] = list(replies)
        self.headers[url] = dict(headers or {})

    def hits(self, url: str) -> int:
        return self.requests.count(url)

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append(url)

        queue = self.replies.get(url)
        if not queue:
            return httpx.Response(404)
        reply = queue.pop(0) if len(queue) > 1 else queue[0]

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, int):
            return httpx.Response(reply)
        # A streamed body reaches the client undecoded, as it would off the wire.
        headers = {"Content-Length": str(len(reply)), **self.headers[url]}
        return httpx.Response(200, headers=headers, stream=httpx.ByteStream(reply))


@pytest.fixture
def mirror_url() -> str:
    return MIRROR_URL


@pytest.fixture
def mirror() -> FakeMirror:
    return FakeMirror()


@pytest.fixture
def client(mirror):
    with httpx.Client(transport=httpx.MockTransport(mirror.handler)) as c:
        yield c


@pytest.fixture
def cache(tmp_path) -> PersistentCache:
    return PersistentCache(tmp_path / "cache")


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def resolver(client, cache, reporter) -> ArchiveIndexResolver:
    return ArchiveIndexResolver(client, cache, reporter, timeout=5)
