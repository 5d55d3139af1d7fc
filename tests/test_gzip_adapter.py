import gzip
import hashlib

import pytest

from captain.application.domain import ArchiveCoordinate
from captain.application.exceptions import DecompressionError


@pytest.fixture
def uri(mirror_url):
    return f"{mirror_url}/dists/jaunty/main/binary-i386/Packages.gz"


def test_decompressed_lines_are_yielded_in_order(mirror, resolver, uri):
    mirror.serve(uri, gzip.compress(b"a\nb\nc\n"))

    assert list(resolver.resource(uri).gunzipped()) == ["a", "b", "c"]


def test_gunzipped_reads_through_the_cache(mirror, resolver, uri):
    mirror.serve(uri, gzip.compress(b"a\nb\nc\n"))
    resource = resolver.resource(uri)

    list(resource.gunzipped().each_line())
    list(resource.gunzipped().each_line())

    assert mirror.hits(uri) == 1


def test_corrupt_payload_fails_during_iteration(mirror, resolver, uri):
    mirror.serve(uri, b"this is not gzip data")

    lines = resolver.resource(uri).gunzipped().each_line()

    with pytest.raises(DecompressionError):
        list(lines)


def test_truncated_payload_fails_after_open(mirror, resolver, uri):
    payload = gzip.compress(b"line\n" * 1000)
    mirror.serve(uri, payload[: len(payload) // 2])

    adapter = resolver.resource(uri).gunzipped()

    with pytest.raises(DecompressionError):
        for _ in adapter:
            pass


def test_transfer_encoding_is_not_decoded_before_verification(mirror, resolver, mirror_url, uri):
    payload = gzip.compress(b"Package: foo\n")
    mirror.serve(
        f"{mirror_url}/dists/jaunty/Release",
        f"MD5Sum:\n {hashlib.md5(payload).hexdigest()} {len(payload)} main/binary-i386/Packages.gz\n".encode(),
    )
    mirror.serve(uri, payload, headers={"Content-Encoding": "gzip"})
    coordinate = ArchiveCoordinate(
        mirror=mirror_url, codename="jaunty", architecture="i386", component="main"
    )

    resource = resolver.component_file(coordinate, "Packages.gz")

    assert list(resource.gunzipped()) == ["Package: foo"]
    assert mirror.hits(uri) == 1
    assert resolver.cache.path_for(uri).read_bytes() == payload
