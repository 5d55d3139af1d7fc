"""Chunked byte transfer between file-like objects."""

CHUNK_SIZE = 16384


def copy_stream(source, destination, chunk_size: int = CHUNK_SIZE):
    """
    Copy all bytes from source to destination in fixed-size chunks.

    A truncatable destination is emptied first so a shorter payload never
    leaves stale trailing bytes behind. Both streams are rewound on exit,
    whether the copy succeeded or not.
    """
    try:
        if hasattr(destination, "truncate"):
            destination.seek(0)
            destination.truncate(0)
        while chunk := source.read(chunk_size):
            destination.write(chunk)
    finally:
        source.seek(0)
        if hasattr(destination, "seek"):
            destination.seek(0)
