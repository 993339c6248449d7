from __future__ import annotations

from typing import BinaryIO


def read_up_to(stream: BinaryIO, size: int) -> bytes:
    """
    Read ``size`` bytes, looping over short reads.

    Returns fewer bytes only when the stream is exhausted; b"" means end-of-stream
    was hit before the first byte.
    """
    size = int(size)
    if size <= 0:
        return b""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_remaining(stream: BinaryIO, *, chunk_size: int = 1 << 16) -> bytes:
    """Read until end-of-stream in fixed-size chunks; short reads are not taken as the end."""
    chunks = []
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        chunks.append(chunk)
    return b"".join(chunks)


def skip_bytes(stream: BinaryIO, size: int, *, chunk_size: int = 1 << 16) -> int:
    """Consume up to ``size`` bytes from a forward-only stream; returns the count skipped."""
    skipped = 0
    while skipped < size:
        chunk = stream.read(min(chunk_size, size - skipped))
        if not chunk:
            break
        skipped += len(chunk)
    return skipped
