"""Byte source adapters.

The scanner pulls from anything with a ``read(size) -> bytes`` method. These
helpers adapt the other shapes log output usually arrives in: an in-memory
``bytes``/``str`` value, a text stream wrapping a binary one (``sys.stdin``),
or an iterable of chunks such as a subprocess pipe read in pieces.

Example:
    >>> source = as_byte_source([b"commit ab", b"c123\\n"])
    >>> source.read(4096)
    b'commit ab'

"""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from typing import Any

from commitscan.protocols import ByteSource


class ChunkedByteSource:
    """ByteSource over an iterable of byte chunks.

    Chunks are returned in order, split when a chunk is larger than the
    requested size. Empty chunks are skipped; exhaustion of the iterable is
    end of input.

    """

    __slots__ = ("_chunks", "_pending")

    def __init__(self, chunks: Iterable[bytes | bytearray]) -> None:
        self._chunks: Iterator[bytes | bytearray] = iter(chunks)
        self._pending = b""

    def read(self, size: int = -1, /) -> bytes:
        while not self._pending:
            chunk = next(self._chunks, None)
            if chunk is None:
                return b""
            self._pending = bytes(chunk)

        pending = self._pending
        if size < 0 or size >= len(pending):
            self._pending = b""
            return pending
        self._pending = pending[size:]
        return pending[:size]


def as_byte_source(source: Any, *, encoding: str = "utf-8") -> ByteSource:
    """Adapt ``source`` to the ByteSource protocol.

    Args:
        source: ``bytes``-like value, ``str``, binary or text stream, or an
            iterable of byte chunks
        encoding: Encoding for ``str`` input

    Returns:
        A ByteSource reading the same bytes

    Raises:
        TypeError: If ``source`` has none of the supported shapes
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if isinstance(source, str):
        return io.BytesIO(source.encode(encoding))
    if isinstance(source, io.TextIOBase):
        buffer = getattr(source, "buffer", None)
        if buffer is None:
            raise TypeError(f"text stream {source!r} has no underlying binary buffer")
        return buffer
    if hasattr(source, "read"):
        return source
    if isinstance(source, Iterable):
        return ChunkedByteSource(source)
    raise TypeError(f"cannot read bytes from {type(source).__name__}")
