"""Byte streams for archive entries.

``RangeStream`` exposes a window of an archive view as a file object.
``ZlibInputStream`` inflates another stream on demand: nothing is
decompressed until the caller reads, and only as much as the caller asks for.
"""

import io
import zlib
from typing import TYPE_CHECKING, BinaryIO

from ..exceptions import DecompressionFailure

if TYPE_CHECKING:
    from .view import ArcView

CHUNK_SIZE = 64 * 1024


class RangeStream(io.RawIOBase):
    """Seekable read-only stream over ``[offset, offset + length)`` of a view."""

    def __init__(self, view: "ArcView", offset: int, length: int):
        super().__init__()
        self._view = view
        self._offset = offset
        self._length = length
        self._pos = 0

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def tell(self) -> int:
        return self._pos

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = self._length + offset
        else:
            raise ValueError(f"Invalid whence: {whence}")
        if pos < 0:
            raise ValueError(f"Negative seek position {pos}")
        self._pos = pos
        return pos

    def readinto(self, b) -> int:
        count = min(len(b), self._length - self._pos)
        if count <= 0:
            return 0
        data = self._view.read_at(self._offset + self._pos, count)
        b[:count] = data
        self._pos += count
        return count


class ZlibInputStream(io.RawIOBase):
    """Read-only stream yielding the inflated contents of a zlib stream."""

    def __init__(self, raw: BinaryIO, chunk_size: int = CHUNK_SIZE):
        super().__init__()
        self._raw = raw
        self._chunk_size = chunk_size
        self._decompressor = zlib.decompressobj()

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        size = len(b)
        if size == 0:
            return 0

        while not self._decompressor.eof:
            data = self._decompressor.unconsumed_tail
            if not data:
                data = self._raw.read(self._chunk_size)
                if not data:
                    raise DecompressionFailure("Compressed data ended before the end of the zlib stream")

            try:
                out = self._decompressor.decompress(data, size)
            except zlib.error as e:
                raise DecompressionFailure(f"Invalid compressed data: {e}") from e

            if out:
                b[: len(out)] = out
                return len(out)

        return 0

    def close(self) -> None:
        if not self.closed:
            self._raw.close()
        super().close()


def open_zlib_stream(raw: BinaryIO) -> io.BufferedReader:
    """Wrap ``raw`` so that reads return decompressed bytes."""
    return io.BufferedReader(ZlibInputStream(raw))
