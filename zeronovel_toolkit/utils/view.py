"""Random-access views over archive data."""

import mmap
from pathlib import Path
from typing import BinaryIO, Optional, Union

from loguru import logger

from .streams import RangeStream


class ArcView:
    """Read-only, randomly addressable archive bytes.

    Reads are slices of an immutable buffer (``bytes`` or a read-only
    ``mmap``), so streams opened on the same view never share a file
    position and may be read independently.
    """

    def __init__(self, data: Union[bytes, bytearray, mmap.mmap], name: str = "<memory>"):
        if isinstance(data, bytearray):
            data = bytes(data)
        self._data = data
        self._file: Optional[BinaryIO] = None
        self.name = name

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "ArcView":
        """Map a file on disk into a view."""
        path = Path(path)
        f = open(path, "rb")
        try:
            size = path.stat().st_size
            # mmap refuses zero-length files
            if size == 0:
                data = b""
            else:
                data = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)
        except Exception:
            f.close()
            raise

        view = cls(data, name=str(path))
        view._file = f
        logger.debug("Mapped {} ({} bytes)", path, size)
        return view

    def __enter__(self) -> "ArcView":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._data)

    @property
    def max_offset(self) -> int:
        """Total length of the archive in bytes."""
        return len(self._data)

    def read_at(self, offset: int, length: int) -> bytes:
        """Read exactly ``length`` bytes starting at ``offset``."""
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise EOFError(
                f"Range @0x{offset:X} + {length} is outside {len(self._data)} bytes"
            )
        return bytes(self._data[offset : offset + length])

    def create_stream(self, offset: int, length: int) -> RangeStream:
        """Open ``[offset, offset + length)`` as a seekable binary stream."""
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise EOFError(
                f"Range @0x{offset:X} + {length} is outside {len(self._data)} bytes"
            )
        return RangeStream(self, offset, length)

    def close(self) -> None:
        if isinstance(self._data, mmap.mmap):
            self._data.close()
        self._data = b""
        if self._file:
            self._file.close()
            self._file = None
