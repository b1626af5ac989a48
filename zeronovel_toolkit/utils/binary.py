"""Binary reading utilities for little-endian ARCH data."""

import struct
from io import BytesIO
from typing import BinaryIO, Union


class BinaryReader:
    """Helper for reading little-endian binary data (x86 engine format)."""

    def __init__(self, data: Union[bytes, BinaryIO]):
        if isinstance(data, (bytes, bytearray)):
            self._stream = BytesIO(data)
        else:
            self._stream = data

    def read_bytes(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) < size:
            raise EOFError(f"Expected {size} bytes, got {len(data)}")
        return data

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]


def read_u32_le(data: bytes, offset: int = 0) -> int:
    """Read a little-endian 32-bit unsigned integer from bytes."""
    return struct.unpack_from("<I", data, offset)[0]


def read_fixed_cstring(data: bytes, length: int, encoding: str = "utf-8") -> str:
    """Decode a NUL-terminated string from a fixed-width field.

    The first NUL inside ``data[:length]`` ends the string. A field with no
    NUL at all is taken whole, so a name may fill every byte of its slot.
    """
    field = bytes(data[:length])
    end = field.find(b"\x00")
    if end >= 0:
        field = field[:end]
    return field.decode(encoding, errors="replace")
