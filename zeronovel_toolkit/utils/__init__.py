"""Shared binary, view and stream helpers."""

from .binary import BinaryReader, read_fixed_cstring, read_u32_le
from .streams import RangeStream, ZlibInputStream, open_zlib_stream
from .view import ArcView

__all__ = [
    "ArcView",
    "BinaryReader",
    "RangeStream",
    "ZlibInputStream",
    "open_zlib_stream",
    "read_fixed_cstring",
    "read_u32_le",
]
