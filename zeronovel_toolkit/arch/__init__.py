"""ZeroNovel ARCH archive support."""

from .filetypes import FILE_TYPE_MAP, get_file_type
from .header import ARCH_SIGNATURE, ArchEntry, ArchHeader
from .reader import (
    ArchArchive,
    ArchFormat,
    check_placement,
    decode_record,
    open_archive,
    read_header,
    read_index,
)

__all__ = [
    "ARCH_SIGNATURE",
    "FILE_TYPE_MAP",
    "ArchArchive",
    "ArchEntry",
    "ArchFormat",
    "ArchHeader",
    "check_placement",
    "decode_record",
    "get_file_type",
    "open_archive",
    "read_header",
    "read_index",
]
