"""ARCH header and index record structures."""

from dataclasses import dataclass

# "ARCH" read as a little-endian u32
ARCH_SIGNATURE = 0x48435241

HEADER_SIZE = 64
HEADER_RESERVED_SIZE = 44

# Index record layout (292 bytes per record, little-endian)
RECORD_SIZE = 292
RECORD_NAME_SIZE = 260
RECORD_OFFSET = 260
RECORD_SIZE_FIELD = 264
RECORD_COMPRESSED_SIZE = 268
RECORD_COMPRESSION_TYPE = 288

COMPRESSION_ZLIB = 1


@dataclass(frozen=True)
class ArchHeader:
    """ARCH archive header (64 bytes)."""

    magic: int  # 4 bytes: 0x48435241 ("ARCH")
    version: int  # 4 bytes: not checked
    file_count: int  # 4 bytes: number of index records
    index_offset: int  # 4 bytes: absolute offset of the first record
    flags: int  # 4 bytes: reserved
    reserved: bytes  # 44 bytes: padding

    @property
    def index_size(self) -> int:
        return self.file_count * RECORD_SIZE


@dataclass(frozen=True)
class ArchEntry:
    """A decoded index record."""

    name: str
    offset: int
    stored_size: int  # Bytes occupied in the archive
    logical_size: int  # Size after decompression
    is_compressed: bool
    semantic_type: str = "file"
    compression_type: int = 0
