"""ARCH archive reader and extractor."""

from pathlib import Path, PureWindowsPath
from typing import BinaryIO, Callable, Iterator, List, Optional, Tuple, Union

from loguru import logger

from ..exceptions import DecompressionFailure, FormatRejected, InvalidPlacement, TruncatedIndex
from ..utils.binary import BinaryReader, read_fixed_cstring, read_u32_le
from ..utils.streams import open_zlib_stream
from ..utils.view import ArcView
from .filetypes import get_file_type
from .header import (
    ARCH_SIGNATURE,
    COMPRESSION_ZLIB,
    HEADER_RESERVED_SIZE,
    HEADER_SIZE,
    RECORD_COMPRESSED_SIZE,
    RECORD_COMPRESSION_TYPE,
    RECORD_NAME_SIZE,
    RECORD_OFFSET,
    RECORD_SIZE,
    RECORD_SIZE_FIELD,
    ArchEntry,
    ArchHeader,
)


def read_header(view: ArcView) -> ArchHeader:
    """Read and validate the 64-byte ARCH header.

    Raises:
        FormatRejected: the data is too short, has the wrong magic or
            declares no entries.
    """
    if view.max_offset < HEADER_SIZE:
        raise FormatRejected(f"File too small for ARCH header: {view.max_offset} bytes")

    with view.create_stream(0, HEADER_SIZE) as stream:
        reader = BinaryReader(stream)
        magic = reader.read_u32()
        version = reader.read_u32()
        file_count = reader.read_u32()
        index_offset = reader.read_u32()
        flags = reader.read_u32()
        reserved = reader.read_bytes(HEADER_RESERVED_SIZE)

    if magic != ARCH_SIGNATURE:
        raise FormatRejected(f"Invalid ARCH magic: 0x{magic:08X}, expected 0x{ARCH_SIGNATURE:08X}")
    if file_count == 0:
        raise FormatRejected("ARCH header declares no entries")

    header = ArchHeader(
        magic=magic,
        version=version,
        file_count=file_count,
        index_offset=index_offset,
        flags=flags,
        reserved=reserved,
    )
    logger.debug(
        "ARCH header: version={} entries={} index=0x{:X} flags=0x{:X}",
        version,
        file_count,
        index_offset,
        flags,
    )
    return header


def check_placement(offset: int, size: int, max_offset: int) -> bool:
    """Return True if ``[offset, offset + size)`` lies inside the archive."""
    return offset >= 0 and size >= 0 and offset + size <= max_offset


def decode_record(record: bytes) -> Optional[ArchEntry]:
    """Decode one 292-byte index record.

    Returns None for records with a logical size of zero; those are not
    entries.
    """
    if len(record) < RECORD_SIZE:
        raise TruncatedIndex(f"Index record is {len(record)} bytes, expected {RECORD_SIZE}")

    offset = read_u32_le(record, RECORD_OFFSET)
    size = read_u32_le(record, RECORD_SIZE_FIELD)
    compressed_size = read_u32_le(record, RECORD_COMPRESSED_SIZE)
    compression_type = record[RECORD_COMPRESSION_TYPE]

    if size == 0:
        return None

    name = read_fixed_cstring(record, RECORD_NAME_SIZE)
    is_compressed = compression_type == COMPRESSION_ZLIB
    if compression_type not in (0, COMPRESSION_ZLIB):
        logger.debug("Unknown compression type {} for {!r}, reading as stored", compression_type, name)

    return ArchEntry(
        name=name,
        offset=offset,
        stored_size=compressed_size if is_compressed else size,
        logical_size=size,
        is_compressed=is_compressed,
        semantic_type=get_file_type(name),
        compression_type=compression_type,
    )


def read_index(view: ArcView, header: ArchHeader) -> List[ArchEntry]:
    """Read every index record and return the entries in on-disk order.

    Raises:
        TruncatedIndex: the index table does not fit inside the archive.
        InvalidPlacement: an entry's data range falls outside the archive.
    """
    index_offset = header.index_offset
    index_size = header.index_size
    max_offset = view.max_offset

    if index_offset == 0 or index_offset + index_size > max_offset:
        raise TruncatedIndex(
            f"Index @0x{index_offset:X} + {index_size} does not fit in {max_offset} bytes"
        )

    index = memoryview(view.read_at(index_offset, index_size))
    entries: List[ArchEntry] = []

    for i in range(header.file_count):
        start = i * RECORD_SIZE
        entry = decode_record(index[start : start + RECORD_SIZE])
        if entry is None:
            logger.debug("Skipping empty index record {}", i)
            continue

        if not check_placement(entry.offset, entry.stored_size, max_offset):
            raise InvalidPlacement(entry.name, entry.offset, entry.stored_size, max_offset)

        entries.append(entry)

    return entries


def _safe_relative_path(name: str) -> Optional[Path]:
    """Turn an entry name into a relative path that stays below its root."""
    path = PureWindowsPath(name)
    parts = path.parts[1:] if path.anchor else path.parts
    parts = [part for part in parts if part not in ("", ".", "..")]
    if not parts:
        return None
    return Path(*parts)


class ArchArchive:
    """An opened ARCH archive: header, entries and access to entry data."""

    def __init__(
        self,
        view: ArcView,
        header: ArchHeader,
        entries: List[ArchEntry],
        arc_format: Optional["ArchFormat"] = None,
    ):
        self.view = view
        self.format = arc_format or ArchFormat()
        self._header = header
        self._entries = entries

    def __enter__(self) -> "ArchArchive":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ArchEntry]:
        return iter(self._entries)

    def close(self) -> None:
        """Close the underlying view."""
        self.view.close()

    @property
    def header(self) -> ArchHeader:
        return self._header

    @property
    def entries(self) -> List[ArchEntry]:
        return self._entries

    def open_entry(self, entry: ArchEntry) -> BinaryIO:
        """Open an entry as a stream of its (decompressed) contents."""
        return self.format.open_entry(self, entry)

    def read(self, entry: ArchEntry) -> bytes:
        """Read an entry's whole contents."""
        with self.open_entry(entry) as stream:
            return stream.read()

    def list_files(self) -> List[str]:
        """List all entry names in index order."""
        return [e.name for e in self._entries]

    def get_entry_by_name(self, name: str) -> Optional[ArchEntry]:
        """Find an entry by name, treating ``/`` and ``\\`` alike."""
        name = name.replace("\\", "/").lstrip("/")
        for entry in self._entries:
            if entry.name.replace("\\", "/").lstrip("/") == name:
                return entry
        return None

    def extract_all(
        self,
        output_dir: Path,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> Iterator[Tuple[str, Path]]:
        """Extract all entries to the output directory.

        Yields (name, output_path) for each extracted entry.
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        for i, entry in enumerate(self._entries):
            relative = _safe_relative_path(entry.name)
            if relative is None:
                relative = Path(f"unknown_{i}")
            if relative.as_posix() != entry.name.replace("\\", "/"):
                logger.warning("Extracting {!r} as {}", entry.name, relative)

            output_path = output_dir / relative
            output_path.parent.mkdir(parents=True, exist_ok=True)

            try:
                with self.open_entry(entry) as src, open(output_path, "wb") as dst:
                    while True:
                        chunk = src.read(64 * 1024)
                        if not chunk:
                            break
                        dst.write(chunk)
            except DecompressionFailure:
                output_path.unlink()
                raise

            if progress_callback:
                progress_callback(i, len(self._entries), entry.name)

            yield entry.name, output_path


class ArchFormat:
    """ZeroNovel ARCH archive format."""

    tag = "ARCH"
    description = "ZeroNovel ARCH archive"
    signature = ARCH_SIGNATURE
    extensions = ("arch",)
    is_hierarchic = False
    can_write = False

    def matches_signature(self, data: bytes) -> bool:
        """Quick check of the first four bytes."""
        return len(data) >= 4 and read_u32_le(data) == self.signature

    def try_open(self, view: ArcView) -> Optional[ArchArchive]:
        """Open ``view`` as an ARCH archive.

        Returns None if the data is not an ARCH archive at all. A file that
        claims to be one but has a broken index raises instead.
        """
        try:
            header = read_header(view)
        except FormatRejected as e:
            logger.debug("{}: {}", view.name, e)
            return None

        entries = read_index(view, header)
        logger.debug("Opened {} with {} entries", view.name, len(entries))
        return ArchArchive(view, header, entries, self)

    def open_entry(self, archive: ArchArchive, entry: ArchEntry) -> BinaryIO:
        """Open an entry's data, inflating it lazily if it is compressed."""
        stream = archive.view.create_stream(entry.offset, entry.stored_size)
        if not entry.is_compressed:
            return stream
        return open_zlib_stream(stream)


def open_archive(path: Union[str, Path]) -> ArchArchive:
    """Open an ARCH archive file.

    Raises:
        FormatRejected: the file is not an ARCH archive.
        TruncatedIndex, InvalidPlacement: the archive is corrupt.
    """
    view = ArcView.from_path(path)
    try:
        archive = ArchFormat().try_open(view)
    except Exception:
        view.close()
        raise

    if archive is None:
        view.close()
        raise FormatRejected(f"Not an ARCH archive: {path}")
    return archive
