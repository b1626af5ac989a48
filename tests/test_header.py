"""Tests for ARCH header parsing and format probing."""

import pytest

from arch_fixtures import build_arch, build_header, build_record
from zeronovel_toolkit.arch import ARCH_SIGNATURE, ArchFormat, read_header
from zeronovel_toolkit.exceptions import FormatRejected
from zeronovel_toolkit.utils.view import ArcView


def header_only_archive(**kwargs) -> bytes:
    """A header followed by one valid record so the index check passes."""
    header = build_header(**kwargs)
    return header + build_record("a.txt", 0, 1)


class TestReadHeader:
    """Tests for read_header."""

    def test_valid_header(self):
        data = build_header(version=3, file_count=7, index_offset=0x1234, flags=0x55)
        header = read_header(ArcView(data))

        assert header.magic == ARCH_SIGNATURE
        assert header.version == 3
        assert header.file_count == 7
        assert header.index_offset == 0x1234
        assert header.flags == 0x55

    def test_reserved_bytes_kept(self):
        reserved = bytes(range(44))
        header = read_header(ArcView(build_header(reserved=reserved)))
        assert header.reserved == reserved

    def test_index_size(self):
        header = read_header(ArcView(build_header(file_count=3)))
        assert header.index_size == 3 * 292

    def test_signature_is_arch_little_endian(self):
        assert build_header()[:4] == b"ARCH"

    def test_too_small(self):
        with pytest.raises(FormatRejected, match="too small"):
            read_header(ArcView(build_header()[:63]))

    def test_empty(self):
        with pytest.raises(FormatRejected):
            read_header(ArcView(b""))

    def test_invalid_magic(self):
        with pytest.raises(FormatRejected, match="magic"):
            read_header(ArcView(build_header(magic=0x4B434150)))

    def test_zero_file_count(self):
        with pytest.raises(FormatRejected, match="no entries"):
            read_header(ArcView(build_header(file_count=0)))

    def test_version_and_flags_not_checked(self):
        header = read_header(ArcView(build_header(version=0xFFFFFFFF, flags=0xFFFFFFFF)))
        assert header.version == 0xFFFFFFFF
        assert header.flags == 0xFFFFFFFF


class TestArchFormat:
    """Tests for the format descriptor."""

    def test_metadata(self):
        fmt = ArchFormat()
        assert fmt.tag == "ARCH"
        assert fmt.signature == 0x48435241
        assert "arch" in fmt.extensions
        assert not fmt.is_hierarchic
        assert not fmt.can_write

    def test_matches_signature(self):
        fmt = ArchFormat()
        assert fmt.matches_signature(b"ARCH\x01\x00")
        assert not fmt.matches_signature(b"PSAR")
        assert not fmt.matches_signature(b"AR")

    def test_try_open_63_bytes_returns_none(self):
        data = build_arch([("intro.png", b"\x89PNG" * 10, False)])
        assert ArchFormat().try_open(ArcView(data[:63])) is None

    def test_try_open_zero_count_returns_none(self):
        assert ArchFormat().try_open(ArcView(header_only_archive(file_count=0))) is None

    def test_try_open_bad_magic_returns_none(self):
        assert ArchFormat().try_open(ArcView(header_only_archive(magic=0))) is None

    def test_try_open_valid(self):
        data = build_arch([("intro.png", b"\x89PNG" * 10, False)])
        archive = ArchFormat().try_open(ArcView(data))

        assert archive is not None
        assert archive.header.file_count == 1
        assert len(archive) == 1
