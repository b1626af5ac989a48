"""Exceptions raised while reading ARCH archives."""


class ArchError(ValueError):
    """Base class for ARCH archive errors."""


class FormatRejected(ArchError):
    """The data is not an ARCH archive (too short, bad magic or no entries).

    Raised before any index work, so callers probing several formats can
    treat it as "try the next one" rather than as a broken file.
    """


class TruncatedIndex(ArchError):
    """The index table declared by the header does not fit in the archive."""


class InvalidPlacement(ArchError):
    """An index record points at data outside the archive."""

    def __init__(self, name: str, offset: int, size: int, max_offset: int):
        self.name = name
        self.offset = offset
        self.size = size
        self.max_offset = max_offset
        super().__init__(
            f"Entry {name!r} @0x{offset:X} + {size} exceeds archive size {max_offset}"
        )


class DecompressionFailure(ArchError):
    """Compressed entry data could not be inflated."""
