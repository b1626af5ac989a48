"""ZeroNovel Toolkit - read ZeroNovel ARCH archives."""

from loguru import logger

from .exceptions import (
    ArchError,
    DecompressionFailure,
    FormatRejected,
    InvalidPlacement,
    TruncatedIndex,
)

__version__ = "0.1.0"

# Library code stays quiet unless the application opts in
logger.disable(__name__)

__all__ = [
    "ArchError",
    "DecompressionFailure",
    "FormatRejected",
    "InvalidPlacement",
    "TruncatedIndex",
    "__version__",
]
