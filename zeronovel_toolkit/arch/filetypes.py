"""Entry type classification by file extension."""

from types import MappingProxyType

DEFAULT_FILE_TYPE = "file"

FILE_TYPE_MAP = MappingProxyType(
    {
        ".ini": "script",
        ".cfg": "config",
        ".txt": "text",
        ".xml": "text",
        ".json": "text",
        ".csv": "text",
        ".png": "image",
        ".jpg": "image",
        ".jpeg": "image",
        ".bmp": "image",
        ".tga": "image",
        ".gif": "image",
        ".wmv": "video",
        ".mp4": "video",
        ".avi": "video",
        ".mov": "video",
        ".mp3": "audio",
        ".wav": "audio",
        ".ogg": "audio",
        ".scn": "scene",
        ".dat": "data",
        ".bin": "data",
        ".lua": "script",
        ".py": "script",
        ".dll": "binary",
        ".exe": "binary",
    }
)


def get_file_type(name: str) -> str:
    """Return the semantic type for an entry name, ``"file"`` if unknown."""
    # Entry names come from a Windows engine; accept either separator.
    # A leading dot counts as the extension, so ".png" is an image.
    basename = name.replace("\\", "/").rsplit("/", 1)[-1]
    dot = basename.rfind(".")
    if dot < 0 or dot == len(basename) - 1:
        return DEFAULT_FILE_TYPE
    return FILE_TYPE_MAP.get(basename[dot:].lower(), DEFAULT_FILE_TYPE)
