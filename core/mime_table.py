"""MIME type to file extension table."""

from types import MappingProxyType

MIME_EXTENSIONS = MappingProxyType(
    {
        "text/plain": "txt",
        "text/csv": "csv",
        "application/rtf": "rtf",
        "text/html": "html",
        "text/css": "css",
        "application/javascript": "js",
        "application/json": "json",
        "application/xml": "xml",
        "image/jpeg": "jpg",
        "image/png": "png",
        "image/gif": "gif",
        "image/bmp": "bmp",
        "image/webp": "webp",
        "image/svg+xml": "svg",
        "image/tiff": "tiff",
        "image/x-icon": "ico",
        "audio/mpeg": "mp3",
        "audio/wav": "wav",
        "audio/ogg": "ogg",
        "video/mp4": "mp4",
        "video/webm": "webm",
        "application/pdf": "pdf",
        "application/msword": "doc",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
        "application/vnd.ms-excel": "xls",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
        "application/vnd.ms-powerpoint": "ppt",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
        "application/zip": "zip",
        "application/octet-stream": "bin",
    }
)

# Content types that say nothing about the actual file format
GENERIC_BINARY_TYPES = frozenset({"application/octet-stream", "application/binary"})


def normalize_mime(content_type: str | None) -> str:
    """Strip parameters (`; charset=...`) and whitespace from a Content-Type."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip()


def extension_for(mime: str) -> str | None:
    """Return the extension for a normalized MIME type, if known."""
    return MIME_EXTENSIONS.get(mime)
