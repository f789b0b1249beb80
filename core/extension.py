"""File extension resolution from imperfect HTTP metadata."""

import re

import httpx

from core.mime_table import GENERIC_BINARY_TYPES, extension_for, normalize_mime
from core.request_types import FetchedFile

FILENAME_PATTERN = re.compile(r"""filename[^;=\n]*=((['"]).*?\2|[^;\n]*)""", re.IGNORECASE)
FORMAT_QUERY_PARAMS = ("exportFormat", "format", "ext")


class ExtensionResolver:
    """Derive a best-effort file extension for a fetched file.

    Priority:
        1. Content-Type, unless missing or generic binary
        2. filename from Content-Disposition
        3. trailing path segment of the source URL
        4. `exportFormat` / `format` / `ext` query parameter

    An unresolved extension is the empty string.
    """

    def resolve(self, fetched: FetchedFile, source_url: str | None = None) -> str:
        mime = normalize_mime(fetched.content_type).lower()
        if mime and mime not in GENERIC_BINARY_TYPES:
            extension = extension_for(mime)
            if extension:
                return extension

        return (
            self._from_disposition(fetched.content_disposition)
            or self._from_url_path(source_url or fetched.source_url)
            or self._from_query(source_url or fetched.source_url)
        )

    @staticmethod
    def _from_disposition(disposition: str | None) -> str:
        if not disposition:
            return ""
        match = FILENAME_PATTERN.search(disposition)
        if not match or not match.group(1):
            return ""
        filename = match.group(1).replace('"', "").replace("'", "").strip()
        return _suffix(filename)

    @staticmethod
    def _from_url_path(url: str) -> str:
        path = _parse_url(url).path
        # Only the last segment; "/v1.2/export" has no extension
        return _suffix(path.rsplit("/", 1)[-1])

    @staticmethod
    def _from_query(url: str) -> str:
        params = _parse_url(url).params
        # First parameter present wins, even when empty
        for name in FORMAT_QUERY_PARAMS:
            if name in params:
                return params[name].strip().lower()
        return ""


def final_filename(file_key: str, extension: str) -> str:
    """Name of the uploaded file part: `file_key` plus `.ext` when known."""
    return f"{file_key}.{extension}" if extension else file_key


def _suffix(name: str) -> str:
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].strip().lower()


def _parse_url(url: str) -> httpx.URL:
    try:
        return httpx.URL(url)
    except httpx.InvalidURL:
        return httpx.URL("")
