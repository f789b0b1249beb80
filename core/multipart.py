"""Binary-safe multipart/form-data encoding.

Form fields come from an arbitrary JSON tree flattened into bracket-notation
names (`user[tags][0]`); a single binary file part is appended last. The body
is assembled into one buffer sized up front, so file bytes are copied once
and never pass through a text codec.
"""

from dataclasses import dataclass
from typing import Any
from uuid import uuid4

BOUNDARY_PREFIX = "----WebKitFormBoundary"
DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"
CRLF = b"\r\n"


@dataclass(frozen=True)
class FieldPart:
    name: str
    value: str


@dataclass(frozen=True)
class FilePart:
    name: str
    filename: str
    content_type: str | None
    content: bytes


@dataclass(frozen=True)
class EncodedBody:
    boundary: str
    content: bytes
    field_count: int = 0

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"


def new_boundary() -> str:
    return BOUNDARY_PREFIX + uuid4().hex


def flatten_fields(body: Any) -> list[FieldPart]:
    """Flatten a JSON object/array into ordered form fields.

    Object members keep insertion order; array items use their index as key.
    `None` leaves, empty containers and a top-level scalar produce no field.
    """
    if not isinstance(body, (dict, list)):
        return []
    parts: list[FieldPart] = []
    for key, value in _members(body):
        _flatten(str(key), value, parts)
    return parts


def _flatten(key: str, value: Any, parts: list[FieldPart]) -> None:
    if value is None:
        return
    if isinstance(value, (dict, list)):
        for member, item in _members(value):
            _flatten(f"{key}[{member}]", item, parts)
        return
    parts.append(FieldPart(key, _stringify(value)))


def _members(value: dict[str, Any] | list[Any]):
    if isinstance(value, dict):
        return value.items()
    return enumerate(value)


def _stringify(value: Any) -> str:
    """Render a JSON scalar the way a JSON producer would print it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def _escape_name(name: str) -> str:
    return name.replace('"', "%22").replace("\r", "%0D").replace("\n", "%0A")


class MultipartEncoder:
    """Serialize form fields plus one file part into a multipart body."""

    def __init__(self, boundary: str | None = None) -> None:
        self._boundary = boundary

    def encode(self, fields: Any, file_part: FilePart) -> EncodedBody:
        boundary = self._boundary or new_boundary()
        field_parts = flatten_fields(fields)
        segments = self._segments(boundary, field_parts, file_part)

        buffer = bytearray(sum(len(segment) for segment in segments))
        offset = 0
        for segment in segments:
            buffer[offset : offset + len(segment)] = segment
            offset += len(segment)
        return EncodedBody(boundary=boundary, content=bytes(buffer), field_count=len(field_parts))

    def _segments(self, boundary: str, fields: list[FieldPart], file_part: FilePart) -> list[bytes]:
        delimiter = f"--{boundary}\r\n"
        segments: list[bytes] = []
        for field in fields:
            segments.append(
                (
                    f"{delimiter}"
                    f'Content-Disposition: form-data; name="{_escape_name(field.name)}"\r\n\r\n'
                    f"{field.value}\r\n"
                ).encode("utf-8")
            )

        content_type = file_part.content_type or DEFAULT_FILE_CONTENT_TYPE
        segments.append(
            (
                f"{delimiter}"
                f'Content-Disposition: form-data; name="{_escape_name(file_part.name)}"; '
                f'filename="{_escape_name(file_part.filename)}"\r\n'
                f"Content-Type: {content_type}\r\n\r\n"
            ).encode("utf-8")
        )
        segments.append(file_part.content)
        segments.append(CRLF)
        segments.append(f"--{boundary}--\r\n".encode("utf-8"))
        return segments
