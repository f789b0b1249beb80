"""Shared request data types and inbound body parsing."""

import json
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from core.exceptions import InvalidJSON, MissingRequiredFields, RelayValidationError


class RelayRequest(BaseModel):
    """Validated inbound relay request."""

    model_config = ConfigDict(extra="ignore")

    file_url: str
    endpoint: str
    method: str = "POST"
    headers_to_forward: list[str] = []
    body: Any = None
    file_key: str = "file"

    @field_validator("file_url", "endpoint")
    @classmethod
    def _absolute_http_url(cls, value: str) -> str:
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError("must be an absolute http(s) URL")
        return value

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("method must not be empty")
        return value

    @field_validator("headers_to_forward", mode="before")
    @classmethod
    def _split_header_names(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list):
            return [
                v.strip() if isinstance(v, str) else v
                for v in value
                if not isinstance(v, str) or v.strip()
            ]
        return value

    @field_validator("file_key")
    @classmethod
    def _non_empty_file_key(cls, value: str) -> str:
        return value or "file"


@dataclass(frozen=True)
class FetchedFile:
    """Downloaded file bytes plus the metadata used for extension resolution."""

    content: bytes
    source_url: str
    content_type: str | None = None
    content_disposition: str | None = None


def parse_relay_request(raw_body: bytes) -> RelayRequest:
    """Parse the inbound JSON body into a RelayRequest.

    Raises:
        InvalidJSON: body is not a JSON object
        MissingRequiredFields: `file_url` or `endpoint` missing or empty
        RelayValidationError: any other field is invalid
    """
    try:
        data = json.loads(raw_body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InvalidJSON() from e
    if not isinstance(data, dict):
        raise InvalidJSON()

    if not data.get("file_url") or not data.get("endpoint"):
        raise MissingRequiredFields()

    # null means "use the default"
    data = {key: value for key, value in data.items() if value is not None}
    try:
        return RelayRequest.model_validate(data)
    except ValidationError as e:
        raise RelayValidationError(f"Invalid request body: {_describe(e)}") from e


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "body"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)
