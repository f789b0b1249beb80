"""HTTP utilities for the file source and the target endpoint."""

import httpx
from fastapi import Response

from core.exceptions import ForwardError, UpstreamFetchError
from core.request_types import FetchedFile

# Headers httpx has already resolved; relaying them would misdescribe the body
DROPPED_RESPONSE_HEADERS = frozenset(
    {"content-encoding", "content-length", "transfer-encoding", "connection", "keep-alive"}
)


class UpstreamClient:
    """Download source files and forward multipart bodies."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        fetch_timeout: float = 60.0,
        forward_timeout: float = 120.0,
    ) -> None:
        self._client = client
        self._fetch_timeout = fetch_timeout
        self._forward_timeout = forward_timeout

    async def fetch_file(self, url: str) -> FetchedFile:
        """GET the file and buffer it fully."""
        try:
            response = await self._client.get(
                url,
                follow_redirects=True,
                timeout=self._fetch_timeout,
            )
        except httpx.TimeoutException as e:
            raise UpstreamFetchError(f"Error: File fetch timed out: {e}") from e
        except httpx.RequestError as e:
            raise UpstreamFetchError(f"Error: {e}") from e

        if not response.is_success:
            raise UpstreamFetchError("Failed to fetch the file", upstream_status=response.status_code)

        return FetchedFile(
            content=response.content,
            source_url=url,
            content_type=response.headers.get("content-type"),
            content_disposition=response.headers.get("content-disposition"),
        )

    async def forward(
        self,
        method: str,
        url: httpx.URL,
        headers: dict[str, str],
        body: bytes,
    ) -> httpx.Response:
        """Send the multipart body to the target endpoint."""
        try:
            return await self._client.request(
                method,
                url,
                headers=headers,
                content=body,
                timeout=self._forward_timeout,
            )
        except httpx.TimeoutException as e:
            raise ForwardError(f"Error: Upstream timeout: {e}") from e
        except httpx.HTTPError as e:
            raise ForwardError(f"Error: {e}") from e


def relay_response(response: httpx.Response) -> Response:
    """Pass the upstream status, headers and body back to the caller."""
    relayed = Response(content=response.content, status_code=response.status_code)
    # Starlette has set content-length for the decoded body; repeated headers
    # such as Set-Cookie survive because raw pairs are copied as-is
    relayed.raw_headers = relayed.raw_headers + [
        (key.lower(), value)
        for key, value in response.headers.raw
        if key.decode("latin-1").lower() not in DROPPED_RESPONSE_HEADERS
    ]
    return relayed
