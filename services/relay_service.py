"""Relay orchestration: fetch, repackage and forward one file."""

from collections.abc import Iterable, Mapping
from uuid import uuid4

import httpx

from core.extension import ExtensionResolver, final_filename
from core.headers import HeaderBuilder, merge_query_params
from core.multipart import FilePart, MultipartEncoder
from core.protocols import RelayLogger
from core.request_types import RelayRequest
from services.upstream import UpstreamClient


class RelayService:
    """Run the relay pipeline for a validated request.

    Stages run strictly in order and stop at the first RelayError:
    fetch file, resolve extension, build body, select headers, forward.
    A failed fetch never reaches the target endpoint.
    """

    def __init__(
        self,
        upstream: UpstreamClient,
        logger: RelayLogger,
        resolver: ExtensionResolver | None = None,
        encoder: MultipartEncoder | None = None,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._upstream = upstream
        self._logger = logger
        self._resolver = resolver or ExtensionResolver()
        self._encoder = encoder or MultipartEncoder()
        self._headers = header_builder or HeaderBuilder()

    async def relay(
        self,
        request: RelayRequest,
        incoming_headers: Mapping[str, str],
        incoming_query: Iterable[tuple[str, str]] = (),
    ) -> httpx.Response:
        """Relay the file described by `request`; return the target's response."""
        target_url = merge_query_params(request.endpoint, incoming_query)

        fetched = await self._upstream.fetch_file(request.file_url)

        extension = self._resolver.resolve(fetched, request.file_url)
        filename = final_filename(request.file_key, extension)
        encoded = self._encoder.encode(
            request.body,
            FilePart(
                name=request.file_key,
                filename=filename,
                content_type=fetched.content_type,
                content=fetched.content,
            ),
        )

        forwarded = self._headers.select_forward_headers(request.headers_to_forward, incoming_headers)
        headers = self._headers.build_forward_headers(forwarded, encoded.content_type)

        relay_id = uuid4().hex
        self._logger.log_relay(
            relay_id,
            request.file_url,
            str(target_url),
            method=request.method,
            filename=filename,
            size=len(fetched.content),
            headers=headers,
            fields=encoded.field_count,
        )
        response = await self._upstream.forward(request.method, target_url, headers, encoded.content)
        self._logger.log_response(relay_id, response.status_code)
        return response
