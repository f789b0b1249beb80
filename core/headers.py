"""Header and query construction for the forwarded request."""

from collections.abc import Iterable, Mapping

import httpx

from core.exceptions import MissingForwardHeader


class HeaderBuilder:
    """Build outbound headers for the target endpoint."""

    def select_forward_headers(
        self,
        names: Iterable[str],
        incoming: Mapping[str, str],
    ) -> dict[str, str]:
        """Copy the named headers from the inbound request.

        `incoming` must do case-insensitive lookups (Starlette/httpx Headers).
        The first missing or empty header aborts the relay.
        """
        selected: dict[str, str] = {}
        for name in names:
            value = incoming.get(name)
            if not value:
                raise MissingForwardHeader(name)
            selected[name] = value
        return selected

    def build_forward_headers(
        self,
        forwarded: Mapping[str, str],
        content_type: str,
    ) -> dict[str, str]:
        """Forwarded headers plus the multipart Content-Type, which always wins."""
        headers = {k: v for k, v in forwarded.items() if k.lower() != "content-type"}
        headers["Content-Type"] = content_type
        return headers


def merge_query_params(endpoint: str, incoming: Iterable[tuple[str, str]]) -> httpx.URL:
    """Append inbound query pairs after the endpoint's own (duplicates kept)."""
    url = httpx.URL(endpoint)
    incoming = list(incoming)
    # Untouched when nothing is appended, so pre-signed queries keep their encoding
    if not incoming:
        return url
    pairs = list(url.params.multi_items()) + incoming
    return url.copy_with(params=httpx.QueryParams(pairs))
