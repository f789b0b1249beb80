"""FastAPI route handlers."""

from fastapi import Request, Response

from auth import ApiKeyGate
from core.config import Config
from core.exceptions import AuthError, MethodNotAllowed, RelayError, RequestTooLarge
from core.protocols import RelayLogger
from core.request_types import parse_relay_request
from services.upstream import relay_response


def _error_response(error: RelayError) -> Response:
    return Response(content=error.message, status_code=error.status_code, media_type="text/plain")


async def handle_relay(
    request: Request,
    config: Config,
    logger: RelayLogger,
) -> Response:
    """Handle a relay request.

    Checks run method, API key, size, body, in that order, so a GET is
    rejected before its credentials or body are looked at.
    """
    try:
        if request.method != "POST":
            raise MethodNotAllowed()

        gate: ApiKeyGate = request.app.state.api_key_gate
        if not gate.check(request.headers.get(config.auth.header_name)):
            raise AuthError()

        raw_body = await request.body()
        if len(raw_body) > config.limits.max_body_size:
            raise RequestTooLarge()

        logger.log_incoming(
            request.method,
            request.url.path,
            dict(request.headers),
            raw_body.decode("utf-8", errors="replace"),
        )
        relay_request = parse_relay_request(raw_body)

        relay_service = request.app.state.relay_service
        upstream_response = await relay_service.relay(
            relay_request,
            request.headers,
            request.query_params.multi_items(),
        )
        return relay_response(upstream_response)
    except RelayError as e:
        logger.log_error(type(e).__name__, e.status_code, e.message)
        return _error_response(e)
    except Exception as e:
        logger.log_error("Unhandled", 500, str(e))
        return Response(content=f"Error: {e}", status_code=500, media_type="text/plain")
