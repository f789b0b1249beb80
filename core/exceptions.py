"""Custom exception hierarchy for the file relay."""


class RelayError(Exception):
    """Base exception for all relay errors.

    Attributes:
        message: Plain-text body returned to the caller
        status_code: HTTP status code returned to the caller
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class MethodNotAllowed(RelayError):
    """Inbound request used a method other than POST."""

    status_code = 405

    def __init__(self) -> None:
        super().__init__("Method not allowed")


class AuthError(RelayError):
    """API key missing or wrong."""

    status_code = 401

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class RequestTooLarge(RelayError):
    """Request body exceeds size limit."""

    status_code = 413

    def __init__(self) -> None:
        super().__init__("Request body too large")


class RelayValidationError(RelayError):
    """Raised when the relay request is malformed."""

    status_code = 400


class InvalidJSON(RelayValidationError):
    """Request body is not a JSON object."""

    def __init__(self) -> None:
        super().__init__("Invalid JSON body error")


class MissingRequiredFields(RelayValidationError):
    """`file_url` or `endpoint` is missing or empty."""

    def __init__(self) -> None:
        super().__init__("Missing required fields in request body")


class MissingForwardHeader(RelayValidationError):
    """A header named in `headers_to_forward` is absent from the request."""

    def __init__(self, header: str) -> None:
        super().__init__(f"Header '{header}' not found in the request")
        self.header = header


class UpstreamFetchError(RelayError):
    """Raised when the source file cannot be downloaded.

    Attributes:
        upstream_status: HTTP status from the file source (None on network errors)
    """

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        super().__init__(message, status_code=500)
        self.upstream_status = upstream_status


class ForwardError(RelayError):
    """Raised when the target endpoint is unreachable or the call fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=500)
