"""
ttrss-client exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class ApiError(Exception):
    """Exit code 1 — network, decode, protocol and API errors."""

    exit_code = 1


class ApiConnectionError(ApiError):
    """Transport failure: connection refused, timeout, TLS, no endpoint."""


class DecodeError(ApiError):
    """Response body could not be decoded into an API envelope."""


class AuthError(ApiError):
    """Exit code 2 — login rejected or no credentials configured."""

    exit_code = 2


class ProtocolError(ApiError):
    """Response content does not have the shape an operation expects."""


class WalkError(ApiError):
    """A feed tree visitor returned a result that is illegal for the node."""


class ApiResponseError(ApiError):
    """The API answered with an error status or error text."""

    def __init__(self, message, envelope=None):
        super().__init__(message)
        self.envelope = envelope


class HTTPError(Exception):
    """Raised by _http_request for non-2xx statuses that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
