"""Transport layer exceptions.

These exceptions are raised by the transport layer when the HTTP exchange
itself fails: either no response was obtained at all, or the peer answered
with a status code the dispatcher does not accept.
"""

from __future__ import annotations

from a2a_client.exceptions import A2AClientError


class TransportError(A2AClientError):
    """No HTTP response was obtained.

    Covers every failure before a status line arrives, plus connection loss
    while a body is read. The client never retries these.

    Args:
        message: Human-readable error description
        cause: Original exception that caused this error

    Attributes:
        message: Error message
        cause: Original exception (or None)
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class NetworkError(TransportError):
    """Connection to the agent could not be made or was lost.

    Examples:
        - Refused or reset connection
        - Unresolvable host name
        - Connection dropped while reading the body
    """

    pass


class RequestTimeoutError(TransportError):
    """A timeout configured on the httpx client expired.

    Only raised when the caller configured a timeout on the underlying
    HTTP client; the dispatcher itself imposes none.
    """

    pass


class HttpStatusError(A2AClientError):
    """Agent answered with a status the dispatcher does not accept.

    Raised for any non-2xx status, and for a 401 that no authentication
    handler was willing to answer. The raw body is kept for diagnostics.

    Args:
        status_code: HTTP status code
        body: Raw response body as text
        headers: Response headers

    Attributes:
        status_code: HTTP status code
        body: Raw response body
        headers: Response headers
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.headers = headers or {}
        super().__init__(f"HTTP {status_code}: {body}" if body else f"HTTP {status_code}")
