"""Transport layer for A2A client.

This module handles HTTP communication. It is responsible for:
- HTTP POST dispatch with content negotiation (JSON vs event stream)
- Credential headers from the authentication handler
- The single 401-challenge retry
- Network and HTTP status error translation
"""

from a2a_client.transport.exceptions import (
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    TransportError,
)
from a2a_client.transport.http import AcceptMode, CallState, HttpDispatcher

__all__ = [
    "AcceptMode",
    "CallState",
    "HttpDispatcher",
    "HttpStatusError",
    "NetworkError",
    "RequestTimeoutError",
    "TransportError",
]
