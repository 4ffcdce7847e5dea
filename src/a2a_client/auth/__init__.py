"""Authentication capability for A2A client.

This module defines the interface the transport dispatcher consults for
credential headers. It is responsible for:
- The three-operation capability protocol (headers, retry decision, success)
- A lock-protected header cache reusable by concrete handlers
"""

from a2a_client.auth.handler import (
    AuthenticationHandler,
    CachedHeadersAuthHandler,
    HttpHeaders,
)

__all__ = [
    "AuthenticationHandler",
    "CachedHeadersAuthHandler",
    "HttpHeaders",
]
