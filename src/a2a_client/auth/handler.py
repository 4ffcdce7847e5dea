"""Authentication capability consumed by the transport dispatcher.

The dispatcher never interprets credentials. It asks the handler for the
headers to attach, hands it any 401 response, and tells it which headers
to remember when it decides to retry. Signing challenges and resolving
identities happen inside concrete handlers supplied by the application.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from typing import Protocol, runtime_checkable

import httpx

HttpHeaders = dict[str, str]


@runtime_checkable
class AuthenticationHandler(Protocol):
    """Capability set the dispatcher borrows for every call.

    ``should_retry_with_headers`` and ``on_success`` may be plain methods or
    coroutines.
    """

    def headers(self) -> Mapping[str, str]:
        """Headers to attach to the next request."""
        ...

    def should_retry_with_headers(
        self,
        request: httpx.Request,
        response: httpx.Response,
    ) -> HttpHeaders | None | Awaitable[HttpHeaders | None]:
        """Inspect a 401 challenge and return headers for one retry, or None."""
        ...

    def on_success(self, headers: HttpHeaders) -> None | Awaitable[None]:
        """Remember headers produced by ``should_retry_with_headers``."""
        ...


class CachedHeadersAuthHandler(ABC):
    """Base handler keeping a header set shared by all calls of a session.

    Reads return a snapshot copy and ``on_success`` swaps in a new dict
    under a lock, so concurrent calls never observe a half-written cache.
    Subclasses only decide how to answer a challenge.

    Args:
        headers: Initial headers (e.g., a token obtained earlier)

    Example:
        >>> class TokenHandler(CachedHeadersAuthHandler):
        ...     async def should_retry_with_headers(self, request, response):
        ...         token = await sign(response.json())
        ...         return {"Authorization": f"Agentic {token}"}
    """

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._headers: HttpHeaders = dict(headers or {})

    def headers(self) -> HttpHeaders:
        with self._lock:
            return dict(self._headers)

    async def on_success(self, headers: HttpHeaders) -> None:
        updated = dict(headers)
        with self._lock:
            self._headers = updated

    @abstractmethod
    async def should_retry_with_headers(
        self,
        request: httpx.Request,
        response: httpx.Response,
    ) -> HttpHeaders | None:
        """Answer a 401 challenge.

        Args:
            request: The HTTP request that was rejected
            response: The 401 response, body already read

        Returns:
            Headers to retry with, or None to give up
        """
