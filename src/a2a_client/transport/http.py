"""HTTP transport layer implementation.

This module issues the HTTP POST for one JSON-RPC request, attaches the
credential headers provided by the authentication handler, and runs the
single 401-challenge retry. It does not look inside response bodies; that
is the protocol layer's job.
"""

from __future__ import annotations

import inspect
import json
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from a2a_client.auth.handler import AuthenticationHandler, HttpHeaders
from a2a_client.transport.exceptions import (
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
)

if TYPE_CHECKING:
    from a2a_client.protocol.models import JsonRpcRequest

logger = structlog.get_logger()


class AcceptMode(str, Enum):
    """Response mode requested from the peer via the Accept header."""

    JSON = "application/json"
    EVENT_STREAM = "text/event-stream"


class CallState(str, Enum):
    """Per-call lifecycle, reported in log events."""

    BUILT = "built"
    DISPATCHED = "dispatched"
    AWAITING_RETRY_DECISION = "awaiting_retry_decision"
    RETRIED = "retried"
    RESOLVED = "resolved"
    FAILED = "failed"


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def read_body(response: httpx.Response) -> bytes:
    """Read the full response body, translating connection failures.

    Raises:
        RequestTimeoutError: Body read timed out
        NetworkError: Connection dropped while reading
    """
    try:
        return await response.aread()
    except httpx.TimeoutException as e:
        raise RequestTimeoutError("Timed out reading response body", cause=e) from e
    except httpx.TransportError as e:
        raise NetworkError(f"Connection failed while reading response body: {e}", cause=e) from e


class HttpDispatcher:
    """Dispatches JSON-RPC requests over HTTP POST.

    Features:
        - Credential headers from a borrowed authentication handler
        - Exactly one retry after a 401, driven by the handler's decision
        - Streaming responses released when the caller's scope ends
        - Network error translation

    No timeout, backoff or retry count is applied here. Timeouts belong to
    the ``httpx.AsyncClient`` the caller passes in.

    Args:
        url: Endpoint URL every request is POSTed to
        client: HTTP client used for the exchange (not owned)
        auth_handler: Optional authentication handler
        headers: Extra static headers sent with every request

    Example:
        >>> dispatcher = HttpDispatcher("https://agent.example.com", httpx.AsyncClient())
        >>> async with dispatcher.dispatch(request, AcceptMode.JSON) as response:
        ...     body = await response.aread()
    """

    def __init__(
        self,
        url: str,
        client: httpx.AsyncClient,
        auth_handler: AuthenticationHandler | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        if not url:
            raise ValueError("url cannot be empty")

        self.url = url
        self.client = client
        self.auth_handler = auth_handler
        self.headers = dict(headers or {})

    def _build_headers(
        self,
        accept: AcceptMode,
        auth_headers: Mapping[str, str] | None = None,
    ) -> HttpHeaders:
        """Build HTTP headers for one attempt.

        Static headers come first, then credentials, then the content
        negotiation headers which always win.
        """
        headers = dict(self.headers)
        if auth_headers is None and self.auth_handler is not None:
            auth_headers = self.auth_handler.headers()
        if auth_headers:
            headers.update(auth_headers)
        headers["Content-Type"] = "application/json"
        headers["Accept"] = accept.value
        return headers

    async def _send(self, body: bytes, headers: HttpHeaders) -> httpx.Response:
        http_request = self.client.build_request("POST", self.url, content=body, headers=headers)
        try:
            return await self.client.send(http_request, stream=True)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request to {self.url} timed out", cause=e) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Connection failed: {e}", cause=e) from e

    @asynccontextmanager
    async def dispatch(
        self,
        request: JsonRpcRequest,
        accept: AcceptMode,
    ) -> AsyncIterator[httpx.Response]:
        """Send a request and yield the successful, still-open response.

        The response body is left unread so the caller can consume it as a
        single document or as a stream. The connection is released when the
        ``async with`` block exits, including on cancellation or an early
        ``break`` out of a stream.

        Args:
            request: JSON-RPC request envelope
            accept: Response mode to request from the peer

        Yields:
            HTTP response with a 2xx status

        Raises:
            NetworkError: Connection failed before a response arrived
            RequestTimeoutError: Configured client timeout expired
            HttpStatusError: Non-2xx status, including an unanswered 401
        """
        response = await self._exchange(request, accept)
        try:
            yield response
        finally:
            await response.aclose()

    async def _exchange(self, request: JsonRpcRequest, accept: AcceptMode) -> httpx.Response:
        log = logger.bind(method=request.method, request_id=request.id, accept=accept.value)
        body = json.dumps(request.to_wire()).encode("utf-8")

        response = await self._send(body, self._build_headers(accept))
        log.debug(
            "rpc_request_dispatched",
            state=CallState.DISPATCHED.value,
            status_code=response.status_code,
        )

        if response.status_code == 401 and self.auth_handler is not None:
            response = await self._retry_after_challenge(
                self.auth_handler, body, accept, response, log
            )

        if not response.is_success:
            await self._raise_status_error(response, log)

        return response

    async def _retry_after_challenge(
        self,
        auth_handler: AuthenticationHandler,
        body: bytes,
        accept: AcceptMode,
        response: httpx.Response,
        log: Any,
    ) -> httpx.Response:
        """Ask the handler about a 401 and replay the request at most once.

        Returns the closed 401 response when the handler declines, otherwise
        the response of the single retried attempt.
        """
        log.debug("rpc_auth_challenge", state=CallState.AWAITING_RETRY_DECISION.value)

        try:
            await read_body(response)
            retry_headers = await _maybe_await(
                auth_handler.should_retry_with_headers(response.request, response)
            )
        finally:
            await response.aclose()

        if retry_headers is None:
            log.info("rpc_auth_retry_declined", status_code=response.status_code)
            return response

        retry_headers = dict(retry_headers)
        await _maybe_await(auth_handler.on_success(retry_headers))

        headers = self._build_headers(accept, {**auth_handler.headers(), **retry_headers})
        retried = await self._send(body, headers)
        log.info(
            "rpc_auth_retried",
            state=CallState.RETRIED.value,
            status_code=retried.status_code,
        )
        return retried

    async def _raise_status_error(self, response: httpx.Response, log: Any) -> None:
        try:
            await read_body(response)
        finally:
            await response.aclose()

        log.warning(
            "http_status_error",
            state=CallState.FAILED.value,
            status_code=response.status_code,
        )
        raise HttpStatusError(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )
