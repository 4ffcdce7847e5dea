"""JSON-RPC 2.0 request building and response resolution.

This module has no knowledge of HTTP status handling or authentication. It
turns a method name and params into a request envelope, and turns a
successful HTTP response back into the ``result`` of that request.
"""

from __future__ import annotations

import itertools
import json
from collections.abc import Callable
from typing import Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from a2a_client.protocol.exceptions import ProtocolError, RpcError
from a2a_client.protocol.models import JSONRPC_VERSION, JsonRpcRequest, JsonRpcResponse
from a2a_client.transport.http import read_body

logger = structlog.get_logger()

CorrelationId = int | str


def ids_match(response_id: Any, request_id: CorrelationId) -> bool:
    """Compare correlation ids by type and value.

    JSON `true` must not match the id `1`, nor `1.0` or `"1"`.
    """
    return type(response_id) is type(request_id) and response_id == request_id


class RequestBuilder:
    """Builds JSON-RPC 2.0 request envelopes.

    Correlation ids default to an integer counter owned by the builder, so
    they are unique for the lifetime of one client instance. A custom
    ``id_factory`` may return strings instead.

    Args:
        id_factory: Optional callable producing correlation ids

    Example:
        >>> builder = RequestBuilder()
        >>> builder.build("tasks/get", {"id": "t1"}).id
        1
        >>> builder.build("tasks/get", {"id": "t1"}).id
        2
    """

    def __init__(self, id_factory: Callable[[], CorrelationId] | None = None) -> None:
        self._counter = itertools.count(1)
        self._id_factory = id_factory or self._next_id

    def _next_id(self) -> int:
        # next() on itertools.count is atomic under the GIL
        return next(self._counter)

    def build(self, method: str, params: Any = None) -> JsonRpcRequest:
        """Build a request envelope with a fresh correlation id.

        Args:
            method: Protocol method name (e.g., "message/send")
            params: JSON-serializable params; pydantic models are dumped by alias

        Returns:
            Validated request envelope

        Raises:
            ValueError: Method name is empty
        """
        if isinstance(params, BaseModel):
            params = params.model_dump(mode="json", by_alias=True, exclude_none=True)

        try:
            return JsonRpcRequest(id=self._id_factory(), method=method, params=params)
        except ValidationError as e:
            raise ValueError(f"Invalid request envelope: {e}") from e


def parse_response_envelope(payload: Any, request: JsonRpcRequest) -> Any:
    """Validate one JSON-RPC response envelope against its request.

    This is the single validation step shared by single-document and
    event-stream responses.

    Args:
        payload: Decoded JSON value of the response
        request: The request this response must answer

    Returns:
        The ``result`` member (may be None for a JSON null result)

    Raises:
        ProtocolError: Envelope is malformed or answers a different request
        RpcError: Envelope carries a JSON-RPC error object
    """
    if not isinstance(payload, dict):
        raise ProtocolError(f"Expected JSON object response, got {type(payload).__name__}")

    if payload.get("jsonrpc") != JSONRPC_VERSION:
        raise ProtocolError(f"Unsupported jsonrpc version: {payload.get('jsonrpc')!r}")

    # A null error or result member counts as absent
    if payload.get("error") is None:
        payload = {key: value for key, value in payload.items() if key != "error"}
    elif payload.get("result") is None:
        payload = {key: value for key, value in payload.items() if key != "result"}
    else:
        raise ProtocolError("Response cannot have both result and error")

    if not ids_match(payload.get("id"), request.id):
        raise ProtocolError(
            f"Response id {payload.get('id')!r} does not match request id {request.id!r}"
        )

    try:
        response = JsonRpcResponse.model_validate(payload)
    except ValidationError as e:
        raise ProtocolError(f"Response validation failed: {e}", cause=e) from e

    if response.error is not None:
        logger.debug(
            "jsonrpc_error_received",
            method=request.method,
            request_id=request.id,
            error_code=response.error.code,
        )
        raise RpcError.from_error(response.error)

    if not response.has_result:
        raise ProtocolError("Response must have either result or error")

    return response.result


def is_json_content_type(content_type: str) -> bool:
    """True for ``application/json`` and ``+json`` media types."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def is_event_stream_content_type(content_type: str) -> bool:
    """True for ``text/event-stream``."""
    return content_type.split(";", 1)[0].strip().lower() == "text/event-stream"


class ResponseDemultiplexer:
    """Resolves a successful single-document HTTP response into a result."""

    async def resolve(self, response: httpx.Response, request: JsonRpcRequest) -> Any:
        """Read, parse and validate a JSON response body.

        Args:
            response: Successful HTTP response with an unread body
            request: The originating request

        Returns:
            The ``result`` member of the response

        Raises:
            ProtocolError: Wrong content type, invalid JSON or malformed envelope
            RpcError: Peer returned a JSON-RPC error object
            TransportError: Connection failed while reading the body
        """
        content_type = response.headers.get("content-type", "")
        if not is_json_content_type(content_type):
            raise ProtocolError(f"Unexpected content type for {request.method}: {content_type!r}")

        body = await read_body(response)
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise ProtocolError("Invalid JSON response from server", cause=e) from e

        result = parse_response_envelope(payload, request)
        logger.debug("jsonrpc_response_resolved", method=request.method, request_id=request.id)
        return result

