"""Server-sent event stream decoding.

Each event's ``data`` field is one complete JSON-RPC response envelope. The
decoder is a pull-based async generator: nothing is read from the connection
until the consumer asks for the next result.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import structlog
from httpx_sse import EventSource, SSEError

from a2a_client.protocol.exceptions import ProtocolError, StreamFrameError
from a2a_client.protocol.jsonrpc import (
    ids_match,
    is_event_stream_content_type,
    parse_response_envelope,
)
from a2a_client.protocol.models import JsonRpcRequest
from a2a_client.transport.exceptions import NetworkError, RequestTimeoutError

logger = structlog.get_logger()


def decode_frame(data: str, request: JsonRpcRequest) -> Any:
    """Decode one event's data into the ``result`` it carries.

    Shape problems are reported as `StreamFrameError` so the stream can
    continue. An id mismatch stays a plain `ProtocolError` and an error
    envelope raises `RpcError`; both end the stream.

    Args:
        data: Raw ``data`` field of the event
        request: The subscription request

    Returns:
        The frame's ``result`` member
    """
    try:
        payload = json.loads(data)
    except ValueError as e:
        raise StreamFrameError(f"Frame is not valid JSON: {e}", cause=e) from e

    if isinstance(payload, dict) and "id" in payload and not ids_match(payload["id"], request.id):
        raise ProtocolError(
            f"Stream frame id {payload['id']!r} does not match request id {request.id!r}"
        )

    try:
        return parse_response_envelope(payload, request)
    except StreamFrameError:
        raise
    except ProtocolError as e:
        raise StreamFrameError(e.message, cause=e) from e


class StreamDecoder:
    """Decodes a ``text/event-stream`` response into JSON-RPC results."""

    async def decode(
        self,
        response: httpx.Response,
        request: JsonRpcRequest,
        parse_result: Callable[[Any], Any] | None = None,
    ) -> AsyncIterator[Any]:
        """Yield each frame's result in arrival order.

        Malformed frames are skipped and logged. The generator ends when the
        peer closes the connection; it does not stop on terminal status
        updates, that decision belongs to the consumer.

        Args:
            response: Successful HTTP response with an unread body
            request: The subscription request
            parse_result: Optional converter applied to each result; raising
                StreamFrameError marks the frame as malformed

        Yields:
            Frame results, converted by ``parse_result`` when given

        Raises:
            ProtocolError: Wrong content type or id mismatch in a frame
            RpcError: Peer sent a JSON-RPC error envelope
            TransportError: Connection failed mid-stream
        """
        content_type = response.headers.get("content-type", "")
        if not is_event_stream_content_type(content_type):
            raise ProtocolError(f"Unexpected content type for {request.method}: {content_type!r}")

        event_source = EventSource(response)
        frame_count = 0
        try:
            async for event in event_source.aiter_sse():
                if not event.data:
                    continue
                frame_count += 1

                try:
                    result = decode_frame(event.data, request)
                    if parse_result is not None:
                        result = parse_result(result)
                except StreamFrameError as e:
                    logger.warning(
                        "stream_frame_skipped",
                        method=request.method,
                        request_id=request.id,
                        frame=frame_count,
                        sse_event=event.event,
                        reason=e.message,
                    )
                    continue

                yield result
        except httpx.TimeoutException as e:
            raise RequestTimeoutError("Timed out waiting for stream data", cause=e) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Stream connection failed: {e}", cause=e) from e
        except SSEError as e:
            raise ProtocolError(f"Invalid event stream: {e}", cause=e) from e

        logger.debug(
            "stream_closed",
            method=request.method,
            request_id=request.id,
            frames=frame_count,
        )
