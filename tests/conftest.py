"""Shared fixtures for the A2A client tests.

Peers are simulated with respx routes or, where a test has to observe how
far a response body was read, with an ``httpx.MockTransport`` serving a
recording byte stream.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest

AGENT_URL = "https://agent.example.com/a2a"


def _request_id(request: httpx.Request) -> Any:
    return json.loads(request.content).get("id")


def _sse_frame(data: str) -> str:
    return f"data: {data}\n\n"


class RecordingStream(httpx.AsyncByteStream):
    """Response body that records how many chunks were pulled and whether it was closed.

    With ``hang`` set, the stream blocks after its last chunk instead of
    ending, like a peer that keeps the connection open.
    """

    def __init__(self, chunks: list[bytes], hang: bool = False) -> None:
        self.chunks = chunks
        self.hang = hang
        self.chunks_read = 0
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self.chunks:
            self.chunks_read += 1
            yield chunk
        if self.hang:
            await asyncio.Event().wait()

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def agent_url() -> str:
    """Endpoint URL used by every simulated agent."""
    return AGENT_URL


@pytest.fixture
def rpc_result() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Factory for respx side effects answering with a JSON-RPC result.

    The response echoes the id of the request it answers.
    """

    def factory(result: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
        def respond(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                status_code,
                json={"jsonrpc": "2.0", "id": _request_id(request), "result": result},
            )

        return respond

    return factory


@pytest.fixture
def rpc_error() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Factory for respx side effects answering with a JSON-RPC error object."""

    def factory(code: int, message: str, data: Any = None) -> Callable[[httpx.Request], httpx.Response]:
        def respond(request: httpx.Request) -> httpx.Response:
            error: dict[str, Any] = {"code": code, "message": message}
            if data is not None:
                error["data"] = data
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": _request_id(request), "error": error},
            )

        return respond

    return factory


@pytest.fixture
def sse_response() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Factory for respx side effects answering with an event stream.

    Dict items become result envelopes carrying the request id; string
    items are sent verbatim as the event data.
    """

    def factory(frames: list[Any]) -> Callable[[httpx.Request], httpx.Response]:
        def respond(request: httpx.Request) -> httpx.Response:
            request_id = _request_id(request)
            body = "".join(
                _sse_frame(
                    frame
                    if isinstance(frame, str)
                    else json.dumps({"jsonrpc": "2.0", "id": request_id, "result": frame})
                )
                for frame in frames
            )
            return httpx.Response(
                200,
                headers={"content-type": "text/event-stream"},
                content=body.encode("utf-8"),
            )

        return respond

    return factory


@pytest.fixture
def recording_stream() -> Callable[..., RecordingStream]:
    """Factory for a recording event-stream body with one chunk per result.

    Every frame carries the correlation id ``"stream-1"``.
    """

    def factory(results: list[Any], hang: bool = False) -> RecordingStream:
        chunks = [
            _sse_frame(json.dumps({"jsonrpc": "2.0", "id": "stream-1", "result": result})).encode(
                "utf-8"
            )
            for result in results
        ]
        return RecordingStream(chunks, hang=hang)

    return factory


@pytest.fixture
def status_event() -> Callable[..., dict[str, Any]]:
    """Factory for a status-update stream result."""

    def factory(state: str, final: bool = False, task_id: str = "task-1") -> dict[str, Any]:
        return {
            "kind": "status-update",
            "taskId": task_id,
            "contextId": "ctx-1",
            "status": {"state": state},
            "final": final,
        }

    return factory


@pytest.fixture
def artifact_event() -> Callable[..., dict[str, Any]]:
    """Factory for an artifact-update stream result."""

    def factory(text: str, task_id: str = "task-1") -> dict[str, Any]:
        return {
            "kind": "artifact-update",
            "taskId": task_id,
            "contextId": "ctx-1",
            "artifact": {"artifactId": "artifact-1", "parts": [{"kind": "text", "text": text}]},
        }

    return factory
