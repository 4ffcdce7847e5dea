"""A2A client over JSON-RPC 2.0 and HTTP.

The client wires the request builder, the HTTP dispatcher and the two
response decoders together. Errors from every layer propagate untranslated,
so callers can tell transport, HTTP status, protocol and RPC failures apart.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from typing import Any, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from a2a_client.auth.handler import AuthenticationHandler
from a2a_client.config import ClientConfig
from a2a_client.exceptions import A2AClientError
from a2a_client.protocol.exceptions import ProtocolError, StreamFrameError
from a2a_client.protocol.jsonrpc import (
    CorrelationId,
    RequestBuilder,
    ResponseDemultiplexer,
    is_json_content_type,
)
from a2a_client.protocol.streaming import StreamDecoder
from a2a_client.transport.http import AcceptMode, CallState, HttpDispatcher
from a2a_client.types import (
    Message,
    MessageSendParams,
    StreamEvent,
    Task,
    TaskIdParams,
    TaskPushNotificationConfig,
    TaskQueryParams,
    parse_send_result,
    parse_stream_event,
)

logger = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=BaseModel)

MESSAGE_SEND = "message/send"
MESSAGE_STREAM = "message/stream"
TASKS_GET = "tasks/get"
TASKS_CANCEL = "tasks/cancel"
TASKS_PUSH_NOTIFICATION_SET = "tasks/pushNotification/set"
TASKS_PUSH_NOTIFICATION_GET = "tasks/pushNotification/get"
TASKS_RESUBSCRIBE = "tasks/resubscribe"


def _parse_model(model_class: type[ModelT], result: Any) -> ModelT | None:
    if result is None:
        return None
    try:
        return model_class.model_validate(result)
    except ValidationError as e:
        raise ProtocolError(f"Invalid {model_class.__name__} result: {e}", cause=e) from e


class A2AClient:
    """Client for an A2A agent reachable at a single JSON-RPC endpoint.

    Two generic entry points cover every method: `send` for single-response
    calls and `send_and_subscribe` for event-stream calls. The typed helpers
    below them wrap the A2A methods.

    When no ``http_client`` is given the client creates one from the config
    and closes it in `aclose`; an injected client is left open.

    Args:
        config: Endpoint URL or full client configuration
        auth_handler: Optional authentication handler shared by all calls
        http_client: Optional pre-configured httpx client
        id_factory: Optional correlation id generator

    Example:
        >>> async with A2AClient("https://agent.example.com/a2a") as client:
        ...     task = await client.send_message(params)
        ...     async for event in client.stream_message(params):
        ...         print(event.kind)
    """

    def __init__(
        self,
        config: ClientConfig | str,
        auth_handler: AuthenticationHandler | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        id_factory: Callable[[], CorrelationId] | None = None,
    ) -> None:
        if isinstance(config, str):
            config = ClientConfig(url=config)
        self.config = config

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=config.timeout,
            verify=config.verify_ssl,
            follow_redirects=config.follow_redirects,
        )

        self._builder = RequestBuilder(id_factory)
        self._dispatcher = HttpDispatcher(
            config.url,
            self._http_client,
            auth_handler=auth_handler,
            headers=config.headers,
        )
        self._demux = ResponseDemultiplexer()
        self._decoder = StreamDecoder()

    @property
    def url(self) -> str:
        return self.config.url

    @property
    def auth_handler(self) -> AuthenticationHandler | None:
        return self._dispatcher.auth_handler

    async def __aenter__(self) -> A2AClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http_client.aclose()

    async def send(self, method: str, params: Any = None) -> Any:
        """Call a method that answers with a single JSON-RPC response.

        Args:
            method: Protocol method name
            params: Method params (pydantic model or JSON value)

        Returns:
            The response ``result``; None when the peer returned a null result

        Raises:
            TransportError: No HTTP response obtained
            HttpStatusError: Non-2xx status or unanswered 401
            ProtocolError: Malformed envelope, id mismatch or wrong content type
            RpcError: Peer returned a JSON-RPC error object
        """
        request = self._builder.build(method, params)
        log = logger.bind(method=method, request_id=request.id)
        log.debug("rpc_call_built", state=CallState.BUILT.value)

        try:
            async with self._dispatcher.dispatch(request, AcceptMode.JSON) as response:
                result = await self._demux.resolve(response, request)
        except A2AClientError as e:
            log.debug("rpc_call_failed", state=CallState.FAILED.value, error_type=type(e).__name__)
            raise

        log.debug("rpc_call_resolved", state=CallState.RESOLVED.value)
        return result

    async def send_and_subscribe(
        self,
        method: str,
        params: Any = None,
        parse_result: Callable[[Any], Any] | None = None,
    ) -> AsyncIterator[Any]:
        """Call a method that answers with an event stream.

        Nothing is sent until the first item is requested. Each item is read
        from the connection only when the consumer asks for it, and the
        connection is released as soon as iteration stops, whether the
        stream ended, the consumer broke out, the generator was closed or
        the surrounding task was cancelled. Use ``contextlib.aclosing`` to
        release an abandoned stream deterministically.

        If the peer ignores the Accept header and answers with a single JSON
        document, that document's result is yielded once.

        Args:
            method: Protocol method name
            params: Method params (pydantic model or JSON value)
            parse_result: Optional converter applied to each result

        Yields:
            Results in server-send order
        """
        request = self._builder.build(method, params)
        log = logger.bind(method=method, request_id=request.id)
        log.debug("rpc_call_built", state=CallState.BUILT.value)

        async with self._dispatcher.dispatch(request, AcceptMode.EVENT_STREAM) as response:
            if is_json_content_type(response.headers.get("content-type", "")):
                result = await self._demux.resolve(response, request)
                if parse_result is not None:
                    try:
                        result = parse_result(result)
                    except StreamFrameError as e:
                        raise ProtocolError(e.message, cause=e) from e
                yield result
                return

            async with aclosing(self._decoder.decode(response, request, parse_result)) as results:
                async for result in results:
                    yield result

        log.debug("rpc_call_resolved", state=CallState.RESOLVED.value)

    async def send_message(self, params: MessageSendParams | dict[str, Any]) -> Task | Message | None:
        """Send a message to the agent (message/send).

        Returns:
            The Task or Message the agent answered with, or None
        """
        result = await self.send(MESSAGE_SEND, params)
        return parse_send_result(result)

    def stream_message(
        self,
        params: MessageSendParams | dict[str, Any],
    ) -> AsyncIterator[StreamEvent]:
        """Send a message and subscribe to task updates (message/stream).

        A status update with ``final`` set is the agent's last word; callers
        normally stop iterating there.
        """
        return self.send_and_subscribe(MESSAGE_STREAM, params, parse_result=parse_stream_event)

    async def get_task(self, params: TaskQueryParams | dict[str, Any]) -> Task | None:
        """Retrieve the current state of a task (tasks/get)."""
        return _parse_model(Task, await self.send(TASKS_GET, params))

    async def cancel_task(self, params: TaskIdParams | dict[str, Any]) -> Task | None:
        """Cancel a running task (tasks/cancel)."""
        return _parse_model(Task, await self.send(TASKS_CANCEL, params))

    async def set_task_push_notification(
        self,
        params: TaskPushNotificationConfig | dict[str, Any],
    ) -> TaskPushNotificationConfig | None:
        """Set or update the push notification config of a task."""
        result = await self.send(TASKS_PUSH_NOTIFICATION_SET, params)
        return _parse_model(TaskPushNotificationConfig, result)

    async def get_task_push_notification(
        self,
        params: TaskIdParams | dict[str, Any],
    ) -> TaskPushNotificationConfig | None:
        """Retrieve the push notification config of a task."""
        result = await self.send(TASKS_PUSH_NOTIFICATION_GET, params)
        return _parse_model(TaskPushNotificationConfig, result)

    def resubscribe_task(
        self,
        params: TaskQueryParams | dict[str, Any],
    ) -> AsyncIterator[StreamEvent]:
        """Resume the update stream of a task after a dropped connection."""
        return self.send_and_subscribe(TASKS_RESUBSCRIBE, params, parse_result=parse_stream_event)
