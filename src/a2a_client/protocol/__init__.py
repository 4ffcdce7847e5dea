"""Protocol layer for A2A client.

This module handles JSON-RPC 2.0 with no knowledge of HTTP status handling
or authentication. It is responsible for:
- Request envelope building and correlation ids
- Response envelope validation (version, id match, result vs error)
- Single-document and event-stream response decoding
- Protocol and RPC error translation
"""

from a2a_client.protocol.models import (
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
)
from a2a_client.protocol.exceptions import (
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    PushNotificationNotSupportedError,
    RpcError,
    StreamFrameError,
    TaskNotCancelableError,
    TaskNotFoundError,
    UnsupportedOperationError,
)
from a2a_client.protocol.jsonrpc import (
    RequestBuilder,
    ResponseDemultiplexer,
    parse_response_envelope,
)
from a2a_client.protocol.streaming import StreamDecoder

__all__ = [
    # Models
    "ErrorCode",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    # Exceptions
    "ProtocolError",
    "StreamFrameError",
    "RpcError",
    "ParseError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "InvalidParamsError",
    "InternalError",
    "TaskNotFoundError",
    "TaskNotCancelableError",
    "PushNotificationNotSupportedError",
    "UnsupportedOperationError",
    # Codec
    "RequestBuilder",
    "ResponseDemultiplexer",
    "StreamDecoder",
    "parse_response_envelope",
]
