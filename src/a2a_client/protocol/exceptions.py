"""Protocol layer exceptions.

Two families live here: `ProtocolError` for peers that break the JSON-RPC
2.0 envelope rules, and `RpcError` for well-formed error objects returned
by the peer. The latter keep code, message and data exactly as received.
"""

from __future__ import annotations

from typing import Any

from a2a_client.exceptions import A2AClientError
from a2a_client.protocol.models import ErrorCode, JsonRpcError


class ProtocolError(A2AClientError):
    """Peer response violates the JSON-RPC 2.0 envelope.

    Examples:
        - Response id does not match the request id
        - Missing or wrong ``jsonrpc`` version
        - Neither ``result`` nor ``error`` present
        - Unexpected content type or unparseable body
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class StreamFrameError(ProtocolError):
    """One malformed frame inside an otherwise healthy event stream.

    The streaming decoder catches this, logs it and moves on to the next
    frame. It never reaches the caller.
    """

    pass


class RpcError(A2AClientError):
    """JSON-RPC error object returned by the peer.

    Args:
        code: JSON-RPC error code
        message: Error message as sent by the peer
        data: Optional additional data as sent by the peer

    Attributes:
        code: Error code
        message: Error message
        data: Additional error information (or None)
    """

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def __str__(self) -> str:
        """Return string representation of error.

        Returns:
            Formatted error message with code
        """
        return f"[{self.code}] {self.message}"

    @classmethod
    def from_error(cls, error: JsonRpcError) -> RpcError:
        """Build the most specific exception for a JSON-RPC error object.

        Unknown codes fall back to the base class so that the code space
        stays open.
        """
        error_class = _ERRORS_BY_CODE.get(error.code, RpcError)
        return error_class(error.code, error.message, error.data)


class ParseError(RpcError):
    """Peer could not parse the request JSON (-32700)."""


class InvalidRequestError(RpcError):
    """Request envelope rejected by the peer (-32600)."""


class MethodNotFoundError(RpcError):
    """Method does not exist on the peer (-32601)."""


class InvalidParamsError(RpcError):
    """Method parameters rejected by the peer (-32602)."""


class InternalError(RpcError):
    """Peer failed internally while processing the request (-32603)."""


class TaskNotFoundError(RpcError):
    """Referenced task does not exist (-32001)."""


class TaskNotCancelableError(RpcError):
    """Task is in a state that cannot be canceled (-32002)."""


class PushNotificationNotSupportedError(RpcError):
    """Agent does not support push notifications (-32003)."""


class UnsupportedOperationError(RpcError):
    """Agent does not support the requested operation (-32004)."""


_ERRORS_BY_CODE: dict[int, type[RpcError]] = {
    ErrorCode.PARSE_ERROR: ParseError,
    ErrorCode.INVALID_REQUEST: InvalidRequestError,
    ErrorCode.METHOD_NOT_FOUND: MethodNotFoundError,
    ErrorCode.INVALID_PARAMS: InvalidParamsError,
    ErrorCode.INTERNAL_ERROR: InternalError,
    ErrorCode.TASK_NOT_FOUND: TaskNotFoundError,
    ErrorCode.TASK_NOT_CANCELABLE: TaskNotCancelableError,
    ErrorCode.PUSH_NOTIFICATION_NOT_SUPPORTED: PushNotificationNotSupportedError,
    ErrorCode.UNSUPPORTED_OPERATION: UnsupportedOperationError,
}
