"""JSON-RPC 2.0 protocol models.

This module defines Pydantic models for the JSON-RPC 2.0 envelope used by
the A2A transport. Requests are built here and responses are validated
against these models before any result reaches the caller.

References:
    JSON-RPC 2.0 Specification: https://www.jsonrpc.org/specification
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator

JSONRPC_VERSION = "2.0"


class ErrorCode(int, Enum):
    """Well-known JSON-RPC error codes.

    The code space is open: peers may send any integer, and unknown codes
    are still carried through `JsonRpcError.code` as plain ints.
    """

    # Standard JSON-RPC 2.0 errors
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # A2A application errors (reserved range -32000 to -32099)
    TASK_NOT_FOUND = -32001
    TASK_NOT_CANCELABLE = -32002
    PUSH_NOTIFICATION_NOT_SUPPORTED = -32003
    UNSUPPORTED_OPERATION = -32004


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object.

    Attributes:
        code: Error code (integer, any value accepted)
        message: Human-readable error message
        data: Additional error information of any JSON type (optional)

    Example:
        >>> error = JsonRpcError(code=-32001, message="Task not found")
        >>> error.code
        -32001
    """

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any = Field(default=None, description="Additional error data")


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request object.

    Attributes:
        jsonrpc: Protocol version (always "2.0")
        id: Correlation id, generated per call
        method: Method name to invoke
        params: Method parameters (object, array or primitive)

    Example:
        >>> request = JsonRpcRequest(id=1, method="tasks/get", params={"id": "t1"})
        >>> request.to_wire()
        {'jsonrpc': '2.0', 'id': 1, 'method': 'tasks/get', 'params': {'id': 't1'}}
    """

    jsonrpc: Literal["2.0"] = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    id: int | str = Field(..., description="Request ID")
    method: str = Field(..., description="Method name to invoke")
    params: Any = Field(default=None, description="Method parameters")

    model_config = ConfigDict(frozen=True)

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        """Reject empty method names."""
        if not v.strip():
            raise ValueError("Method name must be a non-empty string")
        return v

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the dict sent as the HTTP body."""
        return self.model_dump(mode="json", exclude_none=True)


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object.

    Whether ``result`` was present on the wire is tracked separately from
    its value, because a JSON ``null`` result is still a result.

    Attributes:
        jsonrpc: Protocol version (always "2.0")
        id: Correlation id echoed from the request
        result: Method result (mutually exclusive with error)
        error: Error object (mutually exclusive with result)
    """

    jsonrpc: Literal["2.0"] = Field(..., description="JSON-RPC version")
    id: StrictInt | StrictStr | None = Field(..., description="Request ID")
    result: Any = Field(default=None, description="Method result")
    error: JsonRpcError | None = Field(default=None, description="Error object")

    @property
    def has_result(self) -> bool:
        """True when the wire envelope carried a ``result`` member."""
        return "result" in self.model_fields_set
