"""A2A client: JSON-RPC 2.0 over HTTP for agent-to-agent calls.

The package is layered:
- transport: HTTP POST dispatch and the single 401-challenge retry
- protocol: JSON-RPC envelopes, single-document and event-stream decoding
- auth: the authentication capability the transport borrows
- client: the facade tying the layers together
"""

from a2a_client.auth import AuthenticationHandler, CachedHeadersAuthHandler, HttpHeaders
from a2a_client.client import A2AClient
from a2a_client.config import ClientConfig
from a2a_client.exceptions import A2AClientError
from a2a_client.protocol import (
    ErrorCode,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    JsonRpcRequest,
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
from a2a_client.transport import (
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    TransportError,
)
from a2a_client.types import (
    Artifact,
    Message,
    MessageSendConfiguration,
    MessageSendParams,
    PushNotificationConfig,
    StreamEvent,
    Task,
    TaskArtifactUpdateEvent,
    TaskIdParams,
    TaskPushNotificationConfig,
    TaskQueryParams,
    TaskState,
    TaskStatus,
    TaskStatusUpdateEvent,
)

__version__ = "0.1.0"

__all__ = [
    # Client
    "A2AClient",
    "ClientConfig",
    # Auth
    "AuthenticationHandler",
    "CachedHeadersAuthHandler",
    "HttpHeaders",
    # Errors
    "A2AClientError",
    "TransportError",
    "NetworkError",
    "RequestTimeoutError",
    "HttpStatusError",
    "ProtocolError",
    "StreamFrameError",
    "RpcError",
    "ErrorCode",
    "ParseError",
    "InvalidRequestError",
    "MethodNotFoundError",
    "InvalidParamsError",
    "InternalError",
    "TaskNotFoundError",
    "TaskNotCancelableError",
    "PushNotificationNotSupportedError",
    "UnsupportedOperationError",
    # Types
    "JsonRpcRequest",
    "Artifact",
    "Message",
    "MessageSendConfiguration",
    "MessageSendParams",
    "PushNotificationConfig",
    "StreamEvent",
    "Task",
    "TaskArtifactUpdateEvent",
    "TaskIdParams",
    "TaskPushNotificationConfig",
    "TaskQueryParams",
    "TaskState",
    "TaskStatus",
    "TaskStatusUpdateEvent",
]
