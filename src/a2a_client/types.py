"""A2A payload models.

Task, message and stream event shapes exchanged over the transport. Models
accept the camelCase names used on the wire, keep unknown fields, and dump
back by alias so they can be sent as request params unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from a2a_client.protocol.exceptions import ProtocolError, StreamFrameError


class A2AModel(BaseModel):
    """Base model for A2A wire payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class TaskState(str, Enum):
    """A2A task lifecycle states."""

    SUBMITTED = "submitted"
    WORKING = "working"
    INPUT_REQUIRED = "input-required"
    COMPLETED = "completed"
    CANCELED = "canceled"
    FAILED = "failed"
    REJECTED = "rejected"
    AUTH_REQUIRED = "auth-required"
    UNKNOWN = "unknown"


class Message(A2AModel):
    """One conversation turn.

    Parts are kept as plain dicts; their shape (text, file, data) belongs to
    the agents exchanging them.
    """

    role: Literal["user", "agent"]
    parts: list[dict[str, Any]] = Field(default_factory=list)
    message_id: str | None = None
    task_id: str | None = None
    context_id: str | None = None
    metadata: dict[str, Any] | None = None


class TaskStatus(A2AModel):
    """Current status of a task.

    Known states parse into `TaskState`; states added by newer agents are
    kept as the plain string sent on the wire.
    """

    state: TaskState | str = Field(union_mode="left_to_right")
    message: Message | None = None
    timestamp: str | None = None


class Artifact(A2AModel):
    """Content produced by a task, as an ordered list of parts."""

    parts: list[dict[str, Any]] = Field(default_factory=list)
    artifact_id: str | None = None
    name: str | None = None
    description: str | None = None
    index: int | None = None
    append: bool | None = None
    last_chunk: bool | None = None
    metadata: dict[str, Any] | None = None


class Task(A2AModel):
    """A2A task as returned by message/send, tasks/get and tasks/cancel."""

    id: str
    status: TaskStatus
    context_id: str | None = None
    artifacts: list[Artifact] | None = None
    history: list[Message] | None = None
    metadata: dict[str, Any] | None = None


class MessageSendConfiguration(A2AModel):
    """Optional per-request configuration for message/send."""

    accepted_output_modes: list[str] | None = None
    history_length: int | None = None
    blocking: bool | None = None


class MessageSendParams(A2AModel):
    """Params for message/send and message/stream."""

    message: Message
    configuration: MessageSendConfiguration | None = None
    metadata: dict[str, Any] | None = None


class TaskIdParams(A2AModel):
    """Params naming a single task."""

    id: str
    metadata: dict[str, Any] | None = None


class TaskQueryParams(TaskIdParams):
    """Params for tasks/get and tasks/resubscribe."""

    history_length: int | None = None


class PushNotificationConfig(A2AModel):
    """Where and how the agent should push task updates."""

    url: str
    token: str | None = None
    authentication: dict[str, Any] | None = None


class TaskPushNotificationConfig(A2AModel):
    """Push notification configuration bound to a task."""

    task_id: str
    push_notification_config: PushNotificationConfig


class TaskStatusUpdateEvent(A2AModel):
    """Stream event carrying task lifecycle progress."""

    status: TaskStatus
    final: bool = False
    task_id: str | None = None
    context_id: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def kind(self) -> str:
        return "status-update"


class TaskArtifactUpdateEvent(A2AModel):
    """Stream event carrying produced content."""

    artifact: Artifact
    task_id: str | None = None
    context_id: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def kind(self) -> str:
        return "artifact-update"


StreamEvent = Union[TaskStatusUpdateEvent, TaskArtifactUpdateEvent]


def parse_stream_event(result: Any) -> StreamEvent:
    """Discriminate a stream result into one of the two event variants.

    Args:
        result: The ``result`` member of one stream frame

    Returns:
        TaskStatusUpdateEvent when ``status`` is present, TaskArtifactUpdateEvent
        when ``artifact`` is present

    Raises:
        StreamFrameError: Both or neither field present, or the payload does
            not validate against the selected variant
    """
    if not isinstance(result, dict):
        raise StreamFrameError(f"Stream result must be an object, got {type(result).__name__}")

    has_status = "status" in result
    has_artifact = "artifact" in result
    if has_status == has_artifact:
        raise StreamFrameError("Stream result must carry exactly one of 'status' or 'artifact'")

    event_class: type[StreamEvent] = TaskStatusUpdateEvent if has_status else TaskArtifactUpdateEvent
    try:
        return event_class.model_validate(result)
    except ValidationError as e:
        raise StreamFrameError(f"Invalid {event_class.__name__}: {e}", cause=e) from e


def parse_send_result(result: Any) -> Task | Message | None:
    """Parse a message/send result, which is either a Task or a Message.

    Raises:
        ProtocolError: The result matches neither shape
    """
    if result is None:
        return None
    if not isinstance(result, dict):
        raise ProtocolError(f"Unexpected result type: {type(result).__name__}")

    model_class: type[Task | Message] = Task
    if result.get("kind") == "message" or "role" in result:
        model_class = Message
    try:
        return model_class.model_validate(result)
    except ValidationError as e:
        raise ProtocolError(f"Invalid {model_class.__name__} result: {e}", cause=e) from e
