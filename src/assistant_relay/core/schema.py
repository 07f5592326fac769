"""Records for the remote thread, message, and run resources."""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ResponseParseError

RecordT = TypeVar("RecordT", bound=BaseModel)


class RunStatus(str, Enum):
    """Status values reported on a remote run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"


FAILURE_STATUSES = frozenset({RunStatus.FAILED.value, RunStatus.CANCELLED.value, RunStatus.EXPIRED.value})


class _RemoteRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class Thread(_RemoteRecord):
    """Remote conversation container created once per invocation."""

    id: str = Field(..., min_length=1, description="Opaque thread identifier.")
    object: str = Field("thread", description="Object type tag reported by the API.")
    created_at: Optional[int] = Field(None, description="Creation time as a unix timestamp.")


class TextValue(_RemoteRecord):
    value: str = Field(..., description="Rendered text of the content block.")
    annotations: List[Any] = Field(default_factory=list, description="Citations attached to the text.")


class MessageContent(_RemoteRecord):
    """One typed content block of a thread message."""

    type: str = Field(..., description="Content variant, only 'text' is interpreted.")
    text: Optional[TextValue] = Field(None, description="Payload for 'text' blocks.")


class ThreadMessage(_RemoteRecord):
    """Message appended to a thread by the adapter or the assistant."""

    id: str = Field(..., min_length=1)
    object: str = Field("thread.message")
    thread_id: Optional[str] = Field(None, description="Identifier of the owning thread.")
    role: str = Field("user", description="Either 'user' or 'assistant'.")
    content: List[MessageContent] = Field(default_factory=list)

    def text(self) -> str:
        """Join the values of all text blocks with newlines."""

        return "\n".join(
            block.text.value for block in self.content if block.type == "text" and block.text is not None
        )


class MessageList(_RemoteRecord):
    """Page of thread messages, newest first."""

    object: str = Field("list")
    data: List[ThreadMessage] = Field(default_factory=list)


class FunctionCall(_RemoteRecord):
    name: str = Field(..., description="Declared function name.")
    arguments: str = Field("", description="Serialized JSON arguments.")


class ToolCall(_RemoteRecord):
    """Pending tool invocation requested by the assistant."""

    id: str = Field(..., min_length=1)
    type: str = Field("function")
    function: FunctionCall


class SubmitToolOutputs(_RemoteRecord):
    tool_calls: List[ToolCall] = Field(default_factory=list)


class RequiredAction(_RemoteRecord):
    type: str = Field("submit_tool_outputs")
    submit_tool_outputs: SubmitToolOutputs = Field(default_factory=SubmitToolOutputs)


class LastError(_RemoteRecord):
    code: str = Field(..., description="Machine readable failure code.")
    message: str = Field(..., description="Human readable failure description.")


class Run(_RemoteRecord):
    """Execution of an assistant against a thread."""

    id: str = Field(..., min_length=1)
    object: str = Field("thread.run")
    status: str = Field(..., description="Remote run status, see RunStatus.")
    thread_id: Optional[str] = None
    assistant_id: Optional[str] = None
    required_action: Optional[RequiredAction] = None
    last_error: Optional[LastError] = None

    @property
    def tool_calls(self) -> List[ToolCall]:
        if self.required_action is None:
            return []
        return list(self.required_action.submit_tool_outputs.tool_calls)


def parse_record(model: Type[RecordT], payload: Any, *, source: str) -> RecordT:
    """Validate ``payload`` as ``model`` or raise :class:`ResponseParseError`."""

    if not isinstance(payload, Mapping):
        msg = f"{source} returned {type(payload).__name__}, expected an object"
        raise ResponseParseError(model.__name__, msg)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        detail = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ResponseParseError(model.__name__, f"{source}: {detail}") from exc


__all__ = [
    "FAILURE_STATUSES",
    "FunctionCall",
    "LastError",
    "MessageContent",
    "MessageList",
    "RequiredAction",
    "Run",
    "RunStatus",
    "SubmitToolOutputs",
    "TextValue",
    "Thread",
    "ThreadMessage",
    "ToolCall",
    "parse_record",
]
