"""Exception types raised by the assistant run adapter."""

from __future__ import annotations

PROVIDER_NAME = "OpenAI Assistant"


class AssistantAdapterError(RuntimeError):
    """Base class for failures raised while driving an assistant run.

    Every variant renders its message prefixed with the provider display name
    so callers can surface it verbatim.
    """

    provider: str = PROVIDER_NAME

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"{self.provider} error: {detail}")


class ConfigError(AssistantAdapterError):
    """Raised when a required configuration value is missing."""

    def __init__(self, field: str, detail: str | None = None) -> None:
        self.field = field
        super().__init__(detail or f"{field} is required")


class TransportError(AssistantAdapterError):
    """Raised when an HTTP call fails or keeps hitting the rate limit."""

    def __init__(
        self,
        method: str,
        path: str,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        self.method = method
        self.path = path
        self.status_code = status_code
        self.message = message
        super().__init__(f"API error: {message}")


class RunFailure(AssistantAdapterError):
    """Raised when the remote run ends in ``failed``, ``cancelled`` or ``expired``."""

    def __init__(self, status: str, *, code: str | None = None, message: str | None = None) -> None:
        self.status = status
        self.code = code
        self.message = message
        if code is None and message is None:
            details = "No error details available"
        else:
            details = f"{code or ''}: {message or ''}"
        super().__init__(f"Assistant run {status}: {details}")


class RunTimeoutError(AssistantAdapterError):
    """Raised when the poll budget runs out before the run completes."""

    def __init__(self, elapsed: float, budget: float, last_status: str) -> None:
        self.elapsed = elapsed
        self.budget = budget
        self.last_status = last_status
        super().__init__("Assistant run timeout")


class EmptyResponseError(AssistantAdapterError):
    """Raised when a completed run left no assistant message on the thread."""

    def __init__(self, thread_id: str) -> None:
        self.thread_id = thread_id
        super().__init__("No assistant response found")


class ResponseParseError(AssistantAdapterError):
    """Raised when a remote payload does not match the expected record shape."""

    def __init__(self, record: str, detail: str) -> None:
        self.record = record
        super().__init__(f"invalid {record} payload: {detail}")


class ToolExecutionError(AssistantAdapterError):
    """Raised when the configured tool executor fails for a tool call."""

    def __init__(self, tool_call_id: str, name: str) -> None:
        self.tool_call_id = tool_call_id
        self.name = name
        super().__init__(f"tool '{name}' failed for call {tool_call_id}")


__all__ = [
    "PROVIDER_NAME",
    "AssistantAdapterError",
    "ConfigError",
    "EmptyResponseError",
    "ResponseParseError",
    "RunFailure",
    "RunTimeoutError",
    "ToolExecutionError",
    "TransportError",
]
