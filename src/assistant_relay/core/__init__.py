"""Core data structures, remote records, and errors for Assistant Relay."""

from __future__ import annotations

from .errors import (
    AssistantAdapterError,
    ConfigError,
    EmptyResponseError,
    ResponseParseError,
    RunFailure,
    RunTimeoutError,
    ToolExecutionError,
    TransportError,
)
from .message import ContentPart, Message, MessageRole

__all__ = [
    "AssistantAdapterError",
    "ConfigError",
    "ContentPart",
    "EmptyResponseError",
    "Message",
    "MessageRole",
    "ResponseParseError",
    "RunFailure",
    "RunTimeoutError",
    "ToolExecutionError",
    "TransportError",
]
