"""Adapter interfaces and the hosted assistant implementation."""

from __future__ import annotations

from .assistant import OpenAIAssistantAdapter
from .base import ModelAdapter, ModelInfo
from .events import StreamEvent, TextEvent, UsageEvent
from .lifecycle import (
    PLACEHOLDER_TOOL_OUTPUT,
    RunPhase,
    ToolExecutor,
    advance_phase,
    placeholder_tool_executor,
)
from .transport import AssistantTransport
from .utils import flatten_conversation, flatten_message

__all__ = [
    "AssistantTransport",
    "ModelAdapter",
    "ModelInfo",
    "OpenAIAssistantAdapter",
    "PLACEHOLDER_TOOL_OUTPUT",
    "RunPhase",
    "StreamEvent",
    "TextEvent",
    "ToolExecutor",
    "UsageEvent",
    "advance_phase",
    "flatten_conversation",
    "flatten_message",
    "placeholder_tool_executor",
]
