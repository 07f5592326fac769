"""Delegate chat conversations to hosted assistants over the thread/run API.

The package exposes an adapter that replays a conversation onto a fresh remote
thread, polls the resulting run until it settles, and yields the assistant's
answer as a short event stream, together with the configuration binder and a
small command line front end.
"""

from __future__ import annotations

from .config import AssistantConfig
from .core import AssistantAdapterError, ContentPart, Message, MessageRole
from .core.adapters import OpenAIAssistantAdapter, TextEvent, UsageEvent

__all__ = [
    "AssistantAdapterError",
    "AssistantConfig",
    "ContentPart",
    "Message",
    "MessageRole",
    "OpenAIAssistantAdapter",
    "TextEvent",
    "UsageEvent",
]

__version__ = "0.1.0"
