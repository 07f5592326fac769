"""Pure conversion helpers shared by adapter implementations."""

from __future__ import annotations

from collections.abc import Sequence

from ..message import Message


def flatten_message(message: Message) -> str:
    """Render one turn as ``"{role}: {text}"``, or ``""`` when it has no text."""

    if isinstance(message.content, str):
        return f"{message.role.value}: {message.content}"

    text_parts = message.text_parts
    if not text_parts:
        return ""
    return f"{message.role.value}: " + "\n".join(text_parts)


def flatten_conversation(system_prompt: str, messages: Sequence[Message]) -> str:
    """Collapse a system prompt and conversation into one user message body.

    The thread API receives a single message, so turn boundaries survive only
    as ``role:`` prefixes separated by blank lines. Turns without any text are
    dropped.
    """

    rendered = (flatten_message(message) for message in messages)
    conversation_text = "\n\n".join(text for text in rendered if text)
    return f"{system_prompt}\n\n{conversation_text}"


__all__ = ["flatten_conversation", "flatten_message"]
