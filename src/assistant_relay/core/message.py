"""Conversation schema accepted by the assistant adapter."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class MessageRole(str, Enum):
    """Roles a conversation turn can carry."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ContentPart:
    """A typed block inside a structured message.

    Only ``text`` parts contribute to the flattened prompt; other types (images,
    tool results, ...) are carried through untouched in :attr:`data`.
    """

    type: str
    text: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.type, str) or not self.type:
            msg = "content part type must be a non-empty string"
            raise ValueError(msg)
        if self.text is not None and not isinstance(self.text, str):
            msg = "content part text must be a string when provided"
            raise TypeError(msg)
        if self.type == "text" and self.text is None:
            msg = "text content parts require a text value"
            raise ValueError(msg)
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ContentPart:
        part_type = payload.get("type")
        if not isinstance(part_type, str):
            msg = "content part type must be a string"
            raise TypeError(msg)
        extra = {key: value for key, value in payload.items() if key not in {"type", "text"}}
        return cls(type=part_type, text=payload.get("text"), data=extra)


@dataclass(frozen=True, slots=True)
class Message:
    """A single prior turn of the conversation."""

    role: MessageRole
    content: str | tuple[ContentPart, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.role, MessageRole):
            object.__setattr__(self, "role", MessageRole(self.role))

        if isinstance(self.content, str):
            return

        if not isinstance(self.content, Sequence) or isinstance(self.content, (bytes, bytearray)):
            msg = "message content must be a string or a sequence of ContentPart instances"
            raise TypeError(msg)
        parts = tuple(self.content)
        for part in parts:
            if not isinstance(part, ContentPart):
                msg = "message content must contain ContentPart instances"
                raise TypeError(msg)
        object.__setattr__(self, "content", parts)

    @property
    def text_parts(self) -> tuple[str, ...]:
        """Return the text values of the ``text`` parts in order."""

        if isinstance(self.content, str):
            return (self.content,)
        return tuple(part.text for part in self.content if part.type == "text" and part.text is not None)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Message:
        """Build a message from the chat wire shape ``{"role", "content"}``."""

        raw_role = payload.get("role")
        if not isinstance(raw_role, str):
            msg = "message role must be a string"
            raise TypeError(msg)
        try:
            role = MessageRole(raw_role.strip().lower())
        except ValueError as exc:
            msg = f"unsupported role '{raw_role}'"
            raise ValueError(msg) from exc

        raw_content = payload.get("content", "")
        if isinstance(raw_content, str):
            return cls(role=role, content=raw_content)
        if isinstance(raw_content, Sequence):
            parts = []
            for item in raw_content:
                if not isinstance(item, Mapping):
                    msg = "content parts must be mappings"
                    raise TypeError(msg)
                parts.append(ContentPart.from_mapping(item))
            return cls(role=role, content=tuple(parts))

        msg = "message content must be a string or a list of parts"
        raise TypeError(msg)


__all__ = ["ContentPart", "Message", "MessageRole"]
