"""Events emitted by the assistant adapter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True, slots=True)
class TextEvent:
    """Assistant answer for the invocation."""

    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True, slots=True)
class UsageEvent:
    """Token accounting for the invocation.

    The thread/run API does not report token counts, so the adapter emits
    zeroes for both fields.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    type: Literal["usage"] = "usage"


StreamEvent = Union[TextEvent, UsageEvent]


__all__ = ["StreamEvent", "TextEvent", "UsageEvent"]
