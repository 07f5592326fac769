"""Adapter interface shared by provider implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from dataclasses import dataclass

from ..message import Message
from .events import StreamEvent


@dataclass(frozen=True, slots=True)
class ModelInfo:
    """Static capabilities advertised for the configured model."""

    id: str
    max_tokens: int
    context_window: int
    supports_prompt_cache: bool = False
    supports_images: bool = False


class ModelAdapter(ABC):
    """Abstract interface for provider-specific adapters."""

    @abstractmethod
    def stream(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        /,
    ) -> AsyncIterator[StreamEvent]:
        """Return an async iterator over the events answering the conversation."""

    @abstractmethod
    def model_info(self) -> ModelInfo:
        """Describe the model the adapter talks to."""
