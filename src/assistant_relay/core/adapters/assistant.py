"""Adapter delegating conversations to a hosted assistant via threads and runs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

import httpx

from ...config import AssistantConfig
from ..errors import ConfigError, EmptyResponseError, RunFailure, RunTimeoutError
from ..message import Message
from ..schema import MessageList, Run, Thread, ThreadMessage, parse_record
from .base import ModelAdapter, ModelInfo
from .events import StreamEvent, TextEvent, UsageEvent
from .lifecycle import (
    POLL_BUDGET,
    POLL_INTERVAL,
    RunPhase,
    ToolExecutor,
    advance_phase,
    collect_tool_outputs,
    placeholder_tool_executor,
)
from .transport import AssistantTransport, Sleep, build_headers
from .utils import flatten_conversation

LOGGER = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 16384
DEFAULT_CONTEXT_WINDOW = 128000


class OpenAIAssistantAdapter(ModelAdapter):
    """Answer a conversation by running a configured assistant on a fresh thread.

    Each call to :meth:`stream` creates its own thread, posts the flattened
    conversation as one user message, starts a run, polls it until it reaches
    a terminal status, and reads back the newest assistant message. The
    returned iterator yields a :class:`TextEvent` and a :class:`UsageEvent`,
    and only after every remote step has succeeded.
    """

    def __init__(
        self,
        config: AssistantConfig,
        *,
        tool_executor: ToolExecutor | None = None,
        sleep: Sleep = asyncio.sleep,
        transport: httpx.AsyncBaseTransport | None = None,
        poll_interval: float = POLL_INTERVAL,
        poll_budget: float = POLL_BUDGET,
    ) -> None:
        if poll_interval <= 0:
            msg = "poll_interval must be positive"
            raise ValueError(msg)
        if poll_budget <= 0:
            msg = "poll_budget must be positive"
            raise ValueError(msg)

        self._config = config
        self._tool_executor = tool_executor or placeholder_tool_executor
        self._sleep = sleep
        self._transport = transport
        self._poll_interval = poll_interval
        self._poll_budget = poll_budget

    def model_info(self) -> ModelInfo:
        # The model is configured on the remote assistant and never exposed.
        return ModelInfo(
            id=self._config.assistant_id,
            max_tokens=DEFAULT_MAX_TOKENS,
            context_window=DEFAULT_CONTEXT_WINDOW,
            supports_prompt_cache=False,
        )

    def stream(
        self,
        system_prompt: str,
        messages: Sequence[Message],
        /,
    ) -> AsyncIterator[StreamEvent]:
        return self._run(system_prompt, tuple(messages))

    async def complete(self, system_prompt: str, messages: Sequence[Message]) -> str:
        """Return only the assistant text for the conversation."""

        text = ""
        async for event in self.stream(system_prompt, messages):
            if isinstance(event, TextEvent):
                text = event.text
        return text

    async def _run(
        self,
        system_prompt: str,
        messages: tuple[Message, ...],
    ) -> AsyncIterator[StreamEvent]:
        if not self._config.assistant_id:
            raise ConfigError("assistant_id", "OpenAI Assistant ID is required")

        LOGGER.debug("Starting assistant invocation with %s", dict(self._config.redacted()))

        async with self._open_client() as client:
            transport = AssistantTransport(client, sleep=self._sleep)
            answer = await self._answer(transport, system_prompt, messages)

        yield TextEvent(text=answer)
        yield UsageEvent(input_tokens=0, output_tokens=0)

    def _open_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=build_headers(self._config.api_key),
            timeout=self._config.request_timeout,
            transport=self._transport,
        )

    async def _answer(
        self,
        transport: AssistantTransport,
        system_prompt: str,
        messages: tuple[Message, ...],
    ) -> str:
        LOGGER.info("Creating new thread...")
        thread = parse_record(Thread, await transport.post("/threads", {}), source="POST /threads")
        LOGGER.info("Thread created: %s", thread.id)

        full_message = flatten_conversation(system_prompt, messages)
        messages_path = f"/threads/{thread.id}/messages"
        LOGGER.info("Adding message to thread %s", thread.id)
        parse_record(
            ThreadMessage,
            await transport.post(messages_path, {"role": "user", "content": full_message}),
            source=f"POST {messages_path}",
        )

        run = await self._create_run(transport, thread.id)
        run = await self._poll_run(transport, thread.id, run)

        LOGGER.info("Run completed successfully, retrieving messages...")
        listing = parse_record(MessageList, await transport.get(messages_path), source=f"GET {messages_path}")
        assistant_messages = [message for message in listing.data if message.role == "assistant"]
        if not assistant_messages:
            raise EmptyResponseError(thread.id)

        text = assistant_messages[0].text()
        LOGGER.info("Response received, length: %s characters", len(text))
        return text

    async def _create_run(self, transport: AssistantTransport, thread_id: str) -> Run:
        body: dict[str, Any] = {"assistant_id": self._config.assistant_id}
        if self._config.additional_instructions:
            body["additional_instructions"] = self._config.additional_instructions

        path = f"/threads/{thread_id}/runs"
        LOGGER.info("Creating run with assistant %s", self._config.assistant_id)
        run = parse_record(Run, await transport.post(path, body), source=f"POST {path}")
        LOGGER.info("Run created: %s, initial status: %s", run.id, run.status)
        return run

    async def _poll_run(self, transport: AssistantTransport, thread_id: str, run: Run) -> Run:
        run_path = f"/threads/{thread_id}/runs/{run.id}"
        phase = RunPhase.COMPLETED if run.status == "completed" else RunPhase.QUEUED
        current = run
        elapsed = 0.0

        while not phase.is_terminal:
            await self._sleep(self._poll_interval)
            elapsed += self._poll_interval

            previous_status = current.status
            current = parse_record(Run, await transport.get(run_path), source=f"GET {run_path}")
            if current.status != previous_status:
                LOGGER.debug("Run status changed: %s", current.status)

            phase = advance_phase(phase, current.status, elapsed, self._poll_budget)

            if phase is RunPhase.REQUIRES_ACTION and current.required_action is not None:
                await self._submit_tool_outputs(transport, run_path, current)

        if phase is RunPhase.FAILED:
            last_error = current.last_error
            LOGGER.error(
                "Run %s %s: %s",
                current.id,
                current.status,
                last_error.model_dump() if last_error else "No error details available",
            )
            raise RunFailure(
                current.status,
                code=last_error.code if last_error else None,
                message=last_error.message if last_error else None,
            )

        if phase is RunPhase.TIMED_OUT:
            LOGGER.error("Run timeout after %ss", elapsed)
            raise RunTimeoutError(elapsed, self._poll_budget, current.status)

        return current

    async def _submit_tool_outputs(self, transport: AssistantTransport, run_path: str, run: Run) -> None:
        LOGGER.info("Run requires action, handling %s tool call(s)...", len(run.tool_calls))
        outputs = await collect_tool_outputs(run.tool_calls, self._tool_executor)
        await transport.post(f"{run_path}/submit_tool_outputs", {"tool_outputs": outputs})
        LOGGER.info("Tool outputs submitted")


__all__ = ["OpenAIAssistantAdapter"]
