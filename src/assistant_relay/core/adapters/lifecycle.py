"""Run lifecycle state machine and tool-output handling."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import Enum
from typing import Union

from ..errors import ToolExecutionError
from ..schema import FAILURE_STATUSES, RunStatus, ToolCall

LOGGER = logging.getLogger(__name__)

POLL_INTERVAL = 1.0
POLL_BUDGET = 300.0
PLACEHOLDER_TOOL_OUTPUT = "Tool execution not implemented"

ToolExecutor = Callable[[ToolCall], Union[str, Awaitable[str]]]


class RunPhase(str, Enum):
    """Local view of where a run stands while it is being polled."""

    QUEUED = "queued"
    RUNNING = "running"
    REQUIRES_ACTION = "requires_action"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_PHASES


_TERMINAL_PHASES = frozenset({RunPhase.COMPLETED, RunPhase.FAILED, RunPhase.TIMED_OUT})


def advance_phase(
    phase: RunPhase,
    remote_status: str,
    elapsed: float,
    budget: float = POLL_BUDGET,
) -> RunPhase:
    """Return the phase reached after observing ``remote_status`` at ``elapsed``.

    Terminal phases are sticky. A remote terminal status wins over the budget
    so a run that completes on the last allowed poll still counts as
    completed.
    """

    if phase.is_terminal:
        return phase

    if remote_status in FAILURE_STATUSES:
        return RunPhase.FAILED
    if remote_status == RunStatus.COMPLETED.value:
        return RunPhase.COMPLETED

    if elapsed >= budget:
        return RunPhase.TIMED_OUT
    if remote_status == RunStatus.REQUIRES_ACTION.value:
        return RunPhase.REQUIRES_ACTION
    if remote_status == RunStatus.QUEUED.value:
        return RunPhase.QUEUED
    return RunPhase.RUNNING


def placeholder_tool_executor(call: ToolCall) -> str:
    """Answer every tool call with a fixed placeholder without running anything."""

    LOGGER.warning(
        "Tool execution is not implemented, answering call %s (%s) with a placeholder",
        call.id,
        call.function.name,
    )
    return PLACEHOLDER_TOOL_OUTPUT


async def collect_tool_outputs(
    tool_calls: Sequence[ToolCall],
    executor: ToolExecutor,
) -> list[dict[str, str]]:
    """Run ``executor`` for each tool call and build the submission payload."""

    outputs: list[dict[str, str]] = []
    for call in tool_calls:
        try:
            result = executor(call)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            raise ToolExecutionError(call.id, call.function.name) from exc

        if not isinstance(result, str):
            msg = f"tool executor must return a string, got {type(result).__name__}"
            raise ToolExecutionError(call.id, call.function.name) from TypeError(msg)
        outputs.append({"tool_call_id": call.id, "output": result})
    return outputs


__all__ = [
    "PLACEHOLDER_TOOL_OUTPUT",
    "POLL_BUDGET",
    "POLL_INTERVAL",
    "RunPhase",
    "ToolExecutor",
    "advance_phase",
    "collect_tool_outputs",
    "placeholder_tool_executor",
]
