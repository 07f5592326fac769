from __future__ import annotations

import pytest

from assistant_relay.core import (
    AssistantAdapterError,
    ConfigError,
    EmptyResponseError,
    ResponseParseError,
    RunFailure,
    RunTimeoutError,
    ToolExecutionError,
    TransportError,
)


@pytest.mark.parametrize(
    "error",
    [
        ConfigError("assistant_id"),
        TransportError("GET", "/threads/t", "boom", status_code=500),
        RunFailure("failed", code="server_error", message="oops"),
        RunTimeoutError(300.0, 300.0, "in_progress"),
        EmptyResponseError("thread_1"),
        ResponseParseError("Run", "missing status"),
        ToolExecutionError("call_1", "lookup"),
    ],
)
def test_all_errors_share_provider_prefix(error: AssistantAdapterError) -> None:
    assert isinstance(error, AssistantAdapterError)
    assert isinstance(error, RuntimeError)
    assert str(error).startswith("OpenAI Assistant error: ")


def test_transport_error_keeps_structured_fields() -> None:
    error = TransportError("POST", "/threads", "Invalid key", status_code=401)

    assert (error.method, error.path, error.status_code, error.message) == ("POST", "/threads", 401, "Invalid key")
    assert error.detail == "API error: Invalid key"


def test_run_failure_without_details() -> None:
    error = RunFailure("expired")

    assert str(error) == "OpenAI Assistant error: Assistant run expired: No error details available"


def test_config_error_default_detail() -> None:
    assert str(ConfigError("assistant_id")) == "OpenAI Assistant error: assistant_id is required"
