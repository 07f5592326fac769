from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import pytest

from assistant_relay import cli
from assistant_relay.cli import _current_time_instructions, main
from tests.fixtures.assistant_fake import ASSISTANT_ID, BASE_URL, THREAD_ID, FakeAssistantAPI, RecordingSleep

ENV = {"BASE_URL": BASE_URL, "API_KEY": "sk-env", "ASSISTANT_ID": ASSISTANT_ID}


@pytest.fixture
def patched_api(monkeypatch: pytest.MonkeyPatch) -> FakeAssistantAPI:
    api = FakeAssistantAPI()
    real_adapter = cli.OpenAIAssistantAdapter

    def factory(config):
        return real_adapter(config, transport=api.transport, sleep=RecordingSleep())

    monkeypatch.setattr("assistant_relay.cli.OpenAIAssistantAdapter", factory)
    return api


def test_current_time_instructions_format():
    text = _current_time_instructions(datetime(2024, 5, 17, 9, 30, 5))
    assert text == "The current time is: 2024-05-17 09:30:05"


def test_cli_ask_prints_answer(patched_api, capsys):
    exit_code = main(["ask", "Hello there", "--instructions", "be nice"], environ=ENV)

    assert exit_code == 0
    assert capsys.readouterr().out == "Hello! How can I help?\n"
    assert patched_api.bodies("POST", f"/threads/{THREAD_ID}/messages") == [
        {"role": "user", "content": "\n\nuser: Hello there"}
    ]
    assert patched_api.bodies("POST", f"/threads/{THREAD_ID}/runs") == [
        {"assistant_id": ASSISTANT_ID, "additional_instructions": "be nice"}
    ]


def test_cli_ask_defaults_instructions_to_current_time(patched_api):
    assert main(["ask", "Hi", "--system", "Sys"], environ=ENV) == 0

    body = patched_api.bodies("POST", f"/threads/{THREAD_ID}/runs")[0]
    assert body["additional_instructions"].startswith("The current time is: ")


def test_cli_ask_includes_history(patched_api, tmp_path: Path):
    history = tmp_path / "history.json"
    history.write_text(
        json.dumps(
            [
                {"role": "user", "content": "Earlier question"},
                {"role": "assistant", "content": [{"type": "text", "text": "Earlier answer"}]},
            ]
        ),
        encoding="utf-8",
    )

    assert main(["ask", "Follow up", "-s", "Sys", "--history", str(history)], environ=ENV) == 0

    content = patched_api.bodies("POST", f"/threads/{THREAD_ID}/messages")[0]["content"]
    assert content == "Sys\n\nuser: Earlier question\n\nassistant: Earlier answer\n\nuser: Follow up"


def test_cli_ask_reports_missing_assistant_id(patched_api, capsys):
    exit_code = main(["ask", "Hi"], environ={"API_KEY": "sk-env", "BASE_URL": BASE_URL})

    assert exit_code == 1
    assert "OpenAI Assistant ID is required" in capsys.readouterr().err
    assert patched_api.requests == []


def test_cli_flags_override_environment(patched_api):
    assert main(["ask", "Hi", "--assistant-id", "asst_override", "--api-key", "sk-flag"], environ=ENV) == 0

    body = patched_api.bodies("POST", f"/threads/{THREAD_ID}/runs")[0]
    assert body["assistant_id"] == "asst_override"
    assert patched_api.requests[0].headers["Authorization"] == "Bearer sk-flag"


def test_cli_info_prints_model_info(capsys):
    exit_code = main(["info", "--assistant-id", "asst_info"], environ={})

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "id": "asst_info",
        "max_tokens": 16384,
        "context_window": 128000,
        "supports_prompt_cache": False,
        "supports_images": False,
    }


def test_cli_rejects_invalid_timeout():
    with pytest.raises(SystemExit) as excinfo:
        main(["info", "--timeout", "0"], environ={})
    assert excinfo.value.code == 2


def test_cli_rejects_missing_history_file(patched_api, tmp_path: Path, capsys):
    missing = tmp_path / "absent.json"

    with pytest.raises(SystemExit) as excinfo:
        main(["ask", "Hello", "--history", str(missing)], environ=ENV)

    assert excinfo.value.code == 2
    assert "cannot read history file" in capsys.readouterr().err
    assert patched_api.requests == []
