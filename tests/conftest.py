from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from tests.fixtures.assistant_fake import FakeAssistantAPI, RecordingSleep  # noqa: E402


@pytest.fixture
def fake_api() -> FakeAssistantAPI:
    """Assistants API that completes after one in-progress poll."""

    return FakeAssistantAPI()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
