"""Configuration binding for the assistant adapter and CLI."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Any, Mapping

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_REQUEST_TIMEOUT = 600.0

SETTINGS_KEYS = {
    "base_url": "openAiAssistantBaseUrl",
    "api_key": "openAiAssistantApiKey",
    "assistant_id": "openAiAssistantId",
    "request_timeout": "apiRequestTimeout",
}

ENV_KEYS = {
    "base_url": "BASE_URL",
    "api_key": "API_KEY",
    "assistant_id": "ASSISTANT_ID",
    "request_timeout": "API_REQUEST_TIMEOUT",
}


@dataclass(frozen=True, slots=True)
class AssistantConfig:
    """Connection details for a remotely hosted assistant.

    Attributes
    ----------
    base_url:
        Root of the assistants API. Falls back to :data:`DEFAULT_BASE_URL`
        when empty; a trailing slash is removed.
    api_key:
        Bearer credential. Not validated here, the remote API rejects bad keys.
    assistant_id:
        Identifier of the assistant to run. An empty value is accepted at
        construction and rejected when an invocation starts.
    request_timeout:
        Per-request HTTP timeout in seconds.
    additional_instructions:
        Optional text appended to the assistant instructions for each run.
    """

    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    assistant_id: str = ""
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    additional_instructions: str | None = None

    def __post_init__(self) -> None:
        base_url = (self.base_url or "").strip().rstrip("/") or DEFAULT_BASE_URL
        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "api_key", self.api_key or "")
        object.__setattr__(self, "assistant_id", (self.assistant_id or "").strip())
        object.__setattr__(self, "request_timeout", _coerce_timeout(self.request_timeout))

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any],
        *,
        additional_instructions: str | None = None,
    ) -> "AssistantConfig":
        """Bind the provider fields of a settings mapping.

        Parameters
        ----------
        settings:
            Provider settings using the ``openAiAssistant*`` keys and the
            global ``apiRequestTimeout`` value.
        additional_instructions:
            Optional per-run instructions.
        """

        return cls._from_mapping(settings, SETTINGS_KEYS, additional_instructions)

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        additional_instructions: str | None = None,
    ) -> "AssistantConfig":
        """Bind configuration from ``BASE_URL``, ``API_KEY`` and ``ASSISTANT_ID``."""

        source = os.environ if environ is None else environ
        return cls._from_mapping(source, ENV_KEYS, additional_instructions)

    @classmethod
    def _from_mapping(
        cls,
        source: Mapping[str, Any],
        keys: Mapping[str, str],
        additional_instructions: str | None,
    ) -> "AssistantConfig":
        timeout = source.get(keys["request_timeout"])
        return cls(
            base_url=source.get(keys["base_url"]) or DEFAULT_BASE_URL,
            api_key=source.get(keys["api_key"]) or "",
            assistant_id=source.get(keys["assistant_id"]) or "",
            request_timeout=DEFAULT_REQUEST_TIMEOUT if timeout in (None, "") else timeout,
            additional_instructions=additional_instructions,
        )

    def redacted(self) -> Mapping[str, Any]:
        """Return a loggable view with the credential masked."""

        return {
            "base_url": self.base_url,
            "api_key": "***" if self.api_key else "",
            "assistant_id": self.assistant_id,
            "request_timeout": self.request_timeout,
        }


def _coerce_timeout(value: Any) -> float:
    msg = "request timeout must be a positive number of seconds"
    if isinstance(value, bool):
        raise ValueError(msg)
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(msg) from exc
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(msg)
    return timeout


__all__ = ["AssistantConfig", "DEFAULT_BASE_URL", "DEFAULT_REQUEST_TIMEOUT"]
