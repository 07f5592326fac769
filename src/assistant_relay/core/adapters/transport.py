"""Authenticated JSON transport with a fixed rate-limit retry policy."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx

from ..errors import ResponseParseError, TransportError

LOGGER = logging.getLogger(__name__)

RATE_LIMIT_STATUS = 429
MAX_RATE_LIMIT_RETRIES = 2
RATE_LIMIT_DELAY = 60.0

Sleep = Callable[[float], Awaitable[None]]


def build_headers(api_key: str) -> dict[str, str]:
    """Return the fixed request headers for the assistants beta API."""

    return {
        "OpenAI-Beta": "assistants=v2",
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}",
    }


class AssistantTransport:
    """Issue JSON requests against the assistants API.

    Only HTTP 429 is retried, after :data:`RATE_LIMIT_DELAY` seconds and at most
    :data:`MAX_RATE_LIMIT_RETRIES` times. Every other failure is raised as a
    :class:`TransportError` carrying the remote error message when the body
    provides one.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        sleep: Sleep = asyncio.sleep,
        max_retries: int = MAX_RATE_LIMIT_RETRIES,
        retry_delay: float = RATE_LIMIT_DELAY,
    ) -> None:
        if max_retries < 0:
            msg = "max_retries cannot be negative"
            raise ValueError(msg)
        self._client = client
        self._sleep = sleep
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def post(self, path: str, body: Mapping[str, Any] | None = None) -> Any:
        return await self.request("POST", path, body if body is not None else {})

    async def request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        retries = 0
        while True:
            try:
                response = await self._client.request(
                    method,
                    path,
                    json=dict(body) if body is not None else None,
                )
            except httpx.RequestError as exc:
                message = str(exc) or type(exc).__name__
                LOGGER.error("API call failed: %s %s (%s)", method, path, message)
                raise TransportError(method, path, message) from exc

            if response.status_code == RATE_LIMIT_STATUS and retries < self._max_retries:
                retries += 1
                LOGGER.warning(
                    "Rate limit hit (429), retrying in %s seconds... (attempt %s/%s)",
                    self._retry_delay,
                    retries,
                    self._max_retries,
                )
                await self._sleep(self._retry_delay)
                continue

            if response.is_success:
                return self._decode(response, method, path)

            message = _remote_error_message(response)
            LOGGER.error(
                "API call failed: %s %s status=%s body=%s",
                method,
                path,
                response.status_code,
                response.text,
            )
            raise TransportError(method, path, message, status_code=response.status_code)

    def _decode(self, response: httpx.Response, method: str, path: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            msg = f"{method} {path} returned a non-JSON body"
            raise ResponseParseError("response", msg) from exc


def _remote_error_message(response: httpx.Response) -> str:
    fallback = f"Request failed with status code {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback

    if isinstance(payload, Mapping):
        error = payload.get("error")
        if isinstance(error, Mapping):
            message = error.get("message")
            if isinstance(message, str) and message:
                return message
    return fallback


__all__ = [
    "AssistantTransport",
    "MAX_RATE_LIMIT_RETRIES",
    "RATE_LIMIT_DELAY",
    "RATE_LIMIT_STATUS",
    "Sleep",
    "build_headers",
]
