from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from railops.core.config import Settings
from railops.core.metrics import observe_provider_request
from railops.services.errors import ProviderError

logger = logging.getLogger(__name__)


class GenerativeTextProvider:
    """Async wrapper around the Gemini generateContent REST endpoint.

    `generate` returns raw model text. Every failure (missing key,
    transport, HTTP status, timeout, unexpected envelope) surfaces as
    ProviderError; interpreting the text is left to the caller.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self._api_key = settings.gemini_api_key
        self._url = settings.provider_url
        self._timeout = settings.provider_timeout_seconds
        self.client = client or httpx.AsyncClient(
            timeout=self._timeout,
            headers={"Content-Type": "application/json"},
        )

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def generate(self, prompt: str, *, operation: str = "generate") -> str:
        """Send a prompt and return the first candidate's text."""
        start = time.perf_counter()
        if not self.enabled:
            observe_provider_request(operation, "disabled", 0.0)
            raise ProviderError("Generative text provider is not configured.")

        try:
            body = await asyncio.wait_for(self._post(prompt), timeout=self._timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            observe_provider_request(operation, "timeout", time.perf_counter() - start)
            raise ProviderError(f"Provider timed out during {operation}.") from exc
        except httpx.HTTPStatusError as exc:
            observe_provider_request(operation, "error", time.perf_counter() - start)
            raise ProviderError(
                f"Provider returned HTTP {exc.response.status_code} during {operation}."
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            observe_provider_request(operation, "error", time.perf_counter() - start)
            raise ProviderError(f"Failed to reach provider during {operation}.") from exc

        try:
            text = body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            observe_provider_request(operation, "error", time.perf_counter() - start)
            raise ProviderError(
                f"Provider response for {operation} had no candidate text."
            ) from exc
        if not isinstance(text, str):
            observe_provider_request(operation, "error", time.perf_counter() - start)
            raise ProviderError(f"Provider candidate text for {operation} is not a string.")

        observe_provider_request(operation, "success", time.perf_counter() - start)
        return text

    async def _post(self, prompt: str) -> Any:
        response = await self.client.post(
            self._url,
            params={"key": self._api_key},
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )
        response.raise_for_status()
        return response.json()

    async def aclose(self) -> None:
        await self.client.aclose()


__all__ = ["GenerativeTextProvider"]
