"""
Thin client for the Anthropic Messages API with the web-search tool enabled.

Rate-limit handling:
- HTTP 429 is retried with a linear backoff of (attempt + 1) * backoff_ms
- only ``max_attempts`` calls are made in total; there is no wait after the last one
- any other non-2xx response fails immediately with the raw body attached
- transport failures and non-JSON success bodies are not retried either
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

import requests

from crash_monitor.config import ConfigurationError, Settings
from crash_monitor.fetch.errors import (
    MalformedResponseError,
    ProviderConnectionError,
    RateLimitExceededError,
    UpstreamAPIError,
)

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL = {"type": "web_search_20250305", "name": "web_search"}
RATE_LIMIT_STATUS = 429


class AnthropicClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        api_url: str,
        api_version: str,
        max_tokens: int = 512,
        max_attempts: int = 3,
        backoff_ms: int = 3000,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if not api_key:
            raise ConfigurationError("ANTHROPIC_API_KEY is not set")
        if max_attempts < 1:
            raise ConfigurationError("max_attempts must be at least 1")

        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.api_version = api_version
        self.max_tokens = int(max_tokens)
        self.max_attempts = int(max_attempts)
        self.backoff_ms = int(backoff_ms)
        self.timeout = timeout
        self.session = session or requests.Session()
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "AnthropicClient":
        return cls(
            api_key=settings.api_key,
            model=settings.model,
            api_url=settings.api_url,
            api_version=settings.api_version,
            max_tokens=settings.max_tokens,
            max_attempts=settings.max_attempts,
            backoff_ms=settings.backoff_ms,
            timeout=settings.timeout_seconds,
            **kwargs,
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    def _body(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "tools": [dict(WEB_SEARCH_TOOL)],
            "messages": [{"role": "user", "content": prompt}],
        }

    def backoff_seconds(self, attempt: int) -> float:
        return (attempt + 1) * self.backoff_ms / 1000.0

    def create_message(self, prompt: str) -> Dict[str, Any]:
        for attempt in range(self.max_attempts):
            try:
                response = self.session.post(
                    self.api_url,
                    headers=self._headers(),
                    json=self._body(prompt),
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise ProviderConnectionError(f"Model API unreachable: {e}") from e

            if response.status_code == RATE_LIMIT_STATUS:
                if attempt + 1 >= self.max_attempts:
                    break
                wait = self.backoff_seconds(attempt)
                logger.warning(f"Rate limited, waiting {int(wait * 1000)}ms... (attempt {attempt + 1}/{self.max_attempts})")
                self._sleep(wait)
                continue

            if not response.ok:
                raise UpstreamAPIError(response.status_code, response.text)

            try:
                return response.json()
            except ValueError as e:
                raise MalformedResponseError("Model API returned a non-JSON body") from e

        raise RateLimitExceededError(self.max_attempts)
