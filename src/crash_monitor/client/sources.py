from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

import requests

from crash_monitor.config import Settings
from crash_monitor.fetch.errors import FetchError
from crash_monitor.fetch.service import IndicatorFetchService


class IndicatorSource(Protocol):
    def fetch(self, indicator_id: str) -> Dict[str, Any]:
        raise NotImplementedError


class HttpIndicatorSource:
    """Calls a running fetch service over HTTP, the way the browser dashboard does."""

    def __init__(self, service_url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        self.service_url = service_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, indicator_id: str) -> Dict[str, Any]:
        response = self.session.post(
            self.service_url,
            headers={"Content-Type": "application/json"},
            json={"indicatorId": indicator_id},
            timeout=self.timeout,
        )
        if not response.ok:
            try:
                err = response.json()
            except ValueError:
                err = {}
            message = err.get("error") if isinstance(err, dict) else None
            raise FetchError(message or "API error")
        return response.json()


class ServiceIndicatorSource:
    def __init__(self, service: IndicatorFetchService):
        self.service = service

    def fetch(self, indicator_id: str) -> Dict[str, Any]:
        return self.service.fetch(indicator_id)


def source_from_settings(settings: Settings) -> IndicatorSource:
    if settings.service_url:
        return HttpIndicatorSource(settings.service_url, timeout=settings.timeout_seconds)
    return ServiceIndicatorSource(IndicatorFetchService.from_settings(settings))
