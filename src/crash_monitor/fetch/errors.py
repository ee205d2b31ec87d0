from __future__ import annotations

import json


class FetchError(Exception):
    """Base class for indicator fetch failures; ``status_code`` is the HTTP status reported to callers."""

    status_code = 500


class InvalidIndicatorError(FetchError):
    status_code = 400

    def __init__(self, indicator_id: object = None):
        self.indicator_id = indicator_id
        super().__init__("Invalid indicator ID")


class RateLimitExceededError(FetchError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Rate limit exceeded after retries")


class UpstreamAPIError(FetchError):
    def __init__(self, upstream_status: int, body: str):
        self.upstream_status = upstream_status
        self.body = body
        super().__init__(body)


class MalformedResponseError(FetchError):
    pass


class InvalidJSONResponseError(MalformedResponseError, json.JSONDecodeError):
    """Raised when the located object is not valid JSON; still catchable as ``json.JSONDecodeError``."""

    def __init__(self, cause: json.JSONDecodeError):
        json.JSONDecodeError.__init__(self, cause.msg, cause.doc, cause.pos)


class ProviderConnectionError(FetchError):
    """The model API could not be reached (connection refused, DNS, timeout)."""
