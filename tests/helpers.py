"""Shared fakes for HTTP responses and sleeps."""

from __future__ import annotations

import json
from typing import Any, List
from unittest.mock import MagicMock


def make_response(status_code: int, payload: Any = None, text: str | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if payload is None and text is None:
        payload = {}
    resp.text = text if text is not None else json.dumps(payload)
    if payload is not None:
        resp.json.return_value = payload
    else:
        resp.json.side_effect = ValueError("not json")
    return resp


def text_message(*texts: str) -> dict:
    return {
        "id": "msg_test",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": t} for t in texts],
    }


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
