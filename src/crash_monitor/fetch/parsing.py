from __future__ import annotations

import json
import re
from typing import Any, Dict, Iterable

from crash_monitor.fetch.errors import InvalidJSONResponseError, MalformedResponseError

_FENCE = re.compile(r"```json|```")
# Non-greedy: stops at the first closing brace, so nested objects are cut short.
_FIRST_OBJECT = re.compile(r"\{[\s\S]*?\}")


def collect_text(content: Iterable[Dict[str, Any]] | None) -> str:
    """Join the text of every ``type == "text"`` block; tool-use and search-result blocks are skipped."""
    parts = []
    for block in content or []:
        if isinstance(block, dict) and block.get("type") == "text":
            parts.append(str(block.get("text", "")))
    return "".join(parts)


def extract_json_object(text: str) -> Any:
    clean = _FENCE.sub("", text or "").strip()
    match = _FIRST_OBJECT.search(clean)
    if not match:
        raise MalformedResponseError("No JSON in response")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise InvalidJSONResponseError(e) from e


def parse_message(message: Dict[str, Any]) -> Any:
    content = message.get("content") if isinstance(message, dict) else None
    if content is not None and not isinstance(content, list):
        raise MalformedResponseError("Unexpected content in response")
    return extract_json_object(collect_text(content))
