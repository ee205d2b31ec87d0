from __future__ import annotations

import math
import re
from typing import Any, Optional

# Leading ASCII numeric prefix, so "1,400" reads as 1 and "12.5조" as 12.5.
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def parse_value(raw: Any) -> Optional[float]:
    """Return the numeric reading held in ``raw`` or None when it has none."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            v = float(raw)
        except OverflowError:
            return None
    else:
        match = _NUMERIC_PREFIX.match(str(raw))
        if not match:
            return None
        v = float(match.group(1))
    if math.isnan(v) or math.isinf(v):
        return None
    return v


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))
