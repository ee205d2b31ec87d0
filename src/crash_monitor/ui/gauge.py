from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from crash_monitor.core.values import parse_value
from crash_monitor.domain.indicators import Indicator
from crash_monitor.domain.levels import RISK_LEVEL_PROFILES

GAUGE_HEADROOM = 1.5


@dataclass(frozen=True)
class GaugeGeometry:
    scale_max: float
    safe_pct: float
    warn_pct: float
    danger_pct: float
    marker_pct: float | None


def indicator_gauge(indicator: Indicator, raw: Any) -> GaugeGeometry:
    """Segment widths and marker position, in percent, for an indicator card bar."""
    scale_max = indicator.danger * GAUGE_HEADROOM
    safe_pct = min(indicator.warn / scale_max * 100.0, 100.0)
    warn_pct = min((indicator.danger - indicator.warn) / scale_max * 100.0, 100.0)
    danger_pct = 100.0 - safe_pct - warn_pct

    v = parse_value(raw)
    marker = None
    if v is not None and v > 0:
        marker = min(v / scale_max * 100.0, 100.0)

    return GaugeGeometry(
        scale_max=scale_max,
        safe_pct=safe_pct,
        warn_pct=warn_pct,
        danger_pct=danger_pct,
        marker_pct=marker,
    )


def lit_segments(score: int) -> List[bool]:
    """Which of the four risk-meter segments are lit for ``score``."""
    return [score >= (i + 1) * 25 for i in range(len(RISK_LEVEL_PROFILES))]


def guide_rows() -> List[dict]:
    levels = list(RISK_LEVEL_PROFILES.values())
    rows = []
    for n, profile in enumerate(levels):
        upper = levels[n + 1].min_score - 1 if n + 1 < len(levels) else 100
        rows.append(
            {
                "score": f"{profile.min_score}–{upper}",
                "label": profile.label,
                "action": profile.guide_action,
                "color": profile.color,
                "level": profile.level.value,
            }
        )
    return rows


def change_color(change: str | None) -> str:
    # rising readings are bad for every auto-fetched indicator
    if change and change.startswith("+"):
        return "#ff6b6b"
    return "#00d084"
