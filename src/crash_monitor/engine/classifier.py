from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from crash_monitor.core.values import parse_value
from crash_monitor.domain.indicators import Indicator
from crash_monitor.domain.levels import RISK_LEVEL_PROFILES, IndicatorStatus, RiskLevel


@dataclass(frozen=True)
class Thresholds:
    warn: float
    danger: float


class ThresholdClassifier:
    """Maps a single indicator reading onto safe / warn / danger."""

    def classify_value(self, thresholds: Thresholds, raw: Any) -> IndicatorStatus:
        v = parse_value(raw)
        if v is None:
            return IndicatorStatus.UNKNOWN
        if v >= thresholds.danger:
            return IndicatorStatus.DANGER
        if v >= thresholds.warn:
            return IndicatorStatus.WARN
        return IndicatorStatus.SAFE

    def classify(self, indicator: Indicator, raw: Any) -> IndicatorStatus:
        return self.classify_value(Thresholds(warn=indicator.warn, danger=indicator.danger), raw)


class ScoreBandClassifier:
    """
    Maps a 0-100 score onto a risk level.

    Bands are half-open on the right: a score equal to a band's lower bound
    belongs to that band, so 25 is caution and 75 is crisis.
    """

    def __init__(self, bands: Dict[RiskLevel, int] | None = None):
        if bands is None:
            bands = {level: profile.min_score for level, profile in RISK_LEVEL_PROFILES.items()}
        ordered: List[Tuple[int, RiskLevel]] = sorted((int(m), lvl) for lvl, m in bands.items())
        if not ordered or ordered[0][0] > 0:
            raise ValueError("Score bands must start at 0")
        self.bands = ordered

    def classify(self, score: float) -> RiskLevel:
        s = float(score)
        level = self.bands[0][1]
        for lower, candidate in self.bands:
            if s >= lower:
                level = candidate
            else:
                break
        return level
