from __future__ import annotations

from typing import Any, Dict, Iterable

from crash_monitor.core.assessment_types import IndicatorSignal, ScoreBreakdown
from crash_monitor.core.values import parse_value, round_half_up
from crash_monitor.domain.indicators import Indicator
from crash_monitor.domain.levels import IndicatorStatus
from crash_monitor.engine.classifier import ThresholdClassifier

POINTS_BY_STATUS: Dict[IndicatorStatus, int] = {
    IndicatorStatus.SAFE: 0,
    IndicatorStatus.WARN: 1,
    IndicatorStatus.DANGER: 2,
}
MAX_POINTS_PER_INDICATOR = 2


class BasicScorer:
    """
    Weighted-sum crash score.

    Every indicator with a parseable value adds 2 to the maximum and
    0/1/2 to the total depending on its status. Indicators without a value
    are left out of both, so a half-filled dashboard is not penalised.
    """

    def __init__(self, classifier: ThresholdClassifier | None = None):
        self.classifier = classifier or ThresholdClassifier()

    def score(self, indicators: Iterable[Indicator], values: Dict[str, Any]) -> ScoreBreakdown:
        total = 0
        maximum = 0
        signals: Dict[str, IndicatorSignal] = {}

        for indicator in indicators:
            raw = values.get(indicator.indicator_id)
            status = self.classifier.classify(indicator, raw)

            if status == IndicatorStatus.UNKNOWN:
                signals[indicator.indicator_id] = IndicatorSignal(
                    indicator_id=indicator.indicator_id,
                    value=None,
                    status=status,
                    points=0,
                    max_points=0,
                )
                continue

            points = POINTS_BY_STATUS[status]
            total += points
            maximum += MAX_POINTS_PER_INDICATOR
            signals[indicator.indicator_id] = IndicatorSignal(
                indicator_id=indicator.indicator_id,
                value=parse_value(raw),
                status=status,
                points=points,
                max_points=MAX_POINTS_PER_INDICATOR,
            )

        score = 0 if maximum == 0 else round_half_up(100.0 * total / maximum)
        return ScoreBreakdown(total=total, maximum=maximum, score=score, signals=signals)


def calc_score(indicators: Iterable[Indicator], values: Dict[str, Any]) -> int:
    return BasicScorer().score(indicators, values).score
