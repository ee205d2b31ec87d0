from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from crash_monitor.domain.levels import IndicatorStatus, RiskLevel


@dataclass(frozen=True)
class IndicatorSignal:
    indicator_id: str
    value: Optional[float]
    status: IndicatorStatus
    points: int
    max_points: int


@dataclass(frozen=True)
class ScoreBreakdown:
    total: int
    maximum: int
    score: int
    signals: Dict[str, IndicatorSignal] = field(default_factory=dict)


@dataclass(frozen=True)
class Recommendation:
    level: RiskLevel
    label: str
    short_action: str
    action: str
    guidance: str


@dataclass(frozen=True)
class RiskAssessment:
    score: int
    level: RiskLevel
    breakdown: ScoreBreakdown
    recommendation: Recommendation

    rationale: List[str] = field(default_factory=list)
    top_contributors: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "level": self.level.value,
            "total_points": self.breakdown.total,
            "max_points": self.breakdown.maximum,
            "signals": {
                k: {
                    "value": s.value,
                    "status": s.status.value,
                    "points": s.points,
                }
                for k, s in self.breakdown.signals.items()
            },
            "recommendation": {
                "label": self.recommendation.label,
                "short_action": self.recommendation.short_action,
                "action": self.recommendation.action,
                "guidance": self.recommendation.guidance,
            },
            "rationale": list(self.rationale),
            "top_contributors": list(self.top_contributors),
            "warnings": list(self.warnings),
        }
