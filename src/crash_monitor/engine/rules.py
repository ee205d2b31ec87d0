from __future__ import annotations

from typing import Dict, List

from crash_monitor.core.assessment_types import Recommendation, ScoreBreakdown
from crash_monitor.domain.levels import RISK_LEVEL_PROFILES, IndicatorStatus, RiskLevel, RiskLevelProfile


class BasicRules:
    def __init__(self, profiles: Dict[RiskLevel, RiskLevelProfile] | None = None):
        self.profiles = profiles or RISK_LEVEL_PROFILES

    def decide(self, level: RiskLevel, breakdown: ScoreBreakdown) -> Dict[str, object]:
        profile = self.profiles[level]
        rationale: List[str] = []

        for indicator_id, signal in breakdown.signals.items():
            if signal.status == IndicatorStatus.DANGER:
                rationale.append(f"Danger threshold reached: {indicator_id}")
            elif signal.status == IndicatorStatus.WARN:
                rationale.append(f"Warning threshold reached: {indicator_id}")

        if breakdown.maximum == 0:
            rationale.append("No indicator values entered")
        elif not rationale:
            rationale.append("All entered indicators below warning thresholds")

        return {
            "recommendation": Recommendation(
                level=level,
                label=profile.label,
                short_action=profile.short_action,
                action=profile.recommended_action,
                guidance=profile.guidance,
            ),
            "rationale": rationale,
        }
