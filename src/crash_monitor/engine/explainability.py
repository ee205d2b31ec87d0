from __future__ import annotations

from typing import Any, Dict, List

from crash_monitor.core.assessment_types import ScoreBreakdown


class BasicExplainability:
    def explain(self, breakdown: ScoreBreakdown, top_n: int = 5) -> Dict[str, List[Dict[str, Any]]]:
        contributors: List[Dict[str, Any]] = []

        for indicator_id, signal in breakdown.signals.items():
            if signal.points <= 0:
                continue
            share = float(signal.points) / breakdown.total if breakdown.total else 0.0
            contributors.append(
                {
                    "indicator_id": indicator_id,
                    "status": signal.status.value,
                    "points": signal.points,
                    "share": share,
                }
            )

        contributors.sort(key=lambda x: int(x.get("points", 0)), reverse=True)

        return {
            "top_contributors": contributors[:top_n]
        }
