from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Protocol

from crash_monitor.core.assessment_types import Recommendation, RiskAssessment, ScoreBreakdown
from crash_monitor.domain.indicators import Indicator, IndicatorCatalogue, default_catalogue
from crash_monitor.domain.levels import RiskLevel
from crash_monitor.engine.classifier import ScoreBandClassifier
from crash_monitor.engine.explainability import BasicExplainability
from crash_monitor.engine.rules import BasicRules
from crash_monitor.engine.scorer import BasicScorer


class ScoringComponent(Protocol):
    def score(self, indicators: Iterable[Indicator], values: Dict[str, Any]) -> ScoreBreakdown:
        raise NotImplementedError


class ClassificationComponent(Protocol):
    def classify(self, score: float) -> RiskLevel:
        raise NotImplementedError


class RulesComponent(Protocol):
    def decide(self, level: RiskLevel, breakdown: ScoreBreakdown) -> Dict[str, Any]:
        raise NotImplementedError


class ExplainabilityComponent(Protocol):
    def explain(self, breakdown: ScoreBreakdown) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class AssessmentEngine:
    scorer: ScoringComponent = field(default_factory=BasicScorer)
    classifier: ClassificationComponent = field(default_factory=ScoreBandClassifier)
    rules: RulesComponent = field(default_factory=BasicRules)
    explainability: ExplainabilityComponent = field(default_factory=BasicExplainability)

    def run(self, catalogue: IndicatorCatalogue, values: Dict[str, Any]) -> RiskAssessment:
        breakdown = self.scorer.score(catalogue, values)
        level = self.classifier.classify(breakdown.score)

        decision_parts = self.rules.decide(level, breakdown)
        recommendation = decision_parts["recommendation"]
        rationale = decision_parts.get("rationale", []) or []

        expl_parts = self.explainability.explain(breakdown)
        top_contributors = expl_parts.get("top_contributors", []) or []

        warnings = [f"Unknown indicator ignored: {k}" for k in values if k not in catalogue]

        if not isinstance(recommendation, Recommendation):
            raise TypeError("Rules component must return a Recommendation")

        return RiskAssessment(
            score=breakdown.score,
            level=level,
            breakdown=breakdown,
            recommendation=recommendation,
            rationale=[str(x) for x in rationale],
            top_contributors=list(top_contributors),
            warnings=warnings,
        )


def assess(values: Dict[str, Any], catalogue: IndicatorCatalogue | None = None) -> RiskAssessment:
    return AssessmentEngine().run(catalogue or default_catalogue(), values)
