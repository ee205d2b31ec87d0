from crash_monitor.core.assessment_types import IndicatorSignal, ScoreBreakdown
from crash_monitor.domain.levels import IndicatorStatus, RiskLevel
from crash_monitor.engine.rules import BasicRules


def test_rules_produce_recommendation():
    rules = BasicRules()

    breakdown = ScoreBreakdown(
        total=3,
        maximum=4,
        score=75,
        signals={
            "vix": IndicatorSignal("vix", 32.0, IndicatorStatus.DANGER, 2, 2),
            "usdkrw": IndicatorSignal("usdkrw", 1390.0, IndicatorStatus.WARN, 1, 2),
        },
    )

    result = rules.decide(RiskLevel.CRISIS, breakdown)

    assert result["recommendation"].level == RiskLevel.CRISIS
    assert result["recommendation"].action == "즉시 대응 필요"
    assert "Danger threshold reached: vix" in result["rationale"]
    assert "Warning threshold reached: usdkrw" in result["rationale"]


def test_rules_note_empty_dashboard():
    result = BasicRules().decide(RiskLevel.SAFE, ScoreBreakdown(total=0, maximum=0, score=0))

    assert result["recommendation"].action == "정상 보유"
    assert result["rationale"] == ["No indicator values entered"]
