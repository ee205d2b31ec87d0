from crash_monitor.core.assessment_engine import assess
from crash_monitor.domain.indicators import build_catalogue, default_catalogue
from crash_monitor.domain.levels import IndicatorStatus, RiskLevel
from crash_monitor.engine.scorer import BasicScorer, calc_score

ALL_IDS = ["vix", "usdkrw", "hyspread", "credit", "foreign"]


def test_no_values_scores_zero():
    catalogue = default_catalogue()
    breakdown = BasicScorer().score(catalogue, {i: "" for i in ALL_IDS})

    assert breakdown.score == 0
    assert breakdown.maximum == 0
    assert breakdown.total == 0


def test_all_below_warn_scores_zero():
    values = {"vix": 12, "usdkrw": 1300, "hyspread": 3.0, "credit": 15, "foreign": 1}

    assert calc_score(default_catalogue(), values) == 0


def test_all_at_danger_scores_hundred():
    values = {"vix": 30, "usdkrw": 1420, "hyspread": 4.5, "credit": 22, "foreign": 3}

    assert calc_score(default_catalogue(), values) == 100


def test_mixed_example_is_crisis():
    assessment = assess({"vix": "32", "usdkrw": "1390", "hyspread": "", "credit": "", "foreign": ""})

    assert assessment.breakdown.total == 3
    assert assessment.breakdown.maximum == 4
    assert assessment.score == 75
    assert assessment.level == RiskLevel.CRISIS


def test_missing_values_do_not_count_towards_maximum():
    breakdown = BasicScorer().score(default_catalogue(), {"foreign": "2"})

    assert breakdown.maximum == 2
    assert breakdown.total == 1
    assert breakdown.score == 50
    assert breakdown.signals["vix"].status == IndicatorStatus.UNKNOWN
    assert breakdown.signals["vix"].max_points == 0


def test_half_points_round_up():
    # 1 of 8 points -> 12.5
    values = {"vix": 26, "usdkrw": 1300, "hyspread": 3.0, "credit": 10}

    assert calc_score(default_catalogue(), values) == 13


def test_unparseable_entries_are_skipped():
    values = {"vix": "abc", "usdkrw": None, "credit": "25조"}
    breakdown = BasicScorer().score(default_catalogue(), values)

    assert breakdown.maximum == 2
    assert breakdown.score == 100


def test_synthetic_catalogue():
    catalogue = build_catalogue(
        {
            "indicators": [
                {"id": "a", "label": "A", "unit": "", "warn": 1, "danger": 2},
                {"id": "b", "label": "B", "unit": "", "warn": 10, "danger": 20},
            ]
        }
    )

    assert calc_score(catalogue, {"a": 1.5, "b": 5}) == 25
    assert calc_score(catalogue, {"a": 2, "b": 20}) == 100
