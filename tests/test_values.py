import pytest

from crash_monitor.core.values import parse_value, round_half_up
from crash_monitor.domain.indicators import default_catalogue
from crash_monitor.engine.scorer import calc_score


@pytest.mark.parametrize(
    "raw,expected",
    [
        (32, 32.0),
        ("1,400", 1.0),
        ("12.5조", 12.5),
        ("  -0.5", -0.5),
        (".5", 0.5),
        ("1e3", 1000.0),
    ],
)
def test_leading_numeric_prefix(raw, expected):
    assert parse_value(raw) == expected


@pytest.mark.parametrize("raw", [None, True, "", "abc", "NaN", float("inf"), "1e999"])
def test_values_without_a_reading(raw):
    assert parse_value(raw) is None


def test_non_ascii_digits_are_not_numbers():
    assert parse_value("١٢") is None
    assert parse_value("１２") is None


def test_huge_integer_is_treated_as_missing():
    assert parse_value(10**400) is None
    assert calc_score(default_catalogue(), {"vix": 10**400, "usdkrw": 1420}) == 100


def test_round_half_up():
    assert round_half_up(62.5) == 63
    assert round_half_up(12.5) == 13
    assert round_half_up(12.49) == 12
