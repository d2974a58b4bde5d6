"""
Tests for core.state: metric records, clamping and sanitizing helpers.
"""

import math

from core.state import (
    METRICS,
    GameStatus,
    Metric,
    Metrics,
    TurnSession,
    clamp,
    clamp_metrics,
    default_start_metrics,
    metrics_from_mapping,
    metrics_to_dict,
    normalize_metrics,
    safe_number,
)


def test_metric_order_is_fixed() -> None:
    assert [m.value for m in METRICS] == ["ecology", "cohesion", "innovation", "stability"]
    assert Metric.ECOLOGY.label == "Ecology"


def test_clamp() -> None:
    assert clamp(-3, 0, 100) == 0
    assert clamp(130, 0, 100) == 100
    assert clamp(42.5, 0, 100) == 42.5


def test_safe_number_sanitizes_bad_input() -> None:
    assert safe_number(float("nan")) == 0.0
    assert safe_number(float("inf"), 1.0) == 1.0
    assert safe_number("abc") == 0.0
    assert safe_number(None) == 0.0
    assert safe_number("12.5") == 12.5


def test_default_start_metrics_all_fifty() -> None:
    s = default_start_metrics()
    assert s.values() == (50.0, 50.0, 50.0, 50.0)


def test_metrics_from_mapping_fills_missing_and_nan() -> None:
    s = metrics_from_mapping({"ecology": 8, "cohesion": float("nan"), "bogus": 99})
    assert metrics_to_dict(s) == {"ecology": 8.0, "cohesion": 0.0, "innovation": 0.0, "stability": 0.0}


def test_clamp_metrics_bounds_every_value() -> None:
    s = clamp_metrics(Metrics(ecology=-10, cohesion=150, innovation=float("nan"), stability=55))
    assert s == Metrics(ecology=0.0, cohesion=100.0, innovation=0.0, stability=55.0)


def test_normalize_metrics() -> None:
    n = normalize_metrics(Metrics(ecology=0, cohesion=25, innovation=50, stability=100))
    assert n == {"ecology": 0.0, "cohesion": 0.25, "innovation": 0.5, "stability": 1.0}
    assert all(not math.isnan(v) for v in n.values())


def test_threshold_helpers() -> None:
    s = Metrics(ecology=80, cohesion=85, innovation=90, stability=5)
    assert not s.all_at_least(80)
    assert s.any_at_most(5)
    assert Metrics(80, 80, 80, 80).all_at_least(80)


def test_turn_session_defaults() -> None:
    t = TurnSession()
    assert (t.turn, t.streak, t.status) == (1, 0, GameStatus.PLAYING)
    assert not GameStatus.PLAYING.terminal
    assert GameStatus.VICTORY.terminal and GameStatus.COLLAPSE.terminal
