"""
core.state
Core domain data models (UI/renderer independent).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Tuple

METRIC_MIN = 0.0
METRIC_MAX = 100.0
START_VALUE = 50.0


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def safe_number(x: Any, default: float = 0.0) -> float:
    """float(x), or `default` for None, NaN, infinities and non-numeric input."""
    try:
        v = float(x)
    except (TypeError, ValueError):
        return float(default)
    if math.isnan(v) or math.isinf(v):
        return float(default)
    return v


class Metric(str, Enum):
    ECOLOGY = "ecology"
    COHESION = "cohesion"
    INNOVATION = "innovation"
    STABILITY = "stability"

    @property
    def label(self) -> str:
        return self.value.capitalize()


METRICS: Tuple[Metric, ...] = tuple(Metric)


@dataclass(frozen=True)
class Metrics:
    """One value per metric.

    Used both for snapshots (every value within [0, 100]) and for card effects
    (signed deltas). Clamping is applied by core.effects, not here.
    """

    ecology: float = 0.0
    cohesion: float = 0.0
    innovation: float = 0.0
    stability: float = 0.0

    def get(self, metric: Metric) -> float:
        return float(getattr(self, metric.value))

    def items(self) -> Iterator[Tuple[Metric, float]]:
        for m in METRICS:
            yield m, self.get(m)

    def values(self) -> Tuple[float, ...]:
        return tuple(self.get(m) for m in METRICS)

    def all_at_least(self, threshold: float) -> bool:
        return all(v >= threshold for v in self.values())

    def any_at_most(self, threshold: float) -> bool:
        return any(v <= threshold for v in self.values())


def metrics_from_mapping(d: Mapping[str, Any], default: float = 0.0) -> Metrics:
    """Bridge helper for dict-based records. Missing or malformed values become `default`."""
    return Metrics(**{m.value: safe_number(d.get(m.value, default), default) for m in METRICS})


def metrics_to_dict(s: Metrics) -> Dict[str, float]:
    return {m.value: s.get(m) for m in METRICS}


def clamp_metrics(s: Metrics) -> Metrics:
    return Metrics(**{m.value: clamp(safe_number(s.get(m)), METRIC_MIN, METRIC_MAX) for m in METRICS})


def normalize_metrics(s: Metrics) -> Dict[str, float]:
    """Map each metric to [0, 1] for shader/audio consumers."""
    return {m.value: clamp(s.get(m), METRIC_MIN, METRIC_MAX) / METRIC_MAX for m in METRICS}


def uniform_metrics(value: float) -> Metrics:
    return Metrics(**{m.value: float(value) for m in METRICS})


class GameStatus(str, Enum):
    PLAYING = "playing"
    VICTORY = "victory"
    COLLAPSE = "collapse"

    @property
    def terminal(self) -> bool:
        return self is not GameStatus.PLAYING


@dataclass(frozen=True)
class TurnSession:
    """Turn counter, consecutive-high streak and terminal status.

    Replaced, never mutated: engine.pipeline returns a new TurnSession
    after every evaluation.
    """

    turn: int = 1
    streak: int = 0
    status: GameStatus = GameStatus.PLAYING


def default_start_metrics(start_value: float = START_VALUE) -> Metrics:
    """Baseline start snapshot.

    Keep it in core so headless runs and UI share the same baseline.
    """
    return uniform_metrics(clamp(safe_number(start_value, START_VALUE), METRIC_MIN, METRIC_MAX))
