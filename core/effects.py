"""
core.effects
Effect rules:
- per-metric variance sampling
- clamp rules
- transition (start/target/duration) construction
- human-readable effect summaries
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Tuple

from .cards import Card
from .state import METRICS, Metric, Metrics, clamp_metrics, safe_number

MIN_DURATION_MS = 500.0
MAX_DURATION_MS = 1200.0

NO_EFFECT_MESSAGE = "Echo sent."

# (rising, falling) verbs per metric
_VERBS: Dict[Metric, Tuple[str, str]] = {
    Metric.ECOLOGY: ("surges", "declines"),
    Metric.COHESION: ("strengthens", "weakens"),
    Metric.INNOVATION: ("accelerates", "stalls"),
    Metric.STABILITY: ("solidifies", "crumbles"),
}


@dataclass(frozen=True)
class Transition:
    """Everything one interpolation needs. Produced by apply_effect()."""

    start: Metrics
    target: Metrics
    duration: float


def sample_perturbation(rng: random.Random, variance: float) -> Metrics:
    """One independent uniform draw in [-variance, +variance] per metric."""
    v = max(0.0, safe_number(variance))
    return Metrics(**{m.value: rng.uniform(-v, v) for m in METRICS})


def apply_delta(stats: Metrics, delta: Metrics) -> Metrics:
    """Apply delta with clamp rules (pure function). NaN deltas count as 0."""
    return clamp_metrics(Metrics(**{m.value: safe_number(stats.get(m)) + safe_number(delta.get(m)) for m in METRICS}))


def sample_duration(
    rng: random.Random,
    lo: float = MIN_DURATION_MS,
    hi: float = MAX_DURATION_MS,
) -> float:
    return float(rng.uniform(lo, hi))


def apply_effect(
    current: Metrics,
    card: Card,
    rng: random.Random,
    *,
    min_duration: float = MIN_DURATION_MS,
    max_duration: float = MAX_DURATION_MS,
) -> Transition:
    """Resolve a card against `current` into a Transition.

    Does not touch displayed metrics; core.interpolation does that.
    """
    noise = sample_perturbation(rng, card.variance)
    delta = Metrics(**{m.value: safe_number(card.effect.get(m)) + noise.get(m) for m in METRICS})
    start = Metrics(**{m.value: current.get(m) for m in METRICS})
    target = apply_delta(start, delta)
    return Transition(start=start, target=target, duration=sample_duration(rng, min_duration, max_duration))


def _fmt_delta(v: float) -> str:
    return f"{v:+g}" if float(v).is_integer() else f"{v:+.1f}"


def effect_summary(effect: Metrics, limit: int = 2) -> str:
    """Describe the `limit` largest nonzero deltas, e.g. 'Ecology surges +8. Stability crumbles -3'."""
    nonzero = [(m, safe_number(v)) for m, v in effect.items() if abs(safe_number(v)) > 1e-9]
    # sorted() is stable, so equal magnitudes keep metric order
    ranked = sorted(nonzero, key=lambda mv: abs(mv[1]), reverse=True)[: max(0, limit)]
    parts: List[str] = []
    for m, v in ranked:
        up, down = _VERBS[m]
        parts.append(f"{m.label} {up if v > 0 else down} {_fmt_delta(v)}")
    return ". ".join(parts) if parts else NO_EFFECT_MESSAGE
