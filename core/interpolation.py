"""
core.interpolation
Eased metric transitions.

The engine is pull-based: callers hand it a Transition via begin(), then call
advance(now) once per frame. It never schedules anything itself.
"""

from __future__ import annotations

from typing import Optional

from .effects import Transition
from .state import METRICS, Metrics, clamp


class InterpolationBusyError(RuntimeError):
    """begin() was called while a transition was still running."""


def ease_in_out_quad(t: float) -> float:
    if t < 0.5:
        return 2.0 * t * t
    return 1.0 - 2.0 * (1.0 - t) * (1.0 - t)


def lerp_metrics(start: Metrics, target: Metrics, k: float) -> Metrics:
    return Metrics(**{m.value: start.get(m) + (target.get(m) - start.get(m)) * k for m in METRICS})


class Interpolator:
    """Owns the displayed metric snapshot.

    States: idle (no transition) and interpolating. Only one transition may
    run at a time.
    """

    def __init__(self, values: Metrics) -> None:
        self._values = values
        self._transition: Optional[Transition] = None
        self._start_time: Optional[float] = None

    @property
    def values(self) -> Metrics:
        return self._values

    def is_complete(self) -> bool:
        return self._transition is None

    def begin(self, transition: Transition, start_time: Optional[float] = None) -> None:
        """Start a transition. Without `start_time` the next advance() anchors it."""
        if self._transition is not None:
            raise InterpolationBusyError("a transition is already in progress")
        self._transition = transition
        self._start_time = None if start_time is None else float(start_time)
        self._values = transition.start

    def progress(self, now: float) -> float:
        if self._transition is None:
            return 1.0
        if self._start_time is None:
            return 0.0
        duration = float(self._transition.duration)
        if duration <= 0:
            return 1.0
        return clamp((float(now) - self._start_time) / duration, 0.0, 1.0)

    def advance(self, now: float) -> bool:
        """Move values toward the target. Returns True when this call finished the transition."""
        tr = self._transition
        if tr is None:
            return False
        if self._start_time is None:
            self._start_time = float(now)

        p = self.progress(now)
        if p >= 1.0:
            # snap, so no float residue survives the transition
            self._values = tr.target
            self._transition = None
            self._start_time = None
            return True

        self._values = lerp_metrics(tr.start, tr.target, ease_in_out_quad(p))
        return False

    def reset(self, values: Metrics) -> None:
        """Drop any in-flight transition and set values directly."""
        self._transition = None
        self._start_time = None
        self._values = values
