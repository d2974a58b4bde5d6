"""
Tests for core.interpolation: easing curve and the idle/interpolating machine.
"""

import pytest

from core.effects import Transition
from core.interpolation import InterpolationBusyError, Interpolator, ease_in_out_quad
from core.state import Metrics, default_start_metrics


@pytest.mark.parametrize(
    "t,expected",
    [(0.0, 0.0), (0.25, 0.125), (0.5, 0.5), (0.75, 0.875), (1.0, 1.0)],
)
def test_ease_in_out_quad(t, expected) -> None:
    assert ease_in_out_quad(t) == pytest.approx(expected)


def test_ease_is_monotonic() -> None:
    samples = [ease_in_out_quad(i / 100) for i in range(101)]
    assert samples == sorted(samples)


def _transition(duration: float = 1000.0) -> Transition:
    start = default_start_metrics()
    target = Metrics(ecology=80.0, cohesion=20.0, innovation=50.0, stability=50.0)
    return Transition(start=start, target=target, duration=duration)


class TestInterpolator:
    def test_starts_idle(self) -> None:
        interp = Interpolator(default_start_metrics())
        assert interp.is_complete()
        assert not interp.advance(100.0)
        assert interp.values == default_start_metrics()

    def test_eased_progress(self) -> None:
        interp = Interpolator(default_start_metrics())
        interp.begin(_transition(), start_time=0.0)
        assert not interp.is_complete()

        interp.advance(250.0)
        assert interp.values.ecology == pytest.approx(50.0 + 30.0 * 0.125)
        assert interp.values.cohesion == pytest.approx(50.0 - 30.0 * 0.125)

        interp.advance(500.0)
        assert interp.values.ecology == pytest.approx(65.0)
        assert interp.values.innovation == 50.0

    def test_snaps_to_target_and_goes_idle(self) -> None:
        tr = _transition()
        interp = Interpolator(default_start_metrics())
        interp.begin(tr, start_time=0.0)
        assert interp.advance(1000.0) is True
        assert interp.values == tr.target
        assert interp.is_complete()

    def test_overshoot_time_is_clamped(self) -> None:
        tr = _transition()
        interp = Interpolator(default_start_metrics())
        interp.begin(tr, start_time=0.0)
        interp.advance(10_000.0)
        assert interp.values == tr.target

    def test_time_before_start_holds_start_values(self) -> None:
        interp = Interpolator(default_start_metrics())
        interp.begin(_transition(), start_time=1000.0)
        interp.advance(900.0)
        assert interp.values == default_start_metrics()

    def test_begin_while_busy_is_illegal(self) -> None:
        interp = Interpolator(default_start_metrics())
        interp.begin(_transition(), start_time=0.0)
        with pytest.raises(InterpolationBusyError):
            interp.begin(_transition(), start_time=0.0)

    def test_first_advance_anchors_start(self) -> None:
        interp = Interpolator(default_start_metrics())
        interp.begin(_transition(), start_time=None)
        assert interp.advance(5000.0) is False
        assert interp.values == default_start_metrics()
        assert interp.advance(5500.0) is False
        assert interp.values.ecology == pytest.approx(65.0)
        assert interp.advance(6000.0) is True

    def test_zero_duration_completes_immediately(self) -> None:
        tr = _transition(duration=0.0)
        interp = Interpolator(default_start_metrics())
        interp.begin(tr, start_time=0.0)
        assert interp.advance(0.0) is True
        assert interp.values == tr.target

    def test_reset_discards_transition(self) -> None:
        interp = Interpolator(default_start_metrics())
        interp.begin(_transition(), start_time=0.0)
        interp.advance(300.0)
        interp.reset(default_start_metrics())
        assert interp.is_complete()
        assert interp.values == default_start_metrics()
        interp.begin(_transition(), start_time=0.0)
