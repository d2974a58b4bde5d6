"""engine.sim_runner

Headless runner for quick sanity checks and balancing.

Drives a GameSession with a fixed frame step and a deterministic chooser, so
runs are reproducible from the seed alone.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from core.cards import DEFAULT_CARDS, Card
from core.state import METRICS, Metrics

from .config import EngineConfig
from .session import Frame, GameSession

FRAME_STEP_MS = 16.0
# a settled transition never needs more than max_duration / step frames
MAX_FRAMES_PER_TURN = 1000

Chooser = Callable[[Metrics, Sequence[Card]], int]


def greedy_chooser(metrics: Metrics, offer: Sequence[Card]) -> int:
    """Pick the card that lifts the weakest metric most; ties go to total effect."""
    weakest = min(METRICS, key=lambda m: metrics.get(m))

    def score(i: int) -> tuple:
        eff = offer[i].effect
        return (eff.get(weakest), sum(eff.values()))

    return max(range(len(offer)), key=score)


def first_card_chooser(metrics: Metrics, offer: Sequence[Card]) -> int:
    return 0


def play_turn(session: GameSession, index: int, now: float, step: float = FRAME_STEP_MS) -> tuple:
    """Select a card and tick until the turn settles. Returns (last_frame, now)."""
    frame = session.tick(now)
    if not session.select_card(index, now=now):
        return frame, now
    for _ in range(MAX_FRAMES_PER_TURN):
        now += step
        frame = session.tick(now)
        if not frame.resolving:
            break
    return frame, now


def run_headless_sim(
    turns: int = 30,
    *,
    seed: int = 123,
    cards: Optional[Iterable[Card]] = None,
    chooser: Chooser = greedy_chooser,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """Run a deterministic game and return a summary."""
    cfg = config or EngineConfig(base_seed=int(seed))
    session = GameSession(list(cards) if cards is not None else DEFAULT_CARDS, cfg)

    now = 0.0
    frame: Frame = session.tick(now)
    for _ in range(turns):
        if frame.status.terminal or not frame.offer:
            break
        frame, now = play_turn(session, chooser(frame.metrics, frame.offer), now)

    return {
        "turns_played": len(session.turn_logs),
        "final": frame,
        "status": frame.status.value,
        "export": session.export_run(),
    }
