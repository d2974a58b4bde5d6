"""engine.session

GameSession: the single owner of all mutable game state.

Driven by three inputs:
- select_card(index): accept a card from the current offer (or silently ignore)
- restart(): atomic reset, accepted at any time
- tick(now): advance interpolation, finish the turn once it settles, publish a Frame

Nothing here schedules work. The caller's frame clock is the only clock.
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from core.cards import Card, CardPool
from core.effects import Transition
from core.interpolation import Interpolator
from core.rng import game_streams
from core.state import GameStatus, Metrics, TurnSession, default_start_metrics, normalize_metrics

from .config import EngineConfig
from .frames import FrameMonitor
from .logging import make_run_export
from .pipeline import evaluate_turn, make_turn_log, resolve_selection

logger = logging.getLogger(__name__)

RESTART_MESSAGE = "Game restarted. Choose wisely."


class Phase(str, Enum):
    AWAITING_SELECTION = "awaiting-selection"
    RESOLVING = "resolving"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class TerminalEvent:
    """Fired once per entry into victory or collapse."""

    status: GameStatus
    turn: int
    metrics: Metrics
    at: float


@dataclass(frozen=True)
class Frame:
    """Read-only view published after every tick."""

    metrics: Metrics
    turn: int
    status: GameStatus
    offer: Tuple[Card, ...]
    message: str
    streak: int
    resolving: bool
    event: Optional[TerminalEvent] = None

    @property
    def normalized(self) -> Dict[str, float]:
        return normalize_metrics(self.metrics)


@dataclass(frozen=True)
class _Pending:
    card: Card
    transition: Transition
    summary: str


TerminalListener = Callable[[TerminalEvent], None]


class GameSession:
    def __init__(
        self,
        cards: Iterable[Card],
        config: Optional[EngineConfig] = None,
        *,
        draw_rng: Optional[random.Random] = None,
        effect_rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or EngineConfig()
        default_draw, default_effect = game_streams(int(self.config.base_seed))
        self.pool = CardPool(cards, draw_rng or default_draw)
        self._effect_rng = effect_rng or default_effect
        self.monitor = FrameMonitor(budget_ms=float(self.config.frame_budget_ms))
        self._listeners: List[TerminalListener] = []
        self._clock: Optional[float] = None
        self._interp = Interpolator(default_start_metrics(self.config.start_value))
        self._offer: Tuple[Card, ...] = ()
        self._reset_state(message="")

    # -------------------------
    # State
    # -------------------------

    def _reset_state(self, *, message: str) -> None:
        self._initial = default_start_metrics(self.config.start_value)
        self._interp.reset(self._initial)
        self._turn = TurnSession()
        self._pending: Optional[_Pending] = None
        self._processing_input = False
        self._message = message
        self._turn_logs: List[Dict[str, Any]] = []
        # the first offer excludes nothing; a restart excludes the abandoned offer
        self._offer = self.pool.draw_three(self._offer, size=int(self.config.offer_size))

    @property
    def phase(self) -> Phase:
        if self._turn.status.terminal:
            return Phase.TERMINAL
        if self._processing_input:
            return Phase.RESOLVING
        return Phase.AWAITING_SELECTION

    @property
    def metrics(self) -> Metrics:
        return self._interp.values

    @property
    def turn(self) -> int:
        return self._turn.turn

    @property
    def streak(self) -> int:
        return self._turn.streak

    @property
    def status(self) -> GameStatus:
        return self._turn.status

    @property
    def offer(self) -> Tuple[Card, ...]:
        return self._offer

    @property
    def message(self) -> str:
        return self._message

    def frame(self, event: Optional[TerminalEvent] = None) -> Frame:
        return Frame(
            metrics=self._interp.values,
            turn=self._turn.turn,
            status=self._turn.status,
            offer=self._offer,
            message=self._message,
            streak=self._turn.streak,
            resolving=self._processing_input,
            event=event,
        )

    def add_listener(self, listener: TerminalListener) -> None:
        self._listeners.append(listener)

    # -------------------------
    # Inputs
    # -------------------------

    def select_card(self, index: int, now: Optional[float] = None) -> bool:
        """Accept offer[index]. Returns False (and changes nothing) when the input is dropped."""
        if self._turn.status is not GameStatus.PLAYING or self._processing_input:
            return False
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < len(self._offer):
            return False

        card = self._offer[index]
        self._processing_input = True

        transition, summary = resolve_selection(
            snapshot=self._interp.values,
            card=card,
            rng=self._effect_rng,
            config=self.config,
        )
        start = self._clock if now is None else float(now)
        self._interp.begin(transition, start_time=start)
        self._pending = _Pending(card=card, transition=transition, summary=summary)
        self._message = summary
        return True

    def restart(self) -> None:
        """Discard everything, including an in-flight transition, and start over at turn 1."""
        self._reset_state(message=RESTART_MESSAGE)
        logger.info("Session restarted")

    def tick(self, now: float) -> Frame:
        started = time.perf_counter()
        self._clock = float(now)

        event: Optional[TerminalEvent] = None
        if self._pending is not None:
            self._interp.advance(now)
            if self._interp.is_complete():
                event = self._finish_turn(now)

        frame = self.frame(event)
        self.monitor.record((time.perf_counter() - started) * 1000.0)
        return frame

    # -------------------------
    # Turn completion
    # -------------------------

    def _finish_turn(self, now: float) -> Optional[TerminalEvent]:
        pending = self._pending
        if pending is None:
            return None

        outcome = evaluate_turn(self._turn, self._interp.values, self.config)
        self._turn_logs.append(
            make_turn_log(
                turn=self._turn.turn,
                card=pending.card,
                transition=pending.transition,
                summary=pending.summary,
                outcome=outcome,
            )
        )

        event: Optional[TerminalEvent] = None
        if outcome.status.terminal:
            event = TerminalEvent(status=outcome.status, turn=outcome.turn, metrics=self._interp.values, at=float(now))
            logger.info(f"Game ended: {outcome.status.value} on turn {outcome.turn}")
        else:
            self._offer = self.pool.draw_three(self._offer, size=int(self.config.offer_size))

        self._turn = outcome
        self._pending = None
        self._processing_input = False

        if event is not None:
            for listener in list(self._listeners):
                listener(event)
        return event

    # -------------------------
    # Export
    # -------------------------

    @property
    def turn_logs(self) -> List[Dict[str, Any]]:
        return list(self._turn_logs)

    def export_run(self) -> Dict[str, Any]:
        return make_run_export(
            seed=int(self.config.base_seed),
            config=self.config.to_dict(),
            initial_metrics=self._initial,
            turn_logs=self._turn_logs,
            status=self._turn.status.value,
        )
