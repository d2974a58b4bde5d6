"""engine.pipeline

Core turn flow (headless).

Responsibilities:
- Card selection -> Transition (effect + variance) + summary message
- Post-interpolation evaluation: streak, victory, collapse, turn advance
- Per-turn log records

This layer is UI-agnostic and holds no state; engine.session owns it.
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import Any, Dict, Tuple

from core.cards import Card
from core.effects import Transition, apply_effect, effect_summary
from core.state import GameStatus, Metrics, TurnSession, metrics_to_dict

from .config import EngineConfig


def resolve_selection(
    *,
    snapshot: Metrics,
    card: Card,
    rng: random.Random,
    config: EngineConfig,
) -> Tuple[Transition, str]:
    """Apply a chosen card. Returns (transition, effect summary)."""
    transition = apply_effect(
        snapshot,
        card,
        rng,
        min_duration=float(config.min_duration_ms),
        max_duration=float(config.max_duration_ms),
    )
    return transition, effect_summary(card.effect)


def evaluate_turn(session: TurnSession, snapshot: Metrics, config: EngineConfig) -> TurnSession:
    """Evaluate terminal conditions against a settled snapshot.

    Collapse wins when both conditions hold at once. A non-terminal
    evaluation advances the turn counter.
    """
    if session.status.terminal:
        return session

    all_high = snapshot.all_at_least(float(config.victory_threshold))
    any_low = snapshot.any_at_most(float(config.collapse_threshold))

    streak = session.streak + 1 if all_high else 0

    if any_low:
        return replace(session, streak=streak, status=GameStatus.COLLAPSE)
    if all_high and streak >= int(config.victory_streak):
        return replace(session, streak=streak, status=GameStatus.VICTORY)
    return replace(session, turn=session.turn + 1, streak=streak)


def make_turn_log(
    *,
    turn: int,
    card: Card,
    transition: Transition,
    summary: str,
    outcome: TurnSession,
) -> Dict[str, Any]:
    return {
        "turn": int(turn),
        "card": card.id,
        "card_title": card.title,
        "nominal_effect": metrics_to_dict(card.effect),
        "before": metrics_to_dict(transition.start),
        "after": metrics_to_dict(transition.target),
        "duration_ms": float(transition.duration),
        "summary": summary,
        "streak": int(outcome.streak),
        "status": outcome.status.value,
    }
