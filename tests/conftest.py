"""
Shared fixtures and helpers for the engine tests.
"""

import random

import pytest

from core.cards import Card, make_card
from engine.config import EngineConfig
from engine.session import GameSession

FRAME_MS = 16.0


def flat_card(card_id: str, variance: float = 0.0, **effects: float) -> Card:
    """Card with the given metric deltas (others 0)."""
    return make_card(card_id, card_id.replace("-", " ").title(), "", effects, variance)


def settle(session: GameSession, now: float, step: float = FRAME_MS, limit: int = 1000):
    """Tick until the current turn resolves. Returns (frames, now)."""
    frames = []
    for _ in range(limit):
        now += step
        frame = session.tick(now)
        frames.append(frame)
        if not frame.resolving:
            break
    return frames, now


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(base_seed=7)


@pytest.fixture
def harmony_cards():
    """Six interchangeable cards that lift every metric by 10."""
    return [flat_card(f"harmony-{i}", ecology=10, cohesion=10, innovation=10, stability=10) for i in range(6)]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
