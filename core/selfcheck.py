"""
core.selfcheck
Minimal "it runs" proof for the core.

Run:
  python -m core.selfcheck
"""

from __future__ import annotations

from .cards import DEFAULT_CARDS, CardPool, pool_composition
from .effects import apply_effect
from .interpolation import Interpolator
from .rng import game_streams
from .state import METRIC_MAX, METRIC_MIN, default_start_metrics, metrics_to_dict


def run_turns_smoke(turns: int = 40) -> None:
    base_seed = 42
    draw_rng, rng = game_streams(base_seed)
    pool = CardPool(DEFAULT_CARDS, draw_rng)

    interp = Interpolator(default_start_metrics())
    offer = pool.draw_three(())
    now = 0.0

    for t in range(1, turns + 1):
        # alternate offer slots so every slot gets exercised
        card = offer[t % len(offer)]
        interp.begin(apply_effect(interp.values, card, rng), start_time=now)
        while not interp.is_complete():
            now += 16.0
            interp.advance(now)
            # invariants
            assert all(METRIC_MIN <= v <= METRIC_MAX for v in interp.values.values())

        prev = offer
        offer = pool.draw_three(prev)
        ids = [c.id for c in offer]
        assert len(set(ids)) == len(ids)
        assert not set(ids) & {c.id for c in prev}

    print(f"OK: {turns}-turn core smoke test passed.")
    print("Final metrics:", metrics_to_dict(interp.values))
    print("Pool:", pool_composition(pool.cards))


if __name__ == "__main__":
    run_turns_smoke()
