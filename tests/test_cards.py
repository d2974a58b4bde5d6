"""
Tests for core.cards: draws, offers, exhaustion and the built-in pool.
"""

import random

from core.cards import DEFAULT_CARDS, CardPool, make_card, pool_composition

from conftest import flat_card


def _pool(n: int, seed: int = 3) -> CardPool:
    return CardPool([flat_card(f"c{i}", ecology=1) for i in range(n)], random.Random(seed))


# =============================================================================
# draw
# =============================================================================


class TestDraw:
    def test_draw_respects_exclusions(self) -> None:
        pool = _pool(5)
        for _ in range(50):
            card = pool.draw({"c0", "c1", "c2"})
            assert card is not None
            assert card.id in {"c3", "c4"}

    def test_draw_returns_none_when_nothing_eligible(self) -> None:
        pool = _pool(2)
        assert pool.draw({"c0", "c1"}) is None
        assert CardPool([], random.Random(0)).draw() is None

    def test_draw_is_roughly_uniform(self) -> None:
        pool = _pool(4, seed=11)
        counts = {f"c{i}": 0 for i in range(4)}
        for _ in range(4000):
            counts[pool.draw().id] += 1
        assert all(800 < n < 1200 for n in counts.values())

    def test_same_seed_same_draws(self) -> None:
        pa, pb = _pool(10, seed=5), _pool(10, seed=5)
        assert [pa.draw().id for _ in range(20)] == [pb.draw().id for _ in range(20)]


# =============================================================================
# draw_three
# =============================================================================


class TestDrawThree:
    def test_offer_is_mutually_distinct(self) -> None:
        pool = _pool(6)
        for _ in range(100):
            ids = [c.id for c in pool.draw_three()]
            assert len(ids) == 3
            assert len(set(ids)) == 3

    def test_offer_excludes_previous_offer(self) -> None:
        pool = _pool(8)
        prev = pool.draw_three()
        for _ in range(100):
            nxt = pool.draw_three(prev)
            assert len(nxt) == 3
            assert not {c.id for c in nxt} & {c.id for c in prev}
            prev = nxt

    def test_exhausted_pool_degrades_to_fewer_cards(self) -> None:
        pool = _pool(4)
        prev = pool.draw_three()
        nxt = pool.draw_three(prev)
        assert len(nxt) == 1
        assert nxt[0].id not in {c.id for c in prev}

    def test_tiny_pool(self) -> None:
        assert len(_pool(2).draw_three()) == 2
        assert CardPool([]).draw_three() == ()


# =============================================================================
# Card records
# =============================================================================


def test_make_card_sanitizes_numbers() -> None:
    card = make_card("x", "X", effects={"ecology": float("nan"), "stability": -4}, variance=-3)
    assert card.effect.ecology == 0.0
    assert card.effect.stability == -4.0
    assert card.variance == 0.0


def test_card_to_dict() -> None:
    card = flat_card("forest", variance=2, ecology=10)
    d = card.to_dict()
    assert d["id"] == "forest"
    assert d["effects"]["ecology"] == 10.0
    assert d["variance"] == 2.0


def test_builtin_pool_spans_all_effect_kinds() -> None:
    comp = pool_composition(DEFAULT_CARDS)
    assert comp["total"] >= 10
    assert comp["positive"] >= 1
    assert comp["negative"] >= 1
    assert comp["mixed"] >= 1
    assert len({c.id for c in DEFAULT_CARDS}) == len(DEFAULT_CARDS)
