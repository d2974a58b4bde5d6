"""
core.cards
Card definitions and the draw pool.

- Card: immutable action definition (effect deltas + variance bound)
- CardPool: ordered, immutable collection with seeded draws
- DEFAULT_CARDS: built-in pool used when the card source fails to load
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from .state import METRICS, Metrics, metrics_from_mapping, metrics_to_dict, safe_number


@dataclass(frozen=True)
class Card:
    id: str
    title: str
    desc: str
    effect: Metrics
    variance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "desc": self.desc,
            "effects": metrics_to_dict(self.effect),
            "variance": float(self.variance),
        }


def make_card(
    card_id: str,
    title: str,
    desc: str = "",
    effects: Optional[Mapping[str, Any]] = None,
    variance: Any = 0.0,
) -> Card:
    """Build a Card with sanitized numbers (NaN -> 0, negative variance -> 0)."""
    return Card(
        id=str(card_id),
        title=str(title),
        desc=str(desc or ""),
        effect=metrics_from_mapping(dict(effects or {})),
        variance=max(0.0, safe_number(variance)),
    )


class CardPool:
    """Immutable ordered card collection.

    Randomness comes from the injected `rng`; drawing has no other side effect.
    """

    def __init__(self, cards: Iterable[Card], rng: Optional[random.Random] = None) -> None:
        self._cards: Tuple[Card, ...] = tuple(cards)
        self._rng = rng or random.Random()

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._cards

    def draw(self, exclude_ids: Iterable[str] = ()) -> Optional[Card]:
        """Uniform pick among cards not in `exclude_ids`, or None if nothing is eligible."""
        excluded = set(exclude_ids)
        available = [c for c in self._cards if c.id not in excluded]
        if not available:
            return None
        return self._rng.choice(available)

    def draw_three(self, previous_offer: Sequence[Card] = (), size: int = 3) -> Tuple[Card, ...]:
        """Draw up to `size` mutually distinct cards, none from `previous_offer`."""
        exclude: Set[str] = {c.id for c in previous_offer}
        offer: List[Card] = []
        for _ in range(size):
            card = self.draw(exclude)
            if card is None:
                break
            offer.append(card)
            exclude.add(card.id)
        return tuple(offer)


def pool_composition(cards: Iterable[Card]) -> Dict[str, int]:
    """Count cards by effect sign: positive, negative, mixed or neutral."""
    counts = {"total": 0, "positive": 0, "negative": 0, "mixed": 0, "neutral": 0}
    for c in cards:
        vals = c.effect.values()
        has_pos = any(v > 0 for v in vals)
        has_neg = any(v < 0 for v in vals)
        counts["total"] += 1
        if has_pos and has_neg:
            counts["mixed"] += 1
        elif has_pos:
            counts["positive"] += 1
        elif has_neg:
            counts["negative"] += 1
        else:
            counts["neutral"] += 1
    return counts


def _c(card_id: str, title: str, desc: str, eco: float, coh: float, inn: float, stab: float, variance: float = 2.0) -> Card:
    return make_card(
        card_id,
        title,
        desc,
        dict(zip([m.value for m in METRICS], (eco, coh, inn, stab))),
        variance,
    )


DEFAULT_CARDS: Tuple[Card, ...] = (
    _c("renewable-energy", "Renewable Energy", "Invest in solar and wind power", 8, 2, 5, 3),
    _c("education", "Global Education", "Expand access to learning", 2, 6, 8, 4),
    _c("conflict-resolution", "Peace Talks", "Mediate international disputes", 1, 8, 2, 6),
    _c("tech-innovation", "Tech Breakthrough", "Accelerate technological progress", -2, 3, 10, 2),
    _c("forest-conservation", "Forest Protection", "Preserve natural ecosystems", 10, 1, 1, 2),
    _c("cultural-exchange", "Cultural Exchange", "Promote cross-cultural understanding", 1, 7, 4, 3),
    _c("economic-reform", "Economic Reform", "Redistribute wealth fairly", 2, 5, 3, -3),
    _c("pandemic-response", "Health Initiative", "Improve global health systems", 1, 4, 3, 5),
    _c("climate-action", "Climate Action", "Combat climate change", 9, 3, 4, 1),
    _c("war", "Military Conflict", "Armed conflict erupts", -5, -8, 2, -6),
    _c("industrial-spill", "Industrial Spill", "A chemical plant ruptures upstream", -9, -2, 0, -3),
    _c("austerity", "Austerity Drive", "Cut public spending across the board", -1, -5, -3, -2),
)
