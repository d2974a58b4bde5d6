"""content.schemas

Contract for card records coming from the card source.

Raw record (JSON):
    {"id": "...", "title": "...", "desc": "...",
     "effects": {"ecology": 8, "cohesion": 2, ...}, "variance": 2}

Schema strategy:
- `desc`/`description` and `effects`/`effect` are both accepted.
- Missing or non-numeric effect values become 0; unknown keys are dropped.
- Negative or non-numeric variance becomes 0.
- A record without id or title is rejected (ValueError).
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Tuple

from core.cards import Card, make_card
from core.state import METRICS, safe_number

MAX_ID_LEN = 64
MAX_TITLE_LEN = 80


def normalize_effect(d: Any) -> Dict[str, float]:
    if not isinstance(d, Mapping):
        return {m.value: 0.0 for m in METRICS}
    return {m.value: safe_number(d.get(m.value, 0.0)) for m in METRICS}


def normalize_id(x: Any) -> str:
    return str(x or "").strip().lower().replace(" ", "-")[:MAX_ID_LEN]


def card_from_mapping(obj: Mapping[str, Any]) -> Card:
    if not isinstance(obj, Mapping):
        raise ValueError("card record must be an object")

    card_id = normalize_id(obj.get("id"))
    if not card_id:
        raise ValueError("card.id missing")
    title = str(obj.get("title") or obj.get("label") or "").strip()[:MAX_TITLE_LEN]
    if not title:
        raise ValueError(f"card {card_id}: title missing")

    effects = obj.get("effects", obj.get("effect"))
    return make_card(
        card_id,
        title,
        str(obj.get("desc") or obj.get("description") or "").strip(),
        normalize_effect(effects),
        max(0.0, safe_number(obj.get("variance", 0.0))),
    )


def cards_from_data(data: Any) -> Tuple[List[Card], List[str]]:
    """Parse a list of records (or {"cards": [...]}) into cards.

    Returns (cards, errors). Bad records are skipped; for duplicate ids the
    first record wins.
    """
    if isinstance(data, Mapping):
        data = data.get("cards")
    if not isinstance(data, list):
        return [], ["card data must be a list of records"]

    cards: List[Card] = []
    errors: List[str] = []
    seen = set()
    for i, obj in enumerate(data):
        try:
            card = card_from_mapping(obj)
        except ValueError as e:
            errors.append(f"record {i}: {e}")
            continue
        if card.id in seen:
            errors.append(f"record {i}: duplicate id {card.id!r}")
            continue
        seen.add(card.id)
        cards.append(card)
    return cards, errors
