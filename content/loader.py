"""content.loader

Card sources.

A source's job is to produce the card list once at startup. Loading never
fails the game: on any error the built-in pool (core.cards.DEFAULT_CARDS) is
returned with a status explaining why.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from core.cards import DEFAULT_CARDS, Card

from .parsing import try_parse_json
from .schemas import cards_from_data

logger = logging.getLogger(__name__)

DEFAULT_CARDS_PATH = Path(__file__).parent / "data" / "cards.json"


@dataclass(frozen=True)
class LoadStatus:
    ok: bool
    source: str
    count: int
    note: str = ""
    error: str = ""


def fallback_cards(source: str, error: str) -> Tuple[List[Card], LoadStatus]:
    logger.warning(f"Card source {source} unavailable, using built-in pool: {error}")
    cards = list(DEFAULT_CARDS)
    return cards, LoadStatus(ok=False, source="builtin", count=len(cards), note=f"fallback from {source}", error=error)


@dataclass(frozen=True)
class FileCardSource:
    path: Path

    def load(self) -> Tuple[List[Card], LoadStatus]:
        src = str(self.path)
        try:
            raw = Path(self.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return fallback_cards(src, f"{type(e).__name__}: {e}")

        res = try_parse_json(raw)
        if not res.ok:
            return fallback_cards(src, res.error)

        cards, errors = cards_from_data(res.data)
        if not cards:
            return fallback_cards(src, "; ".join(errors) or "no cards")

        note = ""
        if errors:
            note = f"skipped {len(errors)} record(s)"
            logger.warning(f"Card source {src}: {note}: {'; '.join(errors[:5])}")
        logger.info(f"Loaded {len(cards)} cards from {src}")
        return cards, LoadStatus(ok=True, source=src, count=len(cards), note=note)


def load_card_pool(path: Optional[Union[str, Path]] = None) -> Tuple[List[Card], LoadStatus]:
    """Load cards from `path` (default: bundled cards.json) with built-in fallback."""
    return FileCardSource(Path(path) if path else DEFAULT_CARDS_PATH).load()
