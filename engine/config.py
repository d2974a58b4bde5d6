"""engine.config

Engine configuration passed from UI / headless runners.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class EngineConfig:
    base_seed: int = 42
    start_value: float = 50.0
    victory_threshold: float = 80.0
    victory_streak: int = 5
    collapse_threshold: float = 5.0
    min_duration_ms: float = 500.0
    max_duration_ms: float = 1200.0
    offer_size: int = 3
    cards_path: Optional[str] = None
    frame_budget_ms: float = 1000.0 / 60.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_from_env(env: Optional[Mapping[str, str]] = None, **overrides: Any) -> EngineConfig:
    """Build a config from ECHOES_* environment variables.

    Malformed values are ignored (defaults stay).
    """
    env = os.environ if env is None else env
    kwargs: Dict[str, Any] = {}

    seed = str(env.get("ECHOES_SEED", "") or "").strip()
    if seed:
        try:
            kwargs["base_seed"] = int(seed)
        except ValueError:
            pass

    path = str(env.get("ECHOES_CARDS_PATH", "") or "").strip()
    if path:
        kwargs["cards_path"] = path

    kwargs.update(overrides)
    return EngineConfig(**kwargs)
