"""engine.logging

Small helpers for storing run logs.

A run log is JSON-serializable so it can be exported/imported later.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from core.state import Metrics, metrics_to_dict

RUN_EXPORT_VERSION = 1


def make_run_export(
    *,
    seed: int,
    config: Dict[str, Any],
    initial_metrics: Metrics,
    turn_logs: List[Dict[str, Any]],
    status: str,
) -> Dict[str, Any]:
    return {
        "version": RUN_EXPORT_VERSION,
        "seed": int(seed),
        "config": dict(config),
        "initial_metrics": metrics_to_dict(initial_metrics),
        "turn_logs": list(turn_logs),
        "status": str(status),
    }


def dumps_run_export(obj: Dict[str, Any]) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=2, sort_keys=True)


def loads_run_export(raw: str) -> Dict[str, Any]:
    obj = json.loads(raw)
    if not isinstance(obj, dict) or int(obj.get("version", 0)) != RUN_EXPORT_VERSION:
        raise ValueError("unsupported run export")
    return obj
