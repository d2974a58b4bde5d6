"""content.parsing

Forgiving JSON parsing for hand-edited card files.

We do NOT execute code; we only:
- normalize smart quotes
- remove trailing commas
- json.loads, then ast.literal_eval fallback (after normalizing literals)
"""

from __future__ import annotations

import ast
import json
import re
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParseResult:
    data: Any
    raw: str
    cleaned: str
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


def normalize_smart_quotes(s: str) -> str:
    return (
        (s or "")
        .replace("\u201c", '"')
        .replace("\u201d", '"')
        .replace("\u2018", "'")
        .replace("\u2019", "'")
        .replace("\u00a0", " ")
    )


def remove_trailing_commas(s: str) -> str:
    return re.sub(r",\s*([}\]])", r"\1", s)


def try_parse_json(raw: str) -> ParseResult:
    """Best-effort parse of an object or list root. Returns ParseResult(error=...) on failure."""
    raw = (raw or "").strip()

    s = normalize_smart_quotes(raw)
    s = remove_trailing_commas(s)

    if not s:
        return ParseResult(data=None, raw=raw, cleaned=s, error="empty input")

    # 1) JSON
    try:
        obj = json.loads(s)
        if isinstance(obj, (dict, list)):
            return ParseResult(data=obj, raw=raw, cleaned=s)
        return ParseResult(data=None, raw=raw, cleaned=s, error="JSON root is not an object or list")
    except (ValueError, RecursionError) as e_json:
        err1 = f"json.loads: {type(e_json).__name__}: {e_json}"

    # 2) literal_eval fallback (single quotes, True/False/None)
    s2 = re.sub(r"\btrue\b", "True", s, flags=re.IGNORECASE)
    s2 = re.sub(r"\bfalse\b", "False", s2, flags=re.IGNORECASE)
    s2 = re.sub(r"\bnull\b", "None", s2, flags=re.IGNORECASE)
    try:
        obj2 = ast.literal_eval(s2)
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError) as e_ast:
        err2 = f"literal_eval: {type(e_ast).__name__}: {e_ast}"
        return ParseResult(data=None, raw=raw, cleaned=s, error=f"{err1} | {err2}")

    if isinstance(obj2, (dict, list)):
        # normalize into JSON-serializable types
        return ParseResult(data=json.loads(json.dumps(obj2, default=str)), raw=raw, cleaned=s)
    return ParseResult(data=None, raw=raw, cleaned=s, error=f"literal_eval root is not object or list; {err1}")
