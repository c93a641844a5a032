"""Locale-independent number text with sentinels for non-finite values."""
from __future__ import annotations
import math

POS_INF = "Infinity"
NEG_INF = "-Infinity"
NAN = "NaN"

_PARSE = {
    POS_INF: float("inf"),
    NEG_INF: float("-inf"),
    NAN: float("nan"),
}


def format_number(x: float) -> str:
    """Shortest round-trip decimal text, or a sentinel for inf/NaN."""
    x = float(x)
    if math.isnan(x):
        return NAN
    if math.isinf(x):
        return POS_INF if x > 0 else NEG_INF
    return repr(x)


def json_number(x: float) -> float | str:
    """Finite floats pass through; inf/NaN become their sentinel strings."""
    x = float(x)
    if math.isfinite(x):
        return x
    return format_number(x)


def json_numbers(xs) -> list[float | str]:
    return [json_number(v) for v in xs]


def parse_number(s) -> float:
    """Inverse of format_number/json_number."""
    if isinstance(s, (int, float)) and not isinstance(s, bool):
        return float(s)
    text = str(s).strip()
    if text in _PARSE:
        return _PARSE[text]
    return float(text)
