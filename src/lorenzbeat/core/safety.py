"""Clamp-and-sanitize helpers applied to every control series before playback."""

from __future__ import annotations

import math
from typing import Any, Iterable, List, Sequence

import numpy as np

from lorenzbeat.core.constants import REST


def safe_num(value: Any, default: float = 0.0) -> float:
    """Coerce `value` to a finite float, returning `default` when that fails."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return float(default)
    return number if math.isfinite(number) else float(default)


def safe_array(values: Any, default: float = 0.0) -> np.ndarray:
    """Sanitize every element; scalars are promoted to a one-element array."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        values = [values]
    return np.array([safe_num(v, default) for v in values], dtype=np.float64)


def clamp(value: Any, lo: float, hi: float) -> float:
    """Clamp a single value; non-finite input lands on the range midpoint."""
    number = safe_num(value, (lo + hi) / 2.0)
    return max(lo, min(hi, number))


def clamp_array(values: Any, lo: float, hi: float, default: float | None = None) -> np.ndarray:
    """
    Sanitize then clamp into [lo, hi].

    Values that are non-numeric or non-finite are replaced by `default`
    (the range midpoint when omitted) before clamping.
    """
    if lo > hi:
        raise ValueError(f"invalid bounds lo={lo} > hi={hi}")
    fill = (lo + hi) / 2.0 if default is None else default
    return np.clip(safe_array(values, fill), lo, hi)


def safe_symbols(values: Iterable[Any], allowed: Sequence[str], default: str = REST) -> List[str]:
    """Keep only symbols from `allowed`; anything else becomes a rest."""
    allowed_set = set(allowed)
    return [v if isinstance(v, str) and v in allowed_set else default for v in values]
