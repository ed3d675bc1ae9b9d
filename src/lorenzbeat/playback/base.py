from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

# Decimal places kept when numbers are handed to an engine
PRECISION = 4


@dataclass(frozen=True)
class Layer:
    """One pattern: a value sequence fed to `note` or `s`, then a parameter chain."""

    source: str
    values: Sequence[Any]
    voice: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Track:
    """Layers played together; `params` apply to the whole stack."""

    name: str
    layers: List[Layer]
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Score:
    cps: float
    tracks: List[Track]


class PatternEngine(ABC):
    """Adapter that turns a score into the input of a pattern-playback engine."""

    name: str = ""

    @abstractmethod
    def render(self, score: Score) -> str:
        ...


def plain_number(value: Any) -> Any:
    """Convert numpy/python numbers to plain ints or rounded floats."""
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, np.integer)):
        return int(value)
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"refusing to render non-finite value {value!r}")
    rounded = round(number, PRECISION)
    return int(rounded) if rounded.is_integer() else rounded


ENGINE_REGISTRY: Dict[str, PatternEngine] = {}


def register_engine(engine: PatternEngine) -> PatternEngine:
    ENGINE_REGISTRY[engine.name] = engine
    return engine


def get_engine(name: str) -> PatternEngine:
    if name not in ENGINE_REGISTRY:
        raise ValueError(f"Unknown engine '{name}'. Available: {list_engines()}")
    return ENGINE_REGISTRY[name]


def list_engines() -> List[str]:
    return sorted(ENGINE_REGISTRY.keys())
