from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np

from lorenzbeat.core.constants import PERCUSSION_SYMBOLS
from lorenzbeat.core.features import FeatureSeries
from lorenzbeat.core.safety import clamp_array, safe_symbols
from lorenzbeat.playback.base import Score


@dataclass
class ControlSeries:
    """Bounded control values ready for the playback engine."""

    numeric: Dict[str, np.ndarray] = field(default_factory=dict)
    bounds: Dict[str, Tuple[float, float]] = field(default_factory=dict)
    percussion: Dict[str, List[str]] = field(default_factory=dict)

    def put(self, name: str, values, lo: float, hi: float) -> np.ndarray:
        """Sanitize, clamp and store a numeric series under its declared bounds."""
        safe = clamp_array(values, lo, hi)
        self.numeric[name] = safe
        self.bounds[name] = (float(lo), float(hi))
        return safe

    def put_percussion(self, name: str, symbols) -> List[str]:
        safe = safe_symbols(symbols, PERCUSSION_SYMBOLS)
        self.percussion[name] = safe
        return safe

    def violations(self) -> List[str]:
        """Names of series holding a non-finite or out-of-bounds value."""
        bad = []
        for name, values in self.numeric.items():
            lo, hi = self.bounds[name]
            arr = np.asarray(values, dtype=np.float64)
            if not np.all(np.isfinite(arr)) or np.any(arr < lo) or np.any(arr > hi):
                bad.append(name)
        for name, symbols in self.percussion.items():
            if any(s not in PERCUSSION_SYMBOLS for s in symbols):
                bad.append(name)
        return bad


Mapper = Callable[[FeatureSeries, np.random.Generator], ControlSeries]
Arranger = Callable[[ControlSeries, Dict[str, str], float], Score]


@dataclass(frozen=True)
class MappingPreset:
    """A named mapping from features to controls plus its arrangement."""

    name: str
    description: str
    steps: int
    cps: float
    voice_candidates: Dict[str, Sequence[str]]
    map_controls: Mapper
    arrange: Arranger


PRESET_REGISTRY: Dict[str, MappingPreset] = {}


def register_preset(preset: MappingPreset) -> MappingPreset:
    PRESET_REGISTRY[preset.name] = preset
    return preset


def get_preset(name: str) -> MappingPreset:
    if name not in PRESET_REGISTRY:
        raise ValueError(f"Unknown preset '{name}'. Available: {list_presets()}")
    return PRESET_REGISTRY[name]


def list_presets() -> List[str]:
    return sorted(PRESET_REGISTRY.keys())
