from __future__ import annotations

import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from lorenzbeat.core import constants


@dataclass(frozen=True)
class RunConfig:
    """Everything one pipeline run needs; `None` defers to the preset default."""

    preset: str = constants.DEFAULT_PRESET
    steps: Optional[int] = None
    dt: float = constants.DEFAULT_DT
    sigma: float = constants.LORENZ_SIGMA
    rho: float = constants.LORENZ_RHO
    beta: float = constants.LORENZ_BETA
    cps: Optional[float] = None
    seed: Optional[int] = None
    engine: str = constants.DEFAULT_ENGINE
    # Voice names the playback engine provides; empty means use the fallback
    voices: Tuple[str, ...] = ()

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Apply CLI overrides, ignoring options that were not given."""
        given = {k: v for k, v in overrides.items() if v is not None}
        if "voices" in given:
            if not given["voices"]:
                given.pop("voices")
            else:
                given["voices"] = tuple(given["voices"])
        return replace(self, **given)


class ConfigError(Exception):
    """Raised when a run config is invalid."""


def _require(mapping: Dict[str, Any], key: str, expected_type: Tuple[type, ...]):
    if key not in mapping:
        raise ConfigError(f"Missing required key '{key}'")
    val = mapping[key]
    # YAML true/false would otherwise pass as int 1/0
    if not isinstance(val, expected_type) or (isinstance(val, bool) and bool not in expected_type):
        raise ConfigError(f"Key '{key}' must be of type {expected_type}, got {type(val)}")
    return val


def _optional(mapping: Dict[str, Any], key: str, expected_type: Tuple[type, ...], default: Any):
    if mapping.get(key) is None:
        return default
    return _require(mapping, key, expected_type)


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{key}' must be a mapping.")
    return section


def validate_config(cfg: RunConfig) -> RunConfig:
    """Check value ranges; registry names are checked where they are resolved."""
    if cfg.steps is not None and cfg.steps < 0:
        raise ConfigError("steps must be >= 0")
    if not (math.isfinite(cfg.dt) and cfg.dt > 0):
        raise ConfigError("dt must be finite and > 0")
    if cfg.cps is not None and not (math.isfinite(cfg.cps) and cfg.cps > 0):
        raise ConfigError("cps must be finite and > 0")
    for name in ("sigma", "rho", "beta"):
        if not math.isfinite(getattr(cfg, name)):
            raise ConfigError(f"{name} must be finite")
    if any(not isinstance(v, str) or not v for v in cfg.voices):
        raise ConfigError("voices must be non-empty strings")
    return cfg


def parse_config(path: Path) -> RunConfig:
    """
    Load a YAML run file.

    Layout::

        preset: classic
        seed: 7
        lorenz: {steps: 1536, dt: 0.01, sigma: 10, rho: 28, beta: 2.6667}
        playback: {engine: strudel, cps: 0.9, voices: [tri, saw]}
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Top-level YAML must be a mapping.")

    lorenz = _section(data, "lorenz")
    playback = _section(data, "playback")
    number = (int, float)

    steps = _optional(lorenz, "steps", (int,), None)
    seed = _optional(data, "seed", (int,), None)
    cps = _optional(playback, "cps", number, None)
    voices = _optional(playback, "voices", (list, tuple), ())

    cfg = RunConfig(
        preset=str(_optional(data, "preset", (str,), constants.DEFAULT_PRESET)),
        steps=steps,
        dt=float(_optional(lorenz, "dt", number, constants.DEFAULT_DT)),
        sigma=float(_optional(lorenz, "sigma", number, constants.LORENZ_SIGMA)),
        rho=float(_optional(lorenz, "rho", number, constants.LORENZ_RHO)),
        beta=float(_optional(lorenz, "beta", number, constants.LORENZ_BETA)),
        cps=float(cps) if cps is not None else None,
        seed=seed,
        engine=str(_optional(playback, "engine", (str,), constants.DEFAULT_ENGINE)),
        voices=tuple(voices),
    )
    return validate_config(cfg)
