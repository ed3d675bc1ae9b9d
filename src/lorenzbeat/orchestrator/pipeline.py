from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from lorenzbeat.core.chaos.lorenz import integrate_lorenz
from lorenzbeat.core.features import FeatureSeries, extract_features
from lorenzbeat.core.mapping.base import ControlSeries, MappingPreset, get_preset
from lorenzbeat.core.mapping import presets  # noqa: F401 (registers presets)
from lorenzbeat.core.voices import pick_voices
from lorenzbeat.io.config import RunConfig
from lorenzbeat.playback.base import Score, get_engine
from lorenzbeat.playback import json_engine  # noqa: F401 (registers engines)
from lorenzbeat.playback import strudel  # noqa: F401 (registers engines)
from lorenzbeat.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    config: RunConfig
    preset: MappingPreset
    steps: int
    cps: float
    trajectory: np.ndarray
    features: FeatureSeries
    controls: ControlSeries
    voices: Dict[str, str]
    score: Score


def simulate(config: RunConfig, steps: Optional[int] = None) -> np.ndarray:
    n = config.steps if steps is None else steps
    logger.debug(
        "Integrating Lorenz steps=%d dt=%s sigma=%s rho=%s beta=%s", n, config.dt, config.sigma, config.rho, config.beta
    )
    return integrate_lorenz(n, dt=config.dt, sigma=config.sigma, rho=config.rho, beta=config.beta)


def map_controls(
    features: FeatureSeries, preset: MappingPreset, rng: np.random.Generator
) -> ControlSeries:
    controls = preset.map_controls(features, rng)
    bad = controls.violations()
    if bad:
        # clamp_array guarantees bounds; reaching this is a mapping bug
        raise RuntimeError(f"preset '{preset.name}' produced out-of-bounds series: {bad}")
    logger.debug("Mapped controls preset=%s series=%s", preset.name, sorted(controls.numeric))
    return controls


def run_pipeline(config: RunConfig, rng: Optional[np.random.Generator] = None) -> PipelineResult:
    """Simulate, derive features, map to controls, pick voices and arrange a score."""
    preset = get_preset(config.preset)
    steps = preset.steps if config.steps is None else config.steps
    cps = preset.cps if config.cps is None else config.cps
    if rng is None:
        rng = np.random.default_rng(config.seed)

    trajectory = simulate(config, steps)
    features = extract_features(trajectory)
    controls = map_controls(features, preset, rng)
    voices = pick_voices(preset.voice_candidates, config.voices)
    logger.debug("Voices %s (available=%s)", voices, list(config.voices) or "none")
    score = preset.arrange(controls, voices, cps)
    logger.info("Composed preset=%s steps=%d cps=%s tracks=%d", preset.name, steps, cps, len(score.tracks))

    return PipelineResult(
        config=config,
        preset=preset,
        steps=steps,
        cps=cps,
        trajectory=trajectory,
        features=features,
        controls=controls,
        voices=voices,
        score=score,
    )


def render_score(score: Score, engine_name: str) -> str:
    """Hand the score to a pattern engine adapter and return its program."""
    engine = get_engine(engine_name)
    logger.debug("Rendering score with engine=%s", engine.name)
    return engine.render(score)
