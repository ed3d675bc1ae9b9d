from __future__ import annotations

from typing import Dict, List

import numpy as np

from lorenzbeat.core.constants import LEAD_VOICES, PAD_VOICES, REST
from lorenzbeat.core.features import FeatureSeries
from lorenzbeat.playback.base import Layer, Score, Track

from .base import ControlSeries, MappingPreset, register_preset

# C minor pentatonic, in semitones above the root
PENTATONIC = np.array([0, 3, 5, 7, 10])
OCTAVES = np.array([0, 12, 24, 36])


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def _trigger(mask: np.ndarray, probability: float, symbol: str, rng: np.random.Generator) -> List[str]:
    """Emit `symbol` where `mask` holds and a uniform draw is under `probability`."""
    mask = np.asarray(mask, dtype=bool)
    draws = rng.random(mask.shape[0])
    return np.where(mask & (draws < probability), symbol, REST).tolist()


def _sign_changes(values: np.ndarray) -> np.ndarray:
    signs = np.sign(np.nan_to_num(values, nan=0.0, posinf=0.0, neginf=0.0))
    changes = np.zeros(signs.shape, dtype=bool)
    changes[1:] = signs[1:] != signs[:-1]
    return changes


# -------------------------
# classic
# -------------------------


def classic_controls(features: FeatureSeries, rng: np.random.Generator) -> ControlSeries:
    """Linear maps: x to pitch, y to cutoff, z to pan, speed to gain."""
    controls = ControlSeries()
    notes = controls.put("notes", _round_half_up(60 + features.xs * 24), 36, 96)
    controls.put("cutoff", 200 + features.ys * 5000, 20, 12000)
    controls.put("pan", features.zs * 2 - 1, -1, 1)
    controls.put("gain", 0.2 + 0.6 * features.spd, 0.0, 1.0)

    controls.put_percussion("kicks", _trigger(_sign_changes(features.dxs), 0.6, "bd", rng))
    controls.put_percussion("snares", _trigger(features.spd < 0.15, 0.25, "sd", rng))
    controls.put_percussion("hats", _trigger(features.zs > 0.7, 0.5, "hh", rng))

    roots = controls.put("roots", notes[::8], 36, 84)
    controls.put("thirds", roots + 4, 36, 96)
    controls.put("fifths", roots + 7, 36, 96)
    return controls


def classic_arrange(controls: ControlSeries, voices: Dict[str, str], cps: float) -> Score:
    num, perc = controls.numeric, controls.percussion
    lead = Layer(
        "note",
        num["notes"],
        voice=voices["lead"],
        params={
            "attack": 0.005,
            "release": 0.25,
            "cutoff": num["cutoff"],
            "pan": num["pan"],
            "gain": num["gain"],
            "fast": 2,
        },
    )
    percussion = [
        Layer("s", perc["kicks"], params={"gain": 1.0}),
        Layer("s", perc["snares"], params={"gain": 0.8, "delay": 0.01}),
        Layer("s", perc["hats"], params={"gain": 0.5, "speed": 2}),
    ]
    # Three mono voices rather than one chord pattern
    pad = [
        Layer("note", num[name], voice=voices["pad"], params={"legato": 2.5, "cutoff": 1200, "gain": 0.05, "slow": 2})
        for name in ("roots", "thirds", "fifths")
    ]
    return Score(
        cps=cps,
        tracks=[
            Track("lead", [lead]),
            Track("percussion", percussion, params={"room": 0.15, "size": 0.2}),
            Track("pad", pad),
        ],
    )


# -------------------------
# pentatonic
# -------------------------


def pentatonic_controls(features: FeatureSeries, rng: np.random.Generator) -> ControlSeries:
    """x picks the scale degree, y the octave; triggers follow attractor regions."""
    controls = ControlSeries()
    n = len(features)
    idx = np.arange(n)

    degree = np.clip(np.floor(features.xs * len(PENTATONIC)).astype(int), 0, len(PENTATONIC) - 1)
    octave = np.clip(np.floor(features.ys * len(OCTAVES)).astype(int), 0, len(OCTAVES) - 1)
    notes = controls.put("notes", 48 + OCTAVES[octave] + PENTATONIC[degree], 36, 96)

    cutoff = 300 + features.zs * 8000
    controls.put("cutoff", cutoff, 100, 12000)
    angle = np.arctan2(features.ys - 0.5, features.xs - 0.5)
    controls.put("pan", np.sin(angle), -1, 1)
    controls.put("gain", 0.3 + 0.5 * features.spd + 0.1 * np.sin(idx * 0.05), 0.1, 0.9)

    controls.put_percussion(
        "kicks", _trigger((features.spd > 0.7) & (idx % 4 == 0), 0.8, "bd", rng)
    )
    controls.put_percussion(
        "snares",
        _trigger((idx > 0) & (np.abs(features.zs - 0.5) < 0.1) & (idx % 3 == 0), 0.4, "sd", rng),
    )
    controls.put_percussion("hats", _trigger((idx % 2 == 0) & (features.xs > 0.6), 0.6, "hh", rng))

    controls.put("pad_notes", notes[::16], 36, 84)
    controls.put("pad_cutoff", cutoff[::16], 200, 3000)
    return controls


def pentatonic_arrange(controls: ControlSeries, voices: Dict[str, str], cps: float) -> Score:
    num, perc = controls.numeric, controls.percussion
    lead = Layer(
        "note",
        num["notes"],
        voice=voices["lead"],
        params={
            "attack": 0.01,
            "decay": 0.1,
            "sustain": 0.7,
            "release": 0.3,
            "cutoff": num["cutoff"],
            "resonance": 5,
            "pan": num["pan"],
            "gain": num["gain"],
            "room": 0.3,
            "size": 0.5,
            "fast": 1,
        },
    )
    percussion = [
        Layer("s", perc["kicks"], params={"gain": 1.2, "lpf": 200}),
        Layer("s", perc["snares"], params={"gain": 0.9, "delay": 0.015, "hpf": 800}),
        Layer("s", perc["hats"], params={"gain": 0.4, "speed": 1.5, "hpf": 5000}),
    ]
    pad = Layer(
        "note",
        num["pad_notes"],
        voice=voices["pad"],
        params={
            "legato": 4,
            "cutoff": num["pad_cutoff"],
            "gain": 0.2,
            "room": 0.8,
            "size": 0.9,
            "slow": 4,
        },
    )
    return Score(
        cps=cps,
        tracks=[
            Track("lead", [lead]),
            Track("percussion", percussion, params={"room": 0.2, "size": 0.3}),
            Track("pad", [pad]),
        ],
    )


# Registry
register_preset(
    MappingPreset(
        name="classic",
        description="Linear pitch/cutoff/pan/gain maps with a triad pad wash.",
        steps=1536,
        cps=0.9,
        voice_candidates={"lead": LEAD_VOICES, "pad": PAD_VOICES},
        map_controls=classic_controls,
        arrange=classic_arrange,
    )
)
register_preset(
    MappingPreset(
        name="pentatonic",
        description="Minor pentatonic melody, region-driven percussion and a slow pad.",
        steps=4096,
        cps=1.2,
        voice_candidates={"lead": LEAD_VOICES, "pad": PAD_VOICES},
        map_controls=pentatonic_controls,
        arrange=pentatonic_arrange,
    )
)
