from __future__ import annotations

import json
from typing import Any, List

import numpy as np

from .base import Layer, PatternEngine, Score, Track, plain_number, register_engine


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        return "[" + ", ".join(_literal(v) for v in value) + "]"
    return json.dumps(plain_number(value))


def _chain(params: dict) -> str:
    return "".join(f".{name}({_literal(value)})" for name, value in params.items())


class StrudelEngine(PatternEngine):
    """Render a score as a Strudel program (`setcps`, `note`, `s`, `stack`)."""

    name = "strudel"

    def render_layer(self, layer: Layer) -> str:
        expr = f"{layer.source}({_literal(layer.values)})"
        if layer.voice:
            expr += f".s({_literal(layer.voice)})"
        return expr + _chain(layer.params)

    def render_track(self, track: Track) -> str:
        if len(track.layers) == 1:
            return self.render_layer(track.layers[0]) + _chain(track.params)
        inner = ",\n".join(f"  {self.render_layer(layer)}" for layer in track.layers)
        return f"stack(\n{inner}\n){_chain(track.params)}"

    def render(self, score: Score) -> str:
        lines: List[str] = [f"setcps({_literal(score.cps)});"]
        for track in score.tracks:
            lines.append("")
            lines.append(f"// {track.name}")
            lines.append(self.render_track(track) + ";")
        return "\n".join(lines) + "\n"


register_engine(StrudelEngine())
