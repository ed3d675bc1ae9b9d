from __future__ import annotations

import json
from typing import Any, Dict

from .base import Layer, PatternEngine, Score, plain_number, register_engine


def _plain(value: Any) -> Any:
    if isinstance(value, str):
        return value
    if hasattr(value, "__iter__"):
        return [_plain(v) for v in value]
    return plain_number(value)


def _layer_payload(layer: Layer) -> Dict[str, Any]:
    return {
        "source": layer.source,
        "values": _plain(layer.values),
        "voice": layer.voice,
        "params": {k: _plain(v) for k, v in layer.params.items()},
    }


class JsonEngine(PatternEngine):
    """Score as a JSON document, for hosts that drive the engine themselves."""

    name = "json"

    def render(self, score: Score) -> str:
        payload = {
            "cps": plain_number(score.cps),
            "tracks": [
                {
                    "name": track.name,
                    "params": {k: _plain(v) for k, v in track.params.items()},
                    "layers": [_layer_payload(layer) for layer in track.layers],
                }
                for track in score.tracks
            ],
        }
        return json.dumps(payload, indent=2) + "\n"


register_engine(JsonEngine())
