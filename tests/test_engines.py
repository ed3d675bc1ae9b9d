import json

import numpy as np
import pytest

from lorenzbeat.playback.base import Layer, Score, Track, get_engine, list_engines
from lorenzbeat.playback import json_engine  # noqa: F401 (registers)
from lorenzbeat.playback import strudel  # noqa: F401 (registers)


def _score():
    lead = Layer("note", np.array([60.0, 61.0]), voice="tri", params={"cutoff": np.array([200.5, 300.0]), "fast": 2})
    drums = [
        Layer("s", ["bd", "~"], params={"gain": 1.0}),
        Layer("s", ["~", "hh"], params={"speed": 2}),
    ]
    return Score(cps=0.9, tracks=[Track("lead", [lead]), Track("percussion", drums, params={"room": 0.15})])


def test_engines_registered():
    assert list_engines() == ["json", "strudel"]
    with pytest.raises(ValueError):
        get_engine("tidal")


def test_strudel_program():
    program = get_engine("strudel").render(_score())
    assert program.startswith("setcps(0.9);")
    assert 'note([60, 61]).s("tri").cutoff([200.5, 300]).fast(2);' in program
    assert 'stack(\n  s(["bd", "~"]).gain(1),\n  s(["~", "hh"]).speed(2)\n).room(0.15);' in program


def test_json_document():
    doc = json.loads(get_engine("json").render(_score()))
    assert doc["cps"] == 0.9
    lead = doc["tracks"][0]["layers"][0]
    assert lead["values"] == [60, 61]
    assert lead["voice"] == "tri"
    assert lead["params"]["cutoff"] == [200.5, 300]
    assert doc["tracks"][1]["params"] == {"room": 0.15}


def test_non_finite_values_are_refused():
    score = Score(cps=1.0, tracks=[Track("lead", [Layer("note", [float("nan")])])])
    with pytest.raises(ValueError):
        get_engine("strudel").render(score)
