import csv
import json
from pathlib import Path

from typer.testing import CliRunner

from lorenzbeat.cli.app import app


def test_render_to_stdout():
    runner = CliRunner()
    result = runner.invoke(app, ["render", "--steps", "64", "--seed", "1", "--voice", "tri"])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("setcps(0.9);")
    assert '.s("tri")' in result.output


def test_render_to_file_with_summary(tmp_path):
    runner = CliRunner()
    out = Path(tmp_path) / "song.js"
    summary = Path(tmp_path) / "song.json"
    result = runner.invoke(
        app,
        [
            "render",
            "--preset",
            "pentatonic",
            "--steps",
            "128",
            "--seed",
            "2",
            "--out",
            str(out),
            "--summary",
            str(summary),
        ],
    )
    assert result.exit_code == 0, result.output
    assert "[run] command=render" in result.output
    assert "[controls] notes n=128" in result.output
    assert out.read_text(encoding="utf-8").startswith("setcps(1.2);")
    meta = json.loads(summary.read_text(encoding="utf-8"))
    assert meta["preset"] == "pentatonic"
    assert meta["lorenz"]["steps"] == 128
    assert meta["voices"] == {"lead": "sine", "pad": "sine"}
    assert meta["bounds"]["notes"] == [36.0, 96.0]


def test_render_from_config_file(tmp_path):
    cfg_path = Path(tmp_path) / "run.yaml"
    cfg_path.write_text(
        "preset: classic\nseed: 3\nlorenz: {steps: 32}\nplayback: {engine: json, cps: 2.0}\n", encoding="utf-8"
    )
    runner = CliRunner()
    result = runner.invoke(app, ["render", "--config", str(cfg_path)])
    assert result.exit_code == 0, result.output
    doc = json.loads(result.output)
    assert doc["cps"] == 2
    assert len(doc["tracks"][0]["layers"][0]["values"]) == 32


def test_render_same_seed_same_output():
    runner = CliRunner()
    args = ["render", "--steps", "200", "--seed", "9"]
    first = runner.invoke(app, args)
    second = runner.invoke(app, args)
    assert first.exit_code == 0, first.output
    assert first.output == second.output


def test_render_rejects_bad_input():
    runner = CliRunner()
    for args in (
        ["--preset", "nope"],
        ["--engine", "nope"],
        ["--steps", "-1"],
        ["--dt", "0"],
        ["--cps", "0"],
        ["--cps", "inf"],
        ["--cps", "1e400"],
        ["--rho", "nan"],
    ):
        result = runner.invoke(app, ["render", *args])
        assert result.exit_code == 1, args
        assert "Config error" in result.output


def test_simulate_writes_csv(tmp_path):
    runner = CliRunner()
    out = Path(tmp_path) / "traj.csv"
    result = runner.invoke(app, ["simulate", "--steps", "50", "--out", str(out)])
    assert result.exit_code == 0, result.output
    with out.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 50
    assert rows[0]["step"] == "1"
    assert float(rows[0]["speed"]) == 0.0


def test_simulate_zero_steps(tmp_path):
    runner = CliRunner()
    out = Path(tmp_path) / "traj.csv"
    result = runner.invoke(app, ["simulate", "--steps", "0", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").strip() == "step,x,y,z,x_norm,y_norm,z_norm,speed,speed_norm"


def test_presets_listing():
    runner = CliRunner()
    result = runner.invoke(app, ["presets", "--json"])
    assert result.exit_code == 0, result.output
    listing = json.loads(result.output)
    assert set(listing["presets"]) == {"classic", "pentatonic"}
    assert listing["presets"]["pentatonic"]["steps"] == 4096
    assert listing["engines"] == ["json", "strudel"]


def test_selftest_passes():
    runner = CliRunner()
    result = runner.invoke(app, ["selftest"])
    assert result.exit_code == 0, result.output
    assert "Selftest passed" in result.output
