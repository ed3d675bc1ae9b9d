from __future__ import annotations

import json
from pathlib import Path
from typing import List

import numpy as np
import typer

from lorenzbeat.cli import ui
from lorenzbeat.core import constants
from lorenzbeat.core.features import extract_features
from lorenzbeat.core.mapping.base import get_preset, list_presets
from lorenzbeat.io.config import ConfigError, RunConfig, parse_config, validate_config
from lorenzbeat.io.formats import TRAJECTORY_FIELDS, trajectory_rows, write_csv, write_json, write_text
from lorenzbeat.orchestrator.pipeline import PipelineResult, render_score, run_pipeline, simulate as simulate_trajectory
from lorenzbeat.playback.base import get_engine, list_engines
from lorenzbeat.utils.logging import resolve_log_level, set_command_context, setup_logging

app = typer.Typer(help="Lorenz attractor to live-coding pattern renderer")

SELFTEST_SEED = 0


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", help="Log pipeline stages (INFO)"),
    debug: bool = typer.Option(False, "--debug", help="Log everything (DEBUG)"),
):
    setup_logging(resolve_log_level(verbose, debug))


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _load_config(config: Path | None, **overrides) -> RunConfig:
    try:
        base = parse_config(config) if config is not None else RunConfig()
        cfg = validate_config(base.with_overrides(**overrides))
        get_preset(cfg.preset)
        get_engine(cfg.engine)
    except (ConfigError, ValueError) as exc:
        _fail(f"Config error: {exc}")
    return cfg


def _summary_payload(result: PipelineResult) -> dict:
    controls = result.controls
    return {
        "preset": result.preset.name,
        "engine": result.config.engine,
        "seed": result.config.seed,
        "lorenz": {
            "steps": result.steps,
            "dt": result.config.dt,
            "sigma": result.config.sigma,
            "rho": result.config.rho,
            "beta": result.config.beta,
            "initial_state": list(constants.INITIAL_STATE),
        },
        "cps": result.cps,
        "voices": result.voices,
        "bounds": {name: list(bounds) for name, bounds in controls.bounds.items()},
        "percussion_hits": {
            name: sum(1 for s in symbols if s != constants.REST) for name, symbols in controls.percussion.items()
        },
    }


@app.command()
def render(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True, help="YAML run file"),
    preset: str | None = typer.Option(None, "--preset", "-p", help="Mapping preset"),
    steps: int | None = typer.Option(None, "--steps", "-n", help="Integration steps (preset default)"),
    dt: float | None = typer.Option(None, help="RK4 step size"),
    sigma: float | None = typer.Option(None, help="Lorenz sigma"),
    rho: float | None = typer.Option(None, help="Lorenz rho"),
    beta: float | None = typer.Option(None, help="Lorenz beta"),
    cps: float | None = typer.Option(None, help="Tempo in cycles per second (preset default)"),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Seed for percussion triggers"),
    engine: str | None = typer.Option(None, "--engine", "-e", help="Pattern engine adapter"),
    voice: List[str] | None = typer.Option(None, "--voice", help="Voice the engine provides (repeatable)"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Write the program to a file instead of stdout"),
    summary: Path | None = typer.Option(None, "--summary", help="Write run metadata as JSON"),
):
    """Run the full pipeline and hand the score to a pattern engine."""
    set_command_context("render")
    cfg = _load_config(
        config,
        preset=preset,
        steps=steps,
        dt=dt,
        sigma=sigma,
        rho=rho,
        beta=beta,
        cps=cps,
        seed=seed,
        engine=engine,
        voices=voice,
    )

    result = run_pipeline(cfg)
    program = render_score(result.score, cfg.engine)

    if summary:
        write_json(summary, _summary_payload(result))

    if out is None:
        typer.echo(program, nl=False)
        return

    ui.print_run_header(
        "render",
        preset=result.preset.name,
        steps=result.steps,
        dt=cfg.dt,
        sigma=cfg.sigma,
        rho=cfg.rho,
        beta=cfg.beta,
        cps=result.cps,
        seed=cfg.seed,
        engine=cfg.engine,
        voices=result.voices,
    )
    ui.print_control_summary(result.controls)
    ui.print_io_write(out)
    write_text(out, program)
    ui.print_done(f"{cfg.engine} program → {out}")


@app.command()
def simulate(
    steps: int = typer.Option(constants.DEFAULT_STEPS, "--steps", "-n", help="Integration steps"),
    dt: float = typer.Option(constants.DEFAULT_DT, help="RK4 step size"),
    sigma: float = typer.Option(constants.LORENZ_SIGMA, help="Lorenz sigma"),
    rho: float = typer.Option(constants.LORENZ_RHO, help="Lorenz rho"),
    beta: float = typer.Option(constants.LORENZ_BETA, help="Lorenz beta"),
    out: Path = typer.Option(..., "--out", "-o", help="CSV output path"),
):
    """Integrate the attractor and export the trajectory with its features as CSV."""
    set_command_context("simulate")
    cfg = _load_config(None, steps=steps, dt=dt, sigma=sigma, rho=rho, beta=beta)

    trajectory = simulate_trajectory(cfg)
    features = extract_features(trajectory)

    ui.print_run_header("simulate", steps=cfg.steps, dt=cfg.dt, sigma=cfg.sigma, rho=cfg.rho, beta=cfg.beta)
    ui.print_io_write(out)
    write_csv(out, trajectory_rows(trajectory, features), TRAJECTORY_FIELDS)
    ui.print_done(f"{len(trajectory)} states → {out}")


@app.command()
def plot(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True, help="YAML run file"),
    preset: str | None = typer.Option(None, "--preset", "-p", help="Mapping preset"),
    steps: int | None = typer.Option(None, "--steps", "-n", help="Integration steps (preset default)"),
    seed: int | None = typer.Option(None, "--seed", "-s", help="Seed for percussion triggers"),
    out: Path = typer.Option(..., "--out", "-o", help="Directory for PNG plots"),
):
    """Plot the trajectory and the mapped control series."""
    set_command_context("plot")
    cfg = _load_config(config, preset=preset, steps=steps, seed=seed)

    from lorenzbeat.report.plots import generate_plots

    result = run_pipeline(cfg)
    ui.print_run_header(
        "plot",
        preset=result.preset.name,
        steps=result.steps,
        dt=cfg.dt,
        sigma=cfg.sigma,
        rho=cfg.rho,
        beta=cfg.beta,
        cps=result.cps,
        seed=cfg.seed,
    )
    refs = generate_plots(result.trajectory, result.controls, out)
    ui.print_lines("io", (f"Wrote plot: {ref}" for ref in refs))
    ui.print_done(f"{len(refs)} plots → {out}")


@app.command()
def presets(json_out: bool = typer.Option(False, "--json", help="Print as JSON")):
    """List mapping presets and pattern engines."""
    set_command_context("presets")
    listing = {
        "presets": {
            name: {
                "description": get_preset(name).description,
                "steps": get_preset(name).steps,
                "cps": get_preset(name).cps,
            }
            for name in list_presets()
        },
        "engines": list_engines(),
    }
    if json_out:
        typer.echo(json.dumps(listing))
        return
    for name, info in listing["presets"].items():
        typer.echo(f"{name}: steps={info['steps']} cps={info['cps']} - {info['description']}")
    typer.echo("engines: " + ", ".join(listing["engines"]))


@app.command()
def selftest():
    """
    Check control invariants for every preset (no filesystem writes).

    Covers the default constants, an empty trajectory and a diverging one.
    """
    set_command_context("selftest")

    cases = [
        ("default", {}),
        ("empty", {"steps": 0}),
        ("diverging", {"steps": 64, "dt": 10.0}),
    ]
    failures: List[str] = []
    for name in list_presets():
        for label, overrides in cases:
            cfg = RunConfig(preset=name, seed=SELFTEST_SEED).with_overrides(**overrides)
            result = run_pipeline(cfg, rng=np.random.default_rng(SELFTEST_SEED))
            bad = result.controls.violations()
            lengths = {len(v) for v in result.controls.percussion.values()}
            if bad or lengths - {result.steps}:
                failures.append(f"{name}/{label}: {bad or 'percussion length mismatch'}")
            for engine_name in list_engines():
                render_score(result.score, engine_name)

    if failures:
        ui.print_lines("selftest", failures)
        typer.secho("Selftest FAILED.", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.secho("Selftest passed (control bounds).", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
