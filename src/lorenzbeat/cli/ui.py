from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable

import numpy as np
import typer

from lorenzbeat.core.constants import REST
from lorenzbeat.core.mapping.base import ControlSeries


def _timestamp_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _abs_path(path: Path | None) -> str:
    if path is None:
        return "n/a"
    try:
        return str(path.resolve())
    except Exception:  # noqa: BLE001
        return str(path)


def print_run_header(
    command: str,
    *,
    preset: str | None = None,
    steps: int | None = None,
    dt: float | None = None,
    sigma: float | None = None,
    rho: float | None = None,
    beta: float | None = None,
    cps: float | None = None,
    seed: int | None = None,
    engine: str | None = None,
    voices: Dict[str, str] | None = None,
) -> None:
    typer.echo(f"[run] command={command} ts_utc={_timestamp_utc()}")
    typer.echo(f"[lorenz] steps={steps} dt={dt} sigma={sigma} rho={rho} beta={beta}")
    if preset is not None:
        seed_text = seed if seed is not None else "random"
        typer.echo(f"[preset] name={preset} cps={cps} seed={seed_text}")
    if engine is not None or voices:
        voice_text = " ".join(f"{role}={name}" for role, name in (voices or {}).items()) or "n/a"
        typer.echo(f"[playback] engine={engine or 'n/a'} {voice_text}")


def print_control_summary(controls: ControlSeries) -> None:
    for name in sorted(controls.numeric):
        values = controls.numeric[name]
        lo, hi = controls.bounds[name]
        if len(values):
            typer.echo(
                f"[controls] {name} n={len(values)} min={float(np.min(values)):.4g} "
                f"max={float(np.max(values)):.4g} bounds=[{lo:g},{hi:g}]"
            )
        else:
            typer.echo(f"[controls] {name} n=0 bounds=[{lo:g},{hi:g}]")
    for name in sorted(controls.percussion):
        symbols = controls.percussion[name]
        hits = sum(1 for s in symbols if s != REST)
        typer.echo(f"[controls] {name} hits={hits}/{len(symbols)}")


def print_io_write(path: Path) -> None:
    typer.echo(f"[io] Writing output: {_abs_path(path)}")


def print_lines(tag: str, lines: Iterable[str]) -> None:
    for line in lines:
        typer.echo(f"[{tag}] {line}")


def print_done(summary: str) -> None:
    typer.echo(f"[done] {summary}")
