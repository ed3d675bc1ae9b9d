from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from typer.testing import CliRunner  # noqa: E402

from lorenzbeat.cli.app import app  # noqa: E402


def test_plot_command_writes_pngs(tmp_path):
    runner = CliRunner()
    out_dir = Path(tmp_path) / "plots"
    result = runner.invoke(app, ["plot", "--steps", "128", "--seed", "0", "--out", str(out_dir)])
    assert result.exit_code == 0, result.output
    for name in ("trajectory.png", "controls.png"):
        path = out_dir / name
        assert path.exists()
        assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
