# living_hinge/test_io_cli.py
# Job files, CSV/JSON exports, PNG preview and the command line.

from __future__ import annotations

import csv
import json

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

import pytest

from living_hinge.cli import main
from living_hinge.io_csv import export_all
from living_hinge.io_json import load_job_json, parse_job, save_layout_json
from living_hinge.layout import generate_layout
from living_hinge.logger import set_enabled
from living_hinge.parameters import create
from living_hinge.plotting import PlotStyle, plot_layout, save_layout_png
from living_hinge.utils import fmt, round_half_up


@pytest.fixture(autouse=True)
def _quiet_logger():
    set_enabled(False)
    yield
    set_enabled(True)


def test_fmt_and_rounding() -> None:
    assert fmt(10.0) == "10"
    assert fmt(11.5) == "11.5"
    assert fmt(1 / 3) == "0.333"
    assert fmt(-0.0001) == "0"
    assert str(round_half_up(2.5)) == "3"
    assert str(round_half_up(1.0, 1)) == "1.0"


def test_load_job_json(tmp_path) -> None:
    path = tmp_path / "job.json"
    path.write_text(
        json.dumps({"name": "lid", "preset": "Dense", "params": {"Length": 90, "AlternateRows": False}}),
        encoding="utf-8",
    )
    job = load_job_json(path)
    assert job.name == "lid"
    assert job.preset == "Dense"
    assert job.params == {"Length": 90, "AlternateRows": False}


def test_parse_job_rejects_bad_shapes() -> None:
    with pytest.raises(ValueError):
        parse_job([])
    with pytest.raises(ValueError):
        parse_job({"params": [1, 2]})
    assert parse_job({}).preset is None


def test_exports(tmp_path) -> None:
    pset = create()
    layout = generate_layout(pset)

    export_all(layout, pset, tmp_path, prefix="std")
    with (tmp_path / "std_segments.csv").open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 15
    assert rows[0] == {"index": "0", "row": "0", "start_x": "10", "end_x": "25", "y": "23", "length": "15"}

    with (tmp_path / "std_parameters.csv").open(newline="", encoding="utf-8") as f:
        params = {r["name"]: r for r in csv.DictReader(f)}
    assert params["NumberOfRows"]["kind"] == "derived"
    assert params["NumberOfRows"]["value"] == "3"
    assert params["Length"]["unit"] == "mm"

    save_layout_json(layout, tmp_path / "std.json", pset)
    data = json.loads((tmp_path / "std.json").read_text(encoding="utf-8"))
    assert len(data["segments"]) == 15
    assert data["segments"][5] == {"row": 1, "start_x": 11.5, "end_x": 26.5, "y": 31.0}
    assert data["parameters"]["SlitsPerRow"]["value"] == 5
    assert data["sheet"]["bounds"] == [10.0, 10.0, 110.0, 60.0]


def test_plot_and_png(tmp_path) -> None:
    pset = create()
    layout = generate_layout(pset)
    fig = plot_layout(layout, pset, style=PlotStyle(show_title=True))
    ax = fig.axes[0]
    assert len(ax.collections) == 1
    assert len(ax.collections[0].get_segments()) == 15
    plt.close(fig)

    out = tmp_path / "preview.png"
    save_layout_png(layout, pset, str(out), dpi=50)
    assert out.exists() and out.stat().st_size > 0


def test_cli_generates_svg_and_side_outputs(tmp_path, capsys) -> None:
    code = main(["--preset", "dense", "--out", str(tmp_path), "--csv", "--json", "--quiet"])
    assert code == 0

    svgs = list(tmp_path.glob("hinge_dense_80x40_slit12x1.0_sp2_off6_alt_*.svg"))
    assert len(svgs) == 1
    stem = svgs[0].stem
    assert (tmp_path / f"{stem}_segments.csv").exists()
    assert (tmp_path / f"{stem}_parameters.csv").exists()
    assert (tmp_path / f"{stem}.json").exists()

    out = capsys.readouterr().out
    assert "NumberOfRows: 3 count" in out

    assert main(["--list", "--out", str(tmp_path)]) == 0
    assert svgs[0].name in capsys.readouterr().out


def test_cli_job_and_flags(tmp_path) -> None:
    job = tmp_path / "job.json"
    job.write_text(json.dumps({"preset": "standard", "params": {"Length": 150}}), encoding="utf-8")
    code = main(["--job", str(job), "--size", "140x60", "--regular", "--out", str(tmp_path / "o"), "--quiet"])
    assert code == 0
    names = [p.name for p in (tmp_path / "o").glob("*.svg")]
    assert len(names) == 1
    assert names[0].startswith("hinge_standard_140x60_slit15x1.0_sp3_off8_reg_")


def test_cli_reports_validation_errors(tmp_path, capsys) -> None:
    code = main(["--offset", "0", "--out", str(tmp_path), "--quiet"])
    assert code == 1
    assert "Row offset must be greater than 0" in capsys.readouterr().out
    assert list(tmp_path.glob("*.svg")) == []


def test_cli_rejects_bad_job_values(tmp_path) -> None:
    job = tmp_path / "job.json"
    job.write_text(json.dumps({"params": {"Height": 3}}), encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["--job", str(job), "--out", str(tmp_path), "--quiet"])
