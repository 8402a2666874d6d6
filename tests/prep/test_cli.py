from __future__ import annotations

from pathlib import Path

import polars as pl
import pytest

from ggdeck.io.read import load_summary_records
from ggdeck.prep import cli


def run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as ei:
        cli.main(argv)
    return int(ei.value.code)


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("GGDECK_REGION", "GGDECK_PARAMETER", "GGDECK_TARGET_STIMULUS", "GGDECK_OUT_DIR"):
        monkeypatch.delenv(key, raising=False)


def test_prepare_demo_then_show_and_plot(tmp_path: Path, capsys) -> None:
    out = tmp_path / "summary.parquet"
    assert run(["prepare", "--demo", "--output", str(out)]) == 0
    text = capsys.readouterr().out
    assert "[INFO] Wrote summary to" in text
    assert "[INFO] Wrote manifest to" in text
    assert len(load_summary_records(out)) == 12

    assert run(["show", "--path", str(out), "--n", "2"]) == 0
    assert "subject_id" in capsys.readouterr().out

    html = tmp_path / "chart.html"
    assert run(["plot", "--path", str(out), "--out-html", str(html)]) == 0
    assert html.exists() and html.stat().st_size > 0


def test_prepare_input_with_flag_overrides(tmp_path: Path) -> None:
    src = tmp_path / "obs.csv"
    pl.DataFrame(
        {
            "region": ["V1", "V1", "SC"],
            "parameter": ["flynet"] * 3,
            "stimulus_type": ["grating", "ring_expand", "grating"],
            "subject_id": ["S1", "S1", "S2"],
            "correlation_by_condition": [0.4, 0.5, 0.1],
            "correlation_overall": [0.1, 0.1, 0.1],
        }
    ).write_csv(src)
    out = tmp_path / "v1.csv"
    code = run(
        [
            "prepare",
            "--input",
            str(src),
            "--output",
            str(out),
            "--region",
            "V1",
            "--target-stimulus",
            "grating",
            "--no-manifest",
        ]
    )
    assert code == 0
    assert not Path(str(out) + ".manifest.json").exists()
    flags = {r.is_target_condition for r in load_summary_records(out)}
    assert flags == {True, False}


def test_prepare_requires_input_or_demo(capsys) -> None:
    assert run(["prepare"]) == 2
    assert "--demo" in capsys.readouterr().err


def test_prepare_reports_bad_input(tmp_path: Path, capsys) -> None:
    src = tmp_path / "bad.csv"
    src.write_text("region,parameter\nSC,flynet\n")
    assert run(["prepare", "--input", str(src), "--output", str(tmp_path / "o.parquet")]) == 1
    assert "missing required columns" in capsys.readouterr().err


def test_prepare_warns_on_empty_filter(tmp_path: Path, capsys) -> None:
    out = tmp_path / "o.parquet"
    assert run(["prepare", "--demo", "--region", "NONEXISTENT", "--output", str(out)]) == 0
    assert "[WARN]" in capsys.readouterr().err


def test_unknown_command_and_help(capsys) -> None:
    assert run(["frobnicate"]) == 2
    cli.main([])
    assert "ggdeck" in capsys.readouterr().out


def test_show_and_plot_report_undecodable_artifacts(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "corrupt.parquet"
    bad.write_bytes(b"not a parquet file")
    html = tmp_path / "chart.html"

    assert run(["show", "--path", str(bad)]) == 1
    assert "[ERROR]" in capsys.readouterr().err
    assert run(["plot", "--path", str(bad), "--out-html", str(html)]) == 1
    assert "[ERROR]" in capsys.readouterr().err
    assert not html.exists()
