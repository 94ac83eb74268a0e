# tests/test_tools_rep_summary.py
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pandas as pd

from repseries.cli import main as repseries_main
from repseries.storage import RepMetricStore

from conftest import make_rep


def test_export_and_rep_summary(tmp_path: Path) -> None:
    """
    Smoke-test per la pipeline:
    store -> repseries export-reps -> tools/rep_summary.py.
    """
    repo_root = Path(__file__).resolve().parents[1]

    db = tmp_path / "reps.db"
    export_csv = tmp_path / "s1.csv"
    summary_csv = tmp_path / "summary.csv"

    with RepMetricStore(db) as store:
        store.save_rep_metrics("s1", [make_rep(1, warmup=True), make_rep(2)])

    assert repseries_main(["export-reps", str(db), "s1", str(export_csv)]) == 0

    script = repo_root / "tools" / "rep_summary.py"
    result = subprocess.run(
        [sys.executable, str(script), str(export_csv), "-o", str(summary_csv)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    assert summary_csv.is_file(), "summary.csv non generato"

    df = pd.read_csv(summary_csv)
    assert df["rep"].tolist() == [1, 2]
    assert df["warmup"].tolist() == [1, 0]
    assert df["n_samples"].tolist() == [10, 10]
    assert set(df["file"]) == {"s1.csv"}

    # make_rep: posizioni 0..40 mm, carico A di picco 22.0, B 21.5
    assert df["rom"].tolist() == [40.0, 40.0]
    assert df["peak_load_a"].tolist() == [22.0, 22.0]
    assert abs(df["asymmetry_pct"].iloc[0] - (0.5 / 22.0 * 100.0)) < 1e-4


def test_rep_curve_viewer_saves_png(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[1]

    db = tmp_path / "reps.db"
    export_csv = tmp_path / "s1.csv"

    with RepMetricStore(db) as store:
        store.save_rep_metrics("s1", [make_rep(1)])
    assert repseries_main(["export-reps", str(db), "s1", str(export_csv)]) == 0

    script = repo_root / "tools" / "rep_curve_viewer.py"
    result = subprocess.run(
        [sys.executable, str(script), str(export_csv), "--rep", "1"],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0, result.stderr
    assert (tmp_path / "s1.rep1.force.png").is_file()
    assert (tmp_path / "s1.rep1.velocity.png").is_file()
