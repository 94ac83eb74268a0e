#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import pandas as pd


SUMMARY_HEADER = [
    "file",
    "session_id",
    "rep",
    "warmup",
    "n_samples",
    "t_span_ms",
    "rom",
    "peak_load_a",
    "peak_load_b",
    "asymmetry_pct",
    "peak_velocity",
    "mean_velocity_concentric",
]


def summarize_export(path: Path) -> pd.DataFrame:
    """Una riga per rep a partire da un CSV prodotto da 'repseries export-reps'."""
    df = pd.read_csv(path)
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_HEADER)

    rows = []
    for (session_id, rep), g in df.groupby(["session_id", "rep"], sort=True):
        conc = g[g["phase"] == "concentric"]
        peak_a = float(g["load_a"].max())
        peak_b = float(g["load_b"].max())
        # asimmetria tra i due cavi, relativa al più carico
        top = max(peak_a, peak_b)
        asym = abs(peak_a - peak_b) / top * 100.0 if top > 0 else 0.0
        rows.append(
            {
                "file": path.name,
                "session_id": session_id,
                "rep": int(rep),
                "warmup": int(g["warmup"].iloc[0]),
                "n_samples": len(g),
                "t_span_ms": float(g["t_ms"].max()),
                "rom": float(g["position"].max() - g["position"].min()),
                "peak_load_a": peak_a,
                "peak_load_b": peak_b,
                "asymmetry_pct": asym,
                "peak_velocity": float(g["velocity"].abs().max()),
                "mean_velocity_concentric": float(conc["velocity"].mean())
                if not conc.empty
                else 0.0,
            }
        )
    return pd.DataFrame(rows, columns=SUMMARY_HEADER)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Per-rep summary of one or more 'repseries export-reps' CSV files."
    )
    parser.add_argument("inputs", nargs="+", help="export CSV files")
    parser.add_argument("-o", "--output", required=True, help="output summary CSV")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)

    frames = [summarize_export(Path(p)) for p in args.inputs]
    summary = pd.concat(frames, ignore_index=True) if frames else pd.DataFrame(
        columns=SUMMARY_HEADER
    )

    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    summary.to_csv(out_path, index=False, float_format="%.6g")
    print(f"Wrote {len(summary)} reps to {out_path}")


if __name__ == "__main__":
    main()
