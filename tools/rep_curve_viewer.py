#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pandas as pd


def plot_force_curve(df: pd.DataFrame, rep: int, title: str | None = None):
    """Carico sui due cavi in funzione della posizione, una linea per fase."""
    g = df[df["rep"] == rep]
    if g.empty:
        return None

    fig, ax = plt.subplots()
    for phase, style in (("concentric", "-"), ("eccentric", "--")):
        p = g[g["phase"] == phase]
        if p.empty:
            continue
        ax.plot(p["position"], p["load_a"], style, label=f"{phase} A")
        ax.plot(p["position"], p["load_b"], style, label=f"{phase} B")

    ax.set_xlabel("position (mm)")
    ax.set_ylabel("load (kg)")
    if title:
        ax.set_title(title)
    ax.legend()
    ax.grid(True, linestyle="--", alpha=0.3)
    plt.tight_layout()
    return fig


def plot_velocity(df: pd.DataFrame, rep: int, title: str | None = None):
    g = df[df["rep"] == rep]
    if g.empty:
        return None

    fig, ax = plt.subplots()
    for phase in ("concentric", "eccentric"):
        p = g[g["phase"] == phase]
        if not p.empty:
            ax.plot(p["t_ms"], p["velocity"], label=phase)
    ax.set_xlabel("t (ms)")
    ax.set_ylabel("velocity (mm/s)")
    if title:
        ax.set_title(title)
    ax.legend()
    ax.grid(True, linestyle="--", alpha=0.3)
    plt.tight_layout()
    return fig


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Plot the curves of one rep from a 'repseries export-reps' CSV."
    )
    parser.add_argument("export_csv", help="CSV file produced by 'repseries export-reps'")
    parser.add_argument("--rep", type=int, default=1, help="rep number to plot")
    parser.add_argument(
        "--no-velocity", action="store_true", help="disable velocity plot"
    )

    args = parser.parse_args(argv)
    csv_path = Path(args.export_csv)
    df = pd.read_csv(csv_path)

    title = f"{csv_path.name} – rep {args.rep}"
    figs = []

    fig_force = plot_force_curve(df, args.rep, title=title + " – force")
    if fig_force is not None:
        figs.append(("force", fig_force))

    if not args.no_velocity:
        fig_vel = plot_velocity(df, args.rep, title=title + " – velocity")
        if fig_vel is not None:
            figs.append(("velocity", fig_vel))

    if not figs:
        print(f"No samples for rep {args.rep} in {csv_path}")

    # Salva sempre i plot in PNG accanto al CSV, niente plt.show()
    for kind, fig in figs:
        out_path = csv_path.with_suffix(f".rep{args.rep}.{kind}.png")
        fig.savefig(out_path)
        plt.close(fig)
        print(f"Saved {out_path}")


if __name__ == "__main__":
    main()
