#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path

import numpy as np
import matplotlib
# Default to a non-interactive backend; we'll only show() if --show
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from eightpuzzle.experiments.analyze import load_results, summarize

COLORS = {
    "manhattan":  "#0072B2",  # blue
    "misplaced":  "#E69F00",  # orange
    "uninformed": "#009E73",  # green
}

METRICS = {
    "expanded": ("expanded_mean", "expanded_sem", "Nodes expanded"),
    "time_sec": ("time_mean", None, "Time (s)"),
    "moves":    ("moves_mean", None, "Solution length"),
}


def plot_metric(ax, summary, metric, log_scale=False):
    col, err_col, ylabel = METRICS[metric]
    heurs = list(summary["heuristic"].cat.categories) if hasattr(summary["heuristic"], "cat") \
        else sorted(summary["heuristic"].unique())
    n = max(len(heurs), 1)
    offsets = np.linspace(-0.15, 0.15, n) if n > 1 else np.zeros(1)
    for off, heur in zip(offsets, heurs):
        part = summary[summary["heuristic"] == heur]
        if part.empty:
            continue
        xs = part["steps"].to_numpy() + off
        ys = part[col].to_numpy()
        es = part[err_col].to_numpy() if err_col else None
        ax.errorbar(xs, ys, yerr=es, marker="o", capsize=3, label=heur,
                    color=COLORS.get(str(heur)))
    ax.set_xlabel("Scramble steps")
    ax.set_ylabel(ylabel)
    ax.set_title(f"{ylabel} vs scramble steps")
    if log_scale:
        ax.set_yscale("log")
    ax.grid(True)
    ax.legend()


def save_fig(fig, outdir: Path, name: str) -> Path:
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / f"{name}.png"
    fig.savefig(path, dpi=200, bbox_inches="tight")
    print(f"Saved: {path}")
    return path


def main(argv=None):
    ap = argparse.ArgumentParser(description="Plot runner CSVs and save PNGs.")
    ap.add_argument("csv", nargs="+", type=Path, help="One or more CSV result files")
    ap.add_argument("--save", type=Path, default=Path("results/plots"), help="Directory to save plots")
    ap.add_argument("--log", action="store_true", help="Log-scale y axis for expansions")
    ap.add_argument("--show", action="store_true", help="Also open interactive windows (if GUI available)")
    args = ap.parse_args(argv)

    summary = summarize(load_results(args.csv))
    if summary.empty:
        print("No rows to plot. Are your CSVs empty?")
        sys.exit(0)

    base = "combo" if len(args.csv) > 1 else args.csv[0].stem

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    for ax, metric in zip(axes, ["expanded", "time_sec", "moves"]):
        plot_metric(ax, summary, metric, log_scale=args.log and metric == "expanded")
    plt.tight_layout()
    save_fig(fig, args.save, f"{base}_combined")

    fig, ax = plt.subplots(figsize=(8, 6))
    plot_metric(ax, summary, "expanded", log_scale=args.log)
    plt.tight_layout()
    save_fig(fig, args.save, f"{base}_expanded")

    if args.show:
        plt.show()
    plt.close("all")


if __name__ == "__main__":
    main()
