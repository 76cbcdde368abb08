#!/usr/bin/env python3
"""Aggregate runner CSVs: mean expansions per heuristic and scramble length,
heuristic dominance and agreement on solution length."""
import argparse
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

ORDER = ["manhattan", "misplaced", "uninformed"]


def sem(x):
    x = np.asarray(x, float)
    n = np.sum(~np.isnan(x))
    return 0.0 if n <= 1 else np.nanstd(x, ddof=1) / np.sqrt(n)


def load_results(paths: List[Path]) -> pd.DataFrame:
    frames = []
    for p in paths:
        df = pd.read_csv(p)
        if "heuristic" not in df or "steps" not in df or "expanded" not in df:
            print(f"Skipping {p}: not a runner CSV")
            continue
        df["file"] = Path(p).name
        frames.append(df)
    if not frames:
        return pd.DataFrame()
    df = pd.concat(frames, ignore_index=True).drop_duplicates()
    if "termination" not in df.columns:
        df["termination"] = "ok"
    if "solvable" not in df.columns:
        df["solvable"] = 1
    df["termination"] = df["termination"].fillna("ok")
    return df


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """Mean ± SEM of expansions and time over finished, solvable searches."""
    ok = df[(df["termination"] == "ok") & (df["solvable"] == 1)]
    if ok.empty:
        return pd.DataFrame()
    g = (ok.groupby(["heuristic", "steps"], as_index=False)
           .agg(expanded_mean=("expanded", "mean"),
                expanded_sem=("expanded", sem),
                moves_mean=("g", "mean"),
                time_mean=("time_sec", "mean"),
                n=("expanded", "count")))
    order = [h for h in ORDER if h in set(g["heuristic"])]
    order += sorted(set(g["heuristic"]) - set(order))
    g["heuristic"] = pd.Categorical(g["heuristic"], order, ordered=True)
    return g.sort_values(["steps", "heuristic"]).reset_index(drop=True)


def dominance(summary: pd.DataFrame) -> pd.DataFrame:
    """Per scramble length, whether mean expansions follow manhattan <= misplaced <= uninformed."""
    if summary.empty:
        return pd.DataFrame(columns=["steps", "ordered"])
    s = summary.assign(heuristic=summary["heuristic"].astype(str))
    wide = s.pivot_table(index="steps", columns="heuristic", values="expanded_mean")
    present = [h for h in ORDER if h in wide.columns]
    vals = wide[present].to_numpy()
    ordered = np.all(np.diff(vals, axis=1) >= 0, axis=1) if len(present) > 1 else np.ones(len(wide), bool)
    out = pd.DataFrame({"steps": wide.index.to_numpy()})
    for h in present:
        out[h] = wide[h].to_numpy()
    out["ordered"] = ordered
    return out


def disagreements(df: pd.DataFrame) -> pd.DataFrame:
    """Instances whose optimal move count differs between heuristics (should be empty)."""
    ok = df[(df["termination"] == "ok") & (df["solvable"] == 1)]
    if ok.empty:
        return pd.DataFrame(columns=["steps", "seed", "g_min", "g_max"])
    g = (ok.groupby(["steps", "seed"], as_index=False)
           .agg(g_min=("g", "min"), g_max=("g", "max")))
    return g[g["g_min"] != g["g_max"]].reset_index(drop=True)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Summarize A* heuristic experiment CSVs.")
    ap.add_argument("csv", nargs="+", type=Path)
    ap.add_argument("--out", type=Path, default=None, help="Optional CSV for the summary table")
    args = ap.parse_args(argv)

    df = load_results(args.csv)
    if df.empty:
        print("No rows to analyze.")
        return 1

    summary = summarize(df)
    print("=" * 80)
    print("Mean expansions by heuristic and scramble length")
    print("=" * 80)
    print(summary.to_string(index=False, float_format=lambda v: f"{v:.2f}"))

    dom = dominance(summary)
    print("\nDominance (manhattan <= misplaced <= uninformed):")
    print(dom.to_string(index=False, float_format=lambda v: f"{v:.1f}"))

    bad = disagreements(df)
    if bad.empty:
        print("\nAll heuristics agree on solution length.")
    else:
        print(f"\n{len(bad)} instance(s) where heuristics disagree on solution length:")
        print(bad.to_string(index=False))

    capped = int((df["termination"] == "capped").sum())
    exhausted = int((df["termination"] == "exhausted").sum())
    if capped or exhausted:
        print(f"\nUnfinished searches: capped={capped} exhausted={exhausted}")

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(args.out, index=False)
        print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
