from __future__ import annotations
import argparse, csv
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from eightpuzzle.domains.puzzle8 import (
    GOAL,
    State,
    make_unsolvable_variant,
    scramble_from_goal,
)
from eightpuzzle.heuristics.selector import HEURISTIC_NAMES
from eightpuzzle.search.a_star import TIE_BREAKS, SearchResult, solve

HEADER = [
    "heuristic", "steps", "seed",
    "expanded", "generated", "g", "time_sec",
    "peak_open", "peak_closed", "tie_break",
    "termination", "solvable",
]


@dataclass
class Instance:
    seed: int
    steps: int
    state: State


def generate_instances(step_counts: List[int], per_steps: int, start_seed: int = 0,
                       skip_goal: bool = True) -> List[Instance]:
    """Seeded random walks; walks that land back on GOAL are skipped unless ``skip_goal`` is off."""
    out: List[Instance] = []
    seed = start_seed
    for d in step_counts:
        made = 0
        attempts = 0
        while made < per_steps:
            s = scramble_from_goal(d, seed)
            attempts += 1
            if not (skip_goal and d > 0 and s == GOAL):
                out.append(Instance(seed=seed, steps=d, state=s))
                made += 1
            seed += 1
            if attempts > per_steps * 2000:
                raise RuntimeError(f"Instance generation took too long at steps={d}.")
    return out


def result_row(res: SearchResult, inst: Instance, solvable_flag: int) -> list:
    return [
        res.heuristic.lower(), inst.steps, inst.seed,
        res.expanded, res.generated, "" if res.moves is None else res.moves,
        f"{res.time:.6f}",
        res.peak_open, res.peak_closed, res.tie_break,
        res.termination, solvable_flag,
    ]


def run(insts: List[Instance], heuristics: List[str], out: Path, tie_break: str = "h",
        max_expand: int = 0, include_unsolvable: bool = False) -> int:
    """Solve every instance with every heuristic and write one CSV row per search."""
    out.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with out.open("w", newline="") as f:
        w = csv.writer(f); w.writerow(HEADER)
        for inst in insts:
            for heur in heuristics:
                r = solve(inst.state, heur, max_expand, tie_break=tie_break)
                w.writerow(result_row(r, inst, 1)); rows += 1
                # Optional unsolvable variant (flipped parity)
                if include_unsolvable:
                    u = make_unsolvable_variant(inst.state)
                    r = solve(u, heur, max_expand, tie_break=tie_break)
                    w.writerow(result_row(r, inst, 0)); rows += 1
    return rows


def main(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="A* 8-puzzle heuristic experiment runner")
    ap.add_argument("--heuristics", choices=HEURISTIC_NAMES, nargs="+",
                    default=["manhattan", "misplaced"])
    ap.add_argument("--steps", type=int, nargs="+", default=[6, 10, 14, 18, 22],
                    help="Scramble random-walk lengths")
    ap.add_argument("--per_steps", type=int, default=20)
    ap.add_argument("--start_seed", type=int, default=0)
    ap.add_argument("--tie_break", choices=list(TIE_BREAKS), default="h")
    ap.add_argument("--max_expand", type=int, default=0, help="Expansion cap per search (0 = none)")
    ap.add_argument("--out", type=Path, default=Path("results/last_run.csv"))
    ap.add_argument("--include_unsolvable", action="store_true",
                    help="Also run the parity-flipped variant of every instance")
    args = ap.parse_args(argv)

    if any(d < 0 for d in args.steps):
        ap.error("--steps values must be >= 0")

    insts = generate_instances(args.steps, args.per_steps, args.start_seed)
    n = run(insts, args.heuristics, args.out, tie_break=args.tie_break,
            max_expand=args.max_expand, include_unsolvable=args.include_unsolvable)
    print(f"Wrote {args.out} ({len(insts)} instances, {n} rows)")


if __name__ == "__main__":
    main()
