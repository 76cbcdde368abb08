#!/usr/bin/env python3
import argparse, os, sys
from pathlib import Path
from typing import List

import matplotlib
if "MPLBACKEND" not in os.environ:
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from eightpuzzle.domains.puzzle8 import BLANK, BOARD_SIDE, State, parse_state, scramble_from_goal
from eightpuzzle.errors import PuzzleError
from eightpuzzle.heuristics.selector import HEURISTIC_NAMES
from eightpuzzle.search.a_star import solve


def draw_board(state: State, out_path: Path, title: str = ""):
    n = BOARD_SIDE
    fig = plt.figure(figsize=(3, 3))
    ax = fig.gca()
    ax.set_xlim(0, n); ax.set_ylim(0, n)
    ax.set_xticks([]); ax.set_yticks([]); ax.invert_yaxis()
    # grid
    for i in range(n + 1):
        ax.plot([0, n], [i, i], linewidth=1, color="black")
        ax.plot([i, i], [0, n], linewidth=1, color="black")
    # tiles
    for idx, t in enumerate(state):
        if t == BLANK:
            continue
        r, c = divmod(idx, n)
        ax.text(c + 0.5, r + 0.55, str(t), ha="center", va="center", fontsize=16)
    if title:
        ax.set_title(title)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=200)
    plt.close(fig)


def save_frames(path: List[State], outdir: Path) -> List[Path]:
    out = []
    total = len(path) - 1
    for i, s in enumerate(path):
        p = outdir / f"step_{i:03d}.png"
        draw_board(s, p, title=f"Step {i} / {total}")
        out.append(p)
    return out


def main(argv=None):
    p = argparse.ArgumentParser(description="Solve one instance and save board images along the path.")
    p.add_argument("--heuristic", choices=HEURISTIC_NAMES, default="manhattan")
    p.add_argument("--state", default=None, help="Start board, e.g. '1,2,3|4,_,6|7,5,8'")
    p.add_argument("--steps", type=int, default=10, help="Scramble length when --state is not given")
    p.add_argument("--seed", type=int, default=1)
    p.add_argument("--max_expand", type=int, default=0)
    p.add_argument("--outdir", type=Path, default=Path("results/figs/example_path"))
    args = p.parse_args(argv)

    try:
        start = parse_state(args.state) if args.state else scramble_from_goal(args.steps, args.seed)
    except PuzzleError as e:
        p.error(str(e))

    res = solve(start, args.heuristic, args.max_expand)
    if not res.found:
        print(f"No path ({res.termination} after {res.expanded} expansions). Try fewer steps.")
        sys.exit(1)

    frames = save_frames(list(res.path), args.outdir)
    print(f"Saved {len(frames)} frames to {args.outdir}")


if __name__ == "__main__":
    main()
