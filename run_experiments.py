#!/usr/bin/env python3
import subprocess, sys
from pathlib import Path

def run(desc, cmd):
    print(f"\n=== {desc} ===\n{cmd}")
    r = subprocess.run(cmd, shell=True)
    if r.returncode != 0:
        sys.exit(r.returncode)

def main():
    Path("results").mkdir(exist_ok=True)
    run("All heuristics", "python -m eightpuzzle.experiments.runner --steps 6 10 14 18 --per_steps 10 --heuristics manhattan misplaced uninformed --out results/heuristics.csv")
    run("Unsolvable variants", "python -m eightpuzzle.experiments.runner --steps 10 --per_steps 2 --heuristics manhattan --include_unsolvable --out results/unsolvable.csv")
    run("Summary", "python -m eightpuzzle.experiments.analyze results/heuristics.csv --out results/summary.csv")
    run("Plots", "python -m eightpuzzle.experiments.plot results/heuristics.csv --log")

if __name__ == "__main__":
    main()
