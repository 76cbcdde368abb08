#!/usr/bin/env python3
import argparse, logging, sys

from eightpuzzle.config import (
    DEFAULT_HEURISTIC, DEFAULT_MAX_EXPAND, DEFAULT_SHUFFLE_STEPS,
    SHUFFLE_STEPS_MAX, SHUFFLE_STEPS_MIN,
)
from eightpuzzle.domains.puzzle8 import board_rows, format_state, is_solvable, parse_state
from eightpuzzle.errors import NoSolutionError, PuzzleError
from eightpuzzle.heuristics.selector import HEURISTIC_NAMES
from eightpuzzle.session import PuzzleSession


def shuffle_steps(text: str) -> int:
    try:
        v = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if not SHUFFLE_STEPS_MIN <= v <= SHUFFLE_STEPS_MAX:
        raise argparse.ArgumentTypeError(
            f"must be between {SHUFFLE_STEPS_MIN} and {SHUFFLE_STEPS_MAX}")
    return v


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Solve one 8-puzzle board with A* and print the moves.")
    src = p.add_mutually_exclusive_group()
    src.add_argument("--state", help="Start board, e.g. '1,2,3|4,_,6|7,5,8'")
    src.add_argument("--shuffle", type=shuffle_steps, default=None,
                     help=f"Random walk length from the goal ({SHUFFLE_STEPS_MIN}-{SHUFFLE_STEPS_MAX}, "
                          f"default {DEFAULT_SHUFFLE_STEPS})")
    p.add_argument("--seed", type=int, default=None, help="Seed for --shuffle")
    p.add_argument("--heuristic", choices=HEURISTIC_NAMES, default=DEFAULT_HEURISTIC)
    p.add_argument("--max-expand", type=int, default=DEFAULT_MAX_EXPAND,
                   help="Expansion cap (0 = unbounded)")
    p.add_argument("--quiet", action="store_true", help="Only print the final status line")
    p.add_argument("--verbose", action="store_true", help="Log search details")
    return p


def print_board(state, header=None):
    if header:
        print(header)
    for line in board_rows(state):
        print("  " + line)
    print()


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    session = PuzzleSession(heuristic=args.heuristic, expansion_limit=args.max_expand, seed=args.seed)
    try:
        if args.state is not None:
            session.load(parse_state(args.state))
        else:
            steps = DEFAULT_SHUFFLE_STEPS if args.shuffle is None else args.shuffle
            session.shuffle(steps)
            print(session.status)
    except PuzzleError as e:
        ap.error(str(e))

    print(f"Start: {format_state(session.state)}")
    if not is_solvable(session.state):
        print("Warning: board has odd inversion parity and cannot reach the goal.")

    try:
        result = session.solve()
    except NoSolutionError as e:
        res = e.result
        if res.capped:
            print(f"No solution within {args.max_expand} expansions (expanded {res.expanded}).")
        else:
            print(f"No solution: search exhausted after {res.expanded} expansions.")
        return 1

    if not args.quiet:
        while session.step() is not None:
            print_board(session.state, session.status)
    print(f"Solution in {result.moves} steps • Nodes expanded: {result.expanded}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
