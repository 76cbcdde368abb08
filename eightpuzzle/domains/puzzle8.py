from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple
import random
import re

from eightpuzzle.errors import InvalidStateError, InvalidStepsError

State = Tuple[int, ...]  # 9-length tuple, 0 is blank

BOARD_SIDE = 3
BOARD_LEN = BOARD_SIDE * BOARD_SIDE
BLANK = 0
BLANK_GLYPH = "_"
GOAL: State = (1, 2, 3, 4, 5, 6, 7, 8, 0)


def _blank_moves(side: int) -> Dict[int, Tuple[int, ...]]:
    """Target index of the blank for every position, ordered up, down, left, right."""
    nei: Dict[int, Tuple[int, ...]] = {}
    for i in range(side * side):
        r, c = divmod(i, side)
        moves = []
        if r > 0:        moves.append(i - side)
        if r < side - 1: moves.append(i + side)
        if c > 0:        moves.append(i - 1)
        if c < side - 1: moves.append(i + 1)
        nei[i] = tuple(moves)
    return nei


# Precomputed blank moves on the 3x3 grid
_NEI = _blank_moves(BOARD_SIDE)


def neighbors(s: State) -> List[State]:
    """Boards reachable with one blank slide, in up/down/left/right order."""
    z = s.index(BLANK)
    out: List[State] = []
    for j in _NEI[z]:
        lst = list(s)
        lst[z], lst[j] = lst[j], lst[z]
        out.append(tuple(lst))
    return out


def canonical_key(s: State) -> bytes:
    """Hashable key, one byte per cell; equal boards give equal keys."""
    return bytes(s)


def validate_state(s: Iterable[int]) -> State:
    """Return ``s`` as a tuple, or raise InvalidStateError if it is not a permutation of 0..8."""
    try:
        t = tuple(int(x) for x in s)
    except (TypeError, ValueError) as e:
        raise InvalidStateError(f"board must be a sequence of integers: {s!r}") from e
    if len(t) != BOARD_LEN:
        raise InvalidStateError(f"board must have {BOARD_LEN} cells, got {len(t)}")
    if sorted(t) != list(range(BOARD_LEN)):
        raise InvalidStateError(f"board must be a permutation of 0..{BOARD_LEN - 1}: {t}")
    return t


def format_state(s: State) -> str:
    """Render as ``1,2,3|4,5,6|7,8,_`` (rows separated by pipes)."""
    cells = [BLANK_GLYPH if v == BLANK else str(v) for v in s]
    rows = [",".join(cells[r * BOARD_SIDE:(r + 1) * BOARD_SIDE]) for r in range(BOARD_SIDE)]
    return "|".join(rows)


def parse_state(text: str) -> State:
    """Inverse of format_state. Accepts ``_`` or ``0`` for the blank."""
    tokens = [t for t in re.split(r"[\s,|;]+", text.strip()) if t]
    values = []
    for tok in tokens:
        if tok == BLANK_GLYPH:
            values.append(BLANK)
        elif tok.isdigit():
            values.append(int(tok))
        else:
            raise InvalidStateError(f"unexpected token {tok!r} in board {text!r}")
    return validate_state(values)


def board_rows(s: State) -> List[str]:
    """Three printable lines, blank shown as the placeholder glyph."""
    lines = []
    for r in range(BOARD_SIDE):
        row = s[r * BOARD_SIDE:(r + 1) * BOARD_SIDE]
        lines.append(" ".join(BLANK_GLYPH if v == BLANK else str(v) for v in row))
    return lines


def is_solvable(s: State) -> bool:
    """8-puzzle solvability: parity of inversions must be even."""
    arr = [x for x in s if x != BLANK]
    inv = 0
    for i in range(len(arr)):
        for j in range(i + 1, len(arr)):
            if arr[i] > arr[j]:
                inv += 1
    return (inv % 2) == 0


def make_unsolvable_variant(s: State) -> State:
    """Swap the first two non-blank tiles, flipping the inversion parity."""
    lst = list(s)
    i = next(k for k, v in enumerate(lst) if v != BLANK)
    j = next(k for k, v in enumerate(lst[i + 1:], start=i + 1) if v != BLANK)
    lst[i], lst[j] = lst[j], lst[i]
    return tuple(lst)


def scramble_from_goal(step_count: int, seed: Optional[int] = None) -> State:
    """Random walk of ``step_count`` legal blank moves starting at GOAL.

    Every neighbor is equally likely at each step, backtracking included, so
    the walk may come back to GOAL. The result is always solvable.
    """
    if isinstance(step_count, bool) or not isinstance(step_count, int):
        raise InvalidStepsError(f"steps must be an integer, got {step_count!r}")
    if step_count < 0:
        raise InvalidStepsError(f"steps must be >= 0, got {step_count}")
    rng = random.Random(seed)
    s = GOAL
    for _ in range(step_count):
        s = rng.choice(neighbors(s))
    return s
