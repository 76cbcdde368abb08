from typing import Dict, Tuple

from eightpuzzle.domains.puzzle8 import BLANK, BOARD_SIDE, GOAL, State

_goal_pos: Dict[int, Tuple[int, int]] = {
    GOAL[i]: divmod(i, BOARD_SIDE) for i in range(len(GOAL))
}


def manhattan(s: State) -> int:
    """Sum of Manhattan distances to goal positions (blank ignored)."""
    dist = 0
    for idx, tile in enumerate(s):
        if tile == BLANK:
            continue
        r, c = divmod(idx, BOARD_SIDE)
        gr, gc = _goal_pos[tile]
        dist += abs(r - gr) + abs(c - gc)
    return dist
