"""Error taxonomy shared by the board, heuristic and search modules."""
from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every error raised by eightpuzzle."""


class InvalidStepsError(PuzzleError, ValueError):
    """Scramble step count is negative or not an integer."""


class InvalidStateError(PuzzleError, ValueError):
    """A board is not a permutation of 0..8."""


class UnknownHeuristicError(PuzzleError, ValueError):
    """Heuristic discriminant does not name a known heuristic."""


class NoSolutionError(PuzzleError):
    """Search ended without reaching the goal.

    ``result.termination`` is ``"exhausted"`` when the frontier emptied and
    ``"capped"`` when the expansion limit was hit.
    """

    def __init__(self, result):
        self.result = result
        super().__init__(
            f"solution not found ({result.termination}, "
            f"expanded={result.expanded})"
        )
