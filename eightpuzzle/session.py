"""Headless play session: reset, shuffle, solve and step through a solution."""
from __future__ import annotations
import logging
from typing import Optional, Tuple, Union

from eightpuzzle.config import DEFAULT_HEURISTIC, DEFAULT_MAX_EXPAND
from eightpuzzle.domains.puzzle8 import GOAL, State, scramble_from_goal, validate_state
from eightpuzzle.heuristics.selector import Heuristic
from eightpuzzle.search.a_star import SearchResult, solve

logger = logging.getLogger(__name__)

STATUS_READY = "Ready."
STATUS_RESET = "State reset (goal)."
STATUS_ALREADY_FINAL = "Already at the final state."
MSG_SHUFFLED = "Shuffled with {} valid moves."
MSG_SOLVED = "Solution in {} steps • Nodes expanded: {}"
MSG_STEP = "Step {} / {}"


class PuzzleSession:
    def __init__(
        self,
        heuristic: Union[Heuristic, str] = DEFAULT_HEURISTIC,
        expansion_limit: int = DEFAULT_MAX_EXPAND,
        seed: Optional[int] = None,
    ):
        self.heuristic = Heuristic.parse(heuristic)
        self.expansion_limit = expansion_limit
        self._seed = seed
        self.state: State = GOAL
        self.solution: Tuple[State, ...] = ()
        self.step_index = 0
        self.last_result: Optional[SearchResult] = None
        self.status = STATUS_READY

    def _clear_solution(self) -> None:
        self.solution = ()
        self.step_index = 0
        self.last_result = None

    def set_heuristic(self, choice: Union[Heuristic, str]) -> None:
        self.heuristic = Heuristic.parse(choice)
        self._clear_solution()

    def load(self, state) -> None:
        self.state = validate_state(state)
        self._clear_solution()
        self.status = STATUS_READY

    def reset(self) -> None:
        self.state = GOAL
        self._clear_solution()
        self.status = STATUS_RESET

    def shuffle(self, steps: int) -> State:
        seed = self._seed
        if seed is not None:
            # Successive shuffles of a seeded session differ but stay reproducible.
            self._seed = seed + 1
        self.state = scramble_from_goal(steps, seed=seed)
        self._clear_solution()
        self.status = MSG_SHUFFLED.format(steps)
        logger.debug("shuffled %d steps", steps)
        return self.state

    def solve(self) -> SearchResult:
        """Solve the current board. Raises NoSolutionError when no path is found."""
        result = solve(self.state, self.heuristic, self.expansion_limit).raise_for_failure()
        self.last_result = result
        self.solution = result.path
        self.step_index = 0
        self.status = MSG_SOLVED.format(result.moves, result.expanded)
        logger.info(self.status)
        return result

    def step(self) -> Optional[State]:
        """Advance one board along the solution, solving first if needed."""
        if not self.solution:
            self.solve()
        if self.step_index >= len(self.solution):
            self.status = STATUS_ALREADY_FINAL
            return None
        nxt = self.solution[self.step_index]
        self.state = nxt
        self.status = MSG_STEP.format(self.step_index, len(self.solution) - 1)
        self.step_index += 1
        return nxt

    @property
    def finished(self) -> bool:
        return bool(self.solution) and self.step_index >= len(self.solution)
