from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, Union

from eightpuzzle.domains.puzzle8 import State
from eightpuzzle.errors import UnknownHeuristicError
from eightpuzzle.heuristics.manhattan import manhattan
from eightpuzzle.heuristics.misplaced import misplaced, uninformed


class Heuristic(Enum):
    """Closed set of cost estimates the solver can be configured with."""

    MANHATTAN = "manhattan"
    MISPLACED = "misplaced"
    UNINFORMED = "uninformed"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def cost(self) -> Callable[[State], int]:
        return _COSTS[self]

    @classmethod
    def parse(cls, choice: Union["Heuristic", str]) -> "Heuristic":
        """Resolve an enum member, a name or a display label. Never falls back to a default."""
        if isinstance(choice, cls):
            return choice
        if isinstance(choice, str):
            key = choice.strip().lower()
            if key in _ALIASES:
                return _ALIASES[key]
        raise UnknownHeuristicError(f"unknown heuristic: {choice!r}")


_LABELS: Dict[Heuristic, str] = {
    Heuristic.MANHATTAN: "Manhattan",
    Heuristic.MISPLACED: "Misplaced",
    Heuristic.UNINFORMED: "Uninformed",
}

_COSTS: Dict[Heuristic, Callable[[State], int]] = {
    Heuristic.MANHATTAN: manhattan,
    Heuristic.MISPLACED: misplaced,
    Heuristic.UNINFORMED: uninformed,
}

_ALIASES: Dict[str, Heuristic] = {h.value: h for h in Heuristic}
_ALIASES.update({h.label.lower(): h for h in Heuristic})
_ALIASES["zero"] = Heuristic.UNINFORMED

HEURISTIC_NAMES = [h.value for h in Heuristic]


def heuristic_cost(s: State, kind: Union[Heuristic, str]) -> int:
    return Heuristic.parse(kind).cost(s)
