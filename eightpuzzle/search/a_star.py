from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple, Union
import heapq
import itertools
import logging
from time import perf_counter

from eightpuzzle.domains.puzzle8 import GOAL, State, canonical_key, neighbors, validate_state
from eightpuzzle.errors import NoSolutionError
from eightpuzzle.heuristics.selector import Heuristic

logger = logging.getLogger(__name__)

TIE_BREAKS = ("h", "g", "fifo", "lifo")


@dataclass
class PQItem:
    f: int
    h: int
    g: int
    state: State
    parent: Optional["PQItem"] = None


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one A* run.

    ``path`` runs from the start board to GOAL inclusive and is empty unless
    ``found``. ``termination`` is ``"ok"``, ``"exhausted"`` (frontier emptied)
    or ``"capped"`` (expansion limit exceeded).
    """
    path: Tuple[State, ...]
    expanded: int
    found: bool
    termination: str
    generated: int = 0
    peak_open: int = 0
    peak_closed: int = 0
    time: float = 0.0
    heuristic: str = ""
    tie_break: str = "h"

    @property
    def moves(self) -> Optional[int]:
        return len(self.path) - 1 if self.found else None

    @property
    def capped(self) -> bool:
        return self.termination == "capped"

    def raise_for_failure(self) -> "SearchResult":
        if not self.found:
            raise NoSolutionError(self)
        return self


def reconstruct_path(node: Optional[PQItem]) -> List[State]:
    path: List[State] = []
    while node is not None:
        path.append(node.state)
        node = node.parent
    path.reverse()
    return path


def priority_fn(tie_break: str) -> Callable[[int, int, int, int], Tuple[int, int, int]]:
    """Heap key for (f, g, h, insertion counter) under the given tie-break rule."""
    if tie_break == "h":    return lambda f, g, h, ctr: (f, h, ctr)
    if tie_break == "g":    return lambda f, g, h, ctr: (f, -g, ctr)
    if tie_break == "fifo": return lambda f, g, h, ctr: (f, 0, ctr)
    if tie_break == "lifo": return lambda f, g, h, ctr: (f, 0, -ctr)
    raise ValueError(f"unknown tie_break {tie_break!r}, expected one of {TIE_BREAKS}")


def solve(
    start: Iterable[int],
    heuristic: Union[Heuristic, str] = Heuristic.MANHATTAN,
    expansion_limit: Optional[int] = 0,
    tie_break: str = "h",
) -> SearchResult:
    """
    A* from ``start`` to GOAL with unit move costs.

    Frontier entries are ordered by f = g + h, then by smaller h, then by
    insertion order (neighbors are inserted up, down, left, right).
    ``expansion_limit`` of None or <= 0 means unbounded; otherwise the search
    stops as soon as the expansion count exceeds it. A board popped again
    after it was closed is expanded and counted again.
    """
    start = validate_state(start)
    limit = expansion_limit or 0
    kind = Heuristic.parse(heuristic)
    hfun = kind.cost
    priority = priority_fn(tie_break)
    t0 = perf_counter()

    open_heap: List[Tuple[Tuple[int, int, int], int, PQItem]] = []
    counter = itertools.count()

    h0 = hfun(start)
    start_item = PQItem(f=h0, h=h0, g=0, state=start, parent=None)
    ctr = next(counter)
    heapq.heappush(open_heap, (priority(h0, 0, h0, ctr), ctr, start_item))

    best_g: Dict[bytes, int] = {canonical_key(start): 0}
    closed: Set[bytes] = set()

    expanded = 0
    generated = 0
    peak_open = 1
    peak_closed = 0

    def finish(path: List[State], found: bool, termination: str) -> SearchResult:
        res = SearchResult(
            path=tuple(path),
            expanded=expanded,
            found=found,
            termination=termination,
            generated=generated,
            peak_open=peak_open,
            peak_closed=peak_closed,
            time=perf_counter() - t0,
            heuristic=kind.label,
            tie_break=tie_break,
        )
        logger.debug("A* %s: termination=%s expanded=%d generated=%d moves=%s",
                     kind.label, termination, expanded, generated, res.moves)
        return res

    while open_heap:
        peak_open = max(peak_open, len(open_heap))
        _, _, node = heapq.heappop(open_heap)
        key = canonical_key(node.state)

        if node.state == GOAL:
            return finish(reconstruct_path(node), True, "ok")

        closed.add(key)
        expanded += 1
        peak_closed = max(peak_closed, len(closed))
        if limit > 0 and expanded > limit:
            logger.info("A* stopped after %d expansions (limit %d)", expanded, limit)
            return finish([], False, "capped")

        for s2 in neighbors(node.state):
            k2 = canonical_key(s2)
            if k2 in closed:
                continue
            g2 = node.g + 1
            prev = best_g.get(k2)
            if prev is not None and g2 >= prev:
                continue
            best_g[k2] = g2
            h2 = hfun(s2)
            f2 = g2 + h2
            generated += 1
            child = PQItem(f=f2, h=h2, g=g2, state=s2, parent=node)
            ctr = next(counter)
            heapq.heappush(open_heap, (priority(f2, g2, h2, ctr), ctr, child))

    # Open exhausted without finding goal
    return finish([], False, "exhausted")
