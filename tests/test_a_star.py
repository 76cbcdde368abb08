"""Tests for the A* solver."""

import pytest

from eightpuzzle.domains.puzzle8 import GOAL, make_unsolvable_variant, neighbors, scramble_from_goal
from eightpuzzle.errors import InvalidStateError, NoSolutionError, UnknownHeuristicError
from eightpuzzle.heuristics.selector import Heuristic
from eightpuzzle.search.a_star import SearchResult, priority_fn, reconstruct_path, PQItem, solve

TWO_MOVES = (1, 2, 3, 4, 5, 6, 0, 7, 8)
TEXTBOOK = (8, 1, 3, 4, 0, 2, 7, 6, 5)
SWAPPED = (2, 1, 3, 4, 5, 6, 7, 8, 0)  # odd parity, unreachable from GOAL
HALF_STATE_SPACE = 181440  # 9! / 2


def _assert_valid_path(path, start):
    assert path[0] == start
    assert path[-1] == GOAL
    for a, b in zip(path, path[1:]):
        assert b in neighbors(a)


@pytest.fixture(scope="module")
def exhausted_result():
    return solve(SWAPPED, Heuristic.MANHATTAN, 0)


class TestTrivialCases:
    def test_goal_start(self):
        for h in Heuristic:
            res = solve(GOAL, h, 5)
            assert res.found
            assert res.path == (GOAL,)
            assert res.expanded == 0
            assert res.moves == 0
            assert res.termination == "ok"

    def test_two_move_instance(self):
        res = solve(TWO_MOVES, "manhattan")
        assert res.found
        assert len(res.path) == 3
        assert res.moves == 2
        assert res.path == (TWO_MOVES, (1, 2, 3, 4, 5, 6, 7, 0, 8), GOAL)
        assert res.expanded == 2

    def test_accepts_list_input(self):
        res = solve(list(TWO_MOVES), Heuristic.MISPLACED)
        assert res.path[0] == TWO_MOVES


class TestOptimality:
    @pytest.mark.parametrize("seed", range(8))
    def test_scrambled_states_are_solved(self, seed):
        start = scramble_from_goal(20, seed)
        res = solve(start, Heuristic.MANHATTAN)
        assert res.found
        _assert_valid_path(res.path, start)
        assert res.moves <= 20

    def test_heuristics_agree_on_length(self):
        results = {h: solve(TEXTBOOK, h) for h in Heuristic}
        lengths = {len(r.path) for r in results.values()}
        assert len(lengths) == 1
        for r in results.values():
            _assert_valid_path(r.path, TEXTBOOK)

    def test_expansions_follow_heuristic_strength(self):
        m = solve(TEXTBOOK, Heuristic.MANHATTAN)
        p = solve(TEXTBOOK, Heuristic.MISPLACED)
        u = solve(TEXTBOOK, Heuristic.UNINFORMED)
        assert m.expanded <= p.expanded <= u.expanded

    def test_moves_match_scramble_parity(self):
        # Every blank move changes the blank's cell colour on a checkerboard.
        for seed in range(5):
            start = scramble_from_goal(15, seed)
            res = solve(start)
            assert res.moves % 2 == 15 % 2


class TestDeterminism:
    def test_repeated_solves_match(self):
        a = solve(TEXTBOOK, "misplaced")
        b = solve(TEXTBOOK, "misplaced")
        assert a.path == b.path
        assert a.expanded == b.expanded
        assert a.generated == b.generated

    def test_tie_break_rules_still_optimal(self):
        base = solve(TEXTBOOK).moves
        for rule in ("h", "g", "fifo", "lifo"):
            res = solve(TEXTBOOK, tie_break=rule)
            assert res.moves == base
            assert res.tie_break == rule


class TestFailures:
    def test_unsolvable_exhausts_frontier(self, exhausted_result):
        res = exhausted_result
        assert not res.found
        assert res.termination == "exhausted"
        assert res.path == ()
        assert res.moves is None
        assert res.peak_closed == HALF_STATE_SPACE
        # Boards popped again after closing are counted as well.
        assert res.expanded >= HALF_STATE_SPACE

    def test_expansion_cap(self):
        res = solve(SWAPPED, Heuristic.MANHATTAN, expansion_limit=50)
        assert not res.found
        assert res.capped
        assert res.termination == "capped"
        assert res.expanded == 51

    def test_cap_large_enough_does_not_interfere(self):
        res = solve(TWO_MOVES, Heuristic.MANHATTAN, expansion_limit=2)
        assert res.found

    def test_raise_for_failure(self):
        res = solve(make_unsolvable_variant(TWO_MOVES), expansion_limit=10)
        with pytest.raises(NoSolutionError) as exc:
            res.raise_for_failure()
        assert exc.value.result is res
        assert solve(TWO_MOVES).raise_for_failure().found

    def test_unknown_heuristic(self):
        with pytest.raises(UnknownHeuristicError):
            solve(TWO_MOVES, "hamming-ish")

    def test_none_limit_is_unbounded(self):
        res = solve(TWO_MOVES, Heuristic.MANHATTAN, expansion_limit=None)
        assert res.found
        assert res.expanded == 2

    def test_invalid_start(self):
        with pytest.raises(InvalidStateError):
            solve((1, 2, 3))

    def test_unknown_tie_break(self):
        with pytest.raises(ValueError):
            solve(TWO_MOVES, tie_break="random")


class TestInternals:
    def test_priority_prefers_lower_f_then_h(self):
        key = priority_fn("h")
        assert key(5, 2, 3, 7) == (5, 3, 7)
        assert key(5, 4, 1, 9) < key(5, 2, 3, 1) < key(6, 0, 0, 0)

    def test_reconstruct_path(self):
        a = PQItem(f=0, h=0, g=0, state=TWO_MOVES)
        b = PQItem(f=0, h=0, g=1, state=GOAL, parent=a)
        assert reconstruct_path(b) == [TWO_MOVES, GOAL]
        assert reconstruct_path(None) == []

    def test_result_is_immutable(self):
        res = solve(GOAL)
        assert isinstance(res, SearchResult)
        with pytest.raises(AttributeError):
            res.found = False


def _reference_search(start, hfun, by_h=True):
    """Plain list-scan A*: pop min (f, h, order) or (f, order), count every pop."""
    nodes = [(start, 0, None)]  # (state, g, parent index)
    frontier = [(hfun(start), hfun(start), 0, 0)]  # (f, h, order, node index)
    best_g = {start: 0}
    closed = set()
    order = 1
    expanded = 0
    key = (lambda e: (e[0], e[1], e[2])) if by_h else (lambda e: (e[0], e[2]))
    while frontier:
        entry = min(frontier, key=key)
        frontier.remove(entry)
        state, g, _ = nodes[entry[3]]
        if state == GOAL:
            path, i = [], entry[3]
            while i is not None:
                path.append(nodes[i][0])
                i = nodes[i][2]
            return tuple(reversed(path)), expanded
        closed.add(state)
        expanded += 1
        for nb in neighbors(state):
            if nb in closed or best_g.get(nb, g + 2) <= g + 1:
                continue
            best_g[nb] = g + 1
            nodes.append((nb, g + 1, entry[3]))
            h = hfun(nb)
            frontier.append((g + 1 + h, h, order, len(nodes) - 1))
            order += 1
    return (), expanded


class TestTieBreakContract:
    INSTANCES = [TEXTBOOK] + [scramble_from_goal(20, seed) for seed in range(8)]

    @pytest.mark.parametrize("heuristic", [Heuristic.MANHATTAN, Heuristic.MISPLACED])
    def test_default_order_is_f_then_h_then_insertion(self, heuristic):
        for start in self.INSTANCES:
            path, expanded = _reference_search(start, heuristic.cost)
            res = solve(start, heuristic)
            assert res.path == path
            assert res.expanded == expanded

    def test_fifo_rule_matches_insertion_order(self):
        for start in self.INSTANCES:
            path, expanded = _reference_search(start, Heuristic.MISPLACED.cost, by_h=False)
            res = solve(start, Heuristic.MISPLACED, tie_break="fifo")
            assert (res.path, res.expanded) == (path, expanded)

    def test_rules_are_observable(self):
        by_h = [solve(s, Heuristic.MISPLACED) for s in self.INSTANCES]
        fifo = [solve(s, Heuristic.MISPLACED, tie_break="fifo") for s in self.INSTANCES]
        assert any((a.path, a.expanded) != (b.path, b.expanded) for a, b in zip(by_h, fifo))
