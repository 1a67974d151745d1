"""Unit tests for the constrained problem: propagation, search and restore."""

import pytest
from sudokumate.core.board import SudokuBoard
from sudokumate.solver import (
    Candidate,
    SingleCandidateConstraint,
    ConstrainedProblem,
    SudokuProblem,
    NO_SOLUTION,
    SINGLE_SOLUTION,
    MANY_SOLUTIONS,
    NoUniqueSolutionError,
)


def rule(label, *candidates):
    """Exactly one of candidates."""
    constraint = SingleCandidateConstraint(label)
    for candidate in candidates:
        constraint.add(candidate)
    return constraint


def exact_cover(columns):
    """
    Build a problem where each column is covered by exactly one row.

    Args:
        columns: Mapping of column name -> names of the rows covering it.

    Returns:
        Tuple of (problem, {row name: candidate}).
    """
    rows = {}
    constraints = []
    for column, row_names in columns.items():
        constraint = SingleCandidateConstraint(column)
        for name in row_names:
            constraint.add(rows.setdefault(name, Candidate(name)))
        constraints.append(constraint)
    return ConstrainedProblem(list(rows.values()), constraints), rows


# Every column has two or more rows, so propagation stalls immediately.
# Only {A, B, E} covers all five columns exactly once.
UNIQUE_BY_SEARCH = {
    "1": ["A", "C"],
    "2": ["A", "D"],
    "3": ["B", "C"],
    "4": ["B", "D"],
    "5": ["C", "D", "E"],
}


class TestSearch:
    """Tests for backtracking search."""

    def test_unique_solution_needs_search(self):
        """Search finds the single cover after rejecting the other branch."""
        problem, rows = exact_cover(UNIQUE_BY_SEARCH)

        assert problem.solve() == SINGLE_SOLUTION
        assert problem.get_solution() == frozenset({rows["A"], rows["B"], rows["E"]})
        assert problem.stats.branches == 2
        assert problem.stats.backtracks == 2
        assert problem.stats.max_depth == 1

    def test_unique_solution_is_committed(self):
        """After a unique result the graph holds the solved state."""
        problem, rows = exact_cover(UNIQUE_BY_SEARCH)
        problem.solve()

        assert problem.definites == frozenset({rows["A"], rows["B"], rows["E"]})
        assert not problem.live
        assert not problem.active_constraints
        assert not problem.dirty_constraints

    def test_two_covers_are_many(self):
        """Two exact covers classify as many."""
        problem, _ = exact_cover({
            "1": ["A", "C"],
            "2": ["A", "D"],
            "3": ["B", "C"],
            "4": ["B", "D"],
        })

        assert problem.solve() == MANY_SOLUTIONS
        with pytest.raises(NoUniqueSolutionError):
            problem.get_solution()

    def test_many_split_by_branch_constraint(self):
        """With many solutions, possibilities come from the next branch."""
        problem, rows = exact_cover({"1": ["A", "B"]})
        problem.solve()

        assert set(problem.get_possible_solutions()) == {
            frozenset({rows["A"]}),
            frozenset({rows["B"]}),
        }

    def test_possible_solutions_when_solved(self):
        """A solved problem has exactly one possible solution."""
        problem, rows = exact_cover(UNIQUE_BY_SEARCH)
        problem.solve()

        assert problem.get_possible_solutions() == [problem.get_solution()]

    def test_no_constraints_is_trivially_solved(self):
        """An empty problem has one, empty, solution."""
        problem = ConstrainedProblem([], [])

        assert problem.solve() == SINGLE_SOLUTION
        assert problem.get_solution() == frozenset()


class TestIdempotence:
    """Tests that repeated solving gives the same answer."""

    @pytest.mark.parametrize("puzzle", [
        "0234301221034320",
        "1234341201030301",
        "1100000000000000",
        "0" * 16,
    ])
    def test_solve_twice(self, puzzle):
        """Solving again with no candidate movement gives the same result."""
        problem = SudokuProblem(SudokuBoard.from_string(puzzle)).problem

        first = problem.solve()
        first_solution = problem.get_solution() if first == SINGLE_SOLUTION else None
        second = problem.solve()

        assert first == second
        if first == SINGLE_SOLUTION:
            assert problem.get_solution() == first_solution

    def test_search_result_is_stable(self):
        """A unique result reached through search survives a second solve."""
        problem, _ = exact_cover(UNIQUE_BY_SEARCH)
        solution = (problem.solve(), problem.get_solution())

        assert (problem.solve(), problem.get_solution()) == solution


class TestSnapshotRestore:
    """Tests for exact undo of speculative branches."""

    def setup_method(self):
        self.sudoku = SudokuProblem(SudokuBoard(2, 2))
        self.problem = self.sudoku.problem
        assert self.problem.propagate()

    def _partitions(self):
        return {c: (c.live, c.definites) for c in self.sudoku.constraints}

    def test_restore_after_failed_branch(self):
        """State after restore is identical to the state before the branch."""
        live_before = self.problem.live
        definite_before = self.problem.definites
        active_before = self.problem.active_constraints
        partitions_before = self._partitions()

        snapshot = self.problem.snapshot()
        # Two 1s in the first row
        self.problem.include_in_solution(self.sudoku.candidate(0, 0, 1))
        self.problem.include_in_solution(self.sudoku.candidate(0, 1, 1))
        assert not self.problem.propagate()
        self.problem.restore(snapshot)

        assert self.problem.live == live_before
        assert self.problem.definites == definite_before
        assert self.problem.active_constraints == active_before
        assert self._partitions() == partitions_before

    def test_restore_after_deep_propagation(self):
        """Eliminations that fanned out through many constraints are undone."""
        partitions_before = self._partitions()
        snapshot = self.problem.snapshot()

        for row, col, value in [(0, 0, 1), (0, 1, 2), (1, 0, 3), (2, 2, 1)]:
            self.problem.include_in_solution(self.sudoku.candidate(row, col, value))
        self.problem.propagate()
        assert self._partitions() != partitions_before

        self.problem.restore(snapshot)
        assert self._partitions() == partitions_before

    def test_restored_constraints_are_requeued(self):
        """Constraints touched by a restore are queued for re-application."""
        snapshot = self.problem.snapshot()
        self.problem.include_in_solution(self.sudoku.candidate(3, 3, 4))
        self.problem.propagate()
        self.problem.restore(snapshot)

        for constraint in self.sudoku.constraints:
            assert constraint.is_dirty() == (constraint in self.problem.dirty_constraints)
        assert self.problem.dirty_constraints


class TestInvariants:
    """Tests for structural invariants after solving."""

    @pytest.mark.parametrize("puzzle", ["0234301221034320", "1234341201030301", "0" * 16])
    def test_live_and_definite_disjoint(self, puzzle):
        """No constraint ever holds a candidate as both live and definite."""
        sudoku = SudokuProblem(SudokuBoard.from_string(puzzle))
        sudoku.solve()

        for constraint in [sudoku.problem, *sudoku.constraints]:
            assert not constraint.live & constraint.definites

    def test_dirty_flag_matches_queue(self):
        """A constraint is dirty exactly when it is queued."""
        sudoku = SudokuProblem(SudokuBoard.from_string("1234341201030301"))
        sudoku.solve()

        for constraint in sudoku.constraints:
            assert constraint.is_dirty() == (constraint in sudoku.problem.dirty_constraints)


class TestConstruction:
    """Tests for problem setup."""

    def test_given_outside_universe(self):
        """Givens must be candidates of the problem."""
        constraint = SingleCandidateConstraint("c")
        inside = Candidate("inside")
        constraint.add(inside)

        with pytest.raises(ValueError):
            ConstrainedProblem([inside], [constraint], givens=[Candidate("outside")])

    def test_constraint_outside_universe(self):
        """Constraints may only refer to candidates of the problem."""
        constraint = SingleCandidateConstraint("c")
        constraint.add(Candidate("stray"))

        with pytest.raises(ValueError):
            ConstrainedProblem([], [constraint])


class TestNestedProblem:
    """Tests for a problem used as a constraint of a larger one."""

    def test_nested_problem_resolves(self):
        """A sub-problem is applied and retired like any other constraint."""
        a, b, c = Candidate("a"), Candidate("b"), Candidate("c")

        inner_rule = SingleCandidateConstraint("a or b")
        inner_rule.add(a)
        inner_rule.add(b)
        inner = ConstrainedProblem([a, b], [inner_rule], label="inner")

        outer_rule = SingleCandidateConstraint("b or c")
        outer_rule.add(b)
        outer_rule.add(c)
        outer = ConstrainedProblem([a, b, c], [inner, outer_rule], givens=[c], label="outer")

        assert outer.solve() == SINGLE_SOLUTION
        assert outer.get_solution() == frozenset({a, c})
        assert inner.get_solution() == frozenset({a})
        assert inner.parent is outer

    def test_nested_problem_with_many_solutions(self):
        """An undecided sub-problem is searched through, not rejected."""
        a, b, x, y = (Candidate(name) for name in "abxy")
        inner = ConstrainedProblem([a, b], [rule("a or b", a, b)], label="inner")
        outer = ConstrainedProblem([a, b, x, y], [inner, rule("x or y", x, y)], label="outer")

        assert outer.solve() == MANY_SOLUTIONS
        assert outer.solve() == MANY_SOLUTIONS

    def test_sibling_problems_sharing_candidates(self):
        """Two undecided sub-problems over shared candidates meet in one solution."""
        A, B, C, D, E = (Candidate(name) for name in "ABCDE")
        # Built before the sub-problems freeze their candidates
        covers = [rule("1", A, C), rule("2", A, D), rule("3", B, C), rule("4", B, D)]
        last = rule("5", C, D, E)

        # {A, B} or {C, D}
        pairs = ConstrainedProblem([A, B, C, D], covers, label="pairs")
        # Exactly one of C, D, E
        single = ConstrainedProblem([C, D, E], [last], label="single")
        outer = ConstrainedProblem([A, B, C, D, E], [pairs, single], label="outer")

        assert outer.solve() == SINGLE_SOLUTION
        assert outer.get_solution() == frozenset({A, B, E})
        assert pairs.get_solution() == frozenset({A, B})
        assert single.get_solution() == frozenset({E})
        assert outer.stats.branches == 2

        # Solving again gives the same answer
        assert outer.solve() == SINGLE_SOLUTION
        assert outer.get_solution() == frozenset({A, B, E})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
