import random

import pytest

from domino_sets import Puzzle, Tile, is_valid_solution
from errors import InvalidLengthError, UnsolvablePuzzleError
from graph import RegularGraph, circuit_to_solution, find_eulerian_circuit
from solver import Solver, solve_puzzle, try_solve


def _solution(n, seed=0):
    circuit = find_eulerian_circuit(RegularGraph(n), randomized=True, rng=random.Random(seed))
    return circuit_to_solution(circuit)


@pytest.mark.parametrize("n", range(2, 8))
def test_complete_puzzle_solves_to_itself(n):
    solution = _solution(n)
    assert Puzzle(solve_puzzle(Puzzle.from_solution(solution))) == Puzzle(solution)


@pytest.mark.parametrize("n", [3, 4, 6])
def test_single_hidden_tile_is_restored(n):
    solution = _solution(n, seed=n)
    puzzle = Puzzle.from_solution(solution)
    puzzle[len(puzzle) // 2] = None
    assert Puzzle(solve_puzzle(puzzle)) == Puzzle(solution)


def test_one_given_double():
    puzzle = Puzzle([Tile(0, 0)] + [None] * 7)
    result = solve_puzzle(puzzle)

    assert is_valid_solution(result)
    assert result[0].as_tuple() == (0, 0)


@pytest.mark.parametrize("n", [2, 3, 4, 5])
def test_empty_puzzle_is_solvable(n):
    assert is_valid_solution(solve_puzzle(Puzzle.empty(n)))


def test_givens_are_kept_in_place(solution_n3):
    puzzle = Puzzle.from_solution(solution_n3)
    for position in (1, 2, 5, 6):
        puzzle[position] = None
    result = solve_puzzle(puzzle)
    for position in puzzle.filled_positions():
        assert result[position].as_tuple() == puzzle[position].as_tuple()


def test_input_puzzle_is_not_modified():
    puzzle = Puzzle([Tile(0, 0)] + [None] * 7)
    solve_puzzle(puzzle)
    assert puzzle.empty_positions() == list(range(1, 8))


def test_nodes_are_counted():
    solver = Solver(Puzzle.empty(3))
    solver.solve()
    assert solver.nodes_visited > 0


def test_mismatched_neighbours_are_unsolvable():
    puzzle = Puzzle([Tile(0, 0), Tile(1, 1)] + [None] * 6)
    with pytest.raises(UnsolvablePuzzleError):
        solve_puzzle(puzzle)
    assert try_solve(puzzle) is None


def test_duplicate_tile_is_unsolvable():
    puzzle = Puzzle([Tile(0, 1), None, None, Tile(1, 0)] + [None] * 4)
    with pytest.raises(UnsolvablePuzzleError):
        solve_puzzle(puzzle)


def test_antipodal_tile_is_unsolvable():
    # [0|2] is not part of the order 3 set
    puzzle = Puzzle([Tile(0, 2)] + [None] * 7)
    with pytest.raises(UnsolvablePuzzleError):
        solve_puzzle(puzzle)


def test_dead_end_is_unsolvable():
    # Both neighbours of position 1 are fixed, and no missing tile links 1 to 3
    puzzle = Puzzle([Tile(0, 1), None, Tile(3, 3)] + [None] * 5)
    with pytest.raises(UnsolvablePuzzleError):
        solve_puzzle(puzzle)


@pytest.mark.parametrize("length", [1, 7, 10])
def test_impossible_length(length):
    with pytest.raises(InvalidLengthError):
        solve_puzzle(Puzzle([None] * length))
