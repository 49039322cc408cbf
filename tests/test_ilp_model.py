import random

import pytest

from config import GenerationConfig
from domino_sets import Puzzle, Tile, is_valid_solution
from errors import NotValidPuzzleError, UnsolvablePuzzleError
from generator import generate_puzzle
from ilp_model import SequenceModel, solve_puzzle_ilp, validate_puzzle_ilp
from solver import solve_puzzle
from validator import is_unique


def test_model_has_a_variable_per_oriented_tile_and_position():
    model = SequenceModel(Puzzle.empty(3))
    assert len(model.x) == len(model.oriented) * 8


def test_solve_keeps_givens():
    puzzle = Puzzle([Tile(0, 0)] + [None] * 7)
    solution = solve_puzzle_ilp(puzzle)
    assert is_valid_solution(solution)
    assert solution[0].as_tuple() == (0, 0)


def test_unique_puzzle(solution_n3):
    puzzle = Puzzle([None, Tile(0, 1)] + [None] * 6)
    validate_puzzle_ilp(puzzle, solution_n3)


def test_ambiguous_puzzle(solution_n3):
    puzzle = Puzzle([Tile(0, 0)] + [None] * 7)
    with pytest.raises(NotValidPuzzleError):
        validate_puzzle_ilp(puzzle, solution_n3)


def test_mismatched_neighbours_are_infeasible():
    puzzle = Puzzle([Tile(0, 0), Tile(1, 1)] + [None] * 6)
    with pytest.raises(UnsolvablePuzzleError):
        solve_puzzle_ilp(puzzle)


def test_tile_outside_the_set_is_infeasible():
    with pytest.raises(UnsolvablePuzzleError):
        solve_puzzle_ilp(Puzzle([Tile(0, 2)] + [None] * 7))


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_agrees_with_backtracking(seed):
    config = GenerationConfig(timeout=19.0, max_restarts=50)
    puzzle = generate_puzzle(4, 2, rng=random.Random(seed), config=config)
    solution = solve_puzzle(puzzle)

    assert is_valid_solution(solve_puzzle_ilp(puzzle))
    validate_puzzle_ilp(puzzle, solution)

    # Hiding one more tile may break uniqueness; both checks must agree
    looser = puzzle.copy()
    looser[puzzle.filled_positions()[0]] = None
    try:
        validate_puzzle_ilp(looser, solution)
        ilp_unique = True
    except NotValidPuzzleError:
        ilp_unique = False
    assert ilp_unique == is_unique(looser, solution)
