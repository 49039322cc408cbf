"""
Uniqueness validation for domino-sequence puzzles.

A puzzle is valid when it can be completed and the completion is unique.
Uniqueness is proven by perturbation: every free tile is tried at every
hidden position, and the more constrained puzzle is solved again. Any
completion that differs from the reference solution is a second solution.
"""
import logging
from typing import List

from domino_sets import Puzzle, Solution, is_valid_solution
from errors import NotValidPuzzleError, UnsolvablePuzzleError
from solver import solve_puzzle, try_solve

logger = logging.getLogger(__name__)


def _differs(candidate: Solution, reference: Solution, positions: List[int]) -> bool:
    return any(candidate[p].as_tuple() != reference[p].as_tuple() for p in positions)


def check_reference(puzzle: Puzzle, solution: Solution) -> None:
    if len(solution) != len(puzzle) or not is_valid_solution(solution):
        raise NotValidPuzzleError("The reference solution is not a valid domino sequence")
    for position in puzzle.filled_positions():
        if puzzle[position].as_tuple() != solution[position].as_tuple():
            raise NotValidPuzzleError(
                f"The reference solution disagrees with the puzzle at position {position}"
            )


def validate_puzzle(puzzle: Puzzle, solution: Solution) -> None:
    """
    Check that `puzzle` has exactly one completion, namely `solution`.

    Raises:
        InvalidLengthError: the puzzle length maps to no tileset order
        UnsolvablePuzzleError: the puzzle cannot be completed
        NotValidPuzzleError: another completion exists, or `solution`
            is not a completion of `puzzle`
    """
    solve_puzzle(puzzle)
    check_reference(puzzle, solution)

    empty_positions = puzzle.empty_positions()
    free_tiles = puzzle.missing_tiles()
    perturbed = puzzle.copy()
    solves = 0

    for position in empty_positions:
        for tile in free_tiles:
            if tile.as_tuple() == solution[position].as_tuple():
                continue
            if not perturbed.fits(position, tile):
                continue

            perturbed[position] = tile
            alternative = try_solve(perturbed)
            perturbed[position] = None
            solves += 1

            if alternative is not None and _differs(alternative, solution, empty_positions):
                logger.debug("Second solution found with %r at position %d", tile, position)
                raise NotValidPuzzleError()

    logger.debug("Puzzle unique after %d perturbed solves", solves)


def is_unique(puzzle: Puzzle, solution: Solution) -> bool:
    """Boolean form of validate_puzzle."""
    try:
        validate_puzzle(puzzle, solution)
    except (UnsolvablePuzzleError, NotValidPuzzleError):
        return False
    return True

