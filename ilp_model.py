"""
Binary-program encoding of domino-sequence puzzles, solved with CP-SAT.

Variables x[t, p] are 1 when oriented tile t sits at position p.
Constraints:
  - each tile is used exactly once, in either orientation
  - each position holds exactly one tile
  - x[(a, b), p] <= sum over c of x[(b, c), p + 1]   (cyclic adjacency)
  - placed tiles are fixed to 1

Used as a cross-check of the backtracking solver and validator.
"""
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from ortools.sat.python import cp_model

from config import ilp_time_limit
from domino_sets import Puzzle, Solution, Tile, Tileset
from errors import ModelError, NotValidPuzzleError, UnsolvablePuzzleError
from validator import check_reference

logger = logging.getLogger(__name__)

Key = Tuple[Tuple[int, int], int]


class SequenceModel:
    """CP-SAT model of one puzzle."""

    def __init__(self, puzzle: Puzzle):
        self.puzzle = puzzle.copy()
        self.length = len(puzzle)
        self.tileset = Tileset(puzzle.n)
        self.oriented: List[Tile] = self.tileset.oriented()
        self.model = cp_model.CpModel()
        self.x: Dict[Key, cp_model.IntVar] = {}
        self._build()

    def _build(self) -> None:
        for tile in self.oriented:
            a, b = tile.as_tuple()
            for p in range(self.length):
                self.x[(a, b), p] = self.model.new_bool_var(f"x_{a}_{b}_{p}")

        # Each tile once, either orientation
        for tile in self.tileset:
            orientations = {tile.as_tuple(), tile.flip().as_tuple()}
            self.model.add_exactly_one(
                [self.x[o, p] for o in orientations for p in range(self.length)]
            )

        # Each position exactly one tile
        for p in range(self.length):
            self.model.add_exactly_one([self.x[t.as_tuple(), p] for t in self.oriented])

        by_left: Dict[int, List[Tile]] = defaultdict(list)
        for tile in self.oriented:
            by_left[tile.left].append(tile)

        for tile in self.oriented:
            a, b = tile.as_tuple()
            for p in range(self.length):
                q = (p + 1) % self.length
                self.model.add(
                    self.x[(a, b), p] <= sum(self.x[t.as_tuple(), q] for t in by_left[b])
                )

        for p, tile in enumerate(self.puzzle):
            if tile is None:
                continue
            key = (tile.as_tuple(), p)
            if key not in self.x:
                raise UnsolvablePuzzleError(f"Tile {tile} at position {p} is not in {self.tileset}")
            self.model.add(self.x[key] == 1)

    def minimize_reference(self, solution: Solution) -> List[int]:
        """Objective: count empty positions that keep the reference tile."""
        empty = self.puzzle.empty_positions()
        self.model.minimize(sum(self.x[solution[p].as_tuple(), p] for p in empty))
        return empty

    def run(self, time_limit: Optional[float] = None) -> Tuple[cp_model.CpSolver, int]:
        solver = cp_model.CpSolver()
        solver.parameters.max_time_in_seconds = time_limit or ilp_time_limit()
        solver.parameters.num_workers = 1
        status = solver.solve(self.model)
        logger.debug("CP-SAT status %s in %.3fs", solver.status_name(status), solver.wall_time)
        if status == cp_model.INFEASIBLE:
            raise UnsolvablePuzzleError()
        if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
            raise ModelError(f"Model failed execution with status {solver.status_name(status)}")
        return solver, status

    def extract(self, solver: cp_model.CpSolver) -> Solution:
        solution: List[Optional[Tile]] = [None] * self.length
        for ((a, b), p), var in self.x.items():
            if solver.value(var):
                solution[p] = Tile(a, b)
        if any(tile is None for tile in solution):
            raise ModelError("Model returned an incomplete assignment")
        return solution


def solve_puzzle_ilp(puzzle: Puzzle, time_limit: Optional[float] = None) -> Solution:
    model = SequenceModel(puzzle)
    solver, _ = model.run(time_limit)
    return model.extract(solver)


def validate_puzzle_ilp(puzzle: Puzzle, solution: Solution, time_limit: Optional[float] = None) -> None:
    """
    The cheapest completion, counted in reference tiles kept at empty
    positions, must keep all of them; anything less is a second solution.
    """
    check_reference(puzzle, solution)
    model = SequenceModel(puzzle)
    empty = model.minimize_reference(solution)
    solver, status = model.run(time_limit)
    if status != cp_model.OPTIMAL:
        raise ModelError("Model stopped before proving optimality")
    objective = round(solver.objective_value)
    if objective != len(empty):
        logger.debug("Optimal objective %d, expected %d", objective, len(empty))
        raise NotValidPuzzleError()
