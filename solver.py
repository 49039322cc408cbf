"""
Backtracking solver for domino-sequence puzzles.
Fills hidden positions with the missing tiles so that every pair of
neighbouring tiles matches, treating the sequence as cyclic.
"""
from collections import defaultdict
from typing import Dict, List, Optional, Set

from domino_sets import Puzzle, Solution, Tile, Tileset
from errors import UnsolvablePuzzleError


class Solver:
    """
    Depth-first search over puzzle positions 0..L-1.
    The caller's puzzle is never modified.
    """

    def __init__(self, puzzle: Puzzle):
        self.puzzle = puzzle.copy()
        self.length = len(self.puzzle)
        self.tileset = Tileset(self.puzzle.n)
        self.nodes_visited = 0

        # Tiles already placed, by canonical form
        self.used: Set[Tile] = set()

        # Missing oriented tiles indexed by their left pip
        self.by_left: Dict[int, List[Tile]] = defaultdict(list)

    def _check_givens(self) -> None:
        """Reject puzzles whose placed tiles already break the rules."""
        known = set(self.tileset.tiles)
        for position, tile in enumerate(self.puzzle):
            if tile is None:
                continue
            if tile not in known:
                raise UnsolvablePuzzleError(f"Tile {tile} at position {position} is not in {self.tileset}")
            if tile in self.used:
                raise UnsolvablePuzzleError(f"Tile {tile} is placed more than once")
            self.used.add(tile)
            right = self.puzzle[(position + 1) % self.length]
            if right is not None and not tile.connects_to(right):
                raise UnsolvablePuzzleError(
                    f"Tiles {tile} and {right} at position {position} do not match"
                )

    def solve(self) -> Solution:
        """Return a full solution or raise UnsolvablePuzzleError."""
        self._check_givens()
        for tile in sorted(self.puzzle.missing_tiles(), key=Tile.as_tuple):
            self.by_left[tile.left].append(tile)

        if not self._backtrack(0):
            raise UnsolvablePuzzleError()
        return list(self.puzzle.tiles)

    def _candidates(self, position: int) -> List[Tile]:
        left = self.puzzle[(position - 1) % self.length]
        if left is not None:
            return self.by_left[left.right]
        return [tile for pip in sorted(self.by_left) for tile in self.by_left[pip]]

    def _backtrack(self, position: int) -> bool:
        """Recursive backtracking."""
        if position == self.length:
            return True

        if self.puzzle[position] is not None:
            return self._backtrack(position + 1)

        self.nodes_visited += 1
        for tile in self._candidates(position):
            if tile in self.used:
                continue
            if not self.puzzle.fits(position, tile):
                continue

            self.puzzle[position] = tile
            self.used.add(tile)

            if self._backtrack(position + 1):
                return True

            self.used.discard(tile)
            self.puzzle[position] = None

        return False


def solve_puzzle(puzzle: Puzzle) -> Solution:
    """
    Solve a puzzle.
    Raises InvalidLengthError for impossible lengths and
    UnsolvablePuzzleError when no completion exists.
    """
    return Solver(puzzle).solve()


def try_solve(puzzle: Puzzle) -> Optional[Solution]:
    """Like solve_puzzle, but returns None for unsolvable puzzles."""
    try:
        return solve_puzzle(puzzle)
    except UnsolvablePuzzleError:
        return None


if __name__ == "__main__":
    scenario = Puzzle([Tile(0, 0)] + [None] * 7)
    print(scenario, "->", solve_puzzle(scenario))
