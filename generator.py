"""
Puzzle generator that hides tiles of a full domino loop until the puzzle
reaches a target difficulty while keeping a unique solution.
Starts from a solution, removes tiles one at a time, and rolls removals back
whenever they break uniqueness or overshoot the target class.
"""
import logging
import random
import time
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from classifier import ComplexityClass, classify_puzzle
from config import GenerationConfig
from domino_sets import MIN_ORDER, Puzzle, Solution, Tile
from errors import DominoError, GenerationError, InvalidLengthError
from graph import RegularGraph, circuit_to_solution, find_eulerian_circuit
from validator import is_unique

logger = logging.getLogger(__name__)


@dataclass
class GenerationStats:
    """Statistics for puzzle generation."""
    attempts: int = 0
    removals: int = 0
    rollbacks: int = 0
    reinsertions: int = 0


class PuzzleGenerator:
    """
    Generates puzzles of order n.

    All randomness, from the Eulerian traversal to the choice of hidden
    positions, comes from `rng`, so a seeded generator is reproducible.
    """

    def __init__(
        self,
        n: int,
        config: Optional[GenerationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        if n < MIN_ORDER:
            raise InvalidLengthError(f"Puzzle order must be at least {MIN_ORDER}, got {n}")
        self.n = n
        self.config = config or GenerationConfig.from_env()
        self.rng = rng or random.Random()
        self.stats = GenerationStats()

        self.solution: Solution = []
        self.puzzle = Puzzle([])
        self.history: List[Tuple[Tile, int]] = []
        self.rejected: Set[int] = set()
        self.cursor = 0

    def build_solution(self, randomized: bool = True) -> Solution:
        graph = RegularGraph(self.n)
        circuit = find_eulerian_circuit(graph, randomized=randomized, rng=self.rng)
        return circuit_to_solution(circuit)

    def _restart(self) -> None:
        """Start over from the full solution with one hidden tile."""
        self.stats.attempts += 1
        max_restarts = self.config.max_restarts
        if max_restarts is not None and self.stats.attempts > max_restarts + 1:
            raise GenerationError(
                f"No puzzle of order {self.n} found after {max_restarts} restarts"
            )
        self.puzzle = Puzzle.from_solution(self.solution)
        self.history = []
        self.rejected = set()
        self.cursor = self.rng.randrange(len(self.puzzle))
        self._hide(self.cursor)

    def _hide(self, position: int) -> None:
        self.history.append((self.puzzle[position], position))
        self.puzzle[position] = None
        self.stats.removals += 1

    def _reinsert(self) -> int:
        """Undo the most recent removal and return its position."""
        tile, position = self.history.pop()
        self.puzzle[position] = tile
        return position

    def _classify(self) -> Optional[ComplexityClass]:
        try:
            return classify_puzzle(self.puzzle)
        except DominoError:
            return None

    def _pick_position(self, random_removal: bool) -> Optional[int]:
        """A filled position that has not been rejected, or None."""
        candidates = [
            p for p in self.puzzle.filled_positions() if p not in self.rejected
        ]
        if not candidates:
            return None

        if random_removal:
            for _ in range(self.config.random_attempts):
                index = self.rng.randrange(len(self.puzzle))
                if index in candidates:
                    return index

        # Cyclic scan from the cursor
        length = len(self.puzzle)
        for step in range(length):
            index = (self.cursor + step) % length
            if index in candidates:
                self.cursor = (index + 1) % length
                return index
        return None

    def generate(self, target: int, random_removal: bool = True) -> Puzzle:
        """
        Hide tiles until the puzzle is unique and classifies as `target`.
        Raises InvalidClassError for an out-of-range target and
        GenerationError if the restart cap is reached.
        """
        expected = ComplexityClass(target)
        self.solution = self.build_solution(randomized=random_removal)
        self._restart()
        started = time.monotonic()

        while True:
            actual = self._classify()
            if actual == expected:
                break

            if actual is None or time.monotonic() - started > self.config.timeout:
                logger.info("Restarting generation (attempt %d, class %s)", self.stats.attempts, actual)
                self._restart()
                started = time.monotonic()
                continue

            if actual > expected:
                # Removing the last reinserted tile again would overshoot
                self.rejected = set()
                while self.history and actual is not None and actual > expected:
                    self.rejected = {self._reinsert()}
                    self.stats.reinsertions += 1
                    actual = self._classify()
                if not self.history:
                    self._restart()
                    started = time.monotonic()
                continue

            position = self._pick_position(random_removal)
            if position is None:
                logger.debug("No removable tile left, restarting")
                self._restart()
                started = time.monotonic()
                continue

            self._hide(position)
            if not is_unique(self.puzzle, self.solution):
                self._reinsert()
                self.rejected.add(position)
                self.stats.rollbacks += 1

        self._fill_isolated_gaps(expected)
        logger.info(
            "Generated order %d class %s puzzle: %d hidden, %d attempts",
            self.n, expected, len(self.puzzle.empty_positions()), self.stats.attempts,
        )
        return self.puzzle.copy()

    def _fill_isolated_gaps(self, expected: ComplexityClass) -> None:
        """Fill single hidden tiles between two placed ones while the class holds."""
        for position in self.puzzle.empty_positions():
            left, right = self.puzzle.neighbours(position)
            if left is None or right is None:
                continue
            self.puzzle[position] = self.solution[position]
            if self._classify() != expected:
                self.puzzle[position] = None


def generate_puzzle(
    n: int,
    target_complexity: int,
    random: bool = True,
    rng: Optional[random.Random] = None,
    config: Optional[GenerationConfig] = None,
) -> Puzzle:
    """Generate a unique puzzle of order n in the given complexity class."""
    return PuzzleGenerator(n, config=config, rng=rng).generate(target_complexity, random_removal=random)


if __name__ == "__main__":
    print("=" * 60)
    print("PUZZLE GENERATION - SEARCHING FOR UNIQUE SOLUTIONS")
    print("=" * 60)

    for order in (3, 4):
        for c in (1, 2, 3):
            gen = PuzzleGenerator(order, rng=random.Random(order * 10 + c))
            puzzle = gen.generate(c)
            print(f"n={order} class={c}: {puzzle}")
            print(f"  attempts={gen.stats.attempts} removals={gen.stats.removals} "
                  f"rollbacks={gen.stats.rollbacks}")
