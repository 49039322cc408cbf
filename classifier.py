"""
Difficulty classification from the structure of a puzzle's holes.

A hole is a maximal cyclic run of hidden positions. Longer holes leave more
room for alternative fillings, so the score grows with the squared hole
lengths, normalised by the longest hole a valid puzzle of that order can
usually afford. The score is bucketed into NUMBER_OF_CLASSES classes whose
boundaries follow a translated Fibonacci sequence, so the easy band is
narrower than the hard one.
"""
from dataclasses import dataclass
from functools import total_ordering
from typing import List, Tuple

from domino_sets import Puzzle, get_n
from errors import EmptyPuzzleError, InvalidClassError, InvalidLengthError

NUMBER_OF_CLASSES = 3

Hole = Tuple[int, int]


@total_ordering
@dataclass(frozen=True, eq=False)
class ComplexityClass:
    """A difficulty class in [1, NUMBER_OF_CLASSES]."""
    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or not 1 <= self.value <= NUMBER_OF_CLASSES:
            raise InvalidClassError(
                f"The complexity class provided is not valid: {self.value}. "
                f"It should be in the range [1, {NUMBER_OF_CLASSES}]"
            )

    def __int__(self):
        return self.value

    def __eq__(self, other):
        if isinstance(other, ComplexityClass):
            return self.value == other.value
        if isinstance(other, int):
            return self.value == other
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, ComplexityClass):
            return self.value < other.value
        if isinstance(other, int):
            return self.value < other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return str(self.value)


def translated_fibonacci(k: int) -> int:
    """F'(1) = 1, F'(2) = 2, F'(k) = F'(k-1) + F'(k-2)."""
    a, b = 1, 2
    if k == 1:
        return a
    for _ in range(k - 2):
        a, b = b, a + b
    return b


def compute_threshold(k: int, classes: int = NUMBER_OF_CLASSES) -> float:
    """Upper boundary of class k: cumulative F' up to k over the F' total."""
    denominator = sum(translated_fibonacci(i) for i in range(1, classes + 1))
    numerator = sum(translated_fibonacci(i) for i in range(1, k + 1))
    return numerator / denominator


def find_threshold_index(value: float, classes: int = NUMBER_OF_CLASSES) -> int:
    """Smallest k whose threshold exceeds `value`, else the last class."""
    for k in range(1, classes + 1):
        if compute_threshold(k, classes) > value:
            return k
    return classes


def detect_holes(puzzle: Puzzle) -> List[Hole]:
    """
    Cyclic runs of None as (start, end) with `end` exclusive.

    A run crossing the end of the sequence is merged with the run at index 0
    and reported in its place, e.g. (6, 2) for an 8-tile puzzle. An all-None
    puzzle is a single hole (0, len).
    """
    length = len(puzzle)
    holes: List[Hole] = []
    start = None

    for i, tile in enumerate(puzzle):
        if tile is None:
            if start is None:
                start = i
        elif start is not None:
            holes.append((start, i))
            start = None

    if start is not None:
        if holes and holes[0][0] == 0:
            holes[0] = (start, holes[0][1])
        else:
            holes.append((start, length))

    return holes


def hole_length(hole: Hole, length: int) -> int:
    start, end = hole
    if end > start:
        return end - start
    return (length - start) + end


def max_hole_length(n: int) -> int:
    """Normalisation constant: planar orders (n <= 3) allow longer holes."""
    if n <= 3:
        return 2 * (n + 1) - 1
    return n + 1


def absolute_complexity(holes: List[Hole], length: int, max_hole: int) -> float:
    if not holes:
        return 0.0
    holes_factor = 1.0 / (len(holes) ** 0.1)
    length_factor = sum((hole_length(hole, length) / max_hole) ** 2 for hole in holes)
    return holes_factor * length_factor


def relative_complexity(puzzle: Puzzle) -> float:
    """Absolute complexity clamped to [0, 1]."""
    n = get_n(len(puzzle))
    holes = detect_holes(puzzle)
    value = absolute_complexity(holes, len(puzzle), max_hole_length(n))
    return min(max(value, 0.0), 1.0)


def classify_puzzle(puzzle: Puzzle) -> ComplexityClass:
    """
    Classify a puzzle by its holes.

    Raises:
        EmptyPuzzleError: no tile is placed
        InvalidLengthError: the length maps to no tileset order, or the
            puzzle has no hole
    """
    if puzzle.is_empty():
        raise EmptyPuzzleError()
    get_n(len(puzzle))
    if not detect_holes(puzzle):
        raise InvalidLengthError("The puzzle has no holes to classify")
    return ComplexityClass(find_threshold_index(relative_complexity(puzzle)))
