"""
Domino tiles, tilesets and cyclic puzzle sequences.
"""
from dataclasses import dataclass
from math import isqrt
from typing import Iterator, List, Optional, Set, Tuple

from errors import InvalidLengthError

# n = 1 has a disconnected regular graph, so no domino loop exists for it.
MIN_ORDER = 2


@dataclass(frozen=True, eq=False)
class Tile:
    """A domino tile; equality ignores orientation."""
    left: int
    right: int

    @property
    def is_double(self) -> bool:
        """Check if this is a double."""
        return self.left == self.right

    def flip(self) -> 'Tile':
        return Tile(self.right, self.left)

    def canonical(self) -> Tuple[int, int]:
        """(low, high) pair, identical for both orientations."""
        return (min(self.left, self.right), max(self.left, self.right))

    def as_tuple(self) -> Tuple[int, int]:
        """Oriented (left, right) pair."""
        return (self.left, self.right)

    def connects_to(self, other: 'Tile') -> bool:
        """True if `other` can follow this tile in a sequence."""
        return self.right == other.left

    def __repr__(self):
        return f"[{self.left}|{self.right}]"

    def __hash__(self):
        return hash(self.canonical())

    def __eq__(self, other):
        if not isinstance(other, Tile):
            return False
        return self.canonical() == other.canonical()


Solution = List[Tile]


def sequence_length(n: int) -> int:
    """Number of tiles in a full sequence of order n."""
    if n % 2 == 0:
        return (n + 1) * (n + 2) // 2
    return (n + 1) ** 2 // 2


def get_n(length: int) -> int:
    """
    Recover the tileset order from a sequence length.

    Tries both closed forms of sequence_length and keeps a candidate only if
    its parity matches the formula that produced it.
    """
    if length > 0:
        # Even n: length = (n + 1)(n + 2) / 2
        discriminant = 1 + 8 * length
        root = isqrt(discriminant)
        if root * root == discriminant and (root - 3) % 2 == 0:
            n = (root - 3) // 2
            if n % 2 == 0 and n >= MIN_ORDER:
                return n

        # Odd n: length = (n + 1)^2 / 2
        root = isqrt(2 * length)
        if root * root == 2 * length:
            n = root - 1
            if n % 2 == 1 and n >= MIN_ORDER:
                return n

    raise InvalidLengthError(
        f"The puzzle length is not correct: {length} matches no tileset order"
    )


def is_antipodal(a: int, b: int, n: int) -> bool:
    """Odd orders drop the tiles whose halves are (n + 1) / 2 apart."""
    return n % 2 == 1 and abs(a - b) == (n + 1) // 2


class Tileset:
    """The complete set of tiles of order n."""

    def __init__(self, n: int):
        if n < MIN_ORDER:
            raise InvalidLengthError(f"Tileset order must be at least {MIN_ORDER}, got {n}")
        self.n = n
        self.tiles: List[Tile] = [
            Tile(i, j)
            for i in range(n + 1)
            for j in range(i, n + 1)
            if not is_antipodal(i, j, n)
        ]

    def oriented(self) -> List[Tile]:
        """Every tile in both orientations, doubles once."""
        result = []
        for tile in self.tiles:
            result.append(tile)
            if not tile.is_double:
                result.append(tile.flip())
        return result

    def __contains__(self, tile: object) -> bool:
        return isinstance(tile, Tile) and tile in set(self.tiles)

    def __len__(self):
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __repr__(self):
        return f"Tileset(n={self.n}, {len(self.tiles)} tiles)"


class Puzzle:
    """
    A cyclic sequence of tiles where some positions are hidden (None).

    Position len-1 is adjacent to position 0.
    """

    def __init__(self, tiles: List[Optional[Tile]]):
        self.tiles: List[Optional[Tile]] = list(tiles)

    @classmethod
    def from_solution(cls, solution: Solution) -> 'Puzzle':
        return cls(list(solution))

    @classmethod
    def empty(cls, n: int) -> 'Puzzle':
        return cls([None] * sequence_length(n))

    @property
    def n(self) -> int:
        """Tileset order; raises InvalidLengthError for impossible lengths."""
        return get_n(len(self.tiles))

    def copy(self) -> 'Puzzle':
        return Puzzle(self.tiles)

    def neighbours(self, position: int) -> Tuple[Optional[Tile], Optional[Tile]]:
        """Cyclic (left, right) neighbours of a position."""
        length = len(self.tiles)
        return self.tiles[(position - 1) % length], self.tiles[(position + 1) % length]

    def empty_positions(self) -> List[int]:
        return [i for i, tile in enumerate(self.tiles) if tile is None]

    def filled_positions(self) -> List[int]:
        return [i for i, tile in enumerate(self.tiles) if tile is not None]

    def used_tiles(self) -> Set[Tile]:
        return {tile for tile in self.tiles if tile is not None}

    def missing_tiles(self) -> List[Tile]:
        """Oriented tiles of the tileset not yet placed anywhere in the puzzle."""
        used = self.used_tiles()
        return [tile for tile in Tileset(self.n).oriented() if tile not in used]

    def is_empty(self) -> bool:
        return all(tile is None for tile in self.tiles)

    def is_complete(self) -> bool:
        return all(tile is not None for tile in self.tiles)

    def fits(self, position: int, tile: Tile) -> bool:
        """Check `tile` against the filled cyclic neighbours of `position`."""
        left, right = self.neighbours(position)
        if left is not None and not left.connects_to(tile):
            return False
        if right is not None and not tile.connects_to(right):
            return False
        return True

    def __len__(self):
        return len(self.tiles)

    def __getitem__(self, index):
        return self.tiles[index]

    def __setitem__(self, index, value):
        self.tiles[index] = value

    def __iter__(self) -> Iterator[Optional[Tile]]:
        return iter(self.tiles)

    def __eq__(self, other):
        if not isinstance(other, Puzzle):
            return False
        return [t.as_tuple() if t else None for t in self.tiles] == \
            [t.as_tuple() if t else None for t in other.tiles]

    def __repr__(self):
        return "Puzzle(" + ", ".join(repr(t) if t else "_" for t in self.tiles) + ")"


def is_valid_solution(solution: Solution) -> bool:
    """A solution uses every tile of its order once and matches cyclically."""
    try:
        tileset = Tileset(get_n(len(solution)))
    except InvalidLengthError:
        return False
    if any(not isinstance(tile, Tile) for tile in solution):
        return False
    if set(solution) != set(tileset.tiles) or len(set(solution)) != len(solution):
        return False
    for i, tile in enumerate(solution):
        if not tile.connects_to(solution[(i + 1) % len(solution)]):
            return False
    return True


if __name__ == "__main__":
    for order in range(2, 8):
        tileset = Tileset(order)
        print(f"n={order}: {len(tileset)} tiles, sequence length {sequence_length(order)}")
        print("  ", "  ".join(repr(t) for t in tileset))
