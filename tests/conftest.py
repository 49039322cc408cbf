import pytest

from domino_sets import Tile


@pytest.fixture
def solution_n3():
    """The domino loop of order 3; the deterministic circuit yields exactly this."""
    return [
        Tile(0, 0), Tile(0, 1), Tile(1, 1), Tile(1, 2),
        Tile(2, 2), Tile(2, 3), Tile(3, 3), Tile(3, 0),
    ]


@pytest.fixture
def reversed_n3():
    """The same loop walked the other way, starting from the same double."""
    return [
        Tile(0, 0), Tile(0, 3), Tile(3, 3), Tile(3, 2),
        Tile(2, 2), Tile(2, 1), Tile(1, 1), Tile(1, 0),
    ]
