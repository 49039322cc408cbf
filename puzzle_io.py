"""
JSON text encoding for puzzles and solutions.

A puzzle is a list whose elements are either [a, b] (a placed tile) or
null (a hidden position), e.g. [[0,1],[1,1],null,[1,0]].
A solution is the same list without nulls.
"""
import json
from typing import Any, List, Optional

from domino_sets import Puzzle, Solution, Tile


def _parse_tile(entry: Any, index: int) -> Tile:
    if (
        not isinstance(entry, list)
        or len(entry) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) and v >= 0 for v in entry)
    ):
        raise ValueError(f"Element {index} is not a tile [a, b]: {entry!r}")
    return Tile(entry[0], entry[1])


def _load_list(text: str) -> List[Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed JSON: {e}") from e
    if not isinstance(data, list):
        raise ValueError("Expected a JSON list of tiles")
    return data


def parse_puzzle(text: str) -> Puzzle:
    """Parse a JSON puzzle string; null marks a hidden position."""
    tiles: List[Optional[Tile]] = []
    for i, entry in enumerate(_load_list(text)):
        if entry is None:
            tiles.append(None)
        else:
            tiles.append(_parse_tile(entry, i))
    return Puzzle(tiles)


def parse_solution(text: str) -> Solution:
    """Parse a JSON solution string; nulls are not allowed."""
    return [_parse_tile(entry, i) for i, entry in enumerate(_load_list(text))]


def format_puzzle(puzzle: Puzzle) -> str:
    return json.dumps(
        [list(tile.as_tuple()) if tile is not None else None for tile in puzzle],
        separators=(",", ":"),
    )


def format_solution(solution: Solution) -> str:
    return json.dumps([list(tile.as_tuple()) for tile in solution], separators=(",", ":"))


def load_puzzle_file(filepath: str) -> Puzzle:
    """Read a puzzle from a JSON file."""
    with open(filepath, 'r') as f:
        return parse_puzzle(f.read())
