import pytest

from domino_sets import Puzzle, Tile
from puzzle_io import format_puzzle, format_solution, load_puzzle_file, parse_puzzle, parse_solution


def test_parse_puzzle():
    puzzle = parse_puzzle("[[0,0],[0,1],null,[1,2],[2,2],[2,3],[3,3],[3,0]]")
    assert len(puzzle) == 8
    assert puzzle[2] is None
    assert puzzle[1].as_tuple() == (0, 1)
    assert puzzle[7].as_tuple() == (3, 0)


def test_format_is_compact(solution_n3):
    puzzle = Puzzle.from_solution(solution_n3)
    puzzle[2] = None
    assert format_puzzle(puzzle) == "[[0,0],[0,1],null,[1,2],[2,2],[2,3],[3,3],[3,0]]"
    assert format_solution(solution_n3) == "[[0,0],[0,1],[1,1],[1,2],[2,2],[2,3],[3,3],[3,0]]"


def test_orientation_survives_formatting():
    text = "[[1,0],null]"
    assert format_puzzle(parse_puzzle(text)) == text


def test_parse_solution():
    solution = parse_solution("[[2,1],[1,1]]")
    assert [t.as_tuple() for t in solution] == [(2, 1), (1, 1)]


@pytest.mark.parametrize("text", [
    "[[0,1],",
    '{"tiles": []}',
    "[[0]]",
    "[[0,1,2]]",
    "[[-1,0]]",
    "[[true,0]]",
    '[["0",1]]',
    "[0]",
])
def test_malformed_puzzles(text):
    with pytest.raises(ValueError):
        parse_puzzle(text)


def test_solution_rejects_null():
    with pytest.raises(ValueError):
        parse_solution("[[0,0],null]")


def test_load_puzzle_file(tmp_path):
    path = tmp_path / "puzzle.json"
    path.write_text("[[0,0],null,null,null,null,null,null,null]")
    puzzle = load_puzzle_file(str(path))
    assert puzzle[0] == Tile(0, 0)
    assert puzzle.empty_positions() == list(range(1, 8))
