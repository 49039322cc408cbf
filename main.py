#!/usr/bin/env python3
"""
Domino Sequence Puzzle Toolkit

Generates, solves, validates and classifies cyclic domino-sequence puzzles.
A puzzle is a JSON list of tiles [a,b] with null for hidden positions.

Usage:
    python main.py generate-puzzle -n 4 -c 2
    python main.py solve-puzzle --puzzle '[[0,0],null,null,null,null,null,null,null]'
    python main.py validate-puzzle --puzzle '[...]' --solution '[...]'
    python main.py classify-puzzle --puzzle '[...]'
"""

import argparse
import logging
import random
import sys

from classifier import classify_puzzle
from config import GenerationConfig
from domino_sets import Puzzle
from errors import DominoError
from generator import PuzzleGenerator
from puzzle_io import format_puzzle, format_solution, load_puzzle_file, parse_puzzle, parse_solution
from solver import solve_puzzle
from validator import validate_puzzle

logger = logging.getLogger(__name__)


def _read_puzzle(args) -> Puzzle:
    if args.puzzle_file:
        return load_puzzle_file(args.puzzle_file)
    if args.puzzle is None:
        raise ValueError("Either --puzzle or --puzzle-file is required")
    return parse_puzzle(args.puzzle)


def cmd_generate(args) -> int:
    config = GenerationConfig.from_env()
    if args.timeout is not None:
        config.timeout = args.timeout
    if args.max_restarts is not None:
        config.max_restarts = args.max_restarts
    rng = random.Random(args.seed) if args.seed is not None else random.Random()

    gen = PuzzleGenerator(args.n, config=config, rng=rng)
    puzzle = gen.generate(args.complexity, random_removal=not args.deterministic)
    print(f"Puzzle: {format_puzzle(puzzle)}")
    if args.show_solution:
        print(f"Solution: {format_solution(gen.solution)}")
    logger.info("attempts=%d removals=%d rollbacks=%d reinsertions=%d",
                gen.stats.attempts, gen.stats.removals, gen.stats.rollbacks, gen.stats.reinsertions)
    return 0


def cmd_solve(args) -> int:
    puzzle = _read_puzzle(args)
    if args.ilp:
        from ilp_model import solve_puzzle_ilp
        solution = solve_puzzle_ilp(puzzle)
    else:
        solution = solve_puzzle(puzzle)
    print(f"Solution: {format_solution(solution)}")
    return 0


def cmd_validate(args) -> int:
    puzzle = _read_puzzle(args)
    solution = parse_solution(args.solution)
    if args.ilp:
        from ilp_model import validate_puzzle_ilp
        validate_puzzle_ilp(puzzle, solution)
    else:
        validate_puzzle(puzzle, solution)
    print("Is valid: true")
    return 0


def cmd_classify(args) -> int:
    puzzle = _read_puzzle(args)
    print(f"Classification: {classify_puzzle(puzzle)}")
    return 0


def _add_puzzle_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--puzzle', '-p', help='Puzzle as a JSON list, null for hidden tiles')
    parser.add_argument('--puzzle-file', help='Read the puzzle from a JSON file')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Domino Sequence Puzzle Toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py generate-puzzle -n 4 -c 2 --seed 7
  python main.py solve-puzzle -p '[[0,0],null,null,null,null,null,null,null]'
  python main.py classify-puzzle -p '[[0,0],[0,1],null,[1,2],[2,2],[2,3],[3,3],[3,0]]'
        """
    )
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Log progress (-v info, -vv debug)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    generate = subparsers.add_parser('generate-puzzle', help='Generate a unique puzzle')
    generate.add_argument('-n', type=int, default=6, help='Tileset order (default: 6)')
    generate.add_argument('--complexity', '-c', '--minimum-removals', dest='complexity',
                          type=int, required=True, help='Target complexity class (1-3)')
    generate.add_argument('--deterministic', action='store_true',
                          help='Deterministic traversal and cyclic-scan removals')
    generate.add_argument('--seed', type=int, help='Seed for the random generator')
    generate.add_argument('--timeout', type=float, help='Seconds per attempt before restarting')
    generate.add_argument('--max-restarts', type=int, help='Give up after this many restarts')
    generate.add_argument('--show-solution', action='store_true', help='Also print the solution')
    generate.set_defaults(func=cmd_generate)

    solve = subparsers.add_parser('solve-puzzle', help='Solve a puzzle')
    _add_puzzle_arguments(solve)
    solve.add_argument('--ilp', action='store_true', help='Use the CP-SAT model instead of backtracking')
    solve.set_defaults(func=cmd_solve)

    validate = subparsers.add_parser('validate-puzzle', help='Check a puzzle has a unique solution')
    _add_puzzle_arguments(validate)
    validate.add_argument('--solution', '-s', required=True, help='Reference solution as a JSON list')
    validate.add_argument('--ilp', action='store_true', help='Use the CP-SAT model instead of backtracking')
    validate.set_defaults(func=cmd_validate)

    classify = subparsers.add_parser('classify-puzzle', help='Classify puzzle difficulty')
    _add_puzzle_arguments(classify)
    classify.set_defaults(func=cmd_classify)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except DominoError as e:
        print(f"Error ({e.kind}): {e.message}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
