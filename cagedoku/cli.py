"""Command-line interface for the puzzle generator and solver."""

import argparse
import logging
import sys

from tqdm import tqdm

from .core.checker import find_conflict
from .core.errors import SearchLimitExceeded
from .core.grid import Grid, Coords
from .generator import PuzzleGenerator, PuzzleKind, GeneratorSettings
from .solvers import BacktrackingSolver, SearchLimits


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Classic & Cage Sudoku Generator and Solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 3 cage puzzles
  cagedoku generate --kind cages --count 3

  # Solve a puzzle, listing up to 2 solutions
  cagedoku solve --puzzle "530070000600195000..." --limit 2

  # Check whether 4 fits at column 2, row 0
  cagedoku check --puzzle "530070000600195000..." --cell 2,0 --digit 4
        """
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log generation progress"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate puzzles")
    gen_parser.add_argument(
        "--kind", "-k",
        choices=[k.value for k in PuzzleKind],
        default="classic",
        help="Puzzle kind (default: classic)"
    )
    gen_parser.add_argument(
        "--count", "-n", type=int, default=1,
        help="Number of puzzles to generate (default: 1)"
    )
    gen_parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducibility"
    )
    gen_parser.add_argument(
        "--max-nodes", type=int, default=None,
        help="Node cap for each uniqueness check"
    )
    gen_parser.add_argument(
        "--time-limit", type=float, default=None,
        help="Seconds allowed for each generation retry loop"
    )

    # Solve command
    solve_parser = subparsers.add_parser("solve", help="Solve a classic puzzle")
    solve_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    solve_parser.add_argument(
        "--limit", "-l", type=int, default=1,
        help="Maximum number of solutions to list (default: 1)"
    )
    solve_parser.add_argument(
        "--max-nodes", type=int, default=None,
        help="Give up after exploring this many nodes"
    )

    # Check command
    check_parser = subparsers.add_parser("check", help="Check a single placement")
    check_parser.add_argument(
        "--puzzle", "-p", type=str, required=True,
        help="Puzzle string (81 chars, 0 or . for empty cells)"
    )
    check_parser.add_argument(
        "--cell", "-c", type=_parse_cell, required=True,
        help="Target cell as X,Y (column, row; 0-based)"
    )
    check_parser.add_argument(
        "--digit", "-d", type=int, choices=range(1, 10), required=True,
        help="Candidate digit"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "generate":
        cmd_generate(args)
    elif args.command == "solve":
        cmd_solve(args)
    elif args.command == "check":
        cmd_check(args)


def _parse_cell(text: str) -> Coords:
    try:
        x, y = (int(part) for part in text.split(","))
        return Coords(x, y).check()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid cell {text!r}: expected X,Y in 0-8") from e


def _load_puzzle(text: str) -> Grid:
    try:
        return Grid.from_string(text)
    except ValueError as e:
        print(f"Error parsing puzzle: {e}")
        sys.exit(1)


def cmd_generate(args):
    """Handle the generate command."""
    settings = GeneratorSettings(
        search_limits=SearchLimits(max_nodes=args.max_nodes),
        time_limit=args.time_limit,
    )
    generator = PuzzleGenerator(seed=args.seed, settings=settings)
    kind = PuzzleKind(args.kind)

    puzzles = [generator.generate(kind) for _ in tqdm(range(args.count), desc=f"Generating {kind.value}")]

    for i, puzzle in enumerate(puzzles, 1):
        if puzzle.regions is None:
            print(f"\n--- Classic Puzzle {i} ({puzzle.grid.count_filled()} clues) ---")
            print(puzzle.grid)
        else:
            print(f"\n--- Cage Puzzle {i} ({len(puzzle.regions)} cages) ---")
            print(puzzle.regions.describe())

    print(f"\nTotal puzzles generated: {len(puzzles)}")


def cmd_solve(args):
    """Handle the solve command."""
    grid = _load_puzzle(args.puzzle)

    print("Input puzzle:")
    print(grid)
    print()

    solver = BacktrackingSolver(SearchLimits(max_nodes=args.max_nodes))
    try:
        solutions = solver.find_solutions(grid, None, args.limit)
    except SearchLimitExceeded as e:
        print(f"✗ Gave up: {e}")
        sys.exit(2)

    stats = solver.stats
    if not solutions:
        print(f"✗ No solution ({stats.nodes_explored:,} nodes, {stats.time_seconds:.4f}s)")
        sys.exit(2)

    print(f"✓ Found {len(solutions)} solution(s) in {stats.time_seconds:.4f}s "
          f"({stats.nodes_explored:,} nodes, {stats.backtracks:,} backtracks)")
    for solution in solutions:
        print(solution)


def cmd_check(args):
    """Handle the check command."""
    grid = _load_puzzle(args.puzzle)
    conflict = find_conflict(grid, None, args.cell, args.digit)
    if conflict is None:
        print("legal")
    else:
        print(f"conflict at {conflict.x},{conflict.y}")


if __name__ == "__main__":
    main()
