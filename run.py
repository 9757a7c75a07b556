"""CLI entrypoint: solve Tango puzzles from files, or generate new ones."""

import argparse
import csv
import json
import random
from pathlib import Path

from solver import solve_puzzle, SolveResult
from src.tango.generator import generate, parse_difficulty
from src.tango.history import SolveHistory
from src.tango.loader import load_puzzles
from src.tango.model import Difficulty
from src.tango.parser import format_grid, grid_to_dict
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

PUZZLE_SUFFIXES = [".json", ".jsonl", ".parquet", ".csv"]


def parse_args():
    parser = argparse.ArgumentParser(description="Solve or generate 6x6 Tango puzzles")
    commands = parser.add_subparsers(dest="command", required=True)

    solve_cmd = commands.add_parser("solve", help="Solve puzzle(s) from a file or directory")
    solve_cmd.add_argument("input", type=Path, help="Path to puzzle file or directory of puzzles")
    solve_cmd.add_argument("--output", type=Path, default=None, help="Optional path to write solutions as CSV")
    solve_cmd.add_argument(
        "--history",
        type=Path,
        default=None,
        help="Optional JSON file; solved boards are prepended to it (last 50 kept).",
    )
    solve_cmd.add_argument(
        "--trace",
        type=Path,
        default=None,
        help="Optional CSV path for the search trace of the last puzzle solved.",
    )
    solve_cmd.add_argument(
        "--include-status",
        action="store_true",
        help="Include a 'status' field in grid_solution.",
    )

    gen_cmd = commands.add_parser("generate", help="Generate random puzzles")
    gen_cmd.add_argument(
        "--difficulty",
        type=str.capitalize,
        choices=[d.value for d in Difficulty],
        default=Difficulty.MEDIUM.value,
        help="Easy, Medium or Hard",
    )
    gen_cmd.add_argument("--count", type=int, default=1, help="Number of puzzles to generate")
    gen_cmd.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    gen_cmd.add_argument("--output", type=Path, default=None, help="Optional JSON path for the puzzles")
    return parser.parse_args()


def format_solution(result: SolveResult, *, include_status: bool = False) -> dict:
    grid = grid_to_dict(result.grid) if result.solved and result.grid else {}
    if include_status:
        status = "solved" if result.solved else "unsolved"
        return {"status": status, **grid}
    return grid


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "grid_solution", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                json.dumps(r["grid_solution"], ensure_ascii=False, separators=(",", ":")),
                r["steps"]
            ])


def _collect_puzzles(input_path: Path):
    puzzles = []
    if input_path.is_file():
        puzzles = load_puzzles(str(input_path))
    elif input_path.is_dir():
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
    else:
        raise ValueError(f"Input path {input_path} is neither file nor directory")
    return puzzles


def run_solve(args):
    results = []
    history = SolveHistory(args.history) if args.history else None
    tracer = None

    for puzzle in _collect_puzzles(args.input):
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = puzzle.get("id", "unknown")

        try:
            result = solve_puzzle(puzzle)
            if result.solved:
                print(f"{puzzle_id}: solved in {result.duration_ms:.2f} ms")
                print(format_grid(result.grid))
                if history is not None:
                    history.add(result.grid, result.duration_ms)
            else:
                print(f"{puzzle_id}: {result.error}")

            summary = tracer.summary()
            results.append({
                "id": puzzle_id,
                "grid_solution": format_solution(result, include_status=args.include_status),
                "steps": summary["num_assignments"],
            })
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "grid_solution": {},
                "steps": -1
            })

    if args.trace and tracer is not None:
        tracer.to_csv(args.trace)

    if args.output:
        write_results_csv(results, args.output)
    else:
        print(results)
    return results


def run_generate(args):
    difficulty = parse_difficulty(args.difficulty)
    rng = random.Random(args.seed)
    puzzles = []
    for i in range(1, args.count + 1):
        puzzle = generate(difficulty, rng=rng)
        puzzles.append({
            "id": f"{difficulty.value.lower()}-{i}",
            "difficulty": difficulty.value,
            "grid": grid_to_dict(puzzle),
        })
        if not args.output:
            print(f"# {difficulty.value} #{i}")
            print(format_grid(puzzle))
            print()

    if args.output:
        save_json(args.output, puzzles)
        print(f"Wrote {len(puzzles)} puzzle(s) to {args.output}")
    return puzzles


def main():
    args = parse_args()
    if args.command == "generate":
        return run_generate(args)
    return run_solve(args)


if __name__ == "__main__":
    main()
