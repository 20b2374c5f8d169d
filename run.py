"""CLI entrypoint: load or build generation requests, generate puzzles, and report results."""

import argparse
import csv
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from generate import generate_from_request
from src.puzzlegen.difficulty import LEVELS, LOGIC_GRID
from src.puzzlegen.loader import load_requests
from src.puzzlegen.requests import parse_request
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer

REQUEST_SUFFIXES = [".json", ".jsonl", ".parquet", ".csv"]


def _default_seed() -> Optional[int]:
    raw = os.environ.get("PUZZLEGEN_SEED", "").strip()
    return int(raw) if raw else None


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Generate logic grid and number sum puzzles")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=None,
        help="Optional path to a request file or directory of request files",
    )
    parser.add_argument("--game", choices=sorted(LEVELS), default=LOGIC_GRID)
    parser.add_argument("--difficulty", default="easy", help="easy, moderate or hard")
    parser.add_argument("--count", type=int, default=1, help="Puzzles to generate without INPUT")
    parser.add_argument(
        "--seed",
        type=int,
        default=_default_seed(),
        help="Base seed; request i uses seed+i. Defaults to $PUZZLEGEN_SEED.",
    )
    parser.add_argument("--output", type=Path, default=None, help="Optional .json or .csv results path")
    parser.add_argument("--trace", type=Path, default=None, help="Optional trace CSV path (one file per request)")
    return parser.parse_args(argv)


def collect_requests(args) -> List[Dict[str, Any]]:
    if args.input is None:
        return [
            {"id": f"{args.game}-{args.difficulty}-{i + 1}", "game": args.game, "difficulty": args.difficulty}
            for i in range(args.count)
        ]

    if args.input.is_file():
        return load_requests(str(args.input))
    if args.input.is_dir():
        requests = []
        for file_path in sorted(args.input.iterdir()):
            if file_path.suffix in REQUEST_SUFFIXES:
                requests.extend(load_requests(str(file_path)))
        return requests
    raise ValueError(f"Input path {args.input} is neither file nor directory")


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "game", "puzzle", "steps", "unique"])

        for r in results:
            writer.writerow([
                r["id"],
                r["game"],
                json.dumps(r["puzzle"], ensure_ascii=False, separators=(",", ":")),
                r["steps"],
                "" if r["unique"] is None else r["unique"],
            ])


def _trace_path(base: Path, request_id: str) -> Path:
    return base.parent / f"{base.stem}-{request_id}{base.suffix or '.csv'}"


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    results = []

    for index, record in enumerate(collect_requests(args)):
        reset_tracer()
        tracer = get_tracer()
        request_id = str(record.get("id") or f"request-{index + 1}")
        game = str(record.get("game") or "")

        try:
            if args.seed is not None and record.get("seed") is None:
                record = {**record, "seed": args.seed + index}
            request = parse_request({**record, "id": request_id})
            game = request.game
            puzzle = generate_from_request(request, tracer)
            summary = tracer.summary()

            results.append({
                "id": request_id,
                "game": game,
                "puzzle": puzzle,
                # Placements approximate search effort; bookkeeping steps are excluded.
                "steps": summary["num_placements"],
                "unique": puzzle.get("unique"),
            })
        except (ValueError, TypeError) as e:
            print(f"ERROR: Failed to generate request {request_id}: {e}")
            results.append({
                "id": request_id,
                "game": game,
                "puzzle": {},
                "steps": -1,
                "unique": None,
            })

        if args.trace:
            tracer.to_csv(_trace_path(args.trace, request_id))

    if args.output and args.output.suffix == ".json":
        save_json(args.output, results)
    elif args.output:
        write_results_csv(results, args.output)
    else:
        print(results)
    return results


if __name__ == "__main__":
    main()
