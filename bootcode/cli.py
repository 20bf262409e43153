from __future__ import annotations

import argparse
import json
from pathlib import Path

import yaml

from bootcode.api import find_loop_accumulator, repair_source
from bootcode.config import load_settings
from bootcode.errors import BootcodeError
from bootcode.manifest import expectation_failures, load_manifest, run_job, run_query
from bootcode.program import Program
from bootcode.schemas import Query
from bootcode.trace import trace_run, write_trace_jsonl


def _existing_path(value: str) -> Path:
    p = Path(value)
    if not p.exists():
        raise argparse.ArgumentTypeError(f"path not found: {value}")
    return p


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1: {value}")
    return n


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _read_or_exit(path: Path) -> str:
    try:
        return _read(path)
    except (OSError, UnicodeDecodeError) as e:
        raise SystemExit(f"error: cannot read {path}: {e}") from None


def _print_part(part: int, query: Query, src: str, *, concurrency: int) -> None:
    print(f"  Part {part}:")
    report = run_query(query, src, concurrency=concurrency)
    if report.ok:
        print(f"    Output: {report.output}")
    else:
        print(f"    Error: {report.error}")


def _cmd_single(args: argparse.Namespace, query: Query, *, concurrency: int) -> int:
    src = _read_or_exit(args.file)
    if args.json:
        report = run_query(query, src, concurrency=concurrency)
        print(report.model_dump_json())
        return 0 if report.ok else 1

    try:
        if query is Query.LOOP:
            print(find_loop_accumulator(src))
        else:
            print(repair_source(src, concurrency=concurrency).accumulator)
    except BootcodeError as e:
        raise SystemExit(f"error: {e}") from None
    return 0


def _cmd_trace(args: argparse.Namespace) -> int:
    try:
        program = Program.from_source(_read_or_exit(args.file))
    except BootcodeError as e:
        raise SystemExit(f"error: {e}") from None

    steps, outcome = trace_run(program)
    if args.out is not None:
        n = write_trace_jsonl(args.out, steps)
        print(f"Wrote {n} steps to {args.out}")
    else:
        for step in steps:
            print(f"{step.address:>5}  {step.opcode.value} {step.arg:+d}  acc={step.accumulator}")
    print(f"Completion: {outcome.value} (accumulator={program.accumulator})")
    return 0


def _cmd_solve(
    args: argparse.Namespace, *, input_dir: Path, input_name: str, concurrency: int
) -> int:
    day = input_name.removeprefix("day") or input_name
    print(f"Day: {day}")

    path = (args.input_dir or input_dir) / input_name
    try:
        src = _read(path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error opening input file {path}: {e}")
        return 1

    _print_part(1, Query.LOOP, src, concurrency=concurrency)
    _print_part(2, Query.REPAIR, src, concurrency=concurrency)
    return 0


def _cmd_batch(args: argparse.Namespace, *, concurrency: int) -> int:
    try:
        jobs = load_manifest(args.manifest)
    except (ValueError, yaml.YAMLError) as e:
        raise SystemExit(f"invalid manifest: {e}") from None

    failed = 0
    for job in jobs:
        try:
            reports = run_job(job, concurrency=concurrency)
        except (OSError, UnicodeDecodeError) as e:
            reports = []
            failures = [f"cannot read {job.path}: {e}"]
        else:
            failures = expectation_failures(job, reports)
        failed += len(failures)
        if args.json:
            print(
                json.dumps(
                    {
                        "id": job.id,
                        "reports": [r.model_dump(mode="json") for r in reports],
                        "failures": failures,
                    }
                )
            )
            continue
        for report in reports:
            if report.ok:
                print(f"{job.id} {report.query.value}: {report.output}")
            else:
                print(f"{job.id} {report.query.value}: error: {report.error}")
        for failure in failures:
            print(f"{job.id} FAILED {failure}")
    return 1 if failed else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="bootcode")
    sub = parser.add_subparsers(dest="cmd", required=True)

    loop_p = sub.add_parser("loop", help="accumulator value when the first loop is detected")
    loop_p.add_argument("file", type=_existing_path)
    loop_p.add_argument("--json", action="store_true")

    repair_p = sub.add_parser("repair", help="accumulator of the first single-flip repair")
    repair_p.add_argument("file", type=_existing_path)
    repair_p.add_argument("--concurrency", type=_positive_int, default=None)
    repair_p.add_argument("--json", action="store_true")

    trace_p = sub.add_parser("trace", help="list executed instructions up to completion")
    trace_p.add_argument("file", type=_existing_path)
    trace_p.add_argument("--out", type=Path, default=None, help="write steps as JSONL")

    solve_p = sub.add_parser("solve", help="run both queries against the configured input")
    solve_p.add_argument("input_dir", nargs="?", type=Path, default=None)
    solve_p.add_argument("--concurrency", type=_positive_int, default=None)

    batch_p = sub.add_parser("batch", help="run every job of a YAML manifest")
    batch_p.add_argument("manifest", type=_existing_path)
    batch_p.add_argument("--concurrency", type=_positive_int, default=None)
    batch_p.add_argument("--json", action="store_true")

    args = parser.parse_args(argv)

    if args.cmd == "loop":
        return _cmd_single(args, Query.LOOP, concurrency=1)

    if args.cmd == "trace":
        return _cmd_trace(args)

    try:
        settings = load_settings(concurrency=args.concurrency)
    except ValueError as e:
        raise SystemExit(f"invalid configuration: {e}") from None
    concurrency = settings.concurrency

    if args.cmd == "repair":
        return _cmd_single(args, Query.REPAIR, concurrency=concurrency)

    if args.cmd == "solve":
        return _cmd_solve(
            args,
            input_dir=settings.input_dir,
            input_name=settings.input_name,
            concurrency=concurrency,
        )

    if args.cmd == "batch":
        return _cmd_batch(args, concurrency=concurrency)

    raise AssertionError(f"unhandled cmd: {args.cmd}")
