from __future__ import annotations

from bootcode.errors import NoLoopFound
from bootcode.program import CompletionState, Program
from bootcode.repair import RepairResult, find_repair


def find_loop_accumulator(src: str) -> int:
    program = Program.from_source(src)
    if program.run() is not CompletionState.LOOP:
        raise NoLoopFound("no loop found in program")
    return program.accumulator


def repair_source(src: str, *, concurrency: int = 1) -> RepairResult:
    return find_repair(Program.from_source(src), concurrency=concurrency)


def repair_accumulator(src: str, *, concurrency: int = 1) -> int:
    return repair_source(src, concurrency=concurrency).accumulator
