from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from bootcode.program import CompletionState, Program
from bootcode.schemas import TraceStep


def trace_run(program: Program) -> tuple[list[TraceStep], CompletionState]:
    """Run `program` with loop detection, recording every executed instruction."""
    steps: list[TraceStep] = []
    visited = program.state.visited
    while True:
        address = program.pointer
        if address in visited:
            return steps, CompletionState.LOOP
        instr = program.current_instruction()
        if instr is None:
            return steps, program.completion()
        program.step()
        visited.add(address)
        steps.append(
            TraceStep(
                step=len(steps),
                address=address,
                opcode=instr.opcode,
                arg=instr.arg,
                accumulator=program.accumulator,
                pointer=program.pointer,
            )
        )


def write_trace_jsonl(path: Path, steps: Iterable[TraceStep]) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", encoding="utf-8") as f:
        for step in steps:
            f.write(json.dumps(step.model_dump(mode="json"), sort_keys=True, separators=(",", ":")))
            f.write("\n")
            count += 1
    return count
