from __future__ import annotations

import json
from pathlib import Path

from bootcode.instructions import Opcode
from bootcode.program import CompletionState, Program
from bootcode.trace import trace_run, write_trace_jsonl


def test_trace_run_records_steps_until_loop(sample_source: str) -> None:
    program = Program.from_source(sample_source)
    steps, outcome = trace_run(program)
    assert outcome is CompletionState.LOOP
    assert [s.address for s in steps] == [0, 1, 2, 6, 7, 3, 4]
    assert [s.step for s in steps] == list(range(7))
    last = steps[-1]
    assert (last.opcode, last.arg) == (Opcode.JMP, -3)
    assert (last.accumulator, last.pointer) == (5, 1)
    assert program.accumulator == 5


def test_trace_run_matches_run(sample_source: str) -> None:
    variant = Program.from_source(sample_source).with_mutated_instruction(7)
    assert variant is not None
    steps, outcome = trace_run(variant.fresh())
    assert outcome is variant.run()
    assert outcome is CompletionState.FINISHED
    assert steps[-1].accumulator == variant.accumulator == 8


def test_write_trace_jsonl(tmp_path: Path, sample_source: str) -> None:
    steps, _ = trace_run(Program.from_source(sample_source))
    out = tmp_path / "nested" / "trace.jsonl"
    assert write_trace_jsonl(out, steps) == len(steps)

    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 7
    first = json.loads(lines[0])
    assert first == {
        "accumulator": 0,
        "address": 0,
        "arg": 0,
        "opcode": "nop",
        "pointer": 1,
        "step": 0,
    }
