from __future__ import annotations

from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from bootcode.errors import NoRepairFound
from bootcode.program import CompletionState, Program


@dataclass(frozen=True, slots=True)
class RepairResult:
    index: int
    accumulator: int
    program: Program


def iter_candidates(program: Program) -> Iterator[tuple[int, Program]]:
    """Yield `(index, variant)` for every flippable instruction, lowest index first."""
    for index in range(len(program)):
        variant = program.with_mutated_instruction(index)
        if variant is not None:
            yield index, variant


def _evaluate(candidate: tuple[int, Program]) -> tuple[int, Program, CompletionState]:
    index, variant = candidate
    return index, variant, variant.run()


def find_repair(program: Program, *, concurrency: int = 1) -> RepairResult:
    """Return the lowest-index single flip whose run reaches FINISHED.

    Each variant owns its run-state, so candidates may be evaluated on a thread
    pool; results are still consumed in index order.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")

    candidates = iter_candidates(program)
    if concurrency == 1:
        for candidate in candidates:
            index, variant, outcome = _evaluate(candidate)
            if outcome is CompletionState.FINISHED:
                return RepairResult(index=index, accumulator=variant.accumulator, program=variant)
    else:
        with ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="repair") as pool:
            for index, variant, outcome in pool.map(_evaluate, candidates):
                if outcome is CompletionState.FINISHED:
                    return RepairResult(
                        index=index, accumulator=variant.accumulator, program=variant
                    )

    raise NoRepairFound("no correct variant found")
