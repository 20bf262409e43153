from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from bootcode.instructions import Accumulate, Instruction, Jump, NoOp, decode_program


class CompletionState(str, Enum):
    LOOP = "loop"
    OUT_OF_BOUNDS = "out_of_bounds"
    FINISHED = "finished"


@dataclass(slots=True)
class RunState:
    accumulator: int = 0
    pointer: int = 0
    visited: set[int] = field(default_factory=set)


class Program:
    """Immutable instruction text with a separately owned, mutable run-state.

    `run()` consumes the run-state; call `reset()` or `fresh()` before running
    the same text again.
    """

    __slots__ = ("_instructions", "_state")

    def __init__(self, instructions: Iterable[Instruction]) -> None:
        self._instructions: tuple[Instruction, ...] = tuple(instructions)
        self._state = RunState()

    @classmethod
    def from_source(cls, src: str) -> Program:
        return cls(decode_program(src))

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return self._instructions

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def accumulator(self) -> int:
        return self._state.accumulator

    @property
    def pointer(self) -> int:
        return self._state.pointer

    def __len__(self) -> int:
        return len(self._instructions)

    def __repr__(self) -> str:
        return (
            f"Program(len={len(self)}, accumulator={self.accumulator}, "
            f"pointer={self.pointer})"
        )

    def reset(self) -> None:
        self._state = RunState()

    def fresh(self) -> Program:
        # The tuple is immutable, so sharing it between copies is safe.
        return Program(self._instructions)

    def current_instruction(self) -> Instruction | None:
        pc = self._state.pointer
        if 0 <= pc < len(self._instructions):
            return self._instructions[pc]
        return None

    def step(self) -> int | None:
        instr = self.current_instruction()
        if instr is None:
            return None

        state = self._state
        address = state.pointer
        if isinstance(instr, Accumulate):
            state.accumulator += instr.arg
            state.pointer += 1
        elif isinstance(instr, Jump):
            state.pointer += instr.arg
        elif isinstance(instr, NoOp):
            state.pointer += 1
        else:
            raise TypeError(f"unknown instruction: {type(instr).__name__}")
        return address

    def completion(self) -> CompletionState:
        """Classify a pointer that no longer addresses an instruction."""
        if self._state.pointer == len(self._instructions):
            return CompletionState.FINISHED
        return CompletionState.OUT_OF_BOUNDS

    def run(self) -> CompletionState:
        # Revisiting an address means an infinite loop only because no
        # instruction's effect depends on the accumulator value.
        visited = self._state.visited
        while True:
            address = self._state.pointer
            if address in visited:
                return CompletionState.LOOP
            if self.step() is None:
                return self.completion()
            visited.add(address)

    def with_mutated_instruction(self, index: int) -> Program | None:
        if not 0 <= index < len(self._instructions):
            return None

        instr = self._instructions[index]
        if isinstance(instr, NoOp):
            flipped: Instruction = Jump(instr.arg)
        elif isinstance(instr, Jump):
            flipped = NoOp(instr.arg)
        else:
            return None

        mutated = list(self._instructions)
        mutated[index] = flipped
        return Program(mutated)
