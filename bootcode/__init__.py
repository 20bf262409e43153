from __future__ import annotations

from bootcode.api import find_loop_accumulator, repair_accumulator, repair_source
from bootcode.errors import BootcodeError, DecodeError, NoLoopFound, NoRepairFound
from bootcode.instructions import (
    Accumulate,
    Instruction,
    Jump,
    NoOp,
    Opcode,
    decode_instruction,
    decode_program,
    encode_instruction,
    encode_program,
)
from bootcode.program import CompletionState, Program, RunState
from bootcode.repair import RepairResult, find_repair, iter_candidates

__all__ = [
    "__version__",
    # Queries
    "find_loop_accumulator",
    "repair_accumulator",
    "repair_source",
    # Errors
    "BootcodeError",
    "DecodeError",
    "NoLoopFound",
    "NoRepairFound",
    # Instructions
    "Instruction",
    "NoOp",
    "Accumulate",
    "Jump",
    "Opcode",
    "decode_instruction",
    "decode_program",
    "encode_instruction",
    "encode_program",
    # Interpreter
    "Program",
    "RunState",
    "CompletionState",
    # Repair
    "RepairResult",
    "find_repair",
    "iter_candidates",
]

__version__ = "0.1.0"
