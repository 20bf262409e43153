from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from bootcode.errors import DecodeError

ARG_MIN = -(2**31)
ARG_MAX = 2**31 - 1

_SIGNED_INT = re.compile(r"[+-][0-9]+")


class Opcode(str, Enum):
    NOP = "nop"
    ACC = "acc"
    JMP = "jmp"


class Instruction:
    """Base of the three instruction variants; each carries one signed `arg`."""

    opcode: Opcode
    arg: int


@dataclass(frozen=True, slots=True)
class NoOp(Instruction):
    arg: int

    @property
    def opcode(self) -> Opcode:
        return Opcode.NOP


@dataclass(frozen=True, slots=True)
class Accumulate(Instruction):
    arg: int

    @property
    def opcode(self) -> Opcode:
        return Opcode.ACC


@dataclass(frozen=True, slots=True)
class Jump(Instruction):
    arg: int

    @property
    def opcode(self) -> Opcode:
        return Opcode.JMP


_VARIANTS: dict[Opcode, Callable[[int], Instruction]] = {
    Opcode.NOP: NoOp,
    Opcode.ACC: Accumulate,
    Opcode.JMP: Jump,
}


def make_instruction(opcode: Opcode, arg: int) -> Instruction:
    return _VARIANTS[opcode](arg)


def _parse_arg(token: str, *, line_no: int | None) -> int:
    if not _SIGNED_INT.fullmatch(token):
        raise DecodeError(
            f"argument must be a signed integer like +3 or -3, got {token!r}",
            line=line_no,
            token=token,
        )
    value = int(token)
    if not ARG_MIN <= value <= ARG_MAX:
        raise DecodeError(
            f"argument out of 32-bit range: {token!r}", line=line_no, token=token
        )
    return value


def decode_instruction(line: str, *, line_no: int | None = None) -> Instruction:
    chunks = line.split()
    if not chunks:
        raise DecodeError("missing instruction", line=line_no, token="")
    if len(chunks) < 2:
        raise DecodeError(f"missing argument after {chunks[0]!r}", line=line_no, token=chunks[0])
    if len(chunks) > 2:
        raise DecodeError(f"unexpected token {chunks[2]!r}", line=line_no, token=chunks[2])

    mnemonic, arg_token = chunks
    try:
        opcode = Opcode(mnemonic)
    except ValueError:
        raise DecodeError(
            f"invalid instruction: {mnemonic!r}", line=line_no, token=mnemonic
        ) from None
    return make_instruction(opcode, _parse_arg(arg_token, line_no=line_no))


def decode_program(src: str) -> tuple[Instruction, ...]:
    lines = src.splitlines()
    # Trailing blank lines are not part of the program; blank lines inside it are.
    while lines and not lines[-1].strip():
        lines.pop()
    return tuple(
        decode_instruction(line, line_no=i) for i, line in enumerate(lines, start=1)
    )


def encode_instruction(instr: Instruction) -> str:
    return f"{instr.opcode.value} {instr.arg:+d}"


def encode_program(instructions: Iterable[Instruction]) -> str:
    return "".join(encode_instruction(i) + "\n" for i in instructions)
