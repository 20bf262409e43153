from __future__ import annotations

import pytest

from bootcode.errors import DecodeError
from bootcode.instructions import (
    Accumulate,
    Jump,
    NoOp,
    Opcode,
    decode_instruction,
    decode_program,
    encode_instruction,
    encode_program,
)


def test_decode_instruction_variants() -> None:
    assert decode_instruction("nop +0") == NoOp(0)
    assert decode_instruction("acc +1") == Accumulate(1)
    assert decode_instruction("acc +7") == Accumulate(7)
    assert decode_instruction("acc -99") == Accumulate(-99)
    assert decode_instruction("jmp +4") == Jump(4)
    assert decode_instruction("jmp -3") == Jump(-3)


def test_variants_with_same_arg_are_distinct() -> None:
    assert NoOp(3) != Jump(3)
    assert NoOp(3).opcode is Opcode.NOP
    assert Accumulate(3).opcode is Opcode.ACC
    assert Jump(3).opcode is Opcode.JMP


def test_decode_tolerates_extra_whitespace() -> None:
    assert decode_instruction("  jmp\t-3 ") == Jump(-3)


@pytest.mark.parametrize(
    ("line", "fragment"),
    [
        ("", "missing instruction"),
        ("nop", "missing argument"),
        ("mul +2", "invalid instruction"),
        ("acc 5", "signed integer"),
        ("acc +x", "signed integer"),
        ("acc +1.5", "signed integer"),
        ("acc +1 +2", "unexpected token"),
        ("acc +2147483648", "32-bit"),
    ],
)
def test_decode_instruction_rejects_malformed(line: str, fragment: str) -> None:
    with pytest.raises(DecodeError, match=fragment):
        decode_instruction(line)


def test_decode_accepts_32_bit_bounds() -> None:
    assert decode_instruction("acc -2147483648") == Accumulate(-(2**31))
    assert decode_instruction("jmp +2147483647") == Jump(2**31 - 1)


def test_decode_program_preserves_order(sample_source: str) -> None:
    assert decode_program(sample_source) == (
        NoOp(0),
        Accumulate(1),
        Jump(4),
        Accumulate(3),
        Jump(-3),
        Accumulate(-99),
        Accumulate(1),
        Jump(-4),
        Accumulate(6),
    )


def test_decode_program_ignores_trailing_blank_lines() -> None:
    assert decode_program("acc +1\njmp -1\n\n\n") == (Accumulate(1), Jump(-1))
    assert decode_program("") == ()


def test_decode_program_fails_whole_program_with_line_number() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_program("nop +0\nacc +1\nbad +2\nacc +3\n")
    assert exc.value.line == 3
    assert exc.value.token == "bad"
    assert str(exc.value).startswith("line 3: ")


def test_blank_line_inside_program_is_an_error() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_program("nop +0\n\nacc +1\n")
    assert exc.value.line == 2


def test_decode_is_left_inverse_of_encode(sample_source: str) -> None:
    assert encode_instruction(Accumulate(7)) == "acc +7"
    assert encode_instruction(Jump(-3)) == "jmp -3"
    assert encode_instruction(NoOp(0)) == "nop +0"
    program = decode_program(sample_source)
    assert encode_program(program) == sample_source
    assert decode_program(encode_program(program)) == program
