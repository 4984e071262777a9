"""
Program decoder: turns a line-oriented listing into a Program.

Grammar, one instruction per line, whitespace separated:

    push <x|y|z|integer>     axis names are case-insensitive
    add
    jmpos <integer>
    ret

Opcodes are case-sensitive. There is no blank-line or comment syntax.
Any malformed line aborts the whole load with DecodeError.
"""

import logging
import re
from pathlib import Path
from typing import Union

from cloudvm.errors import DecodeError
from cloudvm.exec_types import (
    Axis, Instruction, MNEMONIC_TO_OPCODE, OpCode, Operand, Program,
)

logger = logging.getLogger('cloudvm.decoder')

_INT_RE = re.compile(r'[+-]?[0-9]+')
_AXES = {axis.value: axis for axis in Axis}

# Literals and offsets are signed 32-bit
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


def _parse_int(token: str, what: str, source: str, line_number: int, line: str) -> int:
    # int() alone would also accept '1_000', non-ASCII digits and surrounding whitespace
    if not _INT_RE.fullmatch(token):
        raise DecodeError(f"{what} is not an integer: {token!r}", source, line_number, line)
    value = int(token)
    if not INT_MIN <= value <= INT_MAX:
        raise DecodeError(f"{what} out of 32-bit range: {token}", source, line_number, line)
    return value


def decode_instruction(line: str, line_number: int = 0, source: str = "<string>") -> Instruction:
    """
    Decode one listing line into an Instruction.

    Args:
        line: Text of the line (without its newline)
        line_number: 1-based position in the listing, for diagnostics
        source: Name of the listing, for diagnostics

    Returns:
        The decoded Instruction

    Raises:
        DecodeError: Unknown opcode, missing operand or bad integer
    """
    tokens = line.split()
    if not tokens:
        raise DecodeError("empty line", source, line_number, line)

    mnemonic = tokens[0]
    opcode = MNEMONIC_TO_OPCODE.get(mnemonic)
    if opcode is None:
        raise DecodeError(f"Unrecognised instruction: {mnemonic}", source, line_number, line)

    if opcode is OpCode.PUSH:
        if len(tokens) < 2:
            raise DecodeError("push expects an operand", source, line_number, line)
        token = tokens[1]
        axis = _AXES.get(token.lower())
        if axis is not None:
            operand = Operand.of_axis(axis)
        else:
            operand = Operand.literal(_parse_int(token, "push operand", source, line_number, line))
        return Instruction.push(operand, line=line_number)

    if opcode is OpCode.JMPOS:
        if len(tokens) < 2:
            raise DecodeError("jmpos expects an offset", source, line_number, line)
        offset = _parse_int(tokens[1], "jmpos offset", source, line_number, line)
        return Instruction.jmpos(offset, line=line_number)

    if opcode is OpCode.ADD:
        return Instruction.add(line=line_number)
    return Instruction.ret(line=line_number)


def decode_program(text: str, source: str = "<string>") -> Program:
    """Decode a full listing. Nothing is returned unless every line decodes."""
    instructions = [
        decode_instruction(line, line_number, source)
        for line_number, line in enumerate(text.splitlines(), 1)
    ]
    logger.debug(f"Decoded {len(instructions)} instructions from {source}")
    return Program(tuple(instructions), source=source)


def load_program(path: Union[str, Path]) -> Program:
    """Read and decode a listing from disk."""
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()
    program = decode_program(text, source=str(path))
    logger.info(f"Loaded program {path} ({len(program)} instructions)")
    return program


def format_instruction(inst: Instruction) -> str:
    """Canonical listing form of an instruction; decodes back to an equal one."""
    return str(inst)


def format_program(program: Program) -> str:
    """Listing text for a whole program, one instruction per line."""
    return "\n".join(format_instruction(inst) for inst in program) + "\n"
