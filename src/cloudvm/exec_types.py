"""
cloudvm Bytecode Types

Defines the instruction set executed by the stack machine and the
container for a decoded program.

Instruction set:
    - push <x|y|z|int>: push an axis coordinate or a literal
    - add:              pop two values, push their sum
    - jmpos <int>:      pop one value, skip <int> further instructions if it is >= 0
    - ret:              pop one value and return it
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple


# =============================================================================
# Opcode Definitions
# =============================================================================

class OpCode(IntEnum):
    """cloudvm opcodes."""
    PUSH = 0x01
    ADD = 0x02
    JMPOS = 0x03       # Relative jump if popped value >= 0
    RET = 0x04

    @property
    def mnemonic(self) -> str:
        return self.name.lower()


MNEMONIC_TO_OPCODE = {op.mnemonic: op for op in OpCode}


class Axis(Enum):
    """Coordinate axis an operand can read from the evaluation point."""
    X = "x"
    Y = "y"
    Z = "z"


# =============================================================================
# Operands and Instructions
# =============================================================================

@dataclass(frozen=True)
class Operand:
    """Value pushed by a PUSH instruction: an axis reference or a literal."""
    axis: Optional[Axis] = None
    value: int = 0

    @classmethod
    def of_axis(cls, axis: Axis) -> 'Operand':
        return cls(axis=axis)

    @classmethod
    def literal(cls, value: int) -> 'Operand':
        return cls(axis=None, value=value)

    @property
    def is_literal(self) -> bool:
        return self.axis is None

    def resolve(self, point) -> int:
        """Value of this operand at the given point."""
        if self.axis is Axis.X:
            return point.x
        if self.axis is Axis.Y:
            return point.y
        if self.axis is Axis.Z:
            return point.z
        return self.value

    def __str__(self) -> str:
        return self.axis.value if self.axis is not None else str(self.value)


@dataclass(frozen=True)
class Instruction:
    """
    A single decoded instruction.

    Attributes:
        opcode: Operation to perform
        operand: Pushed value (PUSH only)
        offset: Relative jump distance (JMPOS only)
        line: 1-based listing line this came from, 0 if built in code
    """
    opcode: OpCode
    operand: Optional[Operand] = None
    offset: int = 0
    line: int = field(default=0, compare=False)

    @classmethod
    def push(cls, operand: Operand, line: int = 0) -> 'Instruction':
        return cls(OpCode.PUSH, operand=operand, line=line)

    @classmethod
    def add(cls, line: int = 0) -> 'Instruction':
        return cls(OpCode.ADD, line=line)

    @classmethod
    def jmpos(cls, offset: int, line: int = 0) -> 'Instruction':
        return cls(OpCode.JMPOS, offset=offset, line=line)

    @classmethod
    def ret(cls, line: int = 0) -> 'Instruction':
        return cls(OpCode.RET, line=line)

    def __str__(self) -> str:
        if self.opcode is OpCode.PUSH:
            return f"push {self.operand}"
        if self.opcode is OpCode.JMPOS:
            return f"jmpos {self.offset}"
        return self.opcode.mnemonic


@dataclass(frozen=True)
class Program:
    """Decoded instruction sequence, shared read-only by every execution."""
    instructions: Tuple[Instruction, ...]
    source: str = "<string>"

    def __post_init__(self):
        # Accept any iterable but always store an immutable tuple
        object.__setattr__(self, 'instructions', tuple(self.instructions))

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self):
        return iter(self.instructions)
