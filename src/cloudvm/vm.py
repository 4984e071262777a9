"""
Stack Machine for cloudvm bytecode execution.

Runs a decoded Program against one grid Point and returns the integer the
program hands to RET. Each execution starts from a fresh, empty stack; the
Program itself is never modified, so one machine can be reused for every
point of the grid.
"""

import logging
from typing import Callable, Dict, List, Optional

from cloudvm.errors import ProgramCounterError, StackUnderflowError, VMError
from cloudvm.exec_types import Instruction, OpCode, Program
from cloudvm.grid import Point

logger = logging.getLogger('cloudvm.vm')


class StackMachine:
    """
    Interpreter for the four-opcode cloudvm instruction set.

    There is no step limit: a program that loops forever runs forever.
    """

    def __init__(self, program: Program, trace: bool = False):
        self.program = program
        self.trace = trace

        # Per-execution state, reset by execute()
        self._ip = 0
        self._point: Optional[Point] = None
        self._result: Optional[int] = None
        self.stack: List[int] = []
        self.state = "idle"  # idle, running, halted, error

        self._handlers: Dict[OpCode, Callable[[Instruction], None]] = {
            opcode: getattr(self, f'_handle_{opcode.name.lower()}') for opcode in OpCode
        }

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def execute(self, point: Point) -> int:
        """
        Run the program with `point` as the coordinate context.

        Returns:
            The value popped by the RET that terminated execution

        Raises:
            StackUnderflowError: An instruction popped an empty stack
            ProgramCounterError: Control reached outside the program
        """
        self._reset(point)
        self.state = "running"
        try:
            while self.state == "running":
                inst = self._fetch()
                if self.trace:
                    logger.debug(f"ip={self._ip} {inst} stack={self.stack}")
                self._handlers[inst.opcode](inst)
        except VMError:
            self.state = "error"
            raise
        return self._result

    # -------------------------------------------------------------------------
    # Instruction Fetch / Stack
    # -------------------------------------------------------------------------

    def _reset(self, point: Point):
        self._ip = 0
        self._point = point
        self._result = None
        self.stack = []
        self.state = "idle"

    def _fetch(self) -> Instruction:
        if not 0 <= self._ip < len(self.program):
            raise ProgramCounterError(self._ip, len(self.program), self._point)
        return self.program[self._ip]

    def _pop(self, inst: Instruction) -> int:
        if not self.stack:
            raise StackUnderflowError(self._ip, inst, self._point)
        return self.stack.pop()

    # -------------------------------------------------------------------------
    # Opcode Handlers
    # -------------------------------------------------------------------------

    def _handle_push(self, inst: Instruction):
        """Push an axis coordinate or literal."""
        self.stack.append(inst.operand.resolve(self._point))
        self._ip += 1

    def _handle_add(self, inst: Instruction):
        """Pop two values, push their sum."""
        a = self._pop(inst)
        b = self._pop(inst)
        self.stack.append(a + b)
        self._ip += 1

    def _handle_jmpos(self, inst: Instruction):
        """Pop a value; if it is >= 0 skip `offset` further instructions."""
        if self._pop(inst) >= 0:
            self._ip += inst.offset
        self._ip += 1

    def _handle_ret(self, inst: Instruction):
        """Pop the result and stop."""
        self._result = self._pop(inst)
        self.state = "halted"


def run_program(program: Program, point: Point) -> int:
    """Execute `program` once at `point`."""
    return StackMachine(program).execute(point)
