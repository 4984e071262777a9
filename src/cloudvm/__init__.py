"""
cloudvm: stack-machine grid evaluator

Runs a small bytecode program at every cell of a 30x30x30 grid and reports
the calibration number (sum of results) and the number of clouds
(6-connected groups of cells with a positive result).

Modules:
    - exec_types.py: opcodes, operands, instructions, programs
    - decoder.py: listing text -> Program
    - vm.py: StackMachine
    - grid.py: Point, bounded addition, grid allocation
    - evaluator.py: per-cell evaluation and calibration number
    - clouds.py: cloud counting
"""

__version__ = "0.1.0"

# Error classes
from cloudvm.errors import (
    CloudVMError,
    DecodeError,
    VMError,
    RuntimeFault,
    StackUnderflowError,
    ProgramCounterError,
)

from cloudvm.exec_types import Axis, Instruction, OpCode, Operand, Program
from cloudvm.grid import CARDINALS, GRID_EXTENT, GRID_SHAPE, Point, combine, iter_points, new_grid
from cloudvm.decoder import decode_instruction, decode_program, format_instruction, load_program
from cloudvm.vm import StackMachine, run_program
from cloudvm.evaluator import GridEvaluation, evaluate_grid
from cloudvm.clouds import cloud_sizes, count_clouds, find_clouds

__all__ = [
    # Errors
    'CloudVMError',
    'DecodeError',
    'VMError',
    'RuntimeFault',
    'StackUnderflowError',
    'ProgramCounterError',
    # Types
    'Axis',
    'Instruction',
    'OpCode',
    'Operand',
    'Program',
    # Grid
    'CARDINALS',
    'GRID_EXTENT',
    'GRID_SHAPE',
    'Point',
    'combine',
    'iter_points',
    'new_grid',
    # Pipeline
    'decode_instruction',
    'decode_program',
    'format_instruction',
    'load_program',
    'StackMachine',
    'run_program',
    'GridEvaluation',
    'evaluate_grid',
    'cloud_sizes',
    'count_clouds',
    'find_clouds',
]
