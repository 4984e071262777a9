"""
Grid evaluator: run the program at every coordinate of the grid.

Produces the calibration number (sum of every result) and the `active`
grid marking cells whose result was strictly positive.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from cloudvm.exec_types import Program
from cloudvm.grid import NUM_POINTS, check_grid, iter_points, new_grid
from cloudvm.logging_config import Timer
from cloudvm.vm import StackMachine

logger = logging.getLogger('cloudvm.evaluator')


@dataclass
class GridEvaluation:
    """Result of evaluating a program over the whole grid."""
    calibration_number: int
    active: np.ndarray

    @property
    def active_count(self) -> int:
        return int(np.count_nonzero(self.active))


def evaluate_grid(program: Program, active: Optional[np.ndarray] = None,
                  trace: bool = False) -> GridEvaluation:
    """
    Execute `program` once per coordinate.

    Args:
        program: Decoded program
        active: Optional preallocated grid, overwritten in place
        trace: Log every executed instruction at DEBUG level

    Returns:
        GridEvaluation with the calibration number and active grid

    Raises:
        VMError: The first fault aborts the whole evaluation
    """
    if active is None:
        active = new_grid()
    else:
        check_grid(active, "active")

    machine = StackMachine(program, trace=trace)
    calibration_number = 0
    with Timer("evaluate") as timer:
        for point in iter_points():
            value = machine.execute(point)
            calibration_number += value
            active[point.index] = value > 0

    evaluation = GridEvaluation(calibration_number, active)
    logger.info("Grid evaluated", extra={
        "extra_data": {
            "points": NUM_POINTS,
            "calibration_number": calibration_number,
            "active_cells": evaluation.active_count,
            "elapsed_ms": timer.elapsed_ms(),
        }
    })
    return evaluation
