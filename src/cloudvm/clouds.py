"""
Cloud counter: 6-connected components of the active grid.

A cloud is a maximal set of active cells joined through shared faces.
Traversal uses an explicit work-list, so the size of a cloud never
touches Python's recursion limit.

Every cell the traversal touches is marked visited before its activity is
checked, including inactive neighbours of a cloud. Those cells are
consumed: they are never examined again and never seed a cloud.
"""

import logging
from typing import List, Optional

import numpy as np

from cloudvm.grid import CARDINALS, Point, check_grid, combine, iter_points, new_grid
from cloudvm.logging_config import Timer

logger = logging.getLogger('cloudvm.clouds')

Cloud = List[Point]


def _grow_cloud(active: np.ndarray, visited: np.ndarray, seed: Point) -> Cloud:
    """Collect the cloud containing an active, already-visited seed."""
    cloud = [seed]
    pending = [seed]
    while pending:
        point = pending.pop()
        for offset in CARDINALS:
            neighbour = combine(point, offset)
            if neighbour is None:
                continue
            if visited[neighbour.index]:
                continue
            visited[neighbour.index] = True
            if active[neighbour.index]:
                cloud.append(neighbour)
                pending.append(neighbour)
    return cloud


def find_clouds(active: np.ndarray, visited: Optional[np.ndarray] = None) -> List[Cloud]:
    """
    Partition the active cells into clouds.

    Args:
        active: GRID_SHAPE boolean grid
        visited: Optional bookkeeping grid, updated in place

    Returns:
        One list of member points per cloud, in discovery order
    """
    check_grid(active, "active")
    if visited is None:
        visited = new_grid()
    else:
        check_grid(visited, "visited")

    clouds = []
    with Timer("clouds") as timer:
        for point in iter_points():
            if visited[point.index]:
                continue
            visited[point.index] = True
            if not active[point.index]:
                continue
            clouds.append(_grow_cloud(active, visited, point))

    logger.info("Clouds counted", extra={
        "extra_data": {
            "clouds": len(clouds),
            "largest": max((len(c) for c in clouds), default=0),
            "elapsed_ms": timer.elapsed_ms(),
        }
    })
    return clouds


def count_clouds(active: np.ndarray, visited: Optional[np.ndarray] = None) -> int:
    """Number of clouds in the active grid."""
    return len(find_clouds(active, visited))


def cloud_sizes(clouds: List[Cloud]) -> List[int]:
    """Cloud sizes, largest first."""
    return sorted((len(cloud) for cloud in clouds), reverse=True)
