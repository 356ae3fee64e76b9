from __future__ import annotations

import heapq
from collections import deque
from typing import Callable, Iterator, Optional

import numpy as np
import structlog

from basins.grid import Grid, Position

logger = structlog.get_logger()

MAX_WATER_ELEVATION = 10000.0

LowerCallback = Callable[[Position, float, float], None]


def water_sentinel(elevation: Grid) -> float:
    """Initial level for interior cells, strictly above every elevation."""
    top = float(np.max(elevation.values()))
    return max(MAX_WATER_ELEVATION, top + 1.0)


def boundary_positions(size: int) -> Iterator[Position]:
    """Every edge cell of a ``size`` grid, each exactly once."""
    last = size - 1
    for x in range(size):
        yield Position(x, 0)
    if size > 1:
        for x in range(size):
            yield Position(x, last)
    for y in range(1, last):
        yield Position(0, y)
        yield Position(last, y)


def _boundary_indices(size: int) -> list[int]:
    return [pos.y * size + pos.x for pos in boundary_positions(size)]


def _adjacent(i: int, size: int) -> list[int]:
    """Flat indices of the left, right, up and down neighbors of cell ``i``."""
    x = i % size
    out = []
    if x > 0:
        out.append(i - 1)
    if x + 1 < size:
        out.append(i + 1)
    if i >= size:
        out.append(i - size)
    if i + size < size * size:
        out.append(i + size)
    return out


def seed_water_level(elevation: Grid, water_level: Optional[Grid] = None) -> Grid:
    """Edge cells start at their own elevation, interior cells at the sentinel.

    ``water_level`` is reused in place when it matches the elevation grid;
    any other size is discarded and a new grid is built.
    """

    size = elevation.size
    h = elevation.as_array()
    start = np.full((size, size), water_sentinel(elevation), dtype=np.float64)
    start[0, :] = h[0, :]
    start[-1, :] = h[-1, :]
    start[:, 0] = h[:, 0]
    start[:, -1] = h[:, -1]

    if water_level is None or water_level.size != size:
        if water_level is not None:
            logger.debug(
                "Rebuilding water grid", old_size=water_level.size, size=size
            )
        return Grid(size, start.reshape(-1))

    water_level.assign(start.reshape(-1))
    return water_level


def fill_depressions(
    elevation: Grid,
    water_level: Optional[Grid] = None,
    *,
    on_lower: Optional[LowerCallback] = None,
) -> Grid:
    """Flood the grid from its edges and settle each cell's water surface.

    Relaxation over a FIFO queue seeded with the edge cells. A cell's
    drainage level is ``max(elevation, water level)``; a neighbor whose
    level is above ``max(drainage, its own elevation)`` is lowered to that
    value and queued again. Levels only ever decrease and never drop below
    the terrain, so the queue drains to the same fixed point whatever order
    cells are processed in. Cells may be revisited with tighter bounds.

    ``on_lower(pos, old, new)`` is called for every update.
    """

    size = elevation.size
    water = seed_water_level(elevation, water_level)

    # relax on flat row-major lists, index = y * size + x
    elev = elevation.values().tolist()
    surface = water.values().tolist()

    queue: deque[int] = deque(_boundary_indices(size))
    updates = 0

    while queue:
        i = queue.popleft()
        drainage = max(elev[i], surface[i])

        for n in _adjacent(i, size):
            level = max(drainage, elev[n])
            if surface[n] > level:
                if on_lower is not None:
                    on_lower(Position(n % size, n // size), surface[n], level)
                surface[n] = level
                queue.append(n)
                updates += 1

    water.assign(surface)
    logger.info("Depressions filled", method="fifo", size=size, updates=updates)
    return water


def fill_depressions_priority_flood(
    elevation: Grid,
    water_level: Optional[Grid] = None,
    *,
    on_lower: Optional[LowerCallback] = None,
) -> Grid:
    """Priority-flood variant of ``fill_depressions``.

    Cells are expanded lowest level first, so every cell is settled the first
    time it is reached. Produces exactly the levels of the FIFO relaxation.
    """

    size = elevation.size
    water = seed_water_level(elevation, water_level)

    elev = elevation.values().tolist()
    surface = water.values().tolist()

    visited = bytearray(size * size)
    heap: list[tuple[float, int]] = []
    for i in _boundary_indices(size):
        visited[i] = 1
        heapq.heappush(heap, (surface[i], i))

    updates = 0
    while heap:
        v, i = heapq.heappop(heap)

        for n in _adjacent(i, size):
            if visited[n]:
                continue
            visited[n] = 1
            level = max(v, elev[n])
            if surface[n] > level:
                if on_lower is not None:
                    on_lower(Position(n % size, n // size), surface[n], level)
                surface[n] = level
                updates += 1
            heapq.heappush(heap, (surface[n], n))

    water.assign(surface)
    logger.info("Depressions filled", method="priority", size=size, updates=updates)
    return water


FILL_METHODS = {
    "fifo": fill_depressions,
    "priority": fill_depressions_priority_flood,
}
