from __future__ import annotations

from collections import defaultdict

import numpy as np
import pytest

from basins.fill import (
    MAX_WATER_ELEVATION,
    _adjacent,
    boundary_positions,
    fill_depressions,
    fill_depressions_priority_flood,
    seed_water_level,
    water_sentinel,
)
from basins.grid import Grid, Position

FILLS = [fill_depressions, fill_depressions_priority_flood]


def _basin3() -> Grid:
    z = np.full((3, 3), 10.0, dtype=np.float64)
    z[1, 1] = 0.0
    return Grid.from_array(z)


def _random_terrain(seed: int, size: int = 24) -> Grid:
    rng = np.random.default_rng(seed)
    return Grid.from_array(rng.random((size, size), dtype=np.float64) * 100.0)


def test_boundary_positions_each_edge_cell_once() -> None:
    for size in (1, 2, 3, 5):
        cells = list(boundary_positions(size))
        assert len(cells) == len(set(cells))
        expected = {
            Position(x, y)
            for y in range(size)
            for x in range(size)
            if x in (0, size - 1) or y in (0, size - 1)
        }
        assert set(cells) == expected


def test_water_sentinel_exceeds_terrain() -> None:
    low = Grid.from_array(np.zeros((3, 3)))
    assert water_sentinel(low) == MAX_WATER_ELEVATION
    high = Grid.from_array(np.full((3, 3), 5e6))
    assert water_sentinel(high) > 5e6


def test_seed_water_level_edges_and_interior() -> None:
    elev = _basin3()
    water = seed_water_level(elev)
    assert water.get(Position(0, 1)) == 10.0
    assert water.get(Position(1, 1)) == water_sentinel(elev)


@pytest.mark.parametrize("fill", FILLS)
def test_basin_fills_to_rim(fill) -> None:
    water = fill(_basin3())
    assert water.get(Position(1, 1)) == 10.0
    assert np.all(water.as_array() == 10.0)


@pytest.mark.parametrize("fill", FILLS)
def test_flat_terrain_has_no_lakes(fill) -> None:
    elev = Grid.from_array(np.full((6, 6), 42.0))
    water = fill(elev)
    assert np.all(water.as_array() == 42.0)


@pytest.mark.parametrize("fill", FILLS)
def test_boundary_cells_keep_their_elevation(fill) -> None:
    elev = _random_terrain(1)
    water = fill(elev)
    for pos in boundary_positions(elev.size):
        assert water.get(pos) == elev.get(pos)


@pytest.mark.parametrize("fill", FILLS)
def test_levels_never_below_terrain(fill) -> None:
    elev = _random_terrain(2)
    water = fill(elev)
    assert bool(np.all(water.as_array() >= elev.as_array()))


@pytest.mark.parametrize("fill", FILLS)
def test_levels_only_decrease(fill) -> None:
    elev = _random_terrain(3)
    history: dict[Position, list[tuple[float, float]]] = defaultdict(list)

    def record(pos: Position, old: float, new: float) -> None:
        history[pos].append((old, new))

    water = fill(elev, on_lower=record)
    assert history
    for pos, updates in history.items():
        for old, new in updates:
            assert new < old
        for (_, prev_new), (next_old, _) in zip(updates, updates[1:]):
            assert next_old == prev_new
        assert updates[-1][1] == water.get(pos)


def test_fifo_and_priority_flood_agree() -> None:
    for seed in range(4):
        elev = _random_terrain(seed, size=20)
        fifo = fill_depressions(elev)
        prio = fill_depressions_priority_flood(elev)
        assert np.array_equal(fifo.as_array(), prio.as_array())


def test_adjacent_matches_position_neighbors() -> None:
    size = 5
    for pos in Grid.new(size).positions():
        expected = [n.y * size + n.x for n in pos.neighbors(size, size)]
        assert _adjacent(pos.y * size + pos.x, size) == expected


@pytest.mark.parametrize("fill", FILLS)
def test_large_terrain_settles_to_fixed_point(fill) -> None:
    elev = _random_terrain(11, size=160)
    h = elev.as_array()
    w = fill(elev).as_array()

    edge = np.zeros(h.shape, dtype=bool)
    edge[0, :] = edge[-1, :] = edge[:, 0] = edge[:, -1] = True
    assert np.array_equal(w[edge], h[edge])

    # interior: level = max(own elevation, lowest neighbor level)
    lowest = np.minimum.reduce(
        [w[1:-1, :-2], w[1:-1, 2:], w[:-2, 1:-1], w[2:, 1:-1]]
    )
    assert np.array_equal(w[1:-1, 1:-1], np.maximum(h[1:-1, 1:-1], lowest))


def test_fifo_and_priority_flood_agree_on_large_terrain() -> None:
    elev = _random_terrain(12, size=200)
    fifo = fill_depressions(elev)
    prio = fill_depressions_priority_flood(elev)
    assert np.array_equal(fifo.as_array(), prio.as_array())


def test_nested_depressions_drain_through_lowest_saddle() -> None:
    z = np.array(
        [
            [9.0, 9.0, 9.0, 9.0, 9.0],
            [9.0, 1.0, 6.0, 2.0, 4.0],
            [9.0, 9.0, 9.0, 9.0, 9.0],
            [9.0, 9.0, 9.0, 9.0, 9.0],
            [9.0, 9.0, 9.0, 9.0, 9.0],
        ],
        dtype=np.float64,
    )
    water = fill_depressions(Grid.from_array(z)).as_array()
    # Right pit spills over the rim cell at 4; left pit must climb the 6 saddle.
    assert water[1, 3] == 4.0
    assert water[1, 2] == 6.0
    assert water[1, 1] == 6.0


@pytest.mark.parametrize("fill", FILLS)
def test_reuses_matching_water_grid(fill) -> None:
    elev = _random_terrain(4, size=8)
    water = Grid.new(8)
    out = fill(elev, water)
    assert out is water
    assert np.array_equal(out.as_array(), fill(elev).as_array())


@pytest.mark.parametrize("fill", FILLS)
def test_rebuilds_mismatched_water_grid(fill) -> None:
    elev = _random_terrain(5, size=8)
    stale = Grid.new(5)
    out = fill(elev, stale)
    assert out is not stale
    assert out.size == 8
    assert stale.size == 5
    assert np.array_equal(out.as_array(), fill(elev).as_array())


@pytest.mark.parametrize("fill", FILLS)
def test_tiny_grids_are_all_boundary(fill) -> None:
    one = Grid.from_array(np.array([[3.0]]))
    assert fill(one).get(Position(0, 0)) == 3.0
    two = Grid.from_array(np.array([[1.0, 2.0], [3.0, 4.0]]))
    assert np.array_equal(fill(two).as_array(), two.as_array())
