from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator

import numpy as np


@dataclass(frozen=True, order=True)
class Position:
    x: int
    y: int

    def neighbors(self, max_x: int, max_y: int) -> list[Position]:
        """Axis-aligned neighbors inside the bounds: left, right, up, down.

        Cells on the edge get fewer neighbors; coordinates never wrap.
        """

        x, y = self.x, self.y
        out: list[Position] = []
        if x > 0:
            out.append(Position(x - 1, y))
        if x + 1 < max_x:
            out.append(Position(x + 1, y))
        if y > 0:
            out.append(Position(x, y - 1))
        if y + 1 < max_y:
            out.append(Position(x, y + 1))
        return out


class Grid:
    """Square, dense, row-major grid (``index = y * size + x``).

    The backing storage always holds exactly ``size * size`` values. A grid
    never changes size: resizing means building a new one. Constructors copy
    their input, so two grids never share storage.
    """

    def __init__(self, size: int, values: np.ndarray):
        size = int(size)
        if size <= 0:
            raise ValueError("size must be > 0")
        values = np.array(values, copy=True)
        if values.ndim != 1 or values.shape[0] != size * size:
            raise ValueError("values must be a flat array of size * size cells")
        self._size = size
        self._values = values

    @classmethod
    def new(cls, size: int, *, dtype: Any = np.float64) -> Grid:
        size = int(size)
        if size <= 0:
            raise ValueError("size must be > 0")
        return cls(size, np.zeros(size * size, dtype=dtype))

    @classmethod
    def with_generator(
        cls,
        size: int,
        gen: Callable[[Position], Any],
        *,
        dtype: Any = np.float64,
    ) -> Grid:
        size = int(size)
        if size <= 0:
            raise ValueError("size must be > 0")
        values = np.empty(size * size, dtype=dtype)
        i = 0
        for y in range(size):
            for x in range(size):
                values[i] = gen(Position(x, y))
                i += 1
        return cls(size, values)

    @classmethod
    def from_array(cls, a: np.ndarray, *, dtype: Any = None) -> Grid:
        arr = np.asarray(a, dtype=dtype)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError("expected a square 2D array")
        return cls(arr.shape[0], arr.reshape(-1))

    @property
    def size(self) -> int:
        return self._size

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    def __len__(self) -> int:
        return self._values.shape[0]

    def __repr__(self) -> str:
        return f"Grid(size={self._size}, dtype={self._values.dtype})"

    def _idx(self, pos: Position) -> int:
        x = int(pos.x)
        y = int(pos.y)
        if not (0 <= x < self._size and 0 <= y < self._size):
            raise IndexError(f"position ({x}, {y}) outside grid of size {self._size}")
        return y * self._size + x

    def _pos(self, idx: int) -> Position:
        return Position(idx % self._size, idx // self._size)

    def get(self, pos: Position) -> Any:
        return self._values[self._idx(pos)]

    def set(self, pos: Position, v: Any) -> None:
        self._values[self._idx(pos)] = v

    def map(self, mapper: Callable[[Position, Any], Any]) -> None:
        """Replace every value with ``mapper(position, old_value)``.

        ``mapper`` must not read other cells of this grid; the order in which
        cells are visited is not part of the contract.
        """

        values = self._values
        for idx in range(values.shape[0]):
            values[idx] = mapper(self._pos(idx), values[idx])

    def assign(self, values: Any) -> None:
        """Overwrite every cell from a flat row-major sequence of the same length."""
        values = np.asarray(values, dtype=self._values.dtype)
        if values.shape != self._values.shape:
            raise ValueError("values must be a flat array of size * size cells")
        self._values[:] = values

    def values(self) -> np.ndarray:
        """Read-only row-major view of all cells."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def as_array(self) -> np.ndarray:
        """Read-only (size, size) view, indexed ``[y, x]``."""
        view = self._values.reshape(self._size, self._size)
        view.flags.writeable = False
        return view

    def positions(self) -> Iterator[Position]:
        for y in range(self._size):
            for x in range(self._size):
                yield Position(x, y)

    def is_boundary(self, pos: Position) -> bool:
        last = self._size - 1
        return pos.x == 0 or pos.y == 0 or pos.x == last or pos.y == last

    def copy(self) -> Grid:
        return Grid(self._size, self._values)
