from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np


Coordinate = Tuple[int, int]


def flat_index(size: int, row: int, col: int) -> int:
    """Row-major offset of (row, col) on a square board of edge ``size``."""
    return row * size + col


def is_coordinate(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True)
class LineClearResult:
    cleared_rows: Tuple[int, ...] = ()
    cleared_cols: Tuple[int, ...] = ()
    cleared_count: int = 0  # distinct cells, intersections counted once

    @property
    def lines(self) -> int:
        return len(self.cleared_rows) + len(self.cleared_cols)


class Board:
    """Square grid of empty (0) / filled (1) cells.

    Cells live in a flat row-major ``int8`` array; ``flat_index`` is the only place
    that turns (row, col) into a flat offset. The backing array never leaves the
    board: ``snapshot`` and ``grid`` hand out copies.

    The board knows nothing about scoring, the tray or game over.
    """

    def __init__(self, size: int = 8) -> None:
        if int(size) <= 0:
            raise ValueError(f"board size must be positive, got {size}")
        self.size = int(size)
        self._cells = np.zeros(self.size * self.size, dtype=np.int8)

    def reset(self) -> None:
        self._cells.fill(0)

    def _index(self, row: int, col: int) -> int:
        return flat_index(self.size, row, col)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            return 0
        return int(self._cells[self._index(row, col)])

    def can_place(self, shape: np.ndarray, row: int, col: int) -> bool:
        shape = np.asarray(shape)
        h, w = shape.shape
        for dr in range(h):
            for dc in range(w):
                if not shape[dr, dc]:
                    continue
                rr, cc = row + dr, col + dc
                if not self.in_bounds(rr, cc):
                    return False
                if self._cells[self._index(rr, cc)] != 0:
                    return False
        return True

    def place(self, shape: np.ndarray, row: int, col: int) -> int:
        """Write 1 under every occupied cell of ``shape`` anchored at (row, col).

        Assumes ``can_place`` already holds; no collision check is made and
        out-of-bounds cells are skipped. Returns the number of occupied cells.
        """
        shape = np.asarray(shape)
        placed = 0
        h, w = shape.shape
        for dr in range(h):
            for dc in range(w):
                if not shape[dr, dc]:
                    continue
                rr, cc = row + dr, col + dc
                if self.in_bounds(rr, cc):
                    self._cells[self._index(rr, cc)] = 1
                placed += 1
        return placed

    def _view(self) -> np.ndarray:
        return self._cells.reshape(self.size, self.size)

    def find_full_lines(self) -> Tuple[List[int], List[int]]:
        grid = self._view()
        full_rows = [int(r) for r in np.where(np.all(grid != 0, axis=1))[0]]
        full_cols = [int(c) for c in np.where(np.all(grid != 0, axis=0))[0]]
        return full_rows, full_cols

    def clear_full_lines(self) -> LineClearResult:
        full_rows, full_cols = self.find_full_lines()
        if not full_rows and not full_cols:
            return LineClearResult()
        to_clear = set()
        for r in full_rows:
            to_clear.update(self._index(r, c) for c in range(self.size))
        for c in full_cols:
            to_clear.update(self._index(r, c) for r in range(self.size))
        self._cells[sorted(to_clear)] = 0
        return LineClearResult(
            cleared_rows=tuple(full_rows),
            cleared_cols=tuple(full_cols),
            cleared_count=len(to_clear),
        )

    def valid_anchors(self, shape: np.ndarray) -> List[Coordinate]:
        return [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.can_place(shape, r, c)
        ]

    def has_any_placement(self, shape: np.ndarray) -> bool:
        for r in range(self.size):
            for c in range(self.size):
                if self.can_place(shape, r, c):
                    return True
        return False

    def filled_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def snapshot(self) -> np.ndarray:
        return self._cells.copy()

    def grid(self) -> np.ndarray:
        return self._view().copy()

    def __str__(self) -> str:
        return "\n".join(
            "".join("█" if cell else "·" for cell in row) for row in self._view()
        )
