"""Uniform grid over the XZ plane used as the broad phase of collision detection."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from .colliders import Collider, DynamicType
from .contacts import Collision
from .detector import CollisionDetector

_MOVING = (DynamicType.DYNAMIC, DynamicType.WITH_PHYSICS)


def _vec(value) -> np.ndarray:
    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-component vector, got shape {arr.shape}")
    return arr


def _remove_identical(items: List[Collider], collider: Collider) -> None:
    items[:] = [item for item in items if item is not collider]


class Cell:
    """A square cell of the grid holding the moving and the static colliders inside it."""

    def __init__(self, center, half_width: float, row: int, col: int):
        self.center = _vec(center)
        self.half_width = float(half_width)
        self.row = row
        self.col = col
        self.dynamic_colliders: List[Collider] = []
        self.static_colliders: List[Collider] = []

    def insert(self, collider: Collider) -> None:
        """Add a collider to this cell and record the cell on the collider."""
        collider.row = self.row
        collider.col = self.col
        if collider.dynamic_type in _MOVING:
            self.dynamic_colliders.append(collider)
        else:
            self.static_colliders.append(collider)

    def remove(self, collider: Collider) -> None:
        """Drop a collider from this cell; absent colliders are ignored."""
        if collider.dynamic_type in _MOVING:
            _remove_identical(self.dynamic_colliders, collider)
        else:
            _remove_identical(self.static_colliders, collider)


class Grid:
    """Square grid of cells covering ``[0, grid_length]`` along both X and Z."""

    def __init__(self, grid_length: float, half_width: float):
        if half_width <= 0:
            raise ValueError("cell half width must be positive")
        if grid_length < 0:
            raise ValueError("grid length must not be negative")
        self.grid_length = float(grid_length)
        self.half_width = float(half_width)
        self.cells_in_row = math.ceil(self.grid_length / (2 * self.half_width))
        self.detector = CollisionDetector()
        size = 2 * self.half_width
        self._cells: List[List[Cell]] = [
            [
                Cell((col * size + self.half_width, 0.0, row * size + self.half_width),
                     self.half_width, row, col)
                for col in range(self.cells_in_row)
            ]
            for row in range(self.cells_in_row)
        ]

    @property
    def cells(self) -> List[List[Cell]]:
        """Rows of cells; the outer lists are fresh copies."""
        return [list(row) for row in self._cells]

    def insert(self, collider: Collider) -> None:
        """Place a collider into the cell containing its center."""
        row = self.insert_row(collider.center)
        col = self.insert_col(collider.center)
        if not (0 <= row < self.cells_in_row and 0 <= col < self.cells_in_row):
            raise ValueError("collider center lies outside the grid")
        self._cells[row][col].insert(collider)

    def remove(self, collider: Collider) -> None:
        """Remove a collider from the cell it was last inserted into."""
        self._cells[collider.row][collider.col].remove(collider)

    def check_collisions(self) -> List[Collision]:
        """Collisions found by checking every cell against its eligible neighbours."""
        collisions: List[Collision] = []
        for row in range(self.cells_in_row):
            for col in range(self.cells_in_row):
                for row_b, col_b in self.eligible_cells(row, col):
                    collisions.extend(self.check_cells(row, col, row_b, col_b))
        return collisions

    def check_cells(self, row_a: int, col_a: int, row_b: int, col_b: int) -> List[Collision]:
        """Collisions between the colliders of two cells, at least one of them moving."""
        cell_a = self._cells[row_a][col_a]
        cell_b = self._cells[row_b][col_b]
        same = row_a == row_b and col_a == col_b
        dynamic_a = list(cell_a.dynamic_colliders)
        dynamic_b = list(cell_b.dynamic_colliders)
        static_a = list(cell_a.static_colliders)
        static_b = list(cell_b.static_colliders)

        pairs: List[Tuple[Collider, Collider]] = []
        for i, first in enumerate(dynamic_a):
            start = i + 1 if same else 0
            pairs.extend((first, second) for second in dynamic_b[start:])
        pairs.extend((first, second) for first in dynamic_a for second in static_b)
        # A cell checked against itself already covered its dynamic/static pairs.
        if not same:
            pairs.extend((first, second) for first in static_a for second in dynamic_b)

        collisions = []
        for first, second in pairs:
            collision = self.detector.check_collision(first, second)
            if collision is not None:
                collisions.append(collision)
        return collisions

    def eligible_cells(self, cell_row: int, cell_col: int) -> List[Tuple[int, int]]:
        """Cells checked against the given one: rows above, same and below, columns same and right."""
        return [
            (cell_row + d_row, cell_col + d_col)
            for d_row in (-1, 0, 1)
            for d_col in (0, 1)
            if 0 <= cell_row + d_row < self.cells_in_row and cell_col + d_col < self.cells_in_row
        ]

    def insert_row(self, point) -> int:
        """Row of the cell containing ``point`` along Z; -1 when it lies before the first row."""
        point = _vec(point)
        return self._search(point[2], [row[0].center[2] for row in self._cells])

    def insert_col(self, point) -> int:
        """Column of the cell containing ``point`` along X; -1 when it lies before the first column."""
        point = _vec(point)
        if not self._cells:
            return -1
        return self._search(point[0], [cell.center[0] for cell in self._cells[0]])

    def _search(self, value: float, centers: Sequence[float]) -> int:
        low = 0
        high = self.cells_in_row - 1
        while high > low:
            mid = (high + low) // 2
            center = centers[mid]
            if abs(value - center) < self.half_width:
                return mid
            if value < center:
                high = mid - 1
            elif value > center:
                low = mid + 1
        return high