# -*- coding: utf-8 -*-
"""
Occupancy Grid Module

Per-render boolean bitmap of the cells that still need decorative fill. A
grid is created from the padded QR matrix at the start of a render call,
consumed by the eye placer and the tiler, and discarded afterwards.

Coordinates are ``(x, y)`` = (column, row); storage is row-major so that
``grid.rows[y][x]`` matches the layout of the input matrix.
"""

from typing import List, Sequence

from .errors import InternalInvariantError, ValidationError


class OccupancyGrid:
    """
    Square grid of "needs fill" flags.

    Args:
        matrix: Square boolean matrix, rows first (True = foreground)
    """

    def __init__(self, matrix: Sequence[Sequence[bool]]):
        rows = [[bool(cell) for cell in row] for row in matrix]
        side = len(rows)
        if side == 0:
            raise ValidationError("Occupancy matrix is empty")
        for y, row in enumerate(rows):
            if len(row) != side:
                raise ValidationError(
                    f"Occupancy matrix must be square: row {y} has {len(row)} cells, expected {side}"
                )
        self.rows: List[List[bool]] = rows
        self.side = side

    def __repr__(self):
        return f"OccupancyGrid(side={self.side}, remaining={self.remaining()})"

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.side and 0 <= y < self.side):
            raise InternalInvariantError(f"Cell ({x}, {y}) outside {self.side}x{self.side} grid")

    def is_set(self, x: int, y: int) -> bool:
        """Return True if cell (x, y) still needs fill."""
        self._check(x, y)
        return self.rows[y][x]

    def consume(self, x: int, y: int) -> None:
        """Mark a single cell as covered."""
        self._check(x, y)
        self.rows[y][x] = False

    def consume_rect(self, x: int, y: int, width: int, height: int) -> None:
        """Mark every cell of the rectangle as covered, whatever its state."""
        self._check(x, y)
        self._check(x + width - 1, y + height - 1)
        for yy in range(y, y + height):
            row = self.rows[yy]
            for xx in range(x, x + width):
                row[xx] = False

    def can_place(self, x: int, y: int, width: int, height: int) -> bool:
        """
        Test a ``width x height`` footprint at (x, y) and claim it on success.

        Returns False when the rectangle runs past the grid or when any cell
        inside it is already False (background or consumed). Otherwise every
        cell of the rectangle is set to False and True is returned, so a True
        result must not be reused after other mutations.

        Args:
            x (int): Column of the top-left cell
            y (int): Row of the top-left cell
            width (int): Footprint width in blocks
            height (int): Footprint height in blocks

        Returns:
            bool: Whether the footprint was placed

        Example:
            >>> grid = OccupancyGrid([[True, True], [True, True]])
            >>> grid.can_place(0, 0, 2, 2)
            True
            >>> grid.can_place(0, 0, 1, 1)
            False
        """
        if x < 0 or y < 0 or x + width > self.side or y + height > self.side:
            return False

        for yy in range(y, y + height):
            row = self.rows[yy]
            for xx in range(x, x + width):
                if not row[xx]:
                    return False

        for yy in range(y, y + height):
            row = self.rows[yy]
            for xx in range(x, x + width):
                row[xx] = False
        return True

    def remaining(self) -> int:
        """Number of cells still needing fill."""
        return sum(sum(1 for cell in row if cell) for row in self.rows)
