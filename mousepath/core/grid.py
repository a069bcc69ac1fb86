"""
Pipe Grid
=========

Numpy-backed character matrix for pipe-maze drawings.

The grid has fixed dimensions once built. Ragged input rows are padded with
blanks, and every read outside the matrix (in any direction) yields a blank
cell, so callers never need to guard indices themselves.

The only in-place mutation is the transient start marker written by
`PipeGrid.marked_start`, which is always restored before the context exits.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Union

import numpy as np

from mousepath.core.coordinate import Coordinate
from mousepath.core.definitions import (
    BLANK, ENDPOINT, VISITED_START, LEGAL_SYMBOLS, SYMBOL_TO_NAME,
)

logger = logging.getLogger(__name__)

CELL_DTYPE = '<U1'

RowsLike = Sequence[Optional[Union[str, Sequence[str]]]]


class PipeGrid:
    """
    Rectangular 2-D array of cell symbols.

    Attributes:
        cells: numpy array of shape (height, width), dtype '<U1'
        height: Number of rows
        width: Number of columns
    """

    def __init__(self, cells: np.ndarray):
        """
        Wrap an existing 2-D character array.

        A unicode array is wrapped without copying, so marker writes land in
        the caller's array and are restored there.

        Args:
            cells: 2-D numpy array of single characters
        """
        cells = np.asarray(cells)
        if cells.ndim != 2:
            raise ValueError(f"PipeGrid needs a 2-D array, got {cells.ndim} dimension(s)")
        if cells.dtype.kind != 'U':
            cells = cells.astype(CELL_DTYPE)
        self.cells = cells
        self.height, self.width = cells.shape

    # ---------- Construction ----------

    @classmethod
    def from_rows(cls, rows: Optional[RowsLike]) -> 'PipeGrid':
        """
        Build a grid from row strings (or sequences of characters).

        Shorter rows are padded with blanks up to the longest row. `None`
        input or no rows gives an empty 0x0 grid; a `None` row is empty.
        """
        if rows is None:
            rows = []
        rows = [list(row) if row is not None else [] for row in rows]

        height = len(rows)
        width = max((len(row) for row in rows), default=0)

        cells = np.full((height, width), BLANK, dtype=CELL_DTYPE)
        for r, row in enumerate(rows):
            if row:
                cells[r, :len(row)] = row
        return cls(cells)

    @classmethod
    def from_text(cls, text: str) -> 'PipeGrid':
        """Build a grid from a multi-line string, one row per line."""
        return cls.from_rows(text.splitlines())

    def copy(self) -> 'PipeGrid':
        return PipeGrid(self.cells.copy())

    # ---------- Access ----------

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.row < self.height and 0 <= coord.col < self.width

    def symbol_at(self, coord: Coordinate) -> str:
        """Symbol at `coord`, or BLANK when the coordinate is off the grid."""
        if not self.in_bounds(coord):
            return BLANK
        return str(self.cells[coord.row, coord.col])

    def find_all(self, symbol: str) -> List[Coordinate]:
        """All cells holding `symbol`, in row-major order."""
        return [Coordinate(int(r), int(c)) for r, c in np.argwhere(self.cells == symbol)]

    def drawable_count(self) -> int:
        """Number of cells holding a legal, non-blank symbol."""
        return int(np.isin(self.cells, list(LEGAL_SYMBOLS)).sum())

    def is_empty(self) -> bool:
        return self.cells.size == 0

    def to_rows(self) -> List[str]:
        return [''.join(row) for row in self.cells.tolist()]

    # ---------- Transient start marker ----------

    @contextmanager
    def marked_start(self, start: Coordinate) -> Iterator[Coordinate]:
        """
        Temporarily rewrite the endpoint at `start` as the search origin.

        The cell is set back to ENDPOINT on every exit path, including when
        the body raises.
        """
        self.cells[start.row, start.col] = VISITED_START
        logger.debug(f'PipeGrid: marked search origin at {start}')
        try:
            yield start
        finally:
            self.cells[start.row, start.col] = ENDPOINT
            logger.debug(f'PipeGrid: restored endpoint at {start}')

    def __eq__(self, other):
        if not isinstance(other, PipeGrid):
            return False
        return np.array_equal(self.cells, other.cells)

    def __repr__(self):
        return f"PipeGrid({self.height}x{self.width})"

    def describe(self) -> str:
        """Multi-line dump with symbol names, for debug logs."""
        lines = [f"PipeGrid {self.height}x{self.width}"]
        for r, row in enumerate(self.to_rows()):
            lines.append(f"{r:3d} |{row}|")
        names = sorted({SYMBOL_TO_NAME.get(s, repr(s)) for s in np.unique(self.cells).tolist()})
        lines.append(f"symbols: {', '.join(names)}")
        return "\n".join(lines)


def as_pipe_grid(grid: Union['PipeGrid', np.ndarray, RowsLike, None]) -> PipeGrid:
    """
    Coerce caller input into a PipeGrid.

    A PipeGrid is returned as-is and a writeable numpy array is wrapped in
    place; a read-only array and any other row sequence are copied into a
    fresh grid.
    """
    if isinstance(grid, PipeGrid):
        return grid
    if isinstance(grid, np.ndarray):
        if grid.ndim == 2:
            if not grid.flags.writeable:
                return PipeGrid(grid.copy())
            return PipeGrid(grid)
        return PipeGrid.from_rows(grid.tolist())
    return PipeGrid.from_rows(grid)
