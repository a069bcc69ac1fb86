"""
Structural Sanity Checks
========================

Pre-search legality checks for pipe grids. These catch grids that can never
hold a valid path before any backtracking is attempted:

- Illegal characters
- Cells with more than two tunnel-aligned exits
- Endpoint count other than exactly two
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from mousepath.core.coordinate import Coordinate
from mousepath.core.definitions import (
    BLANK, H_TUNNEL, V_TUNNEL, ENDPOINT, LEGAL_SYMBOLS, SYMBOL_PALETTE, MAX_EXITS,
)
from mousepath.core.grid import PipeGrid, CELL_DTYPE

logger = logging.getLogger(__name__)

# Cap on per-cell messages so huge broken grids stay readable
MAX_REPORTED_CELLS = 5


class GridSanityChecker:
    """
    Structural validity checks for a pipe grid.

    An exit is a neighbour that is the tunnel running toward the cell: a
    vertical tunnel directly above or below, or a horizontal tunnel
    directly left or right. Off-grid neighbours count as blank.
    """

    def __init__(self, grid: PipeGrid):
        self.grid = grid
        self.cells = grid.cells
        self.height, self.width = grid.height, grid.width

    def legal_mask(self) -> np.ndarray:
        """Boolean mask of cells holding a legal non-blank symbol."""
        return np.isin(self.cells, list(LEGAL_SYMBOLS))

    def illegal_mask(self) -> np.ndarray:
        return ~self.legal_mask() & (self.cells != BLANK)

    def count_exits(self) -> np.ndarray:
        """
        Tunnel-aligned exit count for every legal cell (0 elsewhere).

        Returns:
            Integer array with the grid's shape
        """
        padded = np.full((self.height + 2, self.width + 2), BLANK, dtype=CELL_DTYPE)
        padded[1:-1, 1:-1] = self.cells

        below = padded[2:, 1:-1] == V_TUNNEL
        above = padded[:-2, 1:-1] == V_TUNNEL
        right = padded[1:-1, 2:] == H_TUNNEL
        left = padded[1:-1, :-2] == H_TUNNEL

        exits = below.astype(int) + above + right + left
        return np.where(self.legal_mask(), exits, 0)

    def drawable_count(self) -> int:
        """Number of drawable cells a full path has to visit."""
        return self.grid.drawable_count()

    def endpoints(self) -> List[Coordinate]:
        return self.grid.find_all(ENDPOINT)

    def locate_start(self) -> Optional[Coordinate]:
        """Search origin: the last endpoint in row-major order."""
        endpoints = self.endpoints()
        return endpoints[-1] if endpoints else None

    def check_all(self) -> Tuple[bool, List[str]]:
        """
        Run all structural checks.

        Returns:
            is_valid: Whether the grid passes every check
            errors: List of error messages
        """
        errors = []

        illegal = np.argwhere(self.illegal_mask())
        if len(illegal) > 0:
            shown = ", ".join(
                f"{str(self.cells[r, c])!r} at ({r}, {c})" for r, c in illegal[:MAX_REPORTED_CELLS]
            )
            more = f" (+{len(illegal) - MAX_REPORTED_CELLS} more)" if len(illegal) > MAX_REPORTED_CELLS else ""
            errors.append(f"Illegal characters: {shown}{more}")

        exits = self.count_exits()
        crowded = np.argwhere(exits > MAX_EXITS)
        if len(crowded) > 0:
            shown = ", ".join(
                f"({r}, {c}) {str(self.cells[r, c])!r} has {exits[r, c]}"
                for r, c in crowded[:MAX_REPORTED_CELLS]
            )
            more = f" (+{len(crowded) - MAX_REPORTED_CELLS} more)" if len(crowded) > MAX_REPORTED_CELLS else ""
            errors.append(f"Cells with more than {MAX_EXITS} tunnel exits: {shown}{more}")

        endpoint_count = len(self.endpoints())
        if endpoint_count != 2:
            errors.append(f"Expected exactly 2 endpoints ({ENDPOINT}), found {endpoint_count}")

        if errors:
            logger.debug(f'GridSanityChecker: {self.grid!r} rejected: {"; ".join(errors)}')

        return len(errors) == 0, errors

    def count_elements(self) -> Dict[str, int]:
        """Count occurrences of each drawable symbol."""
        counts = {}
        for name, symbol in SYMBOL_PALETTE.items():
            if symbol == BLANK:
                continue
            count = int(np.sum(self.cells == symbol))
            if count > 0:
                counts[name] = count
        return counts
