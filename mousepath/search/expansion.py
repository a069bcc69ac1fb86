"""
Neighbour Expansion for Pipe Grids
==================================

Successor generation for the Hamiltonian path search. What a cell may
connect to depends on its own symbol and on the cell the path arrived from:

- Search origin: every orthogonal neighbour that is drawn and not the
  perpendicular tunnel
- Crossing: the same set, minus the straight continuation, the previous
  cell, and anything already visited
- Tunnel: only the straight continuation, if drawn, not the perpendicular
  tunnel, and not visited
- Anything else: nothing
"""

from typing import AbstractSet, List, Optional, Sequence, Tuple

from mousepath.core.coordinate import Coordinate
from mousepath.core.definitions import (
    BLANK, H_TUNNEL, V_TUNNEL, CROSS, ENDPOINT, VISITED_START,
    CARDINAL_DELTAS, PERPENDICULAR_TUNNEL,
)
from mousepath.core.grid import PipeGrid


def goal_test(grid: PipeGrid, current: Coordinate) -> bool:
    """True when `current` holds an (unmarked) endpoint."""
    return grid.symbol_at(current) == ENDPOINT


def orthogonal_neighbors(grid: PipeGrid, coord: Coordinate,
                         order: Sequence[Tuple[int, int]] = CARDINAL_DELTAS) -> List[Coordinate]:
    """
    Orthogonal neighbours a junction can connect to.

    A neighbour qualifies when it is drawn and is not a tunnel running
    across the direction of travel.
    """
    neighbors = []
    for delta in order:
        neighbor = coord.shifted(delta)
        symbol = grid.symbol_at(neighbor)
        if symbol != BLANK and symbol != PERPENDICULAR_TUNNEL[tuple(delta)]:
            neighbors.append(neighbor)
    return neighbors


def tunnel_neighbors(grid: PipeGrid, expanding: Coordinate,
                     previous: Optional[Coordinate], avoid_symbol: str,
                     visited: AbstractSet[Coordinate]) -> List[Coordinate]:
    """
    Straight continuation out of a tunnel cell.

    Args:
        grid: Grid being searched
        expanding: Tunnel cell being expanded
        previous: Cell the path arrived from
        avoid_symbol: Tunnel symbol the continuation must not be
        visited: Cells already on the path

    Returns:
        A list with the continuation cell, or an empty list
    """
    if previous is None:
        return []

    ahead = expanding.continuation(previous)
    symbol = grid.symbol_at(ahead)
    if symbol == BLANK or symbol == avoid_symbol or ahead in visited:
        return []
    return [ahead]


def expand(grid: PipeGrid, previous: Optional[Coordinate], expanding: Coordinate,
           visited: AbstractSet[Coordinate],
           order: Sequence[Tuple[int, int]] = CARDINAL_DELTAS) -> List[Coordinate]:
    """
    Candidate next cells from `expanding`, in expansion order.

    Args:
        grid: Grid being searched
        previous: Cell before `expanding` on the path (None at the origin)
        expanding: Cell being expanded
        visited: Cells already on the path
        order: Cardinal deltas in the order candidates are produced

    Returns:
        List of candidate coordinates
    """
    symbol = grid.symbol_at(expanding)

    if symbol == VISITED_START:
        return orthogonal_neighbors(grid, expanding, order)

    if symbol == CROSS:
        candidates = orthogonal_neighbors(grid, expanding, order)
        if previous is None:
            return [c for c in candidates if c not in visited]
        opposite = expanding.continuation(previous)
        return [c for c in candidates
                if c != opposite and c != previous and c not in visited]

    if symbol == H_TUNNEL:
        return tunnel_neighbors(grid, expanding, previous, V_TUNNEL, visited)

    if symbol == V_TUNNEL:
        return tunnel_neighbors(grid, expanding, previous, H_TUNNEL, visited)

    return []
