"""
mousepath Core Module
=====================

Grid representation and shared constants.

- definitions: Symbol palette, symbol categories, movement deltas
- coordinate: Coordinate value type
- grid: PipeGrid numpy-backed character matrix

Usage:
    from mousepath.core import PipeGrid, Coordinate, ENDPOINT
"""

from mousepath.core.definitions import (
    BLANK,
    H_TUNNEL,
    V_TUNNEL,
    CROSS,
    ENDPOINT,
    VISITED_START,
    SYMBOL_PALETTE,
    SYMBOL_TO_NAME,
    LEGAL_SYMBOLS,
    CARDINAL_DELTAS,
    PERPENDICULAR_TUNNEL,
    MAX_EXITS,
)
from mousepath.core.coordinate import Coordinate
from mousepath.core.grid import PipeGrid, as_pipe_grid

__all__ = [
    'BLANK',
    'H_TUNNEL',
    'V_TUNNEL',
    'CROSS',
    'ENDPOINT',
    'VISITED_START',
    'SYMBOL_PALETTE',
    'SYMBOL_TO_NAME',
    'LEGAL_SYMBOLS',
    'CARDINAL_DELTAS',
    'PERPENDICULAR_TUNNEL',
    'MAX_EXITS',
    'Coordinate',
    'PipeGrid',
    'as_pipe_grid',
]
