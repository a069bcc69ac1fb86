"""
mousepath - Pipe Maze Hamiltonian Path Validator
================================================

Checks whether a character grid drawing a pipe maze (tunnels `-` and `|`,
crossings `+`, and two endpoints `X`) holds a path between the endpoints
that follows the drawn tunnels and visits every drawn cell exactly once.

Submodules:
- core: Symbol definitions, Coordinate, PipeGrid
- search: Neighbour expansion and Hamiltonian DFS
- validation: Sanity checks and the validator orchestrator

Usage:
    from mousepath import is_valid_grid

    is_valid_grid(["X---------X"])  # True
"""

__version__ = "1.0.0"

from mousepath.core import Coordinate, PipeGrid
from mousepath.search import SearchOptions
from mousepath.validation import (
    MousePathValidator,
    ValidationResult,
    BatchValidationResult,
    is_valid_grid,
)

__all__ = [
    'core',
    'search',
    'validation',
    'Coordinate',
    'PipeGrid',
    'SearchOptions',
    'MousePathValidator',
    'ValidationResult',
    'BatchValidationResult',
    'is_valid_grid',
]
