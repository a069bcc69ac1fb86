"""
mousepath Search Module
=======================
Hamiltonian path search over pipe grids.

- expansion: Neighbour generation per cell symbol, goal test
- hamiltonian_dfs: Backtracking search engine, options and diagnostics
"""

from .expansion import expand, goal_test, orthogonal_neighbors, tunnel_neighbors
from .hamiltonian_dfs import (
    HamiltonianDFS,
    SearchOptions,
    SearchDiagnostics,
    DFSMetrics,
    search,
    recursion_headroom,
)

__all__ = [
    'expand',
    'goal_test',
    'orthogonal_neighbors',
    'tunnel_neighbors',
    'HamiltonianDFS',
    'SearchOptions',
    'SearchDiagnostics',
    'DFSMetrics',
    'search',
    'recursion_headroom',
]
