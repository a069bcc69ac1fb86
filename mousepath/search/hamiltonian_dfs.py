"""
Hamiltonian Path DFS for Pipe Grids
===================================

Depth-first backtracking search for a path that starts at the marked
search origin, walks only along drawn tunnels, visits every drawable cell
exactly once, and ends on the other endpoint.

Key Features:
- Exhaustive: every candidate order is eventually tried via backtracking
- Shared scratch state: one visited set and one path list, pushed on entry
  and popped on failure, so each branch sees only its ancestors' cells
- Deterministic candidate order (configurable through SearchOptions)
- Bounded depth: at most one live frame per drawable cell

Performance:
- Time: exponential in the worst case (Hamiltonian path is NP-complete)
- Space: O(n) for the visited set, path and recursion stack
"""

import sys
import time
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from mousepath.core.coordinate import Coordinate
from mousepath.core.definitions import CARDINAL_DELTAS
from mousepath.core.grid import PipeGrid
from mousepath.search.expansion import expand, goal_test

logger = logging.getLogger(__name__)


# ==========================================
# OPTIONS AND DIAGNOSTICS
# ==========================================

@dataclass
class SearchOptions:
    """Configuration options for the path search.

    neighbor_order must be a permutation of the four cardinal deltas.
    """
    neighbor_order: Tuple[Tuple[int, int], ...] = CARDINAL_DELTAS
    record_diagnostics: bool = False
    recursion_headroom: int = 200  # Frames kept free above one per drawable cell

    def __post_init__(self):
        self.neighbor_order = tuple(tuple(d) for d in self.neighbor_order)
        if sorted(self.neighbor_order) != sorted(CARDINAL_DELTAS):
            raise ValueError(
                f"neighbor_order must be a permutation of {CARDINAL_DELTAS}, "
                f"got {self.neighbor_order}"
            )
        if self.recursion_headroom < 0:
            raise ValueError("recursion_headroom must be non-negative")

    @classmethod
    def for_profile(cls, profile: str = "default") -> 'SearchOptions':
        """Factory method for common search configurations."""
        if profile == "debug":
            return cls(record_diagnostics=True)
        elif profile == "reverse":
            return cls(neighbor_order=tuple(reversed(CARDINAL_DELTAS)))
        return cls()  # Default


@dataclass
class DFSMetrics:
    """Performance metrics for one search."""
    states_explored: int = 0
    backtrack_count: int = 0
    rejected_endpoints: int = 0  # Endpoint reached before covering every cell
    max_depth_reached: int = 0
    nodes_at_depth: Dict[int, int] = field(default_factory=dict)


@dataclass
class SearchDiagnostics:
    """Detailed diagnostics from a search run."""
    success: bool
    states_explored: int
    backtrack_count: int = 0
    rejected_endpoints: int = 0
    max_depth_reached: int = 0
    target_size: int = 0
    time_taken_ms: float = 0.0
    failure_reason: str = ""
    path_length: int = 0

    def summary(self) -> str:
        """Human-readable summary of search performance."""
        status = "SUCCESS" if self.success else f"FAILED: {self.failure_reason}"
        return f"""
=== Search Diagnostics ===
Status: {status}
Drawable Cells: {self.target_size}
States Explored: {self.states_explored:,}
Backtracks: {self.backtrack_count:,}
Rejected Endpoint Hits: {self.rejected_endpoints:,}
Max Depth: {self.max_depth_reached}
Time Taken: {self.time_taken_ms:.1f}ms
Path Length: {self.path_length}
=========================="""


# The recursion limit is process-wide: every active search registers the
# limit it needs, and the original is restored only when the last one exits.
_limit_lock = threading.Lock()
_active_limits: List[int] = []
_base_limit: Optional[int] = None


def _stack_depth() -> int:
    """Number of frames on the calling thread's stack."""
    depth = 0
    frame = sys._getframe(1)
    while frame is not None:
        depth += 1
        frame = frame.f_back
    return depth


def _apply_limit() -> None:
    # Caller holds _limit_lock
    wanted = max([_base_limit] + _active_limits)
    if wanted != sys.getrecursionlimit():
        sys.setrecursionlimit(wanted)


@contextmanager
def recursion_headroom(frames: int) -> Iterator[None]:
    """
    Guarantee `frames` more frames above the caller's current stack depth.

    Safe to nest and to use from several threads at once: the limit is the
    highest one any active search needs, never lower than the original.
    """
    global _base_limit
    needed = _stack_depth() + frames

    with _limit_lock:
        if not _active_limits:
            _base_limit = sys.getrecursionlimit()
        _active_limits.append(needed)
        if needed > sys.getrecursionlimit():
            logger.debug(f'Recursion limit raised from {sys.getrecursionlimit()} to {needed}')
        _apply_limit()
    try:
        yield
    finally:
        with _limit_lock:
            _active_limits.remove(needed)
            _apply_limit()
            if not _active_limits:
                _base_limit = None


# ==========================================
# SEARCH ENGINE
# ==========================================

class HamiltonianDFS:
    """
    Recursive backtracking search over a pipe grid.

    The origin cell must carry the VISITED_START marker so that its first
    expansion uses the free-junction rule and it is never mistaken for the
    destination endpoint.
    """

    def __init__(self, grid: PipeGrid, target_size: int,
                 options: Optional[SearchOptions] = None):
        """
        Initialize the search.

        Args:
            grid: Grid to search, with the origin already marked
            target_size: Number of drawable cells a full path must cover
            options: Search configuration (defaults when None)
        """
        self.grid = grid
        self.target_size = target_size
        self.options = options or SearchOptions()

        self.metrics = DFSMetrics()
        self.solution: List[Coordinate] = []

    def search(self, current: Coordinate, visited: Set[Coordinate],
               path: List[Coordinate]) -> bool:
        """
        Extend the path with `current` and explore from there.

        On success the visited/path state is left as it was at the goal;
        on failure it is restored to what the caller passed in.

        Args:
            current: Cell being visited in this frame
            visited: Cells on the current partial path
            path: Current partial path, in order

        Returns:
            True iff a full-coverage path to an endpoint exists from here
        """
        visited.add(current)
        path.append(current)

        self.metrics.states_explored += 1
        depth = len(path)
        self.metrics.max_depth_reached = max(self.metrics.max_depth_reached, depth)
        self.metrics.nodes_at_depth[depth] = self.metrics.nodes_at_depth.get(depth, 0) + 1

        if goal_test(self.grid, current):
            # The goal cell is counted through the +1, not the set
            visited.remove(current)
            path.pop()
            if len(visited) + 1 == self.target_size:
                self.solution = path + [current]
                return True
            self.metrics.rejected_endpoints += 1
            return False

        previous = path[-2] if len(path) > 1 else None
        for neighbor in expand(self.grid, previous, current, visited,
                               self.options.neighbor_order):
            if self.search(neighbor, visited, path):
                return True

        # Dead end - backtrack
        visited.remove(current)
        path.pop()
        self.metrics.backtrack_count += 1
        return False

    def solve(self, start: Coordinate) -> Tuple[bool, List[Coordinate]]:
        """
        Run a fresh search from `start`.

        Returns:
            success: Whether a Hamiltonian path was found
            path: The path from start to the destination endpoint (if found)
        """
        self.metrics = DFSMetrics()
        self.solution = []

        logger.debug(f'HamiltonianDFS: searching from {start} '
                     f'(target_size={self.target_size})')

        with recursion_headroom(self.target_size + self.options.recursion_headroom):
            success = self.search(start, set(), [])

        logger.debug(f'HamiltonianDFS: success={success}, '
                     f'states={self.metrics.states_explored}, '
                     f'backtracks={self.metrics.backtrack_count}')
        return success, list(self.solution) if success else []

    def solve_with_diagnostics(self, start: Coordinate) -> Tuple[bool, List[Coordinate], SearchDiagnostics]:
        """
        Solve with detailed diagnostics.

        Returns:
            (success, path, diagnostics)
        """
        start_time = time.perf_counter()
        success, path = self.solve(start)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        if success:
            reason = ""
        elif self.metrics.rejected_endpoints:
            reason = "endpoint only reachable without covering every drawable cell"
        else:
            reason = "endpoint unreachable from the start"

        diag = SearchDiagnostics(
            success=success,
            states_explored=self.metrics.states_explored,
            backtrack_count=self.metrics.backtrack_count,
            rejected_endpoints=self.metrics.rejected_endpoints,
            max_depth_reached=self.metrics.max_depth_reached,
            target_size=self.target_size,
            time_taken_ms=elapsed_ms,
            failure_reason=reason,
            path_length=len(path),
        )
        return success, path, diag


def search(current: Coordinate, visited: Set[Coordinate], path: List[Coordinate],
           grid: PipeGrid, target_size: int,
           options: Optional[SearchOptions] = None) -> bool:
    """Functional form of `HamiltonianDFS.search` sharing the caller's state."""
    engine = HamiltonianDFS(grid, target_size, options)
    with recursion_headroom(target_size + engine.options.recursion_headroom):
        return engine.search(current, visited, path)
