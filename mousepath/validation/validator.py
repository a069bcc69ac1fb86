"""
MOUSEPATH GRID VALIDATOR
========================
Validation suite for pipe-maze grids.

This module provides:
1. SANITY CHECK - structural legality (see sanity.py), no search on failure
2. PATH SEARCH - Hamiltonian DFS from one endpoint to the other
3. RESULTS - per-grid and batch validation summaries

The public entry point is `is_valid_grid(grid) -> bool`.

"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from mousepath.core.coordinate import Coordinate
from mousepath.core.grid import as_pipe_grid
from mousepath.search.hamiltonian_dfs import (
    HamiltonianDFS, SearchOptions, SearchDiagnostics,
)
from mousepath.validation.sanity import GridSanityChecker

logger = logging.getLogger(__name__)


# ==========================================
# DATA STRUCTURES
# ==========================================

@dataclass
class ValidationResult:
    """Results from validating a single grid."""
    is_valid: bool
    is_valid_syntax: bool
    drawable_cells: int
    path: List[Coordinate] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    error_message: str = ""
    diagnostics: Optional[SearchDiagnostics] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'is_valid_syntax': self.is_valid_syntax,
            'drawable_cells': self.drawable_cells,
            'path': [c.as_tuple() for c in self.path],
            'errors': self.errors,
            'error_message': self.error_message,
        }


@dataclass
class BatchValidationResult:
    """Results from validating a batch of grids."""
    total_grids: int
    valid_syntax_count: int
    valid_count: int
    validity_rate: float
    individual_results: List[ValidationResult] = field(default_factory=list)

    def summary(self) -> str:
        return f"""
=== Batch Validation Summary ===
Total Grids: {self.total_grids}
Valid Syntax: {self.valid_syntax_count} ({100*self.valid_syntax_count/max(1,self.total_grids):.1f}%)
Valid (Hamiltonian): {self.valid_count} ({100*self.validity_rate:.1f}%)
================================
"""


# ==========================================
# VALIDATOR
# ==========================================

class MousePathValidator:
    """
    Main validation orchestrator.

    Coordinates sanity checking and the Hamiltonian path search. Row
    sequences are copied before searching; a PipeGrid or numpy array is
    searched in place and always left exactly as it was passed in.
    """

    def __init__(self, options: Optional[SearchOptions] = None):
        self.options = options or SearchOptions()

    def validate(self, grid) -> ValidationResult:
        """
        Validate a single grid.

        Args:
            grid: PipeGrid, 2-D numpy character array, or sequence of rows

        Returns:
            ValidationResult with the verdict, reasons and (if found) path
        """
        pipe_grid = as_pipe_grid(grid)

        # Step 1: Sanity Check
        checker = GridSanityChecker(pipe_grid)
        is_valid, errors = checker.check_all()
        target_size = checker.drawable_count()

        if not is_valid:
            return ValidationResult(
                is_valid=False,
                is_valid_syntax=False,
                drawable_cells=target_size,
                errors=errors,
                error_message="; ".join(errors),
            )

        # Step 2: Search from the marked origin
        start = checker.locate_start()
        solver = HamiltonianDFS(pipe_grid, target_size, self.options)
        diagnostics = None

        with pipe_grid.marked_start(start):
            if self.options.record_diagnostics:
                success, path, diagnostics = solver.solve_with_diagnostics(start)
            else:
                success, path = solver.solve(start)

        if not success:
            message = (f"No path from {start} covers all {target_size} drawable cells "
                       f"and ends on the other endpoint")
            logger.debug(f'MousePathValidator: {message}')
            return ValidationResult(
                is_valid=False,
                is_valid_syntax=True,
                drawable_cells=target_size,
                errors=["No Hamiltonian path between the endpoints"],
                error_message=message,
                diagnostics=diagnostics,
            )

        return ValidationResult(
            is_valid=True,
            is_valid_syntax=True,
            drawable_cells=target_size,
            path=path,
            diagnostics=diagnostics,
        )

    def is_valid_grid(self, grid) -> bool:
        return self.validate(grid).is_valid

    def validate_batch(self, grids: Sequence) -> BatchValidationResult:
        """
        Validate a batch of grids.

        Args:
            grids: Grids accepted by `validate`

        Returns:
            BatchValidationResult with aggregate counts
        """
        results = [self.validate(grid) for grid in grids]

        total = len(results)
        valid_syntax = sum(1 for r in results if r.is_valid_syntax)
        valid = sum(1 for r in results if r.is_valid)

        logger.info(f'Validated {total} grids: {valid} valid, {valid_syntax} structurally legal')

        return BatchValidationResult(
            total_grids=total,
            valid_syntax_count=valid_syntax,
            valid_count=valid,
            validity_rate=valid / total if total > 0 else 0.0,
            individual_results=results,
        )


def is_valid_grid(grid) -> bool:
    """
    True iff `grid` is structurally legal and holds a Hamiltonian path
    between its two endpoints.

    Never raises for illegal characters, crowded cells, wrong endpoint
    counts or missing paths; those are all reported as False.
    """
    return MousePathValidator().is_valid_grid(grid)


# ==========================================
# STANDALONE DEMO
# ==========================================

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG,
                        format='%(levelname)s - %(name)s - %(message)s')

    demo_grids: List[Tuple[str, List[str]]] = [
        ("corridor", ["X---------X"]),
        ("down-up", [" X X", " | |", " | |", " +-+"]),
        ("shortcut", [" X-X", " | |", " | |", " +-+"]),
    ]

    validator = MousePathValidator(SearchOptions.for_profile("debug"))
    for name, rows in demo_grids:
        result = validator.validate(rows)
        logger.info(f'{name}: valid={result.is_valid} {result.error_message}')
        if result.diagnostics is not None:
            logger.info(result.diagnostics.summary())

    batch = validator.validate_batch([rows for _, rows in demo_grids])
    logger.info(batch.summary())
