"""
mousepath Validation Module
===========================
Structural checks and end-to-end grid validation.

- sanity: GridSanityChecker (illegal characters, exit counts, endpoints)
- validator: MousePathValidator, result types, is_valid_grid
"""

from .sanity import GridSanityChecker
from .validator import (
    MousePathValidator,
    ValidationResult,
    BatchValidationResult,
    is_valid_grid,
)

__all__ = [
    'GridSanityChecker',
    'MousePathValidator',
    'ValidationResult',
    'BatchValidationResult',
    'is_valid_grid',
]
