"""Grid coordinate value type."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Coordinate:
    """Immutable (row, col) pair with structural equality and hashing."""
    row: int
    col: int

    def __add__(self, other: 'Coordinate') -> 'Coordinate':
        return Coordinate(self.row + other.row, self.col + other.col)

    def __sub__(self, other: 'Coordinate') -> 'Coordinate':
        return Coordinate(self.row - other.row, self.col - other.col)

    def shifted(self, delta: Tuple[int, int]) -> 'Coordinate':
        dr, dc = delta
        return Coordinate(self.row + dr, self.col + dc)

    def continuation(self, previous: 'Coordinate') -> 'Coordinate':
        """Cell straight ahead when arriving here from `previous`."""
        return self + (self - previous)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def __repr__(self):
        return f"Coordinate({self.row}, {self.col})"
