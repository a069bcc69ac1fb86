"""
End-to-end tests for grid validation.

Run with: pytest tests/test_mouse_path_validator.py -v
"""

import sys
import threading
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from mousepath import MousePathValidator, PipeGrid, SearchOptions, is_valid_grid
from mousepath.core import VISITED_START, Coordinate
from mousepath.search import HamiltonianDFS


# ==============================================================================
# KNOWN GRIDS
# ==============================================================================

VALID_GRIDS = {
    'corridor': [
        "           ",
        "X---------X",
        "           ",
        "           ",
    ],
    'adjacent_endpoints': [
        "  ",
        "XX",
        "  ",
    ],
    'loop': [
        "X-+ ",
        "  | ",
        "++++",
        "|+-+",
        "+--X",
    ],
    'down_up': [
        " X X",
        " | |",
        " | |",
        " +-+",
    ],
    'zigzag': [
        "XX ",
        "|| ",
        "|++",
        "+-+",
    ],
}

INVALID_GRIDS = {
    'dangling_tunnel': [
        "X  ",
        "|  ",
        "+-X",
        "|  ",
    ],
    'isolated_finish': [
        "X--+    +---+",
        "   |----+  ++",
        "           +X",
    ],
    'straight_through_crossing': [
        "           ",
        "X----+X",
        "           ",
        "           ",
    ],
    'dead_end_crossing': [
        " X  ",
        " |  ",
        " +  ",
        " X  ",
    ],
    'shortcut': [
        " X-X",
        " | |",
        " | |",
        " +-+",
    ],
    'zigzag_with_extra_row': [
        "XX ",
        "|| ",
        "|++",
        "+-+",
        "+-+",
    ],
}


@pytest.mark.parametrize("name", sorted(VALID_GRIDS))
def test_valid_grids(name):
    assert is_valid_grid(VALID_GRIDS[name])


@pytest.mark.parametrize("name", sorted(INVALID_GRIDS))
def test_invalid_grids(name):
    assert not is_valid_grid(INVALID_GRIDS[name])


def test_single_row_corridor():
    assert is_valid_grid(["X---------X"])


def test_adjacent_endpoints_single_row():
    assert is_valid_grid(["XX"])


# ==============================================================================
# PROPERTIES
# ==============================================================================

@pytest.mark.parametrize("length", [0, 1, 2, 7, 25])
def test_straight_horizontal_corridor(length):
    assert is_valid_grid(["X" + "-" * length + "X"])


@pytest.mark.parametrize("length", [0, 1, 2, 7, 25])
def test_straight_vertical_corridor(length):
    assert is_valid_grid(["X"] + ["|"] * length + ["X"])


def test_corridor_with_margin():
    assert is_valid_grid(["      ", "  X-X ", "      "])


@pytest.mark.parametrize("rows", [
    # Crossing fed by three tunnels
    ["X  ", "|  ", "+-X", "|  "],
    # Crossing fed by four tunnels, grid otherwise unrelated
    [" |  ", "-+-X", " |  ", " X  "],
    # Endpoint fed by three tunnels
    [" |  ", "-X-X", " |  "],
])
def test_three_or_more_exits_always_invalid(rows):
    result = MousePathValidator().validate(rows)
    assert not result.is_valid
    assert not result.is_valid_syntax
    assert any("tunnel exits" in e for e in result.errors)


@pytest.mark.parametrize("rows", [
    ["X---"],
    ["X-X-X"],
    ["----"],
    ["XX", "XX"],
])
def test_endpoint_count_other_than_two(rows):
    assert not is_valid_grid(rows)


@pytest.mark.parametrize("rows", [None, [], [""], ["   ", "   "], [None]])
def test_empty_grids_are_invalid_without_error(rows):
    assert is_valid_grid(rows) is False


def test_illegal_character_invalid():
    assert not is_valid_grid(["X-#-X"])


def test_ragged_rows_are_padded():
    assert is_valid_grid(["+-X", "|", "X"])
    # Dangling tunnel below the lower endpoint
    assert is_valid_grid(["+-X", "|", "X", "|"]) is False


def test_non_row_inputs():
    assert is_valid_grid(np.array([list("X--X")]))
    assert is_valid_grid(PipeGrid.from_text("X-+\n  |\n  X"))


# ==============================================================================
# IDEMPOTENCE AND MARKER HYGIENE
# ==============================================================================

@pytest.mark.parametrize("rows", [VALID_GRIDS['loop'], INVALID_GRIDS['shortcut']])
def test_repeated_calls_leave_grid_untouched(rows):
    grid = PipeGrid.from_rows(rows)
    before = grid.cells.copy()

    first = is_valid_grid(grid)
    assert np.array_equal(grid.cells, before)
    second = is_valid_grid(grid)
    assert np.array_equal(grid.cells, before)

    assert first == second
    assert not (grid.cells == VISITED_START).any()


def test_numpy_input_restored_in_place():
    cells = np.array([list(row) for row in VALID_GRIDS['zigzag']])
    before = cells.copy()
    assert is_valid_grid(cells)
    assert np.array_equal(cells, before)


def test_marker_restored_when_search_raises(monkeypatch):
    def exploding_solve(self, start):
        raise RuntimeError("search failed")

    monkeypatch.setattr(HamiltonianDFS, "solve", exploding_solve)
    grid = PipeGrid.from_rows(VALID_GRIDS['down_up'])

    with pytest.raises(RuntimeError):
        MousePathValidator().validate(grid)
    assert grid.to_rows() == VALID_GRIDS['down_up']


# ==============================================================================
# RESULTS
# ==============================================================================

def test_result_carries_path():
    result = MousePathValidator().validate(VALID_GRIDS['down_up'])
    assert result.is_valid
    assert result.drawable_cells == 9
    assert result.path[0] == Coordinate(0, 3)
    assert result.path[-1] == Coordinate(0, 1)
    assert len(result.path) == 9

    data = result.to_dict()
    assert data['path'][0] == (0, 3)
    assert data['errors'] == []


def test_result_for_missing_path():
    result = MousePathValidator().validate(INVALID_GRIDS['shortcut'])
    assert not result.is_valid
    assert result.is_valid_syntax
    assert result.drawable_cells == 10
    assert result.path == []
    assert "10 drawable cells" in result.error_message


def test_structural_failure_skips_search(monkeypatch):
    def unexpected_solve(self, start):
        raise AssertionError("search must not run")

    monkeypatch.setattr(HamiltonianDFS, "solve", unexpected_solve)
    result = MousePathValidator().validate(["X-X-X"])
    assert not result.is_valid
    assert "found 3" in result.error_message


def test_debug_profile_attaches_diagnostics():
    validator = MousePathValidator(SearchOptions.for_profile("debug"))
    result = validator.validate(VALID_GRIDS['loop'])
    assert result.is_valid
    assert result.diagnostics is not None
    assert result.diagnostics.target_size == 16
    assert result.diagnostics.path_length == 16


def test_validate_batch():
    grids = [VALID_GRIDS['corridor'], INVALID_GRIDS['shortcut'], ["X?X"]]
    batch = MousePathValidator().validate_batch(grids)

    assert batch.total_grids == 3
    assert batch.valid_count == 1
    assert batch.valid_syntax_count == 2
    assert batch.validity_rate == pytest.approx(1 / 3)
    assert "Total Grids: 3" in batch.summary()


def test_validate_empty_batch():
    batch = MousePathValidator().validate_batch([])
    assert batch.total_grids == 0
    assert batch.validity_rate == 0.0


def test_long_corridor_beyond_default_recursion_limit():
    limit = sys.getrecursionlimit()
    assert is_valid_grid(["X" + "-" * (limit + 100) + "X"])
    assert sys.getrecursionlimit() == limit


def test_long_corridor_validated_from_deep_call_stack():
    corridor = ["X" + "-" * 700 + "X"]

    def nest(levels):
        if levels == 0:
            return is_valid_grid(corridor)
        return nest(levels - 1)

    assert nest(250)


def test_concurrent_long_corridors():
    limit = sys.getrecursionlimit()
    results, errors = [], []

    def worker(length):
        try:
            for _ in range(5):
                results.append(is_valid_grid(["X" + "-" * length + "X"]))
        except RecursionError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(1800 + 300 * i,), name=f'corridor-{i}')
               for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert results == [True] * 20
    assert sys.getrecursionlimit() == limit
