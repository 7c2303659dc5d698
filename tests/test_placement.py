import pytest

from datamatrix.exceptions import InternalPlacementMismatch
from datamatrix.geometry import EXTENDED_SIZES
from datamatrix.placement import (
    CORNER_RULES,
    EMPTY,
    FIXED_DARK,
    FIXED_LIGHT,
    check_placement,
    place_codewords,
)


@pytest.mark.parametrize("size", EXTENDED_SIZES, ids=str)
def test_every_bit_placed_once(size) -> None:
    cells = place_codewords(size.mapping_rows, size.mapping_columns)
    assert len(cells) == size.mapping_rows * size.mapping_columns
    check_placement(cells, size.total_codewords)


@pytest.mark.parametrize("size", EXTENDED_SIZES, ids=str)
def test_fixed_corner_only_when_space_is_left(size) -> None:
    nrows, ncols = size.mapping_rows, size.mapping_columns
    cells = place_codewords(nrows, ncols)
    fixed = [i for i, cell in enumerate(cells) if cell in (FIXED_DARK, FIXED_LIGHT)]
    if nrows * ncols == 8 * size.total_codewords:
        assert fixed == []
    else:
        last = nrows * ncols - 1
        assert fixed == [last - ncols - 1, last - ncols, last - 1, last]
        assert cells[last] == FIXED_DARK
        assert cells[last - ncols - 1] == FIXED_DARK
        assert cells[last - 1] == FIXED_LIGHT
        assert cells[last - ncols] == FIXED_LIGHT


def test_first_modules_of_smallest_matrix() -> None:
    cells = place_codewords(8, 8)
    assert cells[0] == (1, 7)
    # Anchor of the first utah
    assert cells[4 * 8 + 0] == (0, 0)


def test_placement_is_cached() -> None:
    assert place_codewords(10, 10) is place_codewords(10, 10)


@pytest.mark.parametrize("tag,nrows,ncols,fires", [
    ("corner1", 8, 8, True),
    ("corner2", 12, 14, True),
    ("corner2", 12, 16, False),
    ("corner3", 6, 12, True),
    ("corner3", 6, 16, False),
    ("corner4", 8, 16, True),
    ("corner4", 8, 12, False),
])
def test_corner_rule_conditions(tag: str, nrows: int, ncols: int, fires: bool) -> None:
    rule = next(r for r in CORNER_RULES if r.tag == tag)
    row = rule.trigger_row(nrows)
    assert rule.fires(row, rule.trigger_col, nrows, ncols) is fires


def test_corner_rule_positions_inside_matrix() -> None:
    for rule in CORNER_RULES:
        for row, col, bit in rule.positions(20, 20):
            assert 0 <= row < 20 and 0 <= col < 20
            assert 0 <= bit <= 7


def test_check_rejects_missing_codeword() -> None:
    cells = place_codewords(8, 8)
    with pytest.raises(InternalPlacementMismatch):
        check_placement(cells, 9)


def test_check_rejects_empty_module() -> None:
    cells = list(place_codewords(8, 8))
    cells[10] = EMPTY
    with pytest.raises(InternalPlacementMismatch):
        check_placement(tuple(cells), 8)


def test_check_rejects_duplicate_bit() -> None:
    cells = list(place_codewords(8, 8))
    cells[1] = cells[0]
    with pytest.raises(InternalPlacementMismatch):
        check_placement(tuple(cells), 8)
