import pytest

from datamatrix.exceptions import InputTooLong, InvalidForcedSize
from datamatrix.geometry import SymbolSize, size_for_dimensions
from datamatrix.size_selector import SizeSelector, resolve_forced_size, select_size


@pytest.mark.parametrize(
    "required,expected",
    [
        (0, "10x10"),
        (3, "10x10"),
        (4, "12x12"),
        (5, "12x12"),
        (6, "14x14"),
        (9, "8x32"),
        (1558, "144x144"),
    ],
)
def test_smallest_fitting_size(required: int, expected: str) -> None:
    assert select_size(required).name == expected


def test_six_codewords_pick_the_14x14_entry() -> None:
    assert select_size(6) == SymbolSize(14, 14, 14, 14, 8, 8, 10, 1)
    assert select_size(6, rectangular_extension=True) == SymbolSize(14, 14, 14, 14, 8, 8, 10, 1)


def test_square_only_skips_rectangles() -> None:
    assert select_size(9, square_only=True).name == "16x16"


def test_rectangular_extension_adds_sizes() -> None:
    assert select_size(17).name == "18x18"
    assert select_size(17, rectangular_extension=True).name == "18x18"
    assert select_size(19, rectangular_extension=True).name == "20x20"
    assert select_size(23, rectangular_extension=True).name == "8x64"


def test_too_long_for_every_size() -> None:
    with pytest.raises(InputTooLong) as info:
        select_size(1559)
    assert info.value.required == 1559
    assert info.value.capacity == 1558


@pytest.mark.parametrize("square_only", [False, True])
def test_too_long_for_every_extended_size(square_only: bool) -> None:
    with pytest.raises(InputTooLong) as info:
        select_size(1559, rectangular_extension=True, square_only=square_only)
    assert info.value.required == 1559
    assert info.value.capacity == 1558


@pytest.mark.parametrize(
    "identifier,expected",
    [
        (2, "12x12"),
        ("2", "12x12"),
        ("12x26", "12x26"),
        ("12 X 26", "12x26"),
        ((16, 48), "16x48"),
        (size_for_dimensions(20, 20), "20x20"),
    ],
)
def test_resolve_forced_size(identifier, expected: str) -> None:
    assert resolve_forced_size(identifier).name == expected


@pytest.mark.parametrize("identifier", [0, 43, True, "7x7", "big", (10, 11), 3.5, 31, "8x48"])
def test_unknown_forced_size(identifier) -> None:
    with pytest.raises(InvalidForcedSize):
        resolve_forced_size(identifier)


def test_extension_forced_size_needs_flag() -> None:
    assert resolve_forced_size(31, rectangular_extension=True).name == "8x48"
    assert resolve_forced_size("8x48", rectangular_extension=True).name == "8x48"


def test_forced_size_too_small() -> None:
    with pytest.raises(InvalidForcedSize):
        select_size(4, force_size=1)
    assert select_size(3, force_size=1).name == "10x10"


def test_forced_size_bypasses_search() -> None:
    assert select_size(1, force_size=24).name == "144x144"


def test_selector_capacities() -> None:
    selector = SizeSelector()
    assert selector.capacity_for(6) == 8
    assert selector.capacity_for(1559) is None
    assert selector.max_capacity == 1558

    forced = SizeSelector(force_size="12x12")
    assert forced.capacity_for(5) == 5
    assert forced.capacity_for(6) is None
    assert forced.max_capacity == 5


def test_selector_square_only_capacity() -> None:
    assert SizeSelector(square_only=True).capacity_for(9) == 12
    assert SizeSelector(rectangular_extension=True, square_only=True).max_capacity == 1558
