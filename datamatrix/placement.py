# -*- coding: utf-8 -*-
"""
Data Matrix Module Placement Module

Places the bits of the final codeword stream into the mapping matrix (the
data area of the symbol with every finder border removed) following the
diagonal "utah" walk of ISO/IEC 16022 Annex F.

Most codewords occupy the utah shape:

        . 7 6          bit 7 = most significant bit
        5 4 3
        2 1 0  <- anchor (row, col)

Four corner configurations cannot hold a utah and use fixed shapes instead.
They are kept as CornerRule data rather than inline conditions.

Functions:
    place_codewords: Build the placement map for a mapping matrix
    check_placement: Verify a placement map against the codeword count
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, List, Optional, Tuple

from .exceptions import InternalPlacementMismatch

# Placement map cell: (codeword index, bit) with bit 7 = MSB, or one of:
EMPTY = None
FIXED_DARK = (-1, 1)
FIXED_LIGHT = (-1, 0)

Cell = Optional[Tuple[int, int]]

# (row offset, column offset, bit) relative to the anchor
UTAH_SHAPE: Tuple[Tuple[int, int, int], ...] = (
    (-2, -2, 7), (-2, -1, 6),
    (-1, -2, 5), (-1, -1, 4), (-1, 0, 3),
    (0, -2, 2), (0, -1, 1), (0, 0, 0),
)


@dataclass(frozen=True)
class CornerRule:
    """
    A fixed corner shape used instead of a utah at one point of the walk.

    Attributes:
        tag (str): Corner pattern name (1-4 in the standard)
        trigger_row (Callable): Walk row at which the rule fires, from nrows
        trigger_col (int): Walk column at which the rule fires
        applies (Callable): Condition on the number of mapping columns
        modules (Tuple): (row, column, bit) triples; row and column are
            callables of (nrows, ncols)
    """

    tag: str
    trigger_row: Callable[[int], int]
    trigger_col: int
    applies: Callable[[int], bool]
    modules: Tuple[Tuple[Callable[[int, int], int], Callable[[int, int], int], int], ...]

    def fires(self, row: int, col: int, nrows: int, ncols: int) -> bool:
        return row == self.trigger_row(nrows) and col == self.trigger_col and self.applies(ncols)

    def positions(self, nrows: int, ncols: int) -> List[Tuple[int, int, int]]:
        return [(r(nrows, ncols), c(nrows, ncols), bit) for r, c, bit in self.modules]


def _at(value: int) -> Callable[[int, int], int]:
    return lambda nrows, ncols: value


def _from_bottom(offset: int) -> Callable[[int, int], int]:
    return lambda nrows, ncols: nrows - offset


def _from_right(offset: int) -> Callable[[int, int], int]:
    return lambda nrows, ncols: ncols - offset


CORNER_RULES: Tuple[CornerRule, ...] = (
    CornerRule(
        tag="corner1",
        trigger_row=lambda nrows: nrows,
        trigger_col=0,
        applies=lambda ncols: True,
        modules=(
            (_from_bottom(1), _at(0), 7), (_from_bottom(1), _at(1), 6), (_from_bottom(1), _at(2), 5),
            (_at(0), _from_right(2), 4), (_at(0), _from_right(1), 3),
            (_at(1), _from_right(1), 2), (_at(2), _from_right(1), 1), (_at(3), _from_right(1), 0),
        ),
    ),
    CornerRule(
        tag="corner2",
        trigger_row=lambda nrows: nrows - 2,
        trigger_col=0,
        applies=lambda ncols: ncols % 4 != 0,
        modules=(
            (_from_bottom(3), _at(0), 7), (_from_bottom(2), _at(0), 6), (_from_bottom(1), _at(0), 5),
            (_at(0), _from_right(4), 4), (_at(0), _from_right(3), 3), (_at(0), _from_right(2), 2),
            (_at(0), _from_right(1), 1), (_at(1), _from_right(1), 0),
        ),
    ),
    CornerRule(
        tag="corner3",
        trigger_row=lambda nrows: nrows - 2,
        trigger_col=0,
        applies=lambda ncols: ncols % 8 == 4,
        modules=(
            (_from_bottom(3), _at(0), 7), (_from_bottom(2), _at(0), 6), (_from_bottom(1), _at(0), 5),
            (_at(0), _from_right(2), 4), (_at(0), _from_right(1), 3),
            (_at(1), _from_right(1), 2), (_at(2), _from_right(1), 1), (_at(3), _from_right(1), 0),
        ),
    ),
    CornerRule(
        tag="corner4",
        trigger_row=lambda nrows: nrows + 4,
        trigger_col=2,
        applies=lambda ncols: ncols % 8 == 0,
        modules=(
            (_from_bottom(1), _at(0), 7), (_from_bottom(1), _from_right(1), 6),
            (_at(0), _from_right(3), 5), (_at(0), _from_right(2), 4), (_at(0), _from_right(1), 3),
            (_at(1), _from_right(3), 2), (_at(1), _from_right(2), 1), (_at(1), _from_right(1), 0),
        ),
    ),
)


class _Placer:
    def __init__(self, nrows: int, ncols: int) -> None:
        self.nrows = nrows
        self.ncols = ncols
        self.cells: List[Cell] = [EMPTY] * (nrows * ncols)
        self.codeword = 0

    def module(self, row: int, col: int, bit: int) -> None:
        nrows, ncols = self.nrows, self.ncols
        # Shapes leaving the matrix wrap around to the opposite edge
        if row < 0:
            row += nrows
            col += 4 - ((nrows + 4) % 8)
        if col < 0:
            col += ncols
            row += 4 - ((ncols + 4) % 8)
        if row >= nrows:
            # Only reached by some rectangular (DMRE) sizes
            row -= nrows
        self.cells[row * ncols + col] = (self.codeword, bit)

    def utah(self, row: int, col: int) -> None:
        for dr, dc, bit in UTAH_SHAPE:
            self.module(row + dr, col + dc, bit)
        self.codeword += 1

    def corner(self, rule: CornerRule) -> None:
        for row, col, bit in rule.positions(self.nrows, self.ncols):
            self.module(row, col, bit)
        self.codeword += 1

    def is_free(self, row: int, col: int) -> bool:
        return self.cells[row * self.ncols + col] is EMPTY

    def walk(self) -> None:
        nrows, ncols = self.nrows, self.ncols
        row, col = 4, 0
        while True:
            for rule in CORNER_RULES:
                if rule.fires(row, col, nrows, ncols):
                    self.corner(rule)

            # Sweep up and to the right
            while True:
                if row < nrows and col >= 0 and self.is_free(row, col):
                    self.utah(row, col)
                row -= 2
                col += 2
                if not (row >= 0 and col < ncols):
                    break
            row += 1
            col += 3

            # Sweep down and to the left
            while True:
                if row >= 0 and col < ncols and self.is_free(row, col):
                    self.utah(row, col)
                row += 2
                col -= 2
                if not (row < nrows and col >= 0):
                    break
            row += 3
            col += 1

            if not (row < nrows or col < ncols):
                break

        # The bottom-right 2x2 square stays unused in some sizes
        last = nrows * ncols - 1
        if self.cells[last] is EMPTY:
            self.cells[last] = FIXED_DARK
            self.cells[last - ncols - 1] = FIXED_DARK
            for index in (last - 1, last - ncols):
                if self.cells[index] is EMPTY:
                    self.cells[index] = FIXED_LIGHT


@lru_cache(maxsize=None)
def place_codewords(nrows: int, ncols: int) -> Tuple[Cell, ...]:
    """
    Compute the placement map of a mapping matrix.

    The map only depends on the matrix dimensions, so it is computed once per
    size and cached; the returned tuple is never modified.

    Args:
        nrows (int): Rows of the mapping matrix
        ncols (int): Columns of the mapping matrix

    Returns:
        Tuple[Cell, ...]: Row-major cells holding (codeword index, bit), or
            FIXED_DARK / FIXED_LIGHT for the unused corner

    Example:
        >>> cells = place_codewords(8, 8)
        >>> cells[0]
        (1, 7)
    """
    placer = _Placer(nrows, ncols)
    placer.walk()
    return tuple(placer.cells)


def check_placement(cells: Tuple[Cell, ...], codewords: int) -> None:
    """
    Verify that every bit of `codewords` codewords is placed exactly once.

    Only the fixed 2x2 corner may be left without codeword bits.

    Raises:
        InternalPlacementMismatch: On any missing, duplicate or surplus bit
    """
    seen = set()
    fixed = 0
    for cell in cells:
        if cell is EMPTY:
            raise InternalPlacementMismatch("mapping matrix has unfilled modules")
        if cell[0] < 0:
            fixed += 1
            continue
        if cell in seen:
            raise InternalPlacementMismatch(f"codeword bit {cell} placed twice")
        seen.add(cell)

    expected = {(cw, bit) for cw in range(codewords) for bit in range(8)}
    if seen != expected:
        raise InternalPlacementMismatch(
            f"placed {len(seen)} codeword bits, {8 * codewords} expected"
        )
    if fixed not in (0, 4):
        raise InternalPlacementMismatch(f"{fixed} fixed modules, expected 0 or 4")
