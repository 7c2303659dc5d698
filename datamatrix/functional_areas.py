# -*- coding: utf-8 -*-
"""
Data Matrix Functional Areas Module

Finder patterns and symbol assembly. Every data region of a symbol carries
its own border: a solid "L" along the left column and the bottom row, and an
alternating clock track along the top row and the right column. Larger
symbols are tiled from several equally sized regions, each with its own
border.

Functions:
    region_origins: Top-left corner of every data region
    build_function_mask: Masks for border modules and their colours
    mapping_to_symbol: Translate mapping-matrix coordinates to symbol coordinates
    assemble_matrix: Build the final module grid from the codeword stream
"""

from typing import List, Sequence, Tuple

import numpy as np

from .exceptions import InternalPlacementMismatch
from .geometry import SymbolSize
from .placement import check_placement, place_codewords


def region_origins(size: SymbolSize) -> List[Tuple[int, int]]:
    """
    Top-left symbol coordinates of every data region, row by row.

    Example:
        >>> region_origins(size_for_dimensions(32, 32))
        [(0, 0), (0, 16), (16, 0), (16, 16)]
    """
    return [
        (r, c)
        for r in range(0, size.rows, size.region_rows)
        for c in range(0, size.columns, size.region_columns)
    ]


def build_function_mask(size: SymbolSize) -> Tuple[List[List[bool]], List[List[bool]]]:
    """
    Build masks identifying the finder pattern modules of a symbol.

    Args:
        size (SymbolSize): Symbol size

    Returns:
        Tuple[List[List[bool]], List[List[bool]]]: (func_mask, dark_mask)
            - func_mask[r][c] = True if module (r, c) belongs to a region border
            - dark_mask[r][c] = True if that border module is dark

    Example:
        >>> func_mask, dark_mask = build_function_mask(size_for_dimensions(10, 10))
        >>> dark_mask[0][:4]
        [True, False, True, False]
    """
    func_mask = [[False] * size.columns for _ in range(size.rows)]
    dark_mask = [[False] * size.columns for _ in range(size.rows)]

    for r0, c0 in region_origins(size):
        top = r0
        bottom = r0 + size.region_rows - 1
        left = c0
        right = c0 + size.region_columns - 1

        # 1. Clock track along the top row (dark on even columns)
        for c in range(left, right + 1):
            func_mask[top][c] = True
            dark_mask[top][c] = c % 2 == 0

        # 2. Clock track along the right column (dark on odd rows)
        for r in range(top, bottom + 1):
            func_mask[r][right] = True
            dark_mask[r][right] = r % 2 == 1

        # 3. Solid L: left column and bottom row
        for r in range(top, bottom + 1):
            func_mask[r][left] = True
            dark_mask[r][left] = True
        for c in range(left, right + 1):
            func_mask[bottom][c] = True
            dark_mask[bottom][c] = True

    return func_mask, dark_mask


def mapping_to_symbol(row: int, col: int, size: SymbolSize) -> Tuple[int, int]:
    """
    Translate a mapping-matrix position into symbol coordinates.

    Each region contributes (region_rows - 2) x (region_columns - 2) data
    modules; the translation skips the two border lines between regions.
    """
    inner_rows = size.region_rows - 2
    inner_cols = size.region_columns - 2
    return (
        row + 1 + 2 * (row // inner_rows),
        col + 1 + 2 * (col // inner_cols),
    )


def assemble_matrix(codewords: Sequence[int], size: SymbolSize) -> np.ndarray:
    """
    Build the module grid of a symbol.

    Args:
        codewords: Final interleaved stream (data + ECC codewords)
        size (SymbolSize): Symbol size

    Returns:
        np.ndarray: Boolean array of shape (rows, columns), True = dark

    Raises:
        InternalPlacementMismatch: If the stream and the geometry disagree
    """
    if len(codewords) != size.total_codewords:
        raise InternalPlacementMismatch(
            f"{len(codewords)} codewords for {size}, which takes {size.total_codewords}"
        )

    nrows, ncols = size.mapping_rows, size.mapping_columns
    cells = place_codewords(nrows, ncols)
    check_placement(cells, size.total_codewords)

    matrix = np.zeros((size.rows, size.columns), dtype=bool)
    for index, cell in enumerate(cells):
        codeword, bit = cell
        if codeword < 0:
            dark = bool(bit)
        else:
            dark = bool(codewords[codeword] & (1 << bit))
        if dark:
            matrix[mapping_to_symbol(index // ncols, index % ncols, size)] = True

    func_mask, dark_mask = build_function_mask(size)
    func = np.array(func_mask, dtype=bool)
    if matrix[func].any():
        raise InternalPlacementMismatch(f"data modules overlap the finder pattern of {size}")
    matrix |= np.array(dark_mask, dtype=bool)
    return matrix
