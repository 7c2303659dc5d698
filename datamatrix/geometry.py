# -*- coding: utf-8 -*-
"""
Data Matrix Geometry Tables Module

Immutable catalogs of every ECC 200 symbol size according to ISO/IEC 16022
(square and rectangular sizes) and ISO/IEC 21471 (DMRE rectangular
extension). Catalogs are ordered by ascending data capacity with square sizes
ahead of rectangular ones of equal capacity, which is the order the size
selector searches them in.

The externally visible "size option number" is kept in its own translation
table (SIZE_OPTIONS) so that capacity ordering and stable option numbers never
share an index.

Functions:
    size_for_dimensions: Look up a size by its module dimensions
    size_for_option: Look up a size by its stable option number
    catalog: Return the standard or extended catalog
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class SymbolSize:
    """
    One symbol size of the catalog.

    Attributes:
        rows (int): Symbol height in modules, finder borders included
        columns (int): Symbol width in modules, finder borders included
        region_rows (int): Height of one data region including its border
        region_columns (int): Width of one data region including its border
        data_codewords (int): Total number of data codewords
        data_block (int): Data codewords of the largest interleaved block
        ecc_block (int): Error correction codewords per block
        blocks (int): Number of interleaved Reed-Solomon blocks
    """

    rows: int
    columns: int
    region_rows: int
    region_columns: int
    data_codewords: int
    data_block: int
    ecc_block: int
    blocks: int

    @property
    def name(self) -> str:
        return f"{self.rows}x{self.columns}"

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    @property
    def regions_vertical(self) -> int:
        return self.rows // self.region_rows

    @property
    def regions_horizontal(self) -> int:
        return self.columns // self.region_columns

    @property
    def mapping_rows(self) -> int:
        """Rows of the mapping matrix, i.e. the data area without finder borders."""
        return self.rows - 2 * self.regions_vertical

    @property
    def mapping_columns(self) -> int:
        """Columns of the mapping matrix, i.e. the data area without finder borders."""
        return self.columns - 2 * self.regions_horizontal

    @property
    def ecc_codewords(self) -> int:
        return self.blocks * self.ecc_block

    @property
    def total_codewords(self) -> int:
        return self.data_codewords + self.ecc_codewords

    def block_data_lengths(self) -> List[int]:
        """
        Number of data codewords carried by each interleaved block.

        Data codewords are dealt round-robin, so when the total does not divide
        evenly the first blocks receive one codeword more than the last ones.

        Returns:
            List[int]: Data length per block, in block order

        Example:
            >>> size_for_dimensions(144, 144).block_data_lengths()
            [156, 156, 156, 156, 156, 156, 156, 156, 155, 155]
        """
        base, extra = divmod(self.data_codewords, self.blocks)
        return [base + 1 if b < extra else base for b in range(self.blocks)]

    def __str__(self) -> str:
        return self.name


# Size catalog rows (ISO/IEC 16022 Table 7, ISO/IEC 21471 Table 7)
# Format: (rows, columns, region_rows, region_columns,
#          data_codewords, data_block, ecc_block, blocks)
_SQUARE_AND_ISO_RECTANGLES = [
    (10, 10, 10, 10, 3, 3, 5, 1),
    (12, 12, 12, 12, 5, 5, 7, 1),
    (8, 18, 8, 18, 5, 5, 7, 1),
    (14, 14, 14, 14, 8, 8, 10, 1),
    (8, 32, 8, 16, 10, 10, 11, 1),
    (16, 16, 16, 16, 12, 12, 12, 1),
    (12, 26, 12, 26, 16, 16, 14, 1),
    (18, 18, 18, 18, 18, 18, 14, 1),
    (20, 20, 20, 20, 22, 22, 18, 1),
    (12, 36, 12, 18, 22, 22, 18, 1),
    (22, 22, 22, 22, 30, 30, 20, 1),
    (16, 36, 16, 18, 32, 32, 24, 1),
    (24, 24, 24, 24, 36, 36, 24, 1),
    (26, 26, 26, 26, 44, 44, 28, 1),
    (16, 48, 16, 24, 49, 49, 28, 1),
    (32, 32, 16, 16, 62, 62, 36, 1),
    (36, 36, 18, 18, 86, 86, 42, 1),
    (40, 40, 20, 20, 114, 114, 48, 1),
    (44, 44, 22, 22, 144, 144, 56, 1),
    (48, 48, 24, 24, 174, 174, 68, 1),
    (52, 52, 26, 26, 204, 102, 42, 2),
    (64, 64, 16, 16, 280, 140, 56, 2),
    (72, 72, 18, 18, 368, 92, 36, 4),
    (80, 80, 20, 20, 456, 114, 48, 4),
    (88, 88, 22, 22, 576, 144, 56, 4),
    (96, 96, 24, 24, 696, 174, 68, 4),
    (104, 104, 26, 26, 816, 136, 56, 6),
    (120, 120, 20, 20, 1050, 175, 68, 6),
    (132, 132, 22, 22, 1304, 163, 62, 8),
    # Uneven interleave: 8 blocks of 156 and 2 blocks of 155
    (144, 144, 24, 24, 1558, 156, 62, 10),
]

# DMRE rectangles
_EXTENSION_RECTANGLES = [
    (8, 48, 8, 24, 18, 18, 15, 1),
    (8, 64, 8, 16, 24, 24, 18, 1),
    (12, 64, 12, 16, 43, 43, 27, 1),
    (24, 32, 24, 16, 49, 49, 28, 1),
    (26, 32, 26, 16, 52, 52, 32, 1),
    (24, 36, 24, 18, 55, 55, 33, 1),
    (16, 64, 16, 16, 62, 62, 36, 1),
    (26, 40, 26, 20, 70, 70, 38, 1),
    (24, 48, 24, 24, 80, 80, 41, 1),
    (26, 48, 26, 24, 90, 90, 42, 1),
    (24, 64, 24, 16, 108, 108, 46, 1),
    (26, 64, 26, 16, 118, 118, 50, 1),
]


def _build_catalog(rows) -> Tuple[SymbolSize, ...]:
    sizes = [SymbolSize(*row) for row in rows]
    # Stable sort keeps table order for equal (capacity, squareness)
    sizes.sort(key=lambda s: (s.data_codewords, not s.is_square))
    return tuple(sizes)


STANDARD_SIZES: Tuple[SymbolSize, ...] = _build_catalog(_SQUARE_AND_ISO_RECTANGLES)
EXTENDED_SIZES: Tuple[SymbolSize, ...] = _build_catalog(
    _SQUARE_AND_ISO_RECTANGLES + _EXTENSION_RECTANGLES
)

MAX_DATA_CODEWORDS = STANDARD_SIZES[-1].data_codewords

# Stable external size option numbers -> (rows, columns)
# 1-24 square, 25-30 ISO rectangles, 31-42 DMRE rectangles
SIZE_OPTIONS: Mapping[int, Tuple[int, int]] = MappingProxyType({
    1: (10, 10), 2: (12, 12), 3: (14, 14), 4: (16, 16),
    5: (18, 18), 6: (20, 20), 7: (22, 22), 8: (24, 24),
    9: (26, 26), 10: (32, 32), 11: (36, 36), 12: (40, 40),
    13: (44, 44), 14: (48, 48), 15: (52, 52), 16: (64, 64),
    17: (72, 72), 18: (80, 80), 19: (88, 88), 20: (96, 96),
    21: (104, 104), 22: (120, 120), 23: (132, 132), 24: (144, 144),
    25: (8, 18), 26: (8, 32), 27: (12, 26), 28: (12, 36),
    29: (16, 36), 30: (16, 48),
    31: (8, 48), 32: (8, 64), 33: (12, 64), 34: (16, 64),
    35: (24, 32), 36: (24, 36), 37: (24, 48), 38: (24, 64),
    39: (26, 32), 40: (26, 40), 41: (26, 48), 42: (26, 64),
})


def catalog(extended: bool = False) -> Tuple[SymbolSize, ...]:
    """Return the extended (DMRE) catalog when `extended` is set, else the standard one."""
    return EXTENDED_SIZES if extended else STANDARD_SIZES


def size_for_dimensions(rows: int, columns: int, extended: bool = True) -> Optional[SymbolSize]:
    """
    Find the catalog entry with the given module dimensions.

    Args:
        rows (int): Symbol height in modules
        columns (int): Symbol width in modules
        extended (bool): Search the DMRE catalog as well

    Returns:
        Optional[SymbolSize]: Matching size, or None if no such size exists
    """
    for size in catalog(extended):
        if size.rows == rows and size.columns == columns:
            return size
    return None


def size_for_option(option: int, extended: bool = True) -> Optional[SymbolSize]:
    """
    Translate a stable size option number into a catalog entry.

    Args:
        option (int): Size option number (1-42)
        extended (bool): Allow the DMRE option numbers 31-42

    Returns:
        Optional[SymbolSize]: Matching size, or None for unknown numbers

    Example:
        >>> size_for_option(25)
        SymbolSize(rows=8, columns=18, ...)
    """
    dims = SIZE_OPTIONS.get(option)
    if dims is None:
        return None
    return size_for_dimensions(dims[0], dims[1], extended)
