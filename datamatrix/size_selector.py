# -*- coding: utf-8 -*-
"""
Data Matrix Size Selector Module

Picks the symbol size for a given number of data codewords. The catalogs in
`geometry` are already ordered by capacity, so the first fitting entry is
the smallest one.

Functions:
    select_size: Choose the smallest fitting size (or validate a forced one)
    resolve_forced_size: Turn a user supplied size identifier into a SymbolSize

Classes:
    SizeSelector: Bundles the selection options for repeated capacity queries
"""

import logging
import re
from typing import Optional, Tuple, Union

from .exceptions import InputTooLong, InvalidForcedSize
from .geometry import SymbolSize, catalog, size_for_dimensions, size_for_option

logger = logging.getLogger(__name__)

SizeIdentifier = Union[int, str, Tuple[int, int], SymbolSize]

_DIMENSIONS_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


def resolve_forced_size(identifier: SizeIdentifier, rectangular_extension: bool = False) -> SymbolSize:
    """
    Resolve a size identifier into a catalog entry.

    Args:
        identifier: Option number (1-42), "RxC" string, (rows, columns) tuple
            or a SymbolSize taken from the catalog
        rectangular_extension (bool): Whether DMRE sizes are acceptable

    Returns:
        SymbolSize: The referenced catalog entry

    Raises:
        InvalidForcedSize: If the identifier names no size of the active catalog
    """
    size: Optional[SymbolSize]
    if isinstance(identifier, SymbolSize):
        size = size_for_dimensions(identifier.rows, identifier.columns, rectangular_extension)
    elif isinstance(identifier, bool):
        size = None
    elif isinstance(identifier, int):
        size = size_for_option(identifier, rectangular_extension)
    elif isinstance(identifier, str):
        match = _DIMENSIONS_RE.match(identifier)
        if match:
            size = size_for_dimensions(int(match.group(1)), int(match.group(2)), rectangular_extension)
        elif identifier.strip().isdigit():
            size = size_for_option(int(identifier), rectangular_extension)
        else:
            size = None
    elif isinstance(identifier, tuple) and len(identifier) == 2:
        size = size_for_dimensions(int(identifier[0]), int(identifier[1]), rectangular_extension)
    else:
        size = None

    if size is None:
        hint = "" if rectangular_extension else " (DMRE sizes need rectangular_extension=True)"
        raise InvalidForcedSize(f"unknown symbol size {identifier!r}{hint}")
    return size


def select_size(
    required: int,
    rectangular_extension: bool = False,
    square_only: bool = False,
    force_size: Optional[SizeIdentifier] = None,
) -> SymbolSize:
    """
    Choose the symbol size for `required` data codewords.

    Args:
        required (int): Number of data codewords produced by the encoder
        rectangular_extension (bool): Search the DMRE catalog as well
        square_only (bool): Skip every rectangular size
        force_size: Optional size identifier that bypasses the search

    Returns:
        SymbolSize: Smallest fitting size, or the forced one

    Raises:
        InputTooLong: If no size of the catalog is large enough
        InvalidForcedSize: If the forced size is unknown or too small

    Example:
        >>> select_size(6).name
        '14x14'
        >>> select_size(6, force_size="12x26").name
        '12x26'
    """
    if force_size is not None:
        size = resolve_forced_size(force_size, rectangular_extension)
        if size.data_codewords < required:
            logger.warning(
                "Forced size %s holds %d codewords, %d required", size, size.data_codewords, required
            )
            raise InvalidForcedSize(
                f"symbol size {size} holds {size.data_codewords} data codewords, "
                f"{required} required"
            )
        return size

    sizes = catalog(rectangular_extension)
    for size in sizes:
        if square_only and not size.is_square:
            continue
        if size.data_codewords >= required:
            return size

    raise InputTooLong(required, sizes[-1].data_codewords)


class SizeSelector:
    """
    Size selection options bound together.

    The encoder asks for capacities while it is still producing codewords
    (end-of-data rules depend on how much room the final symbol leaves), so
    the options travel as one object.
    """

    def __init__(
        self,
        rectangular_extension: bool = False,
        square_only: bool = False,
        force_size: Optional[SizeIdentifier] = None,
    ) -> None:
        self.rectangular_extension = rectangular_extension
        self.square_only = square_only
        self.forced: Optional[SymbolSize] = None
        if force_size is not None:
            self.forced = resolve_forced_size(force_size, rectangular_extension)

    def select(self, required: int) -> SymbolSize:
        return select_size(
            required,
            rectangular_extension=self.rectangular_extension,
            square_only=self.square_only,
            force_size=self.forced,
        )

    def capacity_for(self, required: int) -> Optional[int]:
        """Data capacity of the symbol that would hold `required` codewords, None if none would."""
        if self.forced is not None:
            if self.forced.data_codewords < required:
                return None
            return self.forced.data_codewords
        try:
            return self.select(required).data_codewords
        except InputTooLong:
            return None

    @property
    def max_capacity(self) -> int:
        if self.forced is not None:
            return self.forced.data_codewords
        sizes = catalog(self.rectangular_extension)
        if self.square_only:
            sizes = tuple(s for s in sizes if s.is_square)
        return sizes[-1].data_codewords
