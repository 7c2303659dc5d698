# -*- coding: utf-8 -*-
"""
Data Matrix Generator Module

This module provides the public entry point of the encoder: input bytes go
through encodation, size selection, padding, Reed-Solomon protection and
module placement, and come out as an ECC 200 module grid.

Functions:
    make_datamatrix: Generate a Data Matrix symbol with the given options

Classes:
    EncodeOptions: Immutable encoder configuration
    DataMatrixSymbol: Generated symbol (module grid plus encoding details)
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple, Union

import numpy as np

from .encodation import (
    MAX_INPUT_LENGTH,
    EncodingSegment,
    encode_data,
    pad_codewords,
)
from .error_correction import add_error_correction
from .functional_areas import assemble_matrix
from .geometry import SymbolSize
from .size_selector import SizeIdentifier, SizeSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodeOptions:
    """
    Encoder configuration.

    Attributes:
        rectangular_extension (bool): Allow the DMRE rectangular sizes
            (ISO/IEC 21471) during automatic selection and for force_size
        square_only (bool): Restrict automatic selection to square sizes
        force_size: Size option number (1-42), "RxC" string or (rows, columns);
            None selects the smallest fitting size
        max_input_length (int): Maximum number of input bytes accepted
        encoding (str): Codec used when the input is a str
    """

    rectangular_extension: bool = False
    square_only: bool = False
    force_size: Optional[SizeIdentifier] = None
    max_input_length: int = MAX_INPUT_LENGTH
    encoding: str = "iso-8859-1"

    def __post_init__(self) -> None:
        # Normalise 'auto' the same way an unset size is treated
        if isinstance(self.force_size, str) and self.force_size.strip().lower() in ("", "auto"):
            object.__setattr__(self, "force_size", None)
        if isinstance(self.force_size, list):
            object.__setattr__(self, "force_size", tuple(self.force_size))
        if isinstance(self.max_input_length, bool) or not isinstance(self.max_input_length, int):
            raise TypeError(f"max_input_length must be an int, got {self.max_input_length!r}")
        if self.max_input_length < 0:
            raise ValueError(f"max_input_length must not be negative, got {self.max_input_length}")

    def selector(self) -> SizeSelector:
        """Build the size selector for these options (validates force_size)."""
        return SizeSelector(
            rectangular_extension=bool(self.rectangular_extension),
            square_only=bool(self.square_only),
            force_size=self.force_size,
        )


@dataclass(frozen=True)
class DataMatrixSymbol:
    """
    A generated Data Matrix symbol.

    Attributes:
        matrix (np.ndarray): Boolean module grid, True = dark, shape (rows, columns)
        size (SymbolSize): Symbol size used
        codewords (Tuple[int, ...]): Final interleaved stream, data then ECC
        data_codewords (Tuple[int, ...]): Padded data codewords
        segments (Tuple[EncodingSegment, ...]): Mode runs chosen by the encoder
    """

    matrix: np.ndarray
    size: SymbolSize
    codewords: Tuple[int, ...]
    data_codewords: Tuple[int, ...]
    segments: Tuple[EncodingSegment, ...]

    @property
    def rows(self) -> int:
        return self.size.rows

    @property
    def columns(self) -> int:
        return self.size.columns

    def as_rows(self) -> List[List[int]]:
        """Module grid as nested lists of 0/1, top row first."""
        return self.matrix.astype(int).tolist()

    def __str__(self) -> str:
        return "\n".join("".join("#" if dark else "." for dark in row) for row in self.matrix)


def _to_bytes(data: Union[str, bytes, bytearray], encoding: str) -> bytes:
    if isinstance(data, str):
        return data.encode(encoding)
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"data must be str or bytes, got {type(data).__name__}")


def make_datamatrix(
    data: Union[str, bytes, bytearray],
    options: Optional[EncodeOptions] = None,
    **overrides: Any
) -> DataMatrixSymbol:
    """
    Generate a Data Matrix (ECC 200) symbol.

    Args:
        data (Union[str, bytes, bytearray]): The data to encode
            - bytes: encoded as given
            - str: converted with options.encoding first (ISO-8859-1 by default)
        options (Optional[EncodeOptions]): Encoder configuration
        **overrides: Individual EncodeOptions fields, applied on top of `options`

    Returns:
        DataMatrixSymbol: Module grid and encoding details

    Raises:
        InputTooLong: If the data does not fit the largest available size
        InvalidForcedSize: If force_size is unknown or too small for the data
        TypeError: If data or an option has the wrong type
        UnicodeEncodeError: If a str cannot be represented in options.encoding

    Example:
        >>> symbol = make_datamatrix("123456")
        >>> symbol.size.name
        '10x10'
        >>> list(symbol.codewords)
        [142, 164, 186, 114, 25, 5, 88, 102]
        >>>
        >>> # Rectangular extension sizes, forced by dimensions
        >>> symbol = make_datamatrix(b"ABC", rectangular_extension=True, force_size="8x48")
    """
    options = options or EncodeOptions()
    if overrides:
        options = dataclasses.replace(options, **overrides)

    payload = _to_bytes(data, options.encoding)
    selector = options.selector()

    result = encode_data(payload, selector, max_input_length=options.max_input_length)
    size = selector.select(len(result))
    data_codewords = pad_codewords(result, size.data_codewords)
    codewords = add_error_correction(data_codewords, size)
    matrix = assemble_matrix(codewords, size)

    logger.debug(
        "Generated %s symbol: %d input bytes, %d/%d data codewords used",
        size,
        len(payload),
        len(result),
        size.data_codewords,
    )
    return DataMatrixSymbol(
        matrix=matrix,
        size=size,
        codewords=tuple(codewords),
        data_codewords=tuple(data_codewords),
        segments=result.segments,
    )
