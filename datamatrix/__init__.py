# -*- coding: utf-8 -*-
"""
Data Matrix ECC 200 Encoder - Core Module

This package turns arbitrary bytes into Data Matrix (ECC 200) module grids,
including the DMRE rectangular extension sizes.

Modules:
    dm_generator: Main symbol generation function and options
    encodation: Mode state machine, padding and randomisation
    lookahead: Mode selection by look-ahead
    modes: Mode constants and character set tables
    size_selector: Symbol size selection
    geometry: Symbol size catalogs
    error_correction: Reed-Solomon blocks and interleaving
    placement: Module placement (utah walk and corner patterns)
    functional_areas: Finder patterns and grid assembly
    exceptions: Error taxonomy
"""

__version__ = "1.0.0"
__author__ = "Data Matrix Encoder Team"

from .dm_generator import make_datamatrix, EncodeOptions, DataMatrixSymbol
from .encodation import encode_data, pad_codewords, EncodingSegment
from .error_correction import add_error_correction
from .exceptions import (
    DataMatrixError,
    EncodeError,
    InputTooLong,
    InvalidForcedSize,
    InternalError,
    InternalEncodingTableError,
    InternalPlacementMismatch,
)
from .functional_areas import assemble_matrix, build_function_mask
from .geometry import SymbolSize, STANDARD_SIZES, EXTENDED_SIZES, size_for_dimensions, size_for_option
from .modes import Mode
from .size_selector import select_size, SizeSelector

__all__ = [
    'make_datamatrix',
    'EncodeOptions',
    'DataMatrixSymbol',
    'encode_data',
    'pad_codewords',
    'EncodingSegment',
    'add_error_correction',
    'DataMatrixError',
    'EncodeError',
    'InputTooLong',
    'InvalidForcedSize',
    'InternalError',
    'InternalEncodingTableError',
    'InternalPlacementMismatch',
    'assemble_matrix',
    'build_function_mask',
    'SymbolSize',
    'STANDARD_SIZES',
    'EXTENDED_SIZES',
    'size_for_dimensions',
    'size_for_option',
    'Mode',
    'select_size',
    'SizeSelector',
]
