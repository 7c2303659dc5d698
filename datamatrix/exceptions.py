# -*- coding: utf-8 -*-
"""
Data Matrix Exceptions Module

Error taxonomy for the encoder. Bad input and library defects belong to
separate families:

    EncodeError: the input or the configuration cannot be honoured
        - InputTooLong
        - InvalidForcedSize
    InternalError: an invariant of the tables or the geometry was violated
        - InternalEncodingTableError
        - InternalPlacementMismatch
"""


class DataMatrixError(Exception):
    """Base class for every error raised by the datamatrix package."""


class EncodeError(DataMatrixError, ValueError):
    """The request cannot be encoded as given. Retrying unchanged will fail again."""


class InputTooLong(EncodeError):
    """The data does not fit any symbol size of the active catalog."""

    def __init__(self, required: int, capacity: int, message: str = "") -> None:
        self.required = required
        self.capacity = capacity
        super().__init__(
            message
            or f"data needs {required} codewords but the largest available symbol holds {capacity}"
        )


class InvalidForcedSize(EncodeError):
    """The caller-selected symbol size is unknown or too small for the data."""


class InternalError(DataMatrixError, RuntimeError):
    """An internal invariant was violated. This always indicates a library defect."""


class InternalEncodingTableError(InternalError):
    """The mode tables produced a state that the encoder cannot handle."""


class InternalPlacementMismatch(InternalError):
    """Block structure, codeword count and module geometry disagree."""
