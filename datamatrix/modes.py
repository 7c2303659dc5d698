# -*- coding: utf-8 -*-
"""
Data Matrix Encodation Modes Module

Mode identifiers, control codewords and the per-byte classification tables
used by the C40, Text, X12 and EDIFACT encodation schemes (ISO/IEC 16022
section 5.2). All tables are built once at import time and never modified.

Functions:
    triplet_values: C40/Text/X12 values for one input byte
    edifact_value: EDIFACT 6-bit value for one input byte
    ascii_codewords: ASCII encodation of a byte run (digit pairs included)
"""

from enum import IntEnum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .exceptions import InternalEncodingTableError


class Mode(IntEnum):
    ASCII = 0
    C40 = 1
    TEXT = 2
    X12 = 3
    EDIFACT = 4
    BASE256 = 5


# Control codewords (ASCII encodation values)
PAD = 129
DIGIT_PAIR_BASE = 130
UPPER_SHIFT = 235
UNLATCH = 254

LATCH: Mapping[Mode, int] = MappingProxyType({
    Mode.C40: 230,
    Mode.BASE256: 231,
    Mode.X12: 238,
    Mode.TEXT: 239,
    Mode.EDIFACT: 240,
})

TRIPLET_MODES = (Mode.C40, Mode.TEXT, Mode.X12)

# C40/Text shift values; Shift 1 doubles as end-of-data pad
SHIFT_1 = 0
SHIFT_2 = 1
SHIFT_3 = 2
UPPER_SHIFT_VALUE = 30

EDIFACT_UNLATCH = 31

_PUNCTUATION = b"!\"#$%&'()*+,-./:;<=>?@[\\]^_"
_DIGITS = b"0123456789"
_UPPER = b"ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_LOWER = b"abcdefghijklmnopqrstuvwxyz"


def _build_charset(basic_letters: bytes, shift3_chars: bytes) -> Tuple[Tuple[int, int], ...]:
    """
    Build a 128-entry (shift set, value) table for C40 or Text.

    Shift set 0 is the basic set (no prefix), 1-3 select Shift 1, 2 or 3.
    The two schemes only differ in which letter case sits in the basic set
    and which characters fill Shift 3.
    """
    table: List[Optional[Tuple[int, int]]] = [None] * 128
    for byte in range(32):
        table[byte] = (1, byte)
    table[ord(" ")] = (0, 3)
    for i, byte in enumerate(_DIGITS):
        table[byte] = (0, 4 + i)
    for i, byte in enumerate(basic_letters):
        table[byte] = (0, 14 + i)
    for i, byte in enumerate(_PUNCTUATION):
        table[byte] = (2, i)
    for i, byte in enumerate(shift3_chars):
        table[byte] = (3, i)

    missing = [i for i, entry in enumerate(table) if entry is None]
    if missing:
        raise InternalEncodingTableError(f"charset table has no entry for bytes {missing}")
    return tuple(table)  # type: ignore[arg-type]


C40_CHARSET = _build_charset(_UPPER, b"`" + _LOWER + b"{|}~\x7f")
TEXT_CHARSET = _build_charset(_LOWER, b"`" + _UPPER + b"{|}~\x7f")

_x12_values: Dict[int, int] = {13: 0, ord("*"): 1, ord(">"): 2, ord(" "): 3}
_x12_values.update({byte: 4 + i for i, byte in enumerate(_DIGITS)})
_x12_values.update({byte: 14 + i for i, byte in enumerate(_UPPER)})
X12_CHARSET: Mapping[int, int] = MappingProxyType(_x12_values)

_CHARSETS = MappingProxyType({Mode.C40: C40_CHARSET, Mode.TEXT: TEXT_CHARSET})


def triplet_values(mode: Mode, byte: int) -> Optional[List[int]]:
    """
    Values a byte costs in one of the triplet-packed modes.

    Args:
        mode (Mode): C40, TEXT or X12
        byte (int): Input byte (0-255)

    Returns:
        Optional[List[int]]: One to four values (shift prefixes included),
            or None when X12 cannot represent the byte

    Example:
        >>> triplet_values(Mode.C40, ord("A"))
        [14]
        >>> triplet_values(Mode.C40, ord("a"))
        [2, 1]
    """
    if mode == Mode.X12:
        value = X12_CHARSET.get(byte)
        return None if value is None else [value]

    charset = _CHARSETS.get(mode)
    if charset is None:
        raise InternalEncodingTableError(f"{mode.name} is not a triplet mode")

    values = []
    if byte > 127:
        values += [SHIFT_2, UPPER_SHIFT_VALUE]
        byte -= 128
    shift, value = charset[byte]
    if shift:
        values.append(shift - 1)
    values.append(value)
    return values


def pack_triplet(v1: int, v2: int, v3: int) -> Tuple[int, int]:
    """Pack three values into the two codewords `v1*1600 + v2*40 + v3 + 1`."""
    packed = 1600 * v1 + 40 * v2 + v3 + 1
    return packed >> 8, packed & 0xFF


def is_edifact(byte: int) -> bool:
    return 32 <= byte <= 94


def edifact_value(byte: int) -> int:
    return byte & 0x3F


def pack_edifact(values: Sequence[int]) -> List[int]:
    """
    Pack 6-bit EDIFACT values MSB first into as many codewords as they need.

    Four values fill three codewords exactly; a shorter tail is padded with
    zero bits to the next codeword boundary.
    """
    bits = 0
    for value in values:
        bits = (bits << 6) | value
    nbits = 6 * len(values)
    ncodewords = -(-nbits // 8)
    bits <<= ncodewords * 8 - nbits
    return [(bits >> (8 * (ncodewords - 1 - i))) & 0xFF for i in range(ncodewords)]


def can_encode(mode: Mode, byte: int) -> bool:
    """Whether `mode` can represent `byte` at all (only X12 and EDIFACT are partial)."""
    if mode == Mode.X12:
        return byte in X12_CHARSET
    if mode == Mode.EDIFACT:
        return is_edifact(byte)
    return True


def is_digit(byte: int) -> bool:
    return 48 <= byte <= 57


def ascii_codewords(data: Sequence[int]) -> List[int]:
    """
    ASCII encodation of a byte run.

    Two consecutive digits share one codeword (130 + 10*d1 + d2), bytes
    above 127 take an Upper Shift prefix.

    Example:
        >>> ascii_codewords(b"123456")
        [142, 164, 186]
    """
    codewords = []
    i = 0
    while i < len(data):
        byte = data[i]
        if i + 1 < len(data) and is_digit(byte) and is_digit(data[i + 1]):
            codewords.append(DIGIT_PAIR_BASE + 10 * (byte - 48) + (data[i + 1] - 48))
            i += 2
            continue
        if byte > 127:
            codewords += [UPPER_SHIFT, byte - 127]
        else:
            codewords.append(byte + 1)
        i += 1
    return codewords
