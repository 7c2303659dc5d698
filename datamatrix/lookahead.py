# -*- coding: utf-8 -*-
"""
Data Matrix Look-ahead Module

Mode selection by look-ahead (ISO/IEC 16022 Annex P). Starting at a position
of the input, the running codeword cost of every mode is accumulated
character by character until one mode is clearly cheaper than the others.

Costs are integers in twelfths of a codeword so that the thirds (C40, Text,
X12) and quarters (EDIFACT) of the standard add up exactly. Both the mode
switch overhead and the per-character cost are plain tables, which keeps
each mode pair testable on its own.

Functions:
    char_cost: Cost of one byte in a non-ASCII mode
    look_ahead: Pick the mode to continue with at a given position
"""

from types import MappingProxyType
from typing import List, Mapping, Sequence, Tuple

from .exceptions import InternalEncodingTableError
from .modes import X12_CHARSET, Mode, is_digit, is_edifact

UNIT = 12

# Overhead of moving from the current mode (row) to a target mode (column)
MODE_SWITCH_COST: Mapping[Mode, Tuple[int, ...]] = MappingProxyType({
    #               ASCII C40 TEXT X12 EDF B256
    Mode.ASCII:    (0,    12, 12,  12, 12, 15),
    Mode.C40:      (12,   0,  24,  24, 24, 27),
    Mode.TEXT:     (12,   24, 0,   24, 24, 27),
    Mode.X12:      (12,   24, 24,  0,  24, 27),
    Mode.EDIFACT:  (12,   24, 24,  24, 0,  27),
    Mode.BASE256:  (12,   24, 24,  24, 24, 0),
})

# Per-character cost: (native set, extended ASCII, anything else)
CHAR_COST: Mapping[Mode, Tuple[int, int, int]] = MappingProxyType({
    Mode.C40: (8, 32, 16),
    Mode.TEXT: (8, 32, 16),
    Mode.X12: (8, 52, 40),
    Mode.EDIFACT: (9, 51, 39),
    Mode.BASE256: (12, 12, 12),
})

# Characters considered at least before an early decision
MIN_LOOKAHEAD = 4


def _is_native(mode: Mode, byte: int) -> bool:
    if mode == Mode.C40:
        return byte == 32 or is_digit(byte) or 65 <= byte <= 90
    if mode == Mode.TEXT:
        return byte == 32 or is_digit(byte) or 97 <= byte <= 122
    if mode == Mode.X12:
        return byte in X12_CHARSET
    if mode == Mode.EDIFACT:
        return is_edifact(byte)
    if mode == Mode.BASE256:
        return False
    raise InternalEncodingTableError(f"no native character set for {mode!r}")


def char_cost(mode: Mode, byte: int) -> int:
    """
    Cost of one byte in a non-ASCII mode, in twelfths of a codeword.

    Example:
        >>> char_cost(Mode.C40, ord("A"))
        8
        >>> char_cost(Mode.EDIFACT, 0xE9)
        51
    """
    native, extended, other = CHAR_COST[mode]
    if _is_native(mode, byte):
        return native
    if byte > 127:
        return extended
    return other


def _ceil(cost: int) -> int:
    return -(-cost // UNIT)


def _add_ascii(cost: int, byte: int) -> int:
    if is_digit(byte):
        return cost + UNIT // 2
    # Any non-digit starts on a codeword boundary
    cost = _ceil(cost) * UNIT
    return cost + (2 * UNIT if byte > 127 else UNIT)


def _strictly_below(counts: List[int], mode: Mode, margin: int, rivals: Sequence[Mode]) -> bool:
    return all(counts[mode] + margin < counts[rival] for rival in rivals)


def look_ahead(data: Sequence[int], pos: int, current: Mode) -> Mode:
    """
    Choose the mode to continue encoding with at `pos`.

    The current mode wins every tie, so a switch is only made when the
    alternative is strictly cheaper after paying the latch overhead.

    Args:
        data: Input bytes
        pos (int): Position of the next unencoded byte
        current (Mode): Mode the encoder is in

    Returns:
        Mode: Mode to use for the byte at `pos`

    Example:
        >>> look_ahead(b"ABCDEFGHIJ", 0, Mode.ASCII)
        <Mode.C40: 1>
    """
    if pos >= len(data):
        return current

    costs = list(MODE_SWITCH_COST[current])
    processed = 0
    while True:
        if pos + processed == len(data):
            counts = [_ceil(c) for c in costs]
            best = min(counts)
            if counts[current] == best:
                return current
            if counts[Mode.ASCII] == best:
                return Mode.ASCII
            winners = [mode for mode in Mode if counts[mode] == best]
            if len(winners) == 1:
                return winners[0]
            return Mode.C40

        byte = data[pos + processed]
        processed += 1

        costs[Mode.ASCII] = _add_ascii(costs[Mode.ASCII], byte)
        for mode in (Mode.C40, Mode.TEXT, Mode.X12, Mode.EDIFACT, Mode.BASE256):
            costs[mode] += char_cost(mode, byte)

        if processed < MIN_LOOKAHEAD:
            continue

        counts = [_ceil(c) for c in costs]
        others = [m for m in Mode if m != Mode.ASCII]
        if _strictly_below(counts, Mode.ASCII, 0, others):
            return Mode.ASCII
        if counts[Mode.BASE256] < counts[Mode.ASCII] or _strictly_below(
            counts, Mode.BASE256, 1, (Mode.C40, Mode.TEXT, Mode.X12, Mode.EDIFACT)
        ):
            return Mode.BASE256
        if _strictly_below(
            counts, Mode.EDIFACT, 1, (Mode.ASCII, Mode.C40, Mode.TEXT, Mode.X12, Mode.BASE256)
        ):
            return Mode.EDIFACT
        if _strictly_below(
            counts, Mode.TEXT, 1, (Mode.ASCII, Mode.C40, Mode.X12, Mode.EDIFACT, Mode.BASE256)
        ):
            return Mode.TEXT
        if _strictly_below(
            counts, Mode.X12, 1, (Mode.ASCII, Mode.C40, Mode.TEXT, Mode.EDIFACT, Mode.BASE256)
        ):
            return Mode.X12
        if _strictly_below(
            counts, Mode.C40, 1, (Mode.ASCII, Mode.TEXT, Mode.EDIFACT, Mode.BASE256)
        ):
            if counts[Mode.C40] < counts[Mode.X12]:
                return Mode.C40
            if counts[Mode.C40] == counts[Mode.X12]:
                return _c40_or_x12(data, pos + processed)


def _c40_or_x12(data: Sequence[int], start: int) -> Mode:
    # X12 only pays off when a segment terminator shows up before the first non-X12 byte
    for byte in data[start:]:
        if byte in (13, ord("*"), ord(">")):
            return Mode.X12
        if byte not in X12_CHARSET:
            break
    return Mode.C40
