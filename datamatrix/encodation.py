# -*- coding: utf-8 -*-
"""
Data Matrix Encodation Module

Turns the input bytes into data codewords. The encoder is a state machine
over the six encodation modes; at every decision point the look-ahead in
`lookahead` tells it whether to stay or to switch. Runs in the triplet modes
(C40, Text, X12), EDIFACT and Base 256 are buffered until they end so that
their closing rules can see the whole run.

End-of-data handling depends on how much room the final symbol leaves, so
the encoder consults a `SizeSelector` for capacities.

Functions:
    encode_data: Encode input bytes into unpadded data codewords
    pad_codewords: Fill the remaining symbol capacity with pad codewords
    randomize_255: Base 256 scrambling of one codeword
    randomize_253: Pad codeword scrambling
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .exceptions import InputTooLong, InternalEncodingTableError
from .lookahead import look_ahead
from .modes import (
    EDIFACT_UNLATCH,
    LATCH,
    PAD,
    SHIFT_1,
    TRIPLET_MODES,
    UNLATCH,
    Mode,
    ascii_codewords,
    can_encode,
    edifact_value,
    is_digit,
    is_edifact,
    pack_edifact,
    pack_triplet,
    triplet_values,
)
from .size_selector import SizeSelector

logger = logging.getLogger(__name__)

# Reference input limit of the largest symbol (digit pairs in 144x144)
MAX_INPUT_LENGTH = 3116


@dataclass(frozen=True)
class EncodingSegment:
    """
    A run of input bytes encoded in one mode.

    Attributes:
        mode (Mode): Encodation mode of the run
        start (int): Offset of the first input byte
        length (int): Number of input bytes in the run
        is_latch (bool): The run was entered through a latch codeword
    """

    mode: Mode
    start: int
    length: int
    is_latch: bool = False

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True)
class EncodationResult:
    """Unpadded data codewords plus the segments that produced them."""

    codewords: Tuple[int, ...]
    segments: Tuple[EncodingSegment, ...]
    final_mode: Mode

    def __len__(self) -> int:
        return len(self.codewords)


def randomize_255(value: int, position: int) -> int:
    """
    Base 256 scrambling (255-state algorithm).

    Args:
        value (int): Byte to scramble
        position (int): 1-based position of the codeword in the data stream

    Returns:
        int: Scrambled codeword
    """
    pseudo_random = ((149 * position) % 255) + 1
    return (value + pseudo_random) % 256


def randomize_253(value: int, position: int) -> int:
    """Pad scrambling (253-state algorithm), `position` is 1-based."""
    pseudo_random = ((149 * position) % 253) + 1
    scrambled = value + pseudo_random
    return scrambled if scrambled <= 254 else scrambled - 254


class _Encoder:
    """Single-use state machine; one instance per encode call."""

    def __init__(self, data: bytes, selector: SizeSelector) -> None:
        self.data = data
        self.selector = selector
        self.pos = 0
        self.mode = Mode.ASCII
        self.codewords: List[int] = []
        self.segments: List[EncodingSegment] = []
        self._open: Tuple[Mode, int, bool] = (Mode.ASCII, 0, False)

    # -- segment bookkeeping -------------------------------------------------

    def _begin_segment(self, mode: Mode, at: int, is_latch: bool = False) -> None:
        open_mode, start, latched = self._open
        if at > start:
            self.segments.append(EncodingSegment(open_mode, start, at - start, latched))
        if not is_latch and self.segments:
            last = self.segments[-1]
            if last.mode == mode and last.end == at:
                # Resume the previous run rather than starting an empty one
                self.segments.pop()
                self._open = (mode, last.start, last.is_latch)
                return
        self._open = (mode, at, is_latch)

    def _end_segments(self) -> None:
        open_mode, start, latched = self._open
        if len(self.data) > start:
            self.segments.append(EncodingSegment(open_mode, start, len(self.data) - start, latched))

    def _latch(self, mode: Mode) -> None:
        self.codewords.append(LATCH[mode])
        self._begin_segment(mode, self.pos, is_latch=True)
        self.mode = mode

    def _return_to_ascii(self, at: int, unlatch: Optional[int] = UNLATCH) -> None:
        if unlatch is not None:
            self.codewords.append(unlatch)
        self._begin_segment(Mode.ASCII, at)
        self.mode = Mode.ASCII

    def _capacity(self, required: int) -> Optional[int]:
        return self.selector.capacity_for(required)

    # -- modes -----------------------------------------------------------------

    def run(self) -> EncodationResult:
        handlers = {
            Mode.ASCII: self._encode_ascii,
            Mode.C40: self._encode_triplets,
            Mode.TEXT: self._encode_triplets,
            Mode.X12: self._encode_triplets,
            Mode.EDIFACT: self._encode_edifact,
            Mode.BASE256: self._encode_base256,
        }
        while self.pos < len(self.data):
            handlers[self.mode]()
        self._end_segments()
        return EncodationResult(tuple(self.codewords), tuple(self.segments), self.mode)

    def _encode_ascii(self) -> None:
        data = self.data
        while self.pos < len(data):
            pos = self.pos
            if pos + 1 < len(data) and is_digit(data[pos]) and is_digit(data[pos + 1]):
                self.codewords += ascii_codewords(data[pos:pos + 2])
                self.pos += 2
                continue
            next_mode = look_ahead(data, pos, Mode.ASCII)
            if next_mode != Mode.ASCII and can_encode(next_mode, data[pos]):
                self._latch(next_mode)
                return
            self.codewords += ascii_codewords(data[pos:pos + 1])
            self.pos += 1

    def _encode_triplets(self) -> None:
        mode = self.mode
        latch_index = len(self.codewords) - 1
        run_start = self.pos
        chars: List[List[int]] = []
        nvalues = 0

        while self.pos < len(self.data):
            if chars and nvalues % 3 == 0 and look_ahead(self.data, self.pos, mode) != mode:
                break
            values = triplet_values(mode, self.data[self.pos])
            if values is None:
                break
            chars.append(values)
            nvalues += len(values)
            self.pos += 1

        self._close_triplets(mode, run_start, latch_index, chars)

    def _close_triplets(self, mode: Mode, run_start: int, latch_index: int, chars: List[List[int]]) -> None:
        at_end = self.pos == len(self.data)
        nvalues = sum(len(values) for values in chars)

        if at_end and nvalues % 3 == 1 and len(chars[-1]) == 1:
            # One basic-set character left: if exactly one codeword of room
            # remains it is written in ASCII without an unlatch
            used = len(self.codewords) + (nvalues // 3) * 2 + 1
            if self._capacity(used) == used:
                flat = [v for values in chars[:-1] for v in values]
                self._write_triplets(flat)
                self._return_to_ascii(self.pos - 1, unlatch=None)
                self.codewords += ascii_codewords(self.data[self.pos - 1:self.pos])
                return

        # Characters that cannot complete a triplet go back to ASCII
        removed = 0
        rest = nvalues % 3
        while chars and (rest == 1 or (rest == 2 and (mode == Mode.X12 or not at_end))):
            nvalues -= len(chars.pop())
            removed += 1
            rest = nvalues % 3

        end = self.pos - removed
        if not chars:
            # Nothing left worth the latch
            del self.codewords[latch_index:]
            self._return_to_ascii(run_start, unlatch=None)
            self.codewords += ascii_codewords(self.data[run_start:self.pos])
            return

        flat = [v for values in chars for v in values]
        if rest == 2:
            flat.append(SHIFT_1)
        if len(flat) % 3:
            raise InternalEncodingTableError(f"{mode.name} run left {len(flat) % 3} unpacked values")
        self._write_triplets(flat)

        if end < len(self.data):
            self._return_to_ascii(end)
            self.codewords += ascii_codewords(self.data[end:self.pos])

    def _write_triplets(self, values: Sequence[int]) -> None:
        for i in range(0, len(values), 3):
            self.codewords += pack_triplet(values[i], values[i + 1], values[i + 2])

    def _encode_edifact(self) -> None:
        run_start = self.pos
        values: List[int] = []
        while self.pos < len(self.data):
            if values and len(values) % 4 == 0 and look_ahead(self.data, self.pos, Mode.EDIFACT) != Mode.EDIFACT:
                break
            byte = self.data[self.pos]
            if not is_edifact(byte):
                break
            values.append(edifact_value(byte))
            self.pos += 1

        whole = len(values) - len(values) % 4
        body = pack_edifact(values[:whole]) if whole else []
        tail = values[whole:]

        if self.pos == len(self.data):
            # With at most two codewords left in the symbol the decoder
            # returns to ASCII on its own
            rest = ascii_codewords(self.data[self.pos - len(tail):self.pos])
            used = len(self.codewords) + len(body)
            capacity = self._capacity(used + len(rest))
            if capacity is not None and capacity - used <= 2:
                self.codewords += body
                self._return_to_ascii(run_start + whole, unlatch=None)
                self.codewords += rest
                return

        self.codewords += body + pack_edifact(tail + [EDIFACT_UNLATCH])
        self._return_to_ascii(self.pos, unlatch=None)

    def _encode_base256(self) -> None:
        run_start = self.pos
        while self.pos < len(self.data):
            if self.pos > run_start and look_ahead(self.data, self.pos, Mode.BASE256) != Mode.BASE256:
                break
            self.pos += 1

        payload = self.data[run_start:self.pos]
        length = len(payload)
        if length < 250:
            field = [length]
        else:
            field = [length // 250 + 249, length % 250]

        for value in field + list(payload):
            self.codewords.append(randomize_255(value, len(self.codewords) + 1))
        # The field length tells the decoder where ASCII resumes
        self._return_to_ascii(self.pos, unlatch=None)


def encode_data(
    data: bytes,
    selector: Optional[SizeSelector] = None,
    max_input_length: int = MAX_INPUT_LENGTH,
) -> EncodationResult:
    """
    Encode input bytes into data codewords (without padding).

    The look-ahead result is compared against plain ASCII encodation and the
    shorter one wins, ASCII on a tie.

    Args:
        data (bytes): Input bytes
        selector (Optional[SizeSelector]): Size options used for end-of-data decisions
        max_input_length (int): Upper bound on the number of input bytes

    Returns:
        EncodationResult: Codewords, segments and the mode in force at the end

    Raises:
        InputTooLong: If the input or its codewords exceed every available size

    Example:
        >>> list(encode_data(b"123456").codewords)
        [142, 164, 186]
    """
    selector = selector or SizeSelector()
    data = bytes(data)
    if len(data) > max_input_length:
        raise InputTooLong(
            len(data),
            max_input_length,
            f"input of {len(data)} bytes exceeds the limit of {max_input_length} bytes",
        )

    result = _Encoder(data, selector).run()

    plain = ascii_codewords(data)
    if len(plain) <= len(result.codewords):
        segments = (EncodingSegment(Mode.ASCII, 0, len(data)),) if data else ()
        result = EncodationResult(tuple(plain), segments, Mode.ASCII)

    if selector.forced is None and len(result.codewords) > selector.max_capacity:
        raise InputTooLong(len(result.codewords), selector.max_capacity)

    logger.debug(
        "Encoded %d bytes into %d codewords: %s",
        len(data),
        len(result.codewords),
        ", ".join(f"{s.mode.name}[{s.start}:{s.end}]" for s in result.segments),
    )
    return result


def pad_codewords(result: EncodationResult, capacity: int) -> List[int]:
    """
    Fill the symbol's data capacity.

    Triplet modes still open at the end are unlatched first, the first pad is
    129 and every further pad is scrambled by position.

    Args:
        result (EncodationResult): Encoder output
        capacity (int): Data codewords of the chosen symbol size

    Returns:
        List[int]: Exactly `capacity` data codewords
    """
    codewords = list(result.codewords)
    if len(codewords) > capacity:
        raise InternalEncodingTableError(f"{len(codewords)} codewords exceed capacity {capacity}")
    if result.final_mode in TRIPLET_MODES and len(codewords) < capacity:
        codewords.append(UNLATCH)
    elif result.final_mode not in TRIPLET_MODES and result.final_mode != Mode.ASCII:
        raise InternalEncodingTableError(f"encoder finished in {result.final_mode.name}")
    if len(codewords) < capacity:
        codewords.append(PAD)
    while len(codewords) < capacity:
        codewords.append(randomize_253(PAD, len(codewords) + 1))
    return codewords
