# -*- coding: utf-8 -*-
"""
Data Matrix Error Correction Module

Reed-Solomon protection of the data codewords. Codewords are dealt to the
interleaved blocks round-robin, every block is encoded on its own and the
error correction codewords are interleaved back the same way. Position `i`
of the final stream always belongs to block `i mod blocks`; for the 144x144
size, whose blocks are uneven, this is what rotates the ECC interleave by
two blocks.

Field: GF(256) with primitive polynomial x^8 + x^5 + x^3 + x^2 + 1 (0x12D),
generator polynomial with roots 2^1 .. 2^n.

Functions:
    split_blocks: Distribute data codewords over the interleaved blocks
    encode_blocks: Reed-Solomon encode every block
    interleave: Merge blocks back into one codeword stream
    add_error_correction: Data codewords -> data + ECC codewords
"""

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Sequence, Tuple

from reedsolo import RSCodec

from .exceptions import InternalPlacementMismatch
from .geometry import SymbolSize

logger = logging.getLogger(__name__)

PRIMITIVE_POLYNOMIAL = 0x12D
FIRST_CONSECUTIVE_ROOT = 1
GENERATOR = 2

# reedsolo keeps its field tables in module globals and swaps them on every
# encode call, so calls into it are serialised
_codec_lock = threading.Lock()


@dataclass(frozen=True)
class ECCBlock:
    """One interleaved Reed-Solomon block."""

    data: Tuple[int, ...]
    ecc: Tuple[int, ...]


@lru_cache(maxsize=None)
def get_codec(nsym: int) -> RSCodec:
    """Return the (cached) codec producing `nsym` error correction codewords."""
    with _codec_lock:
        return RSCodec(
            nsym,
            fcr=FIRST_CONSECUTIVE_ROOT,
            prim=PRIMITIVE_POLYNOMIAL,
            generator=GENERATOR,
            c_exp=8,
        )


def rs_encode(data: Sequence[int], nsym: int) -> List[int]:
    """
    Compute the `nsym` error correction codewords of one block.

    Example:
        >>> rs_encode([142, 164, 186], 5)
        [114, 25, 5, 88, 102]
    """
    codec = get_codec(nsym)
    with _codec_lock:
        encoded = codec.encode(bytearray(data))
    return list(encoded[len(data):])


def split_blocks(codewords: Sequence[int], size: SymbolSize) -> List[List[int]]:
    """
    Deal data codewords round-robin over the blocks of `size`.

    Args:
        codewords: Exactly `size.data_codewords` data codewords
        size (SymbolSize): Chosen symbol size

    Returns:
        List[List[int]]: Data codewords per block

    Raises:
        InternalPlacementMismatch: If the codeword count or the resulting block
            lengths disagree with the catalog entry
    """
    if len(codewords) != size.data_codewords:
        raise InternalPlacementMismatch(
            f"{len(codewords)} data codewords for {size} which holds {size.data_codewords}"
        )
    blocks = [list(codewords[b::size.blocks]) for b in range(size.blocks)]
    lengths = [len(block) for block in blocks]
    if lengths != size.block_data_lengths() or max(lengths) != size.data_block:
        raise InternalPlacementMismatch(f"block lengths {lengths} do not match {size}")
    return blocks


def encode_blocks(codewords: Sequence[int], size: SymbolSize) -> List[ECCBlock]:
    """Split the data codewords into blocks and Reed-Solomon encode each one."""
    return [
        ECCBlock(tuple(block), tuple(rs_encode(block, size.ecc_block)))
        for block in split_blocks(codewords, size)
    ]


def interleave(blocks: Sequence[ECCBlock], size: SymbolSize) -> List[int]:
    """
    Merge encoded blocks into the final codeword stream.

    Args:
        blocks: Encoded blocks in block order
        size (SymbolSize): Chosen symbol size

    Returns:
        List[int]: `size.total_codewords` codewords, data first
    """
    count = len(blocks)
    stream = [0] * size.total_codewords
    for b, block in enumerate(blocks):
        stream[b:size.data_codewords:count] = block.data
        # ECC codewords continue the round-robin where the data left off
        first = size.data_codewords + (b - size.data_codewords) % count
        stream[first::count] = block.ecc
    return stream


def add_error_correction(codewords: Sequence[int], size: SymbolSize) -> List[int]:
    """
    Append interleaved Reed-Solomon codewords to the padded data codewords.

    Args:
        codewords: Padded data codewords (exactly `size.data_codewords`)
        size (SymbolSize): Chosen symbol size

    Returns:
        List[int]: Data followed by error correction codewords

    Example:
        >>> from .geometry import size_for_dimensions
        >>> add_error_correction([142, 164, 186], size_for_dimensions(10, 10))
        [142, 164, 186, 114, 25, 5, 88, 102]
    """
    blocks = encode_blocks(codewords, size)
    logger.debug(
        "Symbol %s: %d block(s) of %s data + %d ECC codewords",
        size,
        len(blocks),
        "/".join(str(n) for n in sorted(set(size.block_data_lengths()), reverse=True)),
        size.ecc_block,
    )
    return interleave(blocks, size)
