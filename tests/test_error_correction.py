import pytest

from datamatrix.error_correction import (
    add_error_correction,
    encode_blocks,
    get_codec,
    interleave,
    rs_encode,
    split_blocks,
)
from datamatrix.exceptions import InternalPlacementMismatch
from datamatrix.geometry import EXTENDED_SIZES, size_for_dimensions


def _data_for(size):
    return [(i * 37 + 11) % 256 for i in range(size.data_codewords)]


def test_reference_symbol_ecc() -> None:
    assert rs_encode([142, 164, 186], 5) == [114, 25, 5, 88, 102]


def test_reference_symbol_stream() -> None:
    size = size_for_dimensions(10, 10)
    assert add_error_correction([142, 164, 186], size) == [142, 164, 186, 114, 25, 5, 88, 102]


@pytest.mark.parametrize("size", EXTENDED_SIZES, ids=str)
def test_blocks_are_valid_codewords(size) -> None:
    for block in encode_blocks(_data_for(size), size):
        assert len(block.ecc) == size.ecc_block
        codec = get_codec(size.ecc_block)
        assert codec.check(bytearray(block.data + block.ecc)) == [True]
        assert list(codec.decode(bytearray(block.data + block.ecc))[0]) == list(block.data)


def test_single_error_is_correctable() -> None:
    size = size_for_dimensions(24, 24)
    block = encode_blocks(_data_for(size), size)[0]
    damaged = bytearray(block.data + block.ecc)
    damaged[5] ^= 0x5A
    decoded = get_codec(size.ecc_block).decode(damaged)[0]
    assert list(decoded) == list(block.data)


def test_round_robin_split() -> None:
    size = size_for_dimensions(52, 52)
    blocks = split_blocks(list(range(204)), size)
    assert blocks[0][:3] == [0, 2, 4]
    assert blocks[1][:3] == [1, 3, 5]


def test_split_rejects_wrong_length() -> None:
    with pytest.raises(InternalPlacementMismatch):
        split_blocks([0] * 10, size_for_dimensions(10, 10))


@pytest.mark.parametrize("dims", [(52, 52), (120, 120), (144, 144)])
def test_stream_position_belongs_to_block(dims) -> None:
    size = size_for_dimensions(*dims)
    blocks = encode_blocks(_data_for(size), size)
    stream = interleave(blocks, size)
    assert len(stream) == size.total_codewords
    assert stream[:size.data_codewords] == _data_for(size)
    for i in range(size.data_codewords, size.total_codewords):
        block = blocks[i % size.blocks]
        first = size.data_codewords + (i % size.blocks - size.data_codewords) % size.blocks
        assert stream[i] == block.ecc[(i - first) // size.blocks]


def test_largest_size_ecc_interleave_is_rotated() -> None:
    size = size_for_dimensions(144, 144)
    blocks = encode_blocks(_data_for(size), size)
    stream = interleave(blocks, size)
    # The first ECC codeword belongs to block 8 since 1558 = 155 * 10 + 8
    assert stream[1558] == blocks[8].ecc[0]
    assert stream[1560] == blocks[0].ecc[0]
    assert stream[-1] == blocks[7].ecc[-1]
