import random

import pytest

from datamatrix.encodation import (
    EncodationResult,
    encode_data,
    pad_codewords,
    randomize_253,
    randomize_255,
)
from datamatrix.exceptions import InputTooLong, InternalEncodingTableError
from datamatrix.modes import LATCH, X12_CHARSET, Mode, ascii_codewords
from datamatrix.size_selector import SizeSelector

C40_TEXT = b"ABCDEFGHIJKL"
TEXT_TEXT = b"abcdefghijklmnopqrstuvwxyz"
X12_TEXT = b"ABC>DEF*GHI>" * 2
EDIFACT_TEXT = b".,;:-/()+=*%$#!&"
BINARY_TEXT = bytes(range(128, 160))

MIXED_SAMPLES = [
    b"",
    b"A",
    b"AB",
    b"ABC",
    b"ABCD1",
    b"Hello, World!",
    b"abcdef!",
    b"AAAAA\xe9",
    b"*>*>*>*>",
    b"123456789012",
    b"1A2B3C4D5E6F7G8H9I0J",
    b"http://www.example.com/path?q=1",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789",
    b"\x00\x01\x02\x03\x04",
    b"ABC\r\nDEF",
    b"EDIFACT:.+'?" * 3,
    C40_TEXT + b"\xff\xfe" + TEXT_TEXT,
    X12_TEXT + b"abc" + EDIFACT_TEXT,
]


def _random_samples(count: int = 40):
    rng = random.Random(16022)
    alphabets = [
        b"ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 ",
        b"abcdefghijklmnopqrstuvwxyz ",
        b"0123456789ABC*>\r ",
        b"!\"#$%&'()*+,-./:;<=>?@[\\]^ABC",
        bytes(range(256)),
    ]
    samples = []
    for i in range(count):
        alphabet = alphabets[i % len(alphabets)]
        length = rng.randint(1, 60)
        samples.append(bytes(rng.choice(alphabet) for _ in range(length)))
    return samples


ALL_SAMPLES = MIXED_SAMPLES + _random_samples()


def test_digit_pairs() -> None:
    assert list(encode_data(b"123456").codewords) == [142, 164, 186]


def test_odd_digit_count() -> None:
    assert list(encode_data(b"123").codewords) == [142, 52]


def test_upper_shift() -> None:
    assert ascii_codewords(b"\xe9") == [235, 106]
    assert ascii_codewords(b"A") == [66]


def test_c40_run() -> None:
    result = encode_data(C40_TEXT)
    assert len(result) == 9
    assert result.codewords[:3] == (230, 89, 233)
    assert result.final_mode == Mode.C40
    assert [(s.mode, s.start, s.length, s.is_latch) for s in result.segments] == [
        (Mode.C40, 0, 12, True)
    ]


def test_text_run_pads_last_triplet() -> None:
    result = encode_data(TEXT_TEXT)
    assert result.codewords[0] == 239
    assert len(result) == 19
    assert result.final_mode == Mode.TEXT


def test_x12_run() -> None:
    result = encode_data(X12_TEXT)
    assert result.codewords[:3] == (238, 89, 233)
    assert len(result) == 17
    assert result.final_mode == Mode.X12


def test_edifact_run_with_explicit_unlatch() -> None:
    result = encode_data(EDIFACT_TEXT)
    assert result.codewords[0] == 240
    assert len(result) == 14
    # Unlatch value 31 alone in the last codeword
    assert result.codewords[-1] == 31 << 2
    assert result.final_mode == Mode.ASCII


def test_base256_run() -> None:
    result = encode_data(BINARY_TEXT)
    assert result.codewords[0] == 231
    assert len(result) == 2 + len(BINARY_TEXT)
    assert result.codewords[1] == randomize_255(len(BINARY_TEXT), 2)
    assert result.codewords[2] == randomize_255(BINARY_TEXT[0], 3)
    assert result.final_mode == Mode.ASCII


def test_base256_two_byte_length_field() -> None:
    data = b"\xff" * 300
    result = encode_data(data)
    assert result.codewords[0] == 231
    assert len(result) == 3 + 300
    assert result.codewords[1] == randomize_255(250, 2)
    assert result.codewords[2] == randomize_255(50, 3)


def test_base256_scrambling_depends_on_position() -> None:
    result = encode_data(b"\x80" * 8)
    payload = result.codewords[2:]
    assert len(set(payload)) > 1


def test_randomize_255_values() -> None:
    assert randomize_255(32, 2) == 76
    assert randomize_255(128, 3) == 65
    for position in range(1, 300):
        assert 0 <= randomize_255(200, position) <= 255


def test_randomize_253_values() -> None:
    assert randomize_253(129, 5) == 115
    for position in range(1, 300):
        assert 1 <= randomize_253(129, position) <= 254


@pytest.mark.parametrize("data", ALL_SAMPLES)
def test_never_longer_than_ascii(data: bytes) -> None:
    assert len(encode_data(data)) <= len(ascii_codewords(data))


@pytest.mark.parametrize("data", ALL_SAMPLES)
def test_segments_partition_input(data: bytes) -> None:
    segments = encode_data(data).segments
    position = 0
    for segment in segments:
        assert segment.start == position
        assert segment.length > 0
        position = segment.end
    assert position == len(data)


@pytest.mark.parametrize("data", ALL_SAMPLES)
def test_encoding_is_deterministic(data: bytes) -> None:
    assert encode_data(data) == encode_data(data)


def test_empty_input() -> None:
    result = encode_data(b"")
    assert result.codewords == ()
    assert result.segments == ()


def test_input_length_limit() -> None:
    with pytest.raises(InputTooLong):
        encode_data(b"1" * 3117)
    with pytest.raises(InputTooLong):
        encode_data(b"ABCDE", max_input_length=4)


def test_largest_digit_input_fits() -> None:
    assert len(encode_data(b"1" * 3116)) == 1558


def test_binary_overflow() -> None:
    with pytest.raises(InputTooLong) as info:
        encode_data(b"\xff" * 1600)
    assert info.value.capacity == 1558


def test_forced_size_skips_capacity_check() -> None:
    # Overflow of a forced size is reported by size selection
    result = encode_data(b"ABCDEFGHIJ", SizeSelector(force_size=1))
    assert len(result) > 3


def test_pad_codewords() -> None:
    result = encode_data(b"123456")
    assert pad_codewords(result, 3) == [142, 164, 186]
    assert pad_codewords(result, 5) == [142, 164, 186, 129, 115]


def test_pad_unlatches_open_triplet_mode() -> None:
    result = encode_data(C40_TEXT)
    padded = pad_codewords(result, 12)
    assert padded[9] == 254
    assert padded[10] == 129
    assert len(padded) == 12


def test_full_triplet_symbol_needs_no_unlatch() -> None:
    result = encode_data(C40_TEXT)
    assert pad_codewords(result, 9) == list(result.codewords)


def test_pad_rejects_overflow() -> None:
    with pytest.raises(InternalEncodingTableError):
        pad_codewords(encode_data(b"123456"), 2)


def test_pad_rejects_unfinished_mode() -> None:
    result = EncodationResult((231, 10), (), Mode.BASE256)
    with pytest.raises(InternalEncodingTableError):
        pad_codewords(result, 5)


@pytest.mark.parametrize("table,key", [(LATCH, Mode.C40), (X12_CHARSET, ord("A"))])
def test_mode_tables_are_read_only(table, key) -> None:
    with pytest.raises(TypeError):
        table[key] = 0
