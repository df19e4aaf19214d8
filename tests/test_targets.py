"""
Tests for compact bits decoding and difficulty <-> target conversion
"""
import math

import pytest

from btcdiff.consensus.targets import (
    DIFF1_TARGET,
    GENESIS_BITS,
    GENESIS_TARGET,
    bits_to_target,
    target_from_difficulty,
    target_to_bits,
    target_to_diff1,
)
from btcdiff.errors import InvalidDifficultyError, InvalidTargetError

GENESIS_HEX = "00000000ffff0000000000000000000000000000000000000000000000000000"


def test_genesis_target():
    assert GENESIS_BITS == 0x1d00ffff
    assert GENESIS_TARGET == int(GENESIS_HEX, 16)
    assert DIFF1_TARGET == GENESIS_TARGET


@pytest.mark.parametrize("bits", [0x1d00ffff, "1d00ffff", "0x1d00ffff", "1D00FFFF"])
def test_bits_to_target_accepts_int_and_hex(bits):
    assert bits_to_target(bits) == GENESIS_TARGET


def test_bits_to_target_historic_block():
    assert bits_to_target(0x1b0404cb) == 0x0404cb * 2 ** (8 * (0x1b - 3))


@pytest.mark.parametrize("bits, expected", [
    (0x0200ff00, 0xff),
    (0x01123456, 0x12),
    (0x03123456, 0x123456),
    (0x00000000, 0),
])
def test_bits_to_target_small_exponent_shifts_right(bits, expected):
    assert bits_to_target(bits) == expected


@pytest.mark.parametrize("bits", [0x1d80ffff, 0x04923456, "1d80ffff"])
def test_bits_to_target_rejects_sign_bit(bits):
    with pytest.raises(InvalidTargetError):
        bits_to_target(bits)


@pytest.mark.parametrize("bits", [-1, 0x1_0000_0000, "zz", "", 1.5, True])
def test_bits_to_target_rejects_malformed(bits):
    with pytest.raises(InvalidTargetError):
        bits_to_target(bits)


@pytest.mark.parametrize("bits", [0x1d00ffff, 0x1b0404cb, 0x170331db])
def test_target_to_bits_inverts_decoding(bits):
    assert target_to_bits(bits_to_target(bits)) == bits


def test_target_to_bits_clears_sign_bit():
    # 0x80 in the top coefficient byte needs an extra exponent byte
    assert target_to_bits(0x80) == 0x02008000
    assert target_to_bits(0) == 0


def test_target_to_bits_rejects_out_of_range():
    with pytest.raises(InvalidTargetError):
        target_to_bits(-1)
    with pytest.raises(InvalidTargetError):
        target_to_bits(1 << 256)


def test_target_from_difficulty_integers():
    assert target_from_difficulty(1) == GENESIS_TARGET
    assert target_from_difficulty(2) == GENESIS_TARGET // 2
    assert target_from_difficulty(3) == GENESIS_TARGET // 3


def test_target_from_difficulty_truncates_fraction():
    assert target_from_difficulty(2.9) == GENESIS_TARGET // 2
    assert target_from_difficulty(1.0) == GENESIS_TARGET


def test_target_from_difficulty_below_one_uses_floor_of_inverse():
    assert target_from_difficulty(0.5) == GENESIS_TARGET * 2
    assert target_from_difficulty(0.3) == GENESIS_TARGET * 3
    assert target_from_difficulty(0.26) == GENESIS_TARGET * 3


def test_target_from_difficulty_can_exceed_256_bits():
    assert target_from_difficulty(1e-12).bit_length() > 256


def test_target_from_difficulty_huge_difficulty_is_zero():
    assert target_from_difficulty(10**80) == 0


@pytest.mark.parametrize("difficulty", [0, -5, -0.5, float("nan"), float("inf"), 5e-324])
def test_target_from_difficulty_rejects_invalid(difficulty):
    with pytest.raises(InvalidDifficultyError):
        target_from_difficulty(difficulty)


def test_target_to_diff1():
    assert target_to_diff1(GENESIS_TARGET) == 1.0
    assert target_to_diff1(GENESIS_TARGET // 2) == 2.0
    assert target_to_diff1(GENESIS_TARGET * 4) == 0.25
    assert target_to_diff1(bits_to_target(0x1b0404cb)) == pytest.approx(16307.420938523983)


def test_target_to_diff1_zero_target_is_infinite():
    assert math.isinf(target_to_diff1(0))


def test_target_to_diff1_rejects_negative():
    with pytest.raises(InvalidTargetError):
        target_to_diff1(-1)
