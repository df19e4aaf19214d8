"""
Tests for the leading zero bit counter and synthesizer
"""
import math

import pytest

from btcdiff.consensus.leading_zeroes import (
    count_leading_zero_bits,
    difficulty_from_leading_zero_bits,
    required_leading_zero_bits,
    target_from_leading_zero_bits,
)
from btcdiff.consensus.targets import GENESIS_TARGET, bits_to_target
from btcdiff.errors import InvalidDifficultyError, InvalidRangeError, InvalidTargetError


def _zeros_in_binary(target: int) -> int:
    binary = f"{target:0256b}"
    return len(binary) - len(binary.lstrip("0"))


def test_genesis_difficulty_needs_32_zeroes():
    assert count_leading_zero_bits(bits_to_target(0x1d00ffff)) == 32
    assert required_leading_zero_bits(1) == 32


@pytest.mark.parametrize("difficulty", [1, 2, 3, 7, 1000, 123456789, 88_400_000_000_000])
def test_required_zeroes_match_binary_rendering(difficulty):
    expected = _zeros_in_binary(GENESIS_TARGET // difficulty)
    assert required_leading_zero_bits(difficulty) == expected


def test_required_zeroes_current_network():
    assert required_leading_zero_bits(88.4e12) == 78


def test_required_zeroes_below_one():
    assert required_leading_zero_bits(0.5) == 31
    assert required_leading_zero_bits(0.25) == 30


def test_required_zeroes_unbounded_difficulty():
    assert required_leading_zero_bits(10**80) == 256


@pytest.mark.parametrize("difficulty", [0, -5])
def test_required_zeroes_rejects_invalid_difficulty(difficulty):
    with pytest.raises(InvalidDifficultyError):
        required_leading_zero_bits(difficulty)


def test_count_leading_zero_bits_edges():
    assert count_leading_zero_bits(0) == 256
    assert count_leading_zero_bits(1) == 255
    assert count_leading_zero_bits(2**255) == 0
    assert count_leading_zero_bits(2**300) == 0
    with pytest.raises(InvalidTargetError):
        count_leading_zero_bits(-1)


@pytest.mark.parametrize("zeroes, expected", [
    (0, 2**255),
    (32, 2**223),
    (200, 2**55),
    (254, 2),
    (255, 0),
])
def test_target_from_leading_zero_bits(zeroes, expected):
    assert target_from_leading_zero_bits(zeroes) == expected


def test_synthesized_target_has_requested_zeroes():
    for zeroes in range(255):
        assert _zeros_in_binary(target_from_leading_zero_bits(zeroes)) == zeroes


def test_difficulty_from_leading_zero_bits():
    assert difficulty_from_leading_zero_bits(32) == 65535 / 32768
    assert difficulty_from_leading_zero_bits(33) == 65535 / 16384
    assert difficulty_from_leading_zero_bits(0) == pytest.approx(65535 / 2**47)


def test_difficulty_from_255_zeroes_is_infinite():
    assert math.isinf(difficulty_from_leading_zero_bits(255))


@pytest.mark.parametrize("zeroes", [-1, 256, 1000])
def test_difficulty_from_leading_zero_bits_rejects_out_of_range(zeroes):
    with pytest.raises(InvalidRangeError):
        difficulty_from_leading_zero_bits(zeroes)


@pytest.mark.parametrize("zeroes", [1.5, "32", True, None])
def test_difficulty_from_leading_zero_bits_rejects_non_integers(zeroes):
    with pytest.raises(InvalidRangeError):
        difficulty_from_leading_zero_bits(zeroes)


@pytest.mark.parametrize("difficulty", [1, 2, 7, 1000, 10**6, 88_400_000_000_000])
def test_round_trip_within_quantization(difficulty):
    # The zero count only pins the target to a power of two
    zeroes = required_leading_zero_bits(difficulty)
    recovered = difficulty_from_leading_zero_bits(zeroes)
    assert difficulty <= recovered <= 2 * difficulty
