# Bitcoin compact target ("nBits") handling and difficulty <-> target math
import math
from fractions import Fraction

from ..errors import InvalidDifficultyError, InvalidTargetError

SIGN_BIT = 0x00800000
COEFFICIENT_MASK = 0x007FFFFF
MAX_TARGET_BITS = 256


def bits_to_target(bits) -> int:
    """Convert compact bits representation to full target value.

    Accepts the 32-bit integer or its hex string form ("1d00ffff").
    """
    if isinstance(bits, str):
        try:
            bits = int(bits, 16)
        except ValueError:
            raise InvalidTargetError(f"Invalid compact bits {bits!r}") from None
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise InvalidTargetError(f"Compact bits must be an integer, got {bits!r}")
    if bits < 0 or bits > 0xFFFFFFFF:
        raise InvalidTargetError(f"Compact bits 0x{bits:x} do not fit in 32 bits")
    if bits & SIGN_BIT:
        raise InvalidTargetError("Negative targets are not allowed.")

    exp = (bits >> 24) & 0xFF
    mant = bits & COEFFICIENT_MASK
    if exp <= 3:
        target_int = mant >> (8 * (3 - exp))
    else:
        target_int = mant << (8 * (exp - 3))
    return target_int


def target_to_bits(target_int: int) -> int:
    """Convert a full target value back to its compact bits representation."""
    if target_int < 0:
        raise InvalidTargetError("Negative targets are not allowed.")
    if target_int.bit_length() > MAX_TARGET_BITS:
        raise InvalidTargetError("Target does not fit in 256 bits")

    size = (target_int.bit_length() + 7) // 8
    if size <= 3:
        mant = target_int << (8 * (3 - size))
    else:
        mant = target_int >> (8 * (size - 3))
    # Coefficient must not look negative
    if mant & SIGN_BIT:
        mant >>= 8
        size += 1
    return (size << 24) | mant


GENESIS_BITS = 0x1D00FFFF

# Difficulty 1 anchor, "00000000ffff0000000000000000000000000000000000000000000000000000"
GENESIS_TARGET = bits_to_target(GENESIS_BITS)
DIFF1_TARGET = GENESIS_TARGET


def target_from_difficulty(difficulty) -> int:
    """
    Convert a difficulty to the target a hash must not exceed.

    Difficulties of 1 and above are truncated to an integer and divide the
    genesis target. Fractional difficulties below 1 multiply the genesis
    target by floor(1 / difficulty), which is coarser than an exact inverse.
    """
    # NaN compares unequal to itself
    if difficulty != difficulty or difficulty <= 0:
        raise InvalidDifficultyError("Difficulty must be greater than 0.")
    if difficulty == float("inf"):
        raise InvalidDifficultyError("Difficulty must be finite.")

    if difficulty < 1 and difficulty % 1 != 0:
        inverse = 1 / difficulty
        if math.isinf(inverse):
            raise InvalidDifficultyError(f"Difficulty {difficulty!r} is too small")
        return GENESIS_TARGET * math.floor(inverse)
    return GENESIS_TARGET // int(difficulty)


def target_to_diff1(target_int: int) -> float:
    """Convert a target value to difficulty (diff1-based)."""
    if target_int < 0:
        raise InvalidTargetError("Negative targets are not allowed.")
    if target_int == 0:
        return float("inf")
    return float(Fraction(DIFF1_TARGET, target_int))
