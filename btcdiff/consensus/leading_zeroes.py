"""Leading zero bit counts implied by a difficulty, and the inverse"""

from .targets import MAX_TARGET_BITS, target_from_difficulty, target_to_diff1
from ..errors import InvalidRangeError, InvalidTargetError

MAX_LEADING_ZEROES = MAX_TARGET_BITS - 1


def count_leading_zero_bits(target_int: int) -> int:
    """Count the leading 0 digits of the target's 256-bit binary rendering."""
    if target_int < 0:
        raise InvalidTargetError("Negative targets are not allowed.")
    # Targets wider than 256 bits render unpadded, with no leading zeroes
    return max(MAX_TARGET_BITS - target_int.bit_length(), 0)


def required_leading_zero_bits(difficulty) -> int:
    """
    Number of leading zero bits a hash needs to satisfy the given difficulty.

    Returns a value in [0, 256]; 256 only when the target rounds down to zero.
    """
    return count_leading_zero_bits(target_from_difficulty(difficulty))


def target_from_leading_zero_bits(zeroes: int) -> int:
    """
    Smallest target whose 256-bit rendering starts with exactly ``zeroes``
    zero bits: a single 1 bit followed by zeroes. At 255 no bits remain after
    the zeroes and the target is 0.
    """
    if isinstance(zeroes, bool) or not isinstance(zeroes, int):
        raise InvalidRangeError(f"Leading zeroes must be an integer, got {zeroes!r}")
    if zeroes < 0 or zeroes > MAX_LEADING_ZEROES:
        raise InvalidRangeError("Leading zeroes must be between 0 and 255.")

    remaining_bits = MAX_TARGET_BITS - zeroes - 1
    if remaining_bits == 0:
        return 0
    return 1 << remaining_bits


def difficulty_from_leading_zero_bits(zeroes: int) -> float:
    """Difficulty implied by ``zeroes`` leading zero bits; inf at 255."""
    return target_to_diff1(target_from_leading_zero_bits(zeroes))
