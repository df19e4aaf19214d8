"""Two-way difficulty <-> leading zero bits conversion with display values.

Core functions raise on invalid input; this layer catches those errors, logs
them and hands back a zeroed placeholder so a caller that converts on every
keystroke always has something to render.
"""

import logging
import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .consensus.leading_zeroes import (
    count_leading_zero_bits,
    difficulty_from_leading_zero_bits,
    target_from_leading_zero_bits,
)
from .consensus.targets import target_from_difficulty
from .errors import ConverterError
from .utils.formatting import (
    format_difficulty,
    format_grouped,
    format_large_number,
    format_target_binary,
    format_target_hex,
    parse_difficulty,
    resolve_unit,
)

logger = logging.getLogger("Converter")

PATTERN_PREVIEW_BITS = 32
_LEADING_INT = re.compile(r"\s*([+-]?)0*(\d+)")
# Any count with more digits than this is out of range
MAX_ZEROES_DIGITS = 4


def parse_leading_zeroes(text: str) -> Optional[int]:
    """Integer prefix of ``text`` ("70", " 70abc" -> 70), None if there is none."""
    match = _LEADING_INT.match(text or "")
    if not match:
        return None
    sign, digits = match.groups()
    if len(digits) > MAX_ZEROES_DIGITS:
        digits = "9" * MAX_ZEROES_DIGITS
    return int(sign + digits)


def hash_probability(zeroes: int) -> int:
    """A random hash has a 1 in 2**zeroes chance of that many leading zeroes."""
    return 2 ** max(zeroes, 0)


def binary_pattern(zeroes: int) -> str:
    """Short preview of the required hash prefix."""
    zeroes = max(zeroes, 0)
    prefix = "0" * min(zeroes, PATTERN_PREVIEW_BITS)
    return prefix + ("1..." if zeroes < PATTERN_PREVIEW_BITS else "...")


def log2_difficulty(difficulty: float) -> float:
    if not difficulty or difficulty < 0:
        return 0.0
    return math.log2(difficulty)


def zeroes_ratio(zeroes: int) -> float:
    """Share of the 256 hash bits that must be zero, as a percentage."""
    return zeroes / 256 * 100


@dataclass
class Conversion:
    difficulty: float
    unit: str
    difficulty_display: str
    difficulty_full: str
    leading_zeroes: int
    target: int
    target_hex: str
    target_binary: str
    probability: int
    probability_words: str
    binary_pattern: str
    log2_difficulty: float
    zeroes_ratio: float
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # JSON numbers lose precision past 2**53
        data["target"] = str(self.target)
        data["probability"] = str(self.probability)
        for key in ("difficulty", "log2_difficulty"):
            if not math.isfinite(data[key]):
                data[key] = str(data[key])
        return data


def _build(difficulty: float, zeroes: int, target: int, unit: str) -> Conversion:
    probability = hash_probability(zeroes)
    return Conversion(
        difficulty=difficulty,
        unit=unit,
        difficulty_display=format_difficulty(difficulty, unit),
        difficulty_full=format_grouped(difficulty),
        leading_zeroes=zeroes,
        target=target,
        target_hex=format_target_hex(target),
        target_binary=format_target_binary(target),
        probability=probability,
        probability_words=format_large_number(probability),
        binary_pattern=binary_pattern(zeroes),
        log2_difficulty=log2_difficulty(difficulty),
        zeroes_ratio=zeroes_ratio(zeroes),
    )


def placeholder(unit: str, error: str) -> Conversion:
    """Zeroed conversion returned when the input cannot be converted."""
    conversion = _build(0.0, 0, 0, unit)
    conversion.error = error
    return conversion


def convert_difficulty(text: str, unit: str) -> Conversion:
    """Convert typed difficulty text in ``unit`` to leading zeroes and target."""
    resolve_unit(unit)
    difficulty = parse_difficulty(text, unit)
    if difficulty <= 0:
        return placeholder(unit, "Difficulty must be greater than 0.")
    try:
        target = target_from_difficulty(difficulty)
        zeroes = count_leading_zero_bits(target)
    except ConverterError as e:
        logger.warning("Error calculating leading zeroes: %s", e)
        return placeholder(unit, str(e))
    logger.debug("Difficulty %s -> %d leading zeroes", difficulty, zeroes)
    return _build(difficulty, zeroes, target, unit)


def convert_leading_zeroes(text: str, unit: str) -> Conversion:
    """Convert a typed leading zero bit count to a difficulty shown in ``unit``."""
    resolve_unit(unit)
    zeroes = parse_leading_zeroes(text)
    if zeroes is None:
        return placeholder(unit, f"Not a number of leading zeroes: {text!r}")
    try:
        target = target_from_leading_zero_bits(zeroes)
        difficulty = difficulty_from_leading_zero_bits(zeroes)
    except ConverterError as e:
        logger.warning("Error calculating difficulty: %s", e)
        return placeholder(unit, str(e))
    logger.debug("%d leading zeroes -> difficulty %s", zeroes, difficulty)
    return _build(difficulty, zeroes, target, unit)


def change_unit(text: str, from_unit: str, to_unit: str) -> str:
    """Re-express difficulty text typed in ``from_unit`` in ``to_unit``."""
    return format_difficulty(parse_difficulty(text, from_unit), to_unit)
