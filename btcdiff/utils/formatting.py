"""Display helpers: difficulty units, large-number words, target renderings"""

import math
import re
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..consensus.targets import MAX_TARGET_BITS
from ..errors import InvalidTargetError, InvalidUnitError


@dataclass(frozen=True)
class DifficultyUnit:
    name: str
    multiplier: float


DIFFICULTY_UNITS: Dict[str, DifficultyUnit] = {
    "": DifficultyUnit("Units", 1),
    "K": DifficultyUnit("Kilo", 1e3),
    "M": DifficultyUnit("Mega", 1e6),
    "G": DifficultyUnit("Giga", 1e9),
    "T": DifficultyUnit("Tera", 1e12),
    "P": DifficultyUnit("Peta", 1e15),
    "E": DifficultyUnit("Exa", 1e18),
}

UNIT_ALIASES = {"units": ""}

# Searched from the top; values past 10**39 stay in the duodecillion bucket
LARGE_NUMBER_NAMES: List[Tuple[int, str]] = [
    (10**39, "duodecillion"),
    (10**36, "undecillion"),
    (10**33, "decillion"),
    (10**30, "nonillion"),
    (10**27, "octillion"),
    (10**24, "septillion"),
    (10**21, "sextillion"),
    (10**18, "quintillion"),
    (10**15, "quadrillion"),
    (10**12, "trillion"),
    (10**9, "billion"),
    (10**6, "million"),
]

_LEADING_NUMBER = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def resolve_unit(unit: str) -> DifficultyUnit:
    """Look up a unit tag, accepting "units" for the plain unit."""
    key = UNIT_ALIASES.get(unit, unit)
    try:
        return DIFFICULTY_UNITS[key]
    except KeyError:
        raise InvalidUnitError(
            f"Unknown difficulty unit {unit!r}, expected one of {sorted(DIFFICULTY_UNITS)}"
        ) from None


def _divide(value, divisor) -> float:
    try:
        return value / divisor
    except OverflowError:
        # Ints past the float range
        return float("inf") if value > 0 else float("-inf")


def format_difficulty(value: float, unit: str) -> str:
    display_value = _divide(value, resolve_unit(unit).multiplier)
    if not math.isfinite(display_value):
        return str(float(display_value))
    text = f"{display_value:.6f}"
    return text.rstrip("0").rstrip(".")


def parse_number(text: str) -> float:
    """
    Parse the numeric prefix of ``text`` the way a browser number field
    does while the user is still typing. Returns nan when there is none.
    """
    match = _LEADING_NUMBER.match(text or "")
    if not match:
        return float("nan")
    number = match.group(1)
    if number.endswith("Infinity"):
        return float(number.replace("Infinity", "inf"))
    return float(number)


def parse_difficulty(text: str, unit: str) -> float:
    multiplier = resolve_unit(unit).multiplier
    num_value = parse_number(text)
    if math.isnan(num_value):
        return 0.0
    return num_value * multiplier


def format_grouped(value) -> str:
    """Thousands-grouped decimal string, at most three fraction digits."""
    if isinstance(value, int):
        return f"{value:,}"
    if not math.isfinite(value):
        return str(float(value))
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_large_number(value) -> str:
    """
    Render a magnitude with a word scale, e.g. 1_500_000 -> "1.5 million".

    Values below one million are returned in grouped form. Integers past
    the float range are scaled exactly.
    """
    if not isinstance(value, int) and not math.isfinite(value):
        return str(float(value))
    if value < 10**6:
        return format_grouped(value)

    threshold, name = next(
        (threshold, name) for threshold, name in LARGE_NUMBER_NAMES if value >= threshold
    )
    if value < 10 * threshold:
        return f"{value / threshold:.1f} {name}"
    # Half-up rounding, not round()'s banker's rounding
    if isinstance(value, int):
        return f"{(2 * value + threshold) // (2 * threshold)} {name}"
    return f"{math.floor(value / threshold + 0.5)} {name}"


def format_target_hex(target_int: int) -> str:
    if target_int < 0:
        raise InvalidTargetError("Negative targets are not allowed.")
    return f"0x{target_int:064x}"


def format_target_binary(target_int: int) -> str:
    if target_int < 0:
        raise InvalidTargetError("Negative targets are not allowed.")
    return f"{target_int:0{MAX_TARGET_BITS}b}"
