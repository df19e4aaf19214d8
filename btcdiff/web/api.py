"""FastAPI web server for difficulty conversions"""

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse
import logging

from ..consensus.leading_zeroes import count_leading_zero_bits
from ..consensus.targets import GENESIS_TARGET, bits_to_target, target_to_bits, target_to_diff1
from ..converter import change_unit, convert_difficulty, convert_leading_zeroes
from ..errors import ConverterError
from ..utils.formatting import (
    DIFFICULTY_UNITS,
    UNIT_ALIASES,
    format_difficulty,
    format_target_binary,
    format_target_hex,
    resolve_unit,
)

logger = logging.getLogger("WebAPI")

app = FastAPI(title="Bitcoin Difficulty Converter")

# Unit used when a request does not name one (set on startup)
default_unit = "T"


def set_default_unit(unit: str):
    """Set the unit used when requests omit one"""
    global default_unit
    resolve_unit(unit)
    default_unit = UNIT_ALIASES.get(unit, unit)


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@app.get("/api/health")
async def health_check():
    """Simple liveness probe"""
    return {"status": "ok", "genesis_target": format_target_hex(GENESIS_TARGET)}


@app.get("/api/units")
async def get_units():
    """List the supported difficulty units and their multipliers"""
    return {
        "units": [
            {"tag": tag, "name": unit.name, "multiplier": unit.multiplier}
            for tag, unit in DIFFICULTY_UNITS.items()
        ],
        "default": default_unit,
    }


@app.get("/api/convert/difficulty")
async def convert_from_difficulty(value: str = Query(...), unit: str = None):
    """Difficulty (in unit) -> required leading zero bits and target"""
    unit = default_unit if unit is None else unit
    try:
        conversion = convert_difficulty(value, unit)
    except ConverterError as e:
        return _error(str(e))
    return conversion.as_dict()


@app.get("/api/convert/zeroes")
async def convert_from_zeroes(zeroes: str = Query(...), unit: str = None):
    """Leading zero bits -> difficulty (in unit) and synthesized target"""
    unit = default_unit if unit is None else unit
    try:
        conversion = convert_leading_zeroes(zeroes, unit)
    except ConverterError as e:
        return _error(str(e))
    return conversion.as_dict()


@app.get("/api/unit")
async def convert_unit(value: str, from_unit: str, to_unit: str):
    """Re-express a typed difficulty in another unit"""
    try:
        return {"value": change_unit(value, from_unit, to_unit), "unit": to_unit}
    except ConverterError as e:
        return _error(str(e))


@app.get("/api/bits/{bits}")
async def decode_bits(bits: str, unit: str = None):
    """Decode compact nBits into the full target and its difficulty"""
    unit = default_unit if unit is None else unit
    try:
        target = bits_to_target(bits)
        difficulty = target_to_diff1(target)
        difficulty_display = format_difficulty(difficulty, unit)
    except ConverterError as e:
        logger.debug("Rejected bits %s: %s", bits, e)
        return _error(str(e))
    return {
        "bits": f"{target_to_bits(target):08x}" if target.bit_length() <= 256 else None,
        "target": str(target),
        "target_hex": format_target_hex(target),
        "target_binary": format_target_binary(target),
        "leading_zeroes": count_leading_zero_bits(target),
        "difficulty": difficulty if difficulty != float("inf") else "inf",
        "difficulty_display": difficulty_display,
        "unit": unit,
    }
