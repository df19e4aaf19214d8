import argparse
import json
from .config import Settings
from .logging_setup import setup_logging


def _print_conversion(conversion, as_json: bool):
    if as_json:
        print(json.dumps(conversion.as_dict(), indent=2))
        return
    unit = conversion.unit or "units"
    print(f"Difficulty:       {conversion.difficulty_display} {unit}")
    print(f"Full difficulty:  {conversion.difficulty_full}")
    print(f"Leading zeroes:   {conversion.leading_zeroes}")
    print(f"Target:           {conversion.target_hex}")
    print(f"Hash probability: 1 in {conversion.probability:,}")
    print(f"                  1 in {conversion.probability_words}")
    print(f"Binary pattern:   {conversion.binary_pattern}")
    print(f"Log2 difficulty:  {conversion.log2_difficulty:.1f}")
    print(f"Zeroes ratio:     {conversion.zeroes_ratio:.1f}%")


def _print_bits(bits: str, unit: str, as_json: bool):
    from .consensus.leading_zeroes import count_leading_zero_bits
    from .consensus.targets import bits_to_target, target_to_diff1
    from .utils.formatting import format_difficulty, format_target_hex

    target = bits_to_target(bits)
    difficulty = target_to_diff1(target)
    result = {
        "bits": bits,
        "target_hex": format_target_hex(target),
        "leading_zeroes": count_leading_zero_bits(target),
        "difficulty": format_difficulty(difficulty, unit),
        "unit": unit,
    }
    if as_json:
        print(json.dumps(result, indent=2))
        return
    print(f"Target:         {result['target_hex']}")
    print(f"Leading zeroes: {result['leading_zeroes']}")
    print(f"Difficulty:     {result['difficulty']} {unit or 'units'}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="btcdiff",
        description="Convert between Bitcoin difficulty, leading zero bits and targets",
    )
    p.add_argument("-v", "--verbose", "--debug", action="store_true", dest="verbose")
    p.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    p.add_argument("--json", action="store_true", help="Print results as JSON")
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("difficulty", help="Difficulty -> leading zero bits")
    d.add_argument("value")
    d.add_argument("-u", "--unit", default=None, help="'', K, M, G, T, P or E")

    z = sub.add_parser("zeroes", help="Leading zero bits -> difficulty")
    z.add_argument("zeroes")
    z.add_argument("-u", "--unit", default=None, help="'', K, M, G, T, P or E")

    b = sub.add_parser("bits", help="Decode compact nBits (hex)")
    b.add_argument("bits")
    b.add_argument("-u", "--unit", default=None, help="'', K, M, G, T, P or E")

    s = sub.add_parser("serve", help="Run the JSON web API")
    s.add_argument("--host", dest="api_host", default=None)
    s.add_argument("--port", dest="api_port", type=int, default=None)
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)

    s = Settings()
    if args.log_level is not None:
        s.log_level = args.log_level
    elif args.verbose:
        s.log_level = "DEBUG"

    if args.command == "serve":
        from .run import run_with_settings

        for k in ("api_host", "api_port"):
            v = getattr(args, k)
            if v is not None:
                setattr(s, k, v)
        run_with_settings(s)
        return

    setup_logging(s.log_level)

    from .converter import convert_difficulty, convert_leading_zeroes
    from .errors import ConverterError

    unit = s.default_unit if args.unit is None else args.unit
    try:
        if args.command == "difficulty":
            conversion = convert_difficulty(args.value, unit)
        elif args.command == "zeroes":
            conversion = convert_leading_zeroes(args.zeroes, unit)
        else:
            _print_bits(args.bits, unit, args.json)
            return
    except ConverterError as e:
        raise SystemExit(f"error: {e}")

    if not conversion.ok:
        raise SystemExit(f"error: {conversion.error}")
    _print_conversion(conversion, args.json)


if __name__ == "__main__":
    main()
