#!/usr/bin/env python3
"""
Roman Validator — Entry Point
=============================

Converts each argument: all-digit values are encoded, anything else is
decoded. Lines piped on stdin are converted too.

Usage:
    python main.py MCMXCIV 1994             # -> 1994, MCMXCIV
    python main.py --explain CMC            # Say which rule CMC breaks
    python main.py --lenient IIII           # Accept additive forms -> 4
    ROMAN_DEFAULT_FLAGS='{"ignore_case": true}' python main.py xiv
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable

from dotenv import load_dotenv

from roman_validator.exceptions import ConfigurationError, NumeralTableError
from roman_validator.numerals import decode, encode

load_dotenv()


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_GREEN = "\033[92m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"


# ─── Argument Parsing ───────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert between Roman numerals and integers (1..3999).",
    )
    parser.add_argument("values", nargs="*", metavar="VALUE", help="numerals to decode or integers to encode")
    parser.add_argument("--ignore-case", action="store_true", default=None, help="accept lowercase numerals")
    parser.add_argument(
        "--lenient",
        dest="strict",
        action="store_false",
        default=None,
        help="skip composition rules (accepts IIII, VIIII, MDCCCCX)",
    )
    parser.add_argument("--explain", action="store_true", default=None, help="report which rule a numeral breaks")
    parser.add_argument("--zero", action="store_true", default=None, help="decode N as 0")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _decode_options(args: argparse.Namespace) -> dict[str, bool]:
    """Only flags given on the command line; the rest come from the defaults."""
    options = {
        "ignore_case": args.ignore_case,
        "strict": args.strict,
        "explain": args.explain,
        "zero": args.zero,
    }
    return {k: v for k, v in options.items() if v is not None}


# ─── Conversion ─────────────────────────────────────────────────────


def convert(value: str, options: dict[str, bool]) -> bool:
    """Convert one input and print the outcome. Returns True on success."""
    if value.isascii() and value.isdigit():
        result = encode(int(value))
        if result.ok:
            print(f"{value} {_DIM}→{_RESET} {_BOLD}{result.numeral}{_RESET}")
            return True
    else:
        result = decode(value, **options)
        if result.ok:
            print(f"{value} {_DIM}→{_RESET} {_BOLD}{result.value}{_RESET}")
            return True

    assert result.error is not None
    print(f"{value} {_DIM}→{_RESET} {_RED}[{result.error.kind.value}]{_RESET} {result.error.message}")
    return False


def _stdin_values() -> Iterable[str]:
    if sys.stdin is None or sys.stdin.isatty():
        return []
    return (line.strip() for line in sys.stdin if line.strip())


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Convert every input and return the exit status (0 if all converted)."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    options = _decode_options(args)

    values = list(args.values)
    if argv is None:
        values.extend(_stdin_values())

    try:
        results = [convert(value, options) for value in values]
    except (ConfigurationError, NumeralTableError) as e:
        print(f"{_RED}{_BOLD}error:{_RESET} {e}", file=sys.stderr)
        return 2

    failures = results.count(False)
    if failures and len(values) > 1:
        print(f"\n  {_RED}{failures} of {len(values)} value(s) could not be converted{_RESET}")
    elif values and not failures and len(values) > 1:
        print(f"\n  {_GREEN}all {len(values)} value(s) converted{_RESET}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
