"""
Public conversion functions.

    >>> decode("MMMDCCCXCVIII").value
    3898
    >>> decode("vi", ignore_case=True).value
    6
    >>> decode("LLVIV", explain=True).error.message
    'letters V, L, and D can appear only once, but found several instances of L, V'
    >>> encode(3898).numeral
    'MMMDCCCXCVIII'

Options accepted by the decode functions: ignore_case, strict, explain and
zero (see DecodeFlags). Anything else is ignored. Omitted options fall back
to the process-wide defaults from config.py.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from .config import get_default_flags
from .encoder import encode_result, encode_value
from .exceptions import error_class_for
from .models import DecodeFlags, DecodeResult, EncodeResult
from .pipeline import DecodePipeline
from .table import get_numeral_table


@lru_cache(maxsize=1)
def get_pipeline() -> DecodePipeline:
    """The shared pipeline. It holds nothing but the read-only table."""
    return DecodePipeline(get_numeral_table())


def resolve_flags(**options: Any) -> DecodeFlags:
    """Process-wide defaults with the recognised per-call options applied.

    Raises:
        TypeError: If a recognised option has a non-boolean value.
    """
    try:
        return get_default_flags().override(**options)
    except ValidationError as e:
        raise TypeError(f"invalid decode option: {e}") from e


def decode(numeral: str, **options: Any) -> DecodeResult:
    """Decode a numeral. Bad numerals are reported in the result, never raised.

    Raises:
        TypeError: If `numeral` isn't a string, or a recognised option
            has a non-boolean value.
    """
    if not isinstance(numeral, str):
        raise TypeError(f"numeral must be a str, got {type(numeral).__name__}")
    return get_pipeline().run(numeral, resolve_flags(**options))


def decode_or_raise(numeral: str, **options: Any) -> int:
    """Decode a numeral, raising the matching RomanNumeralError on failure."""
    result = decode(numeral, **options)
    if result.error is not None:
        raise error_class_for(result.error.kind.value)(
            result.error.message, details=dict(result.error.details)
        )
    assert result.value is not None
    return result.value


def is_numeral(numeral: str, **options: Any) -> bool:
    """True when decode() would succeed with the same options."""
    return decode(numeral, **options).ok


def encode(value: int) -> EncodeResult:
    """Encode an integer in 1..3999. Failures are reported in the result."""
    return encode_result(value)


def encode_or_raise(value: int) -> str:
    """Encode an integer in 1..3999, raising InvalidIntegerError otherwise."""
    return encode_value(value)


def numeral_pairs() -> list[tuple[int, str]]:
    """Every (value, canonical numeral) pair, ascending from 1 to 3999."""
    return get_numeral_table().pairs()
