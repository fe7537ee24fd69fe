"""
Roman Validator — strict Roman numeral conversion for 1..3999.

Architecture: Normalize → Table fast path → Letter rules → Lex → Sequence rules → Sum
Philosophy:  Reject anything that isn't a well-composed numeral, and say which rule it broke.
"""

from .exceptions import RomanNumeralError
from .models import DecodeFlags, DecodeResult, EncodeResult, ErrorKind
from .numerals import (
    decode,
    decode_or_raise,
    encode,
    encode_or_raise,
    is_numeral,
    numeral_pairs,
)

__version__ = "1.0.0"

__all__ = [
    "DecodeFlags",
    "DecodeResult",
    "EncodeResult",
    "ErrorKind",
    "RomanNumeralError",
    "decode",
    "decode_or_raise",
    "encode",
    "encode_or_raise",
    "is_numeral",
    "numeral_pairs",
]
