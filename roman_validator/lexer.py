"""
Section lexer — splits a numeral into value-bearing tokens.

Greedy, leftmost-longest, no backtracking: at each position the six
subtractive pairs are tried first, then the seven single letters.

    "MCMXCIV" -> M, CM, XC, IV

The lexer does NOT judge composition: "VX" lexes happily into V, X.
Ordering and subtraction rules live in validators.validate_sequence().
"""

from __future__ import annotations

from .exceptions import InvalidLetterError
from .models import NumeralToken, PlainToken, SubtractiveToken

# ─── Token Tables ───────────────────────────────────────────────────

SUBTRACTIVE_PAIRS: dict[str, SubtractiveToken] = {
    "CM": SubtractiveToken("CM", 900, 100),
    "CD": SubtractiveToken("CD", 400, 100),
    "XC": SubtractiveToken("XC", 90, 10),
    "XL": SubtractiveToken("XL", 40, 10),
    "IX": SubtractiveToken("IX", 9, 1),
    "IV": SubtractiveToken("IV", 4, 1),
}

LETTERS: dict[str, PlainToken] = {
    "M": PlainToken("M", 1000),
    "D": PlainToken("D", 500),
    "C": PlainToken("C", 100),
    "L": PlainToken("L", 50),
    "X": PlainToken("X", 10),
    "V": PlainToken("V", 5),
    "I": PlainToken("I", 1),
}


def lex_sections(numeral: str) -> tuple[NumeralToken, ...]:
    """Segment an (already letter-validated) numeral into tokens.

    Raises:
        InvalidLetterError: If a character isn't a numeral letter. Can't
            happen for input that went through validate_letters() first.
    """
    tokens: list[NumeralToken] = []
    pos = 0

    while pos < len(numeral):
        pair = SUBTRACTIVE_PAIRS.get(numeral[pos:pos + 2])
        if pair is not None:
            tokens.append(pair)
            pos += 2
            continue

        letter = LETTERS.get(numeral[pos])
        if letter is None:
            raise InvalidLetterError(
                f"cannot lex {numeral!r}: unexpected character {numeral[pos]!r} at position {pos}",
                details={"invalid_letters": [numeral[pos]], "position": pos},
            )
        tokens.append(letter)
        pos += 1

    return tuple(tokens)
