"""
Composition rule validators — the strict layer.

Two tiers, each a set of pure functions that either return their input
unchanged or raise the RomanNumeralError subclass naming the broken rule:

  Letter tier (raw string):
    1. check_alphabet          only I, V, X, L, C, D, M
    2. check_run_length        no letter 4+ times in a row        (strict)
    3. check_single_occurrence V, L, D at most once each          (strict)

  Sequence tier (lexed tokens, strict only):
    4. check_non_increasing    token values never increase
    5. check_subtraction_bound nothing after a subtraction may reach the
                               subtracted amount

The first violated rule wins. The order above is the contract: a string
breaking several rules always reports the same one.
"""

from __future__ import annotations

from itertools import groupby
from typing import Sequence

from .exceptions import (
    IdenticalLetterSequenceTooLongError,
    InvalidLetterError,
    RepeatedSingleDigitLetterError,
    SequenceIncreasingError,
    ValueGreaterThanSubtractionError,
)
from .models import NumeralToken, SubtractiveToken

# ─── Constants ───────────────────────────────────────────────────────

VALID_LETTERS: tuple[str, ...] = ("M", "D", "C", "L", "X", "V", "I")

_VALID_LETTER_SET: frozenset[str] = frozenset(VALID_LETTERS)

# Letters for numbers starting with a 5: never repeated
SINGLE_OCCURRENCE_LETTERS: frozenset[str] = frozenset({"V", "L", "D"})

MAX_RUN_LENGTH = 3


# ─── Letter Tier ─────────────────────────────────────────────────────


def validate_letters(numeral: str, strict: bool = True) -> str:
    """Run the letter-level checks on an uppercase, non-empty numeral.

    With strict=False only the alphabet is checked, which admits the
    historical additive forms ("IIII", "VIIII", "MDCCCCX").
    """
    check_alphabet(numeral)
    if strict:
        check_run_length(numeral)
        check_single_occurrence(numeral)
    return numeral


def check_alphabet(numeral: str) -> str:
    """Every character must be a numeral letter.

    Offending characters are reported once each, in first-seen order.
    """
    invalid = list(dict.fromkeys(ch for ch in numeral if ch not in _VALID_LETTER_SET))
    if invalid:
        raise InvalidLetterError(
            "numeral contains invalid letter(s), valid letters are "
            f"{', '.join(VALID_LETTERS)} but encountered {', '.join(invalid)}",
            details={"invalid_letters": invalid},
        )
    return numeral


def check_run_length(numeral: str) -> str:
    """No letter may appear more than MAX_RUN_LENGTH times in a row."""
    overlong: list[str] = []
    for letter, run in groupby(numeral):
        if letter not in overlong and sum(1 for _ in run) > MAX_RUN_LENGTH:
            overlong.append(letter)

    if overlong:
        raise IdenticalLetterSequenceTooLongError(
            f"a given letter cannot appear more than {MAX_RUN_LENGTH} times in a row: "
            f"encountered invalid sequences for {', '.join(overlong)}",
            details={"letters": overlong},
        )
    return numeral


def check_single_occurrence(numeral: str) -> str:
    """V, L and D may each appear only once.

    Repeated letters are listed in the order their second occurrence shows up.
    """
    counts: dict[str, int] = {}
    repeated: list[str] = []

    for letter in numeral:
        if letter not in SINGLE_OCCURRENCE_LETTERS:
            continue
        counts[letter] = counts.get(letter, 0) + 1
        if counts[letter] == 2:
            repeated.append(letter)

    if repeated:
        raise RepeatedSingleDigitLetterError(
            "letters V, L, and D can appear only once, but found several "
            f"instances of {', '.join(repeated)}",
            details={"letters": repeated},
        )
    return numeral


# ─── Sequence Tier ───────────────────────────────────────────────────


def validate_sequence(tokens: Sequence[NumeralToken]) -> Sequence[NumeralToken]:
    """Run the sequence-level checks (ordering, then subtraction bound)."""
    check_non_increasing(tokens)
    check_subtraction_bound(tokens)
    return tokens


def check_non_increasing(tokens: Sequence[NumeralToken]) -> Sequence[NumeralToken]:
    """Larger tokens go left of smaller ones.

    Subtractive pairs compare by their combined value: IX counts as 9.
    """
    for left, right in zip(tokens, tokens[1:]):
        if left.value < right.value:
            raise SequenceIncreasingError(
                "larger numerals must be placed to the left of smaller numerals, "
                f"but encountered {left.text} ({left.value}) before "
                f"{right.text} ({right.value})",
                details={
                    "left": left.text,
                    "left_value": left.value,
                    "right": right.text,
                    "right_value": right.value,
                },
            )
    return tokens


def check_subtraction_bound(tokens: Sequence[NumeralToken]) -> Sequence[NumeralToken]:
    """Once a value has been subtracted, nothing later may match or exceed it.

    Rejects "CMC" (C after subtracting 100 in CM) and "MCMD". The bound is
    set by the most recent subtractive pair: in "XCIX" the IX is allowed
    (9 < 10) and then lowers the bound to 1.
    """
    active: SubtractiveToken | None = None

    for token in tokens:
        if active is not None and token.value >= active.delta:
            raise ValueGreaterThanSubtractionError(
                "once a value has been subtracted from another, no further numeral "
                "or pair may match or exceed the subtracted value, but encountered "
                f"{token.text} ({token.value}) after having previously subtracted "
                f"{active.delta} (in {active.text})",
                details={
                    "token": token.text,
                    "value": token.value,
                    "delta": active.delta,
                    "subtracted_in": active.text,
                },
            )
        if isinstance(token, SubtractiveToken):
            active = token

    return tokens
