"""
Typed models for numeral conversion.

Tokens are small frozen dataclasses (they are created per letter on every
decode, so they stay lightweight). Everything that crosses a boundary
(flags, errors, results) is a pydantic model and fails loudly if it
doesn't fit.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ─── Error Kinds ────────────────────────────────────────────────────


class ErrorKind(str, Enum):
    """Machine-readable reason a conversion failed."""

    EMPTY_STRING = "EMPTY_STRING"
    INVALID_LETTER = "INVALID_LETTER"
    REPEATED_SINGLE_DIGIT_LETTER = "REPEATED_SINGLE_DIGIT_LETTER"
    IDENTICAL_LETTER_SEQUENCE_TOO_LONG = "IDENTICAL_LETTER_SEQUENCE_TOO_LONG"
    SEQUENCE_INCREASING = "SEQUENCE_INCREASING"
    VALUE_GREATER_THAN_SUBTRACTION = "VALUE_GREATER_THAN_SUBTRACTION"
    INVALID_NUMERAL = "INVALID_NUMERAL"  # Collapsed reason when explain=False
    INVALID_INTEGER = "INVALID_INTEGER"


# ─── Tokens ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PlainToken:
    """A single letter: M, D, C, L, X, V or I."""

    text: str
    value: int


@dataclass(frozen=True)
class SubtractiveToken:
    """One of the six subtractive pairs (CM, CD, XC, XL, IX, IV).

    `value` is the combined value (IX -> 9); `delta` is the value of the
    smaller, subtracted letter (IX -> 1).
    """

    text: str
    value: int
    delta: int


NumeralToken = Union[PlainToken, SubtractiveToken]


# ─── Flags ──────────────────────────────────────────────────────────


class DecodeFlags(BaseModel):
    """Options controlling a single decode call.

    Unknown options are ignored rather than rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    ignore_case: bool = False
    strict: bool = True
    explain: bool = False
    zero: bool = False

    def override(self, **options: object) -> DecodeFlags:
        """Return new flags with the recognised options replaced."""
        known = {k: v for k, v in options.items() if k in type(self).model_fields}
        if not known:
            return self
        return type(self).model_validate({**self.model_dump(), **known})


# ─── Results ────────────────────────────────────────────────────────


class DecodeError(BaseModel):
    """Why a conversion failed."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    details: dict = Field(default_factory=dict)


class DecodeResult(BaseModel):
    """Outcome of decoding one numeral: either a value or an error."""

    numeral: str
    value: Optional[int] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class EncodeResult(BaseModel):
    """Outcome of encoding one integer: either a numeral or an error."""

    value: Any
    numeral: Optional[str] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
