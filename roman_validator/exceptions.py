"""
Custom exception hierarchy for Roman numeral conversion.

Each exception type maps to exactly one composition rule (or boundary
condition), so a failed decode can say precisely WHICH rule was broken.
The decode pipeline catches these at its boundary and turns them into a
typed DecodeResult; the *_or_raise helpers re-raise them.
"""

from __future__ import annotations


class RomanNumeralError(ValueError):
    """Base exception for all numeral conversion failures."""

    code = "ROMAN_NUMERAL_ERROR"

    def __init__(self, message: str, details: dict | None = None):
        self.details = details or {}
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyStringError(RomanNumeralError):
    """Nothing to decode."""

    code = "EMPTY_STRING"

    def __init__(self, message: str = "expected a numeral, got an empty string",
                 details: dict | None = None):
        super().__init__(message, details)


class InvalidLetterError(RomanNumeralError):
    """The string contains a character outside I, V, X, L, C, D, M."""

    code = "INVALID_LETTER"


class RepeatedSingleDigitLetterError(RomanNumeralError):
    """V, L or D appears more than once."""

    code = "REPEATED_SINGLE_DIGIT_LETTER"


class IdenticalLetterSequenceTooLongError(RomanNumeralError):
    """The same letter appears 4 or more times in a row."""

    code = "IDENTICAL_LETTER_SEQUENCE_TOO_LONG"


class SequenceIncreasingError(RomanNumeralError):
    """A smaller token is placed before a larger one."""

    code = "SEQUENCE_INCREASING"


class ValueGreaterThanSubtractionError(RomanNumeralError):
    """A token matches or exceeds a value previously subtracted."""

    code = "VALUE_GREATER_THAN_SUBTRACTION"


class InvalidNumeralError(RomanNumeralError):
    """Generic rejection, used when no explanation was requested."""

    code = "INVALID_NUMERAL"

    def __init__(self, message: str = "numeral is invalid", details: dict | None = None):
        super().__init__(message, details)


class InvalidIntegerError(RomanNumeralError):
    """The integer cannot be encoded (outside 1..3999, or not an integer)."""

    code = "INVALID_INTEGER"

    def __init__(self, message: str = "cannot encode values outside of range 1..3999",
                 details: dict | None = None):
        super().__init__(message, details)


# ─── Fatal Initialization Errors ────────────────────────────────────


class NumeralTableError(Exception):
    """The numeral table resource is malformed. Raised once, at load time."""


class ConfigurationError(Exception):
    """The process-wide default flags could not be parsed."""


_ERRORS_BY_CODE: dict[str, type[RomanNumeralError]] = {
    cls.code: cls
    for cls in (
        EmptyStringError,
        InvalidLetterError,
        RepeatedSingleDigitLetterError,
        IdenticalLetterSequenceTooLongError,
        SequenceIncreasingError,
        ValueGreaterThanSubtractionError,
        InvalidNumeralError,
        InvalidIntegerError,
    )
}


def error_class_for(code: str) -> type[RomanNumeralError]:
    """Map a machine-readable error code back to its exception class."""
    return _ERRORS_BY_CODE.get(code, RomanNumeralError)
