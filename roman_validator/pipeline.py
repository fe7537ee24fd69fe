"""
Decode pipeline — turns a numeral string into an integer.

Flow:
  ┌───────────┐
  │ Raw input │   ← "" is rejected here, whatever the flags
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │ Normalize │   ← Upper-case when ignore_case, "N" -> 0 when zero
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │ Fast path │   ← Canonical numerals resolve straight from the table
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │  Letters  │   ← Alphabet (+ run length, V/L/D once when strict)
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │    Lex    │   ← Greedy split into letters and subtractive pairs
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │ Sequence  │   ← Ordering and subtraction bound (strict only)
  └─────┬─────┘
        │
  ┌─────▼─────┐
  │    Sum    │
  └───────────┘

Any stage may fail; the first failure ends the run. Without explain=True
every failure except EMPTY_STRING collapses to INVALID_NUMERAL.
"""

from __future__ import annotations

import logging

from .exceptions import EmptyStringError, InvalidNumeralError, RomanNumeralError
from .lexer import lex_sections
from .models import DecodeError, DecodeFlags, DecodeResult, ErrorKind
from .table import NumeralTable, get_numeral_table
from .validators import validate_letters, validate_sequence

logger = logging.getLogger(__name__)

ZERO_NUMERAL = "N"


class DecodePipeline:
    """Runs the decode stages against a numeral table.

    Usage:
        pipeline = DecodePipeline()
        result = pipeline.run("MCMXCIV", DecodeFlags(explain=True))
        if result.ok:
            print(result.value)     # 1994
        else:
            print(result.error.kind, result.error.message)
    """

    def __init__(self, table: NumeralTable | None = None):
        self.table = table if table is not None else get_numeral_table()

    def run(self, numeral: str, flags: DecodeFlags | None = None) -> DecodeResult:
        """Decode one numeral.

        Args:
            numeral: The string to decode.
            flags: Decode options. Defaults to DecodeFlags().

        Returns:
            DecodeResult holding either the value or the error.
        """
        flags = flags if flags is not None else DecodeFlags()

        try:
            value = self._decode(numeral, flags)
        except RomanNumeralError as e:
            error = self._report(e, flags)
            logger.debug("Rejected %r: %s (%s)", numeral, error.kind.value, error.message)
            return DecodeResult(numeral=numeral, error=error)

        return DecodeResult(numeral=numeral, value=value)

    # ─── Stages ──────────────────────────────────────────────────────

    def _decode(self, numeral: str, flags: DecodeFlags) -> int:
        # ── Step 0: Nothing to decode ───────────────────────────────
        if numeral == "":
            raise EmptyStringError()

        # ── Step 1: Normalize ───────────────────────────────────────
        if flags.ignore_case:
            numeral = numeral.upper()

        if flags.zero and numeral == ZERO_NUMERAL:
            logger.debug("%r decoded as zero", numeral)
            return 0

        # ── Step 2: Fast path for canonical numerals ────────────────
        value = self.table.value_for(numeral)
        if value is not None:
            logger.debug("%r resolved from the table", numeral)
            return value

        # ── Step 3: Letter rules ────────────────────────────────────
        validate_letters(numeral, strict=flags.strict)

        # ── Step 4: Lex into sections ───────────────────────────────
        tokens = lex_sections(numeral)

        # ── Step 5: Sequence rules ──────────────────────────────────
        if flags.strict:
            validate_sequence(tokens)

        # ── Step 6: Sum ─────────────────────────────────────────────
        total = sum(token.value for token in tokens)
        logger.debug(
            "%r resolved by summing %s = %d",
            numeral,
            " + ".join(token.text for token in tokens),
            total,
        )
        return total

    # ─── Error Reporting ─────────────────────────────────────────────

    @staticmethod
    def _report(error: RomanNumeralError, flags: DecodeFlags) -> DecodeError:
        """Turn a raised rule violation into the error carried by the result."""
        if not flags.explain and not isinstance(error, EmptyStringError):
            error = InvalidNumeralError()

        return DecodeError(
            kind=ErrorKind(error.code),
            message=error.message,
            details=error.details,
        )
