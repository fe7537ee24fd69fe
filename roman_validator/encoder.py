"""Integer -> numeral encoding. A plain lookup in the numeral table."""

from __future__ import annotations

from typing import Any

from .exceptions import InvalidIntegerError
from .models import DecodeError, EncodeResult, ErrorKind
from .table import MAX_VALUE, MIN_VALUE, NumeralTable, get_numeral_table


def encode_value(value: Any, table: NumeralTable | None = None) -> str:
    """Return the canonical numeral for `value`.

    Raises:
        InvalidIntegerError: If `value` isn't an int in 1..3999. Booleans are
            refused even though bool subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidIntegerError(
            f"expected an integer, got {type(value).__name__}",
            details={"value": repr(value)},
        )

    table = table if table is not None else get_numeral_table()
    numeral = table.numeral_for(value)
    if numeral is None:
        raise InvalidIntegerError(
            details={"value": value, "min": MIN_VALUE, "max": MAX_VALUE},
        )
    return numeral


def encode_result(value: Any, table: NumeralTable | None = None) -> EncodeResult:
    """Like encode_value(), but reports failure in the result instead of raising."""
    try:
        numeral = encode_value(value, table)
    except InvalidIntegerError as e:
        return EncodeResult(
            value=value,
            error=DecodeError(kind=ErrorKind.INVALID_INTEGER, message=e.message, details=e.details),
        )
    return EncodeResult(value=value, numeral=numeral)
