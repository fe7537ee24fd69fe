"""
Numeral table — the canonical value <-> numeral mapping for 1..3999.

Loaded once from a line-oriented resource (`numerals.txt`, one
"<value> <numeral>" record per line). The loader is paranoid about the
resource: a gap, a duplicate or a stray character is a fatal
initialization error, never a per-call decode error.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Iterator

from .exceptions import NumeralTableError

logger = logging.getLogger(__name__)

MIN_VALUE = 1
MAX_VALUE = 3999

_RECORD_PATTERN = re.compile(r"^(\d+)\s+([IVXLCDM]+)$")


class NumeralTable:
    """Immutable bidirectional mapping between integers and canonical numerals."""

    def __init__(self, pairs: list[tuple[int, str]]):
        _check_pairs(pairs)
        self._pairs: tuple[tuple[int, str], ...] = tuple(pairs)
        self._by_value: dict[int, str] = dict(pairs)
        self._by_numeral: dict[str, int] = {numeral: value for value, numeral in pairs}

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[int, str]]:
        return iter(self._pairs)

    def numeral_for(self, value: int) -> str | None:
        """Canonical numeral for `value`, or None outside 1..3999."""
        return self._by_value.get(value)

    def value_for(self, numeral: str) -> int | None:
        """Value of a canonical numeral, or None if `numeral` isn't canonical."""
        return self._by_numeral.get(numeral)

    def pairs(self) -> list[tuple[int, str]]:
        return list(self._pairs)


# ─── Loading ────────────────────────────────────────────────────────


def default_table_path() -> Path:
    return Path(__file__).parent / "numerals.txt"


def load_numeral_table(path: str | Path | None = None) -> NumeralTable:
    """Parse the numeral table resource.

    Args:
        path: Path to the table file. Defaults to the bundled numerals.txt.

    Raises:
        NumeralTableError: If the file is missing or any record is malformed.
    """
    resolved = default_table_path() if path is None else Path(path)

    try:
        with resolved.open(encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise NumeralTableError(f"Cannot read numeral table {resolved}: {e}") from e

    pairs: list[tuple[int, str]] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        match = _RECORD_PATTERN.match(line.strip())
        if not match:
            raise NumeralTableError(
                f"{resolved}:{lineno}: expected '<value> <NUMERAL>', got {line!r}"
            )
        pairs.append((int(match.group(1)), match.group(2)))

    table = NumeralTable(pairs)
    logger.info("Loaded %d numerals from %s", len(table), resolved)
    return table


@lru_cache(maxsize=1)
def get_numeral_table() -> NumeralTable:
    """The process-wide table, loaded on first use and never mutated."""
    return load_numeral_table()


# ─── Internal Helpers ───────────────────────────────────────────────


def _check_pairs(pairs: list[tuple[int, str]]) -> None:
    expected_count = MAX_VALUE - MIN_VALUE + 1
    if len(pairs) != expected_count:
        raise NumeralTableError(
            f"Numeral table must contain exactly {expected_count} entries, found {len(pairs)}"
        )

    for expected, (value, _) in enumerate(pairs, start=MIN_VALUE):
        if value != expected:
            raise NumeralTableError(
                f"Numeral table values must run {MIN_VALUE}..{MAX_VALUE} without gaps: "
                f"expected {expected}, found {value}"
            )

    seen: set[str] = set()
    for value, numeral in pairs:
        if numeral in seen:
            raise NumeralTableError(f"Numeral {numeral!r} (for {value}) appears more than once")
        seen.add(numeral)
