"""
Test suite for the composition rules, the lexer and the numeral table.

Every rule is verified in isolation here; tests/test_numerals.py covers
the same rules as seen through the full decode pipeline.

Run: pytest tests/ -v
"""

from __future__ import annotations

import pytest

from roman_validator.exceptions import (
    IdenticalLetterSequenceTooLongError,
    InvalidLetterError,
    NumeralTableError,
    RepeatedSingleDigitLetterError,
    RomanNumeralError,
    SequenceIncreasingError,
    ValueGreaterThanSubtractionError,
)
from roman_validator.lexer import lex_sections
from roman_validator.models import PlainToken, SubtractiveToken
from roman_validator.table import NumeralTable, get_numeral_table, load_numeral_table
from roman_validator.validators import (
    check_alphabet,
    check_non_increasing,
    check_run_length,
    check_single_occurrence,
    check_subtraction_bound,
    validate_letters,
    validate_sequence,
)


def _texts(numeral: str) -> list[str]:
    return [token.text for token in lex_sections(numeral)]


# ═══════════════════════════════════════════════════════════════════════
# LETTER TIER
# ═══════════════════════════════════════════════════════════════════════


class TestAlphabet:
    def test_valid_letters_pass(self):
        assert check_alphabet("MDCLXVI") == "MDCLXVI"

    def test_invalid_letter_flagged(self):
        with pytest.raises(InvalidLetterError) as exc:
            check_alphabet("IT")
        assert exc.value.details["invalid_letters"] == ["T"]
        assert exc.value.code == "INVALID_LETTER"

    def test_offending_letters_listed_once_in_first_seen_order(self):
        with pytest.raises(InvalidLetterError) as exc:
            check_alphabet("ZIAZB")
        assert exc.value.details["invalid_letters"] == ["Z", "A", "B"]
        assert exc.value.message.endswith("but encountered Z, A, B")

    def test_lowercase_is_not_a_valid_letter(self):
        with pytest.raises(InvalidLetterError):
            check_alphabet("x")

    def test_message_lists_valid_letters(self):
        with pytest.raises(InvalidLetterError, match="valid letters are M, D, C, L, X, V, I"):
            check_alphabet("Q")


class TestRunLength:
    def test_three_in_a_row_passes(self):
        assert check_run_length("MMMCCCXXXIII") == "MMMCCCXXXIII"

    def test_four_in_a_row_flagged(self):
        with pytest.raises(IdenticalLetterSequenceTooLongError) as exc:
            check_run_length("IIII")
        assert exc.value.details["letters"] == ["I"]

    def test_every_overlong_letter_named(self):
        with pytest.raises(IdenticalLetterSequenceTooLongError) as exc:
            check_run_length("CCCCXIIII")
        assert exc.value.details["letters"] == ["C", "I"]
        assert "encountered invalid sequences for C, I" in exc.value.message

    def test_letter_with_two_overlong_runs_named_once(self):
        with pytest.raises(IdenticalLetterSequenceTooLongError) as exc:
            check_run_length("XXXXIXXXX")
        assert exc.value.details["letters"] == ["X"]

    def test_separated_runs_are_counted_separately(self):
        # Six Xs in total, never more than three in a row
        assert check_run_length("XXXIXXX") == "XXXIXXX"


class TestSingleOccurrence:
    def test_each_once_passes(self):
        assert check_single_occurrence("DLV") == "DLV"

    def test_repeated_v_flagged(self):
        with pytest.raises(RepeatedSingleDigitLetterError) as exc:
            check_single_occurrence("VIV")
        assert exc.value.details["letters"] == ["V"]

    def test_order_of_second_occurrence(self):
        with pytest.raises(RepeatedSingleDigitLetterError) as exc:
            check_single_occurrence("LLVIV")
        assert exc.value.message == (
            "letters V, L, and D can appear only once, but found several instances of L, V"
        )

    def test_order_follows_second_not_first_occurrence(self):
        with pytest.raises(RepeatedSingleDigitLetterError) as exc:
            check_single_occurrence("DVLLVD")
        assert exc.value.details["letters"] == ["L", "V", "D"]

    def test_other_letters_may_repeat(self):
        assert check_single_occurrence("MMCCXXII") == "MMCCXXII"


class TestValidateLetters:
    def test_alphabet_checked_before_repetition(self):
        with pytest.raises(InvalidLetterError):
            validate_letters("VVIIIIT")

    def test_run_length_checked_before_single_occurrence(self):
        with pytest.raises(IdenticalLetterSequenceTooLongError):
            validate_letters("VVIIII")

    def test_lenient_skips_repetition_rules(self):
        assert validate_letters("VVIIII", strict=False) == "VVIIII"

    def test_lenient_still_checks_alphabet(self):
        with pytest.raises(InvalidLetterError):
            validate_letters("IIIIT", strict=False)

    def test_returns_input_unchanged(self):
        assert validate_letters("MCMXCIV") == "MCMXCIV"


# ═══════════════════════════════════════════════════════════════════════
# LEXER
# ═══════════════════════════════════════════════════════════════════════


class TestLexer:
    def test_subtractive_pairs_preferred(self):
        assert _texts("MCMXCIV") == ["M", "CM", "XC", "IV"]

    def test_single_letters(self):
        assert _texts("MDCLXVI") == ["M", "D", "C", "L", "X", "V", "I"]

    def test_pair_carries_delta(self):
        (token,) = lex_sections("IX")
        assert isinstance(token, SubtractiveToken)
        assert token.value == 9
        assert token.delta == 1

    def test_single_letter_has_no_delta(self):
        (token,) = lex_sections("X")
        assert isinstance(token, PlainToken)
        assert not hasattr(token, "delta")

    def test_all_six_pairs(self):
        tokens = lex_sections("CMCDXCXLIXIV")
        assert [(t.text, t.value, t.delta) for t in tokens] == [
            ("CM", 900, 100),
            ("CD", 400, 100),
            ("XC", 90, 10),
            ("XL", 40, 10),
            ("IX", 9, 1),
            ("IV", 4, 1),
        ]

    def test_does_not_judge_composition(self):
        assert _texts("VX") == ["V", "X"]

    def test_greedy_without_backtracking(self):
        # "IXC" could be read as I + XC, but IX wins at position 0
        assert _texts("IXC") == ["IX", "C"]

    def test_empty_string_gives_no_tokens(self):
        assert lex_sections("") == ()

    def test_unexpected_character_raises(self):
        with pytest.raises(InvalidLetterError) as exc:
            lex_sections("XQ")
        assert exc.value.details["position"] == 1

    def test_tokens_are_immutable(self):
        (token,) = lex_sections("CM")
        with pytest.raises(AttributeError):
            token.delta = 5  # type: ignore[misc]


# ═══════════════════════════════════════════════════════════════════════
# SEQUENCE TIER
# ═══════════════════════════════════════════════════════════════════════


class TestNonIncreasing:
    def test_descending_passes(self):
        tokens = lex_sections("MDCLXVI")
        assert check_non_increasing(tokens) == tokens

    def test_equal_values_pass(self):
        tokens = lex_sections("XXX")
        assert check_non_increasing(tokens) == tokens

    def test_increase_flagged(self):
        with pytest.raises(SequenceIncreasingError) as exc:
            check_non_increasing(lex_sections("VX"))
        assert "encountered V (5) before X (10)" in exc.value.message
        assert exc.value.details == {
            "left": "V",
            "left_value": 5,
            "right": "X",
            "right_value": 10,
        }

    def test_pairs_compared_by_combined_value(self):
        with pytest.raises(SequenceIncreasingError, match=r"I \(1\) before IV \(4\)"):
            check_non_increasing(lex_sections("IIV"))

    def test_pair_followed_by_smaller_letter_passes(self):
        # XC (90) then V (5)
        tokens = lex_sections("XCV")
        assert check_non_increasing(tokens) == tokens

    def test_first_increase_reported(self):
        with pytest.raises(SequenceIncreasingError, match=r"I \(1\) before IX \(9\)"):
            check_non_increasing(lex_sections("XIIXVX"))


class TestSubtractionBound:
    def test_cmc_flagged(self):
        with pytest.raises(ValueGreaterThanSubtractionError) as exc:
            check_subtraction_bound(lex_sections("CMC"))
        assert exc.value.details == {
            "token": "C",
            "value": 100,
            "delta": 100,
            "subtracted_in": "CM",
        }
        assert exc.value.message.endswith(
            "encountered C (100) after having previously subtracted 100 (in CM)"
        )

    def test_larger_letter_after_pair_flagged(self):
        with pytest.raises(ValueGreaterThanSubtractionError, match=r"D \(500\)"):
            check_subtraction_bound(lex_sections("MCMD"))

    def test_smaller_pair_after_pair_passes(self):
        tokens = lex_sections("XCIX")
        assert check_subtraction_bound(tokens) == tokens

    def test_bound_moves_to_latest_pair(self):
        with pytest.raises(ValueGreaterThanSubtractionError, match=r"in IX"):
            check_subtraction_bound(lex_sections("XCIXI"))

    def test_letters_below_bound_pass(self):
        tokens = lex_sections("CDLXV")
        assert check_subtraction_bound(tokens) == tokens

    def test_no_pair_no_bound(self):
        tokens = lex_sections("MMMDCCCLXXXVIII")
        assert check_subtraction_bound(tokens) == tokens


class TestValidateSequence:
    def test_ordering_checked_before_subtraction_bound(self):
        # IX then X breaks both rules; ordering is reported
        with pytest.raises(SequenceIncreasingError):
            validate_sequence(lex_sections("IXX"))

    def test_valid_sequence_returned_unchanged(self):
        tokens = lex_sections("MMXXIV")
        assert validate_sequence(tokens) is tokens

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_sequence(lex_sections("CMC"))
        with pytest.raises(RomanNumeralError):
            validate_sequence(lex_sections("CMC"))


# ═══════════════════════════════════════════════════════════════════════
# NUMERAL TABLE
# ═══════════════════════════════════════════════════════════════════════


class TestNumeralTable:
    def test_has_every_value_once(self):
        table = get_numeral_table()
        assert len(table) == 3999
        assert [value for value, _ in table] == list(range(1, 4000))

    def test_numerals_are_unique(self):
        numerals = [numeral for _, numeral in get_numeral_table()]
        assert len(set(numerals)) == 3999

    def test_lookups_round_trip(self):
        table = get_numeral_table()
        for value, numeral in table:
            assert table.numeral_for(value) == numeral
            assert table.value_for(numeral) == value

    def test_out_of_range_lookups(self):
        table = get_numeral_table()
        assert table.numeral_for(0) is None
        assert table.numeral_for(4000) is None
        assert table.value_for("IIII") is None

    def test_every_entry_is_strictly_valid(self):
        """The fast path must agree with the full rule set."""
        for value, numeral in get_numeral_table():
            validate_letters(numeral, strict=True)
            tokens = validate_sequence(lex_sections(numeral))
            assert sum(t.value for t in tokens) == value, numeral

    def test_known_entries(self):
        table = get_numeral_table()
        assert table.numeral_for(1) == "I"
        assert table.numeral_for(1994) == "MCMXCIV"
        assert table.numeral_for(3898) == "MMMDCCCXCVIII"
        assert table.numeral_for(3999) == "MMMCMXCIX"

    def test_loaded_once(self):
        assert get_numeral_table() is get_numeral_table()


class TestNumeralTableLoading:
    @staticmethod
    def _write(tmp_path, lines: list[str]):
        path = tmp_path / "numerals.txt"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    @staticmethod
    def _bundled_lines() -> list[str]:
        return [f"{value} {numeral}" for value, numeral in get_numeral_table()]

    def test_loads_valid_file(self, tmp_path):
        table = load_numeral_table(self._write(tmp_path, self._bundled_lines()))
        assert len(table) == 3999

    def test_missing_file(self, tmp_path):
        with pytest.raises(NumeralTableError, match="Cannot read"):
            load_numeral_table(tmp_path / "nope.txt")

    def test_malformed_record(self, tmp_path):
        lines = self._bundled_lines()
        lines[9] = "10 ten"
        with pytest.raises(NumeralTableError, match=":10:"):
            load_numeral_table(self._write(tmp_path, lines))

    def test_gap(self, tmp_path):
        lines = self._bundled_lines()
        del lines[41]
        with pytest.raises(NumeralTableError, match="exactly 3999"):
            load_numeral_table(self._write(tmp_path, lines))

    def test_out_of_order_values(self):
        pairs = list(get_numeral_table())
        pairs[0], pairs[1] = pairs[1], pairs[0]
        with pytest.raises(NumeralTableError, match="without gaps"):
            NumeralTable(pairs)

    def test_duplicate_numeral(self):
        pairs = list(get_numeral_table())
        pairs[4] = (5, "IV")
        with pytest.raises(NumeralTableError, match="more than once"):
            NumeralTable(pairs)
