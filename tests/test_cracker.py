"""Tests for chi-squared key recovery."""

import math

import pytest

from caesar.analyzers.cracker import crack_key, shift_statistics, validate_reference
from caesar.core.alphabet import ENGLISH_FREQUENCIES
from caesar.core.cipher import encipher
from caesar.core.models import KeyEstimate, ReferenceTableError


def test_known_vector():
    outcome = crack_key("leelnv le Olhy!")
    assert isinstance(outcome, KeyEstimate)
    assert outcome.kind == "estimate"
    assert outcome.key == 11


@pytest.mark.parametrize("text", ["", "   ", "1234 !?", "éßı"])
def test_letterless_text_gives_key_zero(text):
    outcome = crack_key(text)
    assert isinstance(outcome, KeyEstimate)
    assert outcome.key == 0
    assert len(set(outcome.scores)) == 1
    assert outcome.statistic == pytest.approx(sum(ENGLISH_FREQUENCIES))


@pytest.mark.parametrize("key", [0, 1, 3, 7, 13, 20, 25])
def test_recovers_key_from_english(passage, key):
    outcome = crack_key(encipher(passage, key))
    assert isinstance(outcome, KeyEstimate)
    assert outcome.key == key


def test_accepts_bytes(passage):
    outcome = crack_key(encipher(passage.encode("ascii"), 5))
    assert outcome.key == 5


def test_scores_cover_every_shift(passage):
    scores = shift_statistics(encipher(passage, 4))
    outcome = crack_key(encipher(passage, 4))
    assert len(scores) == 26
    assert scores == outcome.scores
    assert scores.index(min(scores)) == 4
    assert outcome.statistic == min(scores)


def test_repeatable(passage):
    text = encipher(passage, 9)
    assert crack_key(text) == crack_key(text)


class TestReferenceTable:
    def test_builtin_table_is_valid(self):
        assert validate_reference(ENGLISH_FREQUENCIES) is None

    def test_zero_entry_is_reported(self, broken_reference):
        outcome = crack_key("leelnv le Olhy!", broken_reference)
        assert isinstance(outcome, ReferenceTableError)
        assert outcome.kind == "reference_error"
        assert outcome.invalid_letters == ("J",)
        assert "Divide by zero" in outcome.message

    def test_zero_entry_reported_even_for_empty_text(self, broken_reference):
        assert isinstance(crack_key("", broken_reference), ReferenceTableError)

    def test_nan_and_negative_entries(self):
        table = list(ENGLISH_FREQUENCIES)
        table[0] = math.nan
        table[25] = -0.1
        outcome = validate_reference(table)
        assert isinstance(outcome, ReferenceTableError)
        assert outcome.invalid_letters == ("A", "Z")

    def test_wrong_length(self):
        outcome = crack_key("abc", ENGLISH_FREQUENCIES[:25])
        assert isinstance(outcome, ReferenceTableError)
        assert "25 entries" in outcome.message

    def test_shift_statistics_rejects_zero_entry(self, broken_reference):
        with pytest.raises(ValueError):
            shift_statistics("abc", broken_reference)
