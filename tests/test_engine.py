"""Tests for the CaesarEngine orchestrator."""

import pytest

from shared.config import ToolkitConfig
from shared.models import Severity
from caesar.core.cipher import encipher
from caesar.core.engine import CaesarEngine
from caesar.core.models import BruteForceReport, CrackReport, FrequencyReport


class TestShift:
    def test_encipher(self, engine):
        result = engine.encipher("attack at Dawn!", 271)
        assert result.ok
        assert result.operation == "encipher"
        assert result.output == "leelnv le Olhy!"
        assert result.metadata == {"key": 11, "length": 15}
        assert result.end_time is not None
        assert result.duration_seconds >= 0

    def test_decipher(self, engine):
        result = engine.decipher("leelnv le Olhy!", 11, target="msg.txt")
        assert result.output == "attack at Dawn!"
        assert result.target == "msg.txt"
        assert "key 11" in result.summary


class TestCrack:
    def test_long_text(self, engine, passage):
        result = engine.crack(encipher(passage, 7))
        report = CrackReport(**result.metadata)
        assert result.ok
        assert report.key == 7
        assert result.output == passage
        assert report.reliable
        assert report.p_value is not None
        assert len(report.scores) == 26
        assert report.index_of_coincidence > 0.05
        assert not [f for f in result.findings if f.title == "Short Ciphertext"]

    def test_short_text_is_flagged(self, engine):
        result = engine.crack("leelnv le Olhy!")
        report = CrackReport(**result.metadata)
        assert report.key == 11
        assert result.output == "attack at Dawn!"
        assert not report.reliable
        assert result.highest_severity == Severity.LOW
        assert result.findings[0].title == "Short Ciphertext"

    def test_threshold_comes_from_config(self):
        config = ToolkitConfig()
        config.caesar.min_crack_letters = 5
        result = CaesarEngine(config).crack("leelnv le Olhy!")
        assert CrackReport(**result.metadata).reliable
        assert not [f for f in result.findings if f.title == "Short Ciphertext"]

    def test_empty_text(self, engine):
        result = engine.crack("")
        report = CrackReport(**result.metadata)
        assert report.key == 0
        assert report.letter_count == 0
        assert report.p_value is None
        assert result.output == ""

    def test_broken_reference(self, broken_reference):
        result = CaesarEngine(reference=broken_reference).crack("leelnv le Olhy!")
        assert not result.ok
        assert "J" in result.error
        assert result.output == ""
        assert result.highest_severity == Severity.HIGH
        assert result.findings[0].title == "Internal Error"
        assert list(result.metadata["invalid_letters"]) == ["J"]


class TestBruteForce:
    def test_candidates(self, engine):
        result = engine.brute_force("leelnv le Olhy!")
        report = BruteForceReport(**result.metadata)
        assert [c.key for c in report.candidates] == list(range(26))
        assert report.candidates[0].plaintext == "leelnv le Olhy!"
        assert report.candidates[11].plaintext == "attack at Dawn!"
        assert report.best_keys[0] == 11
        assert sorted(report.best_keys) == list(range(26))

    def test_output_is_one_line_per_key(self, engine):
        lines = engine.brute_force("Khoor").output.splitlines()
        assert len(lines) == 26
        assert lines[3] == "Hello"

    def test_broken_reference(self, broken_reference):
        result = CaesarEngine(reference=broken_reference).brute_force("abc")
        assert not result.ok
        assert result.output == ""


class TestFrequency:
    def test_profile(self, engine):
        result = engine.frequency("Hello, World!")
        report = FrequencyReport(**result.metadata)
        assert report.letter_count == 10
        assert [lf.letter for lf in report.letters][:3] == ["A", "B", "C"]
        assert report.letters[11].count == 3
        assert report.letters[11].frequency == pytest.approx(0.3)
        assert report.letters[4].expected == pytest.approx(0.12702)
        assert len(result.output.splitlines()) == 26
        assert result.output.splitlines()[11] == "L\t3\t0.30000"

    def test_empty(self, engine):
        report = FrequencyReport(**engine.frequency("").metadata)
        assert report.letter_count == 0
        assert all(lf.frequency == 0.0 for lf in report.letters)

    def test_broken_reference(self, broken_reference):
        result = CaesarEngine(reference=broken_reference).frequency("hello")
        assert not result.ok
        assert result.output == ""
        assert result.highest_severity == Severity.HIGH
        assert list(result.metadata["invalid_letters"]) == ["J"]

    def test_short_reference(self):
        from caesar.core.alphabet import ENGLISH_FREQUENCIES

        result = CaesarEngine(reference=ENGLISH_FREQUENCIES[:25]).frequency("hello")
        assert not result.ok
        assert "25 entries" in result.error
