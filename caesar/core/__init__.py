"""
Caesar Core Module
===================

Alphabet constants, the shift-cipher engine, result models, and the
orchestrating :class:`CaesarEngine`.
"""

from caesar.core.alphabet import ALPHABET, ENGLISH_FREQUENCIES, alphabet_size
from caesar.core.cipher import count_letters, decipher, encipher, letter_frequencies
from caesar.core.models import (
    BruteForceCandidate,
    BruteForceReport,
    CrackOutcome,
    CrackReport,
    FrequencyReport,
    KeyEstimate,
    LetterFrequency,
    ReferenceTableError,
)

__all__ = [
    "ALPHABET",
    "ENGLISH_FREQUENCIES",
    "BruteForceCandidate",
    "BruteForceReport",
    "CrackOutcome",
    "CrackReport",
    "FrequencyReport",
    "KeyEstimate",
    "LetterFrequency",
    "ReferenceTableError",
    "alphabet_size",
    "count_letters",
    "decipher",
    "encipher",
    "letter_frequencies",
]
