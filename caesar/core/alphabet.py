"""
Alphabet and Reference Frequencies
===================================

Process-wide constants for the Caesar toolkit: the 26-letter Latin
alphabet and the relative frequency of each letter in English text.

Both are tuples and therefore immutable; nothing in the toolkit keeps
mutable module state.

References:
    - Letter frequency. Wikipedia.
      https://en.wikipedia.org/wiki/Letter_frequency
    - Lewand, R. E. (2000). Cryptological Mathematics. MAA.
"""

from __future__ import annotations

import string

ALPHABET: str = string.ascii_uppercase
ALPHABET_LENGTH: int = len(ALPHABET)

# Relative frequencies of A..Z in English, indexed by alphabet position.
ENGLISH_FREQUENCIES: tuple[float, ...] = (
    0.08167,  # A
    0.01492,  # B
    0.02782,  # C
    0.04253,  # D
    0.12702,  # E
    0.02228,  # F
    0.02015,  # G
    0.06094,  # H
    0.06966,  # I
    0.00153,  # J
    0.00772,  # K
    0.04025,  # L
    0.02406,  # M
    0.06749,  # N
    0.07507,  # O
    0.01929,  # P
    0.00095,  # Q
    0.05987,  # R
    0.06327,  # S
    0.09056,  # T
    0.02758,  # U
    0.00978,  # V
    0.02361,  # W
    0.00150,  # X
    0.01974,  # Y
    0.00074,  # Z
)


def alphabet_size() -> int:
    """Return the number of letters in the alphabet (always 26)."""
    return ALPHABET_LENGTH


def letter_index(letter: str) -> int | None:
    """Alphabet position of an ASCII letter, case-insensitively.

    Returns ``None`` for anything that is not a single ASCII letter, so
    ``"é"`` or ``"ı"`` are never mistaken for ``E`` or ``I``.
    """
    if len(letter) != 1 or not letter.isascii() or not letter.isalpha():
        return None
    return ord(letter.upper()) - ord("A")
