"""
Caesar Cipher Engine
=====================

Stateless shift-cipher transformations over the 26-letter alphabet and
the letter-counting primitives the cryptanalyzer builds on.

Only ASCII letters are shifted. Case is preserved, and every other
character (digits, punctuation, whitespace, non-ASCII) passes through
unchanged, so output length always equals input length. Both ``str``
and ``bytes`` are accepted; the result has the type of the input.

Usage::

    >>> encipher("attack at Dawn!", 11)
    'leelnv le Olhy!'
    >>> decipher("leelnv le Olhy!", 271)
    'attack at Dawn!'

Reference:
    - Singh, S. (1999). The Code Book. Fourth Estate. Chapter 1.
"""

from __future__ import annotations

import string
from typing import TypeVar

from caesar.core.alphabet import ALPHABET, ALPHABET_LENGTH, letter_index

TextT = TypeVar("TextT", str, bytes, bytearray)

_UPPER = ALPHABET
_LOWER = string.ascii_lowercase


def _translation(key: int, binary: bool) -> dict[int, int] | bytes:
    """Build the translate() table for a forward shift of *key*."""
    shift = key % ALPHABET_LENGTH
    source = _UPPER + _LOWER
    target = _UPPER[shift:] + _UPPER[:shift] + _LOWER[shift:] + _LOWER[:shift]
    if binary:
        return bytes.maketrans(source.encode("ascii"), target.encode("ascii"))
    return str.maketrans(source, target)


def encipher(text: TextT, key: int) -> TextT:
    """Shift every letter of *text* forward by *key* positions.

    The key is reduced modulo 26 first, so any integer is accepted and
    ``encipher(t, k) == encipher(t, k + 26)``. Key 0 is the identity.

    Args:
        text: Plaintext as ``str`` or ``bytes``. May be empty.
        key:  Shift amount.

    Returns:
        Ciphertext of the same type and length as *text*.
    """
    binary = isinstance(text, (bytes, bytearray))
    return text.translate(_translation(key, binary))


def decipher(text: TextT, key: int) -> TextT:
    """Undo :func:`encipher` for the same *key*.

    Implemented as a forward shift by ``(26 - key mod 26) mod 26``.
    """
    return encipher(text, (ALPHABET_LENGTH - key % ALPHABET_LENGTH) % ALPHABET_LENGTH)


def count_letters(text: str | bytes | bytearray) -> tuple[tuple[int, ...], int]:
    """Count each alphabet letter in *text*, ignoring case.

    Returns:
        ``(counts, total)`` where ``counts[i]`` is the number of
        occurrences of letter *i* and *total* the number of letters seen.
        Non-letters do not contribute to either.
    """
    if isinstance(text, (bytes, bytearray)):
        # latin-1 maps every byte to one code point; only ASCII letters count
        text = bytes(text).decode("latin-1")

    counts = [0] * ALPHABET_LENGTH
    for char in text:
        index = letter_index(char)
        if index is not None:
            counts[index] += 1
    return tuple(counts), sum(counts)


def letter_frequencies(text: str | bytes | bytearray) -> tuple[float, ...]:
    """Relative frequency of each alphabet letter in *text*.

    Every entry is 0.0 when *text* holds no letters at all.
    """
    counts, total = count_letters(text)
    if total == 0:
        return (0.0,) * ALPHABET_LENGTH
    return tuple(count / total for count in counts)
