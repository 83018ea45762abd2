"""
Caesar Key Cracker
===================

Recovers the most likely shift key of a Caesar ciphertext by comparing
its letter-frequency distribution with English under every possible
shift, using Pearson's chi-squared statistic.

For candidate shift *s* the observed distribution is rotated so that
ciphertext letter ``(i + s) mod 26`` lines up with plaintext letter *i*:

    total(s) = sum_i (obs[(i + s) mod 26] - ref[i])^2 / ref[i]

The shift with the strictly lowest total wins; on a tie the smaller
shift is kept. A text without letters scores every shift identically
and therefore yields key 0.

The result is statistical, not guaranteed: short or unusual plaintexts
can produce a wrong key, in which case a brute-force listing is the
fallback.

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations. Philosophical Magazine, 50(302), 157-175.
    - Sinkov, A. (1966). Elementary Cryptanalysis: A Mathematical
      Approach. Mathematical Association of America.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from shared.math_utils import chi_squared_statistic
from caesar.core.alphabet import ALPHABET, ALPHABET_LENGTH, ENGLISH_FREQUENCIES
from caesar.core.cipher import letter_frequencies
from caesar.core.models import CrackOutcome, KeyEstimate, ReferenceTableError


def validate_reference(reference: Sequence[float]) -> ReferenceTableError | None:
    """Check that *reference* can serve as an expected distribution.

    Returns:
        ``None`` when every one of the 26 entries is strictly positive,
        otherwise a :class:`ReferenceTableError` describing the defect.
    """
    if len(reference) != ALPHABET_LENGTH:
        return ReferenceTableError(
            message=(
                f"Reference frequency table has {len(reference)} entries, "
                f"expected {ALPHABET_LENGTH}."
            ),
        )

    # "not > 0" also rejects NaN
    invalid = tuple(
        ALPHABET[i] for i, value in enumerate(reference) if not value > 0.0
    )
    if invalid:
        return ReferenceTableError(
            message=(
                "Divide by zero: the reference frequency table contains a "
                f"non-positive frequency for {', '.join(invalid)}."
            ),
            invalid_letters=invalid,
        )
    return None


def shift_statistics(
    ciphertext: str | bytes, reference: Sequence[float] = ENGLISH_FREQUENCIES
) -> tuple[float, ...]:
    """Chi-squared total of every candidate shift, indexed by shift.

    *reference* must already be valid (see :func:`validate_reference`);
    a non-positive entry raises ``ValueError``.
    """
    observed = np.asarray(letter_frequencies(ciphertext), dtype=np.float64)
    expected = np.asarray(reference, dtype=np.float64)

    # np.roll(a, -s)[i] == a[(i + s) % 26]
    return tuple(
        chi_squared_statistic(np.roll(observed, -shift), expected)
        for shift in range(ALPHABET_LENGTH)
    )


def crack_key(
    ciphertext: str | bytes, reference: Sequence[float] = ENGLISH_FREQUENCIES
) -> CrackOutcome:
    """Estimate the key a ciphertext was enciphered with.

    Args:
        ciphertext: Text to analyse. Any content, including empty.
        reference:  Expected relative letter frequencies, A to Z.

    Returns:
        :class:`KeyEstimate` with the best shift, or
        :class:`ReferenceTableError` when *reference* is malformed.
    """
    defect = validate_reference(reference)
    if defect is not None:
        return defect

    scores = shift_statistics(ciphertext, reference)

    best_shift = 0
    best_total = scores[0]
    for shift in range(1, ALPHABET_LENGTH):
        if scores[shift] < best_total:
            best_total = scores[shift]
            best_shift = shift

    return KeyEstimate(key=best_shift, statistic=best_total, scores=scores)
