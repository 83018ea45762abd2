"""
Caesar Core Data Models
========================

Pydantic models for the Caesar toolkit. Key recovery returns a tagged
result: either a :class:`KeyEstimate` or a :class:`ReferenceTableError`,
discriminated by their ``kind`` field, so callers branch on the value
instead of catching an exception.

The report models carry the structured metadata attached to each
:class:`shared.models.RunResult` and feed both the console output and
the JSON report.

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable. Philosophical Magazine, 50(302).
    - Friedman, W. F. (1922). The Index of Coincidence and Its
      Applications in Cryptanalysis. Riverbank Publication No. 22.
"""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ===================================================================== #
#  Key Recovery (tagged result)
# ===================================================================== #


class KeyEstimate(BaseModel):
    """Most probable shift key for a ciphertext.

    Attributes:
        key: Shift in [0, 26) whose deciphering best matches English.
        statistic: Chi-squared total for *key* (lower is a better fit).
        scores: Chi-squared total of every shift, indexed by shift.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["estimate"] = "estimate"
    key: int = Field(..., ge=0, lt=26)
    statistic: float
    scores: tuple[float, ...] = ()


class ReferenceTableError(BaseModel):
    """The reference frequency table is unusable.

    Signals a broken built-in table (an entry that is not strictly
    positive, or a table of the wrong length), never bad user input.

    Attributes:
        message: Human-readable description of the defect.
        invalid_letters: Letters whose reference entry is not > 0.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference_error"] = "reference_error"
    message: str
    invalid_letters: tuple[str, ...] = ()


CrackOutcome = Union[KeyEstimate, ReferenceTableError]


# ===================================================================== #
#  Report Models
# ===================================================================== #


class CrackReport(BaseModel):
    """Structured outcome of a crack run.

    Attributes:
        key: Estimated key.
        plaintext: Ciphertext deciphered with *key*.
        statistic: Chi-squared total of the chosen shift.
        scores: Chi-squared totals for all 26 shifts.
        letter_count: Number of letters the estimate is based on.
        index_of_coincidence: Letter IC of the ciphertext.
        p_value: Goodness-of-fit p-value of the deciphered letter counts
            against English (``None`` when the text has no letters).
        reliable: Whether enough letters were present to trust the key.
    """

    key: int
    plaintext: str
    statistic: float
    scores: list[float] = Field(default_factory=list)
    letter_count: int = 0
    index_of_coincidence: float = 0.0
    p_value: Optional[float] = None
    reliable: bool = True


class BruteForceCandidate(BaseModel):
    """One row of a brute-force table."""

    key: int
    plaintext: str
    statistic: float


class BruteForceReport(BaseModel):
    """All 26 decipherings of a ciphertext, in key order.

    Attributes:
        candidates: One entry per key 0..25.
        best_keys: Keys ordered by ascending chi-squared total.
    """

    candidates: list[BruteForceCandidate] = Field(default_factory=list)
    best_keys: list[int] = Field(default_factory=list)


class LetterFrequency(BaseModel):
    """Observed versus expected frequency for a single letter."""

    letter: str
    count: int
    frequency: float
    expected: float


class FrequencyReport(BaseModel):
    """Letter-frequency profile of a text.

    Attributes:
        letters: One entry per alphabet letter, A to Z.
        letter_count: Total letters counted.
        index_of_coincidence: Letter IC of the text.
    """

    letters: list[LetterFrequency] = Field(default_factory=list)
    letter_count: int = 0
    index_of_coincidence: float = 0.0
