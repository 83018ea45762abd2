"""
Caesar Engine
==============

Central orchestrator for the Caesar toolkit. :class:`CaesarEngine` runs
the cipher and cryptanalysis functions on behalf of the CLI and wraps
each outcome in a :class:`shared.models.RunResult` carrying the output
text, findings, and a structured report.

This is the only layer that logs; the functions it calls are pure.

Architecture follows the Facade pattern (Gamma et al., 1994).

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from shared.config import ToolkitConfig
from shared.logger import ToolkitLogger
from shared.math_utils import chi_squared_test, index_of_coincidence
from shared.models import Finding, RunResult, Severity

from caesar.analyzers.cracker import crack_key, shift_statistics, validate_reference
from caesar.core.alphabet import ALPHABET, ALPHABET_LENGTH, ENGLISH_FREQUENCIES
from caesar.core.cipher import count_letters, decipher, encipher
from caesar.core.models import (
    BruteForceCandidate,
    BruteForceReport,
    CrackReport,
    FrequencyReport,
    LetterFrequency,
    ReferenceTableError,
)

TOOL_NAME = "caesar"

# English letter IC is ~0.066; uniform letters give ~0.038
_IC_FLAT_THRESHOLD = 0.05


class CaesarEngine:
    """Runs Caesar toolkit operations and reports on them.

    Usage::

        engine = CaesarEngine()
        result = engine.encipher("attack at Dawn!", 11)
        result.output                       # 'leelnv le Olhy!'
        result = engine.crack("leelnv le Olhy!")
        result.metadata["key"]              # 11

    Attributes:
        config: Toolkit configuration instance.
        reference: Expected English letter frequencies, A to Z.
        logger: Logger for the engine.
    """

    def __init__(
        self,
        config: Optional[ToolkitConfig] = None,
        *,
        reference: Sequence[float] = ENGLISH_FREQUENCIES,
        log_level: Optional[str] = None,
    ) -> None:
        self.config = config or ToolkitConfig()
        self.reference = tuple(reference)

        settings = self.config.global_settings
        self.logger = ToolkitLogger(
            "engine",
            log_level=log_level or settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
        )

    # ------------------------------------------------------------------ #
    #  Encipher / Decipher
    # ------------------------------------------------------------------ #

    def encipher(self, text: str, key: int, target: str = "<text>") -> RunResult:
        """Encipher *text* with *key*.

        Args:
            text: Plaintext.
            key: Non-negative shift; reduced modulo 26.
            target: Label for where the text came from.
        """
        return self._shift("encipher", text, key, target)

    def decipher(self, text: str, key: int, target: str = "<text>") -> RunResult:
        """Decipher *text* that was enciphered with *key*."""
        return self._shift("decipher", text, key, target)

    def _shift(self, operation: str, text: str, key: int, target: str) -> RunResult:
        result = RunResult(tool_name=TOOL_NAME, operation=operation, target=target)
        adjusted_key = key % ALPHABET_LENGTH

        with self.logger.operation(operation), self.logger.timed(operation):
            self.logger.debug("Key %d reduced to %d", key, adjusted_key)
            if operation == "encipher":
                result.output = encipher(text, adjusted_key)
            else:
                result.output = decipher(text, adjusted_key)

        result.metadata = {"key": adjusted_key, "length": len(text)}
        return result.finalize(
            summary=f"{operation.capitalize()}ed {len(text)} characters with key {adjusted_key}"
        )

    # ------------------------------------------------------------------ #
    #  Crack
    # ------------------------------------------------------------------ #

    def crack(self, text: str, target: str = "<text>") -> RunResult:
        """Estimate the key of *text* and decipher it with that key.

        The metadata holds a :class:`CrackReport`. A LOW finding is added
        when too few letters were available for a trustworthy estimate.
        """
        result = RunResult(tool_name=TOOL_NAME, operation="crack", target=target)

        with self.logger.operation("crack"), self.logger.timed("crack"):
            outcome = crack_key(text, self.reference)
            if isinstance(outcome, ReferenceTableError):
                return self._reference_failure(result, outcome)

            counts, total = count_letters(text)
            plaintext = decipher(text, outcome.key)
            ic = index_of_coincidence(counts)
            p_value = self._fit_p_value(counts, total, outcome.key)
            reliable = total >= self.config.caesar.min_crack_letters

            self.logger.debug(
                "Best shift %d (chi2=%.4f) over %d letters",
                outcome.key,
                outcome.statistic,
                total,
            )

        report = CrackReport(
            key=outcome.key,
            plaintext=plaintext,
            statistic=outcome.statistic,
            scores=list(outcome.scores),
            letter_count=total,
            index_of_coincidence=ic,
            p_value=p_value,
            reliable=reliable,
        )
        result.output = plaintext
        result.metadata = report.model_dump()

        if not reliable:
            result.add_finding(Finding(
                severity=Severity.LOW,
                title="Short Ciphertext",
                description=(
                    f"Only {total} letters were available; frequency analysis "
                    f"needs about {self.config.caesar.min_crack_letters} to be "
                    f"dependable. The estimated key may be wrong."
                ),
                evidence={"letter_count": total},
                recommendation="Inspect all 26 candidates with brute-force.",
            ))
        elif ic < _IC_FLAT_THRESHOLD:
            result.add_finding(Finding(
                severity=Severity.MEDIUM,
                title="Flat Letter Distribution",
                description=(
                    f"Index of coincidence {ic:.4f} is well below English "
                    f"(~0.066). The text may not be a Caesar-enciphered "
                    f"English message."
                ),
                evidence={"index_of_coincidence": ic},
            ))

        return result.finalize(
            summary=f"Estimated key {outcome.key} from {total} letters"
        )

    def _fit_p_value(
        self, counts: Sequence[int], total: int, key: int
    ) -> Optional[float]:
        """Goodness-of-fit p-value of the deciphered counts against English."""
        if total == 0:
            return None
        observed = np.roll(np.asarray(counts, dtype=np.float64), -key)
        expected = np.asarray(self.reference, dtype=np.float64) * total
        _, p_value = chi_squared_test(observed, expected)
        return p_value

    # ------------------------------------------------------------------ #
    #  Brute Force
    # ------------------------------------------------------------------ #

    def brute_force(self, text: str, target: str = "<text>") -> RunResult:
        """Decipher *text* under every key.

        The output text lists the 26 plaintexts one per line, in key
        order; the metadata holds a :class:`BruteForceReport`.
        """
        result = RunResult(tool_name=TOOL_NAME, operation="brute-force", target=target)

        with self.logger.operation("brute-force"), self.logger.timed("brute-force"):
            defect = validate_reference(self.reference)
            if defect is not None:
                return self._reference_failure(result, defect)

            scores = shift_statistics(text, self.reference)
            candidates = [
                BruteForceCandidate(
                    key=key,
                    plaintext=decipher(text, key),
                    statistic=scores[key],
                )
                for key in range(ALPHABET_LENGTH)
            ]

        report = BruteForceReport(
            candidates=candidates,
            best_keys=sorted(range(ALPHABET_LENGTH), key=lambda k: (scores[k], k)),
        )
        result.output = "".join(c.plaintext + "\n" for c in candidates)
        result.metadata = report.model_dump()
        return result.finalize(
            summary=f"Listed {ALPHABET_LENGTH} candidates; best key {report.best_keys[0]}"
        )

    # ------------------------------------------------------------------ #
    #  Frequency
    # ------------------------------------------------------------------ #

    def frequency(self, text: str, target: str = "<text>") -> RunResult:
        """Profile the letter frequencies of *text* against English."""
        result = RunResult(tool_name=TOOL_NAME, operation="frequency", target=target)

        with self.logger.operation("frequency"):
            defect = validate_reference(self.reference)
            if defect is not None:
                return self._reference_failure(result, defect)

            counts, total = count_letters(text)
            letters = [
                LetterFrequency(
                    letter=ALPHABET[i],
                    count=counts[i],
                    frequency=counts[i] / total if total else 0.0,
                    expected=self.reference[i],
                )
                for i in range(ALPHABET_LENGTH)
            ]
            report = FrequencyReport(
                letters=letters,
                letter_count=total,
                index_of_coincidence=index_of_coincidence(counts),
            )
            self.logger.debug("Counted %d letters", total)

        result.output = "".join(
            f"{lf.letter}\t{lf.count}\t{lf.frequency:.5f}\n" for lf in letters
        )
        result.metadata = report.model_dump()
        return result.finalize(
            summary=(
                f"{total} letters, index of coincidence "
                f"{report.index_of_coincidence:.4f}"
            )
        )

    # ------------------------------------------------------------------ #
    #  Failure handling
    # ------------------------------------------------------------------ #

    def _reference_failure(
        self, result: RunResult, defect: ReferenceTableError
    ) -> RunResult:
        self.logger.error("Reference frequency table rejected: %s", defect.message)
        result.error = defect.message
        result.metadata = defect.model_dump()
        result.add_finding(Finding(
            severity=Severity.HIGH,
            title="Internal Error",
            description=defect.message,
            evidence={"invalid_letters": list(defect.invalid_letters)},
            recommendation="Please report this error to the supplier of this utility.",
        ))
        return result.finalize(summary=f"Internal error: {defect.message}")
