"""
Caesar Toolkit -- Shift Cipher and Frequency Cryptanalysis
===========================================================

Enciphers and deciphers text with the classical Caesar shift cipher and
recovers unknown keys by chi-squared comparison of letter frequencies
against English.

Modules:
    - caesar.core.alphabet: Alphabet and English reference frequencies
    - caesar.core.cipher: Shift transformations and letter counting
    - caesar.core.models: Pydantic result and report models
    - caesar.core.engine: Orchestrator used by the CLI
    - caesar.analyzers.cracker: Chi-squared key recovery
    - caesar.output: Console and report output
    - caesar.cli: Click-based command-line interface

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations. Philosophical Magazine, 50(302), 157-175.
    - Singh, S. (1999). The Code Book. Fourth Estate.
"""

__version__ = "1.0.0"
