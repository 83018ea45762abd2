"""
Caesar Analyzers
=================

Cryptanalysis routines for the Caesar toolkit.
"""

from caesar.analyzers.cracker import crack_key, shift_statistics, validate_reference

__all__ = [
    "crack_key",
    "shift_statistics",
    "validate_reference",
]
