"""
Caesar Toolkit Mathematical Utilities
======================================

Statistics used by the cryptanalysis layer: Pearson's chi-squared
statistic and goodness-of-fit test, and Friedman's index of coincidence.

References:
    [1] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations ... Philosophical Magazine, 50(302), 157-175.
    [2] Friedman, W. F. (1922). The Index of Coincidence and Its
        Applications in Cryptanalysis. Riverbank Publication No. 22.
    [3] Press, W. H. et al. (2007). Numerical Recipes (3rd ed.).
        Cambridge University Press, Section 6.2.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray


FloatArray = NDArray[np.floating]


# ========================== Chi-Squared ====================================


def _as_pair(
    observed: FloatArray | Sequence[float], expected: FloatArray | Sequence[float]
) -> tuple[FloatArray, FloatArray]:
    obs = np.asarray(observed, dtype=np.float64)
    exp = np.asarray(expected, dtype=np.float64)
    if obs.shape != exp.shape:
        raise ValueError("Array shapes must match")
    if not np.all(exp > 0):
        raise ValueError("Expected values must be > 0")
    return obs, exp


def chi_squared_statistic(
    observed: FloatArray | Sequence[float], expected: FloatArray | Sequence[float]
) -> float:
    """Pearson's chi-squared statistic.

    .. math::

        \\chi^2 = \\sum_i \\frac{(O_i - E_i)^2}{E_i}

    Works on counts or on relative frequencies alike.

    Raises:
        ValueError: If the arrays differ in shape or *expected* holds a
            value that is not strictly positive.
    """
    obs, exp = _as_pair(observed, expected)
    return float(np.sum((obs - exp) ** 2 / exp))


def chi_squared_test(
    observed: FloatArray | Sequence[float], expected: FloatArray | Sequence[float]
) -> tuple[float, float]:
    """Perform Pearson's chi-squared goodness-of-fit test.

    The p-value is computed using the regularised upper incomplete gamma
    function, matching ``scipy.stats.chi2.sf`` without requiring SciPy.

    Args:
        observed: Observed counts (1-D array of length *k*).
        expected: Expected counts (1-D array of length *k*).

    Returns:
        Tuple of ``(chi2_statistic, p_value)``.

    Raises:
        ValueError: If arrays differ in length or expected contains zeros.
    """
    chi2 = chi_squared_statistic(observed, expected)
    dof = len(observed) - 1

    if dof <= 0:
        return chi2, 1.0

    return chi2, _upper_inc_gamma_reg(dof / 2.0, chi2 / 2.0)


# --------------- Incomplete gamma helpers (Numerical Recipes, Ch. 6) ------


def _upper_inc_gamma_reg(a: float, x: float) -> float:
    """Regularised upper incomplete gamma Q(a, x) = 1 - P(a, x).

    Uses series expansion for small *x* and the Lentz continued-fraction
    algorithm for large *x*.
    """
    if x <= 0.0 or a <= 0.0:
        return 1.0

    if x < a + 1.0:
        return 1.0 - _gamma_p_series(a, x)
    return _gamma_q_cf(a, x)


def _gamma_p_series(a: float, x: float) -> float:
    """Lower regularised incomplete gamma P(a, x) by series expansion."""
    ap = a
    delta = 1.0 / a
    total = delta
    for _ in range(300):
        ap += 1.0
        delta *= x / ap
        total += delta
        if abs(delta) < abs(total) * 1e-15:
            break
    return total * math.exp(-x + a * math.log(x) - math.lgamma(a))


def _gamma_q_cf(a: float, x: float) -> float:
    """Upper regularised incomplete gamma Q(a, x) by Lentz continued fraction."""
    tiny = 1e-30
    b = x + 1.0 - a
    c = 1.0 / tiny
    d = 1.0 / b
    f = d
    for i in range(1, 300):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < tiny:
            d = tiny
        c = b + an / c
        if abs(c) < tiny:
            c = tiny
        d = 1.0 / d
        delta = d * c
        f *= delta
        if abs(delta - 1.0) < 1e-15:
            break
    return f * math.exp(-x + a * math.log(x) - math.lgamma(a))


# ===================== Index of Coincidence ================================


def index_of_coincidence(counts: Sequence[int]) -> float:
    """Friedman's index of coincidence over symbol counts.

    .. math::

        IC = \\frac{\\sum_i n_i (n_i - 1)}{N (N - 1)}

    English letters give about 0.066, uniformly random letters 1/26
    (about 0.038). A Caesar shift permutes the counts and so leaves the
    IC unchanged.

    Returns:
        The IC, or 0.0 when fewer than two symbols were counted.
    """
    total = sum(counts)
    if total < 2:
        return 0.0
    return sum(n * (n - 1) for n in counts) / (total * (total - 1))
