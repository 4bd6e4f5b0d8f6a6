"""probability_calculator.core.statistics.combinatorics

Combinatorial and special-function primitives (no SciPy).

Implemented:
- Exact integer factorial and binomial coefficient
- Log-factorial via math.lgamma (constant time in n)
- Gamma function via the Lanczos approximation (g = 7, nine coefficients)

Every discrete mass function and every exact nonparametric test builds on
``combination``; the Weibull moments need ``gamma_function``.

Known limitation:
  ``factorial`` returns an exact Python ``int``. Converting it to ``float``
  overflows for n > 170, so callers forming probabilities from large
  factorials should divide integers (true division rounds correctly) or use
  ``log_factorial``.
"""

from __future__ import annotations

import math
import numbers


def _require_non_negative_int(n, name: str = "n") -> int:
    """Coerce an integral value to ``int`` or raise ``ValueError``."""
    if isinstance(n, bool) or not isinstance(n, numbers.Real):
        raise ValueError(f"{name} must be a non-negative integer, got {n!r}")
    if isinstance(n, numbers.Integral):
        value = int(n)
    else:
        if not math.isfinite(n) or float(n) != math.floor(n):
            raise ValueError(f"{name} must be a non-negative integer, got {n!r}")
        value = int(n)
    if value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {n!r}")
    return value


# ----------------------------
# Factorials
# ----------------------------


def factorial(n) -> int:
    """Exact factorial n! for a non-negative integer n.

    Args:
        n: non-negative integer (integral floats such as 5.0 are accepted)

    Returns:
        n! as an exact integer

    Raises:
        ValueError: for negative or non-integer input
    """
    return math.factorial(_require_non_negative_int(n))


def log_factorial(n) -> float:
    """Natural logarithm of n!, as lgamma(n + 1)."""
    return math.lgamma(_require_non_negative_int(n) + 1)


def combination(n, k) -> int:
    """Binomial coefficient C(n, k).

    Conventions:
      C(n, 0) = C(n, n) = 1
      C(n, k) = 0 when n < k (and when k < 0)

    Args:
        n: number of items
        k: number of items chosen

    Returns:
        exact integer count
    """
    if k == 0 or n == k:
        return 1
    if n < k or k < 0:
        return 0
    n = _require_non_negative_int(n)
    k = _require_non_negative_int(k, "k")
    return math.comb(n, k)


# ----------------------------
# Gamma function (Lanczos)
# ----------------------------

_LANCZOS_G = 7
_LANCZOS_COEF = (
    0.99999999999980993,
    676.5203681218851,
    -1259.1392167224028,
    771.32342877765313,
    -176.61502916214059,
    12.507343278686905,
    -0.13857109526572012,
    9.9843695780195716e-6,
    1.5056327351493116e-7,
)


def _lanczos(z: float) -> float:
    """Lanczos series for Gamma(z), z >= 0.5."""
    z -= 1.0
    x = _LANCZOS_COEF[0]
    for i in range(1, _LANCZOS_G + 2):
        x += _LANCZOS_COEF[i] / (z + i)
    t = z + _LANCZOS_G + 0.5
    return math.sqrt(2.0 * math.pi) * t ** (z + 0.5) * math.exp(-t) * x


def gamma_function(z: float) -> float:
    """Gamma function for real arguments.

    - z < 0.5: reflection formula Gamma(z) = pi / (sin(pi z) Gamma(1 - z))
    - z > 1.5: recurrence Gamma(z) = (z - 1) Gamma(z - 1), unrolled into a
               product so large arguments do not recurse
    - otherwise: Lanczos series (about 1e-10 relative accuracy)

    Args:
        z: real argument, not a non-positive integer

    Returns:
        Gamma(z)
    """
    z = float(z)
    if z <= 0.0 and z == math.floor(z):
        raise ValueError(f"Gamma function has a pole at {z}")
    if z == 1.0:
        return 1.0
    if z == 0.5:
        return math.sqrt(math.pi)
    if z < 0.5:
        return math.pi / (math.sin(math.pi * z) * gamma_function(1.0 - z))

    product = 1.0
    while z > 1.5:
        z -= 1.0
        product *= z
    if z == 1.0:
        return product
    return product * _lanczos(z)
