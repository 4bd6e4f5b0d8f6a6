"""probability_calculator.core.statistics.rank_counts

Exact null-distribution counts for rank statistics.

Signed-rank:
  cnum(x, n) = number of subsets of {1, ..., n} whose elements sum to x.
  Recursion: cnum(x, n) = cnum(x, n-1) + cnum(x-n, n-1), cnum(x, 1) = 1 for
  x in {0, 1}. Total over x is 2^n.

Mann-Whitney:
  fnum(u, n1, n2) = number of orderings of n1 + n2 observations giving U = u.
  Recursion: fnum(u, n1, n2) = fnum(u, n1, n2-1) + fnum(u-n2, n1-1, n2),
  fnum(0, n1, n2) = 1, zero for u < 0 or u > n1*n2. Total over u is
  C(n1+n2, n1).

Both recursions are evaluated bottom-up over (statistic, partial sample size)
and memoized, so the cost is polynomial in the sample sizes. Counts are exact
Python integers; probabilities should be formed as ``count / total`` so the
result is the correctly rounded rational.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple


@lru_cache(maxsize=128)
def signed_rank_counts(n: int) -> Tuple[int, ...]:
    """Subset-sum counts for the Wilcoxon signed-rank statistic.

    Args:
        n: number of ranks (>= 0)

    Returns:
        tuple c of length n(n+1)/2 + 1 with c[x] = cnum(x, n)
    """
    if n < 0:
        raise ValueError("n must be non-negative")

    counts = [1]  # empty set of ranks: only sum 0
    for k in range(1, n + 1):
        nxt = counts + [0] * k
        for x, c in enumerate(counts):
            nxt[x + k] += c
        counts = nxt
    return tuple(counts)


@lru_cache(maxsize=128)
def mann_whitney_counts(n1: int, n2: int) -> Tuple[int, ...]:
    """Arrangement counts for the Mann-Whitney U statistic.

    ``rows[i]`` holds fnum(., i, j) while j advances from 0 to n2; the
    (i, j) table needs (i, j-1), still in ``rows[i]``, and (i-1, j), which
    was just updated in ``rows[i-1]``.

    Args:
        n1: size of the first sample (>= 0)
        n2: size of the second sample (>= 0)

    Returns:
        tuple f of length n1*n2 + 1 with f[u] = fnum(u, n1, n2)
    """
    if n1 < 0 or n2 < 0:
        raise ValueError("sample sizes must be non-negative")

    rows = [[1] for _ in range(n1 + 1)]
    for j in range(1, n2 + 1):
        for i in range(1, n1 + 1):
            prev = rows[i]
            lower = rows[i - 1]
            cur = [0] * (i * j + 1)
            for u, c in enumerate(prev):
                cur[u] += c
            for u, c in enumerate(lower):
                cur[u + j] += c
            rows[i] = cur
    return tuple(rows[n1])
