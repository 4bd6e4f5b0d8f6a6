"""probability_calculator.core.statistics.provider

Special-function provider for the continuous families whose cumulative and
inverse-cumulative functions need incomplete gamma/beta/normal integrals.

Families and parameters (in call order):
  normal(mean, sd)       gamma(shape, scale)     beta(alpha, beta)
  lognormal(mu, sigma)   chisquare(df)           centralF(df1, df2)
  studentt(df)

The functions are supplied by ``scipy.stats``. The module is imported once,
on the first request, under a lock so that concurrent first requests share a
single import. A failed import surfaces as ``ProviderUnavailableError`` and
leaves the provider unloaded; a later explicit ``load()`` may try again.
"""

from __future__ import annotations

import importlib
import logging
import math
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from ..validation.parameters import CalculationError

logger = logging.getLogger(__name__)


class ProviderUnavailableError(CalculationError, RuntimeError):
    """The special-function provider could not be initialized."""


def _lognormal(stats, mu: float, sigma: float):
    return stats.lognorm(s=sigma, scale=math.exp(mu))


# family -> (scipy factory, expected parameter count)
_FAMILIES: Dict[str, Tuple[Callable[..., Any], int]] = {
    "normal": (lambda stats, mean, sd: stats.norm(loc=mean, scale=sd), 2),
    "gamma": (lambda stats, shape, scale: stats.gamma(a=shape, scale=scale), 2),
    "beta": (lambda stats, a, b: stats.beta(a, b), 2),
    "lognormal": (_lognormal, 2),
    "chisquare": (lambda stats, df: stats.chi2(df), 1),
    "centralF": (lambda stats, df1, df2: stats.f(df1, df2), 2),
    "studentt": (lambda stats, df: stats.t(df), 1),
}


class SpecialFunctionProvider:
    """pdf / cdf / inverse-cdf for the families in ``_FAMILIES``.

    Usage:
        provider = SpecialFunctionProvider()
        provider.cdf("normal", 1.96, 0.0, 1.0)      # ~0.975
        provider.inv("chisquare", 0.95, 10)          # ~18.307
    """

    def __init__(self, module_name: str = "scipy.stats"):
        self.module_name = module_name
        self._stats = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._stats is not None

    def load(self) -> "SpecialFunctionProvider":
        """Import the backing module (idempotent)."""
        if self._stats is not None:
            return self
        with self._lock:
            if self._stats is None:
                logger.debug("Loading special-function provider %s", self.module_name)
                try:
                    self._stats = importlib.import_module(self.module_name)
                except ImportError as exc:
                    raise ProviderUnavailableError(
                        f"Failed to load statistics library '{self.module_name}'"
                    ) from exc
        return self

    def _frozen(self, family: str, params: Tuple[float, ...]):
        if family not in _FAMILIES:
            raise KeyError(f"Unknown distribution family: {family}")
        factory, arity = _FAMILIES[family]
        if len(params) != arity:
            raise ValueError(f"{family} expects {arity} parameter(s), got {len(params)}")
        self.load()
        return factory(self._stats, *params)

    def pdf(self, family: str, x: float, *params: float) -> float:
        """Probability density of ``family`` at x."""
        return float(self._frozen(family, params).pdf(x))

    def cdf(self, family: str, x: float, *params: float) -> float:
        """Cumulative probability P(X <= x)."""
        return float(self._frozen(family, params).cdf(x))

    def inv(self, family: str, p: float, *params: float) -> float:
        """Inverse cdf: x such that cdf(x) = p."""
        return float(self._frozen(family, params).ppf(p))


_provider: Optional[SpecialFunctionProvider] = None
_provider_lock = threading.Lock()


def get_provider() -> SpecialFunctionProvider:
    """Process-wide provider, loaded on first use."""
    global _provider
    if _provider is None:
        with _provider_lock:
            if _provider is None:
                _provider = SpecialFunctionProvider()
    return _provider.load()


def set_provider(provider: Optional[SpecialFunctionProvider]) -> None:
    """Replace the process-wide provider (None restores the default on next use)."""
    global _provider
    with _provider_lock:
        _provider = provider
