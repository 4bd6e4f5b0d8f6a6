"""
Tests for the special-function provider.
"""

import importlib
import threading
import time

import pytest

from probability_calculator.core.calculator import z_critical
from probability_calculator.core.models import NormalDistribution
from probability_calculator.core.statistics import provider as provider_module
from probability_calculator.core.statistics import (
    ProviderUnavailableError,
    SpecialFunctionProvider,
    get_provider,
    set_provider,
)
from probability_calculator.core.validation import CalculationError


class _ConstantProvider:
    """Stand-in provider returning fixed values."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def load(self):
        return self

    def pdf(self, family, x, *params):
        self.calls.append(("pdf", family, x, params))
        return self.value

    def cdf(self, family, x, *params):
        self.calls.append(("cdf", family, x, params))
        return self.value

    def inv(self, family, p, *params):
        self.calls.append(("inv", family, p, params))
        return self.value


@pytest.fixture
def restore_provider():
    yield
    set_provider(None)


class TestLoading:
    """Lazy, idempotent loading."""

    def test_not_loaded_until_used(self):
        provider = SpecialFunctionProvider()
        assert not provider.is_loaded
        assert provider.load() is provider
        assert provider.is_loaded

    def test_load_is_idempotent(self):
        provider = SpecialFunctionProvider().load()
        module = provider._stats
        provider.load()
        assert provider._stats is module

    def test_first_query_loads(self):
        provider = SpecialFunctionProvider()
        assert provider.cdf("normal", 0.0, 0.0, 1.0) == pytest.approx(0.5)
        assert provider.is_loaded

    def test_missing_library(self):
        """A failed import raises and leaves the provider unloaded."""
        provider = SpecialFunctionProvider("probability_calculator_missing_stats_module")
        with pytest.raises(ProviderUnavailableError) as exc_info:
            provider.load()
        assert not provider.is_loaded
        assert isinstance(exc_info.value, CalculationError)
        assert isinstance(exc_info.value, RuntimeError)
        assert "probability_calculator_missing_stats_module" in str(exc_info.value)

    def test_concurrent_first_use_imports_once(self, monkeypatch):
        """Racing first requests share a single import."""
        real_import = importlib.import_module
        imports = []

        def slow_import(name, package=None):
            imports.append(name)
            if name == "scipy.stats":
                time.sleep(0.05)
            return real_import(name, package)

        monkeypatch.setattr(provider_module.importlib, "import_module", slow_import)
        provider = SpecialFunctionProvider()
        results = []

        def worker():
            results.append(provider.cdf("normal", 0.0, 0.0, 1.0))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert [name for name in imports if name == "scipy.stats"] == ["scipy.stats"]
        assert results == [pytest.approx(0.5)] * 8


class TestFamilies:
    """Family lookup and parameter order."""

    def test_unknown_family(self):
        with pytest.raises(KeyError):
            SpecialFunctionProvider().cdf("cauchy", 0.0, 0.0, 1.0)

    def test_wrong_parameter_count(self):
        with pytest.raises(ValueError):
            SpecialFunctionProvider().cdf("studentt", 1.0, 10, 3)

    def test_lognormal_parameters(self):
        """lognormal(mu, sigma) is parameterized by the underlying normal."""
        assert SpecialFunctionProvider().cdf("lognormal", 1.0, 0.0, 1.0) == pytest.approx(0.5)

    def test_gamma_shape_scale(self):
        # shape 2, scale 3: mean 6
        provider = SpecialFunctionProvider()
        assert provider.inv("gamma", provider.cdf("gamma", 6.0, 2.0, 3.0), 2.0, 3.0) == pytest.approx(6.0)

    @pytest.mark.parametrize(
        "family, p, params, expected",
        [
            ("chisquare", 0.95, (10,), 18.307038053275146),
            ("studentt", 0.975, (10,), 2.2281388519649385),
            ("normal", 0.975, (0.0, 1.0), 1.959963984540054),
        ],
    )
    def test_inverse_known_values(self, family, p, params, expected):
        assert SpecialFunctionProvider().inv(family, p, *params) == pytest.approx(expected, abs=1e-8)


class TestProcessProvider:
    """The process-wide provider used by distributions and critical values."""

    def test_default_is_loaded_scipy(self, restore_provider):
        set_provider(None)
        provider = get_provider()
        assert provider.is_loaded
        assert get_provider() is provider

    def test_injected_provider_reaches_distributions(self, restore_provider):
        fake = _ConstantProvider(0.25)
        set_provider(fake)
        assert NormalDistribution(3.0, 2.0).cdf(1.0) == 0.25
        assert fake.calls == [("cdf", "normal", 1.0, (3.0, 2.0))]

    def test_injected_provider_reaches_critical_values(self, restore_provider):
        set_provider(_ConstantProvider(1.5))
        assert z_critical(0.05) == {"right": 1.5, "left": 1.5, "two-tail": 1.5}

    def test_per_instance_provider(self):
        fake = _ConstantProvider(0.75)
        dist = NormalDistribution(0.0, 1.0, provider=fake)
        assert dist.percentile(0.4) == 0.75
        assert fake.calls[0][:2] == ("inv", "normal")
