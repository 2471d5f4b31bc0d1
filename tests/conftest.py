# tests/conftest.py

"""
Shared fixtures for capacity pipeline tests.

Provides:
- Flat skew and benchmark tables
- A customer of 1000 individuals
- A profile factory with overridable parts
- A clock on Monday 2026-01-05 and a calm weather source
- Subscriptions priced at or away from the benchmark
"""

import pytest

from pycapsim.adjustment import CapacityType, ContinuousElasticity, StepwiseElasticity, WeatherInfluenceTable
from pycapsim.engine import CapacityEngine
from pycapsim.interfaces import FlatRateSubscription, SimulationClock, StaticWeatherSource, WeatherObservation
from pycapsim.profile import BaseCapacityKind, BaseCapacitySpec, CapacityBundle, CapacityProfile, CustomerProfile
from pycapsim.sampling import ProbabilityDistribution, TimeSeriesSampler


BENCHMARK_RATE = 0.1


# =============================================================================
# Collaborators
# =============================================================================

class UnpricedSubscription(FlatRateSubscription):
    """Subscription that fails the test if it is ever asked for a charge."""

    def usage_charge(self, instant, quantity, cumulative_usage):
        raise AssertionError("usage_charge should not be called")


@pytest.fixture
def clock():
    """Clock at step 1 = Monday 2026-01-05 00:00."""
    return SimulationClock("2026-01-05 00:00")


@pytest.fixture
def calm_weather():
    return StaticWeatherSource(WeatherObservation(temperature=20.0))


@pytest.fixture
def customer():
    return CustomerProfile(name="Village", population=1000)


def _subscription_at(ratio: float, customers: int = 1000, name: str = "tariff") -> FlatRateSubscription:
    return FlatRateSubscription(name, customers, [BENCHMARK_RATE * ratio] * 24)


@pytest.fixture
def subscription_at():
    """Factory for a subscription priced at ``ratio`` times the benchmark."""
    return _subscription_at


@pytest.fixture
def unpriced_subscription():
    """Factory for a subscription that must not be priced."""
    def _make(customers: int = 1000):
        return UnpricedSubscription("tariff", customers, [BENCHMARK_RATE] * 24)
    return _make


@pytest.fixture
def parity_subscription():
    return _subscription_at(1.0)


# =============================================================================
# Profiles
# =============================================================================

def _timeseries_base(values):
    return BaseCapacitySpec(BaseCapacityKind.TIMESERIES, timeseries=TimeSeriesSampler(values, name="test"))


def _degenerate_base(value, kind=BaseCapacityKind.POPULATION):
    dist = ProbabilityDistribution("DEGENERATE", {"value": value})
    if kind == BaseCapacityKind.POPULATION:
        return BaseCapacitySpec(kind, population=dist)
    return BaseCapacitySpec(kind, individual=dist)


def build_profile(base=None, daily_skew=None, hourly_skew=None, benchmark_rates=None,
                  elasticity=None, weather=None, capacity_type=CapacityType.CONSUMPTION):
    if elasticity is None:
        elasticity = StepwiseElasticity([], capacity_type)
    return CapacityProfile(
        bundle=CapacityBundle("Village-bundle", capacity_type),
        base=base if base is not None else _degenerate_base(100.0),
        daily_skew=daily_skew or [1.0] * 7,
        hourly_skew=hourly_skew or [1.0] * 24,
        benchmark_rates=benchmark_rates or [BENCHMARK_RATE] * 24,
        elasticity=elasticity,
        weather=weather or WeatherInfluenceTable(),
    )


@pytest.fixture
def timeseries_base():
    """Factory for a TIMESERIES base replaying the given values."""
    return _timeseries_base


@pytest.fixture
def degenerate_base():
    """Factory for a stochastic base that always draws the same value."""
    return _degenerate_base


@pytest.fixture
def make_profile():
    """Factory building a CapacityProfile with flat defaults."""
    return build_profile


@pytest.fixture
def make_engine(customer, clock, calm_weather):
    """Factory building an engine around a profile."""
    def _make(profile=None, customer_profile=None, weather=None, seed=None):
        return CapacityEngine(
            customer_profile or customer,
            profile or build_profile(),
            clock,
            weather or calm_weather,
            seed=seed,
        )
    return _make
