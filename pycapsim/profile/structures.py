# pycapsim/profile/structures.py

"""
Customer and capacity profile definitions.

Profiles are immutable once built: they are validated in __post_init__ and
read by the engine for the whole simulation session.
"""

import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from ..adjustment.elasticity import (
    CapacityType,
    ElasticityModel,
    parse_capacity_type,
)
from ..adjustment.weather import WeatherInfluenceTable
from ..constants import DAYS_PER_WEEK, HOURS_PER_DAY
from ..exceptions import ConfigurationError
from ..sampling.distributions import ProbabilityDistribution
from ..sampling.timeseries import TimeSeriesSampler


class BaseCapacityKind(Enum):
    POPULATION = "POPULATION"
    INDIVIDUAL = "INDIVIDUAL"
    TIMESERIES = "TIMESERIES"


def parse_base_capacity_kind(kind: Union[BaseCapacityKind, str]) -> BaseCapacityKind:
    if isinstance(kind, BaseCapacityKind):
        return kind
    try:
        return BaseCapacityKind(str(kind).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown base capacity kind: {kind}") from None


@dataclass(frozen=True)
class CustomerProfile:
    """
    Customer population a capacity profile applies to.

    Attributes
    ----------
    name : str
        Display name, used in logs and errors.
    population : int
        Number of individuals, ``>= 0``.
    """
    name: str
    population: int

    def __post_init__(self):
        if isinstance(self.population, bool) or not isinstance(self.population, numbers.Integral):
            raise ConfigurationError(f"Population must be an integer, got {self.population!r}",
                                     customer=self.name)
        if self.population < 0:
            raise ConfigurationError(f"Population must be non-negative, got {self.population}",
                                     customer=self.name)


@dataclass(frozen=True)
class CapacityBundle:
    """Owner of a capacity profile; its type decides the stepwise tie rules."""
    name: str
    capacity_type: CapacityType = CapacityType.CONSUMPTION

    def __post_init__(self):
        object.__setattr__(self, "capacity_type", parse_capacity_type(self.capacity_type))


@dataclass(frozen=True)
class BaseCapacitySpec:
    """
    How base capacity is sampled.

    Exactly the source matching ``kind`` must be set: ``population`` for
    POPULATION (configured at aggregate scale), ``individual`` for
    INDIVIDUAL (one draw per individual) and ``timeseries`` for TIMESERIES.
    """
    kind: BaseCapacityKind
    population: Optional[ProbabilityDistribution] = None
    individual: Optional[ProbabilityDistribution] = None
    timeseries: Optional[TimeSeriesSampler] = None

    def __post_init__(self):
        kind = parse_base_capacity_kind(self.kind)
        object.__setattr__(self, "kind", kind)
        source = {
            BaseCapacityKind.POPULATION: self.population,
            BaseCapacityKind.INDIVIDUAL: self.individual,
            BaseCapacityKind.TIMESERIES: self.timeseries,
        }[kind]
        if source is None:
            raise ConfigurationError(f"{kind.value} base capacity needs a {kind.value.lower()} source")


@dataclass(frozen=True)
class CapacityProfile:
    """
    Full configuration of the capacity pipeline for one bundle.

    Attributes
    ----------
    bundle : CapacityBundle
        Owning bundle (CONSUMPTION or PRODUCTION).
    base : BaseCapacitySpec
        Base capacity sampling.
    daily_skew : tuple of float
        7 factors, Monday first.
    hourly_skew : tuple of float
        24 factors, hour 0 first.
    weather : WeatherInfluenceTable
        Weather influence; the default has no influence.
    benchmark_rates : tuple of float
        24 non-zero benchmark per-unit prices, hour 0 first.
    elasticity : ElasticityModel
        Tariff elasticity model.
    """
    bundle: CapacityBundle
    base: BaseCapacitySpec
    daily_skew: Tuple[float, ...]
    hourly_skew: Tuple[float, ...]
    benchmark_rates: Tuple[float, ...]
    elasticity: ElasticityModel
    weather: WeatherInfluenceTable = field(default_factory=WeatherInfluenceTable)

    def __post_init__(self):
        object.__setattr__(self, "daily_skew", self._float_tuple("daily_skew", DAYS_PER_WEEK))
        object.__setattr__(self, "hourly_skew", self._float_tuple("hourly_skew", HOURS_PER_DAY))
        object.__setattr__(self, "benchmark_rates", self._float_tuple("benchmark_rates", HOURS_PER_DAY))
        zero_hours = [h for h, r in enumerate(self.benchmark_rates) if r == 0.0]
        if zero_hours:
            raise ConfigurationError(f"Benchmark rates must be non-zero, zero at hours {zero_hours}")
        if not isinstance(self.elasticity, ElasticityModel):
            raise ConfigurationError(f"Unknown elasticity model: {self.elasticity!r}")
        stepwise_type = getattr(self.elasticity, "capacity_type", self.capacity_type)
        if stepwise_type != self.capacity_type:
            raise ConfigurationError(
                f"Elasticity table is for {stepwise_type.value} but bundle is {self.capacity_type.value}"
            )

    def _float_tuple(self, name: str, size: int) -> Tuple[float, ...]:
        values = getattr(self, name)
        try:
            values = tuple(float(v) for v in values)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"{name} must be numeric: {e}") from e
        if len(values) != size:
            raise ConfigurationError(f"{name} needs {size} values, got {len(values)}")
        if not all(math.isfinite(v) for v in values):
            raise ConfigurationError(f"{name} contains non-finite values")
        return values

    @property
    def capacity_type(self) -> CapacityType:
        return self.bundle.capacity_type

    def periodic_skew(self, day_of_week: int, hour_of_day: int) -> float:
        """Skew for day of week 1 (Monday) to 7 and hour of day 0 to 23."""
        if not 1 <= day_of_week <= DAYS_PER_WEEK:
            raise ValueError(f"day_of_week must be within 1..{DAYS_PER_WEEK}, got {day_of_week}")
        if not 0 <= hour_of_day < HOURS_PER_DAY:
            raise ValueError(f"hour_of_day must be within 0..{HOURS_PER_DAY - 1}, got {hour_of_day}")
        return self.daily_skew[day_of_week - 1] * self.hourly_skew[hour_of_day]
