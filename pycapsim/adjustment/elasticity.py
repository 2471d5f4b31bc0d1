# pycapsim/adjustment/elasticity.py

"""
Tariff elasticity models.

A model turns a rate ratio (effective price paid over the benchmark price for
the same hour) into a capacity multiplier. Two models exist:

- ContinuousElasticity: linear response to the percent price change, clamped
  to a configured band.
- StepwiseElasticity: a table of (rate ratio, capacity factor) breakpoints,
  answered with the nearest bracketing breakpoint.
"""

import bisect
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Tuple, Union

from ..constants import PARITY_BAND, PERCENT_STEP
from ..exceptions import ConfigurationError, InvalidValue


class ElasticityKind(Enum):
    CONTINUOUS = "CONTINUOUS"
    STEPWISE = "STEPWISE"


class CapacityType(Enum):
    CONSUMPTION = "CONSUMPTION"
    PRODUCTION = "PRODUCTION"


def parse_elasticity_kind(kind: Union[ElasticityKind, str]) -> ElasticityKind:
    if isinstance(kind, ElasticityKind):
        return kind
    try:
        return ElasticityKind(str(kind).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown elasticity model kind: {kind}") from None


def parse_capacity_type(kind: Union[CapacityType, str]) -> CapacityType:
    if isinstance(kind, CapacityType):
        return kind
    try:
        return CapacityType(str(kind).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown capacity type: {kind}") from None


def _check_rate_ratio(rate_ratio: float) -> None:
    if not math.isfinite(rate_ratio):
        raise InvalidValue(f"Rate ratio is {rate_ratio}")


class ElasticityModel(ABC):
    kind: ElasticityKind

    @abstractmethod
    def factor(self, rate_ratio: float) -> float:
        """Capacity multiplier for a rate ratio."""
        pass


class ContinuousElasticity(ElasticityModel):
    """
    Linear clamped elasticity.

    ``factor = clamp(low, high, 1 + percent_change * ratio)`` where
    ``percent_change = (rate_ratio - 1) / 0.01``.

    Parameters
    ----------
    ratio : float
        Capacity change per percent of price change.
    low, high : float
        Clamp band, ``low <= high``.
    """
    kind = ElasticityKind.CONTINUOUS

    def __init__(self, ratio: float, low: float, high: float):
        try:
            self.ratio = float(ratio)
            self.low = float(low)
            self.high = float(high)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Continuous elasticity parameters must be numeric: {e}") from e
        if self.low > self.high:
            raise ConfigurationError(
                f"Continuous elasticity range needs low <= high, got {self.low}~{self.high}"
            )

    def factor(self, rate_ratio: float) -> float:
        _check_rate_ratio(rate_ratio)
        percent_change = (rate_ratio - 1.0) / PERCENT_STEP
        return max(self.low, min(self.high, 1.0 + percent_change * self.ratio))

    def __repr__(self):
        return f"ContinuousElasticity(ratio={self.ratio}, range={self.low}~{self.high})"


class StepwiseElasticity(ElasticityModel):
    """
    Stepwise elasticity table.

    Breakpoints are sorted once at construction. For a rate ratio the tightest
    bracketing breakpoints are found: the largest breakpoint at or below the
    ratio and the smallest at or above it, each defaulting to a factor of 1.0
    when absent. Below parity the factor of the upper breakpoint is used, at
    or above parity the factor of the lower one.

    Parameters
    ----------
    breakpoints : iterable of (float, float)
        (rate ratio, capacity factor) pairs in any order. For duplicate rate
        ratios the first pair is kept.
    capacity_type : CapacityType or str
        Type of the owning bundle. Consumers ignore price drops and producers
        ignore price rises.
    """
    kind = ElasticityKind.STEPWISE

    def __init__(self, breakpoints: Iterable[Tuple[float, float]],
                 capacity_type: Union[CapacityType, str]):
        self.capacity_type = parse_capacity_type(capacity_type)
        table = {}
        for pair in breakpoints:
            try:
                ratio, capacity_factor = (float(v) for v in pair)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid elasticity breakpoint {pair!r}: {e}") from e
            table.setdefault(ratio, capacity_factor)
        self.ratios: List[float] = sorted(table)
        self.factors: List[float] = [table[r] for r in self.ratios]

    def factor(self, rate_ratio: float) -> float:
        _check_rate_ratio(rate_ratio)
        if abs(rate_ratio - 1) < PARITY_BAND or not self.ratios:
            return 1.0
        if self.capacity_type == CapacityType.CONSUMPTION and rate_ratio < 1.0:
            return 1.0
        if self.capacity_type == CapacityType.PRODUCTION and rate_ratio > 1.0:
            return 1.0

        lower = bisect.bisect_right(self.ratios, rate_ratio) - 1
        upper = bisect.bisect_left(self.ratios, rate_ratio)
        lower_factor = self.factors[lower] if lower >= 0 else 1.0
        upper_factor = self.factors[upper] if upper < len(self.ratios) else 1.0
        return upper_factor if rate_ratio < 1 else lower_factor

    @property
    def breakpoints(self) -> List[Tuple[float, float]]:
        return list(zip(self.ratios, self.factors))

    def __repr__(self):
        return f"StepwiseElasticity({self.breakpoints}, {self.capacity_type.value})"


def parse_breakpoint_map(text: str) -> List[Tuple[float, float]]:
    """
    Parse a stepwise table written as ``"ratio:factor, ratio:factor"``.

    Examples
    --------
    >>> parse_breakpoint_map("0.5:1.2, 2.0:0.8")
    [(0.5, 1.2), (2.0, 0.8)]
    """
    pairs = []
    for item in str(text).split(","):
        item = item.strip()
        if not item:
            continue
        parts = item.split(":")
        if len(parts) != 2:
            raise ConfigurationError(f"Elasticity map entry '{item}' is not ratio:factor")
        try:
            pairs.append((float(parts[0]), float(parts[1])))
        except ValueError:
            raise ConfigurationError(f"Elasticity map entry '{item}' is not numeric") from None
    return pairs


def parse_range(text: str) -> Tuple[float, float]:
    """Parse a clamp band written as ``"low~high"``."""
    parts = str(text).split("~")
    if len(parts) != 2:
        raise ConfigurationError(f"Elasticity range '{text}' is not low~high")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise ConfigurationError(f"Elasticity range '{text}' is not numeric") from None
