# pycapsim/sampling/distributions.py

"""
Probability distributions used for stochastic base capacity draws.

A distribution is configured once from a kind and a parameter mapping and then
sampled with its own numpy Generator, so that a run can be reproduced from the
configuration plus the seed.
"""

from enum import Enum
from typing import Dict, Optional, Union

import numpy as np

from ..exceptions import ConfigurationError


class DistributionKind(Enum):
    DEGENERATE = "DEGENERATE"
    UNIFORM = "UNIFORM"
    NORMAL = "NORMAL"
    INTERVAL = "INTERVAL"
    LOGNORMAL = "LOGNORMAL"
    POISSON = "POISSON"
    BINOMIAL = "BINOMIAL"
    EXPONENTIAL = "EXPONENTIAL"


# Required parameter names per kind
REQUIRED_PARAMS = {
    DistributionKind.DEGENERATE: ("value",),
    DistributionKind.UNIFORM: ("low", "high"),
    DistributionKind.NORMAL: ("mean", "std_dev"),
    DistributionKind.INTERVAL: ("mean", "std_dev", "low", "high"),
    DistributionKind.LOGNORMAL: ("mean", "std_dev"),
    DistributionKind.POISSON: ("lambda",),
    DistributionKind.BINOMIAL: ("trials", "success"),
    DistributionKind.EXPONENTIAL: ("mean",),
}


class ProbabilityDistribution:
    """
    Stochastic draw source for base capacities.

    Parameters
    ----------
    kind : DistributionKind or str
        Distribution family. Strings are matched case-insensitively.
    params : dict
        Family parameters, see ``REQUIRED_PARAMS``.
    seed : int or np.random.Generator, optional
        Seed (or ready Generator) for the draws.

    Raises
    ------
    ConfigurationError
        If the kind is unknown or a parameter is missing or out of range.

    Examples
    --------
    >>> dist = ProbabilityDistribution("NORMAL", {"mean": 10, "std_dev": 0}, seed=1)
    >>> dist.draw_sample()
    10.0
    """

    def __init__(self, kind: Union[DistributionKind, str], params: Dict[str, float],
                 seed: Optional[Union[int, np.random.Generator]] = None):
        self.kind = parse_distribution_kind(kind)
        self.params = self._read_params(params)
        self._validate_parameters()
        self.rng = np.random.default_rng(seed)

    def _read_params(self, params: Dict[str, float]) -> Dict[str, float]:
        missing = [p for p in REQUIRED_PARAMS[self.kind] if p not in params]
        if missing:
            raise ConfigurationError(
                f"{self.kind.value} distribution missing parameters: {missing}"
            )
        try:
            return {p: float(params[p]) for p in REQUIRED_PARAMS[self.kind]}
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"{self.kind.value} distribution has non-numeric parameters: {e}"
            ) from e

    def _validate_parameters(self) -> None:
        p = self.params
        if self.kind in (DistributionKind.UNIFORM, DistributionKind.INTERVAL):
            if p["low"] > p["high"]:
                raise ConfigurationError(
                    f"{self.kind.value} distribution needs low <= high, got {p['low']} > {p['high']}"
                )
        if "std_dev" in p and p["std_dev"] < 0:
            raise ConfigurationError(f"std_dev must be non-negative, got {p['std_dev']}")
        if self.kind == DistributionKind.POISSON and p["lambda"] < 0:
            raise ConfigurationError(f"lambda must be non-negative, got {p['lambda']}")
        if self.kind == DistributionKind.BINOMIAL:
            if p["trials"] < 0 or p["trials"] != int(p["trials"]):
                raise ConfigurationError(f"trials must be a non-negative integer, got {p['trials']}")
            if not 0.0 <= p["success"] <= 1.0:
                raise ConfigurationError(f"success must be within [0, 1], got {p['success']}")
        if self.kind == DistributionKind.EXPONENTIAL and p["mean"] <= 0:
            raise ConfigurationError(f"mean must be positive, got {p['mean']}")

    def _sample(self, size: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        p = self.params
        kind = self.kind
        rng = self.rng if rng is None else rng
        if kind == DistributionKind.DEGENERATE:
            return np.full(size, p["value"])
        if kind == DistributionKind.UNIFORM:
            return rng.uniform(p["low"], p["high"], size)
        if kind == DistributionKind.NORMAL:
            return rng.normal(p["mean"], p["std_dev"], size)
        if kind == DistributionKind.INTERVAL:
            return np.clip(rng.normal(p["mean"], p["std_dev"], size), p["low"], p["high"])
        if kind == DistributionKind.LOGNORMAL:
            return rng.lognormal(p["mean"], p["std_dev"], size)
        if kind == DistributionKind.POISSON:
            return rng.poisson(p["lambda"], size).astype(float)
        if kind == DistributionKind.BINOMIAL:
            return rng.binomial(int(p["trials"]), p["success"], size).astype(float)
        return rng.exponential(p["mean"], size)

    def draw_sample(self, rng: Optional[np.random.Generator] = None) -> float:
        """Draw one value, from ``rng`` when given instead of the own Generator."""
        return float(self._sample(1, rng)[0])

    def draw_sum(self, n: int, rng: Optional[np.random.Generator] = None) -> float:
        """
        Sum of ``n`` independent draws.

        Parameters
        ----------
        n : int
            Number of draws, typically the population size.
        rng : np.random.Generator, optional
            Generator to draw from instead of the distribution's own.

        Returns
        -------
        float
            Sum of the draws, 0.0 when ``n`` is 0.
        """
        if n < 0:
            raise ValueError(f"Number of draws must be non-negative, got {n}")
        if n == 0:
            return 0.0
        return float(np.sum(self._sample(n, rng)))

    def __repr__(self):
        return f"ProbabilityDistribution({self.kind.value}, {self.params})"


def parse_distribution_kind(kind: Union[DistributionKind, str]) -> DistributionKind:
    if isinstance(kind, DistributionKind):
        return kind
    try:
        return DistributionKind(str(kind).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown distribution kind: {kind}") from None
