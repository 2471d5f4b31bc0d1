# pycapsim/sampling/__init__.py

"""
Base capacity sample sources: stochastic distributions and time series replay.
"""

from .distributions import DistributionKind, ProbabilityDistribution, parse_distribution_kind
from .timeseries import TimeSeriesSampler

__all__ = [
    'DistributionKind',
    'ProbabilityDistribution',
    'parse_distribution_kind',
    'TimeSeriesSampler',
]
