# pycapsim/interfaces/__init__.py

"""
Collaborator interfaces consumed by the capacity engine, and simple
implementations of them.
"""

from .collaborators import Clock, Subscription, WeatherObservation, WeatherSource
from .simple import (
    FlatRateSubscription,
    SimulationClock,
    StaticWeatherSource,
    WeatherSeriesSource,
)

__all__ = [
    # Protocols
    'Clock',
    'WeatherSource',
    'Subscription',
    'WeatherObservation',
    # Implementations
    'SimulationClock',
    'StaticWeatherSource',
    'WeatherSeriesSource',
    'FlatRateSubscription',
]
