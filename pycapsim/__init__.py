# pycapsim/__init__.py

"""
Factored customer capacity simulation (PyCapSim).

Models how much energy a customer population draws or produces in each time
step of a simulated energy market, and how that base capacity is adjusted
by population coverage, periodic skew, weather and price elasticity.

Main Components
---------------
CapacityEngine : class
    Draws base capacity per step and computes adjusted capacity per subscription.
CapacityProfile : dataclass
    Immutable configuration of the capacity pipeline for one bundle.
load_profile : function
    Builds profiles from a YAML file.

Subpackages
-----------
sampling : Stochastic distributions and time series replay
adjustment : Weather influence and tariff elasticity models
profile : Profile definitions and YAML loader
interfaces : Clock, weather and subscription collaborators
engine : Capacity engine and history

Example
-------
>>> from pycapsim import CapacityEngine, load_profile
>>> from pycapsim.interfaces import SimulationClock, StaticWeatherSource
>>> customer, profile = load_profile('village.yaml', seed=7)
>>> engine = CapacityEngine(customer, profile, SimulationClock('2026-01-05'), StaticWeatherSource())
>>> engine.get_base_capacity(1)
"""

from .engine import CapacityEngine, CapacityHistory
from .profile import CapacityProfile, CustomerProfile, load_profile, profile_from_dict
from .exceptions import (
    CapacityError,
    ConfigurationError,
    EngineHalted,
    InvalidValue,
    MissingTableEntry,
    OutOfRange,
)

__all__ = [
    # Core classes
    'CapacityEngine',
    'CapacityHistory',
    'CapacityProfile',
    'CustomerProfile',
    # Loading
    'load_profile',
    'profile_from_dict',
    # Errors
    'CapacityError',
    'ConfigurationError',
    'OutOfRange',
    'InvalidValue',
    'MissingTableEntry',
    'EngineHalted',
]

__version__ = '0.1.0'
