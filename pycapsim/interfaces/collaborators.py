# pycapsim/interfaces/collaborators.py

"""
Interfaces of the collaborators the capacity engine consumes.

The engine never resolves these from a registry; they are passed in at
construction (clock, weather) or per call (subscription).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class WeatherObservation:
    """
    One weather report.

    Attributes
    ----------
    temperature : float
        Degrees Celsius.
    wind_speed : float
        Metres per second.
    wind_direction : float
        Degrees.
    cloud_cover : float
        Cloud cover as configured by the weather tables.
    """
    temperature: float = 0.0
    wind_speed: float = 0.0
    wind_direction: float = 0.0
    cloud_cover: float = 0.0


@runtime_checkable
class Clock(Protocol):
    def current_day_of_week(self) -> int:
        """Day of week, 1 (Monday) to 7 (Sunday)."""
        ...

    def current_hour_of_day(self) -> int:
        """Hour of day, 0 to 23."""
        ...

    def current_instant(self) -> datetime:
        """Start instant of the current time step."""
        ...


@runtime_checkable
class WeatherSource(Protocol):
    def current_observation(self) -> WeatherObservation:
        ...


@runtime_checkable
class Subscription(Protocol):
    name: str

    def customers_committed(self) -> int:
        ...

    def usage_charge(self, instant: datetime, quantity: float,
                     cumulative_usage: float) -> float:
        """Charge for using ``quantity`` at ``instant`` given usage so far."""
        ...

    def total_usage(self) -> float:
        ...
