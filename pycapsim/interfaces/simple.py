# pycapsim/interfaces/simple.py

"""
In-process implementations of the engine collaborators.

These drive stand-alone runs (the command line runner) and tests; a full
market simulation supplies its own clock, weather and tariff services.
"""

from datetime import datetime
from typing import Optional, Sequence, Union

import pandas as pd

from ..constants import HOURS_PER_DAY
from .collaborators import WeatherObservation


class SimulationClock:
    """
    Clock that advances in fixed steps from a start instant.

    Parameters
    ----------
    start : datetime or str
        Instant of step 1.
    step_hours : float, optional
        Length of a time step in hours (default 1).

    Examples
    --------
    >>> clock = SimulationClock("2026-01-05 00:00")  # a Monday
    >>> clock.current_day_of_week(), clock.current_hour_of_day()
    (1, 0)
    >>> clock.advance()
    >>> clock.current_hour_of_day()
    1
    """

    def __init__(self, start: Union[datetime, str], step_hours: float = 1.0):
        self.start = pd.Timestamp(start)
        self.step_length = pd.Timedelta(hours=step_hours)
        self.step = 1

    def advance(self, steps: int = 1) -> None:
        self.step += steps

    def set_step(self, step: int) -> None:
        self.step = step

    def current_instant(self) -> datetime:
        return (self.start + (self.step - 1) * self.step_length).to_pydatetime()

    def current_day_of_week(self) -> int:
        return self.current_instant().isoweekday()

    def current_hour_of_day(self) -> int:
        return self.current_instant().hour


class StaticWeatherSource:
    """Weather source that always reports the same observation."""

    def __init__(self, observation: Optional[WeatherObservation] = None):
        self.observation = observation or WeatherObservation()

    def current_observation(self) -> WeatherObservation:
        return self.observation


class WeatherSeriesSource:
    """
    Weather source replaying one observation per step from a DataFrame.

    The DataFrame needs temperature, wind_speed, wind_direction and
    cloud_cover columns; row ``i`` is the report for step ``i + 1`` of the
    clock.
    """
    COLUMNS = ["temperature", "wind_speed", "wind_direction", "cloud_cover"]

    def __init__(self, reports: pd.DataFrame, clock: SimulationClock):
        missing = [c for c in self.COLUMNS if c not in reports.columns]
        if missing:
            raise ValueError(f"Weather reports missing columns: {missing}")
        self.reports = reports.reset_index(drop=True)
        self.clock = clock

    def current_observation(self) -> WeatherObservation:
        idx = self.clock.step - 1
        if not 0 <= idx < len(self.reports):
            raise IndexError(f"No weather report for step {self.clock.step}")
        row = self.reports.iloc[idx]
        return WeatherObservation(**{c: float(row[c]) for c in self.COLUMNS})


class FlatRateSubscription:
    """
    Subscription to a tariff with one per-unit rate per hour of day.

    Parameters
    ----------
    name : str
        Tariff name used in logs and history.
    customers : int
        Customers committed to the tariff.
    hourly_rates : sequence of float
        24 per-unit rates indexed by hour of day.
    """

    def __init__(self, name: str, customers: int, hourly_rates: Sequence[float]):
        if len(hourly_rates) != HOURS_PER_DAY:
            raise ValueError(f"hourly_rates needs {HOURS_PER_DAY} values, got {len(hourly_rates)}")
        if customers < 0:
            raise ValueError(f"customers must be non-negative, got {customers}")
        self.name = name
        self.customers = customers
        self.hourly_rates = [float(r) for r in hourly_rates]
        self.usage = 0.0

    def customers_committed(self) -> int:
        return self.customers

    def usage_charge(self, instant: datetime, quantity: float,
                     cumulative_usage: float) -> float:
        return self.hourly_rates[instant.hour] * quantity

    def total_usage(self) -> float:
        return self.usage

    def record_usage(self, quantity: float) -> None:
        self.usage += quantity
