# pycapsim/engine/engine.py

"""
Capacity engine: draws base capacity per time step and adjusts it for one
subscription.

Adjustments are multiplicative and applied in a fixed order:

1. population ratio (customers committed / population)
2. periodic skew (day of week * hour of day)
3. weather factor
4. tariff elasticity factor, skipped for capacities within 0.01 of zero

The elasticity step derives its rate ratio from the capacity left after the
first three steps, so the order cannot change.
"""

import logging
import math
from typing import Optional, Union

import numpy as np

from ..constants import NEAR_ZERO_CAPACITY
from ..exceptions import (
    CapacityError,
    ConfigurationError,
    EngineHalted,
    InvalidValue,
)
from ..interfaces.collaborators import Clock, Subscription, WeatherSource
from ..profile.structures import BaseCapacityKind, CapacityProfile, CustomerProfile
from ..utilities import truncate_to_2_decimals
from .history import CapacityHistory

logger = logging.getLogger(__name__)


class CapacityEngine:
    """
    Computes base and adjusted capacities for one customer bundle.

    Parameters
    ----------
    customer : CustomerProfile
        Population the bundle belongs to.
    profile : CapacityProfile
        Capacity configuration of the bundle.
    clock : Clock
        Simulation clock for day of week, hour of day and step instant.
    weather : WeatherSource
        Source of the current weather observation.
    seed : int or np.random.Generator, optional
        Seed for this engine's stochastic draws. When given the engine draws
        from its own Generator, so engines sharing one profile stay
        independent. Otherwise the profile's distribution Generator is used.

    Notes
    -----
    Steps must be drawn in order with no gaps, since each draw is smoothed
    with the previous step's base capacity. Any CapacityError raised while
    stepping halts the engine; later calls raise EngineHalted.

    Examples
    --------
    >>> engine = CapacityEngine(customer, profile, clock, weather)
    >>> engine.get_base_capacity(1)
    512.37
    >>> engine.use_capacity(1, subscription)
    256.18
    """

    def __init__(self, customer: CustomerProfile, profile: CapacityProfile,
                 clock: Clock, weather: WeatherSource,
                 seed: Optional[Union[int, np.random.Generator]] = None):
        self.customer = customer
        self.profile = profile
        self.clock = clock
        self.weather = weather
        self.history = CapacityHistory()
        self.fault: Optional[CapacityError] = None
        self.rng = None if seed is None else np.random.default_rng(seed)

    @property
    def name(self) -> str:
        return self.customer.name

    @property
    def halted(self) -> bool:
        return self.fault is not None

    # ==========================================================================
    # Base capacity
    # ==========================================================================

    def get_base_capacity(self, step: int) -> float:
        """
        Base capacity for a step, drawing it on first request.

        Re-reading a drawn step returns the stored value without drawing.

        Raises
        ------
        ValueError
            If step is negative or more than one past the last drawn step.
        """
        self._check_running(step)
        if step < 0:
            raise ValueError(f"Step must be non-negative, got {step}")
        if step <= self.history.last_step:
            return self.history.base[step]
        if step > self.history.last_step + 1:
            raise ValueError(
                f"{self.name}: step {step} requested but last drawn step is {self.history.last_step}"
            )
        return self.draw_base_capacity_sample(step)

    def draw_base_capacity_sample(self, step: int) -> float:
        """
        Draw, smooth, truncate and record the base capacity of a new step.

        From step 2 on the raw draw is averaged with the previous step's base
        capacity. The result is truncated toward zero to two decimals.

        Raises
        ------
        OutOfRange
            If a time series base runs out of data. Nothing is recorded.
        """
        self._check_running(step)
        if step != self.history.last_step + 1:
            raise ValueError(
                f"{self.name}: next drawable step is {self.history.last_step + 1}, got {step}"
            )
        try:
            capacity = self._draw_raw(step)
            if step > 1:
                capacity = (capacity + self.history.base[step - 1]) / 2
            capacity = truncate_to_2_decimals(capacity)
        except CapacityError as e:
            raise self._halt(e, step)
        self.history.record_base(step, capacity)
        logger.debug(f"{self.name}: base capacity for step {step} = {capacity}")
        return capacity

    def _draw_raw(self, step: int) -> float:
        base = self.profile.base
        if base.kind == BaseCapacityKind.POPULATION:
            return base.population.draw_sample(self.rng)
        if base.kind == BaseCapacityKind.INDIVIDUAL:
            return base.individual.draw_sum(self.customer.population, self.rng)
        if base.kind == BaseCapacityKind.TIMESERIES:
            return base.timeseries.sample(step)
        raise ConfigurationError(f"Unexpected base capacity kind: {base.kind}")

    # ==========================================================================
    # Adjusted capacity
    # ==========================================================================

    def use_capacity(self, step: int, subscription: Subscription) -> float:
        """
        Adjusted capacity of one subscription in a step.

        Parameters
        ----------
        step : int
            Time step, 1 or later.
        subscription : Subscription
            Subscription being served.

        Returns
        -------
        float
            Adjusted capacity truncated to two decimals, also added to the
            step's total in the history.

        Raises
        ------
        InvalidValue
            If the base or adjusted capacity is not a finite number.
        ConfigurationError
            If the population is zero or the elasticity model is unknown.
        MissingTableEntry
            If a weather table lacks the observed value.
        """
        self._check_running(step)
        if step < 1:
            raise ValueError(f"Capacity can only be used from step 1, got {step}")
        if step < self.history.open_step:
            raise ValueError(f"{self.name}: step {step} is closed, open step is {self.history.open_step}")

        base_capacity = self.get_base_capacity(step)
        try:
            if math.isnan(base_capacity):
                raise InvalidValue("Base capacity is NaN")
            logger.debug(f"{self.name}: base capacity for step {step} = {base_capacity}")

            capacity = base_capacity
            capacity = self._adjust_for_population_ratio(capacity, subscription)
            capacity = self._adjust_for_periodic_skew(capacity)
            capacity = self._adjust_for_weather(capacity)
            capacity = self._adjust_for_tariff_rates(capacity, subscription)
            if not math.isfinite(capacity):
                raise InvalidValue(f"Adjusted capacity is {capacity} for base capacity {base_capacity}")
            capacity = truncate_to_2_decimals(capacity)
        except CapacityError as e:
            raise self._halt(e, step)

        sub_name = getattr(subscription, "name", "")
        self.history.record_adjusted(step, capacity, sub_name)
        logger.info(f"{self.name}: adjusted capacity for {sub_name or 'subscription'} in step {step} = {capacity}")
        return capacity

    def population_ratio(self, subscription: Subscription) -> float:
        population = self.customer.population
        if population == 0:
            raise ConfigurationError("Population ratio undefined for zero population")
        return subscription.customers_committed() / population

    def _adjust_for_population_ratio(self, capacity: float, subscription: Subscription) -> float:
        ratio = self.population_ratio(subscription)
        logger.debug(f"{self.name}: population ratio = {ratio}")
        return capacity * ratio

    def _adjust_for_periodic_skew(self, capacity: float) -> float:
        skew = self.profile.periodic_skew(self.clock.current_day_of_week(),
                                          self.clock.current_hour_of_day())
        logger.debug(f"{self.name}: periodic skew = {skew}")
        return capacity * skew

    def _adjust_for_weather(self, capacity: float) -> float:
        table = self.profile.weather
        if not table.has_influence:
            return capacity
        observation = self.weather.current_observation()
        logger.debug(
            f"{self.name}: weather = ({observation.temperature}, {observation.wind_speed}, "
            f"{observation.wind_direction}, {observation.cloud_cover})"
        )
        weather_factor = table.factor(observation)
        logger.debug(f"{self.name}: weather factor = {weather_factor}")
        return capacity * weather_factor

    def rate_ratio(self, capacity: float, subscription: Subscription) -> float:
        """Effective per-unit charge for ``capacity`` over the hour's benchmark rate."""
        charge = subscription.usage_charge(self.clock.current_instant(), capacity,
                                           subscription.total_usage())
        rate = charge / capacity
        benchmark = self.profile.benchmark_rates[self.clock.current_hour_of_day()]
        ratio = rate / benchmark
        if not math.isfinite(ratio):
            raise InvalidValue(f"Rate ratio is {ratio} for charge {charge} on capacity {capacity}")
        return ratio

    def _adjust_for_tariff_rates(self, capacity: float, subscription: Subscription) -> float:
        if abs(capacity) < NEAR_ZERO_CAPACITY:
            logger.debug(f"{self.name}: capacity {capacity} near zero, tariff rates ignored")
            return capacity
        rate_ratio = self.rate_ratio(capacity, subscription)
        tariff_factor = self.profile.elasticity.factor(rate_ratio)
        logger.debug(f"{self.name}: rate ratio = {rate_ratio}, tariff rates factor = {tariff_factor}")
        return capacity * tariff_factor

    # ==========================================================================
    # Failure handling
    # ==========================================================================

    def _check_running(self, step: int) -> None:
        if self.fault is not None:
            raise EngineHalted(
                f"Engine halted after {type(self.fault).__name__}: {self.fault.message}",
                customer=self.name, step=step,
            ) from self.fault

    def _halt(self, error: CapacityError, step: int) -> CapacityError:
        error.with_context(customer=self.name, step=step)
        if self.fault is None:
            self.fault = error
            logger.error(f"{self.name}: {error}")
        return error
