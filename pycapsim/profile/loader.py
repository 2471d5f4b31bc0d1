# pycapsim/profile/loader.py

"""
Builds customer and capacity profiles from YAML configuration.

Usage:
	from pycapsim.profile.loader import load_profile
	customer, profile = load_profile("village.yaml", seed=7)
"""

import os
from typing import Any, Dict, Optional, Tuple

import yaml

from ..adjustment.elasticity import (
    ContinuousElasticity,
    ElasticityKind,
    ElasticityModel,
    StepwiseElasticity,
    CapacityType,
    parse_breakpoint_map,
    parse_elasticity_kind,
    parse_range,
)
from ..adjustment.weather import WeatherInfluenceTable
from ..exceptions import ConfigurationError
from ..sampling.distributions import ProbabilityDistribution
from ..sampling.timeseries import TimeSeriesSampler
from .structures import (
    BaseCapacityKind,
    BaseCapacitySpec,
    CapacityBundle,
    CapacityProfile,
    CustomerProfile,
    parse_base_capacity_kind,
)

WEATHER_CHANNELS = ("temperature", "wind_speed", "wind_direction", "cloud_cover")


def _section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = config.get(key)
    if value is None:
        raise ConfigurationError(f"Missing '{key}' section")
    if not isinstance(value, dict):
        raise ConfigurationError(f"Section '{key}' must be a mapping")
    return value


def _required(section: Dict[str, Any], key: str, where: str) -> Any:
    if key not in section:
        raise ConfigurationError(f"Missing '{key}' in {where}")
    return section[key]


def build_distribution(config: Dict[str, Any], seed=None) -> ProbabilityDistribution:
    params = {k: v for k, v in config.items() if k != "kind"}
    return ProbabilityDistribution(_required(config, "kind", "distribution"), params, seed=seed)


def build_base_capacity(config: Dict[str, Any], seed=None,
                        base_dir: Optional[str] = None) -> BaseCapacitySpec:
    kind = parse_base_capacity_kind(_required(config, "kind", "base"))
    if kind == BaseCapacityKind.TIMESERIES:
        ts = _section(config, "timeseries")
        if "values" in ts:
            sampler = TimeSeriesSampler(ts["values"], name=ts.get("name", ""))
        elif "csv" in ts:
            path = ts["csv"]
            if base_dir and not os.path.isabs(path):
                path = os.path.join(base_dir, path)
            if not os.path.exists(path):
                raise ConfigurationError(f"Time series file not found: {path}")
            sampler = TimeSeriesSampler.from_csv(path, column=ts.get("column", "VALUE"),
                                                 name=ts.get("name", ""))
        else:
            raise ConfigurationError("Time series base needs 'values' or 'csv'")
        return BaseCapacitySpec(kind, timeseries=sampler)

    distribution = build_distribution(_section(config, "distribution"), seed=seed)
    if kind == BaseCapacityKind.POPULATION:
        return BaseCapacitySpec(kind, population=distribution)
    return BaseCapacitySpec(kind, individual=distribution)


def build_weather(config: Optional[Dict[str, Any]]) -> WeatherInfluenceTable:
    if not config:
        return WeatherInfluenceTable()
    unknown = set(config) - set(WEATHER_CHANNELS)
    if unknown:
        raise ConfigurationError(f"Unknown weather channels: {sorted(unknown)}")
    kwargs = {}
    for channel in WEATHER_CHANNELS:
        entry = config.get(channel) or {}
        kwargs[f"{channel}_influence"] = entry.get("influence", "NONE")
        kwargs[f"{channel}_map"] = entry.get("map", {})
        if channel == "temperature" and "reference" in entry:
            try:
                kwargs["temperature_reference"] = float(entry["reference"])
            except (TypeError, ValueError):
                raise ConfigurationError(f"Reference temperature {entry['reference']!r} is not numeric") from None
    return WeatherInfluenceTable(**kwargs)


def build_elasticity(config: Dict[str, Any], capacity_type: CapacityType) -> ElasticityModel:
    """
    Build an elasticity model.

    CONTINUOUS takes ``ratio`` and ``range`` (``"low~high"`` or a
    ``[low, high]`` list). STEPWISE takes ``map`` (``"ratio:factor, ..."`` or a
    list of pairs).
    """
    kind = parse_elasticity_kind(_required(config, "kind", "elasticity"))
    if kind == ElasticityKind.CONTINUOUS:
        band = _required(config, "range", "elasticity")
        if isinstance(band, str):
            low, high = parse_range(band)
        else:
            try:
                low, high = band
            except (TypeError, ValueError):
                raise ConfigurationError(f"Elasticity range {band!r} is not [low, high]") from None
        try:
            ratio = float(_required(config, "ratio", "elasticity"))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Elasticity ratio is not numeric: {e}") from e
        return ContinuousElasticity(ratio, low, high)

    table = config.get("map", [])
    breakpoints = parse_breakpoint_map(table) if isinstance(table, str) else table
    return StepwiseElasticity(breakpoints, capacity_type)


def profile_from_dict(config: Dict[str, Any], seed=None,
                      base_dir: Optional[str] = None) -> Tuple[CustomerProfile, CapacityProfile]:
    """
    Build profiles from a parsed configuration mapping.

    Parameters
    ----------
    config : dict
        Mapping with ``customer``, ``bundle`` and ``capacity`` sections.
    seed : int, optional
        Seed for the stochastic draw source.
    base_dir : str, optional
        Directory relative time series paths are resolved against.

    Returns
    -------
    tuple
        (CustomerProfile, CapacityProfile)

    Raises
    ------
    ConfigurationError
        If any section or field is missing or invalid.
    """
    if not isinstance(config, dict):
        raise ConfigurationError("Profile configuration must be a mapping")
    customer_cfg = _section(config, "customer")
    customer = CustomerProfile(
        name=str(_required(customer_cfg, "name", "customer")),
        population=_required(customer_cfg, "population", "customer"),
    )
    bundle_cfg = config.get("bundle") or {}
    bundle = CapacityBundle(
        name=str(bundle_cfg.get("name", customer.name)),
        capacity_type=bundle_cfg.get("type", "CONSUMPTION"),
    )

    capacity_cfg = _section(config, "capacity")
    try:
        return customer, CapacityProfile(
            bundle=bundle,
            base=build_base_capacity(_section(capacity_cfg, "base"), seed=seed, base_dir=base_dir),
            daily_skew=_required(capacity_cfg, "daily_skew", "capacity"),
            hourly_skew=_required(capacity_cfg, "hourly_skew", "capacity"),
            benchmark_rates=_required(capacity_cfg, "benchmark_rates", "capacity"),
            elasticity=build_elasticity(_section(capacity_cfg, "elasticity"), bundle.capacity_type),
            weather=build_weather(capacity_cfg.get("weather")),
        )
    except ConfigurationError as e:
        raise e.with_context(customer=customer.name)


def load_profile(path: str, seed=None) -> Tuple[CustomerProfile, CapacityProfile]:
    """Load profiles from a YAML file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Profile config file not found: {path}")
    with open(path, "r") as f:
        config = yaml.safe_load(f)
    return profile_from_dict(config, seed=seed, base_dir=os.path.dirname(os.path.abspath(path)))
