# pycapsim/adjustment/weather.py

"""
Weather influence on capacity.

Each weather channel (temperature, wind speed, wind direction, cloud cover)
has an influence kind and a lookup table keyed by the integer-rounded
observation. The channel factors multiply into a single weather factor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Union

from ..exceptions import ConfigurationError, MissingTableEntry
from ..utilities import round_half_up


class InfluenceKind(Enum):
    NONE = "NONE"
    DIRECT = "DIRECT"
    DEVIATION = "DEVIATION"


def parse_influence_kind(kind: Union[InfluenceKind, str, None]) -> InfluenceKind:
    if kind is None:
        return InfluenceKind.NONE
    if isinstance(kind, InfluenceKind):
        return kind
    try:
        return InfluenceKind(str(kind).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown weather influence kind: {kind}") from None


def _int_keyed(table: Optional[Mapping], name: str) -> Dict[int, float]:
    if not table:
        return {}
    try:
        return {int(k): float(v) for k, v in table.items()}
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid {name} table: {e}") from e


@dataclass(frozen=True)
class WeatherInfluenceTable:
    """
    Maps a weather observation to a multiplicative capacity factor.

    Attributes
    ----------
    temperature_influence, wind_speed_influence, wind_direction_influence,
    cloud_cover_influence : InfluenceKind
        Influence kind per channel. DEVIATION only applies to temperature.
    temperature_map, wind_speed_map, wind_direction_map, cloud_cover_map : dict
        Factor per integer-rounded observation.
    temperature_reference : float, optional
        Reference temperature, required for DEVIATION temperature influence.

    Notes
    -----
    Observations are rounded half-up before lookup. A missing key is a
    configuration defect and raises MissingTableEntry.
    """
    temperature_influence: InfluenceKind = InfluenceKind.NONE
    wind_speed_influence: InfluenceKind = InfluenceKind.NONE
    wind_direction_influence: InfluenceKind = InfluenceKind.NONE
    cloud_cover_influence: InfluenceKind = InfluenceKind.NONE
    temperature_map: Dict[int, float] = field(default_factory=dict)
    wind_speed_map: Dict[int, float] = field(default_factory=dict)
    wind_direction_map: Dict[int, float] = field(default_factory=dict)
    cloud_cover_map: Dict[int, float] = field(default_factory=dict)
    temperature_reference: Optional[float] = None

    def __post_init__(self):
        # frozen: normalize through object.__setattr__
        for channel in ("temperature", "wind_speed", "wind_direction", "cloud_cover"):
            kind = parse_influence_kind(getattr(self, f"{channel}_influence"))
            object.__setattr__(self, f"{channel}_influence", kind)
            table = _int_keyed(getattr(self, f"{channel}_map"), channel)
            object.__setattr__(self, f"{channel}_map", table)
            if kind == InfluenceKind.DEVIATION and channel != "temperature":
                raise ConfigurationError(
                    f"DEVIATION influence is only supported for temperature, not {channel}"
                )
        if (self.temperature_influence == InfluenceKind.DEVIATION
                and self.temperature_reference is None):
            raise ConfigurationError("DEVIATION temperature influence needs a reference temperature")

    @staticmethod
    def _lookup(table: Dict[int, float], key: int, name: str) -> float:
        try:
            return table[key]
        except KeyError:
            raise MissingTableEntry(name, key) from None

    def temperature_deviation(self, temperature: float) -> float:
        """
        Cumulative deviation factor between the reference and current temperature.

        Starts at 1.0 and adds the table entry of every integer temperature in
        (ref, curr] when warmer than the reference, or in [curr, ref) when
        colder. Equal temperatures give 1.0.
        """
        ref = round_half_up(self.temperature_reference)
        curr = round_half_up(temperature)
        deviation = 1.0
        if curr > ref:
            for t in range(ref + 1, curr + 1):
                deviation += self._lookup(self.temperature_map, t, "temperature")
        elif curr < ref:
            for t in range(curr, ref):
                deviation += self._lookup(self.temperature_map, t, "temperature")
        return deviation

    def factor(self, observation) -> float:
        """
        Weather factor for an observation.

        Parameters
        ----------
        observation : WeatherObservation
            Object with temperature, wind_speed, wind_direction and
            cloud_cover attributes.

        Returns
        -------
        float
            Product of the channel factors, 1.0 when no channel has influence.
        """
        weather_factor = 1.0
        if self.temperature_influence == InfluenceKind.DIRECT:
            temperature = round_half_up(observation.temperature)
            weather_factor *= self._lookup(self.temperature_map, temperature, "temperature")
        elif self.temperature_influence == InfluenceKind.DEVIATION:
            weather_factor *= self.temperature_deviation(observation.temperature)

        if self.wind_speed_influence == InfluenceKind.DIRECT:
            wind_speed = round_half_up(observation.wind_speed)
            weather_factor *= self._lookup(self.wind_speed_map, wind_speed, "wind_speed")
            # direction only matters when there is wind
            if wind_speed > 0 and self.wind_direction_influence == InfluenceKind.DIRECT:
                wind_direction = round_half_up(observation.wind_direction)
                weather_factor *= self._lookup(self.wind_direction_map, wind_direction, "wind_direction")

        if self.cloud_cover_influence == InfluenceKind.DIRECT:
            cloud_cover = round_half_up(observation.cloud_cover)
            weather_factor *= self._lookup(self.cloud_cover_map, cloud_cover, "cloud_cover")
        return weather_factor

    @property
    def has_influence(self) -> bool:
        return any(
            getattr(self, f"{c}_influence") != InfluenceKind.NONE
            for c in ("temperature", "wind_speed", "wind_direction", "cloud_cover")
        )
