# tests/test_adjustment/test_weather.py

"""
Tests for WeatherInfluenceTable.

Tests cover:
- No influence
- DIRECT lookups per channel, with half-up rounding
- DEVIATION accumulation above, below and at the reference
- Wind direction only applying with wind
- Missing table entries and invalid configuration
"""

import pytest

from pycapsim.adjustment import InfluenceKind, WeatherInfluenceTable
from pycapsim.exceptions import ConfigurationError, InvalidValue, MissingTableEntry
from pycapsim.interfaces import WeatherObservation


def observe(temperature=20.0, wind_speed=0.0, wind_direction=0.0, cloud_cover=0.0):
    return WeatherObservation(temperature, wind_speed, wind_direction, cloud_cover)


class TestNoInfluence:

    def test_factor_is_one(self):
        table = WeatherInfluenceTable()
        assert table.factor(observe(35.0, 10.0, 90.0, 1.0)) == 1.0
        assert not table.has_influence

    def test_kinds_parsed_from_strings(self):
        table = WeatherInfluenceTable(temperature_influence="direct", temperature_map={"20": "1.1"})
        assert table.temperature_influence == InfluenceKind.DIRECT
        assert table.temperature_map == {20: 1.1}
        assert table.has_influence


class TestDirect:

    def test_temperature_lookup_rounds(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DIRECT,
                                      temperature_map={22: 1.2})
        assert table.factor(observe(temperature=21.6)) == 1.2

    def test_half_rounds_up(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DIRECT,
                                      temperature_map={21: 1.5, 20: 0.5})
        assert table.factor(observe(temperature=20.5)) == 1.5

    def test_cloud_cover(self):
        table = WeatherInfluenceTable(cloud_cover_influence=InfluenceKind.DIRECT,
                                      cloud_cover_map={1: 0.8})
        assert table.factor(observe(cloud_cover=0.7)) == 0.8

    def test_channels_multiply(self):
        table = WeatherInfluenceTable(
            temperature_influence=InfluenceKind.DIRECT, temperature_map={20: 2.0},
            cloud_cover_influence=InfluenceKind.DIRECT, cloud_cover_map={0: 0.25},
        )
        assert table.factor(observe()) == 0.5


class TestWind:

    @pytest.fixture
    def windy_table(self):
        return WeatherInfluenceTable(
            wind_speed_influence=InfluenceKind.DIRECT,
            wind_speed_map={0: 1.0, 3: 1.5},
            wind_direction_influence=InfluenceKind.DIRECT,
            wind_direction_map={90: 2.0},
        )

    def test_direction_applies_with_wind(self, windy_table):
        assert windy_table.factor(observe(wind_speed=3.2, wind_direction=90.4)) == 3.0

    def test_direction_ignored_without_wind(self, windy_table):
        # 0.4 rounds to 0, the direction table is not consulted
        assert windy_table.factor(observe(wind_speed=0.4, wind_direction=45.0)) == 1.0

    def test_direction_ignored_without_speed_influence(self):
        table = WeatherInfluenceTable(wind_direction_influence=InfluenceKind.DIRECT,
                                      wind_direction_map={90: 2.0})
        assert table.factor(observe(wind_speed=5.0, wind_direction=90.0)) == 1.0


class TestDeviation:

    def test_warmer_than_reference(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DEVIATION,
                                      temperature_map={21: 0.1, 22: 0.2},
                                      temperature_reference=20.0)
        assert table.temperature_deviation(22.0) == pytest.approx(1.3)
        assert table.factor(observe(temperature=22.0)) == pytest.approx(1.3)

    def test_colder_than_reference(self):
        # [curr, ref) = 18, 19
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DEVIATION,
                                      temperature_map={18: 0.05, 19: 0.1, 20: 9.0},
                                      temperature_reference=20.0)
        assert table.factor(observe(temperature=18.0)) == pytest.approx(1.15)

    def test_at_reference(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DEVIATION,
                                      temperature_reference=19.6)
        assert table.factor(observe(temperature=20.4)) == 1.0

    def test_missing_reference_raises(self):
        with pytest.raises(ConfigurationError, match="reference temperature"):
            WeatherInfluenceTable(temperature_influence=InfluenceKind.DEVIATION)

    def test_deviation_on_other_channel_raises(self):
        with pytest.raises(ConfigurationError, match="only supported for temperature"):
            WeatherInfluenceTable(wind_speed_influence=InfluenceKind.DEVIATION)


class TestMissingEntries:

    def test_direct_miss_raises(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DIRECT,
                                      temperature_map={20: 1.0})
        with pytest.raises(MissingTableEntry) as e:
            table.factor(observe(temperature=25.0))
        assert e.value.table == "temperature"
        assert e.value.key == 25

    def test_deviation_miss_raises(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DEVIATION,
                                      temperature_map={21: 0.1},
                                      temperature_reference=20.0)
        with pytest.raises(MissingTableEntry):
            table.factor(observe(temperature=22.0))

    def test_unknown_kind_raises(self):
        with pytest.raises(ConfigurationError, match="Unknown weather influence kind"):
            WeatherInfluenceTable(cloud_cover_influence="SOMETIMES")


class TestNonFiniteObservations:

    def test_nan_temperature_raises(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DIRECT,
                                      temperature_map={20: 1.0})
        with pytest.raises(InvalidValue):
            table.factor(observe(temperature=float("nan")))

    def test_infinite_cloud_cover_raises(self):
        table = WeatherInfluenceTable(cloud_cover_influence=InfluenceKind.DIRECT,
                                      cloud_cover_map={0: 1.0})
        with pytest.raises(InvalidValue):
            table.factor(observe(cloud_cover=float("inf")))

    def test_ignored_channel_not_checked(self):
        table = WeatherInfluenceTable(temperature_influence=InfluenceKind.DIRECT,
                                      temperature_map={20: 1.0})
        assert table.factor(observe(temperature=20.0, cloud_cover=float("nan"))) == 1.0
