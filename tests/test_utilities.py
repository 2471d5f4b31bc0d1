# tests/test_utilities.py

import math
import pytest

from pycapsim.exceptions import InvalidValue
from pycapsim.utilities import round_half_up, truncate_to_2_decimals


class TestTruncate:
    """Truncation toward zero to two decimals."""

    @pytest.mark.parametrize("value, expected", [
        (2.567, 2.56),
        (-2.567, -2.56),
        (2.999, 2.99),
        (-0.009, 0.0),
        (0.0, 0.0),
        (1234.5, 1234.5),
    ])
    def test_truncates_toward_zero(self, value, expected):
        assert truncate_to_2_decimals(value) == expected

    @pytest.mark.parametrize("value", [0.29, 1.29, 0.57, 100.07, -0.29, -4.35, 17.0])
    def test_two_decimal_values_unchanged(self, value):
        """Already truncated values come back unchanged."""
        assert truncate_to_2_decimals(value) == value
        assert truncate_to_2_decimals(truncate_to_2_decimals(value)) == value

    def test_never_rounds_up_in_magnitude(self):
        for value in [0.129, 5.555, 99.999, -0.129, -5.555, -99.999]:
            assert abs(truncate_to_2_decimals(value)) <= abs(value)

    def test_no_negative_zero(self):
        result = truncate_to_2_decimals(-0.001)
        assert result == 0.0
        assert math.copysign(1.0, result) == 1.0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_raises(self, value):
        with pytest.raises(InvalidValue):
            truncate_to_2_decimals(value)


    @pytest.mark.parametrize("value", [1e27, -1e27, 2.0 ** 52 + 1, 1.7e308])
    def test_large_values_unchanged(self, value):
        """Floats this large have no fractional part to cut."""
        assert truncate_to_2_decimals(value) == value

    def test_large_value_below_integral_range(self):
        assert truncate_to_2_decimals(123456789012.345) == 123456789012.34


class TestRoundHalfUp:

    @pytest.mark.parametrize("value, expected", [
        (20.4, 20), (20.5, 21), (21.6, 22), (-0.5, 0), (-0.6, -1), (-2.5, -2), (0.0, 0),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_raises(self, value):
        with pytest.raises(InvalidValue):
            round_half_up(value)
