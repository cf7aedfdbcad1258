"""
Unit tests for huma.utils.rounding module.
"""
import pytest
from huma.utils.rounding import round_half_up, percent


class TestRoundHalfUp:
    """Test round_half_up function."""

    @pytest.mark.parametrize("value,digits,expected", [
        (2.5, 0, 3.0),
        (3.5, 0, 4.0),
        (6.45, 1, 6.5),
        (6.5, 1, 6.5),
        (6.44, 1, 6.4),
        (7, 1, 7.0),
    ])
    def test_halves_round_up(self, value, digits, expected):
        """Test that halves round away from zero."""
        assert round_half_up(value, digits) == expected

    def test_returns_float(self):
        """Test that the result is always a float."""
        assert isinstance(round_half_up(70, 1), float)


class TestPercent:
    """Test percent function."""

    def test_zero_total(self):
        """Test that a zero total gives 0 percent."""
        assert percent(0, 0) == 0
        assert percent(3, 0) == 0

    def test_exact(self):
        """Test an exact percentage."""
        assert percent(1, 4) == 25

    def test_half_rounds_up(self):
        """1/8 is 12.5% and rounds to 13."""
        assert percent(1, 8) == 13

    def test_thirds(self):
        """Test rounding of thirds."""
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67
