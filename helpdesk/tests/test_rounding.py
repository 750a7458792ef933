"""Unit tests for rounding helpers"""
import pytest

from helpdesk.utils.rounding import round_half_up


@pytest.mark.parametrize("value,expected", [
    (0, 0),
    (12.5, 13),
    (62.5, 63),
    (83.333, 83),
    (99.5, 100),
    (100, 100),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
