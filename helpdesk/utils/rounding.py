"""
Rounding helpers
"""
import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves going up (62.5 -> 63).

    Built-in round() sends halves to the even neighbour (62.5 -> 62).
    """
    return int(math.floor(value + 0.5))
