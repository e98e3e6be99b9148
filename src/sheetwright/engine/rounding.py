"""Rounding used for derived percentages."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, sending halves toward positive infinity.

    Unlike the built-in ``round``, halves never go to the even neighbour.

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(-2.5)
        -2
        >>> round_half_up(24.4)
        24
    """
    return math.floor(value + 0.5)
