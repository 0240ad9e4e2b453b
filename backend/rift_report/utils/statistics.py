"""Statistical utility functions for safe calculations."""

import math


def round_half_up(value: float, ndigits: int = 1) -> float:
    """
    Round with halves going toward positive infinity.

    The builtin round() uses banker's rounding, which would turn 12.25 into
    12.2; report figures always round halves up (12.25 -> 12.3, -2.25 -> -2.2).
    """
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def percent(numerator: int, denominator: int) -> float:
    """Percentage with one decimal place; 0.0 when there is nothing to divide by."""
    if denominator <= 0:
        return 0.0
    return math.floor(numerator / denominator * 1000 + 0.5) / 10


def kda_ratio(kills: int, deaths: int, assists: int) -> float:
    """(kills + assists) / deaths rounded to one decimal, or the raw sum when deathless."""
    if deaths > 0:
        return round_half_up((kills + assists) / deaths)
    return float(kills + assists)
