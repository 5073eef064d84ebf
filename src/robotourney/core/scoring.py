"""Score tallies and display rounding."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from robotourney.core.snapshot import Score

# Compensates binary representation error, e.g. 2.005 is stored as 2.00499999...
_ROUNDING_EPSILON = 1e-9


def valid_score_counts(round_scores: Sequence[Iterable[Score]]) -> list[int]:
    """Count the valid scores of each robot in a round, preserving robot order."""
    return [
        sum(1 for score in robot_scores if score.is_valid)
        for robot_scores in round_scores
    ]


def round_to_two_decimal_places(number: float) -> float:
    """Round half-up from the midpoint to two decimal places."""
    return math.floor((number + _ROUNDING_EPSILON) * 100 + 0.5) / 100


def format_number(number: float) -> str:
    """Display form of a rounded score: 3.0 -> '3', 2.5 -> '2.5'."""
    value = round_to_two_decimal_places(number)
    if value.is_integer():
        return str(int(value))
    return repr(value)
