"""Small numeric helpers shared by the analytical components."""

import math
from statistics import mean
from typing import Iterable, List, Optional, Sequence


def present(values: Iterable[Optional[float]]) -> List[float]:
    """Drop missing samples. Zero is a real sample and is kept."""
    return [v for v in values if v is not None]


def mean_or_none(values: Sequence[Optional[float]]) -> Optional[float]:
    valid = present(values)
    if not valid:
        return None
    return mean(valid)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with .5 going up, the way dashboards display scores (23.5 -> 24)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
