"""Small numeric helpers shared by the scoring and insight modules."""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (-28.5 → -28, 28.5 → 29)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
