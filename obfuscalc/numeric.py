"""Rounding helpers shared by the calculators"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Tuple

from obfuscalc.config import SCORE_RANGE

_ONE_DECIMAL = Decimal("0.1")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (2.5 -> 3, -2.5 -> -2)"""
    return int(math.floor(value + 0.5))


def round_one_decimal(value: float) -> float:
    """Round to one decimal place using the exact binary value of the float"""
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def clamp_score(value: int, bounds: Tuple[int, int] = SCORE_RANGE) -> int:
    low, high = bounds
    return max(low, min(high, value))
