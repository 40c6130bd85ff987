"""Performance overhead projection relative to the unobfuscated build"""

import logging

from obfuscalc.config import BOGUS_SIZE_WEIGHT, CYCLE_GROWTH, IMPACT_BANDS
from obfuscalc.models import Configuration, ImpactBand, PerformanceImpact, get_baseline
from obfuscalc.numeric import round_one_decimal

logger = logging.getLogger(__name__)


class PerformanceEstimator:
    """
    Estimate size/time/memory overhead in percent.

    Each level has multiplicative factors; cycles scale all three dimensions,
    the bogus-code ratio only inflates size.
    """

    def __init__(self):
        self.cycle_growth = CYCLE_GROWTH["performance"]
        self.bogus_weight = BOGUS_SIZE_WEIGHT
        self.bands = IMPACT_BANDS

    def cycle_multiplier(self, cycles: int) -> float:
        return 1 + (cycles - 1) * self.cycle_growth

    def bogus_multiplier(self, bogus_percentage: int) -> float:
        return 1 + (bogus_percentage / 100) * self.bogus_weight

    def estimate(self, config: Configuration) -> PerformanceImpact:
        base = get_baseline(config.level).performance
        cycle_mult = self.cycle_multiplier(config.cycles)
        bogus_mult = self.bogus_multiplier(config.bogus_percentage)

        impact = PerformanceImpact(
            size=round_one_decimal((base.size_factor * cycle_mult * bogus_mult - 1) * 100),
            time=round_one_decimal((base.time_factor * cycle_mult - 1) * 100),
            memory=round_one_decimal((base.memory_factor * cycle_mult - 1) * 100),
        )
        logger.debug(f"Performance impact for {config.level.value}/{config.cycles}: {impact}")
        return impact

    def impact_band(self, percent: float) -> ImpactBand:
        """Classify an overhead percentage (<10 low, <25 moderate, else high)"""
        if percent < self.bands["low"]:
            return ImpactBand.LOW
        elif percent < self.bands["moderate"]:
            return ImpactBand.MODERATE
        return ImpactBand.HIGH
