"""Derived count estimates (bogus instructions, strings, fake looks, control flow)"""

from typing import Dict
import logging

from obfuscalc.config import BOGUS_REFERENCE_PERCENTAGE, CYCLE_GROWTH
from obfuscalc.models import Configuration, CountMetrics, get_baseline
from obfuscalc.numeric import round_half_up

logger = logging.getLogger(__name__)


class MetricsEngine:
    """Estimate how much synthetic material an obfuscation run would add"""

    def __init__(self, cycle_growth: Dict[str, float] = None):
        self.cycle_growth = cycle_growth or CYCLE_GROWTH

    def _cycle_multiplier(self, kind: str, cycles: int) -> float:
        """Every extra cycle grows the count by a fixed fraction of the base"""
        return 1 + (cycles - 1) * self.cycle_growth[kind]

    def bogus_instructions(self, config: Configuration) -> int:
        base = get_baseline(config.level).base_bogus
        bogus_multiplier = config.bogus_percentage / BOGUS_REFERENCE_PERCENTAGE
        return round_half_up(base * bogus_multiplier * self._cycle_multiplier("bogus", config.cycles))

    def encrypted_strings(self, config: Configuration) -> int:
        if not config.string_encryption:
            return 0
        base = get_baseline(config.level).base_strings
        return round_half_up(base * self._cycle_multiplier("strings", config.cycles))

    def fake_looks(self, config: Configuration) -> int:
        if not config.fake_looks:
            return 0
        base = get_baseline(config.level).base_fakes
        return round_half_up(base * self._cycle_multiplier("fakes", config.cycles))

    def control_flow_functions(self, config: Configuration) -> int:
        base = get_baseline(config.level).base_control_flow
        return round_half_up(base * self._cycle_multiplier("control_flow", config.cycles))

    def derive_counts(self, config: Configuration) -> CountMetrics:
        """Compute all four counts for a configuration"""
        counts = CountMetrics(
            bogus_instructions=self.bogus_instructions(config),
            encrypted_strings=self.encrypted_strings(config),
            fake_looks=self.fake_looks(config),
            control_flow_functions=self.control_flow_functions(config),
        )
        logger.debug(f"Counts for {config.level.value}/{config.cycles}: {counts}")
        return counts


def derive_counts(config: Configuration) -> CountMetrics:
    return MetricsEngine().derive_counts(config)
