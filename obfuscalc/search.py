"""
Optimal configuration search

Walks a fixed grid (levels low..ultra, cycles 1..5, bogus 15%, string
encryption and fake looks on) and returns the first candidate meeting both
the security target and the time-overhead ceiling. This is a first match in
grid order, not a global optimum.
"""

from typing import Callable, Iterator, Optional
import logging

from obfuscalc.config import SEARCH_CONFIG
from obfuscalc.models import Configuration, DerivedMetrics, Level, OptimalSettings

logger = logging.getLogger(__name__)


class OptimalConfigSearch:
    """Bounded first-match search over level/cycle combinations"""

    def __init__(self, evaluate: Callable[[Configuration], DerivedMetrics]):
        self.evaluate = evaluate
        self.grid = SEARCH_CONFIG

    def candidates(self) -> Iterator[Configuration]:
        """Yield the candidate configurations in search order"""
        for level_name in self.grid["levels"]:
            for cycles in self.grid["cycles"]:
                yield Configuration(
                    level=Level(level_name),
                    cycles=cycles,
                    bogus_percentage=self.grid["bogus_percentage"],
                    string_encryption=self.grid["string_encryption"],
                    fake_looks=self.grid["fake_looks"],
                )

    def find(self, target_security: int = SEARCH_CONFIG["target_security"],
             max_time_impact: float = SEARCH_CONFIG["max_time_impact"]) -> Optional[OptimalSettings]:
        """
        Find the first configuration satisfying both constraints.

        Args:
            target_security: Minimum acceptable security score
            max_time_impact: Maximum acceptable execution-time overhead (%)

        Returns:
            OptimalSettings, or None if no candidate qualifies
        """
        for candidate in self.candidates():
            metrics = self.evaluate(candidate)
            time_impact = metrics.performance_impact.time

            if metrics.security_score >= target_security and time_impact <= max_time_impact:
                logger.debug(f"Optimal: {candidate.level.value}/{candidate.cycles} "
                             f"(security={metrics.security_score}, time={time_impact:.1f}%)")
                return OptimalSettings(
                    configuration=candidate,
                    security_score=metrics.security_score,
                    time_impact=time_impact,
                )

        logger.debug(f"No configuration meets security>={target_security}, time<={max_time_impact}%")
        return None
