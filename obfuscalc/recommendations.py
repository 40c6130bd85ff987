"""
Advisory rules for a configuration and its derived metrics

Rules are independent and evaluated in a fixed order; every rule that
applies contributes one Recommendation. An empty result means the
configuration needs no advice.
"""

from typing import List, Tuple
import logging

from obfuscalc.config import RECOMMENDATION_THRESHOLDS, RECOMMENDED_SETTINGS_THRESHOLDS
from obfuscalc.models import (
    Configuration,
    DerivedMetrics,
    Level,
    PerformanceImpact,
    Recommendation,
    RecommendationKind,
    SettingsPatch,
)

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """Rule-based advice on the security/performance trade-off"""

    def __init__(self):
        self.thresholds = RECOMMENDATION_THRESHOLDS
        self.settings_thresholds = RECOMMENDED_SETTINGS_THRESHOLDS

    def analyze(self, config: Configuration, metrics: DerivedMetrics) -> Tuple[Recommendation, ...]:
        """
        Evaluate all advisory rules.

        Args:
            config: Configuration that produced the metrics
            metrics: DerivedMetrics for config

        Returns:
            Tuple of Recommendations in rule order (possibly empty)
        """
        recommendations: List[Recommendation] = []

        # Security vs performance trade-off
        if (metrics.security_score > self.thresholds["high_security"]
                and metrics.performance_impact.time > self.thresholds["high_time_impact"]):
            recommendations.append(Recommendation(
                kind=RecommendationKind.WARNING,
                message="High performance impact detected. Consider reducing obfuscation cycles.",
                suggestion="Try reducing cycles to 2-3 for better performance.",
            ))

        if config.bogus_percentage > self.thresholds["max_bogus_percentage"]:
            recommendations.append(Recommendation(
                kind=RecommendationKind.INFO,
                message="High bogus code percentage may affect maintainability.",
                suggestion="Keep bogus code below 30% for better debug capability.",
            ))

        if config.level is Level.LOW and config.string_encryption:
            recommendations.append(Recommendation(
                kind=RecommendationKind.SUCCESS,
                message="Good balance: String encryption adds security with minimal performance cost.",
                suggestion="Consider enabling control flow obfuscation for better protection.",
            ))

        if metrics.security_score < self.thresholds["low_security"]:
            recommendations.append(Recommendation(
                kind=RecommendationKind.ERROR,
                message="Low security level detected.",
                suggestion="Increase obfuscation level to Medium or enable additional features.",
            ))

        logger.debug(f"{len(recommendations)} recommendation(s) for {config.level.value}/{config.cycles}")
        return tuple(recommendations)

    def recommended_settings(self, config: Configuration, complexity: int,
                             impact: PerformanceImpact) -> SettingsPatch:
        """
        Suggest a level/cycles adjustment.

        Weak configurations (complexity < 50) get one more cycle and at least
        the medium level. Strong but slow ones (complexity > 80, time > 15%)
        get one cycle fewer, which takes precedence over the first rule.
        """
        limits = self.settings_thresholds
        level = None
        cycles = None

        if complexity < limits["weak_complexity"]:
            level = Level.MEDIUM if config.level is Level.LOW else config.level
            cycles = min(config.cycles + 1, limits["max_cycles"])

        if complexity > limits["strong_complexity"] and impact.time > limits["max_time_impact"]:
            cycles = max(config.cycles - 1, limits["min_cycles"])

        return SettingsPatch(level=level, cycles=cycles)
