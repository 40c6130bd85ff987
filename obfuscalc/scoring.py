"""Scoring system for ObfusCalc"""

from typing import Dict
import logging

from obfuscalc.config import (
    BOGUS_REFERENCE_PERCENTAGE,
    COMPLEXITY_WEIGHTS,
    DEMO_SECURITY_WEIGHTS,
    SECURITY_TIERS,
    SECURITY_WEIGHTS,
    STRONG_LEVELS,
)
from obfuscalc.models import Configuration, SecurityTier, get_baseline
from obfuscalc.numeric import clamp_score, round_half_up

logger = logging.getLogger(__name__)


class ScoreEvaluator:
    """Calculate complexity and security scores (full calculator and quick demo)"""

    def __init__(self):
        self.complexity_weights = COMPLEXITY_WEIGHTS
        self.security_weights = SECURITY_WEIGHTS
        self.demo_weights = DEMO_SECURITY_WEIGHTS
        self.tiers = SECURITY_TIERS

    # ===================================================================
    # Full calculator
    # ===================================================================

    def complexity_score(self, config: Configuration) -> int:
        """
        Calculate the obfuscation complexity score.

        Formula: base + 8 x (cycles - 1) + 0.8 x (bogus% - 15)
                 + 12 (string encryption) + 8 (fake looks)

        Args:
            config: Configuration to score

        Returns:
            Complexity score, rounded and clamped to 0-100
        """
        weights = self.complexity_weights
        score = get_baseline(config.level).base_complexity

        score += (config.cycles - 1) * weights["per_cycle"]
        score += (config.bogus_percentage - BOGUS_REFERENCE_PERCENTAGE) * weights["per_bogus_point"]

        if config.string_encryption:
            score += weights["string_encryption"]
        if config.fake_looks:
            score += weights["fake_looks"]

        return clamp_score(round_half_up(score))

    def security_score(self, config: Configuration, complexity: int) -> int:
        """
        Calculate the security score from an already computed complexity score.

        Formula: 0.7 x complexity + 15 (string encryption)
                 + 10 (high/ultra level) + 5 (more than 2 cycles)

        Args:
            config: Configuration being scored
            complexity: Result of complexity_score() for the same configuration

        Returns:
            Security score, rounded and clamped to 0-100
        """
        weights = self.security_weights
        security = complexity * weights["complexity_factor"]

        if config.string_encryption:
            security += weights["string_encryption"]
        if config.level.value in STRONG_LEVELS:
            security += weights["strong_level"]
        if config.cycles > weights["many_cycles_threshold"]:
            security += weights["many_cycles"]

        return clamp_score(round_half_up(security))

    def score(self, config: Configuration) -> Dict[str, int]:
        """Complexity first, then security on top of it"""
        complexity = self.complexity_score(config)
        return {
            "complexity_score": complexity,
            "security_score": self.security_score(config, complexity),
        }

    # ===================================================================
    # Quick demo (legacy formula, kept for the demo entry point)
    # ===================================================================

    def demo_security_score(self, config: Configuration) -> int:
        """
        Baseline security score used by the quick demo.

        This does not agree with security_score(); the demo has its own
        per-level starting points and smaller adjustments.
        """
        weights = self.demo_weights
        score = get_baseline(config.level).base_security_score

        score += (config.cycles - 1) * weights["per_cycle"]
        score += (config.bogus_percentage - BOGUS_REFERENCE_PERCENTAGE) * weights["per_bogus_point"]

        if config.string_encryption:
            score += weights["string_encryption"]
        if config.fake_looks:
            score += weights["fake_looks"]

        return clamp_score(round_half_up(score))

    # ===================================================================
    # Classification
    # ===================================================================

    def security_tier(self, score: int) -> SecurityTier:
        """Get the security tier for a score"""
        if score >= self.tiers["maximum"]:
            return SecurityTier.MAXIMUM
        elif score >= self.tiers["high"]:
            return SecurityTier.HIGH
        elif score >= self.tiers["medium"]:
            return SecurityTier.MEDIUM
        else:
            return SecurityTier.BASIC
