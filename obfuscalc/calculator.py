"""
Parameter calculator

Composes the metrics, scoring, performance and recommendation engines into
a single recompute(config) entry point. The calculator holds no state
between calls, so callers may recompute on whatever cadence they like.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Optional
import logging

from obfuscalc.command import generate_command
from obfuscalc.config import COMMAND_DEFAULTS, SEARCH_CONFIG
from obfuscalc.metrics import MetricsEngine
from obfuscalc.models import AnalysisResult, Configuration, DerivedMetrics, OptimalSettings
from obfuscalc.performance import PerformanceEstimator
from obfuscalc.recommendations import RecommendationEngine
from obfuscalc.scoring import ScoreEvaluator
from obfuscalc.search import OptimalConfigSearch

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ParameterCalculator:
    """Derive metrics, advice and exports from obfuscation parameters"""

    def __init__(self, clock: Callable[[], datetime] = _utc_now):
        self.metrics_engine = MetricsEngine()
        self.scorer = ScoreEvaluator()
        self.performance = PerformanceEstimator()
        self.advisor = RecommendationEngine()
        self.clock = clock

    def recompute(self, config: Configuration) -> DerivedMetrics:
        """Compute the full DerivedMetrics for a configuration"""
        counts = self.metrics_engine.derive_counts(config)
        complexity = self.scorer.complexity_score(config)
        impact = self.performance.estimate(config)
        security = self.scorer.security_score(config, complexity)

        return DerivedMetrics(
            bogus_instructions=counts.bogus_instructions,
            encrypted_strings=counts.encrypted_strings,
            fake_looks=counts.fake_looks,
            control_flow_functions=counts.control_flow_functions,
            complexity_score=complexity,
            security_score=security,
            performance_impact=impact,
            recommended_settings=self.advisor.recommended_settings(config, complexity, impact),
        )

    def analyze(self, config: Configuration) -> AnalysisResult:
        """Compute metrics and run the advisory rules over them"""
        metrics = self.recompute(config)
        recommendations = self.advisor.analyze(config, metrics)
        logger.debug(f"Analyzed {config}: security={metrics.security_score}, "
                     f"{len(recommendations)} recommendation(s)")
        return AnalysisResult(configuration=config, metrics=metrics, recommendations=recommendations)

    def find_optimal(self, target_security: int = SEARCH_CONFIG["target_security"],
                     max_time_impact: float = SEARCH_CONFIG["max_time_impact"]) -> Optional[OptimalSettings]:
        """First grid configuration meeting both thresholds, or None"""
        return OptimalConfigSearch(self.recompute).find(target_security, max_time_impact)

    def generate_command(self, config: Configuration, **kwargs) -> str:
        return generate_command(config, **kwargs)

    def export_configuration(self, config: Configuration,
                             tool: str = COMMAND_DEFAULTS["tool"],
                             input_path: str = COMMAND_DEFAULTS["input"],
                             output_path: str = COMMAND_DEFAULTS["output"]) -> Dict:
        """
        Export a configuration with its metrics and the matching command line.

        Returns:
            dict: {
                "configuration": dict,
                "metrics": dict,
                "command": str,
                "timestamp": str (ISO-8601, captured now)
            }
        """
        metrics = self.recompute(config)
        return {
            "configuration": config.to_dict(),
            "metrics": metrics.to_dict(),
            "command": generate_command(config, tool=tool, input_path=input_path,
                                        output_path=output_path),
            "timestamp": self.clock().isoformat(),
        }


# Convenience functions
def recompute(config: Configuration) -> DerivedMetrics:
    return ParameterCalculator().recompute(config)


def find_optimal(target_security: int = SEARCH_CONFIG["target_security"],
                 max_time_impact: float = SEARCH_CONFIG["max_time_impact"]) -> Optional[OptimalSettings]:
    return ParameterCalculator().find_optimal(target_security, max_time_impact)
