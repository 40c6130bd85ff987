"""
Quick demo

The lightweight preview shown before the full calculator runs. Counts scale
linearly with cycles, performance figures are fixed per level and the
security score uses the legacy baseline formula.
"""

from dataclasses import dataclass
from typing import Dict

from obfuscalc.config import BOGUS_REFERENCE_PERCENTAGE, DEMO_LEVELS
from obfuscalc.models import Configuration, PerformanceImpact
from obfuscalc.numeric import round_half_up
from obfuscalc.scoring import ScoreEvaluator


@dataclass(frozen=True)
class DemoReport:
    """Figures shown by the quick demo"""
    configuration: Configuration
    bogus_instructions: int
    encrypted_strings: int
    fake_looks: int
    security_score: int
    performance_impact: PerformanceImpact

    def to_dict(self) -> Dict:
        return {
            "level": self.configuration.level.value.capitalize(),
            "cycles": self.configuration.cycles,
            "bogusInstructions": self.bogus_instructions,
            "encryptedStrings": self.encrypted_strings,
            "fakeLooks": self.fake_looks,
            "securityScore": self.security_score,
            "performanceImpact": self.performance_impact.to_dict(),
        }


class QuickDemo:
    def __init__(self):
        self.levels = DEMO_LEVELS
        self.scorer = ScoreEvaluator()

    def run(self, config: Configuration) -> DemoReport:
        base = self.levels[config.level.value]
        cycles = config.cycles
        bogus_multiplier = config.bogus_percentage / BOGUS_REFERENCE_PERCENTAGE

        return DemoReport(
            configuration=config,
            bogus_instructions=round_half_up(base["bogus"] * bogus_multiplier * cycles),
            encrypted_strings=round_half_up(base["strings"] * cycles) if config.string_encryption else 0,
            fake_looks=round_half_up(base["fakes"] * cycles) if config.fake_looks else 0,
            security_score=self.scorer.demo_security_score(config),
            performance_impact=PerformanceImpact(
                size=float(base["size"]),
                time=float(base["time"]),
                memory=float(base["memory"]),
            ),
        )
