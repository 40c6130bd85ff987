"""ObfusCalc - heuristic obfuscation parameter calculator"""

__version__ = "1.0.0"

from obfuscalc.calculator import ParameterCalculator, find_optimal, recompute
from obfuscalc.command import generate_command, parse_command
from obfuscalc.models import (
    AnalysisResult,
    Configuration,
    DerivedMetrics,
    Level,
    OptimalSettings,
    PerformanceImpact,
    Recommendation,
    RecommendationKind,
    SettingsPatch,
)

__all__ = [
    'ParameterCalculator',
    'recompute',
    'find_optimal',
    'generate_command',
    'parse_command',
    'AnalysisResult',
    'Configuration',
    'DerivedMetrics',
    'Level',
    'OptimalSettings',
    'PerformanceImpact',
    'Recommendation',
    'RecommendationKind',
    'SettingsPatch',
]
