"""Configuration and lookup tables for ObfusCalc"""

from types import MappingProxyType
from typing import Dict, Any

# ===========================================
# Obfuscation Levels
# ===========================================

LEVEL_ORDER = ("low", "medium", "high", "ultra")
DEFAULT_LEVEL = "medium"

# Accepted input ranges (inclusive)
MIN_CYCLES = 1
BOGUS_PERCENTAGE_RANGE = (0, 100)

# Per-level baselines used by the full calculator
LEVEL_METRICS = MappingProxyType({
    "low": MappingProxyType({
        "base_bogus": 500,
        "base_strings": 20,
        "base_fakes": 5,
        "base_complexity": 30,
    }),
    "medium": MappingProxyType({
        "base_bogus": 1500,
        "base_strings": 50,
        "base_fakes": 12,
        "base_complexity": 60,
    }),
    "high": MappingProxyType({
        "base_bogus": 4000,
        "base_strings": 100,
        "base_fakes": 25,
        "base_complexity": 85,
    }),
    "ultra": MappingProxyType({
        "base_bogus": 8000,
        "base_strings": 200,
        "base_fakes": 50,
        "base_complexity": 95,
    }),
})

CONTROL_FLOW_FUNCTIONS = MappingProxyType({
    "low": 3,
    "medium": 8,
    "high": 20,
    "ultra": 40,
})

# Size/time/memory inflation relative to the unobfuscated build
PERFORMANCE_BASELINE = MappingProxyType({
    "low": MappingProxyType({"size": 1.05, "time": 1.03, "memory": 1.04}),
    "medium": MappingProxyType({"size": 1.15, "time": 1.08, "memory": 1.12}),
    "high": MappingProxyType({"size": 1.25, "time": 1.15, "memory": 1.20}),
    "ultra": MappingProxyType({"size": 1.40, "time": 1.25, "memory": 1.35}),
})

# ===========================================
# Quick Demo Table
# ===========================================
# Simpler per-level figures used by the quick demo. Performance values are
# already percentages and are shown as-is.

DEMO_LEVELS = MappingProxyType({
    "low": MappingProxyType({"bogus": 5, "strings": 20, "fakes": 2, "score": 65,
                             "size": 5, "time": 3, "memory": 4}),
    "medium": MappingProxyType({"bogus": 15, "strings": 45, "fakes": 8, "score": 87,
                                "size": 15, "time": 8, "memory": 12}),
    "high": MappingProxyType({"bogus": 25, "strings": 75, "fakes": 15, "score": 94,
                              "size": 25, "time": 15, "memory": 20}),
    "ultra": MappingProxyType({"bogus": 40, "strings": 95, "fakes": 25, "score": 98,
                               "size": 40, "time": 25, "memory": 35}),
})

# ===========================================
# Multipliers
# ===========================================

BOGUS_REFERENCE_PERCENTAGE = 15  # 15% is the medium baseline

CYCLE_GROWTH = MappingProxyType({
    "bogus": 0.30,
    "strings": 0.20,
    "fakes": 0.25,
    "control_flow": 0.40,
    "performance": 0.08,
})

BOGUS_SIZE_WEIGHT = 0.3

# ===========================================
# Scoring Weights
# ===========================================
# complexity = base + 8/cycle + 0.8/bogus point + 12 (strings) + 8 (fakes)
# security   = 0.7 x complexity + 15 (strings) + 10 (high/ultra) + 5 (cycles > 2)

COMPLEXITY_WEIGHTS = MappingProxyType({
    "per_cycle": 8,
    "per_bogus_point": 0.8,
    "string_encryption": 12,
    "fake_looks": 8,
})

SECURITY_WEIGHTS = MappingProxyType({
    "complexity_factor": 0.7,
    "string_encryption": 15,
    "strong_level": 10,
    "many_cycles": 5,
    "many_cycles_threshold": 2,
})

STRONG_LEVELS = frozenset({"high", "ultra"})

# Legacy demo formula (kept separate, intentionally not aligned with the above)
DEMO_SECURITY_WEIGHTS = MappingProxyType({
    "per_cycle": 3,
    "per_bogus_point": 0.2,
    "string_encryption": 5,
    "fake_looks": 3,
})

SCORE_RANGE = (0, 100)

# Security tiers (lower bound inclusive)
SECURITY_TIERS = MappingProxyType({
    "maximum": 90,
    "high": 75,
    "medium": 60,
    "basic": 0,
})

# Performance impact bands (upper bound exclusive)
IMPACT_BANDS = MappingProxyType({
    "low": 10,
    "moderate": 25,
})

# ===========================================
# Recommendation Rules
# ===========================================

RECOMMENDATION_THRESHOLDS = MappingProxyType({
    "high_security": 90,          # rule 1: security above this ...
    "high_time_impact": 20,       # ... and time impact above this
    "max_bogus_percentage": 30,   # rule 2
    "low_security": 60,           # rule 4
})

RECOMMENDED_SETTINGS_THRESHOLDS = MappingProxyType({
    "weak_complexity": 50,
    "strong_complexity": 80,
    "max_time_impact": 15,
    "max_cycles": 5,
    "min_cycles": 1,
})

# ===========================================
# Optimal Configuration Search
# ===========================================

SEARCH_CONFIG = MappingProxyType({
    "levels": LEVEL_ORDER,
    "cycles": (1, 2, 3, 4, 5),
    "bogus_percentage": 15,
    "string_encryption": True,
    "fake_looks": True,
    "target_security": 80,
    "max_time_impact": 15,
})

# ===========================================
# Command Line Export
# ===========================================

COMMAND_DEFAULTS = MappingProxyType({
    "tool": "llvm_obfuscator",
    "input": "input.bc",
    "output": "output_obfuscated",
})


def _plain(value: Any) -> Any:
    """Turn read-only tables back into plain containers"""
    if isinstance(value, (MappingProxyType, dict)):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, frozenset):
        return sorted(value)
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


def get_config() -> Dict[str, Any]:
    """Get full configuration dictionary"""
    return _plain({
        "levels": LEVEL_ORDER,
        "default_level": DEFAULT_LEVEL,
        "min_cycles": MIN_CYCLES,
        "bogus_percentage_range": BOGUS_PERCENTAGE_RANGE,
        "level_metrics": LEVEL_METRICS,
        "control_flow_functions": CONTROL_FLOW_FUNCTIONS,
        "performance_baseline": PERFORMANCE_BASELINE,
        "demo_levels": DEMO_LEVELS,
        "bogus_reference_percentage": BOGUS_REFERENCE_PERCENTAGE,
        "cycle_growth": CYCLE_GROWTH,
        "bogus_size_weight": BOGUS_SIZE_WEIGHT,
        "complexity_weights": COMPLEXITY_WEIGHTS,
        "security_weights": SECURITY_WEIGHTS,
        "strong_levels": STRONG_LEVELS,
        "demo_security_weights": DEMO_SECURITY_WEIGHTS,
        "security_tiers": SECURITY_TIERS,
        "impact_bands": IMPACT_BANDS,
        "recommendation_thresholds": RECOMMENDATION_THRESHOLDS,
        "recommended_settings_thresholds": RECOMMENDED_SETTINGS_THRESHOLDS,
        "search": SEARCH_CONFIG,
        "command_defaults": COMMAND_DEFAULTS,
    })
