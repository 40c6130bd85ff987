"""
Data model for ObfusCalc

Configuration values come from a configuration source, everything else is
produced by the engine and handed to a result sink. All types are immutable.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple
import logging

from obfuscalc.config import (
    BOGUS_REFERENCE_PERCENTAGE,
    BOGUS_PERCENTAGE_RANGE,
    CONTROL_FLOW_FUNCTIONS,
    DEFAULT_LEVEL,
    DEMO_LEVELS,
    LEVEL_METRICS,
    MIN_CYCLES,
    PERFORMANCE_BASELINE,
)
from obfuscalc.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class Level(Enum):
    """Obfuscation protection tier"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ULTRA = "ultra"

    @classmethod
    def coerce(cls, value: Any) -> "Level":
        """Map any input to a Level, falling back to medium for unknown values"""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        logger.debug(f"Unrecognized level {value!r}, using {DEFAULT_LEVEL}")
        return cls(DEFAULT_LEVEL)

    @classmethod
    def ordered(cls) -> Tuple["Level", ...]:
        return (cls.LOW, cls.MEDIUM, cls.HIGH, cls.ULTRA)


class RecommendationKind(Enum):
    """Severity of an advisory"""
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


class SecurityTier(Enum):
    """Security badge shown next to the score"""
    MAXIMUM = "maximum"
    HIGH = "high"
    MEDIUM = "medium"
    BASIC = "basic"

    @property
    def label(self) -> str:
        return {
            SecurityTier.MAXIMUM: "Maximum Security",
            SecurityTier.HIGH: "High Security",
            SecurityTier.MEDIUM: "Medium Security",
            SecurityTier.BASIC: "Basic Protection",
        }[self]


class ImpactBand(Enum):
    """Severity band of a performance overhead percentage"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


# Accepted keys when reading a configuration mapping
_KEY_ALIASES = {
    "level": "level",
    "cycles": "cycles",
    "bogusPercentage": "bogus_percentage",
    "bogus_percentage": "bogus_percentage",
    "bogus": "bogus_percentage",
    "stringEncryption": "string_encryption",
    "string_encryption": "string_encryption",
    "fakeLooks": "fake_looks",
    "fake_looks": "fake_looks",
}


@dataclass(frozen=True)
class Configuration:
    """User-selected obfuscation parameters"""
    level: Level = Level.MEDIUM
    cycles: int = 1
    bogus_percentage: int = BOGUS_REFERENCE_PERCENTAGE
    string_encryption: bool = False
    fake_looks: bool = False

    def __post_init__(self):
        object.__setattr__(self, "level", Level.coerce(self.level))

    def with_changes(self, **changes) -> "Configuration":
        """Return a copy with the given fields replaced"""
        return replace(self, **changes)

    def to_dict(self) -> Dict:
        """Convert to dictionary (camelCase keys)"""
        return {
            "level": self.level.value,
            "cycles": self.cycles,
            "bogusPercentage": self.bogus_percentage,
            "stringEncryption": self.string_encryption,
            "fakeLooks": self.fake_looks,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Configuration":
        """Create from a camelCase or snake_case mapping; missing keys use defaults"""
        values = {}
        for key, item in data.items():
            name = _KEY_ALIASES.get(key)
            if name is None:
                logger.debug(f"Ignoring unknown configuration key: {key}")
                continue
            values[name] = item

        for name in ("cycles", "bogus_percentage"):
            if name in values:
                values[name] = _as_int(name, values[name])
        for name in ("string_encryption", "fake_looks"):
            if name in values:
                values[name] = _as_bool(name, values[name])

        if values.get("cycles", MIN_CYCLES) < MIN_CYCLES:
            raise ConfigurationError(f"cycles must be at least {MIN_CYCLES}, got {values['cycles']}")
        low, high = BOGUS_PERCENTAGE_RANGE
        if not low <= values.get("bogus_percentage", low) <= high:
            raise ConfigurationError(
                f"bogusPercentage must be between {low} and {high}, got {values['bogus_percentage']}"
            )

        return cls(**values)


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "yes", "on", "1"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "no", "off", "0", ""):
        return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class PerformanceBaseline:
    """Multiplicative size/time/memory inflation factors (>= 1.0)"""
    size_factor: float
    time_factor: float
    memory_factor: float


@dataclass(frozen=True)
class LevelBaseline:
    """Constants driving every calculation for one level"""
    level: Level
    base_bogus: int
    base_strings: int
    base_fakes: int
    base_complexity: int
    base_control_flow: int
    base_security_score: int
    performance: PerformanceBaseline


def _build_baselines() -> Dict[Level, LevelBaseline]:
    baselines = {}
    for level in Level.ordered():
        metrics = LEVEL_METRICS[level.value]
        perf = PERFORMANCE_BASELINE[level.value]
        baselines[level] = LevelBaseline(
            level=level,
            base_bogus=metrics["base_bogus"],
            base_strings=metrics["base_strings"],
            base_fakes=metrics["base_fakes"],
            base_complexity=metrics["base_complexity"],
            base_control_flow=CONTROL_FLOW_FUNCTIONS[level.value],
            base_security_score=DEMO_LEVELS[level.value]["score"],
            performance=PerformanceBaseline(
                size_factor=perf["size"],
                time_factor=perf["time"],
                memory_factor=perf["memory"],
            ),
        )
    return baselines


BASELINES = _build_baselines()


def get_baseline(level: Any) -> LevelBaseline:
    """Look up the baseline for a level; unknown levels get the medium baseline"""
    return BASELINES.get(Level.coerce(level), BASELINES[Level.MEDIUM])


@dataclass(frozen=True)
class PerformanceImpact:
    """Estimated overhead in percent above the unobfuscated baseline"""
    size: float
    time: float
    memory: float

    def as_floats(self) -> Dict[str, float]:
        return {"size": self.size, "time": self.time, "memory": self.memory}

    def to_dict(self) -> Dict[str, str]:
        """Fixed one-decimal strings, as shown to the user"""
        return {key: f"{value:.1f}" for key, value in self.as_floats().items()}


@dataclass(frozen=True)
class SettingsPatch:
    """Suggested adjustment to a configuration"""
    level: Optional[Level] = None
    cycles: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.level is None and self.cycles is None

    def apply(self, config: Configuration) -> Configuration:
        changes = {}
        if self.level is not None:
            changes["level"] = self.level
        if self.cycles is not None:
            changes["cycles"] = self.cycles
        return config.with_changes(**changes)

    def to_dict(self) -> Dict:
        data = {}
        if self.level is not None:
            data["level"] = self.level.value
        if self.cycles is not None:
            data["cycles"] = self.cycles
        return data


@dataclass(frozen=True)
class CountMetrics:
    """Derived instruction/string/control-flow counts"""
    bogus_instructions: int
    encrypted_strings: int
    fake_looks: int
    control_flow_functions: int


@dataclass(frozen=True)
class DerivedMetrics:
    """Everything the calculator derives from one Configuration"""
    bogus_instructions: int
    encrypted_strings: int
    fake_looks: int
    control_flow_functions: int
    complexity_score: int
    security_score: int
    performance_impact: PerformanceImpact
    recommended_settings: SettingsPatch = field(default_factory=SettingsPatch)

    def to_dict(self) -> Dict:
        """Convert to dictionary for serialization"""
        return {
            "bogusInstructions": self.bogus_instructions,
            "encryptedStrings": self.encrypted_strings,
            "fakeLooks": self.fake_looks,
            "controlFlowFunctions": self.control_flow_functions,
            "complexityScore": self.complexity_score,
            "securityScore": self.security_score,
            "performanceImpact": self.performance_impact.to_dict(),
            "recommendedSettings": self.recommended_settings.to_dict(),
        }


@dataclass(frozen=True)
class Recommendation:
    """Advisory text for the user; no side effects"""
    kind: RecommendationKind
    message: str
    suggestion: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "type": self.kind.value,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Metrics and advice for one configuration"""
    configuration: Configuration
    metrics: DerivedMetrics
    recommendations: Tuple[Recommendation, ...] = ()

    @property
    def needs_attention(self) -> bool:
        return len(self.recommendations) > 0

    def to_dict(self) -> Dict:
        return {
            "configuration": self.configuration.to_dict(),
            "metrics": self.metrics.to_dict(),
            "recommendations": [rec.to_dict() for rec in self.recommendations],
        }


@dataclass(frozen=True)
class OptimalSettings:
    """First configuration of the search grid meeting both constraints"""
    configuration: Configuration
    security_score: int
    time_impact: float

    def to_dict(self) -> Dict:
        data = self.configuration.to_dict()
        data["securityScore"] = self.security_score
        data["performanceImpact"] = self.time_impact
        return data
