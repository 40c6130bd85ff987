"""Test ParameterCalculator

End-to-end recompute/analyze/export and the Configuration model.
"""

from datetime import datetime, timezone
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from obfuscalc.calculator import ParameterCalculator, recompute
from obfuscalc.command import parse_command
from obfuscalc.exceptions import ConfigurationError
from obfuscalc.models import Configuration, Level, PerformanceImpact, get_baseline


FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_recompute_reference_configuration():
    metrics = recompute(Configuration(level=Level.MEDIUM, cycles=1, bogus_percentage=15,
                                      string_encryption=True, fake_looks=True))

    assert metrics.bogus_instructions == 1500
    assert metrics.encrypted_strings == 50
    assert metrics.fake_looks == 12
    assert metrics.control_flow_functions == 8
    assert metrics.complexity_score == 80
    assert metrics.security_score == 71
    assert metrics.performance_impact == PerformanceImpact(size=20.2, time=8.0, memory=12.0)


def test_recompute_is_deterministic():
    config = Configuration(level=Level.HIGH, cycles=4, bogus_percentage=33,
                           string_encryption=True, fake_looks=False)
    first = ParameterCalculator().recompute(config)
    second = ParameterCalculator().recompute(config)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_metrics_to_dict_layout():
    metrics = recompute(Configuration(level=Level.LOW, cycles=1))
    data = metrics.to_dict()

    assert list(data) == [
        "bogusInstructions", "encryptedStrings", "fakeLooks", "controlFlowFunctions",
        "complexityScore", "securityScore", "performanceImpact", "recommendedSettings",
    ]
    assert data["performanceImpact"] == {"size": "9.7", "time": "3.0", "memory": "4.0"}
    assert data["recommendedSettings"] == {"level": "medium", "cycles": 2}


def test_export_configuration():
    calculator = ParameterCalculator(clock=lambda: FIXED_TIME)
    config = Configuration(level=Level.ULTRA, cycles=2, bogus_percentage=25,
                           string_encryption=True, fake_looks=False)

    exported = calculator.export_configuration(config)

    assert set(exported) == {"configuration", "metrics", "command", "timestamp"}
    assert exported["configuration"] == config.to_dict()
    assert exported["metrics"] == calculator.recompute(config).to_dict()
    assert exported["command"] == (
        "./llvm_obfuscator -i input.bc -o output_obfuscated -l ultra -c 2 -b 25 --string-encryption"
    )
    assert exported["timestamp"] == "2024-01-02T03:04:05+00:00"


def test_export_command_round_trip():
    calculator = ParameterCalculator()
    config = Configuration(level=Level.LOW, cycles=4, bogus_percentage=5, fake_looks=True)
    exported = calculator.export_configuration(config)

    assert parse_command(exported["command"]) == config
    assert Configuration.from_dict(exported["configuration"]) == config


def test_export_timestamp_is_iso_8601():
    exported = ParameterCalculator().export_configuration(Configuration())
    parsed = datetime.fromisoformat(exported["timestamp"])
    assert parsed.tzinfo is not None


def test_generate_command_passthrough():
    calculator = ParameterCalculator()
    assert calculator.generate_command(Configuration(), tool="obf").startswith("./obf ")


class TestConfiguration:
    """Configuration value object"""

    def test_defaults(self):
        config = Configuration()
        assert config.level is Level.MEDIUM
        assert config.cycles == 1
        assert config.bogus_percentage == 15
        assert not config.string_encryption
        assert not config.fake_looks

    @pytest.mark.parametrize("raw,level", [
        ("ultra", Level.ULTRA),
        (" HIGH ", Level.HIGH),
        ("Low", Level.LOW),
        ("extreme", Level.MEDIUM),
        ("", Level.MEDIUM),
        (None, Level.MEDIUM),
        (3, Level.MEDIUM),
    ])
    def test_level_coercion(self, raw, level):
        assert Configuration(level=raw).level is level

    def test_immutable(self):
        config = Configuration()
        with pytest.raises(AttributeError):
            config.cycles = 3

    def test_with_changes_returns_new_value(self):
        config = Configuration()
        changed = config.with_changes(level="high", cycles=2)
        assert changed.level is Level.HIGH
        assert changed.cycles == 2
        assert config == Configuration()

    def test_from_dict_camel_case(self):
        config = Configuration.from_dict({
            "level": "high", "cycles": 3, "bogusPercentage": 20,
            "stringEncryption": True, "fakeLooks": False,
        })
        assert config == Configuration(level=Level.HIGH, cycles=3, bogus_percentage=20,
                                       string_encryption=True)

    def test_from_dict_snake_case_and_strings(self):
        config = Configuration.from_dict({
            "level": "low", "cycles": "2", "bogus_percentage": "10",
            "string_encryption": "yes", "fake_looks": "off", "comment": "ignored",
        })
        assert config == Configuration(level=Level.LOW, cycles=2, bogus_percentage=10,
                                       string_encryption=True, fake_looks=False)

    def test_to_dict_round_trip(self):
        config = Configuration(level=Level.ULTRA, cycles=5, bogus_percentage=0,
                               string_encryption=True, fake_looks=True)
        assert Configuration.from_dict(config.to_dict()) == config

    @pytest.mark.parametrize("data", [
        {"cycles": "many"},
        {"cycles": 2.5},
        {"cycles": True},
        {"bogusPercentage": [15]},
        {"stringEncryption": "maybe"},
        {"fakeLooks": 2},
    ])
    def test_from_dict_rejects_malformed_values(self, data):
        with pytest.raises(ConfigurationError):
            Configuration.from_dict(data)


def test_unknown_level_baseline_is_medium():
    assert get_baseline("nonsense") == get_baseline(Level.MEDIUM)
    assert get_baseline("ultra").base_complexity == 95
    assert get_baseline(Level.LOW).performance.time_factor == 1.03
