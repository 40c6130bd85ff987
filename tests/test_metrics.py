"""Test MetricsEngine

Tests the derived counts (bogus instructions, encrypted strings, fake looks,
control-flow functions) and the level fallback.
"""

from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from obfuscalc.metrics import MetricsEngine, derive_counts
from obfuscalc.models import Configuration, CountMetrics, Level


def test_bogus_instructions_low_three_cycles():
    """low / 3 cycles / 20% bogus -> round(500 * 20/15 * 1.6) = 1067"""
    config = Configuration(level=Level.LOW, cycles=3, bogus_percentage=20)
    assert MetricsEngine().bogus_instructions(config) == 1067


def test_medium_single_cycle_counts():
    """A single cycle returns the raw baselines"""
    config = Configuration(level=Level.MEDIUM, cycles=1, bogus_percentage=15,
                           string_encryption=True, fake_looks=True)
    counts = derive_counts(config)

    assert counts == CountMetrics(
        bogus_instructions=1500,
        encrypted_strings=50,
        fake_looks=12,
        control_flow_functions=8,
    )


def test_ultra_five_cycles_counts():
    config = Configuration(level=Level.ULTRA, cycles=5, bogus_percentage=15,
                           string_encryption=True, fake_looks=True)
    counts = derive_counts(config)

    assert counts.bogus_instructions == 17600      # 8000 * 2.2
    assert counts.encrypted_strings == 360         # 200 * 1.8
    assert counts.fake_looks == 100                # 50 * 2.0
    assert counts.control_flow_functions == 104    # 40 * 2.6


def test_disabled_features_yield_zero():
    config = Configuration(level=Level.ULTRA, cycles=4, string_encryption=False, fake_looks=False)
    counts = derive_counts(config)

    assert counts.encrypted_strings == 0
    assert counts.fake_looks == 0
    assert counts.bogus_instructions > 0
    assert counts.control_flow_functions > 0


def test_zero_bogus_percentage():
    config = Configuration(level=Level.HIGH, cycles=2, bogus_percentage=0)
    assert MetricsEngine().bogus_instructions(config) == 0


def test_rounding_is_half_up():
    """low fake looks at 7 cycles: 5 * 2.5 = 12.5 rounds up to 13"""
    config = Configuration(level=Level.LOW, cycles=7, fake_looks=True)
    assert MetricsEngine().fake_looks(config) == 13


def test_control_flow_table():
    engine = MetricsEngine()
    expected = {Level.LOW: 3, Level.MEDIUM: 8, Level.HIGH: 20, Level.ULTRA: 40}
    for level, count in expected.items():
        assert engine.control_flow_functions(Configuration(level=level, cycles=1)) == count


def test_unknown_level_uses_medium_baseline():
    """Unrecognized levels silently fall back to medium"""
    unknown = Configuration(level="extreme", cycles=2, bogus_percentage=25,
                            string_encryption=True, fake_looks=True)
    medium = Configuration(level=Level.MEDIUM, cycles=2, bogus_percentage=25,
                           string_encryption=True, fake_looks=True)

    assert unknown.level is Level.MEDIUM
    assert derive_counts(unknown) == derive_counts(medium)


@pytest.mark.parametrize("level", list(Level))
@pytest.mark.parametrize("cycles", [1, 2, 5, 10])
@pytest.mark.parametrize("bogus", [0, 15, 50, 100])
def test_counts_are_non_negative_integers(level, cycles, bogus):
    config = Configuration(level=level, cycles=cycles, bogus_percentage=bogus,
                           string_encryption=True, fake_looks=True)
    counts = derive_counts(config)

    for value in (counts.bogus_instructions, counts.encrypted_strings,
                  counts.fake_looks, counts.control_flow_functions):
        assert isinstance(value, int)
        assert value >= 0


def test_counts_grow_with_cycles():
    engine = MetricsEngine()
    previous = None
    for cycles in range(1, 6):
        counts = engine.derive_counts(Configuration(level=Level.HIGH, cycles=cycles,
                                                    string_encryption=True, fake_looks=True))
        if previous is not None:
            assert counts.bogus_instructions > previous.bogus_instructions
            assert counts.control_flow_functions > previous.control_flow_functions
        previous = counts
