"""Test configuration sources (mappings, YAML and JSON presets)"""

import json
from pathlib import Path
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
import yaml

from obfuscalc.calculator import ParameterCalculator
from obfuscalc.exceptions import ConfigurationError
from obfuscalc.models import Configuration, Level
from obfuscalc.sources import configuration_from_mapping, load_configuration, save_configuration


def test_load_yaml_preset(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text(
        "level: high\n"
        "cycles: 2\n"
        "bogusPercentage: 20\n"
        "stringEncryption: true\n"
    )

    config = load_configuration(preset)
    assert config == Configuration(level=Level.HIGH, cycles=2, bogus_percentage=20,
                                   string_encryption=True)


def test_load_json_preset(tmp_path):
    preset = tmp_path / "preset.json"
    preset.write_text(json.dumps({"level": "ultra", "cycles": 4, "fake_looks": True}))

    config = load_configuration(preset)
    assert config == Configuration(level=Level.ULTRA, cycles=4, fake_looks=True)


def test_load_export_document(tmp_path):
    """An export file can be fed back in as a preset"""
    config = Configuration(level=Level.LOW, cycles=3, bogus_percentage=5, string_encryption=True)
    exported = ParameterCalculator().export_configuration(config)
    path = tmp_path / "export.json"
    path.write_text(json.dumps(exported))

    assert load_configuration(path) == config


def test_empty_yaml_uses_defaults(tmp_path):
    preset = tmp_path / "empty.yml"
    preset.write_text("")
    assert load_configuration(preset) == Configuration()


def test_unknown_level_in_preset_falls_back(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("level: paranoid\ncycles: 2\n")
    assert load_configuration(preset).level is Level.MEDIUM


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.yaml")


def test_unsupported_extension(tmp_path):
    preset = tmp_path / "preset.toml"
    preset.write_text("level = 'high'")
    with pytest.raises(ConfigurationError, match="Unsupported"):
        load_configuration(preset)


def test_non_mapping_document(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("- high\n- 2\n")
    with pytest.raises(ConfigurationError, match="mapping"):
        load_configuration(preset)


def test_invalid_yaml(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("level: [high\n")
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_configuration(preset)


def test_invalid_json(tmp_path):
    preset = tmp_path / "preset.json"
    preset.write_text("{level: high}")
    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_configuration(preset)


def test_malformed_cycles(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("cycles: lots\n")
    with pytest.raises(ConfigurationError):
        load_configuration(preset)


@pytest.mark.parametrize("body,message", [
    ("cycles: 0\n", "cycles"),
    ("cycles: -5\n", "cycles"),
    ("bogusPercentage: 250\n", "bogusPercentage"),
    ("bogusPercentage: -1\n", "bogusPercentage"),
])
def test_out_of_range_values(tmp_path, body, message):
    preset = tmp_path / "preset.yaml"
    preset.write_text("level: low\n" + body)
    with pytest.raises(ConfigurationError, match=message):
        load_configuration(preset)


def test_range_boundaries_accepted(tmp_path):
    preset = tmp_path / "preset.yaml"
    preset.write_text("cycles: 1\nbogusPercentage: 100\n")
    assert load_configuration(preset) == Configuration(cycles=1, bogus_percentage=100)


@pytest.mark.parametrize("name", ["saved.yaml", "saved.yml", "nested/saved.json"])
def test_save_and_reload(tmp_path, name):
    config = Configuration(level=Level.ULTRA, cycles=5, bogus_percentage=40,
                           string_encryption=True, fake_looks=True)
    path = save_configuration(config, tmp_path / name)

    assert path.exists()
    assert load_configuration(path) == config


def test_saved_yaml_is_plain(tmp_path):
    path = save_configuration(Configuration(level=Level.LOW), tmp_path / "saved.yaml")
    data = yaml.safe_load(path.read_text())
    assert data == {
        "level": "low",
        "cycles": 1,
        "bogusPercentage": 15,
        "stringEncryption": False,
        "fakeLooks": False,
    }


def test_save_unsupported_extension(tmp_path):
    with pytest.raises(ConfigurationError):
        save_configuration(Configuration(), tmp_path / "saved.ini")


def test_configuration_from_mapping_rejects_lists():
    with pytest.raises(ConfigurationError):
        configuration_from_mapping(["high", 2])
