"""Configuration sources: mappings and YAML/JSON preset files"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Union
import logging

import yaml

from obfuscalc.exceptions import ConfigurationError
from obfuscalc.models import Configuration

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")
JSON_SUFFIXES = (".json",)


def configuration_from_mapping(data: Mapping[str, Any]) -> Configuration:
    """
    Build a Configuration from a plain mapping.

    Accepts either the configuration itself or an export document, in which
    case the nested "configuration" entry is used.
    """
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Configuration must be a mapping, got {type(data).__name__}")
    if isinstance(data.get("configuration"), Mapping):
        data = data["configuration"]
    return Configuration.from_dict(data)


def _read_document(path: Path) -> Any:
    suffix = path.suffix.lower()
    with open(path, 'r', encoding='utf-8') as f:
        if suffix in YAML_SUFFIXES:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if suffix in JSON_SUFFIXES:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    raise ConfigurationError(f"Unsupported configuration format: {path.suffix or path.name}")


def load_configuration(path: Union[str, Path]) -> Configuration:
    """Load a Configuration from a .yaml/.yml or .json preset file"""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    data = _read_document(path)
    if data is None:
        data = {}
    config = configuration_from_mapping(data)
    logger.info(f"Loaded configuration from {path}")
    return config


def save_configuration(config: Configuration, path: Union[str, Path]) -> Path:
    """Write a Configuration preset, format chosen by file extension"""
    path = Path(path)
    data: Dict = config.to_dict()
    suffix = path.suffix.lower()

    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise ConfigurationError(f"Unsupported configuration format: {path.suffix or path.name}")

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        if suffix in YAML_SUFFIXES:
            yaml.safe_dump(data, f, sort_keys=False)
        else:
            json.dump(data, f, indent=2)

    logger.info(f"Saved configuration to {path}")
    return path
