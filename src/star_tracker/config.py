"""
Configuration

Settings are read from YAML and merged over DEFAULT_CONFIG:

    1. DEFAULT_CONFIG below
    2. config.yaml next to this module, if present
    3. an explicit path (e.g. --config), if given

The observer position has no default. Without it the location provider
reports no fix instead of pointing from latitude/longitude 0/0.
"""

import copy
import os
from typing import Optional

import yaml

from .errors import ConfigurationError
from .motion import DEFAULT_STEPS_PER_REVOLUTION, MountProfile

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
CONFIG_PATH = os.path.join(BASE_DIR, "config.yaml")
DEFAULT_CONFIG = {
    "observer": {"latitude": None, "longitude": None},
    "mount": {
        "steps_per_revolution": DEFAULT_STEPS_PER_REVOLUTION,
        "shortest_path": False,
    },
    "actuator": {"url": "http://localhost:8080", "timeout": 5.0},
    "catalog": {"path": None},
    "simulator": {"host": "127.0.0.1", "port": 8080},
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merges two dictionaries."""
    for key, value in override.items():
        if isinstance(value, dict) and key in base and isinstance(base[key], dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def read_yaml(path: str) -> dict:
    """Reads one YAML mapping. An empty file is an empty mapping."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Error loading config: {e}", config_file=path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping", config_file=path)
    return data


def load_config(config_path: Optional[str] = None) -> dict:
    """Loads configuration from defaults, package config.yaml and config_path."""
    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(CONFIG_PATH):
        deep_merge(config, read_yaml(CONFIG_PATH))

    if config_path:
        if not os.path.exists(config_path):
            raise ConfigurationError("Config file not found", config_file=config_path)
        if os.path.abspath(config_path) != os.path.abspath(CONFIG_PATH):
            deep_merge(config, read_yaml(config_path))

    return config


def profile_from_config(config: dict) -> MountProfile:
    """Builds the mount profile from the 'mount' section."""
    mount_cfg = config.get("mount") or {}
    return MountProfile(
        steps_per_revolution=mount_cfg.get(
            "steps_per_revolution", DEFAULT_STEPS_PER_REVOLUTION
        ),
        shortest_path=bool(mount_cfg.get("shortest_path", False)),
    )
