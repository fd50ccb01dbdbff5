"""Configuration loader from YAML."""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .schema import PoolConfig


def load_config(yaml_path: str = None) -> PoolConfig:
    """
    Load configuration from YAML file.

    Args:
        yaml_path: Path to YAML file (defaults to defaults.yaml)

    Returns:
        PoolConfig object
    """
    if yaml_path is None:
        yaml_path = Path(__file__).parent / "defaults.yaml"

    with open(yaml_path, 'r') as f:
        data = yaml.safe_load(f)

    return PoolConfig.from_dict(data)


def config_from_dict(data: Dict[str, Any]) -> PoolConfig:
    """Create config from dictionary."""
    return PoolConfig.from_dict(data)


def configure_logging(config: PoolConfig) -> None:
    """Apply the configured level to the yieldpool logger hierarchy."""
    logging.getLogger("yieldpool").setLevel(config.logging.level)
