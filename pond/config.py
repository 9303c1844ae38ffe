"""Cache configuration with YAML support."""

from __future__ import annotations

from pathlib import Path

import yaml

from pond.schemas import CacheConfig


def load_config(yaml_path: str | Path) -> CacheConfig:
    """Load cache configuration from a YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        CacheConfig instance

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If the file is malformed YAML, is empty or not a mapping,
            or fails CacheConfig validation
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {yaml_path}: {e}") from e

    if not data or not isinstance(data, dict):
        raise ValueError(f"Empty or invalid YAML file: {yaml_path}")

    try:
        return CacheConfig.from_dict(data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {yaml_path}: {e}") from e


def save_config(config: CacheConfig, yaml_path: str | Path) -> None:
    """Save cache configuration to a YAML file.

    Args:
        config: CacheConfig to save
        yaml_path: Path where to save YAML file
    """
    yaml_path = Path(yaml_path)
    yaml_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.to_dict()

    with open(yaml_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
