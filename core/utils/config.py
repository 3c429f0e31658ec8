"""
Configuration utility functions
"""

from pathlib import Path
from typing import Any

import yaml

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def resolve_config_path(filepath: str) -> Path:
    """
    Resolve a config path

    Absolute paths and paths that exist relative to the working directory are
    used as-is; anything else is resolved against the project root so the
    services can be started from any directory.
    """
    path = Path(filepath)
    if path.is_absolute() or path.exists():
        return path
    return PROJECT_ROOT / path


def load_yaml(filepath: str) -> dict[str, Any]:
    """
    Load YAML file and return as dictionary

    Args:
        filepath: Path to YAML file (relative or absolute)

    Returns:
        Dictionary with YAML data (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid

    Example:
        >>> config = load_yaml("config/providers/market_data.yaml")
        >>> print(config["gateway"]["cache_ttl_seconds"])
        60
    """
    path = resolve_config_path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_yaml_safe(filepath: str) -> dict[str, Any]:
    """
    Load YAML file with fallback to empty dict if file doesn't exist

    Example:
        >>> config = load_yaml_safe("config/optional.yaml")
        >>> # Returns {} if file doesn't exist
    """
    try:
        return load_yaml(filepath)
    except (FileNotFoundError, yaml.YAMLError):
        return {}
