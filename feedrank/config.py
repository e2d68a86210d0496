"""
Configuration loader
"""
import os
import yaml
from pathlib import Path
from feedrank.core.wilson import z_for_confidence
from feedrank.models import GameConfig


DEFAULT_CONFIG_PATH = "config/game.yaml"


def resolve_config_path(config_path: str = None) -> str:
    """Explicit path, else FEEDRANK_CONFIG env var, else the default"""
    return config_path or os.environ.get("FEEDRANK_CONFIG", DEFAULT_CONFIG_PATH)


def load_config(config_path: str = None) -> GameConfig:
    """
    Load game configuration from YAML file

    Args:
        config_path: Path to config file

    Returns:
        GameConfig object

    Raises:
        FileNotFoundError: If config file not found
        UnsupportedConfidenceLevel: If confidence has no known z-value
    """
    path = Path(resolve_config_path(config_path))

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    config = GameConfig(**data)

    # Fail at load time rather than on the first round
    z_for_confidence(config.confidence)

    return config
