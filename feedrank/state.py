"""
Global application state
Shared resources accessible across all modules
"""
import random

from feedrank.models import GameConfig

# Active game configuration (replaced at startup from YAML)
CONFIG: GameConfig = GameConfig()

# Shared random source; reseeded from CONFIG.seed at startup
RNG: random.Random = random.Random()


def apply_config(config: GameConfig) -> None:
    """Install a configuration and reseed the shared random source"""
    global CONFIG, RNG
    CONFIG = config
    RNG = random.Random(config.seed)
