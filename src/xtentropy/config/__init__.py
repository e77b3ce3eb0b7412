"""Configuration loading, schema, and defaults."""

from xtentropy.config.loader import ConfigError, load_config
from xtentropy.config.schema import EntropyToolConfig

__all__ = [
    "ConfigError",
    "EntropyToolConfig",
    "load_config",
]
