"""Config loading and validation."""

from .schema import (
    DEFAULT_CONFIG_PATH,
    ENV_OVERRIDES,
    AppConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG_PATH",
    "ENV_OVERRIDES",
    "load_config",
]
