"""Application configuration helpers."""

from __future__ import annotations

from .app_store import AppStoreConfig, get_app_store_config
from .env import env_flag, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    InvalidConfigurationError,
    MissingConfigurationError,
)
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .sync import CapabilitySyncConfig, get_capability_sync_config

__all__ = [
    "AppStoreConfig",
    "CapabilitySyncConfig",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "env_flag",
    "get_app_store_config",
    "get_capability_sync_config",
    "require_env_var",
    "require_env_vars",
]
