"""Apple developer portal API configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_APP_STORE_BASE_URL = "https://developer.apple.com/services-account/v1/"
APP_STORE_TOKEN_ENV = "APP_STORE_API_TOKEN"
APP_STORE_BASE_URL_ENV = "APP_STORE_API_BASE_URL"


@dataclass(frozen=True, slots=True)
class AppStoreConfig:
    resilience: ResilienceConfig


def get_app_store_config() -> AppStoreConfig:
    token = require_env_var(APP_STORE_TOKEN_ENV)
    base_url = os.getenv(APP_STORE_BASE_URL_ENV) or DEFAULT_APP_STORE_BASE_URL

    resilience = ResilienceConfig(
        name="app_store",
        base_url=base_url,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(total=3),
        default_headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/vnd.api+json",
        },
    )

    return AppStoreConfig(resilience=resilience)
