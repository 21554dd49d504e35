from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import pytest

from capsync.adapters.app_store import AppStoreClient
from capsync.adapters.http_resilience import ResilientClient
from capsync.config import AppStoreConfig, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://portal.test/v1/"

type Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def app_store_config() -> AppStoreConfig:
    return AppStoreConfig(
        resilience=ResilienceConfig(
            name="app_store_test",
            base_url=BASE_URL,
            retry=RetryPolicy(total=0),
            default_headers={"Authorization": "Bearer test-token"},
        )
    )


@pytest.fixture
def make_app_store_client(
    app_store_config: AppStoreConfig,
) -> Callable[[Handler], AppStoreClient]:
    def factory(handler: Handler) -> AppStoreClient:
        def client_factory(config: ResilienceConfig) -> ResilientClient:
            return ResilientClient(config, transport=httpx.MockTransport(handler))

        return AppStoreClient(config=app_store_config, client_factory=client_factory)

    return factory
