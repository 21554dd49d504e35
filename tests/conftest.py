from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from capsync.config.sync import NO_CAPABILITY_SYNC_ENV
from capsync.domain.capabilities import SyncOptions
from tests.helpers.capabilities import FakeCapabilityClient

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture(autouse=True)
def _clean_capsync_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (NO_CAPABILITY_SYNC_ENV, "APP_STORE_API_TOKEN", "APP_STORE_API_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def fake_client() -> FakeCapabilityClient:
    return FakeCapabilityClient()


@pytest.fixture
def default_options() -> SyncOptions:
    return SyncOptions()
