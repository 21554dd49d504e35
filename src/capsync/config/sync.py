"""Capability synchronisation switches."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag

NO_CAPABILITY_SYNC_ENV = "CAPSYNC_NO_CAPABILITY_SYNC"


@dataclass(frozen=True, slots=True)
class CapabilitySyncConfig:
    enabled: bool = True


def get_capability_sync_config() -> CapabilitySyncConfig:
    return CapabilitySyncConfig(enabled=not env_flag(NO_CAPABILITY_SYNC_ENV))
