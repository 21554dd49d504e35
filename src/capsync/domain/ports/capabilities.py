"""Ports for reading and updating remote capability state."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from capsync.domain.capabilities.types import (
        AppIdentifierRef,
        CapabilityIdentifier,
        IdentifierResourceKind,
        RemoteCapability,
        UpdateRequestEntry,
    )


@runtime_checkable
class CapabilityReader(Protocol):
    def list_capabilities(self, app_id: AppIdentifierRef) -> list[RemoteCapability]: ...


@runtime_checkable
class CapabilityUpdateClient(Protocol):
    """Applies a batch of capability updates in one remote call.

    Implementations raise ``RemoteServiceError`` when the service rejects it.
    """

    def apply_capability_updates(
        self,
        app_id: AppIdentifierRef,
        entries: Sequence[UpdateRequestEntry],
    ) -> None: ...


@runtime_checkable
class CapabilityIdentifierClient(Protocol):
    def list_identifiers(self, kind: IdentifierResourceKind) -> list[CapabilityIdentifier]: ...

    def create_identifier(
        self,
        kind: IdentifierResourceKind,
        identifier: str,
    ) -> CapabilityIdentifier: ...


@runtime_checkable
class CapabilityClient(
    CapabilityReader,
    CapabilityUpdateClient,
    CapabilityIdentifierClient,
    Protocol,
):
    """Full remote surface needed by one capability sync."""


__all__ = [
    "CapabilityClient",
    "CapabilityIdentifierClient",
    "CapabilityReader",
    "CapabilityUpdateClient",
]
