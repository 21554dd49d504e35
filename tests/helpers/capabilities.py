"""Reusable fakes and builders for capability sync tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

from capsync.domain.capabilities.types import (
    AppIdentifierRef,
    CapabilityIdentifier,
    CapabilitySetting,
    IdentifierResourceKind,
    RemoteCapability,
)
from capsync.domain.ports.capabilities import CapabilityClient

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from capsync.domain.capabilities.types import UpdateRequestEntry

APP_ID = AppIdentifierRef(id="ABC123", identifier="com.example.app")


def make_remote_capability(
    capability_type: str,
    *,
    enabled: bool | None = None,
    settings: Sequence[CapabilitySetting] | None = None,
    app_id: str = APP_ID.id,
) -> RemoteCapability:
    """Build a remote capability the way the portal reports it for ``app_id``."""

    return RemoteCapability(
        id=f"{app_id}_{capability_type}",
        capability_type=capability_type,
        enabled=enabled,
        settings=tuple(settings) if settings is not None else None,
    )


class FakeCapabilityClient(CapabilityClient):
    """In-memory capability client recording every remote call."""

    def __init__(
        self,
        *,
        capabilities: Iterable[RemoteCapability] = (),
        identifiers: Mapping[IdentifierResourceKind, Iterable[CapabilityIdentifier]] | None = None,
        update_error: Exception | None = None,
        create_error: Exception | None = None,
    ) -> None:
        self.capabilities = list(capabilities)
        self.identifiers: dict[IdentifierResourceKind, list[CapabilityIdentifier]] = {
            kind: list(values) for kind, values in (identifiers or {}).items()
        }
        self.update_error = update_error
        self.create_error = create_error
        self.list_capability_calls: list[AppIdentifierRef] = []
        self.list_identifier_calls: list[IdentifierResourceKind] = []
        self.create_calls: list[tuple[IdentifierResourceKind, str]] = []
        self.update_calls: list[tuple[AppIdentifierRef, list[UpdateRequestEntry]]] = []

    def list_capabilities(self, app_id: AppIdentifierRef) -> list[RemoteCapability]:
        self.list_capability_calls.append(app_id)
        return list(self.capabilities)

    def list_identifiers(self, kind: IdentifierResourceKind) -> list[CapabilityIdentifier]:
        self.list_identifier_calls.append(kind)
        return list(self.identifiers.get(kind, ()))

    def create_identifier(
        self,
        kind: IdentifierResourceKind,
        identifier: str,
    ) -> CapabilityIdentifier:
        self.create_calls.append((kind, identifier))
        if self.create_error is not None:
            raise self.create_error
        created = CapabilityIdentifier(id=f"new-{identifier}", identifier=identifier)
        self.identifiers.setdefault(kind, []).append(created)
        return created

    def apply_capability_updates(
        self,
        app_id: AppIdentifierRef,
        entries: Sequence[UpdateRequestEntry],
    ) -> None:
        self.update_calls.append((app_id, list(entries)))
        if self.update_error is not None:
            raise self.update_error

    @property
    def remote_calls(self) -> int:
        return (
            len(self.list_capability_calls)
            + len(self.list_identifier_calls)
            + len(self.create_calls)
            + len(self.update_calls)
        )
