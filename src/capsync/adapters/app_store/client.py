"""HTTP client for the Apple developer portal capability endpoints."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from capsync.adapters.http_resilience import ResilientClient
from capsync.domain.capabilities.errors import RemoteServiceError

from .schema import (
    BundleIdCapabilitiesResponse,
    ErrorResponse,
    IdentifierListResponse,
    IdentifierResponse,
)
from .translator import (
    build_capability_update_payload,
    build_identifier_create_payload,
    parse_capability_identifier,
    parse_remote_capability,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    import httpx

    from capsync.config.app_store import AppStoreConfig
    from capsync.config.http_resilience import ResilienceConfig
    from capsync.domain.capabilities.types import (
        AppIdentifierRef,
        CapabilityIdentifier,
        IdentifierResourceKind,
        RemoteCapability,
        UpdateRequestEntry,
    )

log = getLogger(__name__)

_PAGE_LIMIT = 200


class AppStoreAPIError(RemoteServiceError):
    """Raised when the developer portal rejects a request."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AppStoreClient:
    """Capability client for one developer portal account."""

    def __init__(
        self,
        *,
        config: AppStoreConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def list_capabilities(self, app_id: AppIdentifierRef) -> list[RemoteCapability]:
        return asyncio.run(self._list_capabilities_async(app_id))

    def list_identifiers(self, kind: IdentifierResourceKind) -> list[CapabilityIdentifier]:
        return asyncio.run(self._list_identifiers_async(kind))

    def create_identifier(
        self,
        kind: IdentifierResourceKind,
        identifier: str,
    ) -> CapabilityIdentifier:
        return asyncio.run(self._create_identifier_async(kind, identifier))

    def apply_capability_updates(
        self,
        app_id: AppIdentifierRef,
        entries: Sequence[UpdateRequestEntry],
    ) -> None:
        asyncio.run(self._apply_capability_updates_async(app_id, entries))

    async def _list_capabilities_async(self, app_id: AppIdentifierRef) -> list[RemoteCapability]:
        capabilities: list[RemoteCapability] = []
        url: str | None = f"bundleIds/{app_id.id}/bundleIdCapabilities"
        params: dict[str, str] | None = {"limit": str(_PAGE_LIMIT)}
        async with self._client_factory(self._resilience) as client:
            while url is not None:
                payload = await self._get_json(client, url, params=params)
                page = BundleIdCapabilitiesResponse.model_validate(payload)
                capabilities.extend(
                    parse_remote_capability(resource, app_id=app_id.id) for resource in page.data
                )
                # ``links.next`` already carries the query string.
                url = page.links.next if page.links else None
                params = None
        log.debug("Fetched %d capabilities for %s", len(capabilities), app_id.identifier)
        return capabilities

    async def _list_identifiers_async(
        self,
        kind: IdentifierResourceKind,
    ) -> list[CapabilityIdentifier]:
        identifiers: list[CapabilityIdentifier] = []
        url: str | None = str(kind)
        params: dict[str, str] | None = {"limit": str(_PAGE_LIMIT)}
        async with self._client_factory(self._resilience) as client:
            while url is not None:
                payload = await self._get_json(client, url, params=params)
                page = IdentifierListResponse.model_validate(payload)
                identifiers.extend(parse_capability_identifier(resource) for resource in page.data)
                url = page.links.next if page.links else None
                params = None
        log.debug("Fetched %d %s", len(identifiers), kind)
        return identifiers

    async def _create_identifier_async(
        self,
        kind: IdentifierResourceKind,
        identifier: str,
    ) -> CapabilityIdentifier:
        async with self._client_factory(self._resilience) as client:
            response = await client.post(
                str(kind),
                json=build_identifier_create_payload(kind, identifier),
            )
        _raise_for_error(response)
        return parse_capability_identifier(IdentifierResponse.model_validate(response.json()).data)

    async def _apply_capability_updates_async(
        self,
        app_id: AppIdentifierRef,
        entries: Sequence[UpdateRequestEntry],
    ) -> None:
        async with self._client_factory(self._resilience) as client:
            response = await client.patch(
                f"bundleIds/{app_id.id}",
                json=build_capability_update_payload(app_id, entries),
            )
        _raise_for_error(response)

    async def _get_json(
        self,
        client: ResilientClient,
        url: str,
        *,
        params: dict[str, str] | None,
    ) -> object:
        response = await client.get(url, params=params)
        _raise_for_error(response)
        payload = response.json()
        if not isinstance(payload, dict):
            raise AppStoreAPIError(
                "Unexpected App Store response payload",
                status=response.status_code,
            )
        return payload


def _raise_for_error(response: httpx.Response) -> None:
    if not response.is_error:
        return
    message = f"App Store request failed with status {response.status_code}"
    try:
        detail = ErrorResponse.model_validate(response.json()).describe()
    except ValueError:
        detail = response.text
    if detail:
        message = f"{message}: {detail}"
    log.error("%s %s: %s", response.request.method, response.request.url, message)
    raise AppStoreAPIError(message, status=response.status_code)
