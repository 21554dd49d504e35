"""Pydantic models describing the developer portal JSON:API payloads."""

from __future__ import annotations

import logging
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field

log = logging.getLogger(__name__)


class AppStoreBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.warning(
            "App Store %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class PagingLinks(AppStoreBaseModel):
    self_link: str | None = Field(default=None, alias="self")
    next: str | None = None


class CapabilityOptionPayload(AppStoreBaseModel):
    key: str
    name: str | None = None
    description: str | None = None
    enabled: bool | None = None
    enabled_by_default: bool | None = Field(default=None, alias="enabledByDefault")
    supports_wildcard: bool | None = Field(default=None, alias="supportsWildcard")


class CapabilitySettingPayload(AppStoreBaseModel):
    key: str
    name: str | None = None
    description: str | None = None
    enabled_by_default: bool | None = Field(default=None, alias="enabledByDefault")
    visible: bool | None = None
    allowed_instances: str | None = Field(default=None, alias="allowedInstances")
    min_instances: int | None = Field(default=None, alias="minInstances")
    options: list[CapabilityOptionPayload] = Field(default_factory=list[CapabilityOptionPayload])


class CapabilityAttributes(AppStoreBaseModel):
    capability_type: str | None = Field(default=None, alias="capabilityType")
    enabled: bool | None = None
    settings: list[CapabilitySettingPayload] | None = None


class BundleIdCapabilityResource(AppStoreBaseModel):
    type: str = "bundleIdCapabilities"
    id: str
    attributes: CapabilityAttributes | None = None
    relationships: dict[str, object] | None = None
    links: dict[str, object] | None = None


class BundleIdCapabilitiesResponse(AppStoreBaseModel):
    data: list[BundleIdCapabilityResource]
    links: PagingLinks | None = None
    meta: dict[str, object] | None = None


class IdentifierAttributes(AppStoreBaseModel):
    identifier: str
    name: str | None = None


class IdentifierResource(AppStoreBaseModel):
    type: str
    id: str
    attributes: IdentifierAttributes
    relationships: dict[str, object] | None = None
    links: dict[str, object] | None = None


class IdentifierListResponse(AppStoreBaseModel):
    data: list[IdentifierResource]
    links: PagingLinks | None = None
    meta: dict[str, object] | None = None


class IdentifierResponse(AppStoreBaseModel):
    data: IdentifierResource
    links: dict[str, object] | None = None


class ErrorPayload(AppStoreBaseModel):
    id: str | None = None
    status: str | None = None
    code: str | None = None
    title: str | None = None
    detail: str | None = None
    source: dict[str, object] | None = None


class ErrorResponse(AppStoreBaseModel):
    errors: list[ErrorPayload]

    def describe(self) -> str:
        parts = [error.detail or error.title or error.code or "" for error in self.errors]
        return "\n".join(part for part in parts if part)
