"""Translate developer portal payloads to and from capability domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from capsync.domain.capabilities.resolvers import DATA_PROTECTION_SETTING_KEY
from capsync.domain.capabilities.types import (
    CapabilityIdentifier,
    CapabilityOption,
    CapabilitySetting,
    CapabilityType,
    PushNotificationsOption,
    RemoteCapability,
    parse_capability_type,
)

from .schema import BundleIdCapabilityResource, IdentifierResource

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from capsync.domain.capabilities.types import AppIdentifierRef, UpdateRequestEntry

    from .schema import CapabilitySettingPayload

type JSONObject = dict[str, object]

PUSH_NOTIFICATION_FEATURES_KEY = "PUSH_NOTIFICATION_FEATURES"
ICLOUD_VERSION_KEY = "ICLOUD_VERSION"
ICLOUD_XCODE_6 = "XCODE_6"
APPLE_ID_AUTH_APP_CONSENT_KEY = "APPLE_ID_AUTH_APP_CONSENT"
APPLE_ID_AUTH_PRIMARY_APP_CONSENT = "PRIMARY_APP_CONSENT"


def _ensure_capability_resource(
    payload: BundleIdCapabilityResource | Mapping[str, object],
) -> BundleIdCapabilityResource:
    if isinstance(payload, BundleIdCapabilityResource):
        return payload
    return BundleIdCapabilityResource.model_validate(payload)


def _to_setting(payload: CapabilitySettingPayload) -> CapabilitySetting:
    return CapabilitySetting(
        key=payload.key,
        options=tuple(option.key for option in payload.options),
    )


def parse_remote_capability(
    payload: BundleIdCapabilityResource | Mapping[str, object],
    *,
    app_id: str | None = None,
) -> RemoteCapability:
    resource = _ensure_capability_resource(payload)
    attributes = resource.attributes
    explicit_type = attributes.capability_type if attributes else None
    settings = None
    if attributes is not None and attributes.settings is not None:
        settings = tuple(_to_setting(setting) for setting in attributes.settings)
    return RemoteCapability(
        id=resource.id,
        capability_type=parse_capability_type(
            resource.id,
            explicit_type=explicit_type,
            app_id=app_id,
        ),
        enabled=attributes.enabled if attributes else None,
        settings=settings,
    )


def parse_capability_identifier(
    payload: IdentifierResource | Mapping[str, object],
) -> CapabilityIdentifier:
    resource = (
        payload
        if isinstance(payload, IdentifierResource)
        else IdentifierResource.model_validate(payload)
    )
    return CapabilityIdentifier(id=resource.id, identifier=resource.attributes.identifier)


def identifier_display_name(identifier: str) -> str:
    """Portal names only allow letters, digits and spaces."""

    cleaned = "".join(char if char.isalnum() else " " for char in identifier)
    return " ".join(cleaned.split()) or "capsync"


def build_identifier_create_payload(resource_type: str, identifier: str) -> JSONObject:
    return {
        "data": {
            "type": resource_type,
            "attributes": {
                "identifier": identifier,
                "name": identifier_display_name(identifier),
            },
        }
    }


def _setting(key: str, option: str) -> JSONObject:
    return {"key": key, "options": [{"key": option}]}


def capability_settings(entry: UpdateRequestEntry) -> list[JSONObject]:
    """Settings sent along with an update entry; empty when the option is OFF."""

    if entry.option == CapabilityOption.OFF:
        return []
    match entry.capability_type:
        case CapabilityType.DATA_PROTECTION:
            return [_setting(DATA_PROTECTION_SETTING_KEY, entry.option)]
        case CapabilityType.PUSH_NOTIFICATIONS:
            if entry.option == PushNotificationsOption.PUSH_NOTIFICATION_FEATURE_BROADCAST:
                return [_setting(PUSH_NOTIFICATION_FEATURES_KEY, entry.option)]
            return []
        case CapabilityType.ICLOUD:
            return [_setting(ICLOUD_VERSION_KEY, ICLOUD_XCODE_6)]
        case CapabilityType.APPLE_ID_AUTH:
            return [_setting(APPLE_ID_AUTH_APP_CONSENT_KEY, APPLE_ID_AUTH_PRIMARY_APP_CONSENT)]
        case _:
            return []


def _capability_resource(entry: UpdateRequestEntry) -> JSONObject:
    relationships: JSONObject = {
        "capability": {"data": {"type": "capabilities", "id": entry.capability_type}},
    }
    for kind, remote_ids in (entry.relationships or {}).items():
        relationships[kind] = {
            "data": [{"type": kind, "id": remote_id} for remote_id in remote_ids],
        }
    return {
        "type": "bundleIdCapabilities",
        "attributes": {
            "enabled": entry.option != CapabilityOption.OFF,
            "settings": capability_settings(entry),
        },
        "relationships": relationships,
    }


def build_capability_update_payload(
    app_id: AppIdentifierRef,
    entries: Sequence[UpdateRequestEntry],
) -> JSONObject:
    """JSON:API body for ``PATCH bundleIds/{id}`` carrying the whole batch."""

    return {
        "data": {
            "type": "bundleIds",
            "id": app_id.id,
            "attributes": {"identifier": app_id.identifier},
            "relationships": {
                "bundleIdCapabilities": {
                    "data": [_capability_resource(entry) for entry in entries],
                },
            },
        }
    }
