"""Capability sync value types.

Enum values are transmitted verbatim to the remote API, so they must match the
developer portal's identifiers exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal

type JSONValue = bool | int | float | str | None | list[JSONValue] | dict[str, JSONValue]
type EntitlementsMap = dict[str, JSONValue]


class CapabilityType(StrEnum):
    ACCESS_WIFI = "ACCESS_WIFI_INFORMATION"
    APP_ATTEST = "APP_ATTEST"
    APP_GROUP = "APP_GROUPS"
    APPLE_ID_AUTH = "APPLE_ID_AUTH"
    APPLE_PAY = "APPLE_PAY"
    APPLE_PAY_LATER_MERCHANDISING = "APPLE_PAY_LATER_MERCHANDISING"
    ASSOCIATED_DOMAINS = "ASSOCIATED_DOMAINS"
    AUTO_FILL_CREDENTIAL = "AUTOFILL_CREDENTIAL_PROVIDER"
    CLASS_KIT = "CLASSKIT"
    DATA_PROTECTION = "DATA_PROTECTION"
    DRIVER_KIT_ALLOW_THIRD_PARTY_USER_CLIENTS = "DRIVERKIT_ALLOW_THIRD_PARTY_USER_CLIENTS"
    DRIVER_KIT_COMMUNICATES_WITH_DRIVERS = "DRIVERKIT_COMMUNICATES_WITH_DRIVERS"
    DRIVER_KIT_FAMILY_AUDIO_PUB = "DRIVERKIT_FAMILY_AUDIO_PUB"
    DRIVER_KIT_FAMILY_HID_DEVICE_PUB = "DRIVERKIT_FAMILY_HID_DEVICE_PUB"
    DRIVER_KIT_FAMILY_HID_EVENT_SERVICE_PUB = "DRIVERKIT_FAMILY_HID_EVENTSERVICE_PUB"
    DRIVER_KIT_FAMILY_NETWORKING_PUB = "DRIVERKIT_FAMILY_NETWORKING_PUB"
    DRIVER_KIT_FAMILY_SCSI_CONTROLLER_PUB = "DRIVERKIT_FAMILY_SCSICONTROLLER_PUB"
    DRIVER_KIT_FAMILY_SERIAL_PUB = "DRIVERKIT_FAMILY_SERIAL_PUB"
    DRIVER_KIT_PUBLIC = "DRIVERKIT_PUBLIC"
    DRIVER_KIT_TRANSPORT_HID_PUB = "DRIVERKIT_TRANSPORT_HID_PUB"
    DRIVER_KIT_USB_TRANSPORT_PUB = "DRIVERKIT_USB_TRANSPORT_PUB"
    EXTENDED_VIRTUAL_ADDRESSING = "EXTENDED_VIRTUAL_ADDRESSING"
    FAMILY_CONTROLS = "FAMILY_CONTROLS"
    FILE_PROVIDER_TESTING_MODE = "FILEPROVIDER_TESTINGMODE"
    FONT_INSTALLATION = "FONT_INSTALLATION"
    GAME_CENTER = "GAME_CENTER"
    GROUP_ACTIVITIES = "GROUP_ACTIVITIES"
    HEALTH_KIT = "HEALTHKIT"
    HEALTH_KIT_RECALIBRATE_ESTIMATES = "HEALTHKIT_RECALIBRATE_ESTIMATES"
    HLS_LOW_LATENCY = "COREMEDIA_HLS_LOW_LATENCY"
    HOME_KIT = "HOMEKIT"
    HOT_SPOT = "HOT_SPOT"
    ICLOUD = "ICLOUD"
    IN_APP_PURCHASE = "IN_APP_PURCHASE"
    INCREASED_MEMORY_LIMIT = "INCREASED_MEMORY_LIMIT"
    INTER_APP_AUDIO = "INTER_APP_AUDIO"
    JOURNALING_SUGGESTIONS = "JOURNALING_SUGGESTIONS"
    MANAGED_APP_INSTALLATION_UI = "MANAGED_APP_INSTALLATION_UI"
    MAPS = "MAPS"
    MATTER_ALLOW_SETUP_PAYLOAD = "MATTER_ALLOW_SETUP_PAYLOAD"
    MDM_MANAGED_ASSOCIATED_DOMAINS = "MDM_MANAGED_ASSOCIATED_DOMAINS"
    MEDIA_DEVICE_DISCOVERY = "MEDIA_DEVICE_DISCOVERY"
    MESSAGES_COLLABORATION = "MESSAGES_COLLABORATION"
    MULTIPATH = "MULTIPATH"
    NETWORK_CUSTOM_PROTOCOL = "NETWORK_CUSTOM_PROTOCOL"
    NETWORK_EXTENSIONS = "NETWORK_EXTENSIONS"
    NETWORK_SLICING = "NETWORK_SLICING"
    NFC_TAG_READING = "NFC_TAG_READING"
    ON_DEMAND_INSTALL_EXTENSIONS = "ON_DEMAND_INSTALL_EXTENSIONS"
    PERSONAL_VPN = "PERSONAL_VPN"
    PUSH_NOTIFICATIONS = "PUSH_NOTIFICATIONS"
    PUSH_TO_TALK = "PUSH_TO_TALK"
    SENSITIVE_CONTENT_ANALYSIS = "SENSITIVE_CONTENT_ANALYSIS"
    SHALLOW_DEPTH_PRESSURE = "SHALLOW_DEPTH_PRESSURE"
    SHARED_WITH_YOU = "SHARED_WITH_YOU"
    SIRI_KIT = "SIRIKIT"
    SYSTEM_EXTENSION_INSTALL = "SYSTEM_EXTENSION_INSTALL"
    TAP_TO_DISPLAY_ID = "TAP_TO_DISPLAY_ID"
    TAP_TO_PAY_ON_IPHONE = "TAP_TO_PAY_ON_IPHONE"
    USER_MANAGEMENT = "USER_MANAGEMENT"
    USER_NOTIFICATIONS_COMMUNICATION = "USERNOTIFICATIONS_COMMUNICATION"
    USER_NOTIFICATIONS_TIME_SENSITIVE = "USERNOTIFICATIONS_TIMESENSITIVE"
    WALLET = "WALLET"
    WEATHER_KIT = "WEATHERKIT"
    WIRELESS_ACCESSORY = "WIRELESS_ACCESSORY_CONFIGURATION"


class CapabilityOption(StrEnum):
    ON = "ON"
    OFF = "OFF"


class DataProtectionOption(StrEnum):
    COMPLETE_PROTECTION = "COMPLETE_PROTECTION"
    PROTECTED_UNLESS_OPEN = "PROTECTED_UNLESS_OPEN"
    PROTECTED_UNTIL_FIRST_USER_AUTH = "PROTECTED_UNTIL_FIRST_USER_AUTH"


class PushNotificationsOption(StrEnum):
    PUSH_NOTIFICATION_FEATURE_BROADCAST = "PUSH_NOTIFICATION_FEATURE_BROADCAST"


type RemoteOptionValue = CapabilityOption | DataProtectionOption | PushNotificationsOption


class IdentifierResourceKind(StrEnum):
    """Separately managed identifier resources a capability can reference.

    The value is both the remote resource type and the relationship name used
    in capability update requests.
    """

    MERCHANT_ID = "merchantIds"
    APP_GROUP = "appGroups"
    CLOUD_CONTAINER = "cloudContainers"


@dataclass(frozen=True, slots=True)
class AppIdentifierRef:
    """Remote application identifier targeted by a sync.

    ``id`` is the portal's opaque resource id, ``identifier`` the bundle
    identifier such as ``com.example.app``.
    """

    id: str
    identifier: str


@dataclass(frozen=True, slots=True)
class CapabilitySetting:
    key: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoteCapability:
    """Capability already registered for an application identifier.

    ``enabled is None`` means the remote representation carried no ``enabled``
    attribute. ``settings is None`` marks a plain boolean capability; an empty
    tuple is a settings payload that happens to be empty.
    """

    id: str
    capability_type: str
    enabled: bool | None = None
    settings: tuple[CapabilitySetting, ...] | None = None

    def is_type(self, capability_type: str) -> bool:
        return self.capability_type == capability_type

    def first_setting_option(self, key: str) -> str | None:
        if not self.settings:
            return None
        setting = self.settings[0]
        if setting.key != key or not setting.options:
            return None
        return setting.options[0]


@dataclass(frozen=True, slots=True)
class CapabilityIdentifier:
    id: str
    identifier: str


@dataclass(frozen=True, slots=True)
class SyncOptions:
    uses_broadcast_push_notifications: bool = False


class SyncOperationKind(StrEnum):
    SKIP = "skip"
    ENABLE = "enable"
    DISABLE = "disable"


@dataclass(frozen=True, slots=True)
class Skip:
    kind: Literal[SyncOperationKind.SKIP] = SyncOperationKind.SKIP


@dataclass(frozen=True, slots=True)
class Disable:
    kind: Literal[SyncOperationKind.DISABLE] = SyncOperationKind.DISABLE


@dataclass(frozen=True, slots=True)
class Enable:
    option: RemoteOptionValue
    kind: Literal[SyncOperationKind.ENABLE] = SyncOperationKind.ENABLE


type SyncOperation = Skip | Disable | Enable

SKIP = Skip()
DISABLE = Disable()
ENABLE_ON = Enable(CapabilityOption.ON)


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateRequestEntry:
    capability_type: str
    option: RemoteOptionValue
    relationships: dict[IdentifierResourceKind, tuple[str, ...]] | None = None


def parse_capability_type(
    capability_id: str,
    *,
    explicit_type: str | None = None,
    app_id: str | None = None,
) -> str:
    """Derive the capability type of a remote capability.

    Remote ids have the form ``"{app_id}_{CAPABILITY_TYPE}"``. The explicit
    ``capabilityType`` attribute wins when the service sends it. Without it the
    known app id prefix is stripped; when the app id is unknown or does not
    match, everything after the first underscore is used (portal resource ids
    never contain underscores). An id without any underscore is returned as is.
    """

    if explicit_type:
        return explicit_type
    if app_id:
        prefix = f"{app_id}_"
        if capability_id.startswith(prefix):
            return capability_id.removeprefix(prefix)
    _head, separator, tail = capability_id.partition("_")
    if separator and tail:
        return tail
    return capability_id
