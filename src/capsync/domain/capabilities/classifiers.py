"""Static entitlement -> capability classifier table.

Compiled from toggling capabilities in Xcode and watching the resulting
entitlements diff and portal requests. See
https://developer.apple.com/documentation/bundleresources/entitlements
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .resolvers import ResolverKind, resolve_sync_operation
from .types import CapabilityType, IdentifierResourceKind
from .validation import (
    DEV_PROD_STRING,
    BooleanOptions,
    PrefixedStringArrayOptions,
    StringArrayOptions,
    StringOptions,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .types import EntitlementsMap, JSONValue, RemoteCapability, SyncOperation, SyncOptions
    from .validation import OptionsValidator


@dataclass(frozen=True, slots=True, kw_only=True)
class CapabilityClassifier:
    name: str
    entitlement: str
    capability_type: CapabilityType
    validate_options: OptionsValidator
    resolver: ResolverKind
    identifier_kind: IdentifierResourceKind | None = None
    identifier_prefix: str | None = None

    def resolve_sync_operation(
        self,
        existing: RemoteCapability | None,
        value: JSONValue,
        entitlements: EntitlementsMap,
        options: SyncOptions,
    ) -> SyncOperation:
        return resolve_sync_operation(
            self.resolver,
            existing=existing,
            value=value,
            entitlements=entitlements,
            options=options,
        )


def _boolean(name: str, entitlement: str, capability_type: CapabilityType) -> CapabilityClassifier:
    return CapabilityClassifier(
        name=name,
        entitlement=entitlement,
        capability_type=capability_type,
        validate_options=BooleanOptions(),
        resolver=ResolverKind.BOOLEAN,
    )


def _string_array(
    name: str,
    entitlement: str,
    capability_type: CapabilityType,
    *allowed: str,
) -> CapabilityClassifier:
    return CapabilityClassifier(
        name=name,
        entitlement=entitlement,
        capability_type=capability_type,
        validate_options=StringArrayOptions(allowed or None),
        resolver=ResolverKind.DEFINED_VALUE,
    )


def _identifiers(
    name: str,
    entitlement: str,
    capability_type: CapabilityType,
    *,
    kind: IdentifierResourceKind,
    prefix: str,
    resolver: ResolverKind = ResolverKind.DEFINED_VALUE,
) -> CapabilityClassifier:
    return CapabilityClassifier(
        name=name,
        entitlement=entitlement,
        capability_type=capability_type,
        validate_options=PrefixedStringArrayOptions(prefix),
        resolver=resolver,
        identifier_kind=kind,
        identifier_prefix=prefix,
    )


CAPABILITY_CLASSIFIERS: tuple[CapabilityClassifier, ...] = (
    _boolean("HomeKit", "com.apple.developer.homekit", CapabilityType.HOME_KIT),
    _boolean(
        "Hotspot", "com.apple.developer.networking.HotspotConfiguration", CapabilityType.HOT_SPOT
    ),
    _boolean("Multipath", "com.apple.developer.networking.multipath", CapabilityType.MULTIPATH),
    _boolean("SiriKit", "com.apple.developer.siri", CapabilityType.SIRI_KIT),
    _boolean(
        "Wireless Accessory Configuration",
        "com.apple.external-accessory.wireless-configuration",
        CapabilityType.WIRELESS_ACCESSORY,
    ),
    _boolean(
        "Extended Virtual Address Space",
        "com.apple.developer.kernel.extended-virtual-addressing",
        CapabilityType.EXTENDED_VIRTUAL_ADDRESSING,
    ),
    _boolean(
        "Access WiFi Information",
        "com.apple.developer.networking.wifi-info",
        CapabilityType.ACCESS_WIFI,
    ),
    _string_array(
        "Associated Domains",
        "com.apple.developer.associated-domains",
        CapabilityType.ASSOCIATED_DOMAINS,
    ),
    _boolean(
        "AutoFill Credential Provider",
        "com.apple.developer.authentication-services.autofill-credential-provider",
        CapabilityType.AUTO_FILL_CREDENTIAL,
    ),
    _boolean("HealthKit", "com.apple.developer.healthkit", CapabilityType.HEALTH_KIT),
    # Game Center is locked on in the portal and has no entitlement to drive it.
    _identifiers(
        "App Groups",
        "com.apple.security.application-groups",
        CapabilityType.APP_GROUP,
        kind=IdentifierResourceKind.APP_GROUP,
        prefix="group.",
    ),
    _identifiers(
        "Apple Pay Payment Processing",
        "com.apple.developer.in-app-payments",
        CapabilityType.APPLE_PAY,
        kind=IdentifierResourceKind.MERCHANT_ID,
        prefix="merchant.",
    ),
    # Xcode 6+ iCloud only.
    _identifiers(
        "iCloud",
        "com.apple.developer.icloud-container-identifiers",
        CapabilityType.ICLOUD,
        kind=IdentifierResourceKind.CLOUD_CONTAINER,
        prefix="iCloud.",
        resolver=ResolverKind.WITH_SETTINGS,
    ),
    CapabilityClassifier(
        name="ClassKit",
        entitlement="com.apple.developer.ClassKit-environment",
        capability_type=CapabilityType.CLASS_KIT,
        validate_options=DEV_PROD_STRING,
        resolver=ResolverKind.DEFINED_VALUE,
    ),
    _boolean(
        "Communication Notifications",
        "com.apple.developer.usernotifications.communication",
        CapabilityType.USER_NOTIFICATIONS_COMMUNICATION,
    ),
    _boolean(
        "Time Sensitive Notifications",
        "com.apple.developer.usernotifications.time-sensitive",
        CapabilityType.USER_NOTIFICATIONS_TIME_SENSITIVE,
    ),
    _boolean(
        "Group Activities", "com.apple.developer.group-session", CapabilityType.GROUP_ACTIVITIES
    ),
    _boolean(
        "Family Controls", "com.apple.developer.family-controls", CapabilityType.FAMILY_CONTROLS
    ),
    CapabilityClassifier(
        name="Data Protection",
        entitlement="com.apple.developer.default-data-protection",
        capability_type=CapabilityType.DATA_PROTECTION,
        validate_options=StringOptions(
            (
                "NSFileProtectionCompleteUnlessOpen",
                "NSFileProtectionCompleteUntilFirstUserAuthentication",
                "NSFileProtectionNone",
                "NSFileProtectionComplete",
            )
        ),
        resolver=ResolverKind.DATA_PROTECTION,
    ),
    # Deprecated
    _boolean("Inter-App Audio", "inter-app-audio", CapabilityType.INTER_APP_AUDIO),
    _string_array(
        "Network Extensions",
        "com.apple.developer.networking.networkextension",
        CapabilityType.NETWORK_EXTENSIONS,
        "dns-proxy",
        "app-proxy-provider",
        "content-filter-provider",
        "packet-tunnel-provider",
        "dns-proxy-systemextension",
        "app-proxy-provider-systemextension",
        "content-filter-provider-systemextension",
        "packet-tunnel-provider-systemextension",
        "dns-settings",
        "app-push-provider",
    ),
    # Only TAG is documented, but NDEF is widely recommended alongside it.
    _string_array(
        "NFC Tag Reading",
        "com.apple.developer.nfc.readersession.formats",
        CapabilityType.NFC_TAG_READING,
        "NDEF",
        "TAG",
    ),
    _string_array(
        "Personal VPN",
        "com.apple.developer.networking.vpn.api",
        CapabilityType.PERSONAL_VPN,
        "allow-vpn",
    ),
    CapabilityClassifier(
        name="Push Notifications",
        entitlement="aps-environment",
        capability_type=CapabilityType.PUSH_NOTIFICATIONS,
        validate_options=DEV_PROD_STRING,
        resolver=ResolverKind.PUSH_NOTIFICATIONS,
    ),
    # Ex: ["$(TeamIdentifierPrefix)*"]
    _string_array("Wallet", "com.apple.developer.pass-type-identifiers", CapabilityType.WALLET),
    CapabilityClassifier(
        name="Sign In with Apple",
        entitlement="com.apple.developer.applesignin",
        capability_type=CapabilityType.APPLE_ID_AUTH,
        validate_options=StringArrayOptions(("Default",)),
        resolver=ResolverKind.WITH_SETTINGS,
    ),
    _string_array(
        "Fonts",
        "com.apple.developer.user-fonts",
        CapabilityType.FONT_INSTALLATION,
        "app-usage",
        "system-installation",
    ),
    _string_array(
        "Apple Pay Later Merchandising",
        "com.apple.developer.pay-later-merchandising",
        CapabilityType.APPLE_PAY_LATER_MERCHANDISING,
        "payinfour-merchandising",
    ),
    _string_array(
        "Sensitive Content Analysis",
        "com.apple.developer.sensitivecontentanalysis.client",
        CapabilityType.SENSITIVE_CONTENT_ANALYSIS,
        "analysis",
    ),
    # Not exposed in Xcode.
    CapabilityClassifier(
        name="App Attest",
        entitlement="com.apple.developer.devicecheck.appattest-environment",
        capability_type=CapabilityType.APP_ATTEST,
        validate_options=DEV_PROD_STRING,
        resolver=ResolverKind.DEFINED_VALUE,
    ),
    _boolean(
        "Low Latency HLS",
        "com.apple.developer.coremedia.hls.low-latency",
        CapabilityType.HLS_LOW_LATENCY,
    ),
    _boolean(
        "MDM Managed Associated Domains",
        "com.apple.developer.associated-domains.mdm-managed",
        CapabilityType.MDM_MANAGED_ASSOCIATED_DOMAINS,
    ),
    _boolean(
        "FileProvider TestingMode",
        "com.apple.developer.fileprovider.testing-mode",
        CapabilityType.FILE_PROVIDER_TESTING_MODE,
    ),
    _boolean(
        "Recalibrate Estimates",
        "com.apple.developer.healthkit.recalibrate-estimates",
        CapabilityType.HEALTH_KIT_RECALIBRATE_ESTIMATES,
    ),
    _boolean("Maps", "com.apple.developer.maps", CapabilityType.MAPS),
    _boolean("TV Services", "com.apple.developer.user-management", CapabilityType.USER_MANAGEMENT),
    _boolean(
        "Custom Network Protocol",
        "com.apple.developer.networking.custom-protocol",
        CapabilityType.NETWORK_CUSTOM_PROTOCOL,
    ),
    _boolean(
        "System Extension",
        "com.apple.developer.system-extension.install",
        CapabilityType.SYSTEM_EXTENSION_INSTALL,
    ),
    _boolean("Push to Talk", "com.apple.developer.push-to-talk", CapabilityType.PUSH_TO_TALK),
    _boolean(
        "DriverKit USB Transport (development)",
        "com.apple.developer.driverkit.transport.usb",
        CapabilityType.DRIVER_KIT_USB_TRANSPORT_PUB,
    ),
    _boolean(
        "Increased Memory Limit",
        "com.apple.developer.kernel.increased-memory-limit",
        CapabilityType.INCREASED_MEMORY_LIMIT,
    ),
    _boolean(
        "Communicates with Drivers",
        "com.apple.developer.driverkit.communicates-with-drivers",
        CapabilityType.DRIVER_KIT_COMMUNICATES_WITH_DRIVERS,
    ),
    _boolean(
        "Media Device Discovery",
        "com.apple.developer.media-device-discovery-extension",
        CapabilityType.MEDIA_DEVICE_DISCOVERY,
    ),
    _boolean(
        "DriverKit Allow Third Party UserClients",
        "com.apple.developer.driverkit.allow-third-party-userclients",
        CapabilityType.DRIVER_KIT_ALLOW_THIRD_PARTY_USER_CLIENTS,
    ),
    _boolean("WeatherKit", "com.apple.developer.weatherkit", CapabilityType.WEATHER_KIT),
    _boolean(
        "On Demand Install Capable for App Clip Extensions",
        "com.apple.developer.on-demand-install-capable",
        CapabilityType.ON_DEMAND_INSTALL_EXTENSIONS,
    ),
    _boolean(
        "DriverKit Family SCSIController (development)",
        "com.apple.developer.driverkit.family.scsicontroller",
        CapabilityType.DRIVER_KIT_FAMILY_SCSI_CONTROLLER_PUB,
    ),
    _boolean(
        "DriverKit Family Serial (development)",
        "com.apple.developer.driverkit.family.serial",
        CapabilityType.DRIVER_KIT_FAMILY_SERIAL_PUB,
    ),
    _boolean(
        "DriverKit Family Networking (development)",
        "com.apple.developer.driverkit.family.networking",
        CapabilityType.DRIVER_KIT_FAMILY_NETWORKING_PUB,
    ),
    _boolean(
        "DriverKit Family HID EventService (development)",
        "com.apple.developer.driverkit.family.hid.eventservice",
        CapabilityType.DRIVER_KIT_FAMILY_HID_EVENT_SERVICE_PUB,
    ),
    _boolean(
        "DriverKit Family HID Device (development)",
        "com.apple.developer.driverkit.family.hid.device",
        CapabilityType.DRIVER_KIT_FAMILY_HID_DEVICE_PUB,
    ),
    _boolean(
        "DriverKit for Development",
        "com.apple.developer.driverkit",
        CapabilityType.DRIVER_KIT_PUBLIC,
    ),
    _boolean(
        "DriverKit Transport HID (development)",
        "com.apple.developer.driverkit.transport.hid",
        CapabilityType.DRIVER_KIT_TRANSPORT_HID_PUB,
    ),
    _boolean(
        "DriverKit Family Audio (development)",
        "com.apple.developer.driverkit.family.audio",
        CapabilityType.DRIVER_KIT_FAMILY_AUDIO_PUB,
    ),
    _boolean(
        "Shared with You",
        "com.apple.developer.shared-with-you",
        CapabilityType.SHARED_WITH_YOU,
    ),
    _boolean(
        "Messages Collaboration",
        "com.apple.developer.shared-with-you.collaboration",
        CapabilityType.MESSAGES_COLLABORATION,
    ),
    _boolean(
        "Shallow Depth and Pressure",
        "com.apple.developer.submerged-shallow-depth-and-pressure",
        CapabilityType.SHALLOW_DEPTH_PRESSURE,
    ),
    _boolean(
        "Tap to Present ID on iPhone (Display Only)",
        "com.apple.developer.proximity-reader.identity.display",
        CapabilityType.TAP_TO_DISPLAY_ID,
    ),
    _boolean(
        "Tap to Pay on iPhone",
        "com.apple.developer.proximity-reader.payment.acceptance",
        CapabilityType.TAP_TO_PAY_ON_IPHONE,
    ),
    _boolean(
        "Matter Allow Setup Payload",
        "com.apple.developer.matter.allow-setup-payload",
        CapabilityType.MATTER_ALLOW_SETUP_PAYLOAD,
    ),
    _string_array(
        "Journaling Suggestions",
        "com.apple.developer.journal.allow",
        CapabilityType.JOURNALING_SUGGESTIONS,
        "suggestions",
    ),
    _string_array(
        "Managed App Installation UI",
        "com.apple.developer.managed-app-distribution.install-ui",
        CapabilityType.MANAGED_APP_INSTALLATION_UI,
        "managed-app",
    ),
    _string_array(
        "5G Network Slicing",
        "com.apple.developer.networking.slicing.appcategory",
        CapabilityType.NETWORK_SLICING,
        "gaming-6014",
        "communication-9000",
        "streaming-9001",
    ),
    _string_array(
        "5G Network Slicing",
        "com.apple.developer.networking.slicing.trafficcategory",
        CapabilityType.NETWORK_SLICING,
        "defaultslice-1",
        "video-2",
        "background-3",
        "voice-4",
        "callsignaling-5",
        "responsivedata-6",
        "avstreaming-7",
        "responsiveav-8",
    ),
    # No entitlement drives In-App Purchase (StoreKit linkage) or HLS interstitial
    # previews. Game Controllers, Keychain Sharing, Contact Notes and Exposure
    # Notification never reach the portal or need a manual request to Apple.
)

# Enabled by default on the platform; never disabled automatically.
EXCLUDED_FROM_DISABLE: frozenset[str] = frozenset(
    {
        CapabilityType.IN_APP_PURCHASE,
        CapabilityType.PUSH_NOTIFICATIONS,
        CapabilityType.GAME_CENTER,
    }
)

_BY_ENTITLEMENT: dict[str, CapabilityClassifier] = {
    classifier.entitlement: classifier for classifier in CAPABILITY_CLASSIFIERS
}


def _index_by_capability_type() -> dict[str, CapabilityClassifier]:
    index: dict[str, CapabilityClassifier] = {}
    for classifier in CAPABILITY_CLASSIFIERS:
        index.setdefault(classifier.capability_type, classifier)
    return index


_BY_CAPABILITY_TYPE = _index_by_capability_type()


def classifier_for_entitlement(entitlement: str) -> CapabilityClassifier | None:
    return _BY_ENTITLEMENT.get(entitlement)


def classifier_for_capability_type(capability_type: str) -> CapabilityClassifier | None:
    """Return the first classifier for ``capability_type``.

    Several entitlements may share one capability type (5G network slicing);
    they share a display name as well, so the first entry is representative.
    """

    return _BY_CAPABILITY_TYPE.get(capability_type)


def iter_classifiers() -> Iterator[CapabilityClassifier]:
    return iter(CAPABILITY_CLASSIFIERS)


def identifier_classifiers() -> tuple[tuple[CapabilityClassifier, IdentifierResourceKind], ...]:
    """Classifiers whose capability references separately managed identifiers.

    Each comes paired with the identifier resource kind it manages.
    """

    return tuple(
        (classifier, classifier.identifier_kind)
        for classifier in CAPABILITY_CLASSIFIERS
        if classifier.identifier_kind is not None
    )
