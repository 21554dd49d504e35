"""Sync operation resolvers.

Each resolver compares one desired entitlement value with the capability
already registered remotely (if any) and decides whether to skip, enable with
a concrete option, or disable. Resolvers are pure; the classifier table picks
one per capability through ``ResolverKind``.
"""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import CapabilityValidationError
from .types import (
    DISABLE,
    ENABLE_ON,
    SKIP,
    CapabilityOption,
    DataProtectionOption,
    Enable,
    PushNotificationsOption,
)

if TYPE_CHECKING:
    from .types import (
        EntitlementsMap,
        JSONValue,
        RemoteCapability,
        RemoteOptionValue,
        SyncOperation,
        SyncOptions,
    )

log = getLogger(__name__)

DATA_PROTECTION_ENTITLEMENT = "com.apple.developer.default-data-protection"
DATA_PROTECTION_SETTING_KEY = "DATA_PROTECTION_PERMISSION_LEVEL"

_DATA_PROTECTION_OPTIONS: dict[str, DataProtectionOption] = {
    "NSFileProtectionComplete": DataProtectionOption.COMPLETE_PROTECTION,
    "NSFileProtectionCompleteUnlessOpen": DataProtectionOption.PROTECTED_UNLESS_OPEN,
    "NSFileProtectionCompleteUntilFirstUserAuthentication": (
        DataProtectionOption.PROTECTED_UNTIL_FIRST_USER_AUTH
    ),
}


class ResolverKind(StrEnum):
    BOOLEAN = "boolean"
    DEFINED_VALUE = "defined_value"
    WITH_SETTINGS = "with_settings"
    DATA_PROTECTION = "data_protection"
    PUSH_NOTIFICATIONS = "push_notifications"


def resolve_sync_operation(
    kind: ResolverKind,
    *,
    existing: RemoteCapability | None,
    value: JSONValue,
    entitlements: EntitlementsMap,
    options: SyncOptions,
) -> SyncOperation:
    """Dispatch to the resolver registered for ``kind``.

    ``entitlements`` is the whole map; no current resolver reads sibling keys.
    """

    match kind:
        case ResolverKind.BOOLEAN:
            return resolve_boolean(existing, value)
        case ResolverKind.DEFINED_VALUE:
            return resolve_defined_value(existing)
        case ResolverKind.WITH_SETTINGS:
            return resolve_with_settings(existing, value)
        case ResolverKind.DATA_PROTECTION:
            return resolve_data_protection(existing, value)
        case ResolverKind.PUSH_NOTIFICATIONS:
            return resolve_push_notifications(
                existing,
                value,
                uses_broadcast=options.uses_broadcast_push_notifications,
            )


def resolve_boolean(existing: RemoteCapability | None, value: JSONValue) -> SyncOperation:
    desired = value is True
    if existing is None:
        return ENABLE_ON if desired else SKIP
    if existing.enabled is not None:
        if existing.enabled == desired:
            return SKIP
        return ENABLE_ON if desired else DISABLE
    # A bare boolean capability counts as enabled and is never re-disabled here.
    if existing.settings is None:
        return SKIP
    return ENABLE_ON


def resolve_defined_value(existing: RemoteCapability | None) -> SyncOperation:
    if existing is None:
        return ENABLE_ON
    # Settings on the remote mean the last write carried extra structure; resync.
    return SKIP if existing.settings is None else ENABLE_ON


def resolve_with_settings(existing: RemoteCapability | None, value: JSONValue) -> SyncOperation:
    """Resolve capabilities whose remote form always carries a settings array.

    Only iCloud, data protection and Sign in with Apple have settings. A
    capability is left alone only when its on/off state matches and, when on,
    its settings payload is already populated.
    """

    if existing is None:
        return ENABLE_ON
    if existing.enabled is None:
        log.debug(
            "Expected the 'enabled' attribute on %s but it was not present "
            "(settings: %s); skipping this capability",
            existing.id,
            existing.settings,
        )
        return SKIP

    desired_option = CapabilityOption.ON if value else CapabilityOption.OFF
    desired_enabled = desired_option is CapabilityOption.ON
    if existing.enabled != desired_enabled:
        return Enable(desired_option)
    if desired_enabled and not existing.settings:
        return Enable(desired_option)
    return SKIP


def data_protection_option(value: JSONValue) -> DataProtectionOption:
    if isinstance(value, str) and value in _DATA_PROTECTION_OPTIONS:
        return _DATA_PROTECTION_OPTIONS[value]
    # NSFileProtectionNone passes validation but has no remote counterpart.
    raise CapabilityValidationError(
        f'iOS entitlement "{DATA_PROTECTION_ENTITLEMENT}" is using unsupported value "{value}"',
        entitlement=DATA_PROTECTION_ENTITLEMENT,
        value=value,
    )


def resolve_data_protection(existing: RemoteCapability | None, value: JSONValue) -> SyncOperation:
    desired = data_protection_option(value)
    if existing is None:
        return Enable(desired)
    current = existing.first_setting_option(DATA_PROTECTION_SETTING_KEY)
    return SKIP if current == desired else Enable(desired)


def push_notifications_option(value: JSONValue, *, uses_broadcast: bool) -> RemoteOptionValue:
    if not value:
        return CapabilityOption.OFF
    if uses_broadcast:
        return PushNotificationsOption.PUSH_NOTIFICATION_FEATURE_BROADCAST
    return CapabilityOption.ON


def resolve_push_notifications(
    existing: RemoteCapability | None,
    value: JSONValue,
    *,
    uses_broadcast: bool,
) -> SyncOperation:
    enable = Enable(push_notifications_option(value, uses_broadcast=uses_broadcast))
    if existing is None:
        return enable
    # Settings exist remotely only for the broadcast variant, so a mismatch
    # between settings presence and the broadcast flag always forces an update.
    has_settings = existing.settings is not None
    return SKIP if has_settings == uses_broadcast else enable
