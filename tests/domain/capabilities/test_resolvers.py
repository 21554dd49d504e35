from __future__ import annotations

import pytest

from capsync.domain.capabilities import CapabilityValidationError
from capsync.domain.capabilities.resolvers import (
    DATA_PROTECTION_SETTING_KEY,
    data_protection_option,
    push_notifications_option,
    resolve_boolean,
    resolve_data_protection,
    resolve_defined_value,
    resolve_push_notifications,
    resolve_with_settings,
)
from capsync.domain.capabilities.types import (
    DISABLE,
    ENABLE_ON,
    SKIP,
    CapabilityOption,
    CapabilitySetting,
    DataProtectionOption,
    Enable,
    PushNotificationsOption,
)
from tests.helpers.capabilities import make_remote_capability


def test_boolean_enables_missing_capability_only_when_true() -> None:
    assert resolve_boolean(None, True) == ENABLE_ON
    assert resolve_boolean(None, False) == SKIP


def test_boolean_skips_bare_existing_capability() -> None:
    existing = make_remote_capability("HOMEKIT")

    assert resolve_boolean(existing, True) == SKIP


def test_boolean_resyncs_existing_capability_with_settings() -> None:
    existing = make_remote_capability("HOMEKIT", settings=())

    assert resolve_boolean(existing, True) == ENABLE_ON


def test_boolean_compares_explicit_enabled_state() -> None:
    enabled = make_remote_capability("HOMEKIT", enabled=True)
    disabled = make_remote_capability("HOMEKIT", enabled=False)

    assert resolve_boolean(enabled, True) == SKIP
    assert resolve_boolean(disabled, True) == ENABLE_ON
    assert resolve_boolean(enabled, False) == DISABLE
    assert resolve_boolean(disabled, False) == SKIP


def test_defined_value_resolution() -> None:
    assert resolve_defined_value(None) == ENABLE_ON
    assert resolve_defined_value(make_remote_capability("CLASSKIT")) == SKIP
    assert resolve_defined_value(make_remote_capability("CLASSKIT", settings=())) == ENABLE_ON


def test_with_settings_skips_when_enabled_attribute_is_missing() -> None:
    existing = make_remote_capability("ICLOUD", settings=())

    assert resolve_with_settings(existing, ["iCloud.com.example"]) == SKIP


def test_with_settings_enables_when_settings_are_empty() -> None:
    existing = make_remote_capability("ICLOUD", enabled=True, settings=())

    assert resolve_with_settings(existing, ["iCloud.com.example"]) == ENABLE_ON


def test_with_settings_skips_populated_enabled_capability() -> None:
    existing = make_remote_capability(
        "ICLOUD",
        enabled=True,
        settings=[CapabilitySetting(key="ICLOUD_VERSION", options=("XCODE_6",))],
    )

    assert resolve_with_settings(existing, ["iCloud.com.example"]) == SKIP


def test_with_settings_enables_disabled_capability() -> None:
    existing = make_remote_capability("APPLE_ID_AUTH", enabled=False, settings=())

    assert resolve_with_settings(existing, ["Default"]) == ENABLE_ON
    assert resolve_with_settings(None, ["Default"]) == ENABLE_ON


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("NSFileProtectionComplete", DataProtectionOption.COMPLETE_PROTECTION),
        ("NSFileProtectionCompleteUnlessOpen", DataProtectionOption.PROTECTED_UNLESS_OPEN),
        (
            "NSFileProtectionCompleteUntilFirstUserAuthentication",
            DataProtectionOption.PROTECTED_UNTIL_FIRST_USER_AUTH,
        ),
    ],
)
def test_data_protection_option_mapping(value: str, expected: DataProtectionOption) -> None:
    assert data_protection_option(value) == expected


def test_data_protection_option_rejects_unsupported_value() -> None:
    with pytest.raises(CapabilityValidationError, match="NSFileProtectionNone"):
        data_protection_option("NSFileProtectionNone")


def test_data_protection_compares_first_setting_option() -> None:
    value = "NSFileProtectionCompleteUntilFirstUserAuthentication"
    matching = make_remote_capability(
        "DATA_PROTECTION",
        settings=[
            CapabilitySetting(
                key=DATA_PROTECTION_SETTING_KEY,
                options=("PROTECTED_UNTIL_FIRST_USER_AUTH",),
            )
        ],
    )
    different = make_remote_capability(
        "DATA_PROTECTION",
        settings=[
            CapabilitySetting(key=DATA_PROTECTION_SETTING_KEY, options=("COMPLETE_PROTECTION",))
        ],
    )

    assert resolve_data_protection(matching, value) == SKIP
    assert resolve_data_protection(different, value) == Enable(
        DataProtectionOption.PROTECTED_UNTIL_FIRST_USER_AUTH
    )
    assert resolve_data_protection(None, value) == Enable(
        DataProtectionOption.PROTECTED_UNTIL_FIRST_USER_AUTH
    )


def test_push_notifications_option() -> None:
    assert push_notifications_option("production", uses_broadcast=False) == CapabilityOption.ON
    assert push_notifications_option("production", uses_broadcast=True) == (
        PushNotificationsOption.PUSH_NOTIFICATION_FEATURE_BROADCAST
    )
    assert push_notifications_option("", uses_broadcast=True) == CapabilityOption.OFF


def test_push_notifications_compare_settings_presence_with_broadcast_flag() -> None:
    bare = make_remote_capability("PUSH_NOTIFICATIONS")
    with_settings = make_remote_capability("PUSH_NOTIFICATIONS", settings=())
    broadcast = Enable(PushNotificationsOption.PUSH_NOTIFICATION_FEATURE_BROADCAST)

    assert resolve_push_notifications(bare, "production", uses_broadcast=False) == SKIP
    assert resolve_push_notifications(with_settings, "production", uses_broadcast=True) == SKIP
    assert resolve_push_notifications(bare, "production", uses_broadcast=True) == broadcast
    assert resolve_push_notifications(with_settings, "production", uses_broadcast=False) == (
        ENABLE_ON
    )
    assert resolve_push_notifications(None, "development", uses_broadcast=True) == broadcast
