from __future__ import annotations

from capsync.domain.capabilities.types import (
    CapabilitySetting,
    RemoteCapability,
    parse_capability_type,
)


def test_parse_capability_type_prefers_explicit_attribute() -> None:
    assert parse_capability_type("ABC123_HEALTHKIT", explicit_type="HOMEKIT") == "HOMEKIT"


def test_parse_capability_type_strips_known_app_id_prefix() -> None:
    assert parse_capability_type("ABC123_DATA_PROTECTION", app_id="ABC123") == "DATA_PROTECTION"


def test_parse_capability_type_uses_text_after_first_underscore() -> None:
    assert parse_capability_type("ABC123_DATA_PROTECTION") == "DATA_PROTECTION"
    assert parse_capability_type("ABC123_HEALTHKIT", app_id="OTHER") == "HEALTHKIT"


def test_parse_capability_type_returns_id_without_separator() -> None:
    assert parse_capability_type("HEALTHKIT") == "HEALTHKIT"
    assert parse_capability_type("ABC123_") == "ABC123_"


def test_first_setting_option_reads_matching_key() -> None:
    capability = RemoteCapability(
        id="ABC123_DATA_PROTECTION",
        capability_type="DATA_PROTECTION",
        settings=(
            CapabilitySetting(
                key="DATA_PROTECTION_PERMISSION_LEVEL",
                options=("COMPLETE_PROTECTION",),
            ),
        ),
    )

    assert capability.first_setting_option("DATA_PROTECTION_PERMISSION_LEVEL") == (
        "COMPLETE_PROTECTION"
    )
    assert capability.first_setting_option("OTHER_KEY") is None


def test_first_setting_option_without_settings() -> None:
    bare = RemoteCapability(id="ABC123_HOMEKIT", capability_type="HOMEKIT")
    empty = RemoteCapability(id="ABC123_ICLOUD", capability_type="ICLOUD", settings=())

    assert bare.first_setting_option("ANY") is None
    assert empty.first_setting_option("ANY") is None
