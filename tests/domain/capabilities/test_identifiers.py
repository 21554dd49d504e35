from __future__ import annotations

import pytest

from capsync.domain.capabilities import (
    CapabilityIdentifier,
    CapabilityIdentifierError,
    CapabilityOption,
    CapabilityValidationError,
    IdentifierResourceKind,
    RemoteServiceError,
    UpdateRequestEntry,
    reconcile_capability_identifiers,
    sync_capability_identifiers,
)
from tests.helpers.capabilities import APP_ID, FakeCapabilityClient

APP_GROUPS = "com.apple.security.application-groups"
MERCHANTS = "com.apple.developer.in-app-payments"
ICLOUD_CONTAINERS = "com.apple.developer.icloud-container-identifiers"


def test_creates_missing_and_links_existing_identifiers() -> None:
    client = FakeCapabilityClient(
        identifiers={
            IdentifierResourceKind.APP_GROUP: [
                CapabilityIdentifier(id="G1", identifier="group.com.example.shared"),
            ]
        }
    )

    result = reconcile_capability_identifiers(
        {APP_GROUPS: ["group.com.example.shared", "group.com.example.new"]},
        client=client,
    )

    assert client.create_calls == [(IdentifierResourceKind.APP_GROUP, "group.com.example.new")]
    assert result.created == ["group.com.example.new"]
    assert result.linked == ["group.com.example.shared", "group.com.example.new"]
    assert result.relationship_batch == [
        UpdateRequestEntry(
            capability_type="APP_GROUPS",
            option=CapabilityOption.ON,
            relationships={
                IdentifierResourceKind.APP_GROUP: ("G1", "new-group.com.example.new"),
            },
        )
    ]


def test_duplicate_identifiers_are_listed_and_created_once() -> None:
    client = FakeCapabilityClient()

    result = reconcile_capability_identifiers(
        {MERCHANTS: ["merchant.com.example", "merchant.com.example"]},
        client=client,
    )

    assert client.list_identifier_calls == [IdentifierResourceKind.MERCHANT_ID]
    assert client.create_calls == [(IdentifierResourceKind.MERCHANT_ID, "merchant.com.example")]
    assert result.linked == ["merchant.com.example"]


def test_identifier_match_is_case_sensitive() -> None:
    client = FakeCapabilityClient(
        identifiers={
            IdentifierResourceKind.CLOUD_CONTAINER: [
                CapabilityIdentifier(id="C1", identifier="iCloud.com.Example"),
            ]
        }
    )

    result = reconcile_capability_identifiers(
        {ICLOUD_CONTAINERS: ["iCloud.com.example"]},
        client=client,
    )

    assert result.created == ["iCloud.com.example"]


def test_classifiers_are_processed_in_table_order() -> None:
    client = FakeCapabilityClient()

    reconcile_capability_identifiers(
        {
            ICLOUD_CONTAINERS: ["iCloud.com.example"],
            MERCHANTS: ["merchant.com.example"],
            APP_GROUPS: ["group.com.example"],
        },
        client=client,
    )

    assert client.list_identifier_calls == [
        IdentifierResourceKind.APP_GROUP,
        IdentifierResourceKind.MERCHANT_ID,
        IdentifierResourceKind.CLOUD_CONTAINER,
    ]


def test_absent_or_empty_values_make_no_remote_calls() -> None:
    client = FakeCapabilityClient()

    result = reconcile_capability_identifiers(
        {APP_GROUPS: [], "com.apple.developer.healthkit": True},
        client=client,
    )

    assert client.remote_calls == 0
    assert result.relationship_batch == []


@pytest.mark.parametrize("value", [False, "", 0])
def test_falsy_values_are_skipped_like_the_capability_pass(value: object) -> None:
    client = FakeCapabilityClient()

    result = reconcile_capability_identifiers(
        {APP_GROUPS: value, MERCHANTS: value},  # type: ignore[dict-item]
        client=client,
    )

    assert client.remote_calls == 0
    assert result.relationship_batch == []


def test_invalid_identifier_value_fails_before_listing() -> None:
    client = FakeCapabilityClient()

    with pytest.raises(CapabilityValidationError):
        reconcile_capability_identifiers({MERCHANTS: ["com.example"]}, client=client)

    assert client.remote_calls == 0


def test_creation_failure_explains_how_to_recover() -> None:
    original = RemoteServiceError("An identifier with that name already exists on another team")
    client = FakeCapabilityClient(create_error=original)

    with pytest.raises(CapabilityIdentifierError) as exc:
        reconcile_capability_identifiers({MERCHANTS: ["merchant.com.taken"]}, client=client)

    assert str(exc.value).startswith("An identifier with that name already exists")
    assert (
        "Remove the value 'merchant.com.taken' from the array "
        "'com.apple.developer.in-app-payments' or use a different Apple account."
    ) in str(exc.value)
    assert exc.value.identifier == "merchant.com.taken"
    assert exc.value.__cause__ is original


def test_sync_capability_identifiers_applies_relationships() -> None:
    client = FakeCapabilityClient()

    result = sync_capability_identifiers(
        {APP_GROUPS: ["group.com.example"]},
        app_id=APP_ID,
        client=client,
    )

    assert client.update_calls == [(APP_ID, result.relationship_batch)]
    assert result.created == ["group.com.example"]
