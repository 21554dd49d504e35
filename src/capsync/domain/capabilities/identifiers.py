"""Create and link capability identifiers (merchant ids, app groups, iCloud containers).

Identifier-backed capabilities reference account-level resources by remote id,
so those resources must exist before a capability update can point at them.
This pass runs to completion before any update that references its ids.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .classifiers import identifier_classifiers
from .errors import CapabilityIdentifierError, RemoteServiceError
from .reconcile import apply_capability_updates, entitlement_is_set
from .types import CapabilityOption, UpdateRequestEntry
from .validation import assert_valid_options

if TYPE_CHECKING:
    from collections.abc import Iterable

    from capsync.domain.ports.capabilities import CapabilityClient, CapabilityIdentifierClient

    from .classifiers import CapabilityClassifier
    from .types import (
        AppIdentifierRef,
        CapabilityIdentifier,
        EntitlementsMap,
        IdentifierResourceKind,
    )

log = getLogger(__name__)


@dataclass(slots=True)
class IdentifierSyncResult:
    created: list[str] = field(default_factory=list[str])
    linked: list[str] = field(default_factory=list[str])
    relationship_batch: list[UpdateRequestEntry] = field(
        default_factory=list[UpdateRequestEntry]
    )


def unique_identifiers(values: Iterable[str]) -> list[str]:
    """Drop exact duplicates while keeping first-seen order."""

    return list(dict.fromkeys(values))


def reconcile_capability_identifiers(
    entitlements: EntitlementsMap,
    *,
    client: CapabilityIdentifierClient,
) -> IdentifierSyncResult:
    """Ensure every identifier named in ``entitlements`` exists remotely.

    Returns the relationship entries for the caller to merge into its capability
    update batch. Identifiers already created stay created if a later step fails.
    """

    result = IdentifierSyncResult()
    for classifier, kind in identifier_classifiers():
        value = entitlements.get(classifier.entitlement)
        if not entitlement_is_set(value):
            continue
        assert_valid_options(classifier, value)
        # Validated as a string array above.
        requested = unique_identifiers(value)  # type: ignore[arg-type]
        if not requested:
            continue

        remote_ids = _sync_classifier_identifiers(
            classifier,
            kind,
            requested,
            client=client,
            result=result,
        )
        result.relationship_batch.append(
            UpdateRequestEntry(
                capability_type=classifier.capability_type,
                option=CapabilityOption.ON,
                relationships={kind: tuple(remote_ids)},
            )
        )
    return result


def _sync_classifier_identifiers(
    classifier: CapabilityClassifier,
    kind: IdentifierResourceKind,
    requested: list[str],
    *,
    client: CapabilityIdentifierClient,
    result: IdentifierSyncResult,
) -> list[str]:
    existing_by_identifier: dict[str, CapabilityIdentifier] = {}
    for existing in client.list_identifiers(kind):
        existing_by_identifier.setdefault(existing.identifier, existing)

    remote_ids: list[str] = []
    for identifier in requested:
        remote = existing_by_identifier.get(identifier)
        if remote is None:
            remote = _create_identifier(classifier, kind, identifier, client=client)
            result.created.append(identifier)
            log.info("Created %s identifier %s", classifier.name, identifier)
        else:
            log.debug(
                "Found existing %s identifier %s (%s)", classifier.name, identifier, remote.id
            )
        result.linked.append(identifier)
        remote_ids.append(remote.id)
    return remote_ids


def _create_identifier(
    classifier: CapabilityClassifier,
    kind: IdentifierResourceKind,
    identifier: str,
    *,
    client: CapabilityIdentifierClient,
) -> CapabilityIdentifier:
    try:
        return client.create_identifier(kind, identifier)
    except RemoteServiceError as exc:
        raise CapabilityIdentifierError(
            f"{exc}\n\nRemove the value '{identifier}' from the array "
            f"'{classifier.entitlement}' or use a different Apple account.",
            identifier=identifier,
            entitlement=classifier.entitlement,
        ) from exc


def sync_capability_identifiers(
    entitlements: EntitlementsMap,
    *,
    app_id: AppIdentifierRef,
    client: CapabilityClient,
) -> IdentifierSyncResult:
    """Reconcile identifiers and apply their relationships on their own."""

    result = reconcile_capability_identifiers(entitlements, client=client)
    apply_capability_updates(client, app_id, result.relationship_batch)
    return result
