"""Reconcile desired entitlements against remote capability state.

Planning is pure: it walks the entitlements, asks each classifier's resolver
what to do, then disables known capabilities that no entitlement accounts for.
Applying sends the whole batch in one remote call, or none when the batch is
empty, so a second run over its own output is a no-op.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING

from .classifiers import (
    EXCLUDED_FROM_DISABLE,
    classifier_for_capability_type,
    classifier_for_entitlement,
)
from .errors import CapabilityUpdateError, RemoteServiceError
from .types import (
    CapabilityOption,
    Disable,
    Enable,
    Skip,
    SyncOptions,
    UpdateRequestEntry,
)
from .validation import assert_valid_options

if TYPE_CHECKING:
    from collections.abc import Sequence

    from capsync.domain.ports.capabilities import CapabilityUpdateClient

    from .types import AppIdentifierRef, EntitlementsMap, JSONValue, RemoteCapability

log = getLogger(__name__)

PORTAL_EDIT_URL = "https://developer.apple.com/account/resources/identifiers/bundleId/edit/{id}"

_UNDELETABLE_PATTERN = re.compile(r"bundle '[\w\d]+' cannot be deleted. Delete all the Apps")


@dataclass(slots=True)
class CapabilityPlan:
    """Outcome of planning one capability reconciliation."""

    enabled: list[str] = field(default_factory=list[str])
    disabled: list[str] = field(default_factory=list[str])
    update_batch: list[UpdateRequestEntry] = field(default_factory=list[UpdateRequestEntry])

    @property
    def is_empty(self) -> bool:
        return not self.update_batch


def entitlement_is_set(value: JSONValue) -> bool:
    """Return whether an entitlement value asks for its capability at all.

    ``None``, ``False``, ``0`` and ``""`` do not. Arrays and objects always do,
    even when empty, since an empty container list still declares the
    entitlement.
    """

    if isinstance(value, list | dict):
        return True
    return bool(value)


def validate_entitlements(entitlements: EntitlementsMap) -> None:
    """Raise ``CapabilityValidationError`` for the first set entitlement with a bad value."""

    for key, value in entitlements.items():
        if not entitlement_is_set(value):
            continue
        classifier = classifier_for_entitlement(key)
        if classifier is not None:
            assert_valid_options(classifier, value)


def plan_capability_updates(
    remote_capabilities: Sequence[RemoteCapability],
    entitlements: EntitlementsMap,
    *,
    options: SyncOptions | None = None,
) -> CapabilityPlan:
    """Compute the update batch that makes the remote match ``entitlements``.

    Raises ``CapabilityValidationError`` before anything is returned when a set
    entitlement has an invalid value, so no partial batch can escape.
    """

    active_options = options or SyncOptions()
    plan = CapabilityPlan()
    remaining = list(remote_capabilities)
    handled_types: set[str] = set()

    if log.isEnabledFor(logging.DEBUG):
        log.debug("Current remote capabilities:\n%s", _dump([asdict(c) for c in remaining]))
        log.debug("Current local entitlements:\n%s", _dump(entitlements))

    for key, value in entitlements.items():
        if not entitlement_is_set(value):
            continue
        classifier = classifier_for_entitlement(key)
        if classifier is None:
            log.debug("Skipping entitlement that is not managed by capability sync: %s", key)
            continue

        assert_valid_options(classifier, value)

        capability_type = classifier.capability_type
        existing = _pop_capability(remaining, capability_type)
        if capability_type in handled_types:
            log.debug("Capability %s already planned, ignoring %s", capability_type, key)
            continue
        handled_types.add(capability_type)

        operation = classifier.resolve_sync_operation(
            existing, value, entitlements, active_options
        )
        match operation:
            case Enable(option=option):
                plan.enabled.append(classifier.name)
                plan.update_batch.append(
                    UpdateRequestEntry(capability_type=capability_type, option=option)
                )
            case Disable():
                plan.disabled.append(classifier.name)
                plan.update_batch.append(
                    UpdateRequestEntry(capability_type=capability_type, option=CapabilityOption.OFF)
                )
            case Skip():
                log.debug("Skipping existing capability: %s (%s)", key, classifier.name)

    log.debug("Existing capabilities left to disable: %s", [c.id for c in remaining])
    _plan_disables(remaining, plan=plan, handled_types=handled_types)
    return plan


def _pop_capability(
    remaining: list[RemoteCapability],
    capability_type: str,
) -> RemoteCapability | None:
    for index, capability in enumerate(remaining):
        if capability.is_type(capability_type):
            return remaining.pop(index)
    return None


def _plan_disables(
    remaining: Sequence[RemoteCapability],
    *,
    plan: CapabilityPlan,
    handled_types: set[str],
) -> None:
    # Only capabilities we manage are disabled, so ones enabled outside of this
    # tool survive. Managed projects may still enable capabilities in native
    # code that the entitlements never mention.
    for capability in remaining:
        capability_type = capability.capability_type
        if capability_type in EXCLUDED_FROM_DISABLE:
            continue
        classifier = classifier_for_capability_type(capability_type)
        if classifier is None or capability_type in handled_types:
            continue
        handled_types.add(capability_type)
        plan.disabled.append(classifier.name)
        plan.update_batch.append(
            UpdateRequestEntry(capability_type=capability_type, option=CapabilityOption.OFF)
        )


def apply_capability_updates(
    client: CapabilityUpdateClient,
    app_id: AppIdentifierRef,
    batch: Sequence[UpdateRequestEntry],
    *,
    sync_switch_env: str | None = None,
) -> None:
    """Send ``batch`` in a single call; do nothing when it is empty.

    When the portal refuses a change, ``sync_switch_env`` names the environment
    variable that turns capability syncing off, for the error hint.
    """

    if not batch:
        return
    if log.isEnabledFor(logging.DEBUG):
        log.debug("Capability update request:\n%s", _dump([asdict(entry) for entry in batch]))
    try:
        client.apply_capability_updates(app_id, batch)
    except RemoteServiceError as exc:
        if not _UNDELETABLE_PATTERN.search(str(exc)):
            raise
        log.error("Failed to update capabilities: %s", [asdict(entry) for entry in batch])
        message = (
            "Unexpected error occurred while attempting to update capabilities for app "
            f'"{app_id.identifier}".\n'
            "Capabilities can be modified manually in the Apple developer console at "
            f"{PORTAL_EDIT_URL.format(id=app_id.id)}.\n"
        )
        if sync_switch_env:
            message += (
                "Auto capability syncing can be disabled with the environment variable "
                f"`{sync_switch_env}=1`.\n"
            )
        raise CapabilityUpdateError(
            f"{message}{exc}",
            app_id=app_id.id,
        ) from exc


def reconcile_capabilities(
    remote_capabilities: Sequence[RemoteCapability],
    entitlements: EntitlementsMap,
    *,
    app_id: AppIdentifierRef,
    client: CapabilityUpdateClient,
    options: SyncOptions | None = None,
) -> CapabilityPlan:
    """Plan and apply capability updates for ``app_id``."""

    plan = plan_capability_updates(remote_capabilities, entitlements, options=options)
    apply_capability_updates(client, app_id, plan.update_batch)
    return plan


def merge_update_batches(
    capability_batch: Sequence[UpdateRequestEntry],
    relationship_batch: Sequence[UpdateRequestEntry],
) -> list[UpdateRequestEntry]:
    """Fold relationship entries into the capability batch.

    The result holds at most one entry per capability type. A capability entry
    keeps its option and gains the relationships; relationship entries for
    capabilities that need no option change are appended as they are.
    """

    merged = list(capability_batch)
    position_by_type = {entry.capability_type: index for index, entry in enumerate(merged)}
    for entry in relationship_batch:
        position = position_by_type.get(entry.capability_type)
        if position is None:
            position_by_type[entry.capability_type] = len(merged)
            merged.append(entry)
            continue
        merged[position] = replace(merged[position], relationships=entry.relationships)
    return merged


def _dump(value: object) -> str:
    return json.dumps(value, indent=2, default=str)
