"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from capsync.adapters.app_store import AppStoreClient
from capsync.config import get_app_store_config, get_capability_sync_config
from capsync.config.sync import NO_CAPABILITY_SYNC_ENV
from capsync.domain.capabilities import (
    IdentifierSyncResult,
    apply_capability_updates,
    merge_update_batches,
    plan_capability_updates,
    reconcile_capability_identifiers,
    validate_entitlements,
)

if TYPE_CHECKING:
    from capsync.config import CapabilitySyncConfig
    from capsync.domain.capabilities import AppIdentifierRef, EntitlementsMap, SyncOptions
    from capsync.domain.ports import CapabilityClient


log = getLogger(__name__)


@dataclass(slots=True)
class CapabilitySyncResult:
    enabled: list[str] = field(default_factory=list[str])
    disabled: list[str] = field(default_factory=list[str])
    created: list[str] = field(default_factory=list[str])
    linked: list[str] = field(default_factory=list[str])


def sync_capabilities_for_entitlements(
    app_id: AppIdentifierRef,
    entitlements: EntitlementsMap,
    *,
    client: CapabilityClient | None = None,
    config: CapabilitySyncConfig | None = None,
    options: SyncOptions | None = None,
    has_account_session: bool = True,
) -> CapabilitySyncResult:
    """Make the remote capabilities of ``app_id`` match ``entitlements``.

    Identifier linkage needs a full account session; without one only the
    capability switches are synced. All changes go out in a single update.
    """

    effective_config = config or get_capability_sync_config()
    if not effective_config.enabled:
        log.info("Capability sync is disabled, skipping %s", app_id.identifier)
        return CapabilitySyncResult()

    validate_entitlements(entitlements)
    effective_client = client or AppStoreClient(config=get_app_store_config())
    log.info("Syncing capabilities for %s", app_id.identifier)

    remote = effective_client.list_capabilities(app_id)
    plan = plan_capability_updates(remote, entitlements, options=options)

    identifiers = IdentifierSyncResult()
    if has_account_session:
        identifiers = reconcile_capability_identifiers(entitlements, client=effective_client)
    else:
        log.info("Skipping capability identifier sync without a full account session")

    batch = merge_update_batches(plan.update_batch, identifiers.relationship_batch)
    apply_capability_updates(
        effective_client, app_id, batch, sync_switch_env=NO_CAPABILITY_SYNC_ENV
    )

    result = CapabilitySyncResult(
        enabled=plan.enabled,
        disabled=plan.disabled,
        created=identifiers.created,
        linked=identifiers.linked,
    )
    log.info(
        "Finished capability sync for %s: enabled=%s, disabled=%s, created=%s, linked=%s",
        app_id.identifier,
        result.enabled,
        result.disabled,
        result.created,
        result.linked,
    )
    return result
