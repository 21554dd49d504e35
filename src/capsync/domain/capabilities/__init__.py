"""Capability reconciliation core.

Flow for one application identifier:
1) reconcile capability identifiers (create missing merchant ids, app groups,
   iCloud containers and collect relationship entries)
2) plan capability updates from entitlements against remote capabilities
3) merge both batches and apply them in a single remote call
"""

from __future__ import annotations

from .classifiers import (
    CAPABILITY_CLASSIFIERS,
    EXCLUDED_FROM_DISABLE,
    CapabilityClassifier,
    classifier_for_capability_type,
    classifier_for_entitlement,
    identifier_classifiers,
    iter_classifiers,
)
from .errors import (
    CapabilityIdentifierError,
    CapabilitySyncError,
    CapabilityUpdateError,
    CapabilityValidationError,
    RemoteServiceError,
)
from .identifiers import (
    IdentifierSyncResult,
    reconcile_capability_identifiers,
    sync_capability_identifiers,
)
from .reconcile import (
    CapabilityPlan,
    apply_capability_updates,
    merge_update_batches,
    plan_capability_updates,
    reconcile_capabilities,
    validate_entitlements,
)
from .types import (
    AppIdentifierRef,
    CapabilityIdentifier,
    CapabilityOption,
    CapabilitySetting,
    CapabilityType,
    DataProtectionOption,
    EntitlementsMap,
    IdentifierResourceKind,
    PushNotificationsOption,
    RemoteCapability,
    SyncOptions,
    UpdateRequestEntry,
    parse_capability_type,
)
from .validation import assert_valid_options

__all__ = [
    "CAPABILITY_CLASSIFIERS",
    "EXCLUDED_FROM_DISABLE",
    "AppIdentifierRef",
    "CapabilityClassifier",
    "CapabilityIdentifier",
    "CapabilityIdentifierError",
    "CapabilityOption",
    "CapabilityPlan",
    "CapabilitySetting",
    "CapabilitySyncError",
    "CapabilityType",
    "CapabilityUpdateError",
    "CapabilityValidationError",
    "DataProtectionOption",
    "EntitlementsMap",
    "IdentifierResourceKind",
    "IdentifierSyncResult",
    "PushNotificationsOption",
    "RemoteCapability",
    "RemoteServiceError",
    "SyncOptions",
    "UpdateRequestEntry",
    "apply_capability_updates",
    "assert_valid_options",
    "classifier_for_capability_type",
    "classifier_for_entitlement",
    "identifier_classifiers",
    "iter_classifiers",
    "merge_update_batches",
    "parse_capability_type",
    "plan_capability_updates",
    "reconcile_capabilities",
    "reconcile_capability_identifiers",
    "sync_capability_identifiers",
    "validate_entitlements",
]
