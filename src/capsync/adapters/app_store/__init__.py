"""Public interface for the App Store developer portal adapter."""

from __future__ import annotations

from .client import AppStoreAPIError, AppStoreClient
from .schema import BundleIdCapabilitiesResponse, ErrorResponse, IdentifierListResponse
from .translator import (
    build_capability_update_payload,
    parse_capability_identifier,
    parse_remote_capability,
)

__all__ = [
    "AppStoreAPIError",
    "AppStoreClient",
    "BundleIdCapabilitiesResponse",
    "ErrorResponse",
    "IdentifierListResponse",
    "build_capability_update_payload",
    "parse_capability_identifier",
    "parse_remote_capability",
]
