"""Capability sync error hierarchy."""

from __future__ import annotations


class CapabilitySyncError(RuntimeError):
    """Base class for errors that abort a capability reconciliation."""


class CapabilityValidationError(CapabilitySyncError, ValueError):
    """Raised when an entitlement value does not match its classifier's shape."""

    def __init__(self, message: str, *, entitlement: str, value: object) -> None:
        super().__init__(message)
        self.entitlement = entitlement
        self.value = value


class RemoteServiceError(RuntimeError):
    """Raised by capability clients when the remote service rejects a call."""


class CapabilityIdentifierError(CapabilitySyncError):
    """Raised when a capability identifier cannot be created remotely."""

    def __init__(self, message: str, *, identifier: str, entitlement: str) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.entitlement = entitlement


class CapabilityUpdateError(CapabilitySyncError):
    """Raised when the remote refuses a capability update for a known reason."""

    def __init__(self, message: str, *, app_id: str) -> None:
        super().__init__(message)
        self.app_id = app_id
