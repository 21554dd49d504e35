"""Domain port definitions for adapters."""

from __future__ import annotations

from .capabilities import (
    CapabilityClient,
    CapabilityIdentifierClient,
    CapabilityReader,
    CapabilityUpdateClient,
)

__all__ = [
    "CapabilityClient",
    "CapabilityIdentifierClient",
    "CapabilityReader",
    "CapabilityUpdateClient",
]
