"""Structural validators for entitlement values.

Validators are immutable objects so the classifier table stays plain data that
can be compared, printed and iterated in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from .errors import CapabilityValidationError

if TYPE_CHECKING:
    from .classifiers import CapabilityClassifier


class OptionsValidator(Protocol):
    def __call__(self, value: object) -> bool: ...


@dataclass(frozen=True, slots=True)
class BooleanOptions:
    def __call__(self, value: object) -> bool:
        return isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class StringOptions:
    allowed: tuple[str, ...]

    def __call__(self, value: object) -> bool:
        return isinstance(value, str) and value in self.allowed


@dataclass(frozen=True, slots=True)
class StringArrayOptions:
    """Array of strings, optionally restricted to ``allowed`` values."""

    allowed: tuple[str, ...] | None = None

    def __call__(self, value: object) -> bool:
        if not isinstance(value, list | tuple):
            return False
        for item in value:
            if not isinstance(item, str):
                return False
            if self.allowed is not None and item not in self.allowed:
                return False
        return True


@dataclass(frozen=True, slots=True)
class PrefixedStringArrayOptions:
    prefix: str

    def __call__(self, value: object) -> bool:
        return isinstance(value, list | tuple) and all(
            isinstance(item, str) and item.startswith(self.prefix) for item in value
        )


DEV_PROD_STRING = StringOptions(("development", "production"))


def assert_valid_options(classifier: CapabilityClassifier, value: object) -> None:
    """Raise ``CapabilityValidationError`` unless ``value`` fits ``classifier``."""

    if classifier.validate_options(value):
        return
    reason = ""
    if classifier.identifier_prefix:
        # The remote rejects malformed ids too, this only fails earlier.
        prefix = classifier.identifier_prefix
        reason = (
            " Expected an array of strings, where each string is prefixed with "
            f'"{prefix}", ex: ["{prefix}myapp"]'
        )
    raise CapabilityValidationError(
        f'iOS entitlement "{classifier.entitlement}" has invalid value "{value}".{reason}',
        entitlement=classifier.entitlement,
        value=value,
    )
