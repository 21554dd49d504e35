"""Errors raised while reading capsync settings."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A setting is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank."""

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Missing configuration for: {', '.join(names)}")
        self.names = names


class InvalidConfigurationError(ConfigurationError):
    def __init__(self, name: str, value: str, *, expected: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r} (expected {expected})")
        self.name = name
        self.value = value
