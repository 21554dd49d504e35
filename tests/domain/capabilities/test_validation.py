from __future__ import annotations

import pytest

from capsync.domain.capabilities import CapabilityValidationError, classifier_for_entitlement
from capsync.domain.capabilities.validation import (
    BooleanOptions,
    PrefixedStringArrayOptions,
    StringArrayOptions,
    StringOptions,
    assert_valid_options,
)


def test_boolean_options_only_accept_booleans() -> None:
    validator = BooleanOptions()

    assert validator(True)
    assert validator(False)
    assert not validator("true")
    assert not validator(1)


def test_string_options_restrict_values() -> None:
    validator = StringOptions(("development", "production"))

    assert validator("production")
    assert not validator("staging")
    assert not validator(["production"])


def test_string_array_options_with_and_without_allowed_values() -> None:
    open_validator = StringArrayOptions()
    restricted = StringArrayOptions(("Default",))

    assert open_validator([])
    assert open_validator(["anything", "else"])
    assert not open_validator(["ok", 3])
    assert not open_validator("Default")
    assert restricted(["Default"])
    assert not restricted(["Other"])


def test_prefixed_string_array_options() -> None:
    validator = PrefixedStringArrayOptions("merchant.")

    assert validator(["merchant.com.example"])
    assert validator([])
    assert not validator(["com.example"])
    assert not validator("merchant.com.example")


def test_assert_valid_options_names_entitlement_and_value() -> None:
    classifier = classifier_for_entitlement("com.apple.developer.homekit")
    assert classifier is not None

    with pytest.raises(CapabilityValidationError) as exc:
        assert_valid_options(classifier, "yes")

    assert exc.value.entitlement == "com.apple.developer.homekit"
    assert exc.value.value == "yes"
    assert str(exc.value) == (
        'iOS entitlement "com.apple.developer.homekit" has invalid value "yes".'
    )


def test_assert_valid_options_explains_identifier_prefix() -> None:
    classifier = classifier_for_entitlement("com.apple.developer.in-app-payments")
    assert classifier is not None

    with pytest.raises(CapabilityValidationError) as exc:
        assert_valid_options(classifier, ["com.example"])

    assert 'each string is prefixed with "merchant."' in str(exc.value)
    assert '["merchant.myapp"]' in str(exc.value)


def test_validation_error_is_a_value_error() -> None:
    classifier = classifier_for_entitlement("aps-environment")
    assert classifier is not None

    with pytest.raises(ValueError, match="aps-environment"):
        assert_valid_options(classifier, "staging")
