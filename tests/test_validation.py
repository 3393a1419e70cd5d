"""
Signup/signin validation tests: every broken rule is reported, nothing leaks the submitted values.
"""

import pytest

from houseback.core.errors import ValidationError
from houseback.services.validation import validate_registration, validate_signin


def _fields(exc: ValidationError) -> set[str]:
    return {err.field for err in exc.errors}


def test_valid_input_is_normalized():
    data = validate_registration("  John@Example.COM ", "  John Doe ", " my password ")
    assert data.email == "john@example.com"
    assert data.name == "John Doe"
    # The password is taken verbatim
    assert data.password == " my password "


def test_every_broken_rule_is_reported():
    with pytest.raises(ValidationError) as info:
        validate_registration("not-an-email", "ab", "short")
    assert _fields(info.value) == {"email", "name", "password"}


def test_missing_fields_are_required():
    with pytest.raises(ValidationError) as info:
        validate_registration(None, None, None)
    assert _fields(info.value) == {"email", "name", "password"}
    assert all(err.message == "Field required" for err in info.value.errors)


def test_same_invalid_input_gives_same_errors():
    errors = []
    for _ in range(2):
        with pytest.raises(ValidationError) as info:
            validate_registration("not-an-email", "ab", "short")
        errors.append(info.value.errors)
    assert errors[0] == errors[1]


def test_name_length_counts_after_stripping():
    with pytest.raises(ValidationError) as info:
        validate_registration("a@x.com", "  ab  ", "password123")
    assert _fields(info.value) == {"name"}


def test_password_over_bcrypt_limit_is_rejected():
    with pytest.raises(ValidationError) as info:
        validate_registration("a@x.com", "Alice", "é" * 40)
    assert _fields(info.value) == {"password"}


def test_error_details_do_not_echo_input():
    with pytest.raises(ValidationError) as info:
        validate_registration("not-an-email", "ab", "short")
    rendered = " ".join(err.message for err in info.value.errors)
    assert "short" not in rendered
    assert "not-an-email" not in rendered


def test_signin_requires_both_fields():
    with pytest.raises(ValidationError) as info:
        validate_signin("   ", None)
    assert _fields(info.value) == {"email", "password"}


def test_signin_normalizes_email():
    assert validate_signin(" A@X.com", "whatever").email == "a@x.com"
