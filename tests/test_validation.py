"""
Test email and required-field validation.
"""

import pytest

from rbac_admin.core.exceptions import ValidationError
from rbac_admin.core.validation import (
    check_seed_ids,
    is_valid_email,
    is_valid_user,
    validate_role,
    validate_user,
)
from rbac_admin.features.roles.schemas import RoleDraft
from rbac_admin.features.users.schemas import UserDraft


@pytest.mark.parametrize("email", [
    "ann@x.com",
    "john.doe@example.co.uk",
    "a@b.c",
    "first+tag@sub.domain.org",
])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", [
    "not-an-email",
    "",
    "ann@x",
    "@x.com",
    "ann@.com",
    "ann@x.",
    "ann smith@x.com",
    "ann@@x.com",
    "ann@x.com ",
    "ann@x.com\n",
])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_non_string_email_is_invalid():
    assert not is_valid_email(None)
    assert not is_valid_email(42)


def test_is_valid_user_requires_name_and_email():
    assert is_valid_user(UserDraft(name="Ann", email="ann@x.com"))
    assert not is_valid_user(UserDraft(name="", email="ann@x.com"))
    assert not is_valid_user(UserDraft(name="   ", email="ann@x.com"))
    assert not is_valid_user(UserDraft(name="Ann", email="ann"))


def test_validate_user_reports_email_first():
    with pytest.raises(ValidationError) as exc_info:
        validate_user(UserDraft(name="", email="bad"))
    assert exc_info.value.field == "email"
    assert exc_info.value.message == "Invalid email format"


def test_validate_user_reports_missing_name():
    with pytest.raises(ValidationError) as exc_info:
        validate_user(UserDraft(name="", email="ann@x.com"))
    assert exc_info.value.field == "name"


def test_validate_role_requires_name():
    validate_role(RoleDraft(name="Viewer"))
    with pytest.raises(ValidationError):
        validate_role(RoleDraft(name=" "))


def test_check_seed_ids():
    assert check_seed_ids([1, 2, 5], "User") == 6
    assert check_seed_ids([], "User") == 1

    with pytest.raises(ValidationError, match="Duplicate user id 2"):
        check_seed_ids([1, 2, 2], "User")
    with pytest.raises(ValidationError, match="must be positive"):
        check_seed_ids([0], "Role")
