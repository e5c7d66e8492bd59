"""
Validation rules applied before any store mutation.

These are syntactic checks only: no DNS/MX lookup and no uniqueness check
against existing users.
"""
import re
from typing import Any, Iterable

from rbac_admin.core.exceptions import ValidationError


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(text: Any) -> bool:
    """True iff ``text`` looks like ``local@domain.tld``."""
    if not isinstance(text, str):
        return False
    return EMAIL_PATTERN.fullmatch(text) is not None


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_valid_user(draft: Any) -> bool:
    """
    Check the required user fields.

    Args:
        draft: Any object with ``name`` and ``email`` attributes
            (a ``UserDraft`` or a full ``User``).

    Returns:
        True if the name is non-empty and the email is well formed.
    """
    return _has_text(getattr(draft, "name", None)) and is_valid_email(getattr(draft, "email", None))


def validate_user(draft: Any) -> None:
    """
    Raise ``ValidationError`` for the first failing user field.

    Email is checked first so a bad address is always reported as such.
    """
    if not is_valid_email(getattr(draft, "email", None)):
        raise ValidationError("Invalid email format", field="email")
    if not _has_text(getattr(draft, "name", None)):
        raise ValidationError("Name is required", field="name")


def validate_role(draft: Any) -> None:
    """Raise ``ValidationError`` if the role has no name."""
    if not _has_text(getattr(draft, "name", None)):
        raise ValidationError("Role name is required", field="name")


def check_seed_ids(ids: Iterable[int], entity: str) -> int:
    """
    Verify that seed record ids are positive and unique.

    Returns:
        The next id to hand out (one past the largest seed id).
    """
    seen = set()
    for record_id in ids:
        if record_id <= 0:
            raise ValidationError(f"{entity} id must be positive, got {record_id}", field="id")
        if record_id in seen:
            raise ValidationError(f"Duplicate {entity.lower()} id {record_id}", field="id")
        seen.add(record_id)
    return max(seen, default=0) + 1
