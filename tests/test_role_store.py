"""
Test the in-memory role store.
"""

import pytest

from rbac_admin.core.exceptions import NotFoundError, ValidationError
from rbac_admin.features.roles.schemas import Role, RoleDraft


def test_add_role_assigns_fresh_id(role_store):
    role = role_store.add(RoleDraft(name="Viewer", description="Read only", permissions=["users:read"]))

    assert role.id == 3
    assert len(role_store) == 3
    assert role_store.find_by_name("Viewer") == role
    assert role.permissions == ("users:read",)


def test_permissions_are_deduplicated_in_order(role_store):
    role = role_store.add(RoleDraft(name="Viewer", permissions=["users:read", "content:edit", "users:read"]))
    assert role.permissions == ("users:read", "content:edit")


def test_unknown_permission_keys_are_kept(role_store):
    role = role_store.add(RoleDraft(name="Publisher", permissions=["content:publish"]))
    assert role.has_permission("content:publish")


def test_add_role_with_empty_name_is_rejected(role_store):
    with pytest.raises(ValidationError):
        role_store.add(RoleDraft(name="", permissions=["users:read"]))
    assert len(role_store) == 2


def test_edit_role_overwrites_whole_record(role_store):
    updated = Role(id=2, name="Writer", description="", permissions=["content:create"])

    role_store.edit(updated)

    assert role_store.get(2) == updated
    assert role_store.get(2).permissions == ("content:create",)
    assert role_store.names() == ["Admin", "Writer"]


def test_edit_unknown_role_raises_not_found(role_store):
    with pytest.raises(NotFoundError):
        role_store.edit(Role(id=9, name="Ghost"))
    assert role_store.names() == ["Admin", "Editor"]


def test_edit_role_with_empty_name_leaves_store_unchanged(role_store):
    original = role_store.get(1)
    with pytest.raises(ValidationError):
        role_store.edit(original.model_copy(update={"name": ""}))
    assert role_store.get(1) == original


def test_check_runs_after_name_validation(role_store):
    seen = []
    with pytest.raises(ValidationError):
        role_store.add(RoleDraft(name=""), check=seen.append)
    assert seen == []

    role = role_store.add(RoleDraft(name="Viewer"), check=seen.append)
    assert [r.name for r in seen] == ["Viewer"]
    assert role.id == 3


def test_rejecting_check_leaves_store_unchanged(role_store):
    def reject(role):
        raise ValidationError(f"Role {role.name!r} already exists", field="name")

    before = role_store.all()
    with pytest.raises(ValidationError):
        role_store.add(RoleDraft(name="Admin"), check=reject)
    with pytest.raises(ValidationError):
        role_store.edit(role_store.get(2).model_copy(update={"name": "Admin"}), check=reject)

    assert role_store.all() == before
