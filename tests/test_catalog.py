"""
Test the permission catalog.
"""

import pytest

from rbac_admin.features.permissions.catalog import (
    PERMISSION_LABELS,
    catalog_entries,
    is_known_permission,
    label_for,
)


def test_label_for_known_key():
    assert label_for("users:read") == "View Users"
    assert label_for("system:config") == "System Configuration"


def test_label_for_unknown_key_is_returned_unchanged():
    assert label_for("unknown:key") == "unknown:key"
    assert label_for("") == ""


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        PERMISSION_LABELS["users:read"] = "Something else"  # type: ignore[index]
    assert label_for("users:read") == "View Users"


def test_catalog_entries_in_declaration_order():
    entries = catalog_entries()
    assert [e.key for e in entries] == [
        "users:read",
        "users:write",
        "users:delete",
        "roles:manage",
        "system:config",
        "content:create",
        "content:edit",
    ]
    assert entries[3].label == "Manage Roles"


def test_is_known_permission():
    assert is_known_permission("content:edit")
    assert not is_known_permission("content:publish")
