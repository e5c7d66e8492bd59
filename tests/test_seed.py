"""
Test the default seed data and the seeding script helpers.
"""

from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.seed import default_snapshot
from rbac_admin.features.roles.schemas import Role
from scripts.seed_rbac import seed_roles, seed_users


def test_default_snapshot_is_consistent():
    users, roles = default_snapshot()
    role_names = {r.name for r in roles}

    assert [u.email for u in users] == ["john@example.com", "jane@example.com"]
    assert all(u.role in role_names for u in users)
    assert default_snapshot() == (users, roles)


def test_seeding_an_empty_admin_creates_everything():
    admin = RBACAdmin()

    assert seed_roles(admin) == 2
    assert seed_users(admin) == 2
    assert [r.name for r in admin.list_roles()] == ["Admin", "Editor"]
    assert [u.id for u in admin.users] == [1, 2]


def test_seeding_skips_existing_records(admin):
    assert seed_roles(admin) == 0
    assert seed_users(admin) == 0
    assert len(admin.users) == 2


def test_seeding_fills_gaps():
    admin = RBACAdmin.from_snapshot([], [Role(id=5, name="Admin")])

    assert seed_roles(admin) == 1
    assert admin.roles.find_by_name("Editor").id == 6
    assert admin.roles.find_by_name("Admin").permissions == ()
