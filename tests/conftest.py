"""Pytest configuration and fixtures for rbac_admin tests."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.database.repository import InMemoryRepository
from rbac_admin.features.roles.schemas import Role
from rbac_admin.features.roles.store import RoleStore
from rbac_admin.features.users.schemas import User, UserStatus
from rbac_admin.features.users.store import UserStore
from rbac_admin.main import create_app


@pytest.fixture
def seed_users():
    """The two users the dashboard starts with."""
    return [
        User(
            id=1,
            name="John Doe",
            email="john@example.com",
            role="Admin",
            status=UserStatus.ACTIVE,
            last_login=datetime(2024, 1, 15, tzinfo=timezone.utc),
        ),
        User(
            id=2,
            name="Jane Smith",
            email="jane@example.com",
            role="Editor",
            status=UserStatus.ACTIVE,
            last_login=datetime(2024, 1, 20, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def seed_roles():
    """Admin and Editor roles."""
    return [
        Role(
            id=1,
            name="Admin",
            description="Full system access and management",
            permissions=["users:read", "users:write", "users:delete", "roles:manage", "system:config"],
        ),
        Role(
            id=2,
            name="Editor",
            description="Content management capabilities",
            permissions=["users:read", "users:write", "content:create", "content:edit"],
        ),
    ]


@pytest.fixture
def user_store(seed_users):
    return UserStore(seed_users)


@pytest.fixture
def role_store(seed_roles):
    return RoleStore(seed_roles)


@pytest.fixture
def admin(seed_users, seed_roles):
    return RBACAdmin.from_snapshot(seed_users, seed_roles)


@pytest.fixture
def strict_admin(seed_users, seed_roles):
    """Admin that rejects users pointing at unknown roles."""
    return RBACAdmin.from_snapshot(seed_users, seed_roles, enforce_role_references=True)


@pytest.fixture
def repository(seed_users, seed_roles):
    return InMemoryRepository(seed_users, seed_roles)


@pytest.fixture
def client(repository):
    """Test client over an app backed by the in-memory repository."""
    app = create_app(repository=repository, seed_defaults=False, enforce_role_references=False)
    with TestClient(app) as test_client:
        yield test_client
