"""
Default users and roles loaded into an empty repository.
"""
from datetime import datetime, timezone
from typing import List, Tuple

from rbac_admin.features.roles.schemas import Role
from rbac_admin.features.users.schemas import User, UserStatus


DEFAULT_ROLES = [
    {
        "id": 1,
        "name": "Admin",
        "description": "Full system access and management",
        "permissions": [
            "users:read",
            "users:write",
            "users:delete",
            "roles:manage",
            "system:config",
        ],
    },
    {
        "id": 2,
        "name": "Editor",
        "description": "Content management capabilities",
        "permissions": [
            "users:read",
            "users:write",
            "content:create",
            "content:edit",
        ],
    },
]


DEFAULT_USERS = [
    {
        "id": 1,
        "name": "John Doe",
        "email": "john@example.com",
        "role": "Admin",
        "status": UserStatus.ACTIVE,
        "last_login": datetime(2024, 1, 15, tzinfo=timezone.utc),
    },
    {
        "id": 2,
        "name": "Jane Smith",
        "email": "jane@example.com",
        "role": "Editor",
        "status": UserStatus.ACTIVE,
        "last_login": datetime(2024, 1, 20, tzinfo=timezone.utc),
    },
]


def default_snapshot() -> Tuple[List[User], List[Role]]:
    """Fresh copies of the default users and roles."""
    users = [User(**data) for data in DEFAULT_USERS]
    roles = [Role(**data) for data in DEFAULT_ROLES]
    return users, roles
