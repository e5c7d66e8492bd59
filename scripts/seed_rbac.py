"""
Seed script to populate the default roles and users.

Run this script against the configured DATABASE_URL to create:
- Default roles (Admin, Editor) with their permission sets
- Default users assigned to those roles

Existing roles (matched by name) and users (matched by email) are left alone.

Usage:
    python -m scripts.seed_rbac
"""
import asyncio

from rbac_admin.core.admin import RBACAdmin
from rbac_admin.core.database.repository import SqlAlchemyRepository
from rbac_admin.core.seed import DEFAULT_ROLES, DEFAULT_USERS, default_snapshot
from rbac_admin.features.roles.schemas import RoleDraft
from rbac_admin.features.users.schemas import UserDraft
from rbac_admin.utils import get_logger


log = get_logger(__name__)


def seed_roles(admin: RBACAdmin) -> int:
    """
    Create default roles that do not exist yet.

    Returns:
        Number of roles created
    """
    log.info("Creating default roles...")
    created = 0

    for role_config in DEFAULT_ROLES:
        if admin.roles.find_by_name(role_config["name"]) is not None:
            log.debug(f"Role '{role_config['name']}' already exists, skipping")
            continue

        role = admin.add_role(RoleDraft(
            name=role_config["name"],
            description=role_config["description"],
            permissions=role_config["permissions"],
        ))
        log.info(f"Created role '{role.name}' with {len(role.permissions)} permissions")
        created += 1

    return created


def seed_users(admin: RBACAdmin) -> int:
    """
    Create default users whose email is not taken yet.

    Returns:
        Number of users created
    """
    log.info("Creating default users...")
    existing_emails = {user.email.lower() for user in admin.users}
    created = 0

    for user_config in DEFAULT_USERS:
        if user_config["email"].lower() in existing_emails:
            log.debug(f"User '{user_config['email']}' already exists, skipping")
            continue

        user = admin.add_user(UserDraft(
            name=user_config["name"],
            email=user_config["email"],
            role=user_config["role"],
            status=user_config["status"],
        ))
        log.info(f"Created user {user.id} '{user.email}' with role '{user.role}'")
        created += 1

    return created


async def main():
    """Main function to seed roles and users."""
    log.info("Starting RBAC seeding...")

    repository = SqlAlchemyRepository()
    try:
        await repository.init()
        users, roles = await repository.load()

        if not users and not roles:
            users, roles = default_snapshot()
            log.info("Empty database, writing default snapshot")
        else:
            admin = RBACAdmin.from_snapshot(users, roles)
            roles_created = seed_roles(admin)
            users_created = seed_users(admin)
            log.info(f"Created {roles_created} roles and {users_created} users")
            users, roles = admin.snapshot()

        if not await repository.save(users, roles):
            raise SystemExit("Error seeding RBAC data, see log for details")

        log.info("RBAC seeding completed successfully!")
        log.info("")
        log.info("Default roles:")
        for role_config in DEFAULT_ROLES:
            log.info(f"  - {role_config['name']}: {role_config['description']}")
    finally:
        await repository.dispose()


if __name__ == "__main__":
    asyncio.run(main())
