"""
In-memory role store.

Same snapshot-and-swap storage as the user store. There is no delete
operation: roles are only created and edited.
"""
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from rbac_admin.core.exceptions import NotFoundError
from rbac_admin.core.validation import check_seed_ids, validate_role
from rbac_admin.features.permissions.catalog import is_known_permission
from rbac_admin.features.roles.schemas import Role, RoleDraft
from rbac_admin.utils import get_logger


log = get_logger(__name__)

RoleCheck = Callable[[Union[RoleDraft, Role]], None]


def _log_unknown_permissions(role: Role) -> None:
    unknown = [key for key in role.permissions if not is_known_permission(key)]
    if unknown:
        log.info("Role %r carries permissions outside the catalog: %s", role.name, unknown)


class RoleStore:
    """Collection of role records plus the add/edit mutations."""

    def __init__(self, roles: Iterable[Role] = ()):
        self._roles: Tuple[Role, ...] = tuple(roles)
        self._next_id = check_seed_ids((r.id for r in self._roles), "Role")

    def __len__(self) -> int:
        return len(self._roles)

    def __iter__(self) -> Iterator[Role]:
        return iter(self._roles)

    def all(self) -> Tuple[Role, ...]:
        return self._roles

    def names(self) -> List[str]:
        return [role.name for role in self._roles]

    def find(self, role_id: int) -> Optional[Role]:
        for role in self._roles:
            if role.id == role_id:
                return role
        return None

    def find_by_name(self, name: str) -> Optional[Role]:
        for role in self._roles:
            if role.name == name:
                return role
        return None

    def get(self, role_id: int) -> Role:
        role = self.find(role_id)
        if role is None:
            raise NotFoundError("Role", role_id)
        return role

    def add(self, draft: RoleDraft, check: Optional[RoleCheck] = None) -> Role:
        """
        Append a new role with a freshly assigned id.

        ``check`` is an extra rule run after name validation and before anything changes.

        Raises:
            ValidationError: If the name is empty or ``check`` rejects the draft.
        """
        validate_role(draft)
        if check is not None:
            check(draft)

        role = Role(
            id=self._next_id,
            name=draft.name,
            description=draft.description,
            permissions=draft.permissions,
        )
        self._next_id += 1
        self._roles = self._roles + (role,)
        _log_unknown_permissions(role)
        log.info("Added role %s (%r)", role.id, role.name)
        return role

    def edit(self, updated: Role, check: Optional[RoleCheck] = None) -> Role:
        """
        Replace the role whose id matches ``updated.id`` (full overwrite).

        Raises:
            NotFoundError: If no role has that id.
            ValidationError: If the name is empty or ``check`` rejects the record.
        """
        if self.find(updated.id) is None:
            raise NotFoundError("Role", updated.id)
        validate_role(updated)
        if check is not None:
            check(updated)

        self._roles = tuple(updated if r.id == updated.id else r for r in self._roles)
        _log_unknown_permissions(updated)
        log.info("Edited role %s (%r)", updated.id, updated.name)
        return updated
