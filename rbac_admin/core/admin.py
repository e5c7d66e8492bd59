"""
RBAC core facade.

``RBACAdmin`` owns the user and role stores and is the only way callers
read or change them. It adds the rules that span both stores:

- role references: ``User.role`` should name an existing role. Advisory by
  default (a warning is logged); enforced when ``enforce_role_references``
  is set.
- two-phase delete: the caller fetches the record to confirm with
  ``request_user_deletion`` and then calls ``delete_user(confirmed=True)``.
  The core never prompts.
"""
from typing import Iterable, List, Optional, Tuple, Union

from rbac_admin.core.exceptions import ConfirmationRequiredError, ValidationError
from rbac_admin.features.permissions.catalog import catalog_entries, label_for
from rbac_admin.features.permissions.schemas import PermissionEntry
from rbac_admin.features.roles.schemas import Role, RoleDraft
from rbac_admin.features.roles.store import RoleStore
from rbac_admin.features.users.query import visible_users
from rbac_admin.features.users.schemas import SortConfig, User, UserDraft
from rbac_admin.features.users.store import UserStore
from rbac_admin.utils import get_logger


log = get_logger(__name__)

DELETE_CONFIRMATION_PROMPT = "Are you sure you want to delete this user?"


class RBACAdmin:
    def __init__(
        self,
        users: Optional[UserStore] = None,
        roles: Optional[RoleStore] = None,
        enforce_role_references: bool = False,
    ):
        self.users = users if users is not None else UserStore()
        self.roles = roles if roles is not None else RoleStore()
        self.enforce_role_references = enforce_role_references

    @classmethod
    def from_snapshot(
        cls,
        users: Iterable[User],
        roles: Iterable[Role],
        enforce_role_references: bool = False,
    ) -> "RBACAdmin":
        """Build a facade over seed collections (e.g. the result of ``Repository.load``)."""
        return cls(UserStore(users), RoleStore(roles), enforce_role_references)

    def snapshot(self) -> Tuple[Tuple[User, ...], Tuple[Role, ...]]:
        return self.users.all(), self.roles.all()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def list_users(self, search_term: str = "", sort_config: Optional[SortConfig] = None) -> Tuple[User, ...]:
        return visible_users(self.users.all(), search_term, sort_config)

    def get_user(self, user_id: int) -> User:
        return self.users.get(user_id)

    # Field validation belongs to the stores; the facade passes in the cross-store rules.

    def add_user(self, draft: UserDraft) -> User:
        return self.users.add(draft, check=self._check_role_reference)

    def edit_user(self, updated: User) -> User:
        return self.users.edit(updated, check=self._check_role_reference)

    def request_user_deletion(self, user_id: int) -> Optional[User]:
        """
        First phase of a delete: the record the caller should ask to confirm.

        Returns None when there is nothing to delete.
        """
        return self.users.find(user_id)

    def delete_user(self, user_id: int, *, confirmed: bool = False) -> bool:
        """
        Second phase of a delete.

        Returns:
            True if the user was removed, False if it did not exist.

        Raises:
            ConfirmationRequiredError: If the caller has not confirmed.
        """
        if not confirmed:
            raise ConfirmationRequiredError(DELETE_CONFIRMATION_PROMPT)
        return self.users.delete(user_id)

    def _check_role_reference(self, user: Union[UserDraft, User]) -> None:
        role_name = user.role
        if self.roles.find_by_name(role_name) is not None:
            return
        if self.enforce_role_references:
            raise ValidationError(f"Unknown role {role_name!r}", field="role")
        log.warning("User assigned to role %r, which does not exist", role_name)

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def list_roles(self) -> Tuple[Role, ...]:
        return self.roles.all()

    def get_role(self, role_id: int) -> Role:
        return self.roles.get(role_id)

    def add_role(self, draft: RoleDraft) -> Role:
        return self.roles.add(draft, check=lambda role: self._check_role_name_free(role.name))

    def edit_role(self, updated: Role) -> Role:
        current = self.roles.get(updated.id)

        def check_rename(role: Role) -> None:
            if current.name != role.name:
                self._check_role_name_free(role.name, exclude_id=role.id)
                self._check_role_unassigned(current)

        return self.roles.edit(updated, check=check_rename)

    def _check_role_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        existing = self.roles.find_by_name(name)
        if existing is None or existing.id == exclude_id:
            return
        if self.enforce_role_references:
            raise ValidationError(f"Role {name!r} already exists", field="name")
        log.warning("Role name %r is used by more than one role", name)

    def _check_role_unassigned(self, role: Role) -> None:
        assigned = sum(1 for u in self.users if u.role == role.name)
        if not assigned:
            return
        if self.enforce_role_references:
            raise ValidationError(
                f"Role {role.name!r} is still assigned to {assigned} user(s)", field="name"
            )
        log.warning("Renaming role %r leaves %d user(s) with a dangling role", role.name, assigned)

    # ------------------------------------------------------------------
    # Permissions
    # ------------------------------------------------------------------

    def label_for(self, permission_key: str) -> str:
        return label_for(permission_key)

    def permission_catalog(self) -> List[PermissionEntry]:
        return catalog_entries()

    def role_permission_entries(self, role: Role) -> List[PermissionEntry]:
        """A role's permissions with labels; unknown keys are labelled with themselves."""
        return [PermissionEntry(key=key, label=label_for(key)) for key in role.permissions]
