"""
In-memory user store.

The collection is an immutable tuple. Each mutation builds a new tuple and
swaps it in as a single assignment, so a reader holding the previous
snapshot never sees a half-applied change.
"""
from datetime import datetime, timezone
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

from rbac_admin.core.exceptions import NotFoundError
from rbac_admin.core.validation import check_seed_ids, validate_user
from rbac_admin.features.users.schemas import User, UserDraft
from rbac_admin.utils import get_logger


log = get_logger(__name__)

UserCheck = Callable[[Union[UserDraft, User]], None]


class UserStore:
    """Collection of user records plus the add/edit/delete mutations."""

    def __init__(self, users: Iterable[User] = ()):
        self._users: Tuple[User, ...] = tuple(users)
        # Never derived from len(): ids stay unique after deletions.
        self._next_id = check_seed_ids((u.id for u in self._users), "User")

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(self._users)

    def all(self) -> Tuple[User, ...]:
        return self._users

    def find(self, user_id: int) -> Optional[User]:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def get(self, user_id: int) -> User:
        user = self.find(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def _allocate_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id

    def add(self, draft: UserDraft, now: Optional[datetime] = None, check: Optional[UserCheck] = None) -> User:
        """
        Validate and append a new user.

        Args:
            draft: Fields supplied by the caller.
            now: Timestamp stamped as ``last_login`` (defaults to current UTC time).
            check: Extra rule run after field validation and before anything changes.

        Returns:
            The stored record with its assigned id.

        Raises:
            ValidationError: If the email is malformed, the name is empty or ``check`` rejects the draft.
        """
        validate_user(draft)
        if check is not None:
            check(draft)

        user = User(
            id=self._allocate_id(),
            name=draft.name,
            email=draft.email,
            role=draft.role,
            status=draft.status,
            last_login=now or datetime.now(timezone.utc),
        )
        self._users = self._users + (user,)
        log.info("Added user %s (%s)", user.id, user.email)
        return user

    def edit(self, updated: User, check: Optional[UserCheck] = None) -> User:
        """
        Replace the record whose id matches ``updated.id``.

        The replacement is a full overwrite and keeps the record's position.

        Raises:
            NotFoundError: If no record has that id.
            ValidationError: If the email is malformed, the name is empty or ``check`` rejects the record.
        """
        if self.find(updated.id) is None:
            raise NotFoundError("User", updated.id)
        validate_user(updated)
        if check is not None:
            check(updated)

        self._users = tuple(updated if u.id == updated.id else u for u in self._users)
        log.info("Edited user %s", updated.id)
        return updated

    def delete(self, user_id: int) -> bool:
        """
        Remove the record with ``user_id``.

        Returns:
            True if a record was removed, False if it was already absent.
        """
        remaining = tuple(u for u in self._users if u.id != user_id)
        if len(remaining) == len(self._users):
            log.debug("Delete of absent user %s ignored", user_id)
            return False
        self._users = remaining
        log.info("Deleted user %s", user_id)
        return True
