"""
User-list query: case-insensitive search filter followed by a stable sort.

``visible_users`` is pure; results are memoised on (users, search term,
sort config), all of which are immutable and hashable.
"""
from functools import lru_cache
from typing import Any, Iterable, Optional, Tuple

from rbac_admin.features.users.schemas import SortConfig, User


DEFAULT_SORT = SortConfig()


def matches_search(user: User, search_term: str) -> bool:
    """Case-insensitive substring match against name or email."""
    needle = search_term.casefold()
    return needle in user.name.casefold() or needle in user.email.casefold()


def _sort_value(user: User, field: str) -> Tuple[bool, Any]:
    # None ("never logged in") sorts before any value and is never compared.
    value = getattr(user, field)
    if value is None:
        return (False, None)
    return (True, value)


@lru_cache(maxsize=64)
def _visible(users: Tuple[User, ...], search_term: str, sort_config: SortConfig) -> Tuple[User, ...]:
    if search_term:
        matched = [u for u in users if matches_search(u, search_term)]
    else:
        matched = list(users)

    field = sort_config.key.value
    # sorted() is stable with reverse=True too: ties keep filter order.
    matched = sorted(matched, key=lambda u: _sort_value(u, field), reverse=sort_config.descending)
    return tuple(matched)


def visible_users(
    users: Iterable[User],
    search_term: str = "",
    sort_config: Optional[SortConfig] = None,
) -> Tuple[User, ...]:
    """
    Filter and order users for display.

    Args:
        users: Current user collection.
        search_term: Substring to look for in name or email; empty keeps everyone.
        sort_config: Field and direction to order by (default: name ascending).

    Returns:
        The matching users in display order. An empty tuple means nothing
        matched; it is not an error.
    """
    if not isinstance(users, tuple):
        users = tuple(users)
    return _visible(users, search_term or "", sort_config or DEFAULT_SORT)
