"""
Test the user-list search filter and sort.
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError as SchemaValidationError

from rbac_admin.features.users.query import visible_users
from rbac_admin.features.users.schemas import SortConfig, SortDirection, SortKey, User, UserStatus


def _at(day):
    return datetime(2024, 1, day, tzinfo=timezone.utc)


@pytest.fixture
def users():
    return (
        User(id=1, name="Carol King", email="carol@example.com", role="Editor", last_login=_at(3)),
        User(id=2, name="Alice Moss", email="alice@corp.io", role="Admin", last_login=_at(9)),
        User(id=3, name="Bob Stone", email="bob@example.com", role="Editor",
             status=UserStatus.INACTIVE, last_login=None),
        User(id=4, name="Dave Hill", email="dave@CORP.io", role="Admin", last_login=_at(1)),
        User(id=5, name="Erin Vale", email="erin@example.com", role="Editor", last_login=_at(9)),
    )


def ids(result):
    return [u.id for u in result]


def test_empty_search_returns_everyone(users):
    assert sorted(ids(visible_users(users, ""))) == [1, 2, 3, 4, 5]


def test_search_matches_name_or_email_case_insensitively(users):
    assert ids(visible_users(users, "corp")) == [2, 4]
    assert ids(visible_users(users, "ALICE")) == [2]
    assert ids(visible_users(users, "stone")) == [3]


def test_search_uses_full_case_folding():
    users = (User(id=1, name="Anna Stra\u00dfe", email="anna@example.de"),)
    assert ids(visible_users(users, "STRASSE")) == [1]
    assert ids(visible_users(users, "stra\u00dfe")) == [1]


@pytest.mark.parametrize("term", ["", "e", "EXAMPLE", "io", "o", "zzz", "Hill"])
def test_search_keeps_exactly_the_matching_users(users, term):
    expected = {u.id for u in users if term.casefold() in u.name.casefold() or term.casefold() in u.email.casefold()}
    assert set(ids(visible_users(users, term))) == expected


def test_no_match_is_an_empty_result(users):
    assert visible_users(users, "nobody") == ()


def test_default_sort_is_name_ascending(users):
    assert ids(visible_users(users)) == [2, 3, 1, 4, 5]


def test_name_descending(users):
    config = SortConfig(key=SortKey.NAME, direction=SortDirection.DESC)
    assert ids(visible_users(users, "", config)) == [5, 4, 1, 3, 2]


def test_sort_is_stable_for_ties_in_both_directions(users):
    asc = SortConfig(key="role", direction="asc")
    desc = asc.toggled()

    assert ids(visible_users(users, "", asc)) == [2, 4, 1, 3, 5]
    # Distinct keys reverse, equal keys keep their filter order
    assert ids(visible_users(users, "", desc)) == [1, 3, 5, 2, 4]


def test_reversing_direction_reverses_distinct_keys(users):
    config = SortConfig(key=SortKey.EMAIL)
    forward = ids(visible_users(users, "", config))
    backward = ids(visible_users(users, "", config.toggled()))
    assert backward == list(reversed(forward))


def test_last_login_sorts_chronologically_with_never_first(users):
    config = SortConfig(key="lastLogin")
    assert config.key == SortKey.LAST_LOGIN
    # id 2 and 5 tie on the 9th and keep input order
    assert ids(visible_users(users, "", config)) == [3, 4, 1, 2, 5]
    assert ids(visible_users(users, "", config.toggled())) == [2, 5, 1, 4, 3]


def test_sort_by_status(users):
    config = SortConfig(key=SortKey.STATUS)
    assert ids(visible_users(users, "", config)) == [1, 2, 4, 5, 3]


def test_filter_then_sort(users):
    config = SortConfig(key=SortKey.ID, direction=SortDirection.DESC)
    assert ids(visible_users(users, "example", config)) == [5, 3, 1]


def test_results_are_memoised_on_inputs(users):
    config = SortConfig(key=SortKey.EMAIL)
    first = visible_users(users, "o", config)
    assert visible_users(users, "o", SortConfig(key="email")) is first


def test_accepts_any_iterable(users):
    assert ids(visible_users(list(users), "alice")) == [2]


def test_unknown_sort_key_is_rejected():
    with pytest.raises(SchemaValidationError):
        SortConfig(key="password")


def test_direction_is_case_insensitive():
    assert SortConfig(direction="DESC").descending
