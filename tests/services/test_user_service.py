"""Tests for registration, login and role management."""

import pytest

from hottakes.core.errors import (
    ForbiddenError,
    InvalidInputError,
    NotAuthenticatedError,
    NotFoundError,
)
from hottakes.models import UserRole
from hottakes.services import user_service
from tests.conftest import TEST_PASSWORD


def test_create_user_hashes_password(db_session) -> None:
    user = user_service.create_user(db_session, "new_user", TEST_PASSWORD)

    assert user.id is not None
    assert user.role is UserRole.USER
    assert user.password_hash != TEST_PASSWORD


@pytest.mark.parametrize("username", ["ab", "has space", "x" * 21, "semi;colon"])
def test_bad_usernames(db_session, username) -> None:
    with pytest.raises(InvalidInputError):
        user_service.create_user(db_session, username, TEST_PASSWORD)


@pytest.mark.parametrize(
    "password",
    ["short1!A", "alllowercase123!", "ALLUPPERCASE123!", "NoDigitsHere!!", "NoSymbols12345", "A" * 70 + "a1!"],
)
def test_weak_passwords(db_session, password) -> None:
    with pytest.raises(InvalidInputError):
        user_service.create_user(db_session, "valid_name", password)


def test_duplicate_username(db_session, test_user) -> None:
    with pytest.raises(InvalidInputError, match="already exists"):
        user_service.create_user(db_session, test_user.username, TEST_PASSWORD)


def test_usernames_are_case_sensitive(db_session, test_user) -> None:
    user = user_service.create_user(db_session, test_user.username.upper(), TEST_PASSWORD)

    assert user.username == "ALICE"
    with pytest.raises(NotFoundError):
        user_service.find_user(db_session, "Alice")


def test_authenticate(db_session, test_user) -> None:
    assert user_service.authenticate(db_session, "alice", TEST_PASSWORD).id == test_user.id

    with pytest.raises(InvalidInputError, match="bad credentials"):
        user_service.authenticate(db_session, "alice", "Not-The-Password-1")
    with pytest.raises(InvalidInputError, match="bad credentials"):
        user_service.authenticate(db_session, "nobody", TEST_PASSWORD)


def test_deleted_users_are_invisible(db_session, test_user, other_user) -> None:
    other_user.deleted = True
    db_session.commit()

    assert [user.id for user in user_service.list_users(db_session)] == [test_user.id]
    assert user_service.get_user(db_session, other_user.id) is None
    with pytest.raises(InvalidInputError):
        user_service.authenticate(db_session, "bob", TEST_PASSWORD)


def test_admin_changes_role(db_session, admin, test_user) -> None:
    user = user_service.set_user_role(db_session, admin, test_user.id, "MODERATOR")

    assert user.role is UserRole.MODERATOR


def test_role_change_requires_admin(db_session, moderator, test_user) -> None:
    with pytest.raises(ForbiddenError):
        user_service.set_user_role(db_session, moderator, test_user.id, UserRole.ADMIN)
    with pytest.raises(NotAuthenticatedError):
        user_service.set_user_role(db_session, None, test_user.id, UserRole.ADMIN)


def test_role_change_validation(db_session, admin, test_user) -> None:
    with pytest.raises(InvalidInputError):
        user_service.set_user_role(db_session, admin, test_user.id, "OVERLORD")
    with pytest.raises(NotFoundError):
        user_service.set_user_role(db_session, admin, 9999, UserRole.USER)
