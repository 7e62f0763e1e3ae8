"""Tests for sooner/accounts.py"""

import pytest

from sooner.accounts import (
    authenticate,
    authorization_flags,
    create_user,
    delete_user,
    patch_user,
    prepare_profile_changes,
    public_user,
    request_assistant_access,
    set_flags,
)
from sooner.errors import Conflict, NotFound, Unauthenticated
from sooner.security import hash_password, verify_password


@pytest.fixture
def users():
    return [{}]


@pytest.fixture
def pw_hash():
    return hash_password("pw")


class TestCreateUser:
    def test_stores_given_hash(self, users, pw_hash):
        user = create_user(users, "alice@example.com", pw_hash, "Alice")

        assert user in users
        assert user["password"] == pw_hash
        assert verify_password("pw", user["password"])
        assert user["tasks"] == []
        assert user["isMegaUser"] is False
        assert user["assistantOn"] is False

    def test_duplicate_email_conflicts(self, users, pw_hash):
        create_user(users, "alice@example.com", pw_hash, "Alice")

        with pytest.raises(Conflict):
            create_user(users, "Alice@Example.com", pw_hash, "Other Alice")

        assert len(users) == 2


class TestAuthenticate:
    def test_success(self, users, pw_hash):
        created = create_user(users, "alice@example.com", pw_hash, "Alice")

        assert authenticate(users, "alice@example.com", "pw") is created

    def test_unknown_email(self, users):
        with pytest.raises(NotFound):
            authenticate(users, "nobody@example.com", "pw")

    def test_wrong_password(self, users, pw_hash):
        create_user(users, "alice@example.com", pw_hash, "Alice")

        with pytest.raises(Unauthenticated) as exc_info:
            authenticate(users, "alice@example.com", "wrong")

        assert exc_info.value.code == "BAD_CREDENTIALS"


class TestProfile:
    def test_public_user_hides_password(self, user_record):
        assert "password" not in public_user(user_record)
        assert public_user(user_record)["email"] == user_record["email"]

    def test_patch_merges_and_protects(self, users, user_record):
        users.append(user_record)

        patch_user(
            users,
            user_record,
            {"name": "Al", "id": "hijack", "tasks": None, "isMegaUser": True, "theme": "dark"},
        )

        assert user_record["name"] == "Al"
        assert user_record["id"] == "test_user_123"
        assert user_record["tasks"] == []
        assert user_record["isMegaUser"] is False
        assert user_record["theme"] == "dark"

    def test_prepare_hashes_new_password(self, users, user_record):
        users.append(user_record)

        changes = prepare_profile_changes({"password": "new-pw", "name": "Al"})
        patch_user(users, user_record, changes)

        assert changes["password"] != "new-pw"
        assert verify_password("new-pw", user_record["password"])
        assert user_record["name"] == "Al"

    def test_prepare_drops_empty_password_and_protected_fields(self, user_record):
        changes = prepare_profile_changes({"password": "", "id": "hijack", "assistantOn": True, "theme": "dark"})

        assert changes == {"theme": "dark"}

    def test_patch_to_taken_email_conflicts(self, users, user_record, pw_hash):
        users.append(user_record)
        create_user(users, "bob@example.com", pw_hash, "Bob")

        with pytest.raises(Conflict):
            patch_user(users, user_record, {"email": "bob@example.com"})

    def test_patch_to_own_email_is_fine(self, users, user_record):
        users.append(user_record)

        patch_user(users, user_record, {"email": "ALICE@example.com"})

        assert user_record["email"] == "ALICE@example.com"

    def test_delete_user(self, users, user_record):
        users.append(user_record)

        delete_user(users, user_record["id"])

        assert users == [{}]
        with pytest.raises(NotFound):
            delete_user(users, user_record["id"])


class TestFlags:
    def test_missing_flags_read_as_false(self, user_record):
        del user_record["isMegaUser"]

        assert authorization_flags(user_record) == {
            "isMegaUser": False,
            "assistantOn": False,
            "accessRequested": False,
        }

    def test_request_access(self, user_record):
        request_assistant_access(user_record)

        assert authorization_flags(user_record)["accessRequested"] is True

    def test_set_flags_ignores_unset_values(self, user_record):
        flags = set_flags(user_record, {"assistantOn": True, "isMegaUser": None, "bogus": True})

        assert flags["assistantOn"] is True
        assert flags["isMegaUser"] is False
        assert "bogus" not in user_record
