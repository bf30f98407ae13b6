"""Tests for the User model and role-derived player classes."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from dragons.models.user import User, player_class_for_role


class TestUserModel:
    def test_minimal_valid_user(self):
        user = User(username="testuser", email="test@example.com")
        assert user.username == "testuser"
        assert user.role == "student"
        assert user.player_class == "Adventurer"
        assert user.health == 100
        assert user.team_id is None

    def test_generates_string_id(self):
        user = User(username="testuser", email="test@example.com")
        assert isinstance(user.id, str)
        assert user.model_dump(by_alias=True)["_id"] == user.id

    def test_accepts_mongo_id(self):
        user = User(_id="abc", username="testuser", email="test@example.com")
        assert user.id == "abc"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            User(username="testuser", email="not-an-email")

    def test_username_trimmed(self):
        user = User(username="  alice  ", email="a@example.com")
        assert user.username == "alice"

    def test_short_username_rejected(self):
        with pytest.raises(ValidationError, match="at least 3 characters"):
            User(username=" ab ", email="a@example.com")

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError, match="Invalid role"):
            User(username="alice", email="a@example.com", role="wizard")

    def test_unknown_player_class_rejected(self):
        with pytest.raises(ValidationError):
            User(username="alice", email="a@example.com", player_class="Necromancer")

    @pytest.mark.parametrize("health", [-1, 101])
    def test_health_bounds(self, health):
        with pytest.raises(ValidationError):
            User(username="alice", email="a@example.com", health=health)

    def test_full_name_max_length(self):
        with pytest.raises(ValidationError):
            User(username="alice", email="a@example.com", full_name="x" * 101)


class TestPlayerClass:
    def test_mentor_is_captain(self):
        user = User(username="mentor", email="m@example.com", role="mentor", player_class="Mage")
        assert user.player_class == "Captain"

    def test_coordinator_is_guild_master(self):
        user = User(username="coord", email="c@example.com", role="coordinator")
        assert user.player_class == "Guild Master"

    def test_student_keeps_chosen_class(self):
        user = User(username="alice", email="a@example.com", player_class="Thief")
        assert user.player_class == "Thief"

    def test_helper(self):
        assert player_class_for_role("mentor") == "Captain"
        assert player_class_for_role("admin", "Healer") == "Healer"
        assert player_class_for_role("student") == "Adventurer"


def test_stored_timestamps_become_utc():
    user = User.model_validate(
        {
            "_id": "u1",
            "username": "alice",
            "email": "alice@test.com",
            "created_at": datetime(2024, 1, 1),
            "last_logout_at": datetime(2024, 2, 1, 8, 30),
        }
    )
    assert user.created_at.tzinfo == timezone.utc
    assert user.last_logout_at == datetime(2024, 2, 1, 8, 30, tzinfo=timezone.utc)
