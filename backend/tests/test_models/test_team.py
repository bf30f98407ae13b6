"""Tests for the Team model."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from dragons.models.team import Team


class TestTeamModel:
    def test_defaults(self):
        team = Team(name="Alpha", members=["u1"], team_lead_id="u1")
        assert team.max_size == 4
        assert team.mentor_id is None
        assert team.coordinator_id is None
        assert team.project_id is None

    def test_name_trimmed(self):
        team = Team(name="  Alpha ", team_lead_id="u1")
        assert team.name == "Alpha"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Please provide a team name"):
            Team(name="   ", team_lead_id="u1")

    def test_name_max_length(self):
        with pytest.raises(ValidationError):
            Team(name="x" * 51, team_lead_id="u1")

    @pytest.mark.parametrize("max_size", [0, 5])
    def test_max_size_bounds(self, max_size):
        with pytest.raises(ValidationError):
            Team(name="Alpha", team_lead_id="u1", max_size=max_size)

    def test_duplicate_members_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            Team(name="Alpha", members=["u1", "u1"], team_lead_id="u1")

    def test_members_over_max_size_rejected(self):
        with pytest.raises(ValidationError, match="at most 2 members"):
            Team(name="Alpha", members=["u1", "u2", "u3"], team_lead_id="u1", max_size=2)

    def test_is_member(self):
        team = Team(name="Alpha", members=["u1", "u2"], team_lead_id="u1")
        assert team.is_member("u2") is True
        assert team.is_member("u3") is False


def test_naive_created_at_becomes_utc():
    team = Team.model_validate(
        {"_id": "t1", "name": "Alpha", "members": ["u1"], "team_lead_id": "u1", "created_at": datetime(2024, 1, 1)}
    )
    assert team.created_at.tzinfo == timezone.utc
