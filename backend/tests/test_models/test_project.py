"""Tests for the Project model."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from dragons.models.project import Project

START = datetime(2024, 3, 1, tzinfo=timezone.utc)


class TestProjectModel:
    def test_minimal(self):
        project = Project(name="Quest", start_date=START)
        assert project.tasks == []
        assert project.description is None
        assert project.end_date is None

    def test_start_date_required(self):
        with pytest.raises(ValidationError):
            Project(name="Quest")

    def test_name_trimmed(self):
        assert Project(name="  Quest ", start_date=START).name == "Quest"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="Please provide a project name"):
            Project(name="  ", start_date=START)

    def test_name_max_length(self):
        with pytest.raises(ValidationError):
            Project(name="x" * 101, start_date=START)

    def test_blank_description_becomes_none(self):
        assert Project(name="Quest", description="   ", start_date=START).description is None


class TestProjectDates:
    def test_naive_dates_from_mongo_become_utc(self):
        project = Project.model_validate(
            {"_id": "p1", "name": "Quest", "start_date": datetime(2024, 3, 1), "created_at": datetime(2024, 2, 1)}
        )
        assert project.start_date == START
        assert project.created_at.tzinfo == timezone.utc
        assert project.end_date is None
