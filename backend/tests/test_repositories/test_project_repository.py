"""Tests for ProjectRepository task links and supervisor references."""

import asyncio
from datetime import datetime, timezone

import pytest

from dragons.core.exceptions import ValidationError
from dragons.models.project import Project
from dragons.repositories import ProjectRepository
from tests.mocks.mongodb import create_mock_collection, create_mock_db


def _repo(projects=None, users=None):
    return ProjectRepository(
        create_mock_db(
            {
                "projects": projects or create_mock_collection(),
                "users": users or create_mock_collection(),
            }
        )
    )


def test_create_checks_mentor_role():
    users = create_mock_collection(find_one={"_id": "s1", "username": "student", "email": "s@test.com", "role": "student"})
    projects = create_mock_collection()
    project = Project(name="Quest", start_date=datetime.now(timezone.utc), mentor_id="s1")

    with pytest.raises(ValidationError, match="mentor_id"):
        asyncio.run(_repo(projects, users).create(project))

    projects.insert_one.assert_not_called()


def test_add_task_is_set_like():
    projects = create_mock_collection()
    asyncio.run(_repo(projects).add_task("p1", "task-1"))

    projects.update_one.assert_called_once_with({"_id": "p1"}, {"$addToSet": {"tasks": "task-1"}})


def test_clear_supervisor_everywhere():
    projects = create_mock_collection(modified_count=2)
    count = asyncio.run(_repo(projects).clear_supervisor_everywhere("mentor_id", "m1"))

    assert count == 2
    projects.update_many.assert_called_once_with({"mentor_id": "m1"}, {"$set": {"mentor_id": None}})
