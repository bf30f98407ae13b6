"""
Repository Pattern for Database Access

Provides a clean abstraction layer over MongoDB collections,
centralizing database operations and reducing code duplication.
"""

from dragons.repositories.base import BaseRepository
from dragons.repositories.projects import ProjectRepository
from dragons.repositories.tasks import TaskRepository
from dragons.repositories.teams import TeamRepository
from dragons.repositories.users import UserRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "TaskRepository",
    "TeamRepository",
    "UserRepository",
]
