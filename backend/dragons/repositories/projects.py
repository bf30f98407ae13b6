"""
Project Repository

Centralizes all database operations for projects.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.models.project import Project
from dragons.repositories.base import BaseRepository
from dragons.repositories.users import UserRepository
from dragons.services.role_consistency import validate_references


class ProjectRepository(BaseRepository[Project]):
    """Repository for project database operations."""

    collection_name = "projects"
    model_class = Project

    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db)
        self.users = UserRepository(db)

    async def create(self, project: Project) -> Project:
        await validate_references(project, self.users)
        return await super().create(project)

    async def add_task(self, project_id: str, task_id: str) -> None:
        await self.collection.update_one({"_id": project_id}, {"$addToSet": {"tasks": task_id}})

    async def remove_task(self, project_id: str, task_id: str) -> None:
        await self.collection.update_one({"_id": project_id}, {"$pull": {"tasks": task_id}})

    async def unlink_team(self, project_id: str, team_id: str) -> None:
        await self.collection.update_one(
            {"_id": project_id, "team_id": team_id},
            {"$set": {"team_id": None}},
        )

    async def clear_supervisor_everywhere(self, field: str, user_id: str) -> int:
        """Detach a user from every project where they hold field."""
        result = await self.collection.update_many({field: user_id}, {"$set": {field: None}})
        return result.modified_count
