"""
Task Repository

Centralizes all database operations for tasks.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from dragons.core.constants import MAX_TASK_ASSIGNEES
from dragons.models.task import Task
from dragons.repositories.base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """Repository for task database operations."""

    collection_name = "tasks"
    model_class = Task

    async def update_fields(self, task_id: str, update_data: Dict[str, Any]) -> Optional[Task]:
        update_data = {**update_data, "updated_at": datetime.now(timezone.utc)}
        return await self.update(task_id, update_data)

    async def add_assignee(self, task_id: str, user_id: str) -> Optional[Task]:
        """
        Add user_id with set semantics.

        Matches when the user is already assigned (no-op) or when there is
        still a free slot, so the list can never grow past the maximum even
        under concurrent requests. Returns None when nothing matched.
        """
        return await self.update_where(
            {
                "_id": task_id,
                "$or": [
                    {"assignees": user_id},
                    {f"assignees.{MAX_TASK_ASSIGNEES - 1}": {"$exists": False}},
                ],
            },
            {
                "$addToSet": {"assignees": user_id},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )

    async def remove_assignee(self, task_id: str, user_id: str) -> Optional[Task]:
        return await self.update_where(
            {"_id": task_id},
            {
                "$pull": {"assignees": user_id},
                "$set": {"updated_at": datetime.now(timezone.utc)},
            },
        )
