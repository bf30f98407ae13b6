"""
Team Repository

Centralizes all database operations for teams. Every write that can set a
mentor or coordinator reference runs the role consistency checks first.
"""

from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.core.constants import SUPERVISOR_FIELDS
from dragons.core.exceptions import ValidationError
from dragons.models.team import Team
from dragons.repositories.base import BaseRepository
from dragons.repositories.users import UserRepository
from dragons.services.role_consistency import check_reference_role, validate_references


class TeamRepository(BaseRepository[Team]):
    """Repository for team database operations."""

    collection_name = "teams"
    model_class = Team

    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db)
        self.users = UserRepository(db)

    async def create(self, team: Team) -> Team:
        await validate_references(team, self.users)
        return await super().create(team)

    async def find_by_member(self, user_id: str) -> Optional[Team]:
        """The team containing user_id, if any."""
        return await self.find_one({"members": user_id})

    async def find_by_supervisor(self, field: str, user_id: str) -> List[Team]:
        """Teams whose mentor_id / coordinator_id is user_id."""
        return await self.find_many({field: user_id}, limit=1000, sort_by="name")

    async def add_member(self, team_id: str, user_id: str, max_size: int) -> Optional[Team]:
        """
        Push user_id onto the member list if it is absent and the team still
        has room. Returns None when either condition fails.
        """
        return await self.update_where(
            {
                "_id": team_id,
                "members": {"$ne": user_id},
                f"members.{max_size - 1}": {"$exists": False},
            },
            {"$push": {"members": user_id}},
        )

    async def remove_member(self, team_id: str, user_id: str) -> Optional[Team]:
        """Pull a member; never matches while user_id is the team lead."""
        return await self.update_where(
            {"_id": team_id, "team_lead_id": {"$ne": user_id}},
            {"$pull": {"members": user_id}},
        )

    async def set_lead(self, team_id: str, new_lead_id: str) -> Optional[Team]:
        """Change the lead; only matches while new_lead_id is still a member."""
        return await self.update_where(
            {"_id": team_id, "members": new_lead_id},
            {"$set": {"team_lead_id": new_lead_id}},
        )

    async def assign_supervisor(self, team_id: str, field: str, user_id: str) -> Optional[Team]:
        """
        Set mentor_id or coordinator_id after checking the user's role.

        The role is checked again after the write; if the user was demoted
        in between, the reference is cleared and the assignment fails.
        """
        role = SUPERVISOR_FIELDS[field]
        await check_reference_role(self.users, field, user_id, role)
        team = await self.update_where({"_id": team_id}, {"$set": {field: user_id}})
        if team is None:
            return None

        try:
            await check_reference_role(self.users, field, user_id, role)
        except ValidationError:
            await self.collection.update_one({"_id": team_id, field: user_id}, {"$set": {field: None}})
            raise
        return team

    async def clear_supervisor(self, team_id: str, field: str) -> Optional[Team]:
        return await self.update_where({"_id": team_id}, {"$set": {field: None}})

    async def clear_supervisor_everywhere(self, field: str, user_id: str) -> int:
        """Detach a user from every team where they hold field."""
        result = await self.collection.update_many({field: user_id}, {"$set": {field: None}})
        return result.modified_count

    async def claim_project_slot(self, team_id: str, project_id: str) -> Optional[Team]:
        """Link project_id only while the team has no project."""
        return await self.update_where(
            {"_id": team_id, "project_id": None},
            {"$set": {"project_id": project_id}},
        )

    async def release_project_slot(self, team_id: str, project_id: str) -> Optional[Team]:
        """Unlink the project, but only if it is still the one linked."""
        return await self.update_where(
            {"_id": team_id, "project_id": project_id},
            {"$set": {"project_id": None}},
        )
