"""
User Repository

Centralizes all database operations for users.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dragons.core.constants import PLAYER_CLASS_DEFAULT, ROLE_PLAYER_CLASSES
from dragons.models.user import User, player_class_for_role
from dragons.repositories.base import BaseRepository

# Projection used whenever a user is loaded for anything but login
WITHOUT_PASSWORD = {"hashed_password": 0}


class UserRepository(BaseRepository[User]):
    """Repository for user database operations."""

    collection_name = "users"
    model_class = User

    async def get_public_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID without the password hash."""
        data = await self.collection.find_one({"_id": user_id}, WITHOUT_PASSWORD)
        return self._to_model(data)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self.find_one({"email": email})

    async def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        return await self.find_one({"$or": [{"email": email}, {"username": username}]})

    async def find_by_ids(self, user_ids: List[str], projection: Optional[Dict[str, int]] = None) -> List[Dict[str, Any]]:
        """Find users by list of IDs (raw documents, never the password)."""
        if projection is None:
            projection = WITHOUT_PASSWORD
        return await self.find_raw_by_ids(user_ids, projection)

    async def list_public(self, role: Optional[str] = None, limit: int = 1000) -> List[User]:
        query = {"role": role} if role else {}
        cursor = self.collection.find(query, WITHOUT_PASSWORD).sort("username", 1).limit(limit)
        docs = await cursor.to_list(limit)
        return self._to_model_list(docs)

    async def claim_team(self, user_id: str, team_id: str) -> bool:
        """
        Atomically set the user's team back-reference.

        Only succeeds while the user has no team, so two concurrent
        create/join requests can never both place the same user.
        """
        result = await self.collection.update_one(
            {"_id": user_id, "team_id": None},
            {"$set": {"team_id": team_id}},
        )
        return result.modified_count > 0

    async def release_team(self, user_id: str, team_id: str) -> bool:
        """Clear the back-reference, but only if it still points at team_id."""
        result = await self.collection.update_one(
            {"_id": user_id, "team_id": team_id},
            {"$set": {"team_id": None}},
        )
        return result.modified_count > 0

    async def set_role(self, user: User, role: str) -> Optional[User]:
        """Change the role and re-derive the player class."""
        current = user.player_class
        if current in ROLE_PLAYER_CLASSES.values():
            current = PLAYER_CLASS_DEFAULT
        return await self.update(
            user.id,
            {"role": role, "player_class": player_class_for_role(role, current)},
        )

    async def stamp_logout(self, user_id: str) -> None:
        await self.collection.update_one(
            {"_id": user_id},
            {"$set": {"last_logout_at": datetime.now(timezone.utc)}},
        )
