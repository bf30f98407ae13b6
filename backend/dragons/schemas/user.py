from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from dragons.core.constants import USER_ROLES
from dragons.models.user import User


class UserPublic(BaseModel):
    """A user as returned by the API; never carries the password hash."""

    id: str
    username: str
    email: str
    role: str
    full_name: Optional[str] = None
    team_id: Optional[str] = None
    player_class: str
    health: int
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls.model_validate(user.model_dump(exclude={"hashed_password", "last_logout_at"}))


class RoleUpdate(BaseModel):
    role: str

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in USER_ROLES:
            raise ValueError(f"Invalid role '{v}'. Must be one of: {', '.join(USER_ROLES)}")
        return v
