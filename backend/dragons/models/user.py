from datetime import datetime, timezone
from typing import Optional
import uuid

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from dragons.core import ensure_utc
from dragons.core.constants import (
    HEALTH_MAX,
    HEALTH_MIN,
    PLAYER_CLASS_DEFAULT,
    PLAYER_CLASSES,
    ROLE_PLAYER_CLASSES,
    ROLE_STUDENT,
    USER_ROLES,
)


def player_class_for_role(role: str, current: str = PLAYER_CLASS_DEFAULT) -> str:
    """Mentors are always Captains and coordinators Guild Masters."""
    return ROLE_PLAYER_CLASSES.get(role, current)


class User(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    username: str
    email: EmailStr
    hashed_password: Optional[str] = None
    role: str = ROLE_STUDENT
    full_name: Optional[str] = Field(None, max_length=100)
    team_id: Optional[str] = None

    # Gamification
    player_class: str = PLAYER_CLASS_DEFAULT
    health: int = Field(100, ge=HEALTH_MIN, le=HEALTH_MAX)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_logout_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

    @field_validator("created_at", "last_logout_at")
    @classmethod
    def as_utc(cls, v):
        return ensure_utc(v)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters long")
        return v

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: str) -> str:
        if v not in USER_ROLES:
            raise ValueError(f"Invalid role '{v}'. Must be one of: {', '.join(USER_ROLES)}")
        return v

    @field_validator("player_class")
    @classmethod
    def validate_player_class(cls, v: str) -> str:
        if v not in PLAYER_CLASSES:
            raise ValueError(f"Invalid player class '{v}'")
        return v

    @model_validator(mode="after")
    def enforce_role_player_class(self) -> "User":
        self.player_class = player_class_for_role(self.role, self.player_class)
        return self
