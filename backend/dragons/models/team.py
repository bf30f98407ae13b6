import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from dragons.core import ensure_utc
from dragons.core.constants import TEAM_NAME_MAX_LENGTH, TEAM_SIZE_LIMIT


class Team(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str = Field(..., max_length=TEAM_NAME_MAX_LENGTH)
    members: List[str] = []
    team_lead_id: str
    max_size: int = Field(TEAM_SIZE_LIMIT, ge=1, le=TEAM_SIZE_LIMIT)
    mentor_id: Optional[str] = None
    coordinator_id: Optional[str] = None
    project_id: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, v):
        return ensure_utc(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("Please provide a team name")
        return v

    @model_validator(mode="after")
    def check_members(self) -> "Team":
        if len(set(self.members)) != len(self.members):
            raise ValueError("Team members must be unique")
        if len(self.members) > self.max_size:
            raise ValueError(f"A team can have at most {self.max_size} members")
        return self

    def is_member(self, user_id: str) -> bool:
        return user_id in self.members
