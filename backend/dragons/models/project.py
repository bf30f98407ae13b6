from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime, timezone
import uuid

from dragons.core import ensure_utc
from dragons.core.constants import PROJECT_NAME_MAX_LENGTH


class Project(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str = Field(..., max_length=PROJECT_NAME_MAX_LENGTH)
    description: Optional[str] = None
    mentor_id: Optional[str] = None
    coordinator_id: Optional[str] = None
    team_id: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    # Ordered task ids; each task's own project_id is authoritative
    tasks: List[str] = []
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

    @field_validator("start_date", "end_date", "created_at")
    @classmethod
    def as_utc(cls, v):
        return ensure_utc(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("Please provide a project name")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, v):
        if isinstance(v, str):
            v = v.strip() or None
        return v
