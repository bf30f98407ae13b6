from datetime import datetime, timezone
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from dragons.core import ensure_utc
from dragons.core.constants import (
    DIFFICULTY_MEDIUM,
    MAX_TASK_ASSIGNEES,
    OPEN_TASK_STATUSES,
    STATUS_NOT_STARTED,
    STATUS_OVERDUE,
    TASK_DIFFICULTIES,
    TASK_NAME_MAX_LENGTH,
    TASK_STATUSES,
    TERMINAL_TASK_STATUSES,
)


def compute_effective_status(
    completion_status: str,
    deadline: Optional[datetime],
    now: Optional[datetime] = None,
) -> str:
    """
    Status as the client should see it.

    Completed and cancelled tasks keep their status. Open tasks
    (not-started, in-progress) whose deadline has passed are overdue.
    """
    if completion_status in TERMINAL_TASK_STATUSES:
        return completion_status
    if deadline is None or completion_status not in OPEN_TASK_STATUSES:
        return completion_status
    now = now or datetime.now(timezone.utc)
    if ensure_utc(deadline) < ensure_utc(now):
        return STATUS_OVERDUE
    return completion_status


def unique_ids(ids: List[str]) -> List[str]:
    """De-duplicate while keeping the first occurrence order."""
    seen = set()
    result = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class Task(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), alias="_id")
    name: str = Field(..., max_length=TASK_NAME_MAX_LENGTH)
    description: Optional[str] = None
    project_id: str
    assignees: List[str] = []
    difficulty: str = DIFFICULTY_MEDIUM
    deadline: Optional[datetime] = None
    submission_link: Optional[str] = None
    completion_status: str = STATUS_NOT_STARTED
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        populate_by_name = True
        arbitrary_types_allowed = True

    @field_validator("deadline", "created_at", "updated_at")
    @classmethod
    def as_utc(cls, v):
        return ensure_utc(v)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
        if not v:
            raise ValueError("Please provide a task name")
        return v

    @field_validator("description", "submission_link", mode="before")
    @classmethod
    def strip_optional_text(cls, v):
        if isinstance(v, str):
            v = v.strip() or None
        return v

    @field_validator("assignees")
    @classmethod
    def validate_assignees(cls, v: List[str]) -> List[str]:
        v = unique_ids(v)
        if len(v) > MAX_TASK_ASSIGNEES:
            raise ValueError(f"A task can have a maximum of {MAX_TASK_ASSIGNEES} assignees.")
        return v

    @field_validator("difficulty")
    @classmethod
    def validate_difficulty(cls, v: str) -> str:
        if v not in TASK_DIFFICULTIES:
            raise ValueError(f"Invalid difficulty '{v}'. Must be one of: {', '.join(TASK_DIFFICULTIES)}")
        return v

    @field_validator("completion_status")
    @classmethod
    def validate_completion_status(cls, v: str) -> str:
        if v not in TASK_STATUSES:
            raise ValueError(f"Invalid completion status '{v}'. Must be one of: {', '.join(TASK_STATUSES)}")
        return v

    def effective_status(self, now: Optional[datetime] = None) -> str:
        return compute_effective_status(self.completion_status, self.deadline, now)
