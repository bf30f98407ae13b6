from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    # name and project_id are checked by the handler for a precise message
    name: Optional[str] = None
    project_id: Optional[str] = Field(None, alias="projectId")
    description: Optional[str] = None
    assignees: Optional[List[str]] = None
    difficulty: Optional[str] = None
    deadline: Optional[datetime] = None
    submission_link: Optional[str] = Field(None, alias="submissionLink")
    completion_status: Optional[str] = Field(None, alias="completionStatus")

    class Config:
        populate_by_name = True


class TaskUpdate(BaseModel):
    """Partial update; unset fields are left alone and projectId is ignored."""

    name: Optional[str] = None
    description: Optional[str] = None
    assignees: Optional[List[str]] = None
    difficulty: Optional[str] = None
    deadline: Optional[datetime] = None
    submission_link: Optional[str] = Field(None, alias="submissionLink")
    completion_status: Optional[str] = Field(None, alias="completionStatus")

    class Config:
        populate_by_name = True
        extra = "ignore"


class TaskAssign(BaseModel):
    user_id: str = Field(..., alias="userId")

    class Config:
        populate_by_name = True


class TaskSubmit(BaseModel):
    submission_link: str = Field(..., alias="submissionLink", min_length=1)

    class Config:
        populate_by_name = True
