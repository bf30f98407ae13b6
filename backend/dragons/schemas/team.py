from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TeamCreate(BaseModel):
    name: Optional[str] = None


class TeamJoin(BaseModel):
    team_id: Optional[str] = Field(None, alias="teamID")

    class Config:
        populate_by_name = True


class TeamRef(BaseModel):
    """Body of the actions that only name a team."""

    team_id: Optional[str] = Field(None, alias="teamId")

    class Config:
        populate_by_name = True


class ChangeLead(TeamRef):
    new_lead_id: Optional[str] = Field(None, alias="newLeadId")


class AssignMentor(TeamRef):
    mentor_id: Optional[str] = Field(None, alias="mentorId")


class AssignCoordinator(TeamRef):
    coordinator_id: Optional[str] = Field(None, alias="coordinatorId")


class AddProject(TeamRef):
    project_name: Optional[str] = Field(None, alias="projectName")
    project_description: Optional[str] = Field(None, alias="projectDescription")
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")


class RemoveProject(TeamRef):
    project_id: Optional[str] = Field(None, alias="projectId")
