"""
Schema Exports

Request and response bodies of the HTTP API. Request bodies accept the
camelCase names used by the web client as well as snake_case.
"""

from dragons.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from dragons.schemas.task import TaskAssign, TaskCreate, TaskSubmit, TaskUpdate
from dragons.schemas.team import (
    AddProject,
    AssignCoordinator,
    AssignMentor,
    ChangeLead,
    RemoveProject,
    TeamCreate,
    TeamJoin,
    TeamRef,
)
from dragons.schemas.user import RoleUpdate, UserPublic

__all__ = [
    "AddProject",
    "AssignCoordinator",
    "AssignMentor",
    "ChangeLead",
    "LoginRequest",
    "RefreshRequest",
    "RegisterRequest",
    "RemoveProject",
    "RoleUpdate",
    "TaskAssign",
    "TaskCreate",
    "TaskSubmit",
    "TaskUpdate",
    "TeamCreate",
    "TeamJoin",
    "TeamRef",
    "TokenResponse",
    "UserPublic",
]
