import asyncio
import logging
from typing import List, Optional

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.api import deps
from dragons.api.router import CustomAPIRouter
from dragons.api.v1.helpers.responses import RESP_AUTH, RESP_AUTH_400_404
from dragons.core.constants import (
    ROLE_ADMIN,
    ROLE_COORDINATOR,
    ROLE_MENTOR,
    SUPERVISOR_FIELDS,
    USER_ROLES,
)
from dragons.core.exceptions import NotFoundError, ValidationError
from dragons.db.mongodb import get_database
from dragons.models.user import User
from dragons.repositories import ProjectRepository, TeamRepository, UserRepository
from dragons.schemas.user import RoleUpdate, UserPublic
from dragons.services.population import populate_supervised_teams

logger = logging.getLogger(__name__)

router = CustomAPIRouter()


@router.get("/my-teams", summary="Teams I supervise", responses={**RESP_AUTH})
async def get_my_teams(
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR, ROLE_COORDINATOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Teams the caller mentors or coordinates, each with members, lead and
    the project's tasks resolved for the dashboard.
    """
    team_repo = TeamRepository(db)
    mentored, coordinated = await asyncio.gather(
        team_repo.find_by_supervisor("mentor_id", current_user.id),
        team_repo.find_by_supervisor("coordinator_id", current_user.id),
    )
    logger.debug(
        f"User {current_user.id} supervises {len(mentored)} mentored and {len(coordinated)} coordinated teams"
    )

    return {
        "success": True,
        "mentoredTeams": await populate_supervised_teams(mentored, db),
        "coordinatedTeams": await populate_supervised_teams(coordinated, db),
    }


@router.get("/users", response_model=List[UserPublic], summary="List users", responses={**RESP_AUTH})
async def list_users(
    role: Optional[str] = None,
    current_user: User = Depends(deps.RoleChecker(ROLE_ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    if role is not None and role not in USER_ROLES:
        raise ValidationError(f"Invalid role '{role}'. Must be one of: {', '.join(USER_ROLES)}")
    users = await UserRepository(db).list_public(role=role)
    return [UserPublic.from_user(user) for user in users]


@router.patch("/users/{user_id}/role", response_model=UserPublic, summary="Change a user's role", responses={**RESP_AUTH_400_404})
async def update_user_role(
    user_id: str,
    role_in: RoleUpdate,
    current_user: User = Depends(deps.RoleChecker(ROLE_ADMIN)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Change a user's role and re-derive the player class.

    A user losing the mentor (coordinator) role is detached from every team
    and project that referenced them in that capacity.
    """
    user_repo = UserRepository(db)
    user = await user_repo.get_public_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")

    updated = await user_repo.set_role(user, role_in.role)
    if updated is None:
        raise NotFoundError("User not found")

    team_repo = TeamRepository(db)
    project_repo = ProjectRepository(db)
    for field, role in SUPERVISOR_FIELDS.items():
        if user.role == role and role_in.role != role:
            teams = await team_repo.clear_supervisor_everywhere(field, user.id)
            projects = await project_repo.clear_supervisor_everywhere(field, user.id)
            if teams or projects:
                logger.info(
                    f"Cleared {field} on {teams} team(s) and {projects} project(s) after role change of {user.id}"
                )

    logger.info(f"Role of user {user.id} changed from {user.role} to {role_in.role} by {current_user.id}")
    return UserPublic.from_user(updated)
