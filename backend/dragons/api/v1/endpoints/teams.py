import logging
from datetime import datetime, timezone

from fastapi import Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.api import deps
from dragons.api.router import CustomAPIRouter
from dragons.api.v1.helpers import (
    SUPERVISOR_LABELS,
    build_model,
    can_change_lead,
    can_manage_project,
    check_supervisor_removal,
    get_my_team_or_404,
    get_team_or_404,
    require_team_id,
    resolve_supervisor_target,
)
from dragons.api.v1.helpers.responses import RESP_AUTH_400_404, RESP_AUTH_404
from dragons.core.config import Settings
from dragons.core.constants import ROLE_ADMIN, ROLE_COORDINATOR, ROLE_MENTOR
from dragons.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from dragons.db.mongodb import get_database
from dragons.models.project import Project
from dragons.models.team import Team
from dragons.models.user import User
from dragons.repositories import ProjectRepository, TeamRepository, UserRepository
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
from dragons.services.population import populate_team

logger = logging.getLogger(__name__)

router = CustomAPIRouter()


@router.get("/me", summary="Get my team", responses={**RESP_AUTH_404})
async def get_my_team(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    The team containing the caller, with members, lead, mentor,
    coordinator and project resolved.
    """
    team = await get_my_team_or_404(TeamRepository(db), current_user)
    return await populate_team(team, db)


@router.post("/create", status_code=status.HTTP_201_CREATED, summary="Create a team", responses={**RESP_AUTH_400_404})
async def create_team(
    team_in: TeamCreate,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Create a team. The creator becomes its lead and only member.
    """
    name = (team_in.name or "").strip()
    if not name:
        raise ValidationError("Team name is required")
    if current_user.team_id:
        raise ValidationError("You are already part of a team")

    team = build_model(
        Team,
        name=name,
        members=[current_user.id],
        team_lead_id=current_user.id,
        max_size=settings.TEAM_MAX_SIZE,
    )

    user_repo = UserRepository(db)
    if not await user_repo.claim_team(current_user.id, team.id):
        raise ValidationError("You are already part of a team")

    try:
        await TeamRepository(db).create(team)
    except Exception:
        await user_repo.release_team(current_user.id, team.id)
        raise

    logger.info(f"User {current_user.id} created team {team.id} ('{team.name}')")
    return await populate_team(team, db)


@router.post("/join", summary="Join a team", responses={**RESP_AUTH_400_404})
async def join_team(
    join_in: TeamJoin,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Join an existing team.

    The user's team claim is taken first, then the member list is grown
    only while there is room; a full team releases the claim again.
    """
    team_id = require_team_id(join_in.team_id, "Team ID is required")

    team_repo = TeamRepository(db)
    user_repo = UserRepository(db)

    team = await get_team_or_404(team_repo, team_id)
    if current_user.team_id or team.is_member(current_user.id):
        raise ValidationError("You are already part of a team")
    if len(team.members) >= team.max_size:
        raise ValidationError("Team is full")

    if not await user_repo.claim_team(current_user.id, team.id):
        raise ValidationError("You are already part of a team")

    updated = await team_repo.add_member(team.id, current_user.id, team.max_size)
    if updated is None:
        await user_repo.release_team(current_user.id, team.id)
        logger.warning(f"User {current_user.id} could not join team {team.id}: team filled up")
        raise ValidationError("Team is full")

    logger.info(f"User {current_user.id} joined team {team.id}")
    return {"msg": "Successfully joined the team", "team": await populate_team(updated, db)}


@router.delete("/leave", summary="Leave my team", responses={**RESP_AUTH_400_404})
async def leave_team(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    team_repo = TeamRepository(db)
    team = await get_my_team_or_404(team_repo, current_user)

    if team.team_lead_id == current_user.id:
        raise ValidationError("Team lead cannot leave the team")

    if await team_repo.remove_member(team.id, current_user.id) is None:
        # Became the lead (or the team vanished) since the read
        raise ValidationError("Team lead cannot leave the team")
    await UserRepository(db).release_team(current_user.id, team.id)

    logger.info(f"User {current_user.id} left team {team.id}")
    return {"msg": "You have left the team"}


@router.patch("/change-lead", summary="Change the team lead", responses={**RESP_AUTH_400_404})
async def change_lead(
    lead_in: ChangeLead,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Hand the lead to another member.

    The lead acts on their own team. Admins and the team's mentor name the
    team with teamId.
    """
    if not lead_in.new_lead_id:
        raise ValidationError("New team lead ID is required")

    team_repo = TeamRepository(db)
    if lead_in.team_id:
        team = await get_team_or_404(team_repo, lead_in.team_id)
    else:
        team = await get_my_team_or_404(team_repo, current_user)

    if not can_change_lead(team, current_user):
        raise AuthorizationError("You are not authorized to change the team lead")

    if not team.is_member(lead_in.new_lead_id):
        raise ValidationError("The new lead must be a member of the team")

    updated = await team_repo.set_lead(team.id, lead_in.new_lead_id)
    if updated is None:
        # The new lead left between the read and the write
        raise ValidationError("The new lead must be a member of the team")

    logger.info(f"Team {team.id} lead changed to {lead_in.new_lead_id} by {current_user.id}")
    return {"msg": "Team lead changed successfully", "team": await populate_team(updated, db)}


async def _assign_supervisor(field, team_id, requested_id, current_user: User, db: AsyncIOMotorDatabase):
    team_id = require_team_id(team_id)

    team_repo = TeamRepository(db)
    target_id = await resolve_supervisor_target(team_repo.users, current_user, field, requested_id)
    team = await get_team_or_404(team_repo, team_id)

    updated = await team_repo.assign_supervisor(team.id, field, target_id)
    if updated is None:
        raise NotFoundError("Team not found")

    logger.info(f"Team {team.id}: {field} set to {target_id} by {current_user.id}")
    return {
        "msg": f"{SUPERVISOR_LABELS[field]} added/updated successfully",
        "team": await populate_team(updated, db),
    }


async def _remove_supervisor(field, team_id, current_user: User, db: AsyncIOMotorDatabase):
    team_id = require_team_id(team_id)

    team_repo = TeamRepository(db)
    team = await get_team_or_404(team_repo, team_id)
    check_supervisor_removal(team, current_user, field)

    updated = await team_repo.clear_supervisor(team.id, field)
    if updated is None:
        raise NotFoundError("Team not found")

    logger.info(f"Team {team.id}: {field} cleared by {current_user.id}")
    return {
        "msg": f"{SUPERVISOR_LABELS[field]} removed successfully",
        "team": await populate_team(updated, db),
    }


@router.patch("/add-mentor", summary="Assign a mentor", responses={**RESP_AUTH_400_404})
async def add_mentor(
    mentor_in: AssignMentor,
    current_user: User = Depends(deps.RoleChecker(ROLE_ADMIN, ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Admins assign the mentor named by mentorId; a mentor assigns themselves.
    """
    return await _assign_supervisor("mentor_id", mentor_in.team_id, mentor_in.mentor_id, current_user, db)


@router.patch("/add-coordinator", summary="Assign a coordinator", responses={**RESP_AUTH_400_404})
async def add_coordinator(
    coordinator_in: AssignCoordinator,
    current_user: User = Depends(deps.RoleChecker(ROLE_ADMIN, ROLE_COORDINATOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await _assign_supervisor(
        "coordinator_id", coordinator_in.team_id, coordinator_in.coordinator_id, current_user, db
    )


@router.patch("/remove-mentor", summary="Unassign the mentor", responses={**RESP_AUTH_400_404})
async def remove_mentor(
    team_in: TeamRef,
    current_user: User = Depends(deps.RoleChecker(ROLE_ADMIN, ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await _remove_supervisor("mentor_id", team_in.team_id, current_user, db)


@router.patch("/remove-coordinator", summary="Unassign the coordinator", responses={**RESP_AUTH_400_404})
async def remove_coordinator(
    team_in: TeamRef,
    current_user: User = Depends(deps.RoleChecker(ROLE_ADMIN, ROLE_COORDINATOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    return await _remove_supervisor("coordinator_id", team_in.team_id, current_user, db)


@router.post("/add-project", status_code=status.HTTP_201_CREATED, summary="Add a project to a team", responses={**RESP_AUTH_400_404})
@router.patch("/add-project", status_code=status.HTTP_201_CREATED, summary="Add a project to a team", responses={**RESP_AUTH_400_404})
async def add_project(
    project_in: AddProject,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create the team's project and link both directions.

    The team's project slot is claimed before the project is inserted and
    released again if the insert fails. Mentor and coordinator are copied
    from the team.
    """
    team_id = require_team_id(project_in.team_id)
    project_name = (project_in.project_name or "").strip()
    if not project_name:
        raise ValidationError("Project name is required")

    team_repo = TeamRepository(db)
    team = await get_team_or_404(team_repo, team_id)

    if not team.is_member(current_user.id):
        raise AuthorizationError("Only team members can add a project")
    if team.project_id:
        raise ValidationError("Team already has a project")

    project = build_model(
        Project,
        name=project_name,
        description=project_in.project_description,
        mentor_id=team.mentor_id,
        coordinator_id=team.coordinator_id,
        team_id=team.id,
        start_date=project_in.start_date or datetime.now(timezone.utc),
        end_date=project_in.end_date,
    )

    updated = await team_repo.claim_project_slot(team.id, project.id)
    if updated is None:
        raise ValidationError("Team already has a project")

    try:
        await ProjectRepository(db).create(project)
    except Exception:
        await team_repo.release_project_slot(team.id, project.id)
        raise

    logger.info(f"Project {project.id} ('{project.name}') added to team {team.id}")
    return {
        "msg": "Project added to team successfully",
        "team": await populate_team(updated, db),
        "project": project.model_dump(),
    }


@router.patch("/remove-project", summary="Remove the team's project", responses={**RESP_AUTH_400_404})
async def remove_project(
    project_in: RemoveProject,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Unlink the team's project. The project document itself is kept.
    """
    if not project_in.team_id or not project_in.project_id:
        raise ValidationError("Team ID and project ID are required")

    team_repo = TeamRepository(db)
    team = await get_team_or_404(team_repo, project_in.team_id)

    if not can_manage_project(team, current_user):
        raise AuthorizationError("You are not authorized to modify this team")
    if team.project_id != project_in.project_id:
        raise ValidationError("This project is not linked to the team")

    updated = await team_repo.release_project_slot(team.id, project_in.project_id)
    if updated is None:
        raise ValidationError("This project is not linked to the team")
    await ProjectRepository(db).unlink_team(project_in.project_id, team.id)

    logger.info(f"Project {project_in.project_id} removed from team {team.id} by {current_user.id}")
    return {"msg": "Project removed from team successfully", "team": await populate_team(updated, db)}
