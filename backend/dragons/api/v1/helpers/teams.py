"""
Team Helper Functions

Lookups and access rules shared by the team endpoints.
"""

from typing import Optional

from dragons.core.constants import ROLE_ADMIN, SUPERVISOR_FIELDS
from dragons.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from dragons.models.team import Team
from dragons.models.user import User
from dragons.repositories import TeamRepository, UserRepository

TEAM_ID_REQUIRED = "Team ID is required in the request body"

# Display name of each supervisor reference field
SUPERVISOR_LABELS = {
    "mentor_id": "Mentor",
    "coordinator_id": "Coordinator",
}


def require_team_id(team_id: Optional[str], message: str = TEAM_ID_REQUIRED) -> str:
    if not team_id:
        raise ValidationError(message)
    return team_id


async def get_team_or_404(team_repo: TeamRepository, team_id: str) -> Team:
    team = await team_repo.get_by_id(team_id)
    if team is None:
        raise NotFoundError("Team not found")
    return team


async def get_my_team_or_404(team_repo: TeamRepository, user: User) -> Team:
    team = await team_repo.find_by_member(user.id)
    if team is None:
        raise NotFoundError("You are not part of any team")
    return team


def is_supervisor(team: Team, user: User) -> bool:
    """True when user is the team's assigned mentor or coordinator."""
    return user.id in (team.mentor_id, team.coordinator_id)


def can_manage_project(team: Team, user: User) -> bool:
    return user.role == ROLE_ADMIN or team.is_member(user.id) or is_supervisor(team, user)


def can_change_lead(team: Team, user: User) -> bool:
    """The current lead, any admin, or the team's own mentor."""
    if user.role == ROLE_ADMIN:
        return True
    return user.id in (team.team_lead_id, team.mentor_id)


async def resolve_supervisor_target(
    user_repo: UserRepository,
    current_user: User,
    field: str,
    requested_id: Optional[str],
) -> str:
    """
    Work out who should become the team's mentor/coordinator.

    An admin names the user explicitly and that user must hold the role;
    a mentor (coordinator) can only assign themselves.
    """
    role = SUPERVISOR_FIELDS[field]
    label = SUPERVISOR_LABELS[field]

    if current_user.role == ROLE_ADMIN:
        if not requested_id:
            raise ValidationError(f"{label} ID is required in the body for admin users")
        target = await user_repo.get_public_by_id(requested_id)
        if target is None:
            raise NotFoundError(f"{label} user not found")
        if target.role != role:
            raise ValidationError(f"The specified user ID does not belong to a {role}")
        return target.id

    if current_user.role == role:
        return current_user.id

    raise AuthorizationError("Forbidden")


def check_supervisor_removal(team: Team, current_user: User, field: str) -> None:
    """Admins may remove anyone; a mentor (coordinator) only themselves."""
    if current_user.role == ROLE_ADMIN:
        return
    if getattr(team, field) != current_user.id:
        role = SUPERVISOR_FIELDS[field]
        raise AuthorizationError(f"You can only remove yourself as the team's {role}")
