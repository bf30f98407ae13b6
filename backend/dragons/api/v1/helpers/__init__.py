"""
API v1 Helper Functions

Shared helper functions extracted from endpoint modules.
"""

from dragons.api.v1.helpers.teams import (
    SUPERVISOR_LABELS,
    TEAM_ID_REQUIRED,
    can_change_lead,
    can_manage_project,
    check_supervisor_removal,
    get_my_team_or_404,
    get_team_or_404,
    is_supervisor,
    require_team_id,
    resolve_supervisor_target,
)
from dragons.api.v1.helpers.validation import build_model

__all__ = [
    "SUPERVISOR_LABELS",
    "TEAM_ID_REQUIRED",
    "build_model",
    "can_change_lead",
    "can_manage_project",
    "check_supervisor_removal",
    "get_my_team_or_404",
    "get_team_or_404",
    "is_supervisor",
    "require_team_id",
    "resolve_supervisor_target",
]
