"""
Shared Constants

Roles, enumerations and limits used across models, guards and handlers.
"""

from typing import Dict, List

# =============================================================================
# User roles
# =============================================================================

ROLE_STUDENT = "student"
ROLE_ADMIN = "admin"
ROLE_MENTOR = "mentor"
ROLE_COORDINATOR = "coordinator"

USER_ROLES: List[str] = [ROLE_STUDENT, ROLE_ADMIN, ROLE_MENTOR, ROLE_COORDINATOR]

# =============================================================================
# Gamification
# =============================================================================

PLAYER_CLASS_DEFAULT = "Adventurer"
PLAYER_CLASSES: List[str] = [
    "Adventurer",
    "Warrior",
    "Mage",
    "Thief",
    "Healer",
    "Captain",
    "Guild Master",
]

# Roles that pin the player class regardless of what was chosen
ROLE_PLAYER_CLASSES: Dict[str, str] = {
    ROLE_MENTOR: "Captain",
    ROLE_COORDINATOR: "Guild Master",
}

HEALTH_MIN = 0
HEALTH_MAX = 100

# =============================================================================
# Teams
# =============================================================================

TEAM_SIZE_LIMIT = 4
TEAM_NAME_MAX_LENGTH = 50

# Team/project reference fields and the role the referenced user must hold
SUPERVISOR_FIELDS: Dict[str, str] = {
    "mentor_id": ROLE_MENTOR,
    "coordinator_id": ROLE_COORDINATOR,
}

# =============================================================================
# Projects & tasks
# =============================================================================

PROJECT_NAME_MAX_LENGTH = 100
TASK_NAME_MAX_LENGTH = 100
MAX_TASK_ASSIGNEES = 4

DIFFICULTY_EASY = "easy"
DIFFICULTY_MEDIUM = "medium"
DIFFICULTY_HARD = "hard"
TASK_DIFFICULTIES: List[str] = [DIFFICULTY_EASY, DIFFICULTY_MEDIUM, DIFFICULTY_HARD]

STATUS_COMPLETED = "completed"
STATUS_IN_PROGRESS = "in-progress"
STATUS_NOT_STARTED = "not-started"
STATUS_CANCELLED = "cancelled"
STATUS_OVERDUE = "overdue"
STATUS_WAITING_FOR_GRADING = "waiting-for-grading"

TASK_STATUSES: List[str] = [
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NOT_STARTED,
    STATUS_CANCELLED,
    STATUS_OVERDUE,
    STATUS_WAITING_FOR_GRADING,
]

# Statuses that are final and never reported as overdue
TERMINAL_TASK_STATUSES: List[str] = [STATUS_COMPLETED, STATUS_CANCELLED]

# Statuses that turn into "overdue" once the deadline has passed
OPEN_TASK_STATUSES: List[str] = [STATUS_IN_PROGRESS, STATUS_NOT_STARTED]
