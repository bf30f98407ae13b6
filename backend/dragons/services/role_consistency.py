"""
Role consistency checks for reference fields.

A team (or project) field such as ``mentor_id`` may only point at a user
holding the matching role. The write path calls these checks explicitly
before a document is inserted or a reference field is changed.
"""

import logging
from typing import Dict, Optional

from pydantic import BaseModel

from dragons.core.constants import SUPERVISOR_FIELDS
from dragons.core.exceptions import ValidationError
from dragons.repositories.users import UserRepository

logger = logging.getLogger(__name__)


def role_mismatch_message(field: str, expected_role: str) -> str:
    return f'{field} can only be set to a user with the "{expected_role}" role.'


async def check_reference_role(
    users: UserRepository,
    field: str,
    user_id: Optional[str],
    expected_role: str,
) -> None:
    """
    Raise ValidationError unless user_id is unset or references a user
    whose role is expected_role.
    """
    if not user_id:
        return
    user = await users.get_by_id(user_id)
    if user is None or user.role != expected_role:
        logger.warning(f"Rejected {field}={user_id}: referenced user is not a {expected_role}")
        raise ValidationError(role_mismatch_message(field, expected_role))


async def validate_references(
    document: BaseModel,
    users: UserRepository,
    rules: Dict[str, str] = SUPERVISOR_FIELDS,
) -> None:
    """Run each field rule in turn; the first failure aborts the write."""
    for field, expected_role in rules.items():
        await check_reference_role(users, field, getattr(document, field, None), expected_role)
