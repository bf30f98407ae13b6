import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError
from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.core import security
from dragons.core.config import Settings
from dragons.core.exceptions import AuthenticationError, AuthorizationError
from dragons.db.mongodb import get_database
from dragons.models.user import User
from dragons.repositories import UserRepository

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets our own message
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncIOMotorDatabase = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Resolve the caller from the bearer token.

    The user is loaded without the password hash. Tokens issued before the
    user's last logout are treated as invalid.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token provided")

    try:
        payload = security.decode_token(credentials.credentials, settings)
    except ExpiredSignatureError:
        raise AuthenticationError("Not authorized, token expired")
    except JWTError:
        raise AuthenticationError("Not authorized, invalid token")

    user = await UserRepository(db).get_public_by_id(payload["sub"])
    if user is None:
        raise AuthenticationError("Not authorized, user not found")

    if security.issued_before_logout(payload, user.last_logout_at):
        raise AuthenticationError("Not authorized, invalid token")

    return user


class RoleChecker:
    """
    Route guard admitting only the given roles.

    Usage:
        current_user: User = Depends(RoleChecker(ROLE_ADMIN, ROLE_MENTOR))
    """

    def __init__(self, *allowed_roles: str):
        self.allowed_roles = list(allowed_roles)

    def __call__(self, current_user: User = Depends(get_current_user)) -> User:
        if current_user is None or not current_user.role:
            raise AuthenticationError("Not authorized")
        if current_user.role not in self.allowed_roles:
            logger.warning(f"User {current_user.id} with role '{current_user.role}' refused by role guard")
            raise AuthorizationError(
                f"Forbidden: User role '{current_user.role}' is not authorized to access this route"
            )
        return current_user
