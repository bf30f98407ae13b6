import logging

from fastapi import Depends, status
from jose import ExpiredSignatureError, JWTError
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from dragons.api import deps
from dragons.api.router import CustomAPIRouter
from dragons.api.v1.helpers.responses import RESP_400, RESP_401
from dragons.core import security
from dragons.core.config import Settings
from dragons.core.exceptions import AuthenticationError, ValidationError
from dragons.db.mongodb import get_database
from dragons.models.user import User
from dragons.repositories import UserRepository
from dragons.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from dragons.schemas.user import UserPublic

logger = logging.getLogger(__name__)

router = CustomAPIRouter()


def _issue_tokens(user: User, settings: Settings) -> dict:
    return {
        "token": security.create_access_token(user.id, settings),
        "refresh_token": security.create_refresh_token(user.id, settings),
    }


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    responses={**RESP_400},
)
async def register(
    user_in: RegisterRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Create a student account and log it in.
    """
    user_repo = UserRepository(db)

    existing = await user_repo.find_by_email_or_username(user_in.email, user_in.username)
    if existing is not None:
        if existing.email == user_in.email:
            raise ValidationError("Email already exists")
        raise ValidationError("Username already taken")

    user = User(
        username=user_in.username,
        email=user_in.email,
        hashed_password=security.get_password_hash(user_in.password),
        full_name=user_in.full_name,
    )
    try:
        await user_repo.create(user)
    except DuplicateKeyError as e:
        # Lost a race against a concurrent registration
        if "username" in str(e):
            raise ValidationError("Username already taken")
        raise ValidationError("Email already exists")

    logger.info(f"New user registered: {user.username} ({user.id})")
    return {
        "msg": "User registered successfully!",
        **_issue_tokens(user, settings),
        "user": UserPublic.from_user(user),
    }


@router.post("/login", response_model=TokenResponse, summary="Log in", responses={**RESP_400, **RESP_401})
async def login(
    login_in: LoginRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    settings: Settings = Depends(deps.get_settings),
):
    user = await UserRepository(db).get_by_email(login_in.email)
    if user is None or not security.verify_password(login_in.password, user.hashed_password):
        logger.warning(f"Failed login attempt for {login_in.email}")
        raise AuthenticationError("Invalid credentials")

    return {
        "success": True,
        **_issue_tokens(user, settings),
        "user": UserPublic.from_user(user),
    }


@router.post("/refresh", summary="Exchange a refresh token", responses={**RESP_401})
async def refresh(
    refresh_in: RefreshRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
    settings: Settings = Depends(deps.get_settings),
):
    """
    Issue a new access/refresh token pair for a valid refresh token.
    """
    try:
        payload = security.decode_token(
            refresh_in.refresh_token,
            settings,
            expected_type=security.TOKEN_TYPE_REFRESH,
        )
    except ExpiredSignatureError:
        raise AuthenticationError("Refresh token expired")
    except JWTError:
        raise AuthenticationError("Invalid refresh token")

    user = await UserRepository(db).get_public_by_id(payload["sub"])
    if user is None:
        raise AuthenticationError("Not authorized, user not found")
    if security.issued_before_logout(payload, user.last_logout_at):
        raise AuthenticationError("Invalid refresh token")

    return {"success": True, **_issue_tokens(user, settings)}


@router.post("/logout", summary="Log out", responses={**RESP_401})
async def logout(
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Revoke every token issued to the caller so far.
    """
    await UserRepository(db).stamp_logout(current_user.id)
    logger.info(f"User {current_user.id} logged out")
    return {"msg": "Logged out successfully"}


@router.get("/me", response_model=UserPublic, summary="Current user", responses={**RESP_401})
async def read_me(current_user: User = Depends(deps.get_current_user)):
    return UserPublic.from_user(current_user)
