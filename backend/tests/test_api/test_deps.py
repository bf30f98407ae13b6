"""Tests for the authentication and role guards."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from dragons.api.deps import RoleChecker, get_current_user
from dragons.core.exceptions import AuthenticationError, AuthorizationError
from dragons.core.security import create_access_token, create_refresh_token

MODULE = "dragons.api.deps"


def _bearer(token):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _user_repo(user):
    repo = MagicMock()
    repo.get_public_by_id = AsyncMock(return_value=user)
    return repo


class TestGetCurrentUser:
    def _run(self, credentials, settings, user):
        with patch(f"{MODULE}.UserRepository", return_value=_user_repo(user)):
            return asyncio.run(get_current_user(credentials=credentials, db=MagicMock(), settings=settings))

    def test_valid_token(self, settings, student_user):
        token = create_access_token(student_user.id, settings)
        assert self._run(_bearer(token), settings, student_user) is student_user

    def test_no_token(self, settings, student_user):
        with pytest.raises(AuthenticationError, match="Not authorized, no token provided"):
            self._run(None, settings, student_user)

    def test_expired_token(self, settings, student_user):
        token = create_access_token(student_user.id, settings, expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthenticationError, match="Not authorized, token expired"):
            self._run(_bearer(token), settings, student_user)

    def test_malformed_token(self, settings, student_user):
        with pytest.raises(AuthenticationError, match="Not authorized, invalid token"):
            self._run(_bearer("garbage"), settings, student_user)

    def test_refresh_token_not_accepted(self, settings, student_user):
        token = create_refresh_token(student_user.id, settings)
        with pytest.raises(AuthenticationError, match="Not authorized, invalid token"):
            self._run(_bearer(token), settings, student_user)

    def test_unknown_user(self, settings):
        token = create_access_token("ghost", settings)
        with pytest.raises(AuthenticationError, match="Not authorized, user not found"):
            self._run(_bearer(token), settings, None)

    def test_token_issued_before_logout(self, settings, student_user):
        token = create_access_token(student_user.id, settings)
        student_user.last_logout_at = datetime.now(timezone.utc) + timedelta(minutes=1)
        with pytest.raises(AuthenticationError, match="Not authorized, invalid token"):
            self._run(_bearer(token), settings, student_user)

    def test_token_issued_after_logout(self, settings, student_user):
        student_user.last_logout_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        token = create_access_token(student_user.id, settings)
        assert self._run(_bearer(token), settings, student_user) is student_user


class TestRoleChecker:
    def test_allowed_role(self, mentor_user):
        assert RoleChecker("admin", "mentor")(current_user=mentor_user) is mentor_user

    def test_forbidden_role(self, student_user):
        with pytest.raises(AuthorizationError) as exc_info:
            RoleChecker("admin")(current_user=student_user)
        assert exc_info.value.message == "Forbidden: User role 'student' is not authorized to access this route"

    def test_no_identity(self):
        with pytest.raises(AuthenticationError, match="Not authorized"):
            RoleChecker("admin")(current_user=None)
