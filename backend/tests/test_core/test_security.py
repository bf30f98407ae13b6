"""Tests for JWT token creation/verification and password hashing."""

from datetime import datetime, timedelta, timezone

import pytest
from jose import ExpiredSignatureError, JWTError, jwt

from dragons.core.security import (
    TOKEN_TYPE_ACCESS,
    TOKEN_TYPE_REFRESH,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_password_hash,
    issued_before_logout,
    verify_password,
)


class TestPasswordHashing:
    def test_hash_and_verify(self):
        hashed = get_password_hash("password123")
        assert verify_password("password123", hashed) is True

    def test_verify_wrong_password(self):
        hashed = get_password_hash("password123")
        assert verify_password("wrong_password", hashed) is False

    def test_verify_none_hash_returns_false(self):
        assert verify_password("password", None) is False

    def test_hash_is_argon2_format(self):
        hashed = get_password_hash("test")
        assert hashed.startswith("$argon2")

    def test_different_passwords_different_hashes(self):
        hash1 = get_password_hash("password123")
        hash2 = get_password_hash("password123")
        assert hash1 != hash2  # Different salts


class TestAccessToken:
    def test_claims(self, settings):
        token = create_access_token("user123", settings)
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["sub"] == "user123"
        assert payload["type"] == TOKEN_TYPE_ACCESS
        assert "iat" in payload
        assert "exp" in payload
        assert "jti" in payload

    def test_custom_expiry(self, settings):
        token = create_access_token("user123", settings, expires_delta=timedelta(hours=1))
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        assert payload["exp"] - payload["iat"] == pytest.approx(3600, abs=2)

    def test_decode_roundtrip(self, settings):
        token = create_access_token("user123", settings)
        assert decode_token(token, settings)["sub"] == "user123"

    def test_unique_jti(self, settings):
        t1 = jwt.get_unverified_claims(create_access_token("u", settings))
        t2 = jwt.get_unverified_claims(create_access_token("u", settings))
        assert t1["jti"] != t2["jti"]


class TestDecodeToken:
    def test_expired_token(self, settings):
        token = create_access_token("user123", settings, expires_delta=timedelta(seconds=-10))
        with pytest.raises(ExpiredSignatureError):
            decode_token(token, settings)

    def test_wrong_secret(self, settings):
        other = settings.model_copy(update={"SECRET_KEY": "another-secret"})
        token = create_access_token("user123", other)
        with pytest.raises(JWTError):
            decode_token(token, settings)

    def test_garbage(self, settings):
        with pytest.raises(JWTError):
            decode_token("not-a-jwt", settings)

    def test_refresh_token_rejected_as_access(self, settings):
        token = create_refresh_token("user123", settings)
        with pytest.raises(JWTError):
            decode_token(token, settings)

    def test_refresh_token_accepted_as_refresh(self, settings):
        token = create_refresh_token("user123", settings)
        payload = decode_token(token, settings, expected_type=TOKEN_TYPE_REFRESH)
        assert payload["sub"] == "user123"

    def test_missing_subject(self, settings):
        token = jwt.encode(
            {"type": TOKEN_TYPE_ACCESS, "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        with pytest.raises(JWTError):
            decode_token(token, settings)


class TestIssuedBeforeLogout:
    def test_never_logged_out(self):
        assert issued_before_logout({"iat": 100}, None) is False

    def test_issued_before(self):
        logout = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        iat = int(logout.timestamp()) - 60
        assert issued_before_logout({"iat": iat}, logout) is True

    def test_issued_after(self):
        logout = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        iat = int(logout.timestamp()) + 60
        assert issued_before_logout({"iat": iat}, logout) is False

    def test_naive_logout_treated_as_utc(self):
        logout = datetime(2024, 1, 1, 12, 0, 0)
        iat = int(logout.replace(tzinfo=timezone.utc).timestamp()) - 1
        assert issued_before_logout({"iat": iat}, logout) is True
