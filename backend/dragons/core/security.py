from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
import uuid

from jose import JWTError, jwt
from passlib.context import CryptContext

from dragons.core import ensure_utc
from dragons.core.config import Settings

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


def _encode(subject: Union[str, Any], token_type: str, expire: datetime, settings: Settings) -> str:
    to_encode = {
        "exp": expire,
        "iat": datetime.now(timezone.utc),
        "sub": str(subject),
        "jti": uuid.uuid4().hex,
        "type": token_type,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(
    subject: Union[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    return _encode(subject, TOKEN_TYPE_ACCESS, expire, settings)


def create_refresh_token(
    subject: Union[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    expire = datetime.now(timezone.utc) + expires_delta
    return _encode(subject, TOKEN_TYPE_REFRESH, expire, settings)


def decode_token(token: str, settings: Settings, expected_type: str = TOKEN_TYPE_ACCESS) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises jose's ExpiredSignatureError for expired tokens and JWTError for
    anything else that makes the token unusable, including a token of the
    wrong type or one without a subject.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != expected_type:
        raise JWTError("Invalid token type")
    if not payload.get("sub"):
        raise JWTError("Token has no subject")
    return payload


def issued_before_logout(payload: Dict[str, Any], last_logout_at: Optional[datetime]) -> bool:
    """True when the token was issued before the user's last logout."""
    if last_logout_at is None:
        return False
    iat = payload.get("iat")
    if iat is None:
        return False
    # iat has second precision
    return iat < int(ensure_utc(last_logout_at).timestamp())


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
