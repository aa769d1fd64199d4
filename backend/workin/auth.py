from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from workin.config import settings
from workin.database import get_db
from workin.errors import AuthenticationFailed
from workin.models.user import User


security = HTTPBearer(auto_error=False)
DEFAULT_ITERATIONS = 210_000
ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        DEFAULT_ITERATIONS,
    ).hex()
    return f"pbkdf2_sha256${DEFAULT_ITERATIONS}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations_str, salt, digest = password_hash.split("$", 3)
        iterations = int(iterations_str)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return hmac.compare_digest(expected, digest)


def create_access_token(user_id: int, ttl_seconds: int | None = None) -> str:
    ttl = settings.token_ttl_seconds if ttl_seconds is None else ttl_seconds
    expire = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    return jwt.encode({"userId": user_id, "exp": expire}, settings.auth_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> int | None:
    """Return the user id carried by a valid, unexpired token, else None."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.auth_secret, algorithms=[ALGORITHM])
        user_id = payload["userId"]
    except (JWTError, KeyError):
        return None
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        return None
    return user_id


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationFailed("Authentication required")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationFailed("Invalid token")

    user = db.query(User).filter(User.id == user_id, User.is_active == True).first()  # noqa: E712
    if not user:
        raise AuthenticationFailed("Invalid user")
    return user
