"""
security.py — Password hashing and access tokens for the identity layer.

The moderation core never authenticates anyone; it only consumes the
resulting identity (user id + account creation time). This module is the
minimal provider behind /auth.

Access tokens are HS256 JWTs with:
  sub  user id (the `_id` of the users document)
  iss  settings.jwt_issuer, checked on decode so tokens minted by another
       service sharing the secret are refused
  iat / exp

Passwords are hashed with bcrypt directly (no passlib).
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from fishspot.core.config import settings


def hash_password(plain: str) -> str:
    """bcrypt hash of *plain*; bcrypt ignores bytes past 72."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash (e.g. an imported legacy row)
        return False


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token for *user_id*, valid for settings.jwt_expiry_hours by default."""
    issued = datetime.now(tz=timezone.utc)
    claims = {
        "sub": user_id,
        "iss": settings.jwt_issuer,
        "iat": issued,
        "exp": issued + (expires_delta or timedelta(hours=settings.jwt_expiry_hours)),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[str]:
    """User id carried by *token*; None if invalid, expired, foreign or subject-less."""
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except JWTError:
        return None
    subject = claims.get("sub")
    return subject if isinstance(subject, str) and subject else None
