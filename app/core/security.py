"""
JWT token creation / verification and password hashing (bcrypt).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from passlib.context import CryptContext

from app.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── Token failures ──────────────────────────────────────────────────
class TokenError(Exception):
    """Base class for every reason a bearer token is rejected."""


class MalformedToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


class InvalidSignature(TokenError):
    pass


# ── JWT tokens ──────────────────────────────────────────────────────
def create_access_token(
    subject: str | Any,
    expires_delta: timedelta | None = None,
) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    return jwt.encode(
        {"exp": expire, "sub": str(subject), "type": "access"},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def verify_access_token(token: str) -> dict:
    """Return the payload of a valid access token.

    Raises ``MalformedToken`` when the string is not a usable JWT,
    ``ExpiredToken`` when ``exp`` is in the past and ``InvalidSignature``
    when it was not signed with our key.
    """
    try:
        jwt.get_unverified_header(token)
        jwt.get_unverified_claims(token)
    except JWTError as exc:
        raise MalformedToken(str(exc)) from exc

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as exc:
        raise ExpiredToken(str(exc)) from exc
    except JWTClaimsError as exc:
        raise MalformedToken(str(exc)) from exc
    except JWTError as exc:
        raise InvalidSignature(str(exc)) from exc

    if payload.get("type") != "access":
        raise MalformedToken("Not an access token")
    if not payload.get("sub"):
        raise MalformedToken("Token has no subject")
    return payload
