"""Bearer token helpers (HS256 JWTs whose ``sub`` claim is the user id)."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from config import settings


class InvalidTokenError(Exception):
    """Raised when a bearer token cannot be verified or carries no subject."""


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Sign a token for ``user_id`` expiring after ``expires_delta``.

    Defaults to ``ACCESS_TOKEN_EXPIRE_MINUTES``.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Verify ``token`` and return its subject.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e
    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        raise InvalidTokenError("Token has no subject")
    return subject
