# tattoo_workshop/core/auth.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from passlib.hash import bcrypt

from tattoo_workshop.core.config import get_settings
from tattoo_workshop.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header does NOT raise
#   immediately, so the `token` cookie can be tried next.
bearer_scheme = HTTPBearer(auto_error=False)

TOKEN_COOKIE_NAME = "token"

PASSWORD_MIN_LENGTH = 8


# -------- Passwords --------


def hash_password(raw: str) -> str:
    """Return a bcrypt hash for `raw`."""
    return bcrypt.hash(raw)


def verify_password(raw: str, password_hash: str) -> bool:
    """
    Check `raw` against a stored bcrypt hash.

    A malformed hash counts as a mismatch rather than an error.
    """
    try:
        return bcrypt.verify(raw, password_hash)
    except (ValueError, TypeError) as e:
        logger.error(f"Error verifying password hash: {e}")
        return False


def password_strength_errors(raw: str | None) -> list[str]:
    """
    Validate password strength.

    Rules:
      - at least 8 characters
      - at least one uppercase letter
      - at least one lowercase letter
      - at least one digit

    Returns:
        Every violated rule as a message; empty list if the password is ok.
    """
    raw = raw or ""
    errors: list[str] = []
    if len(raw) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if not any(c.isupper() for c in raw):
        errors.append("Password must contain at least one uppercase letter")
    if not any(c.islower() for c in raw):
        errors.append("Password must contain at least one lowercase letter")
    if not any(c.isdigit() for c in raw):
        errors.append("Password must contain at least one number")
    return errors


# -------- Tokens --------


def create_access_token(user: User, expires_in: timedelta | None = None) -> str:
    """
    Issue a signed access token for `user`.

    Claims:
      - sub: user id (string, per JWT convention)
      - email, role, status: snapshot at login time
      - iat / exp
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_in or timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
        "status": user.status,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify an access token (signature + exp).

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


class CurrentUser:
    """
    Identity resolved from a verified token.

    This is the token's snapshot, not a database row; routes that need
    fresh data load the user by `id`.
    """

    def __init__(self, id: int, email: str, role: str, status: str):
        self.id = id
        self.email = email
        self.role = role
        self.status = status

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "CurrentUser":
        try:
            return cls(
                id=int(claims["sub"]),
                email=claims.get("email", ""),
                role=claims["role"],
                status=claims["status"],
            )
        except (KeyError, TypeError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token",
            )


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token: str | None = Cookie(default=None),
) -> CurrentUser:
    """
    Resolve the caller from the Authorization header or the `token` cookie.

    Flow:
      1. Prefer the Bearer header; fall back to the cookie.
      2. Verify signature/expiry.
      3. Reject accounts whose embedded status is not "active".

    Raises:
        HTTPException(401): no token, or token invalid/expired.
        HTTPException(403): account is not active.
    """
    raw_token = credentials.credentials if credentials else token
    if not raw_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = CurrentUser.from_claims(decode_access_token(raw_token))

    if user.status != "active":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is not active",
        )
    return user


def require_roles(*allowed_roles: str) -> Callable[..., CurrentUser]:
    """
    Build a dependency that admits only the given roles.

    Usage:

        @router.get("/users", dependencies=[Depends(require_roles("admin"))])

    Raises (from the built dependency):
        HTTPException(403): role not in the allow-list; the detail lists
        the required roles and the caller's role.
    """

    def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "Insufficient permissions",
                    "required": list(allowed_roles),
                    "current": user.role,
                },
            )
        return user

    return dependency


require_admin = require_roles("admin")
