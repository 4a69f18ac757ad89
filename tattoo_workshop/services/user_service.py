# tattoo_workshop/services/user_service.py
import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlmodel import Session

from tattoo_workshop.core.auth import (
    CurrentUser,
    create_access_token,
    hash_password,
    password_strength_errors,
    verify_password,
)
from tattoo_workshop.core.config import Settings
from tattoo_workshop.core.rate_limit import LoginRateLimiter
from tattoo_workshop.models.user import User
from tattoo_workshop.repositories.user_repo import UserRepository
from tattoo_workshop.schemas.user import (
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    UserAdminUpdate,
    UserRegister,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class UserService:
    """
    Business logic for staff accounts and authentication.

    Responsibilities:
      - registration with password strength rules
      - login with rate limiting and ambiguous failures
      - self-service profile/password changes
      - admin account management (no self-deletion)
      - map domain errors to HTTP errors
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _ensure_strong_password(raw: str) -> None:
        errors = password_strength_errors(raw)
        if errors:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=", ".join(errors),
            )

    @staticmethod
    def _changes(payload, required: tuple[str, ...]) -> dict:
        """
        Fields sent in a partial update.

        An explicit null on a NOT NULL column is treated as "not sent".

        Raises:
            HTTPException(400): when nothing is left to update.
        """
        changes = {
            name: value
            for name, value in payload.model_dump(exclude_unset=True).items()
            if not (value is None and name in required)
        }
        if not changes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields to update",
            )
        return changes

    def get_user(self, session: Session, user_id: int) -> User:
        """
        Raises:
            HTTPException(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    # ----- Authentication -----

    def register(self, session: Session, payload: UserRegister) -> User:
        """Create a staff account (admin only, enforced at the router)."""
        self._ensure_strong_password(payload.password)

        if self.repo.get_by_email(session, payload.email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="User with this email already exists",
            )

        user = User(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
            role=payload.role,
            status="active",
            phone=payload.phone or None,
            bio=payload.bio or None,
        )
        user = self.repo.create(session, user)
        logger.info(f"Registered {user.role} account {user.email}")
        return user

    def login(
        self,
        session: Session,
        payload: LoginRequest,
        limiter: LoginRateLimiter,
    ) -> tuple[str, User]:
        """
        Verify credentials and issue a token.

        Rules:
          - locked emails are refused before any lookup (429)
          - unknown email and wrong password fail identically (401)
            and both count towards the lockout
          - non-active accounts are refused (403)
          - success stamps last_login and clears the failure count

        Returns:
            (token, user)
        """
        decision = limiter.check(payload.email)
        if not decision.allowed:
            logger.warning(f"Login refused for locked email {payload.email}")
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=decision.message,
                headers={"Retry-After": str(decision.retry_after_seconds)},
            )

        user = self.repo.get_by_email(session, payload.email)
        if user is None or not verify_password(payload.password, user.password_hash):
            limiter.record_failure(payload.email)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=INVALID_CREDENTIALS,
            )

        if user.status != "active":
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is not active",
            )

        user.last_login = _now()
        user = self.repo.update(session, user)
        limiter.record_success(payload.email)

        return create_access_token(user), user

    # ----- Self profile -----

    def get_me(self, session: Session, current_user: CurrentUser) -> User:
        return self.get_user(session, current_user.id)

    def update_me(
        self,
        session: Session,
        current_user: CurrentUser,
        payload: ProfileUpdate,
    ) -> User:
        """Partial update of name, phone, bio, avatar_url."""
        changes = self._changes(payload, required=("name",))

        user = self.get_user(session, current_user.id)
        for name, value in changes.items():
            setattr(user, name, value)
        user.updated_at = _now()
        return self.repo.update(session, user)

    def change_password(
        self,
        session: Session,
        current_user: CurrentUser,
        payload: PasswordChange,
    ) -> None:
        user = self.get_user(session, current_user.id)

        if not verify_password(payload.currentPassword, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect",
            )

        self._ensure_strong_password(payload.newPassword)

        user.password_hash = hash_password(payload.newPassword)
        user.updated_at = _now()
        self.repo.update(session, user)
        logger.info(f"Password changed for user {user.id}")

    # ----- Admin operations -----

    def list_users(self, session: Session) -> list[User]:
        return self.repo.list(session)

    def update_user(
        self,
        session: Session,
        user_id: int,
        payload: UserAdminUpdate,
    ) -> User:
        """
        Admin partial update (name, role, status, phone, bio).

        Role/status values are validated by the schema (Literal).
        """
        changes = self._changes(payload, required=("name", "role", "status"))

        user = self.get_user(session, user_id)
        for name, value in changes.items():
            setattr(user, name, value)
        user.updated_at = _now()
        return self.repo.update(session, user)

    def delete_user(
        self,
        session: Session,
        user_id: int,
        current_user: CurrentUser,
    ) -> None:
        """
        Delete an account (admin only).

        Raises:
            HTTPException(400): when an admin targets their own account.
            HTTPException(404): unknown id.
        """
        if user_id == current_user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot delete your own account",
            )

        user = self.get_user(session, user_id)
        self.repo.delete(session, user)
        logger.info(f"User {user_id} deleted by {current_user.id}")

    # ----- Bootstrap -----

    def ensure_default_admin(self, session: Session, settings: Settings) -> User | None:
        """
        Create the bootstrap admin when no account exists yet.

        Returns:
            The created admin, or None if users already exist.
        """
        if self.repo.count(session) > 0:
            return None

        admin = User(
            name=settings.DEFAULT_ADMIN_NAME,
            email=settings.DEFAULT_ADMIN_EMAIL.strip().lower(),
            password_hash=hash_password(settings.DEFAULT_ADMIN_PASSWORD),
            role="admin",
            status="active",
        )
        admin = self.repo.create(session, admin)
        logger.warning(
            f"Created default admin {admin.email}. "
            "Change this password immediately after first login!"
        )
        return admin
