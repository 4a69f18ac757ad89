# tattoo_workshop/routers/auth.py
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from tattoo_workshop.core.auth import (
    TOKEN_COOKIE_NAME,
    CurrentUser,
    get_current_user,
    require_admin,
)
from tattoo_workshop.core.config import get_settings
from tattoo_workshop.core.rate_limit import LoginRateLimiter, get_login_rate_limiter
from tattoo_workshop.database import get_session
from tattoo_workshop.repositories.user_repo import UserRepository
from tattoo_workshop.schemas.user import (
    LoginRequest,
    LoginResponse,
    PasswordChange,
    ProfileUpdate,
    UserAdminUpdate,
    UserEnvelope,
    UserRead,
    UserRegister,
)
from tattoo_workshop.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])

settings = get_settings()

repo = UserRepository()
service = UserService(repo)


# -------- Authentication --------


@router.post(
    "/register",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def register(
    payload: UserRegister,
    session: Session = Depends(get_session),
):
    """
    Create a staff account (admin only).

    Password must be 8+ characters with upper, lower and a digit.
    """
    user = service.register(session, payload)
    return UserEnvelope(
        user=UserRead.model_validate(user),
        message="User registered successfully",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    response: Response,
    session: Session = Depends(get_session),
    limiter: LoginRateLimiter = Depends(get_login_rate_limiter),
):
    """
    Exchange credentials for a token.

    The token is returned in the body and also set as an HttpOnly
    `token` cookie for the browser client.
    """
    token, user = service.login(session, payload, limiter)
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_EXPIRATION_HOURS * 3600,
    )
    return LoginResponse(token=token, user=UserRead.model_validate(user))


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(TOKEN_COOKIE_NAME)
    return {"success": True, "message": "Logout successful"}


# -------- Self profile --------


@router.get("/me", response_model=UserEnvelope)
def read_me(
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    user = service.get_me(session, current_user)
    return UserEnvelope(user=UserRead.model_validate(user))


@router.put("/me", response_model=UserEnvelope)
def update_me(
    payload: ProfileUpdate,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    """
    Update the caller's profile (partial update).

    Editable: name, phone, bio, avatar_url.
    """
    user = service.update_me(session, current_user, payload)
    return UserEnvelope(
        user=UserRead.model_validate(user),
        message="Profile updated successfully",
    )


@router.put("/change-password")
def change_password(
    payload: PasswordChange,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    service.change_password(session, current_user, payload)
    return {"success": True, "message": "Password changed successfully"}


# -------- Admin endpoints --------


@router.get(
    "/users",
    response_model=list[UserRead],
    dependencies=[Depends(require_admin)],
)
def list_users(session: Session = Depends(get_session)):
    """List all staff accounts, newest first (admin only)."""
    return service.list_users(session)


@router.put(
    "/users/{user_id}",
    response_model=UserEnvelope,
    dependencies=[Depends(require_admin)],
)
def update_user(
    user_id: int,
    payload: UserAdminUpdate,
    session: Session = Depends(get_session),
):
    user = service.update_user(session, user_id, payload)
    return UserEnvelope(
        user=UserRead.model_validate(user),
        message="User updated successfully",
    )


@router.delete("/users/{user_id}")
def delete_user(
    user_id: int,
    session: Session = Depends(get_session),
    current_user: CurrentUser = Depends(require_admin),
):
    """
    Delete a staff account (admin only).

    Admins cannot delete their own account.
    """
    service.delete_user(session, user_id, current_user)
    return {"success": True, "message": "User deleted successfully"}
