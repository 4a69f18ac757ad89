# tattoo_workshop/schemas/user.py
from datetime import datetime
from typing import Literal

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

Role = Literal["admin", "artist", "receptionist"]
Status = Literal["active", "inactive", "suspended"]


def _strip_required(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("field cannot be empty")
    return v


class UserRead(SQLModel):
    """Response schema returned to clients (never includes the hash)."""

    id: int
    name: str
    email: str
    role: Role
    status: Status
    phone: str | None = None
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None
    last_login: datetime | None = None


class UserRegister(SQLModel):
    """
    Admin-only payload for creating a staff account.

    Password strength is checked by the service so that every rule
    violation is reported at once.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    email: EmailStr
    password: str
    role: Role
    phone: str | None = None
    bio: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _strip_required(v)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(SQLModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginResponse(SQLModel):
    success: bool = True
    token: str
    user: UserRead
    message: str = "Login successful"


class UserEnvelope(SQLModel):
    """`{"success": true, "user": {...}, "message": "..."}` wrapper."""

    success: bool = True
    user: UserRead
    message: str | None = None


class ProfileUpdate(SQLModel):
    """
    Partial self-service profile update.
    Email, role and status are not editable here.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    phone: str | None = None
    bio: str | None = None
    avatar_url: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _strip_required(v)

    @field_validator("phone", "bio")
    @classmethod
    def trim(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v

    @field_validator("avatar_url")
    @classmethod
    def validate_avatar_url(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("Avatar URL must be valid")
        return v


class PasswordChange(SQLModel):
    model_config = ConfigDict(extra="forbid")

    currentPassword: str = Field(min_length=1)
    newPassword: str


class UserAdminUpdate(SQLModel):
    """
    Admin-only partial update of another account.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    role: Role | None = None
    status: Status | None = None
    phone: str | None = None
    bio: str | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        return _strip_required(v)
