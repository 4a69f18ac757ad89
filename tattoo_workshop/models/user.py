# tattoo_workshop/models/user.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Staff account for the studio.

    Role:
      - "admin" | "artist" | "receptionist"

    Status:
      - "active" | "inactive" | "suspended"
      - only active accounts may log in or use a token.

    The bcrypt hash lives in `password_hash` and is never returned by
    any read schema.
    """

    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=100)

    email: str = Field(
        unique=True,
        index=True,
        description="Login email (normalized to lowercase)",
    )

    password_hash: str

    role: str = Field(
        default="receptionist",
        index=True,
        description="Application role: admin | artist | receptionist",
    )

    status: str = Field(
        default="active",
        description="Account status: active | inactive | suspended",
    )

    phone: str | None = None
    bio: str | None = None
    avatar_url: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last profile/password change (UTC)",
    )

    last_login: datetime | None = None
