# tattoo_workshop/schemas/appointment.py
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

AppointmentStatus = Literal["scheduled", "completed", "cancelled"]


def to_wall_clock(v: datetime | None) -> datetime | None:
    """
    Appointments are stored as naive studio-local time.
    Offset-aware input is converted to local time first.
    """
    if v is None or v.tzinfo is None:
        return v
    return v.astimezone().replace(tzinfo=None)


class AppointmentCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    customer_id: int
    artist_name: str = Field(max_length=100)
    appointment_date: datetime
    duration: int = Field(gt=0)
    notes: str | None = None

    @field_validator("artist_name")
    @classmethod
    def validate_artist(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("artist_name cannot be empty")
        return v

    @field_validator("appointment_date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_wall_clock(v)


class AppointmentUpdate(SQLModel):
    """
    Partial update. Changing `status` to "cancelled" or changing
    `appointment_date` triggers a customer email.
    """

    model_config = ConfigDict(extra="forbid")

    artist_name: str | None = Field(default=None, max_length=100)
    appointment_date: datetime | None = None
    duration: int | None = Field(default=None, gt=0)
    status: AppointmentStatus | None = None
    notes: str | None = None

    @field_validator("artist_name")
    @classmethod
    def validate_artist(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("artist_name cannot be empty")
        return v

    @field_validator("appointment_date")
    @classmethod
    def normalize_date(cls, v: datetime | None) -> datetime | None:
        return to_wall_clock(v)


class AppointmentRead(SQLModel):
    id: int
    customer_id: int
    artist_name: str
    appointment_date: datetime
    duration: int
    status: AppointmentStatus
    notes: str | None = None
    created_at: datetime


class AppointmentWithCustomerRead(AppointmentRead):
    """List row joined with the customer's contact fields."""

    customer_name: str
    customer_email: str
