# tattoo_workshop/models/appointment.py
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Appointment(SQLModel, table=True):
    """
    A booked session for one customer.

    `artist_name` is free text, not a reference to a staff account.
    `appointment_date` is studio wall-clock time (naive datetime).

    Status lifecycle:
      scheduled -> completed | cancelled
    """

    __tablename__ = "appointments"

    id: int | None = Field(default=None, primary_key=True)

    customer_id: int = Field(
        foreign_key="customers.id",
        index=True,
    )

    artist_name: str = Field(max_length=100)

    # Plain DateTime: values are naive studio-local time, never UTC-aware
    appointment_date: datetime = Field(index=True, sa_type=DateTime())

    duration: int = Field(
        gt=0,
        description="Session length in minutes",
    )

    status: str = Field(
        default="scheduled",
        index=True,
        description="scheduled | completed | cancelled",
    )

    notes: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
