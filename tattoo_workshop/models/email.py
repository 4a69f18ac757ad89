# tattoo_workshop/models/email.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class EmailTemplate(SQLModel, table=True):
    """
    Named subject/body pair with {{variable}} placeholders.
    Bodies are HTML.
    """

    __tablename__ = "email_templates"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(unique=True, index=True)

    subject: str

    body: str

    description: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )


class EmailNotification(SQLModel, table=True):
    """
    Append-only log of delivered emails.

    Types:
      confirmation | reminder_24h | reminder_1week | cancellation | rescheduled

    A "sent" row of a reminder type also marks that reminder as done
    for the appointment.
    """

    __tablename__ = "email_notifications"

    id: int | None = Field(default=None, primary_key=True)

    customer_id: int = Field(
        foreign_key="customers.id",
        index=True,
    )

    appointment_id: int | None = Field(
        default=None,
        foreign_key="appointments.id",
        index=True,
    )

    type: str = Field(index=True)

    recipient: str

    status: str = Field(default="pending")

    sent_at: datetime | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
