# tattoo_workshop/schemas/email.py
from datetime import datetime

from pydantic import ConfigDict, EmailStr
from sqlmodel import SQLModel


class EmailConfigRead(SQLModel):
    """Email settings as shown to admins; the SMTP password is never echoed."""

    enabled: bool
    smtp_host: str | None = None
    smtp_port: int
    smtp_secure: bool
    smtp_user: str | None = None
    from_address: str | None = None
    from_name: str
    reminders_enabled: bool


class EmailConfigUpdate(SQLModel):
    """
    Fields left out are not touched. `smtp_password` is only stored
    when non-empty so the admin form can be saved without retyping it.
    """

    model_config = ConfigDict(extra="forbid")

    enabled: bool | None = None
    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_secure: bool | None = None
    smtp_user: str | None = None
    smtp_password: str | None = None
    from_address: str | None = None
    from_name: str | None = None
    reminders_enabled: bool | None = None


class EmailTestRequest(SQLModel):
    email: EmailStr | None = None


class EmailResultRead(SQLModel):
    success: bool
    message: str | None = None


class EmailTemplateRead(SQLModel):
    id: int
    name: str
    subject: str
    body: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class EmailTemplateUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    subject: str
    body: str


class EmailNotificationRead(SQLModel):
    id: int
    customer_id: int
    appointment_id: int | None = None
    type: str
    recipient: str
    status: str
    sent_at: datetime | None = None
    created_at: datetime
    customer_name: str
    customer_email: str
