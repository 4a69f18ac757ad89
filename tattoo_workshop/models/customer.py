# tattoo_workshop/models/customer.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Customer(SQLModel, table=True):
    """
    Studio client contact record, unique by email.

    Referenced by appointments, email notifications and generated
    tattoo designs.
    """

    __tablename__ = "customers"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=100)

    email: str = Field(
        unique=True,
        index=True,
    )

    phone: str | None = None
    address: str | None = None
    notes: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
