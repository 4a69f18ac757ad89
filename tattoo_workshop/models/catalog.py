# tattoo_workshop/models/catalog.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class PricelistItem(SQLModel, table=True):
    """
    Service catalog entry, grouped by category on the pricelist page.
    """

    __tablename__ = "pricelist"

    id: int | None = Field(default=None, primary_key=True)

    service_name: str = Field(max_length=150)

    description: str | None = None

    # 0 is valid (free touch-ups)
    price: float = Field(ge=0)

    duration: int | None = Field(
        default=None,
        description="Typical length in minutes",
    )

    category: str | None = Field(default=None, index=True)


class PortfolioItem(SQLModel, table=True):
    """
    Gallery entry.

    `image_url` holds either a public URL or an embedded `data:` URI.
    `tags` is stored comma-delimited, e.g. "blackwork,floral".
    """

    __tablename__ = "portfolio"

    id: int | None = Field(default=None, primary_key=True)

    title: str = Field(max_length=150)

    description: str | None = None

    image_url: str

    artist_name: str | None = None

    tags: str | None = None

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class GeneratedTattoo(SQLModel, table=True):
    """
    Prompt/description pair produced by the AI design generator.
    """

    __tablename__ = "generated_tattoos"

    id: int | None = Field(default=None, primary_key=True)

    prompt: str

    description: str | None = None

    customer_id: int | None = Field(
        default=None,
        foreign_key="customers.id",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
