# tattoo_workshop/schemas/catalog.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


# -------- Pricelist --------


class PricelistItemCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    service_name: str = Field(max_length=150)
    description: str | None = None
    price: float = Field(ge=0)
    duration: int | None = Field(default=None, gt=0)
    category: str | None = Field(default=None, max_length=50)

    @field_validator("service_name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("service_name cannot be empty")
        return v


class PricelistItemUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    service_name: str | None = Field(default=None, max_length=150)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    duration: int | None = Field(default=None, gt=0)
    category: str | None = Field(default=None, max_length=50)


class PricelistItemRead(SQLModel):
    id: int
    service_name: str
    description: str | None = None
    price: float
    duration: int | None = None
    category: str | None = None


# -------- Portfolio --------


def join_tags(v: list[str] | str | None) -> str | None:
    """Normalize a tag list (or raw comma string) to the stored form."""
    if v is None:
        return None
    parts = v.split(",") if isinstance(v, str) else v
    cleaned = [p.strip() for p in parts if p and p.strip()]
    return ",".join(cleaned) or None


def split_tags(v: str | list[str] | None) -> list[str]:
    if not v:
        return []
    if isinstance(v, list):
        return v
    return [t.strip() for t in v.split(",") if t.strip()]


class PortfolioItemCreate(SQLModel):
    """
    `tags` accepts either a list or a comma separated string.
    """

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=150)
    description: str | None = None
    image_url: str
    artist_name: str | None = None
    tags: list[str] | str | None = None

    @field_validator("title", "image_url")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class PortfolioItemUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=150)
    description: str | None = None
    image_url: str | None = None
    artist_name: str | None = None
    tags: list[str] | str | None = None


class PortfolioItemRead(SQLModel):
    id: int
    title: str
    description: str | None = None
    image_url: str
    artist_name: str | None = None
    tags: list[str] = []
    created_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def expand_tags(cls, v):
        return split_tags(v)


# -------- Generated designs --------


class TattooGenerateRequest(SQLModel):
    """
    `apiKey` mirrors the field name the frontend sends; when empty the
    stored `gemini_api_key` setting is used.
    """

    prompt: str = Field(min_length=1, max_length=2000)
    apiKey: str | None = None
    customer_id: int | None = None

    @field_validator("prompt")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("prompt cannot be empty")
        return v


class TattooGenerateResponse(SQLModel):
    success: bool = True
    description: str
    id: int


class GeneratedTattooRead(SQLModel):
    id: int
    prompt: str
    description: str | None = None
    customer_id: int | None = None
    created_at: datetime
