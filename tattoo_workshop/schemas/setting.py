# tattoo_workshop/schemas/setting.py
from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class SettingValue(SQLModel):
    value: str | None = None


class SettingWrite(SQLModel):
    model_config = ConfigDict(extra="forbid")

    key: str = Field(min_length=1, max_length=100)
    value: str
