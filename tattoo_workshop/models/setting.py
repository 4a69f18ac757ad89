# tattoo_workshop/models/setting.py
from sqlmodel import SQLModel, Field


class Setting(SQLModel, table=True):
    """
    Generic key/value row. Values are always strings; typed views
    (e.g. EmailConfig) parse them on load.
    """

    __tablename__ = "settings"

    key: str = Field(primary_key=True)
    value: str
