# tattoo_workshop/repositories/setting_repo.py
from sqlmodel import Session, select

from tattoo_workshop.models.setting import Setting


class SettingRepository:
    """
    Key/value access to the `settings` table.
    """

    def get(self, session: Session, key: str) -> Setting | None:
        return session.get(Setting, key)

    def list_by_prefix(self, session: Session, prefix: str) -> list[Setting]:
        stmt = select(Setting).where(Setting.key.startswith(prefix, autoescape=True))
        return list(session.exec(stmt).all())

    def upsert(self, session: Session, key: str, value: str, commit: bool = True) -> Setting:
        """Insert or replace the value stored under `key`."""
        row = session.get(Setting, key)
        if row is None:
            row = Setting(key=key, value=value)
        else:
            row.value = value
        session.add(row)
        if commit:
            session.commit()
            session.refresh(row)
        return row
